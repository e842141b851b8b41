"""Generate command for creating a default kanban.yml."""

import logging
from pathlib import Path

import yaml

from ..models import KanbanConfig
from ..services.config_service import ConfigService
from .output import error, info, success

logger = logging.getLogger(__name__)

CONFIG_HEADER = """\
# kanban_mvp Board Configuration
#
# board.columns:
#   - Exactly three columns: todo, inprogress, done (in this order)
#   - Only the titles can be changed
#
# undo_timeout:
#   - Seconds a deleted task can be restored with undo (default 5)

"""


def generate_config_yaml() -> str:
    """Generate YAML config from the default KanbanConfig model."""
    config_dict = KanbanConfig.default().model_dump(mode="json")
    yaml_content = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(data_dir: Path) -> int:
    """
    Write a default kanban.yml into the data directory.

    Returns:
        Exit code (0 = success, 1 = nothing to do or failure)
    """
    config_path = data_dir / ConfigService.CONFIG_FILE
    if config_path.exists():
        info(f"Config exists: {config_path}")
        print("Nothing to generate.")
        return 1

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_yaml(), encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot write %s: %s", config_path, e)
        error(f"Cannot write {config_path}: {e}")
        return 1

    success(f"Generated config: {config_path}")
    return 0
