"""Configuration service for loading kanban.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import BoardConfig, KanbanConfig, Notice, NoticeKind

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching board configuration."""

    CONFIG_FILE = "kanban.yml"

    def __init__(self, data_dir: Path) -> None:
        """Initialize the config service.

        Args:
            data_dir: Directory holding kanban.yml and the store slot
        """
        self.data_dir = data_dir
        self._config: KanbanConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        return self.data_dir / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def error_notice(self) -> Notice | None:
        """Warning notice for a config that fell back to defaults, if any."""
        self.get_config()
        if self._config_error is None:
            return None
        return Notice(
            kind=NoticeKind.CONFIG_ERROR,
            message=f"{self._config_error}; using defaults",
            severity="warning",
        )

    def get_config(self) -> KanbanConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_board_config(self) -> BoardConfig:
        """Convenience method to get board configuration."""
        return self.get_config().board

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> KanbanConfig:
        """Load configuration from file or return default."""
        config_path = self.config_path
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return KanbanConfig.default()

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)

            if data is None:
                self._config_error = f"{self.CONFIG_FILE} is empty"
                logger.warning(self._config_error)
                return KanbanConfig.default()

            if not isinstance(data, dict):
                self._config_error = f"{self.CONFIG_FILE} must contain a mapping"
                logger.warning(self._config_error)
                return KanbanConfig.default()

            config = KanbanConfig(**data)
            logger.info("Loaded %s (undo_timeout=%.1fs)", self.CONFIG_FILE, config.undo_timeout)
            return config

        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return KanbanConfig.default()

        except ValidationError as e:
            self._config_error = f"Invalid {self.CONFIG_FILE}: {e.error_count()} error(s)"
            logger.warning("%s\n%s", self._config_error, e)
            return KanbanConfig.default()

        except OSError as e:
            self._config_error = f"Error reading {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return KanbanConfig.default()
