"""CLI entry point for kanban_mvp."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging, tui_log_file


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="kanban-mvp",
        description="Single-board terminal Kanban with todo, in progress and done columns",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the saved board and kanban.yml (default: .kanban)",
    )
    parser.add_argument(
        "--ephemeral",
        action="store_true",
        help="Keep the board in memory only",
    )
    # one headless command per run
    command = parser.add_mutually_exclusive_group()
    command.add_argument(
        "--export",
        type=Path,
        default=None,
        metavar="PATH",
        help="Export the saved board to a JSON file and exit",
    )
    command.add_argument(
        "--import",
        dest="import_path",
        type=Path,
        default=None,
        metavar="PATH",
        help="Replace the saved board with a JSON file and exit",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation when importing",
    )
    command.add_argument(
        "--generate",
        action="store_true",
        help="Generate default kanban.yml in the data directory and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.data_dir:
        settings_kwargs["data_dir"] = args.data_dir
    if args.ephemeral:
        settings_kwargs["ephemeral"] = True
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    headless = args.generate or args.export is not None or args.import_path is not None
    if headless:
        setup_logging(settings.verbose, settings.log_file)
    else:
        setup_logging(
            settings.verbose,
            tui_log_file(settings.verbose, settings.log_file, settings.data_dir, settings.ephemeral),
            console=False,
        )

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.data_dir))

    if args.export is not None:
        from .cli.transfer import run_export

        raise SystemExit(run_export(settings, args.export))

    if args.import_path is not None:
        from .cli.transfer import run_import

        raise SystemExit(run_import(settings, args.import_path, assume_yes=args.yes))

    # Import here so headless commands do not load Textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
