from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import ConfigManager
from .core import BatchRunner, HistoryStore, UndoEngine, read_manifest
from .models import RunEvent
from .utils import logger as log_utils
from .utils import reporting


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    print(f"manifest-copier v{__version__}")
    try:
        config = ConfigManager(Path(args.config) if args.config else None)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot load config: {exc}", file=sys.stderr)
        return 2

    config_errors = config.validate_config()
    if config_errors:
        for error in config_errors:
            print(f"Config error: {error}", file=sys.stderr)
        return 2

    if args.verbose:
        config.set("logging.level", "DEBUG")
    log_file = config.get("logging.file")
    log_utils.configure(
        level=str(config.get("logging.level", "WARNING")),
        log_file=Path(log_file).expanduser() if log_file else None,
    )

    history_path = Path(args.history).expanduser() if args.history else config.history_path()
    history = HistoryStore(history_path, config)

    try:
        if args.undo:
            return _run_undo(args, config, history)
        return _run_copy(args, config, history)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manifest-copier",
        description="Copy or extract files listed in a CSV manifest (source,destination_dir[,new_name]).",
    )
    parser.add_argument("manifest", nargs="?", help="CSV manifest file")
    parser.add_argument("--config", help="Path to config file", default=None)
    parser.add_argument("--history", help="History log file (overrides history.path)", default=None)
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show what would happen without touching files or history",
    )
    parser.add_argument(
        "--undo",
        action="store_true",
        help="Delete the files copied by the most recent batch; the manifest is ignored",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_event(event: RunEvent) -> None:
    print(reporting.format_event(event))


def _run_copy(args: argparse.Namespace, config: ConfigManager, history: HistoryStore) -> int:
    if not args.manifest:
        print("Error: a manifest file is required unless --undo is given", file=sys.stderr)
        return 1

    manifest_path = Path(args.manifest)
    try:
        records = read_manifest(manifest_path, config)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.preview:
        print("--- PREVIEW --- (no files will be changed)")
    runner = BatchRunner(history, config, event_callback=_print_event)
    result = runner.run(records, preview=args.preview)
    print(reporting.build_run_summary(result))
    return 0


def _run_undo(args: argparse.Namespace, config: ConfigManager, history: HistoryStore) -> int:
    if args.preview:
        print("--- UNDO PREVIEW --- (no files will be changed)")
    engine = UndoEngine(history, config, event_callback=_print_event)
    result = engine.undo_last(preview=args.preview)
    if not result.nothing_to_undo:
        print(reporting.build_undo_summary(result))
    return 0
