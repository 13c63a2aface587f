"""CLI/bootstrap helpers for the Unsent archive browser."""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from unsent_archive.action_messages import build_load_error_message
from unsent_archive.config import load_config, resolve_data_source
from unsent_archive.errors import LoadError
from unsent_archive.models import CONFIG_APP_NAME, FILTER_CATEGORIES, Entry, UserConfig
from unsent_archive.projection import format_entry_date, status_badges
from unsent_archive.query import apply_filters
from unsent_archive.repository import EntryCollection
from unsent_archive.services.loader import load_archive

logger = logging.getLogger(__name__)


def _load_archive_sync(source: str) -> EntryCollection:
    """Run the async loader to completion for non-interactive use."""
    return asyncio.run(load_archive(source))


def format_entry_line(entry: Entry) -> str:
    """One plain-text line per entry for --list output."""
    line = f"{format_entry_date(entry.date):<13} {entry.category:<6} {entry.title}"
    badges = status_badges(entry)
    if badges:
        line += f"  [{', '.join(badges)}]"
    return line


def _list_entries(
    args: argparse.Namespace,
    source: str,
    load_archive_fn: Callable[[str], EntryCollection],
) -> int:
    """Handle --list: print filtered entries and return an exit code."""
    try:
        collection = load_archive_fn(source)
    except LoadError as e:
        print(build_load_error_message(source, str(e)), file=sys.stderr)
        return 1
    entries = apply_filters(collection, args.category, args.query or "")
    for entry in entries:
        print(format_entry_line(entry))
    logger.debug("Listed %d of %d entries", len(entries), len(collection))
    return 0


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unsent-archive",
        description="Browse an archive of prose and poems, and keep private drafts, in a TUI",
    )
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        metavar="SOURCE",
        help="Directory or base URL holding prose.json and poems.json (default: ./data)",
    )
    parser.add_argument(
        "--no-restore",
        action="store_true",
        help="Start with a fresh session (ignore the saved filter and scroll position)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print entries to stdout and exit instead of starting the UI",
    )
    parser.add_argument(
        "--category",
        choices=FILTER_CATEGORIES,
        default="all",
        help="Category for --list (default: all)",
    )
    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Search text for --list (matches titles, excerpts, and tags)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/unsent-archive/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII-only status icons for compatibility with limited terminals",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    load_archive_fn: Callable[[str], EntryCollection] = _load_archive_sync,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.list and (args.query is not None or args.category != "all"):
        print("Error: --category and --query can only be used with --list", file=sys.stderr)
        return 1

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("unsent-archive starting, cwd=%s", Path.cwd())

    config = load_config_fn()
    source = resolve_data_source(args.data, config)

    if args.list:
        return _list_entries(args, source, load_archive_fn)

    if not validate_interactive_tty_fn():
        print(
            "Error: unsent-archive requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run unsent-archive directly in a terminal session", file=sys.stderr)
        print("  - Use --list for non-interactive output", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from unsent_archive.app import UnsentArchive as _UnsentArchive

        app_factory = _UnsentArchive

    app = app_factory(
        source,
        config=config,
        restore_session=not args.no_restore,
        ascii_icons=args.ascii,
    )
    app.run()
    return 0


__all__ = [
    "_configure_color_mode",
    "_configure_logging",
    "_validate_interactive_tty",
    "format_entry_line",
    "main",
]
