import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .document.outcome import Outcome
from .flags.flag_descriptor import FlagKind, FlagValue
from .launcher import launch
from .paths import resolve_config_path
from .session import FlagSession
from .settings import AppSettings, ConfigurationError, load_settings

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"true", "on", "1", "yes"}
_FALSE_WORDS = {"false", "off", "0", "no"}

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linuxblox", description="Edit Sober flags and launch Roblox.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (defaults to the settings file, then INFO).",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path of Sober's config.json (defaults to the path derived from HOME).",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        default=None,
        help="Path of the launcher settings YAML file.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="Show all managed flags.")
    enable = subparsers.add_parser("enable", help="Write a flag to the config.")
    enable.add_argument("name")
    disable = subparsers.add_parser("disable", help="Remove a flag from the config.")
    disable.add_argument("name")
    set_parser = subparsers.add_parser("set", help="Set a flag's value and enable it.")
    set_parser.add_argument("name")
    set_parser.add_argument("value")
    subparsers.add_parser("path", help="Print the Sober config path.")
    subparsers.add_parser("play", help="Launch Roblox via Sober.")
    return parser


def parse_flag_value(kind: FlagKind, raw: str) -> FlagValue:
    """Convert command-line text into the payload type for ``kind``."""
    if kind is FlagKind.INPUT:
        return raw
    lowered = raw.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"Expected one of {sorted(_TRUE_WORDS | _FALSE_WORDS)} for a toggle flag, got '{raw}'")


def _render_flags(console: Console, session: FlagSession) -> None:
    table = Table(title="Sober Flags", show_lines=False)
    table.add_column("Flag", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Kind")
    table.add_column("Enabled", justify="center")
    table.add_column("Value", justify="right")
    table.add_column("Description")
    for flag in session.list_flags():
        value = ("on" if flag.value else "off") if flag.kind is FlagKind.TOGGLE else str(flag.value)
        table.add_row(
            flag.name,
            flag.category,
            flag.kind.value,
            "[green]yes[/green]" if flag.enabled else "[dim]no[/dim]",
            value,
            flag.description,
        )
    console.print(table)


def _print_outcome(console: Console, outcome: Outcome) -> None:
    style = "green" if outcome.ok else ("yellow" if outcome.recoverable else "red")
    console.print(outcome.message, style=style, markup=False)


def _mutate(console: Console, session: FlagSession, parsed_args: argparse.Namespace) -> int:
    name = parsed_args.name
    try:
        descriptor = session.registry.get(name)
        if parsed_args.command == "enable":
            session.set_enabled(name, True)
        elif parsed_args.command == "disable":
            session.set_enabled(name, False)
        else:
            session.set_value(name, parse_flag_value(descriptor.kind, parsed_args.value))
            session.set_enabled(name, True)
    except ValueError as e:
        console.print(str(e), style="red", markup=False)
        return EXIT_USAGE

    outcome = session.save()
    _print_outcome(console, outcome)
    return EXIT_OK if outcome.ok else EXIT_FAILURE


def main(args: Optional[List[str]] = None) -> int:
    if args is None:
        args = sys.argv[1:]

    parser = _create_parser()
    parsed_args = parser.parse_args(args)
    console = Console()

    try:
        settings = load_settings(parsed_args.settings_path)
    except ConfigurationError as e:
        console.print(f"Invalid settings: {e}", style="red", markup=False)
        settings = AppSettings()

    level_name = (parsed_args.log_level or settings.log_level or "INFO").upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s - %(levelname)s - %(message)s", force=True)

    config_path = parsed_args.config_path or settings.config_path or resolve_config_path()
    logger.debug(f"Using Sober config path: {config_path}")

    if parsed_args.command == "path":
        console.print(f"Sober Config File: {config_path or 'Path not found'}", markup=False)
        return EXIT_OK if config_path else EXIT_FAILURE

    if parsed_args.command == "play":
        result = launch(settings.launch_command)
        console.print(result.message, style="green" if result.ok else "red", markup=False)
        return EXIT_OK if result.ok else EXIT_FAILURE

    with FlagSession(config_path, flags_key=settings.flags_key) as session:
        outcome = session.initialize()
        if parsed_args.command == "list":
            _print_outcome(console, outcome)
            _render_flags(console, session)
            return EXIT_OK if outcome.recoverable else EXIT_FAILURE

        if not outcome.recoverable:
            _print_outcome(console, outcome)
            return EXIT_FAILURE
        if not outcome.ok:
            _print_outcome(console, outcome)
        return _mutate(console, session, parsed_args)


if __name__ == "__main__":
    sys.exit(main())
