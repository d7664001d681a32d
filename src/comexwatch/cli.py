"""CLI entrypoint for comexwatch."""

import argparse
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from comexwatch.alerts.alert_builder import derive_alerts
from comexwatch.alerts.demurrage import build_demurrage_board
from comexwatch.config.loader import (
    get_log_level,
    get_storage_path,
    load_alert_rules_config,
    load_config,
)
from comexwatch.database.snapshot_repo import load_snapshot, save_snapshot
from comexwatch.database.sqlite_client import session_context
from comexwatch.domain.records import Snapshot
from comexwatch.ingestion.snapshot_loader import load_snapshot_file
from comexwatch.output.alert_feed import (
    filter_by_priority,
    generate_feed,
    render_demurrage_json,
    render_demurrage_markdown,
    render_json,
    render_markdown,
)
from comexwatch.utils.logging import configure_logging, get_logger
from comexwatch.utils.time import today_utc

logger = get_logger(__name__)


def _parse_today(value: str | None) -> date:
    """Parse --today (YYYY-MM-DD); defaults to the current UTC date."""
    if not value:
        return today_utc()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid --today date: {value}. Use YYYY-MM-DD")


def _load_config_or_empty(path: Path | None) -> dict:
    try:
        return load_config(path)
    except FileNotFoundError:
        if path is not None:
            raise
        logger.debug("Config file not found, using defaults")
        return {}


def _read_snapshot(args: argparse.Namespace, config: dict) -> Snapshot:
    if args.file:
        return load_snapshot_file(Path(args.file))
    with session_context(get_storage_path(config)) as session:
        return load_snapshot(session)


def cmd_ingest(args: argparse.Namespace, config: dict) -> int:
    """Store a JSON snapshot in the local SQLite database."""
    snapshot = load_snapshot_file(Path(args.file))
    sqlite_path = get_storage_path(config)
    with session_context(sqlite_path) as session:
        counts = save_snapshot(session, snapshot)
    print(
        f"Stored {counts['imports']} imports, {counts['invoices']} invoices, "
        f"{counts['tasks']} tasks and {counts['users']} users in {sqlite_path}"
    )
    return 0


def cmd_alerts(args: argparse.Namespace, config: dict) -> int:
    """Derive and print the alert feed."""
    today = _parse_today(args.today)
    rules = load_alert_rules_config(config=config)
    snapshot = _read_snapshot(args, config)

    alerts = derive_alerts(
        snapshot.imports,
        snapshot.invoices,
        snapshot.tasks,
        snapshot.users,
        today=today,
        rules=rules,
    )
    alerts = filter_by_priority(alerts, args.priority)
    logger.info(f"{len(alerts)} alerts for {today.isoformat()}")

    feed = generate_feed(alerts, today)
    if args.format == "json":
        print(render_json(feed))
    else:
        print(render_markdown(feed))
    return 0


def cmd_demurrage(args: argparse.Namespace, config: dict) -> int:
    """Print demurrage exposure of containers at the port."""
    today = _parse_today(args.today)
    rules = load_alert_rules_config(config=config)
    snapshot = _read_snapshot(args, config)

    rows = build_demurrage_board(snapshot.imports, today=today, rules=rules)
    if args.format == "json":
        print(render_demurrage_json(rows, today))
    else:
        print(render_demurrage_markdown(rows, today))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comexwatch",
        description="Early-warning alerts for import operations",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: comexwatch.config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ingest command
    ingest_parser = subparsers.add_parser("ingest", help="Store a JSON snapshot in SQLite")
    ingest_parser.add_argument(
        "--file",
        type=str,
        required=True,
        help="Path to the JSON snapshot",
    )
    ingest_parser.set_defaults(func=cmd_ingest)

    # alerts command
    alerts_parser = subparsers.add_parser("alerts", help="Show the alert feed")
    alerts_parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="Read records from a JSON snapshot instead of the database",
    )
    alerts_parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="Reference date YYYY-MM-DD (default: current UTC date)",
    )
    alerts_parser.add_argument(
        "--format",
        type=str,
        choices=["md", "json"],
        default="md",
        help="Output format: md or json (default: md)",
    )
    alerts_parser.add_argument(
        "--priority",
        type=str,
        choices=["HIGH", "MEDIUM", "LOW"],
        default=None,
        help="Only show alerts of this priority",
    )
    alerts_parser.set_defaults(func=cmd_alerts)

    # demurrage command
    demurrage_parser = subparsers.add_parser("demurrage", help="Show demurrage exposure per container")
    demurrage_parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="Read records from a JSON snapshot instead of the database",
    )
    demurrage_parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="Reference date YYYY-MM-DD (default: current UTC date)",
    )
    demurrage_parser.add_argument(
        "--format",
        type=str,
        choices=["md", "json"],
        default="md",
        help="Output format: md or json (default: md)",
    )
    demurrage_parser.set_defaults(func=cmd_demurrage)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = _load_config_or_empty(Path(args.config) if args.config else None)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    configure_logging("DEBUG" if args.verbose else get_log_level(config))

    try:
        return args.func(args, config)
    except argparse.ArgumentTypeError as e:
        logger.error(str(e))
        return 2
    except (FileNotFoundError, ValueError, ValidationError, SQLAlchemyError) as e:
        logger.error(f"Error running command '{args.command}': {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
