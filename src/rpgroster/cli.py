"""Command-line interface for serving, importing and querying players."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

import uvicorn

from rpgroster.api import create_app
from rpgroster.api.schemas import PlayerResponse
from rpgroster.config import load_settings
from rpgroster.exceptions import InvalidArgument, RosterError
from rpgroster.ingest import import_roster
from rpgroster.models import PlayerOrder, Profession, Race, epoch_millis_to_datetime
from rpgroster.persistence import PlayerStore
from rpgroster.query import FilterCriteria
from rpgroster.service import PlayerService


def _filter_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--name", default=None, help="Substring of the player name")
    parser.add_argument("--title", default=None, help="Substring of the player title")
    parser.add_argument("--race", type=Race, default=None, help="Race name (e.g. HUMAN)")
    parser.add_argument("--profession", type=Profession, default=None, help="Profession name (e.g. WARRIOR)")
    parser.add_argument("--after", type=int, default=None, help="Earliest birthday, epoch milliseconds")
    parser.add_argument("--before", type=int, default=None, help="Latest birthday, epoch milliseconds")
    banned = parser.add_mutually_exclusive_group()
    banned.add_argument("--banned", dest="banned", action="store_true", default=None, help="Only banned players")
    banned.add_argument("--not-banned", dest="banned", action="store_false", default=None, help="Only players that are not banned")
    parser.add_argument("--min-experience", type=int, default=None)
    parser.add_argument("--max-experience", type=int, default=None)
    parser.add_argument("--min-level", type=int, default=None)
    parser.add_argument("--max-level", type=int, default=None)
    return parser


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the player roster")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path (overrides RPGROSTER_DB_PATH)")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    load = commands.add_parser("import", help="Import players from a CSV or JSON file")
    load.add_argument("path", type=Path, help="Roster file (.csv or .json)")
    load.add_argument("--report", type=Path, default=None, help="Optional path to write the import report JSON")

    filters = _filter_parser()
    listing = commands.add_parser("list", parents=[filters], help="Print a page of matching players as JSON")
    listing.add_argument("--order", type=PlayerOrder, default=None, help="ID, NAME, LEVEL, BIRTHDAY or EXPERIENCE")
    listing.add_argument("--page-number", type=int, default=None)
    listing.add_argument("--page-size", type=int, default=None)

    commands.add_parser("count", parents=[filters], help="Print the number of matching players")
    return parser.parse_args(argv)


def _millis_bound(value: int | None, flag: str):
    if value is None:
        return None
    try:
        return epoch_millis_to_datetime(value)
    except OverflowError:
        raise InvalidArgument(f"{flag} {value} is out of range") from None


def _criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        name=args.name,
        title=args.title,
        race=args.race,
        profession=args.profession,
        after=_millis_bound(args.after, "--after"),
        before=_millis_bound(args.before, "--before"),
        banned=args.banned,
        min_experience=args.min_experience,
        max_experience=args.max_experience,
        min_level=args.min_level,
        max_level=args.max_level,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings()
    if args.db is not None:
        settings = replace(settings, db_path=args.db)

    if args.command == "serve":
        uvicorn.run(
            create_app(settings),
            host=args.host,
            port=args.port,
            log_level=settings.log_level.lower(),
        )
        return 0

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    service = PlayerService(
        PlayerStore(settings.db_path),
        default_page_size=settings.default_page_size,
    )

    try:
        if args.command == "import":
            report = import_roster(args.path, service)
            payload = report.as_dict()
            print(f"Imported {len(report.imported)}/{report.total_rows} players")
            if report.rejected:
                preview = ", ".join(str(row) for row, _ in report.rejected[:5])
                more = len(report.rejected) - 5
                suffix = f", +{more} more" if more > 0 else ""
                print(f"Rejected rows: {preview}{suffix}")
            if args.report:
                args.report.write_text(json.dumps(payload, indent=2), encoding="utf-8")
                print(f"Wrote import report to {args.report}")
        elif args.command == "list":
            players = service.list_players(
                _criteria_from_args(args),
                args.order,
                args.page_number,
                args.page_size,
            )
            payload = [PlayerResponse.from_record(player).model_dump(mode="json") for player in players]
            print(json.dumps(payload, indent=2))
        elif args.command == "count":
            print(service.count_players(_criteria_from_args(args)))
    except (RosterError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
