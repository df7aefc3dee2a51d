"""Helpers to load roster files (CSV or JSON) and create the valid players."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ValidationError

from rpgroster.config import DEFAULT_RULES, PlayerRules
from rpgroster.exceptions import ValidationFailed
from rpgroster.models import PlayerCandidate, epoch_millis_to_datetime
from rpgroster.service import PlayerService
from rpgroster.validation import candidate_errors


logger = logging.getLogger(__name__)

ROSTER_COLUMNS = ("name", "title", "race", "profession", "birthday", "banned", "experience", "level")


class RosterRow(BaseModel):
    row_number: int
    raw_name: Optional[str] = None
    raw_title: Optional[str] = None
    raw_race: Optional[str] = None
    raw_profession: Optional[str] = None
    raw_birthday: Optional[str] = None
    raw_banned: Optional[str] = None
    raw_experience: Optional[str] = None
    raw_level: Optional[str] = None

    @classmethod
    def from_mapping(cls, row_number: int, row: Mapping[str, Any]) -> "RosterRow":
        def extract(column: str) -> Optional[str]:
            value = row.get(column)
            if value is None:
                return None
            text = str(value)
            # Names and titles keep their spacing; lengths are judged on the trimmed text.
            if column in {"name", "title"}:
                return text
            text = text.strip()
            return text or None

        data = {f"raw_{column}": extract(column) for column in ROSTER_COLUMNS}
        return cls(row_number=row_number, **data)


@dataclass
class ImportReport:
    total_rows: int = 0
    imported: List[int] = field(default_factory=list)
    rejected: List[Tuple[int, str]] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "imported": len(self.imported),
            "imported_ids": list(self.imported),
            "rejected": [{"row": row, "reason": reason} for row, reason in self.rejected],
        }


def _parse_birthday(raw: Optional[str]) -> Optional[datetime]:
    if raw is None:
        return None
    if raw.lstrip("-").isdigit():
        try:
            return epoch_millis_to_datetime(int(raw))
        except OverflowError:
            raise ValueError(f"birthday '{raw}' is out of range") from None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"birthday '{raw}' is neither epoch milliseconds nor an ISO date") from None


def _parse_int(column: str, raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{column} '{raw}' is not an integer") from None


def _parse_flag(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    text = raw.lower()
    if text in {"1", "true", "t", "yes", "y"}:
        return True
    if text in {"0", "false", "f", "no", "n"}:
        return False
    raise ValueError(f"banned '{raw}' is not a boolean")


def row_to_candidate(row: RosterRow) -> PlayerCandidate:
    """Convert a raw row into a candidate, raising ValueError for unparseable cells."""

    try:
        return PlayerCandidate(
            name=row.raw_name,
            title=row.raw_title,
            race=row.raw_race,
            profession=row.raw_profession,
            birthday=_parse_birthday(row.raw_birthday),
            banned=_parse_flag(row.raw_banned),
            experience=_parse_int("experience", row.raw_experience),
            level=_parse_int("level", row.raw_level),
        )
    except ValidationError as exc:
        fields = ", ".join(str(error["loc"][0]) for error in exc.errors())
        raise ValueError(f"invalid value for {fields}") from exc


def load_roster_rows(path: Path) -> List[RosterRow]:
    """Read roster rows from a ``.json`` list of objects or a headed CSV file."""

    if path.suffix.lower() == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError(f"{path} must contain a JSON list of players")
        rows = []
        for index, item in enumerate(payload, start=1):
            if not isinstance(item, dict):
                raise ValueError(f"{path} row {index} must be a JSON object")
            rows.append(RosterRow.from_mapping(index, item))
        return rows

    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        return [RosterRow.from_mapping(index, row) for index, row in enumerate(reader, start=1)]


def rows_to_candidates(
    rows: Sequence[RosterRow],
    *,
    rules: PlayerRules = DEFAULT_RULES,
) -> tuple[list[tuple[int, PlayerCandidate]], ImportReport]:
    """Split rows into valid candidates and a report of rejected row numbers."""

    report = ImportReport(total_rows=len(rows))
    accepted: list[tuple[int, PlayerCandidate]] = []
    for row in rows:
        try:
            candidate = row_to_candidate(row)
        except ValueError as exc:
            report.rejected.append((row.row_number, str(exc)))
            continue
        errors = candidate_errors(candidate, rules)
        if errors:
            report.rejected.append((row.row_number, "; ".join(errors)))
            continue
        accepted.append((row.row_number, candidate))

    for row_number, reason in report.rejected:
        logger.warning("Skipping roster row %d: %s", row_number, reason)
    return accepted, report


def import_roster(path: Path, service: PlayerService) -> ImportReport:
    """Create every valid player in ``path`` through ``service``."""

    rows = load_roster_rows(path)
    accepted, report = rows_to_candidates(rows, rules=service.rules)
    for row_number, candidate in accepted:
        try:
            saved = service.create_player(candidate)
        except ValidationFailed as exc:
            report.rejected.append((row_number, str(exc)))
            continue
        report.imported.append(saved.id)
    logger.info(
        "Imported %d of %d roster rows from %s",
        len(report.imported),
        report.total_rows,
        path,
    )
    return report
