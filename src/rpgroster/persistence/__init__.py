"""Persistence layer for player records."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Protocol

from rpgroster.models import (
    PlayerRecord,
    Profession,
    Race,
    datetime_to_epoch_millis,
    epoch_millis_to_datetime,
)


logger = logging.getLogger(__name__)


class PlayerRepository(Protocol):
    """Storage operations the player service depends on."""

    def load_all(self) -> List[PlayerRecord]:
        """Every stored player in storage order; empty when there are none."""
        ...

    def find_by_id(self, player_id: int) -> Optional[PlayerRecord]:
        ...

    def save(self, record: PlayerRecord) -> PlayerRecord:
        """Insert when ``record.id`` is None, otherwise overwrite that id."""
        ...

    def delete_by_id(self, player_id: int) -> bool:
        """Remove a player, returning False when the id is unknown."""
        ...

    def count(self) -> int:
        ...


class PlayerStore:
    """SQLite-backed player repository.

    Each write runs in its own transaction, so a single record write is
    either fully applied or not at all.
    """

    def __init__(self, db_path: Path | str):
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
            self._use_uri = False
        self._ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    title TEXT NOT NULL,
                    race TEXT NOT NULL,
                    profession TEXT NOT NULL,
                    birthday INTEGER NOT NULL,
                    banned INTEGER NOT NULL DEFAULT 0,
                    experience INTEGER NOT NULL,
                    level INTEGER NOT NULL DEFAULT 0
                )
                """
            )
        logger.debug("Player schema ready at %s", self.db_path)

    def load_all(self) -> List[PlayerRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM players ORDER BY id").fetchall()
        return [self._row_to_record(row) for row in rows]

    def find_by_id(self, player_id: int) -> Optional[PlayerRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def count(self) -> int:
        with self._connect() as conn:
            (total,) = conn.execute("SELECT COUNT(*) FROM players").fetchone()
        return int(total)

    def save(self, record: PlayerRecord) -> PlayerRecord:
        values = (
            record.name,
            record.title,
            record.race.value,
            record.profession.value,
            datetime_to_epoch_millis(record.birthday),
            int(record.banned),
            record.experience,
            record.level,
        )
        with self._connect() as conn:
            if record.id is None:
                cursor = conn.execute(
                    """
                    INSERT INTO players (
                        name, title, race, profession, birthday, banned, experience, level
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    values,
                )
                return record.model_copy(update={"id": cursor.lastrowid})
            cursor = conn.execute(
                """
                UPDATE players
                SET name = ?, title = ?, race = ?, profession = ?,
                    birthday = ?, banned = ?, experience = ?, level = ?
                WHERE id = ?
                """,
                (*values, record.id),
            )
            if cursor.rowcount == 0:
                raise KeyError(f"Player {record.id} not found")
        return record

    def delete_by_id(self, player_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
        return cursor.rowcount > 0

    def _row_to_record(self, row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            id=row["id"],
            name=row["name"],
            title=row["title"],
            race=Race(row["race"]),
            profession=Profession(row["profession"]),
            birthday=epoch_millis_to_datetime(row["birthday"]),
            banned=bool(row["banned"]),
            experience=row["experience"],
            level=row["level"],
        )


__all__ = [
    "PlayerRepository",
    "PlayerStore",
]
