"""Persistence layer for the player directory."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, List, Protocol, Sequence

from ffcompanion.config import Settings
from ffcompanion.errors import DirectoryLookupFailed, DirectoryWriteFailed
from ffcompanion.models import PlayerRecord


logger = logging.getLogger(__name__)

# Row ceiling accepted by the storage backend for a single upsert request.
MAX_UPSERT_ROWS = 1000


class PlayerStore(Protocol):
    def fetch_players(self, player_ids: Sequence[str]) -> Dict[str, PlayerRecord]:
        """Return known records for ``player_ids`` in a single query."""

    def upsert_players(self, records: Sequence[PlayerRecord]) -> int:
        """Insert or replace records keyed on ``player_id``."""

    def close(self) -> None:
        """Release any connection the store holds."""


def check_batch_size(size: int) -> None:
    if size > MAX_UPSERT_ROWS:
        raise ValueError(f"Upsert batch of {size} rows exceeds the {MAX_UPSERT_ROWS} row limit")


class SQLitePlayerStore:
    """SQLite-backed player directory.

    Every operation opens its own connection. A database that cannot be
    opened raises; there is no fallback location.
    """

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                player_id TEXT PRIMARY KEY,
                full_name TEXT NOT NULL,
                position TEXT NOT NULL,
                team TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def fetch_players(self, player_ids: Sequence[str]) -> Dict[str, PlayerRecord]:
        ids = list(dict.fromkeys(player_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    f"SELECT * FROM players WHERE player_id IN ({placeholders})",
                    tuple(ids),
                ).fetchall()
        except (sqlite3.Error, OSError) as exc:
            raise DirectoryLookupFailed(f"Player lookup failed: {exc}") from exc
        return {row["player_id"]: self._row_to_record(row) for row in rows}

    def upsert_players(self, records: Sequence[PlayerRecord]) -> int:
        check_batch_size(len(records))
        if not records:
            return 0
        try:
            with self._connect() as conn:
                conn.executemany(
                    """
                    INSERT INTO players (player_id, full_name, position, team)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(player_id) DO UPDATE SET
                        full_name = excluded.full_name,
                        position = excluded.position,
                        team = excluded.team
                    """,
                    [(r.player_id, r.full_name, r.position, r.team) for r in records],
                )
                conn.commit()
        except (sqlite3.Error, OSError) as exc:
            raise DirectoryWriteFailed(f"Player upsert failed: {exc}") from exc
        return len(records)

    def close(self) -> None:
        pass

    def list_players(self) -> List[PlayerRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM players ORDER BY player_id").fetchall()
        return [self._row_to_record(row) for row in rows]

    def count(self) -> int:
        with self._connect() as conn:
            return int(conn.execute("SELECT COUNT(*) FROM players").fetchone()[0])

    def _row_to_record(self, row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            player_id=row["player_id"],
            full_name=row["full_name"],
            position=row["position"],
            team=row["team"],
        )


def open_store(settings: Settings) -> PlayerStore:
    """Pick the configured backend: Supabase when credentials exist, SQLite otherwise."""

    if settings.uses_supabase:
        from .supabase import SupabasePlayerStore

        return SupabasePlayerStore(settings.supabase_url or "", settings.supabase_key or "")
    return SQLitePlayerStore(settings.db_path)


def iter_batches(records: Sequence[PlayerRecord], size: int) -> Iterable[Sequence[PlayerRecord]]:
    for start in range(0, len(records), size):
        yield records[start:start + size]


__all__ = [
    "MAX_UPSERT_ROWS",
    "PlayerStore",
    "SQLitePlayerStore",
    "check_batch_size",
    "iter_batches",
    "open_store",
]
