"""SQLite-backed candidate pool."""

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import List, Optional

from ..core.candidate import MemorialCandidate
from ..matching.canonical import CanonicalKeyBuilder
from ..utils.name_normalizer import canonical_name
from .base import CandidatePool

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS memorials (
    id TEXT PRIMARY KEY,
    first_name TEXT NOT NULL,
    middle_name TEXT,
    last_name TEXT NOT NULL,
    nickname TEXT,
    birth_date TEXT,
    death_date TEXT,
    birth_place TEXT,
    resting_place TEXT,
    slug TEXT,
    view_count INTEGER NOT NULL DEFAULT 0,
    profile_photo_url TEXT,
    surname_key TEXT NOT NULL,
    canonical_hash TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_memorials_canonical_hash ON memorials (canonical_hash);
CREATE INDEX IF NOT EXISTS idx_memorials_surname_key ON memorials (surname_key);
"""

# Surname-key prefix length used to narrow the pool
SURNAME_PREFIX_LENGTH = 2

_COLUMNS = (
    'id', 'first_name', 'middle_name', 'last_name', 'nickname',
    'birth_date', 'death_date', 'birth_place', 'resting_place',
    'slug', 'view_count', 'profile_photo_url',
)


def _date_text(value) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    return value


class SQLiteCandidatePool(CandidatePool):
    """Candidate pool stored in a SQLite ``memorials`` table.

    ``fetch`` returns records with the candidate's canonical hash or whose
    normalized surname starts with the same letters, capped at ``limit``.
    Exact-hash rows come first so the cap never drops them.
    """

    def __init__(self, db_path: str | Path, key_builder: Optional[CanonicalKeyBuilder] = None):
        """Open (and create if needed) the memorial database.

        Args:
            db_path: Path to the SQLite database file
            key_builder: Canonical hash builder for stored rows
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.key_builder = key_builder or CanonicalKeyBuilder()

        # Opened and used on different worker threads by the API
        self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.executescript(SCHEMA)
        logger.info(f"Opened memorial database at {self.db_path}")

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    @contextmanager
    def transaction(self):
        """Context manager for database transactions."""
        try:
            yield self.conn
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def add(self, memorial: MemorialCandidate) -> str:
        """
        Insert or replace a memorial.

        Args:
            memorial: Record to store; an empty id gets a generated one

        Returns:
            The stored record's id
        """
        memorial_id = memorial.id or uuid.uuid4().hex
        values = [getattr(memorial, col) for col in _COLUMNS]
        values[0] = memorial_id
        values[5] = _date_text(memorial.birth_date)
        values[6] = _date_text(memorial.death_date)
        values[10] = memorial.view_count or 0

        with self.transaction() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO memorials ({', '.join(_COLUMNS)}, surname_key, canonical_hash) "
                f"VALUES ({', '.join('?' * len(_COLUMNS))}, ?, ?)",
                (*values, canonical_name(memorial.last_name), self.key_builder.hash_candidate(memorial)),
            )
        return memorial_id

    def count(self) -> int:
        cursor = self.conn.execute("SELECT COUNT(*) FROM memorials")
        return cursor.fetchone()[0]

    def fetch(self, candidate: MemorialCandidate, limit: int = 50) -> List[MemorialCandidate]:
        """Fetch records sharing the candidate's hash or surname prefix."""
        candidate_hash = self.key_builder.hash_candidate(candidate)
        prefix = canonical_name(candidate.last_name)[:SURNAME_PREFIX_LENGTH]

        if prefix:
            cursor = self.conn.execute(
                "SELECT * FROM memorials "
                "WHERE canonical_hash = ? OR surname_key LIKE ? "
                "ORDER BY canonical_hash = ? DESC, id "
                "LIMIT ?",
                (candidate_hash, prefix + '%', candidate_hash, limit),
            )
        else:
            cursor = self.conn.execute(
                "SELECT * FROM memorials WHERE canonical_hash = ? ORDER BY id LIMIT ?",
                (candidate_hash, limit),
            )

        rows = cursor.fetchall()
        logger.debug(f"Fetched {len(rows)} pool records for surname prefix {prefix!r}")
        return [self._row_to_candidate(row) for row in rows]

    @staticmethod
    def _row_to_candidate(row: sqlite3.Row) -> MemorialCandidate:
        return MemorialCandidate(**{col: row[col] for col in _COLUMNS})
