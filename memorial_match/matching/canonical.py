"""
Canonical keys for exact duplicate lookup.

Two records with the same canonical hash have the same normalized first
name, last name, birth date and death date. Collisions between unrelated
people are possible (common names, unknown dates) and are left to human
review downstream.
"""

import hashlib
from typing import Optional

from ..core.candidate import DateLike, MemorialCandidate
from ..utils.date_normalizer import normalize_date
from ..utils.name_normalizer import canonical_name

# Cannot occur in normalized names (letters and digits) or dates (YYYY-MM-DD / unknown)
KEY_DELIMITER = '|'


class CanonicalKeyBuilder:
    """Builds canonical hashes from identity fields."""

    def build_key(
        self,
        first_name: str,
        last_name: str,
        birth_date: DateLike = None,
        death_date: DateLike = None,
    ) -> str:
        """Return the normalized, delimited key before hashing."""
        return KEY_DELIMITER.join([
            canonical_name(first_name),
            canonical_name(last_name),
            normalize_date(birth_date),
            normalize_date(death_date),
        ])

    def build_hash(
        self,
        first_name: str,
        last_name: str,
        birth_date: DateLike = None,
        death_date: DateLike = None,
    ) -> str:
        """
        Compute the canonical hash for a person.

        Args:
            first_name: Given name
            last_name: Surname
            birth_date: Birth date (ISO string, date, or None)
            death_date: Death date (ISO string, date, or None)

        Returns:
            SHA-256 hex digest of the normalized key
        """
        key = self.build_key(first_name, last_name, birth_date, death_date)
        return hashlib.sha256(key.encode('utf-8')).hexdigest()

    def hash_candidate(self, candidate: MemorialCandidate) -> str:
        """Compute the canonical hash for a candidate record."""
        return self.build_hash(
            candidate.first_name,
            candidate.last_name,
            candidate.birth_date,
            candidate.death_date,
        )


_default_builder = CanonicalKeyBuilder()


def build_hash(
    first_name: str,
    last_name: str,
    birth_date: Optional[DateLike] = None,
    death_date: Optional[DateLike] = None,
) -> str:
    """Compute a canonical hash with the default builder."""
    return _default_builder.build_hash(first_name, last_name, birth_date, death_date)
