"""Configuration for duplicate scoring and candidate pools."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .exceptions import ConfigurationError


DIMENSIONS = ('name', 'birth_date', 'death_date', 'birth_place', 'resting_place')


@dataclass
class MatchConfig:
    """Tunable parameters for the duplicate scorer.

    The default weights and threshold are starting points, not calibrated
    values. Validate them against known duplicate/non-duplicate pairs before
    relying on them.
    """

    # Dimension weights (must sum to 1.0, name >= dates > places)
    weights: Dict[str, float] = field(default_factory=lambda: {
        'name': 0.40,
        'birth_date': 0.20,
        'death_date': 0.20,
        'birth_place': 0.10,
        'resting_place': 0.10,
    })

    # Name part weights inside the name dimension
    name_part_weights: Dict[str, float] = field(default_factory=lambda: {
        'first': 0.45,
        'middle': 0.10,
        'last': 0.45,
    })

    default_threshold: float = 0.5

    # Dates
    date_half_life_days: float = 90.0
    transcription_credit: float = 0.6  # same month/day, years differ in one digit
    distant_transcription_credit: float = 0.4  # same month/day, any other year

    # Names sharing a Metaphone code score at least this much
    phonetic_floor: float = 0.85

    # Candidate pool
    database_path: Optional[Path] = None
    pool_limit: int = 50

    log_level: str = "INFO"

    def __post_init__(self):
        """Validate weights."""
        missing = [d for d in DIMENSIONS if d not in self.weights]
        if missing:
            raise ConfigurationError(f"Missing weights for: {', '.join(missing)}")

        if any(w < 0 for w in self.weights.values()):
            raise ConfigurationError("Weights must be non-negative")

        if abs(sum(self.weights[d] for d in DIMENSIONS) - 1.0) > 1e-9:
            raise ConfigurationError("Dimension weights must sum to 1.0")

        w = self.weights
        if not (w['name'] >= max(w['birth_date'], w['death_date'])
                and min(w['birth_date'], w['death_date']) > max(w['birth_place'], w['resting_place'])):
            raise ConfigurationError("Weights must keep the ordering name >= dates > places")

        if not 0.0 <= self.default_threshold <= 1.0:
            raise ConfigurationError(f"default_threshold out of range: {self.default_threshold}")

        if self.date_half_life_days <= 0:
            raise ConfigurationError("date_half_life_days must be positive")

        if self.pool_limit < 1:
            raise ConfigurationError(f"pool_limit must be at least 1, got {self.pool_limit}")

        if self.database_path is not None:
            self.database_path = Path(self.database_path)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "MatchConfig":
        """Build a config from environment variables.

        MEMORIAL_MATCH_DB: path to the SQLite memorial database
        DATABASE_URL: used when MEMORIAL_MATCH_DB is unset (sqlite:/// only)
        MEMORIAL_MATCH_THRESHOLD: default duplicate threshold
        MEMORIAL_MATCH_POOL_LIMIT: maximum candidates fetched per check
        MEMORIAL_MATCH_LOG_LEVEL: logging level name
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        db_path = env.get('MEMORIAL_MATCH_DB')
        if not db_path:
            url = env.get('DATABASE_URL', '')
            if url.startswith('sqlite:///'):
                db_path = url[len('sqlite:///'):]
        if db_path:
            kwargs['database_path'] = Path(db_path)

        if env.get('MEMORIAL_MATCH_THRESHOLD'):
            try:
                kwargs['default_threshold'] = float(env['MEMORIAL_MATCH_THRESHOLD'])
            except ValueError as e:
                raise ConfigurationError(
                    f"MEMORIAL_MATCH_THRESHOLD is not a number: {env['MEMORIAL_MATCH_THRESHOLD']}"
                ) from e

        if env.get('MEMORIAL_MATCH_POOL_LIMIT'):
            try:
                kwargs['pool_limit'] = int(env['MEMORIAL_MATCH_POOL_LIMIT'])
            except ValueError as e:
                raise ConfigurationError(
                    f"MEMORIAL_MATCH_POOL_LIMIT is not an integer: {env['MEMORIAL_MATCH_POOL_LIMIT']}"
                ) from e

        if env.get('MEMORIAL_MATCH_LOG_LEVEL'):
            kwargs['log_level'] = env['MEMORIAL_MATCH_LOG_LEVEL'].upper()

        return cls(**kwargs)


# Global configuration instance
default_config = MatchConfig()
