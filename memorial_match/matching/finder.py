"""
Duplicate memorial detection.

Scores a new candidate against a pool of existing records and returns the
ones that look like the same person, highest confidence first. A record
with the same canonical hash is always returned, whatever the threshold.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..config import MatchConfig, default_config
from ..core.candidate import MemorialCandidate
from ..exceptions import InvalidInputError
from ..utils.name_normalizer import canonical_name
from .canonical import CanonicalKeyBuilder
from .labels import ConfidenceLabel, get_confidence_label
from .scorer import FieldSimilarity, ScoreBreakdown, SimilarityScorer

logger = logging.getLogger(__name__)

NAME_REASON_THRESHOLD = 0.8
DATE_REASON_THRESHOLD = 0.5
PLACE_REASON_THRESHOLD = 0.7


@dataclass(frozen=True)
class DuplicateMatch:
    """A pool record that may be the same person as the candidate."""
    candidate: MemorialCandidate
    score: float
    matched_fields: Tuple[FieldSimilarity, ...]
    reasons: Tuple[str, ...] = ()
    exact_hash_match: bool = False

    @property
    def label(self) -> ConfidenceLabel:
        return get_confidence_label(self.score)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            'memorial': self.candidate.to_dict(),
            'confidence': self.score,
            'matchedFields': [f.to_dict() for f in self.matched_fields],
            'matchReasons': list(self.reasons),
            'exactMatch': self.exact_hash_match,
            'label': self.label.to_dict(),
        }


def validate_candidate(candidate: MemorialCandidate) -> None:
    """Raise InvalidInputError if the candidate lacks a first or last name.

    A name that normalizes to nothing (punctuation, a lone suffix) is missing.
    """
    if not isinstance(candidate, MemorialCandidate):
        raise InvalidInputError(f"Expected MemorialCandidate, got {type(candidate).__name__}")

    missing = [
        name for name, value in (('first_name', candidate.first_name), ('last_name', candidate.last_name))
        if not isinstance(value, str) or not canonical_name(value)
    ]
    if missing:
        raise InvalidInputError(f"Missing required field(s): {', '.join(missing)}")


def validate_threshold(threshold: float) -> None:
    """Raise InvalidInputError unless 0 <= threshold <= 1."""
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidInputError(f"Threshold must be a number, got {threshold!r}")
    if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
        raise InvalidInputError(f"Threshold must be between 0 and 1, got {threshold}")


def explain_match(breakdown: ScoreBreakdown, existing: MemorialCandidate) -> List[str]:
    """Build human-readable reasons for a match."""
    reasons = []
    details = breakdown.details

    if details.get('first_name', 0.0) >= NAME_REASON_THRESHOLD:
        if details.get('nickname_used'):
            reasons.append(f"First name or nickname: {existing.nickname or existing.first_name}")
        else:
            reasons.append(f"First name: {existing.first_name}")
    if details.get('last_name', 0.0) >= NAME_REASON_THRESHOLD:
        reasons.append(f"Last name: {existing.last_name}")

    for dim, label in (('birth_date', 'birth'), ('death_date', 'death')):
        similarity = breakdown.similarity(dim)
        if similarity is None:
            continue
        if similarity == 1.0:
            reasons.append(f"Same {label} date")
        elif similarity >= DATE_REASON_THRESHOLD:
            reasons.append(f"Similar {label} date")

    for dim, label, value in (
        ('birth_place', 'birth place', existing.birth_place),
        ('resting_place', 'resting place', existing.resting_place),
    ):
        similarity = breakdown.similarity(dim)
        if similarity is not None and similarity > PLACE_REASON_THRESHOLD:
            reasons.append(f"Similar {label}: {value}")

    return reasons


class DuplicateFinder:
    """
    Finds potential duplicates of a candidate within a pool.

    Pure computation: no storage access, inputs are never modified. The
    pool is fetched by the caller (see memorial_match.sources).
    """

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        scorer: Optional[SimilarityScorer] = None,
        key_builder: Optional[CanonicalKeyBuilder] = None,
    ):
        """
        Initialize the finder.

        Args:
            config: Scoring configuration (default: global config)
            scorer: Similarity scorer (default: built from config)
            key_builder: Canonical hash builder
        """
        self.config = config or default_config
        self.scorer = scorer or SimilarityScorer(self.config)
        self.key_builder = key_builder or CanonicalKeyBuilder()

    def find_potential_duplicates(
        self,
        candidate: MemorialCandidate,
        pool: Iterable[MemorialCandidate],
        threshold: Optional[float] = None,
    ) -> List[DuplicateMatch]:
        """
        Find pool records that may be the same person as the candidate.

        Args:
            candidate: The new (or edited) record
            pool: Existing records to compare against
            threshold: Minimum score to include (default: config threshold)

        Returns:
            Matches sorted by score (highest first), ties by id

        Raises:
            InvalidInputError: If the candidate lacks a name or the threshold
                is outside [0, 1]. Raised before any record is scored.
        """
        if threshold is None:
            threshold = self.config.default_threshold

        validate_candidate(candidate)
        validate_threshold(threshold)

        candidate_hash = self.key_builder.hash_candidate(candidate)
        matches: List[DuplicateMatch] = []
        compared = 0

        for existing in pool:
            # Skip the record itself when re-checking a saved memorial
            if candidate.id and candidate.id == existing.id:
                continue

            if not existing.has_required_names:
                logger.warning(f"Skipping pool record {existing.id!r}: missing first or last name")
                continue

            compared += 1
            match = self._compare(candidate, candidate_hash, existing, threshold)
            if match is not None:
                matches.append(match)

        matches.sort(key=lambda m: (-m.score, m.candidate.id))

        logger.debug(
            f"Compared {compared} records, {len(matches)} potential duplicates "
            f"(threshold={threshold})"
        )
        return matches

    def _compare(
        self,
        candidate: MemorialCandidate,
        candidate_hash: str,
        existing: MemorialCandidate,
        threshold: float,
    ) -> Optional[DuplicateMatch]:
        breakdown = self.scorer.score(candidate, existing)
        exact = self.key_builder.hash_candidate(existing) == candidate_hash

        if not exact and breakdown.total < threshold:
            return None

        reasons = explain_match(breakdown, existing)
        if exact:
            reasons.insert(0, "Same name and dates")

        return DuplicateMatch(
            candidate=existing,
            score=1.0 if exact else breakdown.total,
            matched_fields=breakdown.fields,
            reasons=tuple(reasons),
            exact_hash_match=exact,
        )


_default_finder = DuplicateFinder()


def find_potential_duplicates(
    candidate: MemorialCandidate,
    pool: Iterable[MemorialCandidate],
    threshold: float = 0.5,
) -> List[DuplicateMatch]:
    """Find potential duplicates with the default finder."""
    return _default_finder.find_potential_duplicates(candidate, pool, threshold)
