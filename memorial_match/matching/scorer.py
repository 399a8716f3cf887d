"""
Similarity scoring between memorial candidates.

Compares two records across five weighted dimensions (name, birth date,
death date, birth place, resting place). A dimension with data missing on
either side is neutral: it is left out of both the weighted sum and the
total weight, so sparse records are not scored as mismatches.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

import phonetics
from rapidfuzz.distance import Levenshtein

from ..config import DIMENSIONS, MatchConfig, default_config
from ..core.candidate import MemorialCandidate
from ..utils.date_normalizer import parse_date
from ..utils.name_normalizer import normalize_name
from ..utils.place_normalizer import normalize_place


@dataclass(frozen=True)
class FieldSimilarity:
    """Similarity (0-1) for one scoring dimension."""
    field: str
    similarity: float

    def to_dict(self) -> Dict[str, float]:
        return {'field': self.field, 'similarity': self.similarity}


@dataclass(frozen=True)
class ScoreBreakdown:
    """Result of comparing two candidates.

    ``fields`` holds only the dimensions that had data on both sides, in
    the order name, birth_date, death_date, birth_place, resting_place.
    ``details`` carries the per-part name similarities.
    """
    total: float
    fields: Tuple[FieldSimilarity, ...]
    details: Dict[str, float] = field(default_factory=dict)

    def similarity(self, name: str) -> Optional[float]:
        """Similarity for a dimension, or None if it was neutral."""
        for f in self.fields:
            if f.field == name:
                return f.similarity
        return None

    @property
    def neutral_fields(self) -> List[str]:
        scored = {f.field for f in self.fields}
        return [d for d in DIMENSIONS if d not in scored]


def string_similarity(s1: str, s2: str) -> float:
    """
    Normalized Levenshtein similarity: 1 - distance / max(len).

    Two empty strings are identical (1.0); one empty string scores 0.0.
    Callers normalize case and accents first.
    """
    if s1 == s2:
        return 1.0
    return Levenshtein.normalized_similarity(s1, s2)


def _metaphone(text: str) -> str:
    letters = ''.join(c for c in text if 'a' <= c <= 'z')
    if len(letters) < 2:
        return ""
    return phonetics.metaphone(letters)


def _is_digit_slip(year1: int, year2: int) -> bool:
    """True if the years differ by one digit or one adjacent swap (1945/1954)."""
    s1, s2 = f"{year1:04d}", f"{year2:04d}"
    if len(s1) != len(s2):
        return False

    diffs = [i for i, (c1, c2) in enumerate(zip(s1, s2)) if c1 != c2]
    if len(diffs) == 1:
        return True
    if len(diffs) == 2 and diffs[1] == diffs[0] + 1:
        i, j = diffs
        return s1[i] == s2[j] and s1[j] == s2[i]
    return False


class SimilarityScorer:
    """
    Scores how likely two candidates describe the same person.

    Dimensions:
    - Name: first/middle/last part similarity, nickname may stand in for
      the first name on either side
    - Birth date / death date: exact, transcription slip, or day-distance decay
    - Birth place / resting place: normalized string similarity

    The result is symmetric: score(a, b) == score(b, a).
    """

    def __init__(self, config: Optional[MatchConfig] = None):
        """
        Initialize the scorer.

        Args:
            config: Weights and tuning parameters (default: global config)
        """
        self.config = config or default_config

    def score(self, a: MemorialCandidate, b: MemorialCandidate) -> ScoreBreakdown:
        """
        Compare two candidates.

        Args:
            a: First candidate
            b: Second candidate

        Returns:
            ScoreBreakdown with the weighted total and per-field similarities
        """
        details: Dict[str, float] = {}

        similarities = {
            'name': self.name_similarity(a, b, details),
            'birth_date': self.date_similarity(a.birth_date, b.birth_date),
            'death_date': self.date_similarity(a.death_date, b.death_date),
            'birth_place': self.place_similarity(a.birth_place, b.birth_place),
            'resting_place': self.place_similarity(a.resting_place, b.resting_place),
        }

        scored = tuple(
            FieldSimilarity(dim, similarities[dim])
            for dim in DIMENSIONS
            if similarities[dim] is not None
        )

        return ScoreBreakdown(
            total=self._weighted_total(scored),
            fields=scored,
            details=details,
        )

    def _weighted_total(self, scored: Tuple[FieldSimilarity, ...]) -> float:
        if len(scored) == 1:
            return scored[0].similarity

        weights = self.config.weights
        weight_sum = sum(weights[f.field] for f in scored)
        if weight_sum <= 0:
            return 0.0

        total = sum(f.similarity * weights[f.field] for f in scored) / weight_sum
        return min(1.0, max(0.0, total))

    # ========== Names ==========

    def name_similarity(
        self,
        a: MemorialCandidate,
        b: MemorialCandidate,
        details: Optional[Dict[str, float]] = None,
    ) -> float:
        """
        Score name similarity.

        The first name takes the best of first vs first, either side's
        nickname in place of its first name, and nickname vs nickname.
        Middle names only count when both sides have one.
        """
        first_a, first_b = normalize_name(a.first_name), normalize_name(b.first_name)
        nick_a, nick_b = normalize_name(a.nickname), normalize_name(b.nickname)

        pairs = [(first_a, first_b)]
        if nick_a:
            pairs.append((nick_a, first_b))
        if nick_b:
            pairs.append((first_a, nick_b))
        if nick_a and nick_b:
            pairs.append((nick_a, nick_b))

        parts = {
            'first': max(self._name_part_similarity(x, y) for x, y in pairs),
            'last': self._name_part_similarity(
                normalize_name(a.last_name), normalize_name(b.last_name)
            ),
        }

        middle = self._middle_name_similarity(
            normalize_name(a.middle_name), normalize_name(b.middle_name)
        )
        if middle is not None:
            parts['middle'] = middle

        if details is not None:
            details.update({f"{k}_name": v for k, v in parts.items()})
            details['nickname_used'] = float(
                parts['first'] > self._name_part_similarity(first_a, first_b)
            )

        weights = self.config.name_part_weights
        weight_sum = sum(weights[k] for k in parts)
        return sum(v * weights[k] for k, v in parts.items()) / weight_sum

    def _name_part_similarity(self, n1: str, n2: str) -> float:
        """Levenshtein similarity, raised to the phonetic floor on a Metaphone match."""
        similarity = string_similarity(n1, n2)
        if similarity < self.config.phonetic_floor:
            mp1, mp2 = _metaphone(n1), _metaphone(n2)
            if mp1 and mp1 == mp2:
                similarity = self.config.phonetic_floor
        return similarity

    def _middle_name_similarity(self, m1: str, m2: str) -> Optional[float]:
        if not m1 or not m2:
            return None

        # "W" vs "William"
        if len(m1) == 1 or len(m2) == 1:
            return 1.0 if m1[0] == m2[0] else 0.0

        return self._name_part_similarity(m1, m2)

    # ========== Dates ==========

    def date_similarity(self, d1, d2) -> Optional[float]:
        """
        Score two dates.

        Scoring:
        - Same date: 1.0
        - Same month/day, year off by a digit slip: transcription credit
        - Same month/day, other year: distant transcription credit
        - Otherwise: 0.5 ** (days apart / half-life)

        The best applicable rule wins. Returns None (neutral) if either
        date is missing or unreadable.
        """
        p1, p2 = parse_date(d1), parse_date(d2)
        if p1 is None or p2 is None:
            return None
        if p1 == p2:
            return 1.0

        candidates = [self._day_decay(p1, p2)]
        if (p1.month, p1.day) == (p2.month, p2.day):
            if _is_digit_slip(p1.year, p2.year):
                candidates.append(self.config.transcription_credit)
            else:
                candidates.append(self.config.distant_transcription_credit)

        return max(candidates)

    def _day_decay(self, p1: date, p2: date) -> float:
        days = abs((p1 - p2).days)
        return 0.5 ** (days / self.config.date_half_life_days)

    # ========== Places ==========

    def place_similarity(self, place1: Optional[str], place2: Optional[str]) -> Optional[float]:
        """Score two free-text places; None (neutral) if either is missing."""
        n1, n2 = normalize_place(place1), normalize_place(place2)
        if not n1 or not n2:
            return None
        return string_similarity(n1, n2)


_default_scorer = SimilarityScorer()


def score(a: MemorialCandidate, b: MemorialCandidate) -> ScoreBreakdown:
    """Compare two candidates with the default scorer."""
    return _default_scorer.score(a, b)
