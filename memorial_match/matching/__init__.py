"""
Duplicate detection matching engine.

Canonical hashes for exact lookups, weighted fuzzy scoring across names,
dates and places, and threshold-based duplicate finding.
"""

from .canonical import CanonicalKeyBuilder, build_hash
from .scorer import SimilarityScorer, ScoreBreakdown, FieldSimilarity, score
from .finder import DuplicateFinder, DuplicateMatch, find_potential_duplicates
from .labels import ConfidenceLevel, ConfidenceLabel, get_confidence_label

__all__ = [
    'CanonicalKeyBuilder',
    'build_hash',
    'SimilarityScorer',
    'ScoreBreakdown',
    'FieldSimilarity',
    'score',
    'DuplicateFinder',
    'DuplicateMatch',
    'find_potential_duplicates',
    'ConfidenceLevel',
    'ConfidenceLabel',
    'get_confidence_label',
]
