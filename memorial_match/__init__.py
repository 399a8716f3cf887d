"""memorial-match - find potential duplicate memorials before creating a new one."""

__version__ = "0.1.0"

from .core.candidate import MemorialCandidate
from .exceptions import MemorialMatchError, InvalidInputError, ConfigurationError
from .matching import (
    CanonicalKeyBuilder,
    SimilarityScorer,
    DuplicateFinder,
    DuplicateMatch,
    build_hash,
    find_potential_duplicates,
    get_confidence_label,
)

__all__ = [
    'MemorialCandidate',
    'MemorialMatchError',
    'InvalidInputError',
    'ConfigurationError',
    'CanonicalKeyBuilder',
    'SimilarityScorer',
    'DuplicateFinder',
    'DuplicateMatch',
    'build_hash',
    'find_potential_duplicates',
    'get_confidence_label',
]
