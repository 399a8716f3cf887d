"""Core data model."""

from .candidate import MemorialCandidate

__all__ = ['MemorialCandidate']
