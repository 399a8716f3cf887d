"""Candidate pool source interface."""

from abc import ABC, abstractmethod
from typing import List

from ..core.candidate import MemorialCandidate


class CandidatePool(ABC):
    """Supplies existing memorials to compare a candidate against.

    Implementations must return a finite list of at most ``limit`` records.
    They may narrow the pool with a cheap index (canonical hash, surname
    prefix) but must not score anything themselves.
    """

    @abstractmethod
    def fetch(self, candidate: MemorialCandidate, limit: int = 50) -> List[MemorialCandidate]:
        """Return existing records that could be duplicates of ``candidate``."""

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
