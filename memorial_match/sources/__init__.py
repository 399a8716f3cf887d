"""
Candidate pool sources.

The duplicate finder never reads storage itself; a pool source supplies a
bounded list of existing memorials. SQLite is used when a database path is
configured, otherwise the in-memory demo memorials.
"""

import logging
from typing import Optional

from ..config import MatchConfig, default_config
from .base import CandidatePool
from .demo import DemoCandidatePool, DEMO_MEMORIALS
from .sqlite import SQLiteCandidatePool

logger = logging.getLogger(__name__)


def get_candidate_pool(config: Optional[MatchConfig] = None) -> CandidatePool:
    """Select the pool source for a configuration."""
    config = config or default_config
    if config.database_path is not None:
        return SQLiteCandidatePool(config.database_path)

    logger.info("No memorial database configured, using demo memorials")
    return DemoCandidatePool()


__all__ = [
    'CandidatePool',
    'DemoCandidatePool',
    'SQLiteCandidatePool',
    'DEMO_MEMORIALS',
    'get_candidate_pool',
]
