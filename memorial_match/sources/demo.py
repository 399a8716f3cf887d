"""In-memory demo memorials used when no database is configured."""

import logging
from typing import List, Optional, Sequence

from ..core.candidate import MemorialCandidate
from .base import CandidatePool

logger = logging.getLogger(__name__)


DEMO_MEMORIALS = (
    MemorialCandidate(
        id="demo-1",
        first_name="John",
        middle_name="William",
        last_name="Smith",
        birth_date="1945-03-15",
        death_date="2020-08-22",
        birth_place="Chicago, Illinois",
        resting_place="Oak Hill Cemetery, Chicago",
        slug="john-smith-memorial",
        view_count=156,
    ),
    MemorialCandidate(
        id="demo-2",
        first_name="Mary",
        middle_name="Elizabeth",
        last_name="Johnson",
        nickname="Betty",
        birth_date="1932-07-04",
        death_date="2019-12-01",
        birth_place="Boston, Massachusetts",
        resting_place="Forest Hills Cemetery, Boston",
        slug="mary-johnson-memorial",
        view_count=89,
    ),
    MemorialCandidate(
        id="demo-3",
        first_name="Robert",
        last_name="Williams",
        birth_date="1958-11-20",
        death_date="2023-04-10",
        birth_place="Los Angeles, California",
        resting_place="Hollywood Forever Cemetery",
        slug="robert-williams-memorial",
        view_count=234,
    ),
    MemorialCandidate(
        id="demo-4",
        first_name="John",
        last_name="Smyth",
        birth_date="1946-03-15",
        death_date="2020-09-01",
        birth_place="Chicago, IL",
        resting_place="Oak Hill Cemetery",
        slug="john-smyth-memorial",
        view_count=45,
    ),
)


class DemoCandidatePool(CandidatePool):
    """Returns a fixed list of memorials regardless of the candidate."""

    def __init__(self, memorials: Optional[Sequence[MemorialCandidate]] = None):
        self.memorials = tuple(DEMO_MEMORIALS if memorials is None else memorials)

    def fetch(self, candidate: MemorialCandidate, limit: int = 50) -> List[MemorialCandidate]:
        logger.debug(f"Demo pool: returning up to {limit} of {len(self.memorials)} memorials")
        return list(self.memorials[:limit])
