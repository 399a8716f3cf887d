"""FastAPI application for memorial duplicate checks."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from ... import __version__
from ...config import MatchConfig
from ...core.candidate import MemorialCandidate
from ...exceptions import ConfigurationError, InvalidInputError
from ...matching import DuplicateFinder
from ...sources import CandidatePool, get_candidate_pool

logger = logging.getLogger(__name__)


def load_config() -> MatchConfig:
    """Read the configuration from the environment, logging any error."""
    try:
        return MatchConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise


config = load_config()
finder = DuplicateFinder(config)

# Initialize FastAPI app
app = FastAPI(
    title="Memorial Match API",
    description="Duplicate memorial detection",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic models for API
class CheckDuplicatesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName")
    middle_name: Optional[str] = Field(None, alias="middleName")
    last_name: Optional[str] = Field(None, alias="lastName")
    nickname: Optional[str] = None
    birth_date: Optional[str] = Field(None, alias="birthDate")
    death_date: Optional[str] = Field(None, alias="deathDate")
    birth_place: Optional[str] = Field(None, alias="birthPlace")
    resting_place: Optional[str] = Field(None, alias="restingPlace")
    threshold: Optional[float] = None

    def to_candidate(self) -> MemorialCandidate:
        return MemorialCandidate(
            id="",  # New memorial, no ID yet
            first_name=self.first_name or "",
            middle_name=self.middle_name,
            last_name=self.last_name or "",
            nickname=self.nickname,
            birth_date=self.birth_date,
            death_date=self.death_date,
            birth_place=self.birth_place,
            resting_place=self.resting_place,
        )


class CheckDuplicatesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    matches: List[Dict[str, Any]]
    total: int
    canonical_hash: str = Field(alias="canonicalHash")


def get_pool() -> Iterator[CandidatePool]:
    """Provide a candidate pool for one request."""
    pool = get_candidate_pool(config)
    try:
        yield pool
    finally:
        pool.close()


# Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.post(
    "/api/memorials/check-duplicates",
    response_model=CheckDuplicatesResponse,
    response_model_by_alias=True,
)
def check_duplicates(request: CheckDuplicatesRequest, pool: CandidatePool = Depends(get_pool)):
    """Find existing memorials that may be the same person."""
    if not (request.first_name or "").strip() or not (request.last_name or "").strip():
        raise HTTPException(status_code=400, detail="First name and last name are required")

    candidate = request.to_candidate()
    threshold = config.default_threshold if request.threshold is None else request.threshold

    try:
        existing = pool.fetch(candidate, limit=config.pool_limit)
        matches = finder.find_potential_duplicates(candidate, existing, threshold)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error checking duplicates: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to check for duplicates")

    logger.info(f"Duplicate check for {candidate.full_name()!r}: {len(matches)} matches")

    return {
        "matches": [m.to_dict() for m in matches],
        "total": len(matches),
        "canonicalHash": finder.key_builder.hash_candidate(candidate),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
