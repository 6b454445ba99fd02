"""
API Router for Artist Matching

Responsibility:
    HTTP interface for ranking artists against a customer request.
    Thin layer that delegates to Application Layer use cases via dependency
    injection.

Contains:
    - POST /matching/rank - Rank candidates in-process
    - POST /matching/explain - Per-strategy breakdown of a ranked match
    - POST /matching/requests - Store a request for later ranking by id
    - POST /matching/jobs - Queue a ranking on Celery (202 Accepted)

Does NOT contain:
    - Ranking logic (delegated to Domain Layer)
    - Job status tracking (separate router: jobs.py)
"""

import logging

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_rank_candidates_use_case,
    get_ranking_pipeline,
    get_request_context_store,
    get_submit_ranking_job_use_case,
)
from src.api.schemas.common import ErrorResponse
from src.api.schemas.matching import (
    MatchRequestBody,
    RankMatchesRequest,
    RankMatchesResponse,
    StoredRequestResponse,
)
from src.application.services.rank_candidates_use_case import RankCandidatesUseCase
from src.application.services.submit_ranking_job_use_case import (
    RankingJobResult,
    SubmitRankingJobUseCase,
)
from src.domain.matching import (
    MatchExplanation,
    MatchRequest,
    RankedMatch,
    RankingPipeline,
)
from src.infrastructure.persistence.redis.request_context_store import (
    RedisRequestContextStore,
)

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/matching",
    tags=["matching"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - invalid input"},
        404: {"model": ErrorResponse, "description": "Not Found - unknown request_id"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.post(
    "/rank",
    status_code=status.HTTP_200_OK,
    response_model=RankMatchesResponse,
    summary="Rank artists for a request",
    description=(
        "Runs every registered scoring strategy for each candidate, merges "
        "them into a confidence-weighted consensus and returns the top-K "
        "matches with coverage counters."
    ),
)
async def rank_matches(
    body: RankMatchesRequest,
    use_case: RankCandidatesUseCase = Depends(get_rank_candidates_use_case),
) -> RankMatchesResponse:
    """
    Examples:
        >>> curl -X POST http://localhost:8000/api/matching/rank -d '{
        ...   "request": {"request_id": "req-1", "style_category": "japanese"},
        ...   "candidates": [{"id": "artist-1", "style_distribution": {"japanese": 4}}],
        ...   "options": {"top_k": 5}
        ... }'
    """
    outcome = await use_case.execute(body.to_command())
    return RankMatchesResponse(**outcome.to_dict())


@router.post(
    "/explain",
    status_code=status.HTTP_200_OK,
    response_model=MatchExplanation,
    summary="Explain a ranked match",
)
async def explain_match(
    ranked_match: RankedMatch,
    pipeline: RankingPipeline = Depends(get_ranking_pipeline),
) -> MatchExplanation:
    return pipeline.explain(ranked_match)


@router.post(
    "/requests",
    status_code=status.HTTP_201_CREATED,
    response_model=StoredRequestResponse,
    summary="Store a request for ranking by request_id",
)
async def store_request(
    body: MatchRequestBody,
    store: RedisRequestContextStore = Depends(get_request_context_store),
) -> StoredRequestResponse:
    request = MatchRequest.from_dict(body.model_dump(exclude_none=True))
    await store.save(request)
    return StoredRequestResponse(request_id=request.request_id, ttl_seconds=store.ttl_s)


@router.post(
    "/jobs",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=RankingJobResult,
    summary="Queue a ranking job",
    description="Poll GET /api/jobs/{job_id}/status with the returned job_id.",
)
async def submit_ranking_job(
    body: RankMatchesRequest,
    use_case: SubmitRankingJobUseCase = Depends(get_submit_ranking_job_use_case),
) -> RankingJobResult:
    return use_case.execute(body.to_command())
