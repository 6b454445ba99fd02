"""
API Dependency Injection

Builds Application Layer use cases with their Domain and Infrastructure
dependencies. Routers receive them through FastAPI Depends; tests replace
them through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends

from src.application.queries.get_job_status import GetJobStatusQueryHandler
from src.application.services.rank_candidates_use_case import RankCandidatesUseCase
from src.application.services.submit_ranking_job_use_case import SubmitRankingJobUseCase
from src.application.tasks.celery_app import celery_app
from src.domain.matching import (
    MatchingConfig,
    RankingPipeline,
    StrategyRegistry,
    default_registry,
)
from src.infrastructure.persistence.redis.request_context_store import (
    RedisRequestContextStore,
)
from src.infrastructure.persistence.repositories import (
    InMemoryCandidatePool,
    candidate_pool_from_env,
)


@lru_cache
def get_matching_config() -> MatchingConfig:
    return MatchingConfig.from_env()


@lru_cache
def get_strategy_registry() -> StrategyRegistry:
    return default_registry()


@lru_cache
def get_candidate_pool() -> Optional[InMemoryCandidatePool]:
    """
    Pool loaded from the JSON file at CANDIDATE_POOL_PATH (a list of
    candidate records). None when unset: candidates must then come inline.
    """
    return candidate_pool_from_env()


@lru_cache
def get_request_context_store() -> RedisRequestContextStore:
    return RedisRequestContextStore()


def get_ranking_pipeline(
    config: MatchingConfig = Depends(get_matching_config),
    registry: StrategyRegistry = Depends(get_strategy_registry),
) -> RankingPipeline:
    return RankingPipeline(registry, config)


def get_rank_candidates_use_case(
    pipeline: RankingPipeline = Depends(get_ranking_pipeline),
    candidate_pool: Optional[InMemoryCandidatePool] = Depends(get_candidate_pool),
    store: RedisRequestContextStore = Depends(get_request_context_store),
) -> RankCandidatesUseCase:
    return RankCandidatesUseCase(
        pipeline, candidate_pool=candidate_pool, request_context_provider=store
    )


def get_submit_ranking_job_use_case() -> SubmitRankingJobUseCase:
    return SubmitRankingJobUseCase()


def get_job_status_query_handler() -> GetJobStatusQueryHandler:
    return GetJobStatusQueryHandler(celery_app)
