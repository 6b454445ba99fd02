"""
Celery Task for Asynchronous Ranking

Runs one RankCandidatesCommand in a worker process. Each task drives a
single RankingPipeline.rank call through asyncio.run.

Responsibility:
    - Rebuild and validate the command from its Celery dict
    - Wire the pipeline from MATCHING_* environment configuration
    - Report progress via self.update_state()
    - Retry transient Redis failures with exponential backoff
    - Never retry invalid input

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Thin orchestrator - ranking logic lives in the Domain Layer
"""

import asyncio
import logging
import os
import time
from datetime import datetime

import psutil
from celery import Task
from celery.exceptions import SoftTimeLimitExceeded
from pydantic import ValidationError
from redis.exceptions import RedisError

from .celery_app import celery_app
from src.application.commands.rank_candidates import RankCandidatesCommand
from src.application.services.rank_candidates_use_case import RankCandidatesUseCase
from src.domain.matching import MatchingConfig, RankingPipeline, default_registry
from src.domain.shared.exceptions import InvalidInputError, RequestNotFoundError
from src.infrastructure.persistence.redis.request_context_store import (
    RedisRequestContextStore,
)
from src.infrastructure.persistence.repositories import candidate_pool_from_env

logger = logging.getLogger(__name__)

RETRY_BASE_DELAY_S = 60
RETRY_MAX_DELAY_S = 900


def build_use_case(command: RankCandidatesCommand) -> RankCandidatesUseCase:
    """
    Pipeline from environment config. Redis is used only for a stored
    request, and the CANDIDATE_POOL_PATH pool only when no candidates are inline.
    """
    config = MatchingConfig.from_env()
    pipeline = RankingPipeline(default_registry(), config)
    provider = RedisRequestContextStore() if command.request_id is not None else None
    pool = candidate_pool_from_env() if command.candidates is None else None
    return RankCandidatesUseCase(
        pipeline, candidate_pool=pool, request_context_provider=provider
    )


@celery_app.task(
    bind=True,
    name="rank_candidates",
    max_retries=3,
    time_limit=300,
    soft_time_limit=270,
)
def rank_candidates_task(self: Task, command: dict) -> dict:
    """
    Rank candidates for one request in the background.

    Args:
        self: Celery task instance (bind=True)
        command: RankCandidatesCommand.to_celery_dict() output

    Returns:
        dict:
            {
                "status": "completed",
                "job_id": str,
                "processing_time": float,  # seconds
                "result": dict,  # RankingResult fields + rejected_candidates
            }

    Raises:
        InvalidInputError / ValidationError: Invalid command (not retried)
        RequestNotFoundError: Stored request missing or expired (not retried)
        SoftTimeLimitExceeded: Task ran longer than 270s
        Retry: RedisError, retried after 60s, 120s, 240s (max 900s)
    """
    start_time = time.time()
    job_id = self.request.id
    process = psutil.Process(os.getpid())

    def log_with_memory(stage: str, message: str) -> None:
        memory_mb = process.memory_info().rss / 1024 / 1024
        timestamp = datetime.now().isoformat()
        logger.info(f"{timestamp} | {memory_mb:.1f}MB | {stage} | {message}")

    def update_progress(percentage: int, message: str, stage: str) -> None:
        self.update_state(
            state="PROCESSING",
            meta={"progress": percentage, "message": message, "stage": stage},
        )
        log_with_memory(stage, message)

    try:
        update_progress(0, "Task started", "START")

        rank_command = RankCandidatesCommand.from_celery_dict(command)
        rank_command.validate_business_rules()
        use_case = build_use_case(rank_command)

        update_progress(10, "Ranking candidates", "RANKING")
        outcome = asyncio.run(use_case.execute(rank_command))

        processing_time = time.time() - start_time
        update_progress(
            100,
            f"Ranking completed: {len(outcome.ranking.matches)} matches",
            "COMPLETE",
        )
        return {
            "status": "completed",
            "job_id": job_id,
            "processing_time": processing_time,
            "result": outcome.to_dict(),
        }

    except (ValidationError, InvalidInputError, RequestNotFoundError) as exc:
        log_with_memory("ERROR", f"Job {job_id} rejected, not retried: {exc}")
        raise

    except SoftTimeLimitExceeded:
        logger.warning(f"Job {job_id}: Soft time limit exceeded")
        raise

    except RedisError as exc:
        delay = min(RETRY_MAX_DELAY_S, RETRY_BASE_DELAY_S * 2 ** self.request.retries)
        log_with_memory("ERROR", f"Job {job_id}: Redis failure, retry in {delay}s: {exc}")
        raise self.retry(exc=exc, countdown=delay)
