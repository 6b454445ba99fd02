"""
GetJobStatusQuery - CQRS Read Query

Query object and handler for retrieving the status of a queued ranking job
from the Celery result backend.

Responsibility:
    - Query: Data holder with job_id to query
    - Handler: Reads Celery task state and maps it to JobStatusResult

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Celery app injected, so tests can use a mock
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.application.models import JobStatus

logger = logging.getLogger(__name__)


class GetJobStatusQuery(BaseModel):
    """
    Attributes:
        job_id: Celery task ID to query status for
    """

    job_id: UUID = Field(description="Celery task ID returned by job submission")


class JobStatusResult(BaseModel):
    """
    Result DTO returned by GetJobStatusQueryHandler.

    Attributes:
        job_id: Original task ID
        status: Current status
        progress: Percentage complete (0-100)
        message: Human-readable status message
        result_ready: Whether the ranking is available
        current_step: Current processing stage (optional)
        error_details: Error information if failed (optional)
        result: Task return value once completed (optional)
    """

    job_id: UUID
    status: JobStatus
    progress: int = Field(default=0, ge=0, le=100)
    message: str
    result_ready: bool = False
    current_step: Optional[str] = None
    error_details: Optional[str] = None
    result: Optional[Dict[str, Any]] = None


class GetJobStatusQueryHandler:
    """
    Maps Celery task state to JobStatusResult.

    Celery reports unknown task ids as PENDING, so an unknown job reads as
    queued rather than missing.

    Usage:
        handler = GetJobStatusQueryHandler(celery_app)
        result = handler.handle(GetJobStatusQuery(job_id=job_id))
    """

    def __init__(self, celery_app: Any) -> None:
        self.celery_app = celery_app

    def handle(self, query: GetJobStatusQuery) -> JobStatusResult:
        job_id = str(query.job_id)
        async_result = self.celery_app.AsyncResult(job_id)
        state = async_result.state
        status = JobStatus.from_celery_state(state)
        logger.debug(f"Job {job_id}: celery state={state}, status={status.value}")

        if status is JobStatus.COMPLETED:
            payload = async_result.result or {}
            return JobStatusResult(
                job_id=query.job_id,
                status=status,
                progress=100,
                message="Ranking completed",
                result_ready=True,
                current_step="COMPLETE",
                result=payload.get("result"),
            )

        if status is JobStatus.FAILED:
            return JobStatusResult(
                job_id=query.job_id,
                status=status,
                message="Ranking failed",
                error_details=str(async_result.result),
            )

        if status is JobStatus.CANCELLED:
            return JobStatusResult(
                job_id=query.job_id, status=status, message="Ranking job cancelled"
            )

        if status is JobStatus.QUEUED:
            return JobStatusResult(
                job_id=query.job_id,
                status=status,
                message="Job queued, waiting for worker",
            )

        # PROCESSING carries the meta dict written by update_state()
        info = async_result.info if isinstance(async_result.info, dict) else {}
        return JobStatusResult(
            job_id=query.job_id,
            status=status,
            progress=int(info.get("progress", 0)),
            message=info.get("message", "Processing"),
            current_step=info.get("stage"),
        )
