"""
Submit Ranking Job Use Case - Application Orchestration

Validates a RankCandidatesCommand and queues it on Celery for batch
processing. The caller polls the job status with the returned job_id.
"""

import logging
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.application.commands.rank_candidates import RankCandidatesCommand
from src.application.models import JobStatus
from src.application.tasks.ranking_tasks import rank_candidates_task

logger = logging.getLogger(__name__)


class RankingJobResult(BaseModel):
    """
    Job metadata returned right after the task is queued.

    Attributes:
        job_id: Celery task ID
        status: Always QUEUED at submission
        message: Human-readable status message
    """

    job_id: UUID = Field(description="Celery task ID for tracking progress")
    status: JobStatus = Field(default=JobStatus.QUEUED)
    message: str = Field(
        default="Ranking job queued successfully. Use job_id to check status."
    )


class SubmitRankingJobUseCase:
    """
    Queues ranking runs on Celery.

    Usage:
        >>> use_case = SubmitRankingJobUseCase()
        >>> result = use_case.execute(command)
        >>> result.status
        <JobStatus.QUEUED: 'queued'>
    """

    def __init__(self, task: Optional[Any] = None) -> None:
        """
        Args:
            task: Celery task to trigger (default: rank_candidates_task)
        """
        self.task = task if task is not None else rank_candidates_task

    def execute(self, command: RankCandidatesCommand) -> RankingJobResult:
        """
        Raises:
            InvalidRankCommandError: If the command breaks a business rule
        """
        command.validate_business_rules()

        async_result = self.task.delay(command.to_celery_dict())
        logger.info(
            f"Queued ranking job {async_result.id} "
            f"(request={command.request_id or (command.request or {}).get('request_id')})"
        )
        return RankingJobResult(job_id=UUID(str(async_result.id)))
