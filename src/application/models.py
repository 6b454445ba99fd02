"""
Shared Application Models

Responsibility:
    Enums shared across Commands, Queries, Services and Tasks.

Architecture Notes:
    - Part of Application Layer (Shared)
    - API Layer imports from here (allowed by Clean Architecture)
"""

from enum import Enum


class JobStatus(str, Enum):
    """
    Status of an asynchronous ranking job.

    Attributes:
        QUEUED: Job accepted and waiting in Celery queue
        PROCESSING: Job currently being executed by a Celery worker
        COMPLETED: Job finished successfully, ranking available
        FAILED: Job failed with error details available
        CANCELLED: Job revoked

    Usage:
        >>> JobStatus.from_celery_state("SUCCESS")
        <JobStatus.COMPLETED: 'completed'>
    """

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @classmethod
    def from_celery_state(cls, state: str) -> "JobStatus":
        """Map a Celery task state (PENDING, STARTED, custom PROCESSING, ...)."""
        return _CELERY_STATES.get(state, cls.PROCESSING)


_CELERY_STATES = {
    "PENDING": JobStatus.QUEUED,
    "RECEIVED": JobStatus.QUEUED,
    "STARTED": JobStatus.PROCESSING,
    "PROCESSING": JobStatus.PROCESSING,
    "RETRY": JobStatus.PROCESSING,
    "SUCCESS": JobStatus.COMPLETED,
    "FAILURE": JobStatus.FAILED,
    "REVOKED": JobStatus.CANCELLED,
}
