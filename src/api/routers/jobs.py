"""
API Router for Job Status Tracking

Responsibility:
    HTTP interface for polling queued ranking jobs.

Contains:
    - GET /jobs/{job_id}/status - Query job progress, status and result

Does NOT contain:
    - Job creation (matching.py)
    - Direct Celery access (delegated to Application Layer query handler)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Response, status

from src.api.dependencies import get_job_status_query_handler
from src.api.schemas.common import ErrorResponse
from src.application.queries.get_job_status import (
    GetJobStatusQuery,
    GetJobStatusQueryHandler,
    JobStatusResult,
)

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Unprocessable Entity - Invalid job ID format",
        },
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


@router.get(
    "/{job_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=JobStatusResult,
    summary="Get status of a ranking job",
    description=(
        "Poll every 2-5 seconds while status is queued or processing. "
        "The ranking is included once status is completed."
    ),
)
async def get_job_status(
    response: Response,
    job_id: UUID = Path(..., description="Celery task ID returned by POST /matching/jobs"),
    handler: GetJobStatusQueryHandler = Depends(get_job_status_query_handler),
) -> JobStatusResult:
    result = handler.handle(GetJobStatusQuery(job_id=job_id))
    response.headers["Cache-Control"] = "no-cache"
    return result
