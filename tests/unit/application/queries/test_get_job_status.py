"""
Tests for GetJobStatusQuery and GetJobStatusQueryHandler.

Covers:
- Query validation
- Celery state mapping to JobStatusResult (queued, processing, completed,
  failed, cancelled)
- Unknown job ids read as queued
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.application.models import JobStatus
from src.application.queries import (
    GetJobStatusQuery,
    GetJobStatusQueryHandler,
    JobStatusResult,
)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_celery_app():
    """Celery app whose AsyncResult is configured per test."""
    return MagicMock()


@pytest.fixture
def handler(mock_celery_app):
    return GetJobStatusQueryHandler(mock_celery_app)


@pytest.fixture
def job_id():
    return uuid4()


def set_state(mock_celery_app, state, result=None, info=None):
    async_result = mock_celery_app.AsyncResult.return_value
    async_result.state = state
    async_result.result = result
    async_result.info = info
    return async_result


# ============================================================================
# QUERY TESTS
# ============================================================================


def test_query_accepts_uuid_string():
    job_id = uuid4()

    assert GetJobStatusQuery(job_id=str(job_id)).job_id == job_id


def test_query_rejects_invalid_id():
    with pytest.raises(ValidationError):
        GetJobStatusQuery(job_id="not-a-uuid")


# ============================================================================
# STATE MAPPING TESTS
# ============================================================================


def test_pending_job_is_queued(handler, mock_celery_app, job_id):
    set_state(mock_celery_app, "PENDING")

    result = handler.handle(GetJobStatusQuery(job_id=job_id))

    mock_celery_app.AsyncResult.assert_called_once_with(str(job_id))
    assert isinstance(result, JobStatusResult)
    assert result.status is JobStatus.QUEUED
    assert result.progress == 0
    assert result.message == "Job queued, waiting for worker"
    assert not result.result_ready


def test_processing_job_reports_progress_meta(handler, mock_celery_app, job_id):
    set_state(
        mock_celery_app,
        "PROCESSING",
        info={"progress": 10, "message": "Ranking candidates", "stage": "RANKING"},
    )

    result = handler.handle(GetJobStatusQuery(job_id=job_id))

    assert result.status is JobStatus.PROCESSING
    assert result.progress == 10
    assert result.message == "Ranking candidates"
    assert result.current_step == "RANKING"


def test_started_job_without_meta(handler, mock_celery_app, job_id):
    set_state(mock_celery_app, "STARTED", info=None)

    result = handler.handle(GetJobStatusQuery(job_id=job_id))

    assert result.status is JobStatus.PROCESSING
    assert result.progress == 0
    assert result.message == "Processing"
    assert result.current_step is None


def test_completed_job_carries_ranking(handler, mock_celery_app, job_id):
    ranking = {"request_id": "req-001", "matches": [], "rejected_candidates": 0}
    set_state(
        mock_celery_app,
        "SUCCESS",
        result={"status": "completed", "job_id": str(job_id), "result": ranking},
    )

    result = handler.handle(GetJobStatusQuery(job_id=job_id))

    assert result.status is JobStatus.COMPLETED
    assert result.progress == 100
    assert result.result_ready
    assert result.current_step == "COMPLETE"
    assert result.result == ranking


def test_failed_job_reports_error(handler, mock_celery_app, job_id):
    set_state(mock_celery_app, "FAILURE", result=RuntimeError("worker lost"))

    result = handler.handle(GetJobStatusQuery(job_id=job_id))

    assert result.status is JobStatus.FAILED
    assert result.error_details == "worker lost"
    assert not result.result_ready


def test_revoked_job_is_cancelled(handler, mock_celery_app, job_id):
    set_state(mock_celery_app, "REVOKED")

    result = handler.handle(GetJobStatusQuery(job_id=job_id))

    assert result.status is JobStatus.CANCELLED
    assert result.message == "Ranking job cancelled"


# ============================================================================
# JOB STATUS ENUM TESTS
# ============================================================================


@pytest.mark.parametrize(
    "state, expected",
    [
        ("PENDING", JobStatus.QUEUED),
        ("RECEIVED", JobStatus.QUEUED),
        ("STARTED", JobStatus.PROCESSING),
        ("RETRY", JobStatus.PROCESSING),
        ("SUCCESS", JobStatus.COMPLETED),
        ("FAILURE", JobStatus.FAILED),
        ("REVOKED", JobStatus.CANCELLED),
        ("SOMETHING_CUSTOM", JobStatus.PROCESSING),
    ],
)
def test_job_status_from_celery_state(state, expected):
    assert JobStatus.from_celery_state(state) is expected
