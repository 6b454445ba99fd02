"""
Tests for SubmitRankingJobUseCase.

Covers:
- Command validation before queueing
- Task triggered with the Celery dict
- RankingJobResult shape
"""

from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest

from src.application.commands import RankCandidatesCommand, RankingOptions
from src.application.models import JobStatus
from src.application.services.submit_ranking_job_use_case import (
    RankingJobResult,
    SubmitRankingJobUseCase,
)
from src.application.tasks import rank_candidates_task
from src.domain.shared.exceptions import InvalidRankCommandError


@pytest.fixture
def mock_task():
    task = MagicMock()
    task.delay.return_value.id = str(uuid4())
    return task


def test_execute_queues_command(mock_task):
    command = RankCandidatesCommand(
        request_id="req-001", options=RankingOptions(top_k=5)
    )

    result = SubmitRankingJobUseCase(task=mock_task).execute(command)

    mock_task.delay.assert_called_once_with(command.to_celery_dict())
    assert isinstance(result, RankingJobResult)
    assert result.job_id == UUID(mock_task.delay.return_value.id)
    assert result.status is JobStatus.QUEUED
    assert "job_id" in result.message


def test_execute_rejects_invalid_command(mock_task):
    with pytest.raises(InvalidRankCommandError):
        SubmitRankingJobUseCase(task=mock_task).execute(RankCandidatesCommand())

    mock_task.delay.assert_not_called()


def test_default_task_is_rank_candidates():
    assert SubmitRankingJobUseCase().task is rank_candidates_task
