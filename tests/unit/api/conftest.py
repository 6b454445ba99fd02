"""
Common fixtures for API unit tests.

Provides shared test utilities:
- FastAPI TestClient with dependency overrides cleared after each test
- In-process ranking use case (no Redis, no candidate pool file)
- Request context store over an in-memory Redis stand-in
- Mock Celery task and Celery app for job endpoints
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.api import dependencies
from src.api.main import app
from src.application.queries.get_job_status import GetJobStatusQueryHandler
from src.application.services.rank_candidates_use_case import RankCandidatesUseCase
from src.application.services.submit_ranking_job_use_case import SubmitRankingJobUseCase
from src.domain.matching import RankingPipeline
from src.infrastructure.persistence.redis import RedisRequestContextStore


@pytest.fixture
def client():
    """
    FastAPI TestClient for testing endpoints.

    Server errors are returned as responses so the 500 handler can be tested.
    """
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_job_id():
    """Generate a sample job ID (UUID)."""
    return str(uuid4())


@pytest.fixture
def fake_redis():
    """In-memory stand-in for the redis-py client (get/set/delete)."""
    storage: dict[str, str] = {}
    redis = MagicMock()
    redis.set.side_effect = lambda key, value, ex=None: storage.__setitem__(key, value)
    redis.get.side_effect = storage.get
    redis.delete.side_effect = lambda key: 1 if storage.pop(key, None) is not None else 0
    return redis


@pytest.fixture
def request_store(fake_redis):
    store = RedisRequestContextStore(redis=fake_redis, ttl_s=3600)
    app.dependency_overrides[dependencies.get_request_context_store] = lambda: store
    return store


@pytest.fixture
def rank_use_case(request_store):
    """Real use case wired to the default strategies and the fake store."""
    use_case = RankCandidatesUseCase(RankingPipeline(), request_context_provider=request_store)
    app.dependency_overrides[dependencies.get_rank_candidates_use_case] = lambda: use_case
    return use_case


@pytest.fixture
def mock_rank_task(sample_job_id):
    """Celery task stand-in whose delay() returns sample_job_id."""
    task = MagicMock()
    task.delay.return_value.id = sample_job_id
    use_case = SubmitRankingJobUseCase(task=task)
    app.dependency_overrides[dependencies.get_submit_ranking_job_use_case] = lambda: use_case
    return task


@pytest.fixture
def mock_celery_app():
    """Celery app stand-in; set AsyncResult.return_value.state per test."""
    celery_app = MagicMock()
    handler = GetJobStatusQueryHandler(celery_app)
    app.dependency_overrides[dependencies.get_job_status_query_handler] = lambda: handler
    return celery_app


@pytest.fixture
def rank_body(sample_request, candidate_records):
    """Body of POST /api/matching/rank for the reference scenario."""
    return {
        "request": sample_request.to_dict(),
        "candidates": candidate_records,
        "options": {"min_score": 0.0},
    }
