"""
End-to-End Tests for the Ranking Workflow

Drives the whole stack through the HTTP API:
1. Store a customer request (POST /api/matching/requests)
2. Rank inline candidates against it (POST /api/matching/rank)
3. Explain the top match (POST /api/matching/explain)
4. Queue the same ranking as a job, run the task body, poll its status

Architecture Notes:
    - Uses FastAPI TestClient (no running server)
    - Redis and the Celery broker are replaced by in-memory stand-ins;
      everything from the API layer down to the domain strategies is real
    - Tests integration of all layers: API → Application → Domain → Infrastructure

Run:
    $ pytest tests/e2e/ -v
"""

import random
from unittest.mock import MagicMock, patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from src.api import dependencies
from src.api.main import app
from src.application.queries.get_job_status import GetJobStatusQueryHandler
from src.application.services.rank_candidates_use_case import RankCandidatesUseCase
from src.application.services.submit_ranking_job_use_case import SubmitRankingJobUseCase
from src.application.tasks import rank_candidates_task
from src.domain.matching import ArtistCandidate, GeoPoint, PriceSchedule, RankingPipeline
from src.infrastructure.persistence.redis import RedisRequestContextStore

pytestmark = pytest.mark.e2e

POOL_SIZE = 200


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def store():
    storage: dict[str, str] = {}
    redis = MagicMock()
    redis.set.side_effect = lambda key, value, ex=None: storage.__setitem__(key, value)
    redis.get.side_effect = storage.get
    return RedisRequestContextStore(redis=redis, ttl_s=3600)


@pytest.fixture
def api(store):
    use_case = RankCandidatesUseCase(RankingPipeline(), request_context_provider=store)
    app.dependency_overrides[dependencies.get_request_context_store] = lambda: store
    app.dependency_overrides[dependencies.get_rank_candidates_use_case] = lambda: use_case
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def synthetic_pool(tokyo_station) -> list[dict]:
    """Seeded pool of artists spread up to 150 km north of Tokyo Station."""
    rng = random.Random(20240401)
    styles = ["japanese", "blackwork", "realism", "fine_line", "neo_traditional"]
    records = []
    for i in range(POOL_SIZE):
        total = rng.randint(0, 60)
        candidate = ArtistCandidate(
            candidate_id=f"artist-{i:03d}",
            style_distribution={style: rng.randint(0, 6) for style in rng.sample(styles, 3)},
            complexity=rng.choice(["simple", "medium", "complex"]),
            location=tokyo_station.offset_north(rng.uniform(0, 150)),
            pricing=PriceSchedule(average_price=rng.randrange(10000, 90000, 500)),
            experience_years=rng.uniform(0, 20),
            average_rating=round(rng.uniform(3.0, 5.0), 1),
            review_count=rng.randint(0, 80),
            completed_bookings=rng.randint(0, total),
            total_bookings=total,
        )
        records.append(candidate.to_dict())
    return records


# ============================================================================
# WORKFLOW TESTS
# ============================================================================


def test_reference_scenario_ranks_close_specialist_first(api, sample_request, candidate_records):
    """
    A ¥40,000 Japanese piece near Tokyo Station: the nearby Japanese
    specialist beats the distant, expensive realism artist.
    """
    # Step 1: store the request
    response = api.post("/api/matching/requests", json=sample_request.to_dict())
    assert response.status_code == status.HTTP_201_CREATED

    # Step 2: rank by request_id
    response = api.post(
        "/api/matching/rank",
        json={"request_id": "req-001", "candidates": candidate_records, "options": {"min_score": 0}},
    )
    assert response.status_code == status.HTTP_200_OK
    ranking = response.json()
    assert [m["candidate_id"] for m in ranking["matches"]] == ["artist-a", "artist-b"]
    top = ranking["matches"][0]
    assert top["final_score"] > ranking["matches"][1]["final_score"]
    assert top["decision"]["coverage"] == pytest.approx(1.0)

    # Step 3: explain the winner
    response = api.post("/api/matching/explain", json=top)
    assert response.status_code == status.HTTP_200_OK
    breakdown = response.json()["per_strategy_breakdown"]
    assert all(entry["contributed"] for entry in breakdown.values())


def test_large_pool_ranking_is_deterministic(api, sample_request, synthetic_pool):
    body = {
        "request": sample_request.to_dict(),
        "candidates": synthetic_pool,
        "criteria": {
            "near": {"latitude": 35.681236, "longitude": 139.767125},
            "radius_km": 100,
        },
        "options": {"top_k": 20},
    }

    first = api.post("/api/matching/rank", json=body).json()
    body["candidates"] = list(reversed(synthetic_pool))
    second = api.post("/api/matching/rank", json=body).json()

    assert [(m["candidate_id"], m["final_score"]) for m in first["matches"]] == [
        (m["candidate_id"], m["final_score"]) for m in second["matches"]
    ]
    assert 0 < len(first["matches"]) <= 20
    scores = [m["final_score"] for m in first["matches"]]
    assert scores == sorted(scores, reverse=True)
    assert first["candidates_considered"] == (
        first["candidates_ranked"]
        + first["candidates_skipped"]
        + first["candidates_below_threshold"]
    )


def test_job_workflow(api, sample_request, candidate_records):
    """Queue a job, execute the task body in-process, then poll its status."""
    celery_app = MagicMock()
    queued: dict = {}

    def fake_delay(command):
        queued["command"] = command
        async_result = MagicMock()
        async_result.id = "4b9b7c3e-9a76-4c1f-8d2b-6a2f3d0c1e55"
        return async_result

    task = MagicMock()
    task.delay.side_effect = fake_delay
    app.dependency_overrides[dependencies.get_submit_ranking_job_use_case] = (
        lambda: SubmitRankingJobUseCase(task=task)
    )
    app.dependency_overrides[dependencies.get_job_status_query_handler] = (
        lambda: GetJobStatusQueryHandler(celery_app)
    )

    # Submit
    response = api.post(
        "/api/matching/jobs",
        json={"request": sample_request.to_dict(), "candidates": candidate_records},
    )
    assert response.status_code == status.HTTP_202_ACCEPTED
    job_id = response.json()["job_id"]

    # Still queued
    celery_app.AsyncResult.return_value.state = "PENDING"
    assert api.get(f"/api/jobs/{job_id}/status").json()["status"] == "queued"

    # Worker runs the task
    with patch.object(rank_candidates_task, "update_state"):
        payload = rank_candidates_task.run(queued["command"])

    # Completed
    celery_app.AsyncResult.return_value.state = "SUCCESS"
    celery_app.AsyncResult.return_value.result = payload
    data = api.get(f"/api/jobs/{job_id}/status").json()
    assert data["status"] == "completed"
    assert data["result"]["matches"][0]["candidate_id"] == "artist-a"


def test_budget_scenario_price_and_distance_beat_reviews(api):
    """
    Budget ¥40,000 at (35.0, 139.0). A: ¥35,000, 3 km, 4.8 over 90 reviews.
    B: ¥80,000, 50 km, 4.9 over 10 reviews. A wins on price and location.
    """
    origin = GeoPoint.create(35.0, 139.0)
    candidates = [
        ArtistCandidate(
            candidate_id=candidate_id,
            location=origin.offset_north(distance_km),
            pricing=PriceSchedule(average_price=price),
            average_rating=rating,
            review_count=reviews,
        ).to_dict()
        for candidate_id, distance_km, price, rating, reviews in (
            ("candidate-b", 50.0, 80000, 4.9, 10),
            ("candidate-a", 3.0, 35000, 4.8, 90),
        )
    ]
    body = {
        "request": {
            "request_id": "budget-40000",
            "location": {"latitude": 35.0, "longitude": 139.0},
            "budget": {"max_amount": 40000},
        },
        "candidates": candidates,
        "options": {"min_score": 0},
    }

    ranking = api.post("/api/matching/rank", json=body).json()

    assert [m["candidate_id"] for m in ranking["matches"]] == ["candidate-a", "candidate-b"]
    top, runner_up = ranking["matches"]
    assert top["features"]["location_score"] == 1.0
    assert top["features"]["price_score"] > runner_up["features"]["price_score"]
