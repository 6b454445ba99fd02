"""
Tests for the /api/matching endpoints.

Covers:
- POST /matching/rank (inline request, stored request_id, rejected records)
- POST /matching/explain
- POST /matching/requests
- POST /matching/jobs (202 Accepted)
- Domain errors mapped to 400 / 404
"""

from uuid import UUID

import pytest
from fastapi import status


# ============================================================================
# POST /matching/rank
# ============================================================================


def test_rank_inline_request(client, rank_use_case, rank_body):
    """
    Test ranking with the request and candidates inline.

    Verifies:
    - Returns 200 OK
    - Closest specialist ranks first
    - Coverage counters are present
    """
    # Act
    response = client.post("/api/matching/rank", json=rank_body)

    # Assert
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["request_id"] == "req-001"
    assert [m["candidate_id"] for m in data["matches"]] == ["artist-a", "artist-b"]
    assert data["matches"][0]["rank"] == 1
    assert data["candidates_considered"] == 2
    assert data["rejected_candidates"] == 0
    assert data["strategies"] == ["analytical", "affective", "exploratory"]


def test_rank_counts_malformed_candidates(client, rank_use_case, rank_body):
    rank_body["candidates"].append({"id": "broken", "experience_years": -2})

    response = client.post("/api/matching/rank", json=rank_body)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["rejected_candidates"] == 1


def test_rank_top_k(client, rank_use_case, rank_body):
    rank_body["options"]["top_k"] = 1

    response = client.post("/api/matching/rank", json=rank_body)

    data = response.json()
    assert len(data["matches"]) == 1
    assert data["candidates_ranked"] == 2


def test_rank_stored_request(client, rank_use_case, sample_request, candidate_records):
    stored = client.post("/api/matching/requests", json=sample_request.to_dict())
    assert stored.status_code == status.HTTP_201_CREATED

    response = client.post(
        "/api/matching/rank",
        json={"request_id": "req-001", "candidates": candidate_records},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["matches"][0]["candidate_id"] == "artist-a"


def test_rank_unknown_request_id_returns_404(client, rank_use_case, candidate_records):
    response = client.post(
        "/api/matching/rank", json={"request_id": "gone", "candidates": candidate_records}
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    data = response.json()
    assert data["code"] == "REQUEST_NOT_FOUND"
    assert data["details"]["request_id"] == "gone"


def test_rank_invalid_option_returns_400(client, rank_use_case, rank_body):
    """Out-of-range coordinates are a domain rule: 400, not 422."""
    rank_body["request"]["location"] = {"latitude": 95.0, "longitude": 0.0}

    response = client.post("/api/matching/rank", json=rank_body)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_INPUT"


def test_rank_without_request_source_returns_400(client, rank_use_case, candidate_records):
    response = client.post("/api/matching/rank", json={"candidates": candidate_records})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["details"]["errors"] == ["either request or request_id is required"]


def test_rank_schema_violation_returns_422(client, rank_use_case, rank_body):
    rank_body["options"]["top_k"] = 0

    response = client.post("/api/matching/rank", json=rank_body)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


# ============================================================================
# POST /matching/explain
# ============================================================================


def test_explain_ranked_match(client, rank_use_case, rank_body):
    top_match = client.post("/api/matching/rank", json=rank_body).json()["matches"][0]

    response = client.post("/api/matching/explain", json=top_match)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["candidate_id"] == "artist-a"
    assert data["rank"] == 1
    assert set(data["per_strategy_breakdown"]) == {"analytical", "affective", "exploratory"}
    assert data["final_score"] == pytest.approx(top_match["final_score"])


# ============================================================================
# POST /matching/requests
# ============================================================================


def test_store_request(client, request_store, sample_request):
    response = client.post("/api/matching/requests", json=sample_request.to_dict())

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"request_id": "req-001", "ttl_seconds": 3600}


def test_store_request_rejects_bad_complexity(client, request_store):
    response = client.post(
        "/api/matching/requests", json={"request_id": "req-9", "complexity": "enormous"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


# ============================================================================
# POST /matching/jobs
# ============================================================================


def test_submit_job_returns_202(client, mock_rank_task, sample_job_id, rank_body):
    response = client.post("/api/matching/jobs", json=rank_body)

    assert response.status_code == status.HTTP_202_ACCEPTED
    data = response.json()
    assert UUID(data["job_id"]) == UUID(sample_job_id)
    assert data["status"] == "queued"
    mock_rank_task.delay.assert_called_once()


def test_submit_invalid_job_is_not_queued(client, mock_rank_task):
    response = client.post(
        "/api/matching/jobs", json={"request": {"request_id": "r"}, "request_id": "r"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    mock_rank_task.delay.assert_not_called()
