"""
Tests for GET /api/jobs/{job_id}/status endpoint.

Covers:
- Queued, processing, completed and failed jobs
- Invalid job ID format
- Cache-Control header
"""

from fastapi import status


def test_get_job_status_queued(client, mock_celery_app, sample_job_id):
    """
    Test status of a job no worker has picked up yet.

    Verifies:
    - Returns 200 OK
    - Unknown/pending ids read as queued
    - Polling responses are not cached
    """
    # Arrange
    mock_celery_app.AsyncResult.return_value.state = "PENDING"

    # Act
    response = client.get(f"/api/jobs/{sample_job_id}/status")

    # Assert
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["job_id"] == sample_job_id
    assert data["status"] == "queued"
    assert response.headers["Cache-Control"] == "no-cache"


def test_get_job_status_processing(client, mock_celery_app, sample_job_id):
    async_result = mock_celery_app.AsyncResult.return_value
    async_result.state = "PROCESSING"
    async_result.info = {"progress": 10, "message": "Ranking candidates", "stage": "RANKING"}

    data = client.get(f"/api/jobs/{sample_job_id}/status").json()

    assert data["status"] == "processing"
    assert data["progress"] == 10
    assert data["current_step"] == "RANKING"


def test_get_job_status_completed_includes_result(client, mock_celery_app, sample_job_id):
    async_result = mock_celery_app.AsyncResult.return_value
    async_result.state = "SUCCESS"
    async_result.result = {
        "status": "completed",
        "result": {"request_id": "req-001", "matches": []},
    }

    data = client.get(f"/api/jobs/{sample_job_id}/status").json()

    assert data["status"] == "completed"
    assert data["result_ready"] is True
    assert data["result"]["request_id"] == "req-001"


def test_get_job_status_failed(client, mock_celery_app, sample_job_id):
    async_result = mock_celery_app.AsyncResult.return_value
    async_result.state = "FAILURE"
    async_result.result = ValueError("bad record")

    data = client.get(f"/api/jobs/{sample_job_id}/status").json()

    assert data["status"] == "failed"
    assert data["error_details"] == "bad record"


def test_get_job_status_invalid_uuid(client, mock_celery_app):
    response = client.get("/api/jobs/not-a-valid-uuid/status")

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    mock_celery_app.AsyncResult.assert_not_called()
