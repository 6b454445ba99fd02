"""
Celery application for background ranking jobs.

Broker and result backend are Redis (CELERY_BROKER_URL,
CELERY_RESULT_BACKEND). A ranking job is CPU-light but may hold a worker
for the whole strategy timeout budget, so workers take one job at a time
and acknowledge it only after it finishes.
"""

import os
from datetime import datetime

from celery import Celery
from dotenv import load_dotenv

from src.domain.matching import default_registry

load_dotenv()

RANKING_QUEUE = os.environ.get("CELERY_RANKING_QUEUE", "ranking")

celery_app = Celery(
    "artist_match",
    broker=os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0"),
    backend=os.environ.get("CELERY_RESULT_BACKEND", "redis://localhost:6379/1"),
)

celery_app.conf.update(
    task_track_started=True,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    task_routes={"rank_candidates": {"queue": RANKING_QUEUE}},
    result_expires=int(os.environ.get("CELERY_RESULT_EXPIRES", "3600")),
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
)

celery_app.autodiscover_tasks(["src.application.tasks"], related_name="ranking_tasks")


@celery_app.task(name="health_check")
def health_check() -> dict:
    """
    Round trip through broker, worker and result backend.

    Returns:
        dict: status, ISO timestamp, worker hostname and the strategies the
        worker would run

    Example:
        >>> health_check.delay().get(timeout=5)["strategies"]
        ['analytical', 'affective', 'exploratory']
    """
    task = celery_app.current_task
    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
        "worker": task.request.hostname if task and task.request.hostname else "unknown",
        "strategies": default_registry().names(),
    }
