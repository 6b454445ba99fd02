"""
Celery Tasks

Responsibility:
    Asynchronous task definitions for batch ranking runs.

Contains:
    - celery_app.py - Celery configuration and health_check task
    - ranking_tasks.py - rank_candidates task

Does NOT contain:
    - Business logic (delegates to Domain services)
"""

from .celery_app import celery_app, health_check
from .ranking_tasks import rank_candidates_task

__all__ = ["celery_app", "health_check", "rank_candidates_task"]
