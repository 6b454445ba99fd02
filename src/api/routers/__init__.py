"""
API Routers Package

Routers are thin wrappers around Application Layer use cases.

Available Routers:
    - matching_router: Ranking, explanation, stored requests, job submission
    - jobs_router: Job status tracking
    - strategies_router: Strategy diagnostics
"""

from .jobs import router as jobs_router
from .matching import router as matching_router
from .strategies import router as strategies_router

__all__ = ["matching_router", "jobs_router", "strategies_router"]
