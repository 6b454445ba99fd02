"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the matching engine. Handles requests, responses,
    and queues Celery ranking jobs. No business logic.

Contains:
    - FastAPI routers (matching, jobs, strategies)
    - Request/Response models (Pydantic)
    - Dependency injection setup
    - Middleware configuration (CORS, logging)
"""
