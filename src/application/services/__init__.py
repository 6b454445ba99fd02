"""
Application Services

Responsibility:
    Use cases coordinating domain services and infrastructure components.

Contains:
    - rank_candidates_use_case: in-process ranking (RankCandidatesUseCase)
    - submit_ranking_job_use_case: queue a ranking on Celery

Does NOT contain:
    - Domain business logic (use Domain services)
    - Direct infrastructure calls (use dependency injection)
"""
