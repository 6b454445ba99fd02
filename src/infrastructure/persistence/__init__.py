"""
Persistence Infrastructure Module

Data persistence implementations (Redis, repositories).

Exports:
    From redis:
        - RedisRequestContextStore

    From repositories:
        - InMemoryCandidatePool
"""

from .redis import RedisRequestContextStore
from .repositories import InMemoryCandidatePool

__all__ = [
    "RedisRequestContextStore",
    "InMemoryCandidatePool",
]
