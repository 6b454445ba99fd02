"""
Infrastructure Layer - External Dependencies

Implements the Domain repository interfaces on top of Redis and memory.

Architecture:
    - Implements Domain repository interfaces (Dependency Inversion)
    - Depends on external libraries (redis)
    - No Domain business logic (only technical implementations)

Modules:
    - persistence: Redis request context store and candidate pools

Usage:
    >>> from src.infrastructure import InMemoryCandidatePool, RedisRequestContextStore
    >>> from src.infrastructure.persistence.redis import health_check
"""

from .persistence import InMemoryCandidatePool, RedisRequestContextStore

__all__ = [
    "InMemoryCandidatePool",
    "RedisRequestContextStore",
]
