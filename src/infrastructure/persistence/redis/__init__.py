"""
Redis Infrastructure Module

Redis-based request context storage and connection management.

Exports:
    - RedisRequestContextStore: Store/load match requests by request_id
    - RedisSettings: Connection settings from REDIS_* environment variables
    - get_redis_client: Get Redis client with connection pooling
    - health_check: Check Redis health with PING test
    - close_connections: Close all Redis connections
"""

from .connection import RedisSettings, close_connections, get_redis_client, health_check
from .request_context_store import RedisRequestContextStore

__all__ = [
    "RedisRequestContextStore",
    "RedisSettings",
    "get_redis_client",
    "health_check",
    "close_connections",
]
