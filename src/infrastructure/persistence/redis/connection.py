"""
Redis Connection Pool Management.

Shared connection pool for the request context store and the Celery health
check, configured from REDIS_* environment variables.

Responsibility:
    - Resolve connection settings from the environment
    - Thread-safe singleton ConnectionPool (Celery workers use threads)
    - Verify the connection with PING, retrying with exponential backoff
    - Close the pool on shutdown

Business Rules:
    - Max connections: 10 (REDIS_MAX_CONNECTIONS)
    - Socket timeout: 5s (REDIS_TIMEOUT)
    - Retry attempts: 3 (REDIS_RETRY_ATTEMPTS), backoff 1s, 2s, 4s
    - Responses decoded to str

Examples:
    >>> client = get_redis_client()
    >>> client.set("key", "value")
    >>> health_check()
    True
    >>> close_connections()
"""

import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

logger = logging.getLogger(__name__)

BACKOFF_BASE_S = 1

_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


@dataclass(frozen=True)
class RedisSettings:
    """Connection settings for the shared pool."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    max_connections: int = 10
    timeout_s: int = 5
    retry_attempts: int = 3

    @classmethod
    def from_env(cls) -> "RedisSettings":
        return cls(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            max_connections=int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
            timeout_s=int(os.getenv("REDIS_TIMEOUT", "5")),
            retry_attempts=int(os.getenv("REDIS_RETRY_ATTEMPTS", "3")),
        )


def _get_pool(settings: RedisSettings) -> ConnectionPool:
    """Create the pool on first use (double-checked locking)."""
    global _redis_pool

    if _redis_pool is None:
        with _pool_lock:
            if _redis_pool is None:
                logger.info(
                    f"Creating Redis connection pool: host={settings.host}, "
                    f"port={settings.port}, db={settings.db}, "
                    f"max_connections={settings.max_connections}"
                )
                _redis_pool = ConnectionPool(
                    host=settings.host,
                    port=settings.port,
                    db=settings.db,
                    max_connections=settings.max_connections,
                    socket_timeout=settings.timeout_s,
                    socket_connect_timeout=settings.timeout_s,
                    socket_keepalive=True,
                    decode_responses=True,
                )
    return _redis_pool


def get_redis_client(settings: Optional[RedisSettings] = None) -> Redis:
    """
    Redis client backed by the shared pool, verified with PING.

    Args:
        settings: Connection settings (default from environment)

    Returns:
        Connected Redis client

    Raises:
        RedisError: If PING fails after all retry attempts
    """
    settings = settings or RedisSettings.from_env()
    client = Redis(connection_pool=_get_pool(settings))

    last_error: Optional[Exception] = None
    for attempt in range(1, settings.retry_attempts + 1):
        try:
            client.ping()
            logger.debug(f"Redis connection established (attempt {attempt})")
            return client
        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt == settings.retry_attempts:
                break
            delay = BACKOFF_BASE_S * (2 ** (attempt - 1))
            logger.warning(
                f"Redis connection failed (attempt {attempt}/{settings.retry_attempts}): "
                f"{e}. Retrying in {delay}s..."
            )
            time.sleep(delay)

    logger.error(
        f"Redis connection failed after {settings.retry_attempts} attempts: {last_error}"
    )
    raise RedisError(
        f"Failed to connect to Redis after {settings.retry_attempts} attempts. "
        f"Last error: {last_error}"
    )


def health_check() -> bool:
    """PING Redis; False on any failure (never raises)."""
    try:
        if get_redis_client().ping():
            return True
        logger.warning("Redis health check: PING returned False")
        return False
    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False


def close_connections() -> None:
    """Disconnect and forget the shared pool. Safe to call repeatedly."""
    global _redis_pool

    with _pool_lock:
        if _redis_pool is None:
            logger.debug("Redis connection pool already closed or not initialized")
            return
        try:
            _redis_pool.disconnect()
            logger.info("Redis connection pool closed")
        except RedisError as e:
            logger.error(f"Error closing Redis connection pool: {e}")
        finally:
            _redis_pool = None
