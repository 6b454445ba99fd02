"""
Redis Request Context Store

Implements RequestContextProviderProtocol: stores MatchRequest snapshots in
Redis so a ranking can later be triggered with only a request_id.

Storage Strategy:
    - Key pattern: "match_request:{request_id}"
    - Value: JSON of MatchRequest.to_dict()
    - TTL: REQUEST_CONTEXT_TTL seconds (default 24 hours)
"""

import asyncio
import json
import logging
import os
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from src.domain.matching import MatchRequest
from src.domain.shared.exceptions import InvalidMatchRequestError, RequestNotFoundError

from .connection import get_redis_client

logger = logging.getLogger(__name__)

KEY_PREFIX = "match_request"
DEFAULT_TTL_S = 86400


class RedisRequestContextStore:
    """
    Redis-backed request context.

    Blocking redis-py calls run in a worker thread so the event loop keeps
    serving other rankings.

    Examples:
        >>> store = RedisRequestContextStore()
        >>> await store.save(request)
        >>> same = await store.get_request_context(request.request_id)
    """

    def __init__(self, redis: Optional[Redis] = None, ttl_s: Optional[int] = None) -> None:
        """
        Args:
            redis: Redis client (default: shared pool client)
            ttl_s: Expiry of stored requests (default from REQUEST_CONTEXT_TTL)
        """
        self._redis: Optional[Redis] = redis
        self.ttl_s: int = ttl_s or int(os.getenv("REQUEST_CONTEXT_TTL", str(DEFAULT_TTL_S)))

    @property
    def redis(self) -> Redis:
        """Client connected on first use, so building the store never blocks."""
        if self._redis is None:
            self._redis = get_redis_client()
        return self._redis

    @staticmethod
    def _get_key(request_id: str) -> str:
        """
        Examples:
            >>> RedisRequestContextStore._get_key("req-1")
            'match_request:req-1'
        """
        return f"{KEY_PREFIX}:{request_id}"

    async def save(self, request: MatchRequest) -> None:
        """
        Store (or overwrite) a request with TTL.

        Raises:
            RedisError: If Redis operation fails
        """
        payload = json.dumps(request.to_dict(), ensure_ascii=False)
        await asyncio.to_thread(
            self.redis.set, self._get_key(request.request_id), payload, ex=self.ttl_s
        )
        logger.debug(f"Stored request context {request.request_id} (ttl={self.ttl_s}s)")

    async def get_request_context(self, request_id: str) -> MatchRequest:
        """
        Load a stored request.

        Raises:
            RequestNotFoundError: If nothing is stored (or it expired)
            InvalidMatchRequestError: If the stored payload is corrupt
            RedisError: If Redis operation fails
        """
        raw = await asyncio.to_thread(self.redis.get, self._get_key(request_id))
        if raw is None:
            raise RequestNotFoundError(
                f"Request '{request_id}' not found or expired", request_id=request_id
            )

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.error(f"Corrupt request context for {request_id}: {e}")
            raise InvalidMatchRequestError(
                f"Stored request '{request_id}' is not valid JSON"
            ) from e
        return MatchRequest.from_dict(data)

    async def delete(self, request_id: str) -> bool:
        """Remove a stored request; True if it existed."""
        try:
            removed = await asyncio.to_thread(self.redis.delete, self._get_key(request_id))
        except RedisError as e:
            logger.error(f"Failed to delete request context {request_id}: {e}")
            raise
        return bool(removed)
