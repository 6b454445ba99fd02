"""
RequestContextProvider Interface

Contract for looking up a stored MatchRequest by its identifier, so that a
ranking can be triggered with only a request_id (API, Celery task).
"""

from typing import Protocol

from ..entities.match_request import MatchRequest


class RequestContextProviderProtocol(Protocol):
    """
    Protocol for request context lookup.

    Implementations:
        - RedisRequestContextStore (Infrastructure Layer)
    """

    async def get_request_context(self, request_id: str) -> MatchRequest:
        """
        Load a request.

        Raises:
            RequestNotFoundError: If no request is stored under request_id
        """
        ...
