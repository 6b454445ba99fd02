"""
API Schemas Package

Pydantic models for the API Layer.
"""

from src.api.schemas.common import ErrorResponse
from src.api.schemas.matching import (
    MatchRequestBody,
    RankMatchesRequest,
    RankMatchesResponse,
    StoredRequestResponse,
    StrategyInfo,
)

__all__ = [
    "ErrorResponse",
    "MatchRequestBody",
    "RankMatchesRequest",
    "RankMatchesResponse",
    "StoredRequestResponse",
    "StrategyInfo",
]
