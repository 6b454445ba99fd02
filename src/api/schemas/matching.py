"""
Matching API Schemas

HTTP request/response models for /api/matching, /api/jobs and /api/strategies.
Converted to Application Layer commands before any processing.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from src.application.commands.rank_candidates import (
    CandidateCriteria,
    RankCandidatesCommand,
    RankingOptions,
)
from src.domain.matching import RankingResult


class LocationBody(BaseModel):
    latitude: float
    longitude: float


class BudgetBody(BaseModel):
    max_amount: float = Field(description="Upper end of the customer budget")
    min_amount: Optional[float] = None


class MatchRequestBody(BaseModel):
    """
    Customer request as sent over HTTP.

    Range checks (coordinates, budget sign, complexity values) are domain
    rules and answer 400, not 422.
    """

    request_id: str = Field(description="Unique request identifier")
    style_category: Optional[str] = None
    palette: Optional[Union[str, list[int], dict[str, int]]] = Field(
        default=None, description='"rgb(r, g, b)", "#rrggbb", [r, g, b] or {r, g, b}'
    )
    complexity: Optional[str] = Field(default=None, description="simple | medium | complex")
    location: Optional[LocationBody] = None
    budget: Optional[BudgetBody] = None
    preferred_styles: list[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "request_id": "req-2024-001",
                "style_category": "japanese",
                "palette": "rgb(20, 20, 20)",
                "complexity": "complex",
                "location": {"latitude": 35.681236, "longitude": 139.767125},
                "budget": {"max_amount": 40000},
                "preferred_styles": ["neo_traditional"],
            }
        }


class RankMatchesRequest(BaseModel):
    """
    Body of POST /api/matching/rank and POST /api/matching/jobs.

    Send either `request` inline or the `request_id` of a stored request.
    Candidate records are accepted as-is: malformed ones are skipped and
    reported in `rejected_candidates`.
    """

    request: Optional[MatchRequestBody] = None
    request_id: Optional[str] = None
    candidates: Optional[list[dict[str, Any]]] = None
    criteria: Optional[CandidateCriteria] = None
    options: RankingOptions = Field(default_factory=RankingOptions)

    def to_command(self) -> RankCandidatesCommand:
        return RankCandidatesCommand(
            request=self.request.model_dump(exclude_none=True) if self.request else None,
            request_id=self.request_id,
            candidates=self.candidates,
            criteria=self.criteria,
            options=self.options,
        )


class RankMatchesResponse(RankingResult):
    """RankingResult plus the count of rejected inline candidate records."""

    rejected_candidates: int = Field(default=0, ge=0)


class StoredRequestResponse(BaseModel):
    request_id: str
    ttl_seconds: int


class StrategyInfo(BaseModel):
    """Registry diagnostics for one strategy."""

    name: str
    status: str
    description: str
    timeout_s: float
