"""
RankCandidatesCommand - CQRS Write Command

Encapsulates everything needed to run one ranking: the request (inline or
by request_id), the candidates (inline records or pool criteria) and the
ranking options.

Responsibility:
    - Data holder for a ranking run (HTTP or Celery)
    - Business rules validation (request source, timeouts)
    - Conversion to domain criteria
    - Serialization for Celery task queue

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Used by RankCandidatesUseCase and SubmitRankingJobUseCase
    - Candidate records stay raw dicts: malformed ones are skipped and
      counted by the use case, they never fail the command
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from src.domain.matching import CandidatePoolCriteria
from src.domain.matching.entities.match_request import location_from_dict
from src.domain.shared.exceptions import InvalidRankCommandError


# ============================================================================
# OPTION MODELS
# ============================================================================


class RankingOptions(BaseModel):
    """
    Per-call ranking options. None means "use MatchingConfig default".

    Attributes:
        min_score: Exclusive lower bound on final_score (0-1)
        top_k: Maximum matches returned (>= 1)
        per_strategy_timeout_s: Default timeout per strategy in seconds
        strategy_timeouts: Per-strategy timeout overrides in seconds
    """

    min_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(default=None, ge=1)
    per_strategy_timeout_s: Optional[float] = Field(default=None, gt=0.0)
    strategy_timeouts: dict[str, float] = Field(default_factory=dict)


class CandidateCriteria(BaseModel):
    """
    Candidate pool filter as received over the wire.

    Examples:
        >>> criteria = CandidateCriteria(
        ...     near={"latitude": 35.681236, "longitude": 139.767125},
        ...     radius_km=25,
        ... )
        >>> criteria.to_domain().radius_km
        25.0
    """

    active_only: bool = True
    near: Optional[dict[str, float]] = None
    radius_km: Optional[float] = None
    styles: list[str] = Field(default_factory=list)
    limit: Optional[int] = None
    offset: int = 0

    def to_domain(self) -> CandidatePoolCriteria:
        """
        Raises:
            InvalidInputError: If coordinates or pagination are out of range
        """
        return CandidatePoolCriteria(
            active_only=self.active_only,
            near=location_from_dict(self.near),
            radius_km=float(self.radius_km) if self.radius_km is not None else None,
            styles=tuple(self.styles),
            limit=self.limit,
            offset=self.offset,
        )


# ============================================================================
# COMMAND
# ============================================================================


class RankCandidatesCommand(BaseModel):
    """
    Command containing all data needed for one ranking run.

    Attributes:
        request: Inline request record (MatchRequest.from_dict shape)
        request_id: Id of a request stored in the request context store
        candidates: Inline candidate records (ArtistCandidate.from_dict shape)
        criteria: Filter applied to the candidate pool (or to inline records)
        options: Ranking options

    Business Rules (validated in validate_business_rules()):
        - Exactly one of request / request_id
        - request_id (if given) is not blank
        - Every strategy timeout override is positive

    Examples:
        >>> command = RankCandidatesCommand(
        ...     request={"request_id": "req-1", "style_category": "japanese"},
        ...     candidates=[{"id": "artist-1", "style_distribution": {"japanese": 3}}],
        ...     options=RankingOptions(top_k=5),
        ... )
        >>> command.validate_business_rules()
    """

    request: Optional[dict[str, Any]] = None
    request_id: Optional[str] = None
    candidates: Optional[list[dict[str, Any]]] = None
    criteria: Optional[CandidateCriteria] = None
    options: RankingOptions = Field(default_factory=RankingOptions)

    @classmethod
    def from_celery_dict(cls, data: dict[str, Any]) -> "RankCandidatesCommand":
        """Inverse of to_celery_dict (raises pydantic.ValidationError on bad shape)."""
        return cls.model_validate(data)

    def validate_business_rules(self) -> None:
        """
        Collect every business rule violation.

        Raises:
            InvalidRankCommandError: If any rule is violated (with full error list)
        """
        errors: list[str] = []

        if self.request is None and self.request_id is None:
            errors.append("either request or request_id is required")
        if self.request is not None and self.request_id is not None:
            errors.append("request and request_id are mutually exclusive")
        if self.request_id is not None and not self.request_id.strip():
            errors.append("request_id cannot be blank")

        for name, value in self.options.strategy_timeouts.items():
            if value <= 0:
                errors.append(
                    f"options.strategy_timeouts.{name}: timeout must be positive, got {value}"
                )

        if errors:
            raise InvalidRankCommandError("Command validation failed", errors=errors)

    def to_celery_dict(self) -> dict[str, Any]:
        """JSON-safe dict for the Celery queue."""
        return self.model_dump(mode="json")
