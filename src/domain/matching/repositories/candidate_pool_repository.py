"""
CandidatePoolRepository Interface

Contract for retrieving the artists a request is ranked against.

Architecture Notes:
    - Repository Pattern, Protocol-based interface (structural typing)
    - Domain Layer defines, Infrastructure Layer implements
    - Async: production pools live in a database or document store
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from src.domain.shared.exceptions import InvalidInputError

from ..entities.artist_candidate import ArtistCandidate
from ..entities.match_request import normalize_style
from ..value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class CandidatePoolCriteria:
    """
    Filter for a candidate pool query.

    Attributes:
        active_only: Only artists accepting new requests (default True)
        near: Centre of a radius search (optional)
        radius_km: Radius around `near`; requires `near`
        styles: Keep artists whose portfolio contains any of these styles
        limit: Maximum candidates returned (None = all)
        offset: Candidates skipped before `limit` applies

    Raises:
        InvalidInputError: If radius/limit/offset are out of range
    """

    active_only: bool = True
    near: Optional[GeoPoint] = None
    radius_km: Optional[float] = None
    styles: tuple[str, ...] = ()
    limit: Optional[int] = None
    offset: int = 0

    def __post_init__(self) -> None:
        if self.radius_km is not None:
            if self.near is None:
                raise InvalidInputError(
                    "radius_km requires a centre point (near)", field_name="radius_km"
                )
            if self.radius_km <= 0:
                raise InvalidInputError(
                    f"radius_km must be positive, got {self.radius_km}",
                    field_name="radius_km",
                )
        if self.limit is not None and self.limit < 1:
            raise InvalidInputError(
                f"limit must be >= 1, got {self.limit}", field_name="limit"
            )
        if self.offset < 0:
            raise InvalidInputError(
                f"offset cannot be negative, got {self.offset}", field_name="offset"
            )
        object.__setattr__(
            self,
            "styles",
            tuple(s for s in (normalize_style(style) for style in self.styles) if s),
        )


class CandidatePoolProtocol(Protocol):
    """
    Protocol for the source of candidate artists.

    Usage:
        >>> pool: CandidatePoolProtocol = InMemoryCandidatePool(candidates)
        >>> candidates = await pool.get_candidate_pool(
        ...     CandidatePoolCriteria(near=request.location, radius_km=50)
        ... )
    """

    async def get_candidate_pool(
        self, criteria: CandidatePoolCriteria
    ) -> list[ArtistCandidate]:
        """
        Return candidates matching the criteria, ordered by candidate_id.

        Args:
            criteria: Filter and pagination

        Returns:
            Candidate snapshots (may be empty)
        """
        ...
