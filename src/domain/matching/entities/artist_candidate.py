"""
ArtistCandidate Entity.

Read-only snapshot of an artist profile taken at ranking time: portfolio
analysis, location, pricing and track record.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from src.domain.shared.exceptions import InvalidCandidateError, InvalidInputError

from ..value_objects.geo_point import GeoPoint
from ..value_objects.pricing import PriceSchedule
from ..value_objects.rgb_color import RGBColor
from ..value_objects.track_record import TrackRecord
from .match_request import Complexity, location_from_dict, normalize_style


@dataclass(frozen=True)
class ArtistCandidate:
    """
    Immutable artist snapshot.

    Attributes:
        candidate_id: Unique artist identifier (non-empty)
        display_name: Name shown to customers
        style_distribution: Portfolio weight per style (counts or shares, >= 0)
        palette: Dominant portfolio colour (optional)
        complexity: Typical design complexity (optional)
        location: Studio location (optional)
        pricing: Price schedule (optional)
        experience_years: Years of professional experience (>= 0)
        average_rating: Mean review rating (0-5)
        review_count: Number of reviews (>= 0)
        completed_bookings: Completed bookings (<= total_bookings)
        total_bookings: All bookings (>= 0)
        is_active: Whether the artist accepts new requests
        specialties: Free-form specialty labels

    Examples:
        >>> artist = ArtistCandidate(
        ...     candidate_id="artist-1",
        ...     style_distribution={"japanese": 6, "blackwork": 2},
        ... )
        >>> artist.primary_style
        'japanese'
        >>> artist.style_share("japanese")
        0.75
    """

    candidate_id: str
    display_name: str = ""
    style_distribution: Mapping[str, float] = field(default_factory=dict)
    palette: Optional[RGBColor] = None
    complexity: Optional[Complexity] = None
    location: Optional[GeoPoint] = None
    pricing: Optional[PriceSchedule] = None
    experience_years: float = 0.0
    average_rating: float = 0.0
    review_count: int = 0
    completed_bookings: int = 0
    total_bookings: int = 0
    is_active: bool = True
    specialties: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """
        Validate and normalise.

        Raises:
            InvalidCandidateError: If any field violates its invariant
        """
        if not isinstance(self.candidate_id, str) or not self.candidate_id.strip():
            raise InvalidCandidateError(
                "candidate_id cannot be empty", field_name="candidate_id"
            )

        self._require_non_negative_number("experience_years", self.experience_years)
        self._require_non_negative_number("average_rating", self.average_rating)
        if self.average_rating > 5.0:
            self._fail(
                f"average_rating must be 0-5, got {self.average_rating}",
                "average_rating",
            )
        for count_field in ("review_count", "completed_bookings", "total_bookings"):
            value = getattr(self, count_field)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                self._fail(
                    f"{count_field} must be a non-negative integer, got {value!r}",
                    count_field,
                )
        if self.completed_bookings > self.total_bookings:
            self._fail(
                f"completed_bookings ({self.completed_bookings}) cannot exceed "
                f"total_bookings ({self.total_bookings})",
                "completed_bookings",
            )

        distribution: dict[str, float] = {}
        for style, weight in dict(self.style_distribution).items():
            key = normalize_style(style)
            if key is None:
                self._fail("style names cannot be empty", "style_distribution")
            self._require_non_negative_number(f"style_distribution.{key}", weight)
            distribution[key] = distribution.get(key, 0.0) + float(weight)

        try:
            complexity = Complexity.parse(self.complexity)
        except InvalidInputError as e:
            self._fail(e.message, "complexity")

        for attribute, expected in (
            ("palette", RGBColor),
            ("location", GeoPoint),
            ("pricing", PriceSchedule),
        ):
            value = getattr(self, attribute)
            if value is not None and not isinstance(value, expected):
                self._fail(f"{attribute} must be a {expected.__name__}", attribute)

        object.__setattr__(self, "style_distribution", distribution)
        object.__setattr__(self, "complexity", complexity)
        object.__setattr__(self, "specialties", tuple(self.specialties))

    def _fail(self, message: str, field_name: str) -> None:
        raise InvalidCandidateError(
            message, field_name=field_name, candidate_id=self.candidate_id
        )

    def _require_non_negative_number(self, field_name: str, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self._fail(f"{field_name} must be a number, got {value!r}", field_name)
        if not math.isfinite(value) or value < 0:
            self._fail(
                f"{field_name} must be finite and non-negative, got {value}",
                field_name,
            )

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def has_portfolio(self) -> bool:
        """True when any portfolio analysis (styles, palette or complexity) exists."""
        return bool(self.total_style_weight > 0 or self.palette or self.complexity)

    @property
    def total_style_weight(self) -> float:
        return math.fsum(self.style_distribution.values())

    @property
    def primary_style(self) -> Optional[str]:
        """Style with the largest portfolio weight; ties go to the first name alphabetically."""
        weighted = [(w, s) for s, w in self.style_distribution.items() if w > 0]
        if not weighted:
            return None
        return min(weighted, key=lambda item: (-item[0], item[1]))[1]

    def style_share(self, style: Optional[str]) -> float:
        """Share of the portfolio in `style`, in [0, 1]."""
        key = normalize_style(style)
        total = self.total_style_weight
        if key is None or total <= 0:
            return 0.0
        return min(1.0, self.style_distribution.get(key, 0.0) / total)

    @property
    def completion_rate(self) -> float:
        if self.total_bookings == 0:
            return 0.0
        return self.completed_bookings / self.total_bookings

    @property
    def style_versatility(self) -> float:
        """
        Normalised Shannon entropy of the style mix.

        0.0 for a single-style (or empty) portfolio, 1.0 for an even spread.
        """
        weights = [w for w in self.style_distribution.values() if w > 0]
        if len(weights) < 2:
            return 0.0
        total = math.fsum(weights)
        entropy = -math.fsum((w / total) * math.log(w / total) for w in weights)
        return max(0.0, min(1.0, entropy / math.log(len(weights))))

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ArtistCandidate":
        """
        Build a candidate from a JSON-like record.

        When "reviews" (a list of review records) is present and no
        average_rating is given, the track record is aggregated from it.

        Raises:
            InvalidCandidateError: If the record is malformed
        """
        if not isinstance(data, Mapping):
            raise InvalidCandidateError("candidate must be an object")

        candidate_id = data.get("candidate_id") or data.get("id") or ""
        try:
            palette = data.get("palette")
            pricing = data.get("pricing")
            experience_years = data.get("experience_years", 0.0)
            completed = data.get("completed_bookings", 0)
            total = data.get("total_bookings", 0)
            average_rating = data.get("average_rating")
            review_count = data.get("review_count")

            reviews = data.get("reviews")
            if reviews is not None and average_rating is None:
                record = TrackRecord.from_reviews(
                    reviews,
                    experience_years=experience_years,
                    completed_bookings=completed,
                    total_bookings=total,
                )
                average_rating = record.average_rating
                review_count = record.review_count

            return cls(
                candidate_id=candidate_id,
                display_name=data.get("display_name", ""),
                style_distribution=data.get("style_distribution") or {},
                palette=RGBColor.coerce(palette) if palette is not None else None,
                complexity=data.get("complexity"),
                location=location_from_dict(data.get("location")),
                pricing=PriceSchedule.from_dict(pricing) if pricing is not None else None,
                experience_years=experience_years,
                average_rating=average_rating if average_rating is not None else 0.0,
                review_count=review_count if review_count is not None else 0,
                completed_bookings=completed,
                total_bookings=total,
                is_active=bool(data.get("is_active", True)),
                specialties=tuple(data.get("specialties") or ()),
            )
        except InvalidCandidateError:
            raise
        except InvalidInputError as e:
            raise InvalidCandidateError(
                f"Invalid candidate: {e.message}",
                field_name=e.field_name,
                candidate_id=str(candidate_id) or None,
            ) from e
        except (TypeError, AttributeError) as e:
            raise InvalidCandidateError(
                f"Invalid candidate record: {e}", candidate_id=str(candidate_id) or None
            ) from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "display_name": self.display_name,
            "style_distribution": dict(self.style_distribution),
            "palette": self.palette.to_string() if self.palette else None,
            "complexity": self.complexity.value if self.complexity else None,
            "location": self.location.to_dict() if self.location else None,
            "pricing": self.pricing.to_dict() if self.pricing else None,
            "experience_years": self.experience_years,
            "average_rating": self.average_rating,
            "review_count": self.review_count,
            "completed_bookings": self.completed_bookings,
            "total_bookings": self.total_bookings,
            "is_active": self.is_active,
            "specialties": list(self.specialties),
        }
