"""
MatchRequest Entity.

A customer's request for an artist: what they want tattooed, where, and how
much they are willing to pay. Identified by request_id; immutable once
created so every candidate in a ranking is scored against the same values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from src.domain.shared.exceptions import InvalidInputError, InvalidMatchRequestError

from ..value_objects.geo_point import GeoPoint
from ..value_objects.pricing import BudgetRange
from ..value_objects.rgb_color import RGBColor


class Complexity(str, Enum):
    """
    Design complexity as assessed from reference images.

    Levels:
        SIMPLE: Few elements, line work
        MEDIUM: Moderate detail
        COMPLEX: Dense detail, many objects
    """

    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"

    @classmethod
    def parse(cls, value: "Complexity | str | None") -> Optional["Complexity"]:
        """
        Parse a complexity label (case-insensitive). None stays None.

        Raises:
            InvalidInputError: If the label is not a known level
        """
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidInputError(
                f"complexity must be one of {[c.value for c in cls]}, got {value!r}",
                field_name="complexity",
            ) from None


def normalize_style(style: Optional[str]) -> Optional[str]:
    """Lower-case, trim and snake-case a style label; blank becomes None."""
    if style is None:
        return None
    normalized = "_".join(str(style).strip().lower().replace("-", " ").split())
    return normalized or None


def location_from_dict(data: Any) -> Optional[GeoPoint]:
    if data is None:
        return None
    if isinstance(data, GeoPoint):
        return data
    if not isinstance(data, dict):
        raise InvalidInputError(
            f"location must be an object, got {type(data).__name__}",
            field_name="location",
        )
    latitude = data.get("latitude", data.get("lat"))
    longitude = data.get("longitude", data.get("lng", data.get("lon")))
    return GeoPoint.create(latitude, longitude)


def _style_list(styles: Any) -> tuple[str, ...]:
    """A bare string is one style, not a sequence of letters."""
    if styles is None:
        return ()
    if isinstance(styles, str):
        return (styles,)
    if not isinstance(styles, (list, tuple)):
        raise InvalidInputError(
            f"preferred_styles must be a list of strings, got {type(styles).__name__}",
            field_name="preferred_styles",
        )
    return tuple(styles)


@dataclass(frozen=True)
class MatchRequest:
    """
    Immutable customer request.

    Attributes:
        request_id: Unique request identifier (non-empty)
        style_category: Requested style, e.g. "japanese" (optional)
        palette: Dominant colour of the reference design (optional)
        complexity: Assessed design complexity (optional)
        location: Customer location (optional)
        budget: Customer budget (optional)
        preferred_styles: Other styles the customer is happy with

    Missing optional fields are scored with neutral defaults, never rejected.

    Examples:
        >>> request = MatchRequest.from_dict({
        ...     "request_id": "req-1",
        ...     "style_category": "Japanese",
        ...     "location": {"latitude": 35.681236, "longitude": 139.767125},
        ...     "budget": {"max_amount": 40000},
        ... })
        >>> request.style_category
        'japanese'
    """

    request_id: str
    style_category: Optional[str] = None
    palette: Optional[RGBColor] = None
    complexity: Optional[Complexity] = None
    location: Optional[GeoPoint] = None
    budget: Optional[BudgetRange] = None
    preferred_styles: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """
        Validate and normalise.

        Raises:
            InvalidMatchRequestError: If request_id is empty or a field has the wrong type
        """
        if not isinstance(self.request_id, str) or not self.request_id.strip():
            raise InvalidMatchRequestError(
                "request_id cannot be empty", field_name="request_id"
            )
        if self.location is not None and not isinstance(self.location, GeoPoint):
            raise InvalidMatchRequestError(
                "location must be a GeoPoint", field_name="location"
            )
        if self.budget is not None and not isinstance(self.budget, BudgetRange):
            raise InvalidMatchRequestError(
                "budget must be a BudgetRange", field_name="budget"
            )
        if self.palette is not None and not isinstance(self.palette, RGBColor):
            raise InvalidMatchRequestError(
                "palette must be an RGBColor", field_name="palette"
            )

        # Frozen dataclass: normalise via object.__setattr__
        try:
            complexity = Complexity.parse(self.complexity)
        except InvalidInputError as e:
            raise InvalidMatchRequestError(e.message, field_name="complexity") from e
        try:
            preferred = _style_list(self.preferred_styles)
        except InvalidInputError as e:
            raise InvalidMatchRequestError(e.message, field_name=e.field_name) from e
        object.__setattr__(self, "complexity", complexity)
        object.__setattr__(self, "style_category", normalize_style(self.style_category))
        object.__setattr__(
            self,
            "preferred_styles",
            tuple(
                style
                for style in (normalize_style(s) for s in preferred)
                if style
            ),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchRequest":
        """
        Build a request from a JSON-like dict (API body, Redis payload).

        Raises:
            InvalidMatchRequestError: If any field is malformed
        """
        if not isinstance(data, dict):
            raise InvalidMatchRequestError("request must be an object")
        try:
            palette = data.get("palette")
            budget = data.get("budget")
            return cls(
                request_id=data.get("request_id", ""),
                style_category=data.get("style_category"),
                palette=RGBColor.coerce(palette) if palette is not None else None,
                complexity=data.get("complexity"),
                location=location_from_dict(data.get("location")),
                budget=BudgetRange.from_dict(budget) if budget is not None else None,
                preferred_styles=_style_list(data.get("preferred_styles")),
            )
        except InvalidMatchRequestError:
            raise
        except InvalidInputError as e:
            raise InvalidMatchRequestError(
                f"Invalid request: {e.message}", field_name=e.field_name
            ) from e
        except (TypeError, AttributeError) as e:
            raise InvalidMatchRequestError(f"Invalid request record: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "style_category": self.style_category,
            "palette": self.palette.to_string() if self.palette else None,
            "complexity": self.complexity.value if self.complexity else None,
            "location": self.location.to_dict() if self.location else None,
            "budget": self.budget.to_dict() if self.budget else None,
            "preferred_styles": list(self.preferred_styles),
        }
