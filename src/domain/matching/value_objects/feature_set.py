"""
FeatureSet Value Object

Normalised signals derived from one (request, candidate) pair.

Responsibility:
    - Hold the four ranking components (design, location, price, experience)
    - Hold auxiliary track-record signals that strategies may weigh differently
    - Record which components fell back to a neutral default

Architecture Notes:
    - Value Object (immutable, defined by values)
    - Uses Pydantic for range validation (every score in [0, 1])
    - Derived per request; never persisted
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class FeatureSet(BaseModel):
    """
    Immutable set of normalised features for one candidate.

    Attributes:
        design_similarity: Style/palette/complexity similarity
        location_score: Distance band score
        price_score: Budget/price ratio band score
        experience_score: Weighted track-record score
        rating_score: average_rating / 5
        review_volume_score: min(review_count / 20, 1)
        tenure_score: min(experience_years / 10, 1)
        completion_rate: completed / total bookings (0 when none)
        style_versatility: Normalised entropy of the portfolio style mix
        distance_km: Great-circle distance, when both locations are known
        price_ratio: Budget / representative price, when both are known
        missing_signals: Components that used a neutral default
    """

    design_similarity: float = Field(..., ge=0.0, le=1.0)
    location_score: float = Field(..., ge=0.0, le=1.0)
    price_score: float = Field(..., ge=0.0, le=1.0)
    experience_score: float = Field(..., ge=0.0, le=1.0)

    rating_score: float = Field(default=0.0, ge=0.0, le=1.0)
    review_volume_score: float = Field(default=0.0, ge=0.0, le=1.0)
    tenure_score: float = Field(default=0.0, ge=0.0, le=1.0)
    completion_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    style_versatility: float = Field(default=0.0, ge=0.0, le=1.0)

    distance_km: Optional[float] = Field(default=None, ge=0.0)
    price_ratio: Optional[float] = Field(default=None, ge=0.0)
    missing_signals: tuple[str, ...] = Field(default=())

    model_config = {"frozen": True}

    def components(self) -> dict[str, float]:
        """The four ranking components keyed by name."""
        return {
            "design": self.design_similarity,
            "experience": self.experience_score,
            "price": self.price_score,
            "location": self.location_score,
        }

    def is_missing(self, signal: str) -> bool:
        return signal in self.missing_signals

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
