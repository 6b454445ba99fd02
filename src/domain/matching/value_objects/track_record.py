"""
TrackRecord Value Object.

Aggregates an artist's reviews and booking history into the figures the
matching engine consumes (average rating, review count) plus an overall
artist score on the 0-5 rating scale.

Artist score:
    average_rating + min(experience_years * 0.05, 0.5) + completion_rate * 0.3
    capped at 5.0
"""

import math
from dataclasses import dataclass, field
from typing import Any, Final, Iterable, Mapping

from src.domain.shared.exceptions import InvalidInputError

REVIEW_CATEGORIES: Final[tuple[str, ...]] = (
    "quality",
    "professionalism",
    "communication",
    "cleanliness",
    "value",
)

EXPERIENCE_BONUS_PER_YEAR: Final[float] = 0.05
MAX_EXPERIENCE_BONUS: Final[float] = 0.5
COMPLETION_BONUS_WEIGHT: Final[float] = 0.3
MAX_ARTIST_SCORE: Final[float] = 5.0


def _rating(value: Any, field_name: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(
            f"{field_name} must be a number, got {value!r}", field_name=field_name
        )
    if not math.isfinite(value) or not 0.0 <= value <= 5.0:
        raise InvalidInputError(
            f"{field_name} must be between 0 and 5, got {value}", field_name=field_name
        )
    return float(value)


@dataclass(frozen=True)
class TrackRecord:
    """
    Immutable review and booking summary for one artist.

    Attributes:
        average_rating: Mean overall rating (0-5), 0.0 without reviews
        review_count: Number of reviews
        category_averages: Mean rating per review category
        artist_score: Rating with experience and completion bonuses (0-5)

    Examples:
        >>> record = TrackRecord.from_reviews(
        ...     [{"overall_rating": 5}, {"overall_rating": 4}],
        ...     experience_years=4,
        ...     completed_bookings=9,
        ...     total_bookings=10,
        ... )
        >>> record.average_rating
        4.5
        >>> round(record.artist_score, 2)
        4.97
    """

    average_rating: float
    review_count: int
    category_averages: Mapping[str, float] = field(default_factory=dict)
    artist_score: float = 0.0

    @classmethod
    def from_reviews(
        cls,
        reviews: Iterable[Mapping[str, Any]],
        experience_years: float = 0.0,
        completed_bookings: int = 0,
        total_bookings: int = 0,
    ) -> "TrackRecord":
        """
        Aggregate raw review records.

        Each review is a mapping with "overall_rating" (0-5) and an optional
        "category_ratings" mapping. A review without an overall rating counts
        as 0, which is how unrated reviews have always been scored.

        Raises:
            InvalidInputError: If a rating is outside 0-5
        """
        total_rating = 0.0
        review_count = 0
        category_totals = {category: 0.0 for category in REVIEW_CATEGORIES}

        for review in reviews:
            total_rating += _rating(review.get("overall_rating"), "overall_rating")
            review_count += 1
            categories = review.get("category_ratings") or {}
            for category in REVIEW_CATEGORIES:
                category_totals[category] += _rating(
                    categories.get(category), f"category_ratings.{category}"
                )

        if review_count:
            average_rating = total_rating / review_count
            category_averages = {
                category: total / review_count
                for category, total in category_totals.items()
            }
        else:
            average_rating = 0.0
            category_averages = {category: 0.0 for category in REVIEW_CATEGORIES}

        completion_rate = (
            completed_bookings / total_bookings if total_bookings > 0 else 0.0
        )
        experience_bonus = min(
            max(experience_years, 0.0) * EXPERIENCE_BONUS_PER_YEAR,
            MAX_EXPERIENCE_BONUS,
        )
        artist_score = min(
            average_rating
            + experience_bonus
            + completion_rate * COMPLETION_BONUS_WEIGHT,
            MAX_ARTIST_SCORE,
        )

        return cls(
            average_rating=average_rating,
            review_count=review_count,
            category_averages=category_averages,
            artist_score=artist_score,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "average_rating": round(self.average_rating, 1),
            "review_count": self.review_count,
            "category_averages": dict(self.category_averages),
            "artist_score": round(self.artist_score, 1),
        }
