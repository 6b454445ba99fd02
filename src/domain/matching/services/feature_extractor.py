"""
FeatureExtractor Domain Service

Turns one (MatchRequest, ArtistCandidate) pair into a normalised FeatureSet.

Responsibility:
    - Design similarity (style 40% + palette 30% + complexity 30%)
    - Location score from the distance band table
    - Price score from the budget/price ratio band table
    - Experience score from the artist's track record
    - Record which components fell back to a neutral default

Business Rules:
    - Pure and total: never raises for validated entities
    - Missing inputs default to documented neutral values (0.5), never to 0
    - A candidate without portfolio analysis gets design 0.3 ("new artist")
    - Band tables come from MatchingConfig so profiles can be switched
"""

import logging
import math
from typing import Optional

from ..constants import (
    DISTANCE_PRECISION_DIGITS,
    NEUTRAL_SCORE,
    NEW_ARTIST_DESIGN_SCORE,
    PREFERRED_STYLE_CREDIT,
    SIGNAL_DESIGN,
    SIGNAL_LOCATION,
    SIGNAL_PRICE,
    DistanceBand,
    PriceBand,
)
from ..entities.artist_candidate import ArtistCandidate
from ..entities.match_request import MatchRequest
from ..matching_config import (
    MAX_RATING,
    REVIEW_VOLUME_CAP,
    TENURE_CAP_YEARS,
    MatchingConfig,
)
from ..value_objects.feature_set import FeatureSet

logger = logging.getLogger(__name__)


def score_distance(distance_km: float, bands: tuple[DistanceBand, ...]) -> float:
    """
    Score a distance with a band table.

    The distance is rounded to DISTANCE_PRECISION_DIGITS decimals first; the
    first band whose inclusive upper bound is >= the distance applies.

    Examples:
        >>> from src.domain.matching.constants import CANONICAL_DISTANCE_BANDS
        >>> score_distance(5.0, CANONICAL_DISTANCE_BANDS)
        1.0
        >>> score_distance(7.0, CANONICAL_DISTANCE_BANDS)
        0.8
        >>> score_distance(250.0, CANONICAL_DISTANCE_BANDS)
        0.1
    """
    distance = round(distance_km, DISTANCE_PRECISION_DIGITS)
    for upper_km, score in bands:
        if upper_km is None or distance <= upper_km:
            return score
    # Unreachable with a validated table (last band is the catch-all)
    return bands[-1][1]


def score_price_ratio(ratio: float, bands: tuple[PriceBand, ...]) -> float:
    """
    Score a budget/price ratio with a band table.

    The first band whose inclusive lower bound is <= the ratio applies.

    Examples:
        >>> from src.domain.matching.constants import CANONICAL_PRICE_BANDS
        >>> score_price_ratio(1.5, CANONICAL_PRICE_BANDS)
        1.0
        >>> score_price_ratio(1.14, CANONICAL_PRICE_BANDS)
        0.8
        >>> score_price_ratio(0.5, CANONICAL_PRICE_BANDS)
        0.1
    """
    for min_ratio, score in bands:
        if min_ratio is None or ratio >= min_ratio:
            return score
    return bands[-1][1]


class FeatureExtractor:
    """
    Deterministic feature extraction for one request/candidate pair.

    Attributes:
        config: MatchingConfig supplying weights and band tables
    """

    def __init__(self, config: Optional[MatchingConfig] = None) -> None:
        self.config = config or MatchingConfig.default()

    def extract(self, request: MatchRequest, candidate: ArtistCandidate) -> FeatureSet:
        """
        Compute the FeatureSet for one candidate.

        Args:
            request: Customer request
            candidate: Artist snapshot

        Returns:
            FeatureSet with every score in [0, 1]
        """
        missing: list[str] = []

        design = self.design_similarity(request, candidate)
        if design is None:
            design = NEW_ARTIST_DESIGN_SCORE
            missing.append(SIGNAL_DESIGN)

        distance_km = self.distance_km(request, candidate)
        if distance_km is None:
            location_score = NEUTRAL_SCORE
            missing.append(SIGNAL_LOCATION)
        else:
            location_score = score_distance(distance_km, self.config.distance_bands)

        price_ratio = self.price_ratio(request, candidate)
        if price_ratio is None:
            price_score = NEUTRAL_SCORE
            missing.append(SIGNAL_PRICE)
        else:
            price_score = score_price_ratio(price_ratio, self.config.price_bands)

        tenure = min(candidate.experience_years / TENURE_CAP_YEARS, 1.0)
        rating = min(candidate.average_rating / MAX_RATING, 1.0)
        review_volume = min(candidate.review_count / REVIEW_VOLUME_CAP, 1.0)
        completion = candidate.completion_rate

        weights = self.config.experience_weights
        experience = math.fsum(
            (
                weights.tenure * tenure,
                weights.rating * rating,
                weights.review_volume * review_volume,
                weights.completion * completion,
            )
        )

        features = FeatureSet(
            design_similarity=_clamp(design),
            location_score=location_score,
            price_score=price_score,
            experience_score=_clamp(experience),
            rating_score=rating,
            review_volume_score=review_volume,
            tenure_score=tenure,
            completion_rate=completion,
            style_versatility=candidate.style_versatility,
            distance_km=distance_km,
            price_ratio=price_ratio,
            missing_signals=tuple(missing),
        )
        logger.debug(
            f"Features for {candidate.candidate_id} (request {request.request_id}): "
            f"design={features.design_similarity:.3f}, "
            f"location={features.location_score:.2f}, "
            f"price={features.price_score:.2f}, "
            f"experience={features.experience_score:.3f}, missing={missing}"
        )
        return features

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def design_similarity(
        self, request: MatchRequest, candidate: ArtistCandidate
    ) -> Optional[float]:
        """
        Weighted style/palette/complexity similarity.

        Returns None when the candidate has no portfolio analysis at all.
        """
        if not candidate.has_portfolio:
            return None

        weights = self.config.design_weights
        return math.fsum(
            (
                weights.style * self.style_similarity(request, candidate),
                weights.palette * self.palette_similarity(request, candidate),
                weights.complexity * self.complexity_similarity(request, candidate),
            )
        )

    @staticmethod
    def style_similarity(request: MatchRequest, candidate: ArtistCandidate) -> float:
        """
        1.0 on exact style match, 0.5 when the artist's primary style is one
        the customer prefers, otherwise the artist's portfolio share of the
        requested style. Neutral (0.5) when the request names no style.
        """
        if request.style_category is None:
            return NEUTRAL_SCORE
        primary = candidate.primary_style
        if primary == request.style_category:
            return 1.0
        if primary is not None and primary in request.preferred_styles:
            return PREFERRED_STYLE_CREDIT
        return candidate.style_share(request.style_category)

    @staticmethod
    def palette_similarity(request: MatchRequest, candidate: ArtistCandidate) -> float:
        if request.palette is None or candidate.palette is None:
            return NEUTRAL_SCORE
        return request.palette.similarity(candidate.palette)

    @staticmethod
    def complexity_similarity(
        request: MatchRequest, candidate: ArtistCandidate
    ) -> float:
        if request.complexity is None or candidate.complexity is None:
            return NEUTRAL_SCORE
        return 1.0 if request.complexity == candidate.complexity else 0.0

    @staticmethod
    def distance_km(
        request: MatchRequest, candidate: ArtistCandidate
    ) -> Optional[float]:
        if request.location is None or candidate.location is None:
            return None
        return request.location.distance_km(candidate.location)

    @staticmethod
    def price_ratio(
        request: MatchRequest, candidate: ArtistCandidate
    ) -> Optional[float]:
        """budget.max_amount / representative price; None when either is unknown or price is 0."""
        if request.budget is None or candidate.pricing is None:
            return None
        price = candidate.pricing.representative_price()
        if price is None or price <= 0:
            return None
        return request.budget.representative_amount / price


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))
