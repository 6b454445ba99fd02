"""
Reference Scoring Strategies

Three independent evaluators with different perspectives on the same
FeatureSet. Their disagreement is what the consensus layer measures.

    - AnalyticalStrategy: the canonical weighted sum (design 40%,
      experience 30%, price 20%, location 10%)
    - AffectiveStrategy: favours visual fit and customer sentiment, ignores price
    - ExploratoryStrategy: rewards standout strengths and versatile portfolios

Confidence model:
    Each strategy starts from a base confidence and loses up to half of it
    in proportion to the weight of the inputs that were missing (neutral
    defaults): confidence = base * (1 - 0.5 * missing_weight).
"""

import logging
import math
from typing import Final, Mapping

import numpy as np

from ..constants import SIGNAL_DESIGN, SIGNAL_LOCATION, SIGNAL_PRICE
from ..value_objects.evaluator_result import EvaluatorResult
from ..value_objects.feature_set import FeatureSet
from .scoring_strategy import EvaluationContext

logger = logging.getLogger(__name__)

MISSING_PENALTY_FACTOR: Final[float] = 0.5


def missing_penalty(
    feature_set: FeatureSet, weights: Mapping[str, float]
) -> float:
    """
    Multiplier in [0.5, 1] for missing inputs.

    Only signals the strategy actually weighs count; weights are normalised
    by their total so the penalty stays in range for any weighting.
    """
    total = math.fsum(weights.values())
    if total <= 0:
        return 1.0
    missing_weight = math.fsum(
        weight for signal, weight in weights.items() if feature_set.is_missing(signal)
    )
    return 1.0 - MISSING_PENALTY_FACTOR * (missing_weight / total)


def _weighted_sum(terms: Mapping[str, tuple[float, float]]) -> float:
    return math.fsum(weight * value for weight, value in terms.values())


def _rationale(terms: Mapping[str, tuple[float, float]], score: float) -> str:
    parts = " + ".join(
        f"{name} {weight:.2f}*{value:.2f}"
        for name, (weight, value) in terms.items()
        if weight > 0
    )
    return f"{parts} = {score:.3f}"


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class AnalyticalStrategy:
    """
    Canonical multi-criteria score.

    score = 0.4*design + 0.3*experience + 0.2*price + 0.1*location
    confidence = 0.85 * (1 - 0.5 * weight of missing components)
    """

    name = "analytical"
    description = "Weighted design/experience/price/location score"

    WEIGHTS: Final[dict[str, float]] = {
        "design": 0.4,
        "experience": 0.3,
        "price": 0.2,
        "location": 0.1,
    }
    BASE_CONFIDENCE: Final[float] = 0.85

    async def evaluate(
        self, feature_set: FeatureSet, context: EvaluationContext
    ) -> EvaluatorResult:
        components = feature_set.components()
        terms = {name: (weight, components[name]) for name, weight in self.WEIGHTS.items()}
        score = _clamp(_weighted_sum(terms))
        confidence = self.BASE_CONFIDENCE * missing_penalty(feature_set, self.WEIGHTS)

        return EvaluatorResult(
            strategy_name=self.name,
            score=score,
            confidence=_clamp(confidence),
            rationale=_rationale(terms, score),
        )


class AffectiveStrategy:
    """
    Visual fit and customer sentiment.

    score = 0.35*design + 0.35*rating + 0.15*review_volume
            + 0.10*completion + 0.05*location
    confidence = 0.78 * (0.5 + 0.5*review_volume) * missing penalty

    Price has zero weight, so an unknown price never lowers its confidence.
    Abstains when the artist has neither reviews nor portfolio analysis.
    """

    name = "affective"
    description = "Visual fit and customer sentiment, price-agnostic"

    WEIGHTS: Final[dict[str, float]] = {
        "design": 0.35,
        "rating": 0.35,
        "review_volume": 0.15,
        "completion": 0.10,
        "location": 0.05,
        "price": 0.0,
    }
    BASE_CONFIDENCE: Final[float] = 0.78

    async def evaluate(
        self, feature_set: FeatureSet, context: EvaluationContext
    ) -> EvaluatorResult:
        values = {
            "design": feature_set.design_similarity,
            "rating": feature_set.rating_score,
            "review_volume": feature_set.review_volume_score,
            "completion": feature_set.completion_rate,
            "location": feature_set.location_score,
            "price": feature_set.price_score,
        }
        terms = {name: (weight, values[name]) for name, weight in self.WEIGHTS.items()}
        score = _clamp(_weighted_sum(terms))

        no_reviews = feature_set.review_volume_score == 0.0
        if no_reviews and feature_set.is_missing(SIGNAL_DESIGN):
            logger.debug(
                f"Affective strategy abstains for {context.candidate_id}: "
                "no reviews and no portfolio analysis"
            )
            return EvaluatorResult(
                strategy_name=self.name,
                score=score,
                confidence=0.0,
                rationale="abstained: no reviews and no portfolio analysis",
            )

        evidence = 0.5 + 0.5 * feature_set.review_volume_score
        confidence = (
            self.BASE_CONFIDENCE
            * evidence
            * missing_penalty(feature_set, self.WEIGHTS)
        )

        return EvaluatorResult(
            strategy_name=self.name,
            score=score,
            confidence=_clamp(confidence),
            rationale=_rationale(terms, score),
        )


class ExploratoryStrategy:
    """
    Rewards standout strengths and versatility.

    score = 0.45*peak + 0.25*mean + 0.15*spread + 0.15*style_versatility
    where peak/mean are max/mean of the four components and
    spread = min(1, 2 * population std).
    confidence = 0.65 * missing penalty (components weighted equally)

    Abstains when design, location and price are all unknown.
    """

    name = "exploratory"
    description = "Peak strengths, spread and portfolio versatility"

    WEIGHT_PEAK: Final[float] = 0.45
    WEIGHT_MEAN: Final[float] = 0.25
    WEIGHT_SPREAD: Final[float] = 0.15
    WEIGHT_VERSATILITY: Final[float] = 0.15
    BASE_CONFIDENCE: Final[float] = 0.65

    async def evaluate(
        self, feature_set: FeatureSet, context: EvaluationContext
    ) -> EvaluatorResult:
        components = feature_set.components()
        values = np.array(list(components.values()), dtype=float)

        peak = float(values.max())
        mean = float(values.mean())
        spread = min(1.0, 2.0 * float(values.std()))

        terms = {
            "peak": (self.WEIGHT_PEAK, peak),
            "mean": (self.WEIGHT_MEAN, mean),
            "spread": (self.WEIGHT_SPREAD, spread),
            "versatility": (self.WEIGHT_VERSATILITY, feature_set.style_versatility),
        }
        score = _clamp(_weighted_sum(terms))

        missable = (SIGNAL_DESIGN, SIGNAL_LOCATION, SIGNAL_PRICE)
        if all(feature_set.is_missing(signal) for signal in missable):
            return EvaluatorResult(
                strategy_name=self.name,
                score=score,
                confidence=0.0,
                rationale="abstained: design, location and price all unknown",
            )

        equal_weights = {name: 1.0 for name in components}
        confidence = self.BASE_CONFIDENCE * missing_penalty(feature_set, equal_weights)

        return EvaluatorResult(
            strategy_name=self.name,
            score=score,
            confidence=_clamp(confidence),
            rationale=_rationale(terms, score),
        )
