"""
Matching Value Objects.

Value Objects are immutable objects that represent domain concepts by their value,
not by their identity.

Available Value Objects:
    - GeoPoint: Latitude/longitude with haversine distance
    - RGBColor: Dominant colour summary
    - BudgetRange, PriceSchedule: Customer budget and artist pricing
    - FeatureSet: Normalised signals for one (request, candidate) pair
    - EvaluatorResult: One strategy's score and confidence
    - ConsensusDecision: Confidence-weighted merge of evaluator results
    - RankedMatch, RankingResult, MatchExplanation: Ranking output
    - TrackRecord: Review and booking summary for an artist
"""

from src.domain.matching.value_objects.geo_point import GeoPoint
from src.domain.matching.value_objects.rgb_color import RGBColor
from src.domain.matching.value_objects.pricing import BudgetRange, PriceSchedule
from src.domain.matching.value_objects.feature_set import FeatureSet
from src.domain.matching.value_objects.evaluator_result import EvaluatorResult
from src.domain.matching.value_objects.consensus_decision import ConsensusDecision
from src.domain.matching.value_objects.ranked_match import (
    MatchExplanation,
    RankedMatch,
    RankingResult,
    StrategyBreakdown,
)
from src.domain.matching.value_objects.track_record import TrackRecord

__all__ = [
    "GeoPoint",
    "RGBColor",
    "BudgetRange",
    "PriceSchedule",
    "FeatureSet",
    "EvaluatorResult",
    "ConsensusDecision",
    "RankedMatch",
    "RankingResult",
    "MatchExplanation",
    "StrategyBreakdown",
    "TrackRecord",
]
