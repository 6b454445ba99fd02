"""
Matching Domain Services Module

Business operations that coordinate entities and value objects.

This module exports:
    - FeatureExtractor: (request, candidate) -> FeatureSet
    - ScoringStrategy, EvaluationContext: Evaluator contract (Protocol)
    - AnalyticalStrategy, AffectiveStrategy, ExploratoryStrategy: Reference evaluators
    - StrategyRegistry, default_registry: Registered evaluators
    - EvaluatorRunner: Concurrent per-strategy evaluation with timeouts
    - ConsensusAggregator: Confidence-weighted consensus
    - RankingPipeline: End-to-end ranking
"""

from .feature_extractor import FeatureExtractor, score_distance, score_price_ratio
from .scoring_strategy import EvaluationContext, ScoringStrategy
from .strategies import AffectiveStrategy, AnalyticalStrategy, ExploratoryStrategy
from .strategy_registry import StrategyRegistry, default_registry
from .evaluator_runner import EvaluatorRunner
from .consensus_aggregator import ConsensusAggregator
from .ranking_pipeline import RankingPipeline

__all__ = [
    "FeatureExtractor",
    "score_distance",
    "score_price_ratio",
    "ScoringStrategy",
    "EvaluationContext",
    "AnalyticalStrategy",
    "AffectiveStrategy",
    "ExploratoryStrategy",
    "StrategyRegistry",
    "default_registry",
    "EvaluatorRunner",
    "ConsensusAggregator",
    "RankingPipeline",
]
