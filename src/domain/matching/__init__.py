"""
Matching Subdomain Module

Core business logic for matching customers with tattoo artists and ranking
the candidates by multi-evaluator consensus.

Exports:
    Entities:
        - MatchRequest, ArtistCandidate, Complexity

    Value Objects:
        - GeoPoint, RGBColor, BudgetRange, PriceSchedule, TrackRecord
        - FeatureSet, EvaluatorResult, ConsensusDecision
        - RankedMatch, RankingResult, MatchExplanation

    Services:
        - FeatureExtractor, EvaluatorRunner, ConsensusAggregator, RankingPipeline
        - ScoringStrategy (Protocol), StrategyRegistry, default_registry

    Repository Interfaces:
        - CandidatePoolProtocol, CandidatePoolCriteria
        - RequestContextProviderProtocol

Usage:
    >>> from src.domain.matching import RankingPipeline, MatchRequest, ArtistCandidate
    >>> pipeline = RankingPipeline()
"""

# Value Objects
from .value_objects import (
    BudgetRange,
    ConsensusDecision,
    EvaluatorResult,
    FeatureSet,
    GeoPoint,
    MatchExplanation,
    PriceSchedule,
    RankedMatch,
    RankingResult,
    RGBColor,
    TrackRecord,
)

# Entities
from .entities import ArtistCandidate, Complexity, MatchRequest

# Configuration
from .matching_config import MatchingConfig

# Services
from .services import (
    ConsensusAggregator,
    EvaluationContext,
    EvaluatorRunner,
    FeatureExtractor,
    RankingPipeline,
    ScoringStrategy,
    StrategyRegistry,
    default_registry,
)

# Repository Interfaces
from .repositories import (
    CandidatePoolCriteria,
    CandidatePoolProtocol,
    RequestContextProviderProtocol,
)

from . import constants

__all__ = [
    # Entities
    "MatchRequest",
    "ArtistCandidate",
    "Complexity",
    # Value Objects
    "GeoPoint",
    "RGBColor",
    "BudgetRange",
    "PriceSchedule",
    "TrackRecord",
    "FeatureSet",
    "EvaluatorResult",
    "ConsensusDecision",
    "RankedMatch",
    "RankingResult",
    "MatchExplanation",
    # Configuration
    "MatchingConfig",
    # Services
    "FeatureExtractor",
    "ScoringStrategy",
    "EvaluationContext",
    "StrategyRegistry",
    "default_registry",
    "EvaluatorRunner",
    "ConsensusAggregator",
    "RankingPipeline",
    # Repository Interfaces
    "CandidatePoolCriteria",
    "CandidatePoolProtocol",
    "RequestContextProviderProtocol",
    "constants",
]
