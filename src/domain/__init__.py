"""
Domain Layer - Core Business Logic

Heart of the matching engine. Contains all business rules, entities,
value objects, and domain services. Framework-independent and highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center, no external dependencies
    - Domain-Driven Design: Entities, Value Objects, Services, Repositories
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - matching: Artist matching and consensus ranking
    - shared: Cross-subdomain concepts (exception hierarchy)

Usage:
    >>> from src.domain import RankingPipeline, MatchRequest, DomainException
    >>> from src.domain.matching.services import FeatureExtractor
"""

# Matching Subdomain
from .matching import (
    ArtistCandidate,
    MatchingConfig,
    MatchRequest,
    RankingPipeline,
    RankingResult,
)

# Shared Domain
from .shared import DomainException

__all__ = [
    # Matching Subdomain
    "MatchRequest",
    "ArtistCandidate",
    "MatchingConfig",
    "RankingPipeline",
    "RankingResult",
    # Shared Domain
    "DomainException",
]
