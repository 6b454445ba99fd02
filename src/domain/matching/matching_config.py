"""
Matching Configuration

Configuration constants for the artist matching and consensus ranking engine.
Defines feature weighting, consensus thresholds and pipeline defaults.

Business Context:
    Every candidate is scored on four components (design, experience, price,
    location). Design similarity and experience are themselves weighted blends:
    - Design: style (40%) + palette (30%) + complexity (30%)
    - Experience: tenure (30%) + rating (40%) + review volume (20%) + completion (10%)

    Independent strategies then score the same FeatureSet and a consensus
    layer merges them, ignoring any strategy that is not confident enough.

Design Principles:
    - Configuration as code (not database)
    - Type-safe constants
    - Overridable from environment (MATCHING_* variables) for deployments
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Final, Mapping

from .constants import (
    CANONICAL_DISTANCE_BANDS,
    CANONICAL_PRICE_BANDS,
    DEFAULT_BAND_PROFILE,
    DistanceBand,
    PriceBand,
    resolve_band_profile,
)


# ============================================================================
# DESIGN SIMILARITY WEIGHTS
# ============================================================================

WEIGHT_STYLE: Final[float] = 0.4
WEIGHT_PALETTE: Final[float] = 0.3
WEIGHT_COMPLEXITY: Final[float] = 0.3

DESIGN_WEIGHTS_SUM: Final[float] = WEIGHT_STYLE + WEIGHT_PALETTE + WEIGHT_COMPLEXITY


# ============================================================================
# EXPERIENCE WEIGHTS
# ============================================================================

WEIGHT_TENURE: Final[float] = 0.3  # min(years / 10, 1)
WEIGHT_RATING: Final[float] = 0.4  # rating / 5
WEIGHT_REVIEW_VOLUME: Final[float] = 0.2  # min(reviews / 20, 1)
WEIGHT_COMPLETION: Final[float] = 0.1  # completed / total bookings

EXPERIENCE_WEIGHTS_SUM: Final[float] = (
    WEIGHT_TENURE + WEIGHT_RATING + WEIGHT_REVIEW_VOLUME + WEIGHT_COMPLETION
)

TENURE_CAP_YEARS: Final[float] = 10.0
REVIEW_VOLUME_CAP: Final[int] = 20
MAX_RATING: Final[float] = 5.0


# ============================================================================
# CONSENSUS
# ============================================================================

# Results with confidence <= floor are ignored
CONFIDENCE_FLOOR: Final[float] = 0.3

# Score spread (max - min) above which strategies are said to disagree
CONFLICT_THRESHOLD: Final[float] = 0.35

# Minimum number of confident results required for a decision
MIN_QUORUM: Final[int] = 1


# ============================================================================
# PIPELINE DEFAULTS
# ============================================================================

DEFAULT_STRATEGY_TIMEOUT_S: Final[float] = 5.0
DEFAULT_MIN_SCORE: Final[float] = 0.3
DEFAULT_TOP_K: Final[int] = 10
MAX_CONCURRENT_CANDIDATES: Final[int] = 32


# ============================================================================
# VALIDATION AND HELPER DATACLASSES
# ============================================================================


@dataclass(frozen=True)
class DesignWeights:
    """
    Weights of the three design similarity sub-scores.

    Usage:
        weights = DesignWeights.default()
        design = weights.style * style + weights.palette * palette + ...
    """

    style: float = WEIGHT_STYLE
    palette: float = WEIGHT_PALETTE
    complexity: float = WEIGHT_COMPLEXITY

    def __post_init__(self) -> None:
        """Validate that weights sum to approximately 1.0"""
        total = self.style + self.palette + self.complexity
        if not 0.99 <= total <= 1.01:
            raise ValueError(
                f"Design weights must sum to 1.0, got {total:.4f}. "
                f"Weights: style={self.style}, palette={self.palette}, "
                f"complexity={self.complexity}"
            )

    @classmethod
    def default(cls) -> "DesignWeights":
        return cls()

    def to_dict(self) -> dict[str, float]:
        return {
            "style": self.style,
            "palette": self.palette,
            "complexity": self.complexity,
        }


@dataclass(frozen=True)
class ExperienceWeights:
    """
    Weights of the track-record signals blended into experience_score.

    Tenure and review volume saturate (10 years, 20 reviews) so that a very
    long-standing artist cannot dominate on volume alone.
    """

    tenure: float = WEIGHT_TENURE
    rating: float = WEIGHT_RATING
    review_volume: float = WEIGHT_REVIEW_VOLUME
    completion: float = WEIGHT_COMPLETION

    def __post_init__(self) -> None:
        """Validate that weights sum to approximately 1.0"""
        total = self.tenure + self.rating + self.review_volume + self.completion
        if not 0.99 <= total <= 1.01:
            raise ValueError(
                f"Experience weights must sum to 1.0, got {total:.4f}. "
                f"Weights: tenure={self.tenure}, rating={self.rating}, "
                f"review_volume={self.review_volume}, completion={self.completion}"
            )

    @classmethod
    def default(cls) -> "ExperienceWeights":
        return cls()

    def to_dict(self) -> dict[str, float]:
        return {
            "tenure": self.tenure,
            "rating": self.rating,
            "review_volume": self.review_volume,
            "completion": self.completion,
        }


@dataclass(frozen=True)
class MatchingConfig:
    """
    Complete configuration for the ranking engine.

    Encapsulates all configuration values in a single immutable object and is
    injected into FeatureExtractor, EvaluatorRunner, ConsensusAggregator and
    RankingPipeline.

    Attributes:
        design_weights: Style/palette/complexity blend (0.4/0.3/0.3)
        experience_weights: Tenure/rating/reviews/completion blend (0.3/0.4/0.2/0.1)
        band_profile: Name of the distance/price band profile ("canonical")
        distance_bands: (inclusive upper km, score) table
        price_bands: (inclusive lower budget/price ratio, score) table
        confidence_floor: Results with confidence <= floor are ignored (0.3)
        conflict_threshold: Spread above which conflict is flagged (0.35)
        min_quorum: Confident results required per candidate (1)
        default_strategy_timeout_s: Timeout per strategy when not overridden (5.0)
        strategy_timeouts: Per-strategy timeout overrides keyed by name
        default_min_score: Final score a match must exceed (0.3)
        default_top_k: Maximum number of matches returned (10)
        max_concurrent_candidates: Candidates evaluated at once (32)

    Usage:
        config = MatchingConfig.default()
        pipeline = RankingPipeline(registry, config=config)
    """

    design_weights: DesignWeights = DesignWeights.default()
    experience_weights: ExperienceWeights = ExperienceWeights.default()
    band_profile: str = DEFAULT_BAND_PROFILE
    distance_bands: tuple[DistanceBand, ...] = CANONICAL_DISTANCE_BANDS
    price_bands: tuple[PriceBand, ...] = CANONICAL_PRICE_BANDS
    confidence_floor: float = CONFIDENCE_FLOOR
    conflict_threshold: float = CONFLICT_THRESHOLD
    min_quorum: int = MIN_QUORUM
    default_strategy_timeout_s: float = DEFAULT_STRATEGY_TIMEOUT_S
    strategy_timeouts: Mapping[str, float] = field(default_factory=dict)
    default_min_score: float = DEFAULT_MIN_SCORE
    default_top_k: int = DEFAULT_TOP_K
    max_concurrent_candidates: int = MAX_CONCURRENT_CANDIDATES

    def __post_init__(self) -> None:
        """Validate thresholds and band tables"""
        if not 0.0 <= self.confidence_floor < 1.0:
            raise ValueError(
                f"confidence_floor must be in [0, 1), got {self.confidence_floor}"
            )
        if not 0.0 <= self.conflict_threshold <= 1.0:
            raise ValueError(
                f"conflict_threshold must be in [0, 1], got {self.conflict_threshold}"
            )
        if self.min_quorum < 1:
            raise ValueError(f"min_quorum must be >= 1, got {self.min_quorum}")
        if self.default_strategy_timeout_s <= 0:
            raise ValueError(
                "default_strategy_timeout_s must be positive, "
                f"got {self.default_strategy_timeout_s}"
            )
        for name, timeout in self.strategy_timeouts.items():
            if timeout <= 0:
                raise ValueError(
                    f"Timeout for strategy '{name}' must be positive, got {timeout}"
                )
        if not 0.0 <= self.default_min_score <= 1.0:
            raise ValueError(
                f"default_min_score must be in [0, 1], got {self.default_min_score}"
            )
        if self.default_top_k < 1:
            raise ValueError(f"default_top_k must be >= 1, got {self.default_top_k}")
        if self.max_concurrent_candidates < 1:
            raise ValueError(
                "max_concurrent_candidates must be >= 1, "
                f"got {self.max_concurrent_candidates}"
            )
        _validate_bands("distance_bands", self.distance_bands, ascending=True)
        _validate_bands("price_bands", self.price_bands, ascending=False)

    @classmethod
    def default(cls) -> "MatchingConfig":
        """
        Get default configuration from module constants.

        Examples:
            >>> config = MatchingConfig.default()
            >>> config.confidence_floor
            0.3
            >>> config.band_profile
            'canonical'
        """
        return cls()

    @classmethod
    def for_testing(cls, **overrides: Any) -> "MatchingConfig":
        """
        Create configuration with custom overrides for testing.

        Args:
            **overrides: Keyword arguments to override default values

        Raises:
            ValueError: If an override fails validation

        Examples:
            >>> config = MatchingConfig.for_testing(default_strategy_timeout_s=0.05)
            >>> config.default_strategy_timeout_s
            0.05
        """
        return replace(cls.default(), **overrides)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MatchingConfig":
        """
        Build configuration from MATCHING_* environment variables.

        Unset variables keep their defaults. Recognised variables:
            MATCHING_BAND_PROFILE, MATCHING_CONFIDENCE_FLOOR,
            MATCHING_CONFLICT_THRESHOLD, MATCHING_MIN_QUORUM,
            MATCHING_STRATEGY_TIMEOUT_S, MATCHING_MIN_SCORE, MATCHING_TOP_K,
            MATCHING_MAX_CONCURRENT_CANDIDATES

        Per-strategy timeouts use MATCHING_TIMEOUT_<NAME> (e.g.
        MATCHING_TIMEOUT_ANALYTICAL=2.5).

        Raises:
            ValueError: If a variable cannot be parsed or fails validation
        """
        env = os.environ if environ is None else environ
        config = cls.default()

        profile = env.get("MATCHING_BAND_PROFILE")
        if profile:
            config = config.with_band_profile(profile)

        float_fields = {
            "MATCHING_CONFIDENCE_FLOOR": "confidence_floor",
            "MATCHING_CONFLICT_THRESHOLD": "conflict_threshold",
            "MATCHING_STRATEGY_TIMEOUT_S": "default_strategy_timeout_s",
            "MATCHING_MIN_SCORE": "default_min_score",
        }
        int_fields = {
            "MATCHING_MIN_QUORUM": "min_quorum",
            "MATCHING_TOP_K": "default_top_k",
            "MATCHING_MAX_CONCURRENT_CANDIDATES": "max_concurrent_candidates",
        }

        overrides: dict[str, Any] = {}
        for variable, attribute in float_fields.items():
            if env.get(variable):
                overrides[attribute] = float(env[variable])
        for variable, attribute in int_fields.items():
            if env.get(variable):
                overrides[attribute] = int(env[variable])

        prefix = "MATCHING_TIMEOUT_"
        timeouts = {
            key[len(prefix):].lower(): float(value)
            for key, value in env.items()
            if key.startswith(prefix) and value
        }
        if timeouts:
            overrides["strategy_timeouts"] = timeouts

        return replace(config, **overrides)

    def with_band_profile(self, name: str) -> "MatchingConfig":
        """
        Return a copy using the named distance/price band profile.

        Raises:
            ValueError: If the profile name is unknown
        """
        distance_bands, price_bands = resolve_band_profile(name)
        return replace(
            self,
            band_profile=name,
            distance_bands=distance_bands,
            price_bands=price_bands,
        )

    def timeout_for(self, strategy_name: str, default: float | None = None) -> float:
        """Timeout for one strategy: override, then call default, then config default."""
        if strategy_name in self.strategy_timeouts:
            return self.strategy_timeouts[strategy_name]
        if default is not None:
            return default
        return self.default_strategy_timeout_s

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization/logging"""
        return {
            "design_weights": self.design_weights.to_dict(),
            "experience_weights": self.experience_weights.to_dict(),
            "band_profile": self.band_profile,
            "distance_bands": [list(band) for band in self.distance_bands],
            "price_bands": [list(band) for band in self.price_bands],
            "confidence_floor": self.confidence_floor,
            "conflict_threshold": self.conflict_threshold,
            "min_quorum": self.min_quorum,
            "default_strategy_timeout_s": self.default_strategy_timeout_s,
            "strategy_timeouts": dict(self.strategy_timeouts),
            "default_min_score": self.default_min_score,
            "default_top_k": self.default_top_k,
            "max_concurrent_candidates": self.max_concurrent_candidates,
        }


def _validate_bands(
    name: str, bands: tuple[tuple[float | None, float], ...], ascending: bool
) -> None:
    """Band tables must be ordered, end in a catch-all and score within [0, 1]."""
    if not bands or bands[-1][0] is not None:
        raise ValueError(f"{name} must end with a catch-all band (bound None)")
    bounds = [bound for bound, _ in bands[:-1]]
    if any(bound is None for bound in bounds):
        raise ValueError(f"{name} may only have one catch-all band, as the last entry")
    expected = sorted(bounds, reverse=not ascending)
    if bounds != expected:
        raise ValueError(f"{name} bounds are not ordered: {bounds}")
    for _, score in bands:
        if not 0.0 <= score <= 1.0:
            raise ValueError(f"{name} score must be in [0, 1], got {score}")


# ============================================================================
# MODULE-LEVEL VALIDATION
# ============================================================================

assert (
    0.99 <= DESIGN_WEIGHTS_SUM <= 1.01
), f"Design weights must sum to 1.0, got {DESIGN_WEIGHTS_SUM}"

assert (
    0.99 <= EXPERIENCE_WEIGHTS_SUM <= 1.01
), f"Experience weights must sum to 1.0, got {EXPERIENCE_WEIGHTS_SUM}"

assert (
    0.0 <= CONFIDENCE_FLOOR < 1.0
), f"Confidence floor must be in [0, 1), got {CONFIDENCE_FLOOR}"
