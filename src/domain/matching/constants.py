"""
Matching Domain Constants

Band tables and neutral defaults used by FeatureExtractor.

Distance and price bands are policy, not incidental detail: they are
table-driven so behaviour is auditable and testable at exact boundaries.

Three banding profiles exist:
    - canonical: the default tables documented below
    - legacy_scoring: tables used by the stored per-artist matching score
    - legacy_ai_matching: tables used by the image-analysis matching flow

Band semantics:
    - Distance band (upper_km, score): first band whose inclusive upper bound
      is >= the distance applies. A band with upper_km=None is the catch-all.
    - Price band (min_ratio, score): first band whose inclusive lower bound
      is <= budget/price ratio applies. A band with min_ratio=None is the
      catch-all.
"""

import math
from typing import Dict, Final, Optional, Tuple


# ============================================================================
# BAND TYPES
# ============================================================================

DistanceBand = Tuple[Optional[float], float]  # (inclusive upper km, score)
PriceBand = Tuple[Optional[float], float]  # (inclusive lower ratio, score)


# ============================================================================
# CANONICAL PROFILE
# ============================================================================

# <=5km -> 1.0, <=10km -> 0.8, <=20km -> 0.7, <=50km -> 0.5,
# <=100km -> 0.3, <=200km -> 0.2, >200km -> 0.1
CANONICAL_DISTANCE_BANDS: Final[Tuple[DistanceBand, ...]] = (
    (5.0, 1.0),
    (10.0, 0.8),
    (20.0, 0.7),
    (50.0, 0.5),
    (100.0, 0.3),
    (200.0, 0.2),
    (None, 0.1),
)

# ratio >=1.5 -> 1.0, >=1.2 -> 0.9, >=1.0 -> 0.8, >=0.8 -> 0.6,
# >=0.6 -> 0.3, <0.6 -> 0.1
CANONICAL_PRICE_BANDS: Final[Tuple[PriceBand, ...]] = (
    (1.5, 1.0),
    (1.2, 0.9),
    (1.0, 0.8),
    (0.8, 0.6),
    (0.6, 0.3),
    (None, 0.1),
)


# ============================================================================
# LEGACY PROFILES
# ============================================================================

LEGACY_SCORING_DISTANCE_BANDS: Final[Tuple[DistanceBand, ...]] = (
    (5.0, 1.0),
    (10.0, 0.9),
    (20.0, 0.8),
    (50.0, 0.6),
    (100.0, 0.4),
    (200.0, 0.2),
    (None, 0.1),
)

LEGACY_SCORING_PRICE_BANDS: Final[Tuple[PriceBand, ...]] = CANONICAL_PRICE_BANDS

LEGACY_AI_MATCHING_DISTANCE_BANDS: Final[Tuple[DistanceBand, ...]] = (
    (10.0, 1.0),
    (25.0, 0.8),
    (50.0, 0.6),
    (100.0, 0.4),
    (None, 0.2),
)

LEGACY_AI_MATCHING_PRICE_BANDS: Final[Tuple[PriceBand, ...]] = (
    (1.2, 1.0),
    (1.0, 0.9),
    (0.8, 0.7),
    (0.6, 0.4),
    (None, 0.1),
)

BAND_PROFILES: Final[Dict[str, Tuple[Tuple[DistanceBand, ...], Tuple[PriceBand, ...]]]] = {
    "canonical": (CANONICAL_DISTANCE_BANDS, CANONICAL_PRICE_BANDS),
    "legacy_scoring": (LEGACY_SCORING_DISTANCE_BANDS, LEGACY_SCORING_PRICE_BANDS),
    "legacy_ai_matching": (
        LEGACY_AI_MATCHING_DISTANCE_BANDS,
        LEGACY_AI_MATCHING_PRICE_BANDS,
    ),
}

DEFAULT_BAND_PROFILE: Final[str] = "canonical"


# ============================================================================
# GEOMETRY
# ============================================================================

EARTH_RADIUS_KM: Final[float] = 6371.0

# Distances are resolved to the millimetre before banding so that a point
# constructed exactly 5.0 km away lands in the <=5km band.
DISTANCE_PRECISION_DIGITS: Final[int] = 6

# Maximum Euclidean distance between two RGB colours (black to white)
MAX_RGB_DISTANCE: Final[float] = 255.0 * math.sqrt(3.0)


# ============================================================================
# NEUTRAL DEFAULTS - used when an input is missing
# ============================================================================

NEUTRAL_SCORE: Final[float] = 0.5  # missing location / budget / palette / complexity
NEW_ARTIST_DESIGN_SCORE: Final[float] = 0.3  # candidate without any portfolio analysis
PREFERRED_STYLE_CREDIT: Final[float] = 0.5  # primary style listed in preferences

# Names used in FeatureSet.missing_signals
SIGNAL_DESIGN: Final[str] = "design"
SIGNAL_LOCATION: Final[str] = "location"
SIGNAL_PRICE: Final[str] = "price"


def resolve_band_profile(
    name: str,
) -> Tuple[Tuple[DistanceBand, ...], Tuple[PriceBand, ...]]:
    """
    Look up a banding profile by name.

    Raises:
        ValueError: If the profile name is unknown
    """
    try:
        return BAND_PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown band profile '{name}'. "
            f"Available: {', '.join(sorted(BAND_PROFILES))}"
        ) from None
