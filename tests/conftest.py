"""
Pytest Configuration and Shared Fixtures

Fixtures shared by the unit and e2e suites.

Fixtures:
    - tokyo_station: Customer location used by most scenarios
    - sample_request: Japanese-style request with a 40,000 JPY budget
    - artist_a / artist_b: Two well-formed candidates (A close and on budget)
    - candidate_records: Same candidates as JSON-like records

Usage:
    def test_something(sample_request, artist_a):
        features = FeatureExtractor().extract(sample_request, artist_a)
"""

import logging

import pytest

from src.domain.matching import (
    ArtistCandidate,
    BudgetRange,
    GeoPoint,
    MatchRequest,
    PriceSchedule,
)

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


TOKYO_STATION = (35.681236, 139.767125)


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def tokyo_station() -> GeoPoint:
    return GeoPoint.create(*TOKYO_STATION)


@pytest.fixture
def sample_request(tokyo_station) -> MatchRequest:
    """Japanese-style, medium complexity, budget up to 40,000 JPY."""
    return MatchRequest(
        request_id="req-001",
        style_category="japanese",
        palette=None,
        complexity="medium",
        location=tokyo_station,
        budget=BudgetRange(max_amount=40000, min_amount=20000),
        preferred_styles=("irezumi",),
    )


@pytest.fixture
def artist_a(tokyo_station) -> ArtistCandidate:
    """Japanese specialist 3 km away, average price 35,000 JPY."""
    return ArtistCandidate(
        candidate_id="artist-a",
        display_name="Artist A",
        style_distribution={"japanese": 8, "blackwork": 2},
        complexity="medium",
        location=tokyo_station.offset_north(3.0),
        pricing=PriceSchedule(average_price=35000),
        experience_years=8,
        average_rating=4.8,
        review_count=25,
        completed_bookings=48,
        total_bookings=50,
    )


@pytest.fixture
def artist_b(tokyo_station) -> ArtistCandidate:
    """Realism artist 40 km away, average price 60,000 JPY."""
    return ArtistCandidate(
        candidate_id="artist-b",
        display_name="Artist B",
        style_distribution={"realism": 9, "japanese": 1},
        complexity="complex",
        location=tokyo_station.offset_north(40.0),
        pricing=PriceSchedule(average_price=60000),
        experience_years=3,
        average_rating=4.2,
        review_count=6,
        completed_bookings=10,
        total_bookings=12,
    )


@pytest.fixture
def candidate_records(artist_a, artist_b) -> list[dict]:
    return [artist_a.to_dict(), artist_b.to_dict()]


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_collection_modifyitems(config, items):
    """Automatically add the 'slow' marker to e2e tests."""
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(pytest.mark.slow)
