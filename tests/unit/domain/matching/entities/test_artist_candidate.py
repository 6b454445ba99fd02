"""
Tests for ArtistCandidate entity.
Covers: validation, style distribution normalisation, derived properties,
from_dict (including review aggregation), to_dict.
"""

import pytest

from src.domain.matching import ArtistCandidate, PriceSchedule
from src.domain.shared.exceptions import InvalidCandidateError


# ============================================================================
# DERIVED PROPERTY TESTS
# ============================================================================


def test_style_distribution_is_normalised_and_merged():
    candidate = ArtistCandidate(
        candidate_id="c1", style_distribution={"Japanese": 3, "japanese ": 1, "Fine-Line": 4}
    )

    assert candidate.style_distribution == {"japanese": 4.0, "fine_line": 4.0}


def test_primary_style_ties_go_to_alphabetical_first():
    candidate = ArtistCandidate(
        candidate_id="c1", style_distribution={"realism": 2, "blackwork": 2}
    )

    assert candidate.primary_style == "blackwork"


def test_style_share():
    candidate = ArtistCandidate(
        candidate_id="c1", style_distribution={"japanese": 6, "blackwork": 2}
    )

    assert candidate.style_share("Japanese") == 0.75
    assert candidate.style_share("realism") == 0.0
    assert candidate.style_share(None) == 0.0


def test_style_versatility():
    single = ArtistCandidate(candidate_id="a", style_distribution={"japanese": 5})
    even = ArtistCandidate(candidate_id="b", style_distribution={"japanese": 5, "realism": 5})

    assert single.style_versatility == 0.0
    assert even.style_versatility == pytest.approx(1.0)


def test_completion_rate_without_bookings_is_zero():
    assert ArtistCandidate(candidate_id="c1").completion_rate == 0.0


def test_has_portfolio():
    assert not ArtistCandidate(candidate_id="c1").has_portfolio
    assert ArtistCandidate(candidate_id="c2", complexity="simple").has_portfolio


# ============================================================================
# VALIDATION TESTS
# ============================================================================


@pytest.mark.parametrize(
    "overrides, field_name",
    [
        ({"average_rating": 5.5}, "average_rating"),
        ({"experience_years": -1}, "experience_years"),
        ({"review_count": -3}, "review_count"),
        ({"review_count": 2.5}, "review_count"),
        ({"completed_bookings": 5, "total_bookings": 4}, "completed_bookings"),
        ({"style_distribution": {"japanese": -1}}, "style_distribution.japanese"),
        ({"complexity": "baroque"}, "complexity"),
    ],
)
def test_invalid_fields_rejected(overrides, field_name):
    with pytest.raises(InvalidCandidateError) as exc_info:
        ArtistCandidate(candidate_id="bad", **overrides)

    assert exc_info.value.field_name == field_name
    assert exc_info.value.candidate_id == "bad"


def test_empty_candidate_id_rejected():
    with pytest.raises(InvalidCandidateError, match="candidate_id cannot be empty"):
        ArtistCandidate(candidate_id=" ")


# ============================================================================
# SERIALISATION TESTS
# ============================================================================


def test_from_dict_accepts_id_alias_and_nested_values():
    candidate = ArtistCandidate.from_dict(
        {
            "id": "artist-9",
            "display_name": "Nine",
            "style_distribution": {"japanese": 2},
            "palette": [10, 20, 30],
            "location": {"latitude": 35.0, "longitude": 139.0},
            "pricing": {"base_price": 20000},
            "is_active": False,
        }
    )

    assert candidate.candidate_id == "artist-9"
    assert candidate.pricing == PriceSchedule(base_price=20000)
    assert not candidate.is_active


def test_from_dict_aggregates_reviews_when_rating_missing():
    candidate = ArtistCandidate.from_dict(
        {
            "candidate_id": "artist-r",
            "reviews": [{"overall_rating": 5}, {"overall_rating": 3}],
        }
    )

    assert candidate.average_rating == 4.0
    assert candidate.review_count == 2


def test_from_dict_wraps_nested_errors_with_candidate_id():
    with pytest.raises(InvalidCandidateError) as exc_info:
        ArtistCandidate.from_dict(
            {"candidate_id": "artist-x", "location": {"latitude": 95, "longitude": 0}}
        )

    assert exc_info.value.candidate_id == "artist-x"
    assert exc_info.value.field_name == "latitude"


def test_from_dict_rejects_non_mapping():
    with pytest.raises(InvalidCandidateError):
        ArtistCandidate.from_dict("artist-1")


def test_to_dict_round_trip(artist_a):
    assert ArtistCandidate.from_dict(artist_a.to_dict()) == artist_a
