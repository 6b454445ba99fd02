"""
Tests for RankCandidatesCommand and its option models.

Covers:
- Business rules (request source, blank request_id, timeouts)
- Error collection
- Celery serialization round trip
- CandidateCriteria -> domain conversion
"""

import pytest
from pydantic import ValidationError

from src.application.commands import (
    CandidateCriteria,
    RankCandidatesCommand,
    RankingOptions,
)
from src.domain.shared.exceptions import InvalidInputError, InvalidRankCommandError


# ============================================================================
# BUSINESS RULES
# ============================================================================


def test_inline_request_is_valid():
    command = RankCandidatesCommand(request={"request_id": "req-1"}, candidates=[])

    command.validate_business_rules()


def test_request_id_only_is_valid():
    RankCandidatesCommand(request_id="req-1").validate_business_rules()


def test_missing_request_source_rejected():
    with pytest.raises(InvalidRankCommandError) as exc_info:
        RankCandidatesCommand(candidates=[]).validate_business_rules()

    assert exc_info.value.errors == ["either request or request_id is required"]


def test_errors_are_collected():
    command = RankCandidatesCommand(
        request={"request_id": "req-1"},
        request_id="  ",
        options=RankingOptions(strategy_timeouts={"analytical": 0}),
    )

    with pytest.raises(InvalidRankCommandError) as exc_info:
        command.validate_business_rules()

    assert len(exc_info.value.errors) == 3
    assert "mutually exclusive" in str(exc_info.value)


def test_invalid_rank_command_error_is_invalid_input():
    assert issubclass(InvalidRankCommandError, InvalidInputError)


# ============================================================================
# OPTION VALIDATION
# ============================================================================


@pytest.mark.parametrize(
    "options",
    [{"top_k": 0}, {"min_score": 1.1}, {"min_score": -0.1}, {"per_strategy_timeout_s": 0}],
)
def test_ranking_options_reject_out_of_range(options):
    with pytest.raises(ValidationError):
        RankingOptions(**options)


# ============================================================================
# SERIALIZATION
# ============================================================================


def test_celery_round_trip():
    command = RankCandidatesCommand(
        request={"request_id": "req-1", "style_category": "japanese"},
        candidates=[{"id": "artist-1"}],
        criteria=CandidateCriteria(styles=["japanese"], limit=5),
        options=RankingOptions(top_k=3, strategy_timeouts={"affective": 0.5}),
    )

    restored = RankCandidatesCommand.from_celery_dict(command.to_celery_dict())

    assert restored == command


def test_from_celery_dict_rejects_bad_shape():
    with pytest.raises(ValidationError):
        RankCandidatesCommand.from_celery_dict({"options": {"top_k": "many"}})


# ============================================================================
# CRITERIA CONVERSION
# ============================================================================


def test_criteria_to_domain():
    criteria = CandidateCriteria(
        near={"latitude": 35.681236, "longitude": 139.767125},
        radius_km=25,
        styles=["Fine Line"],
        limit=10,
    )

    domain = criteria.to_domain()

    assert domain.near.latitude == 35.681236
    assert domain.radius_km == 25.0
    assert domain.styles == ("fine_line",)
    assert domain.limit == 10


def test_criteria_radius_without_centre_rejected():
    with pytest.raises(InvalidInputError):
        CandidateCriteria(radius_km=10).to_domain()
