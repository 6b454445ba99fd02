"""
Tests for CandidatePoolCriteria validation.
"""

import pytest

from src.domain.matching import CandidatePoolCriteria, GeoPoint
from src.domain.shared.exceptions import InvalidInputError


def test_defaults_select_active_candidates_without_pagination():
    criteria = CandidatePoolCriteria()

    assert criteria.active_only is True
    assert criteria.limit is None
    assert criteria.offset == 0


def test_styles_are_normalised():
    criteria = CandidatePoolCriteria(styles=("Fine Line", "", "JAPANESE"))

    assert criteria.styles == ("fine_line", "japanese")


def test_radius_requires_centre():
    with pytest.raises(InvalidInputError) as exc_info:
        CandidatePoolCriteria(radius_km=10)

    assert exc_info.value.field_name == "radius_km"


def test_radius_must_be_positive():
    with pytest.raises(InvalidInputError, match="radius_km must be positive"):
        CandidatePoolCriteria(near=GeoPoint.create(0, 0), radius_km=0)


@pytest.mark.parametrize("limit, offset", [(0, 0), (5, -1)])
def test_pagination_bounds(limit, offset):
    with pytest.raises(InvalidInputError):
        CandidatePoolCriteria(limit=limit, offset=offset)
