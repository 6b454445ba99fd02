"""
Matching Entities.

    - MatchRequest: Customer request (what, where, how much)
    - ArtistCandidate: Artist snapshot scored against a request
    - Complexity: Design complexity levels
"""

from src.domain.matching.entities.match_request import (
    Complexity,
    MatchRequest,
    normalize_style,
)
from src.domain.matching.entities.artist_candidate import ArtistCandidate

__all__ = ["MatchRequest", "ArtistCandidate", "Complexity", "normalize_style"]
