"""
Application Commands (CQRS write side)

Exports:
    - RankCandidatesCommand, RankingOptions, CandidateCriteria
"""

from .rank_candidates import CandidateCriteria, RankCandidatesCommand, RankingOptions

__all__ = ["RankCandidatesCommand", "RankingOptions", "CandidateCriteria"]
