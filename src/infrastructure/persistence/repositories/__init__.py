"""
Repository Implementations Module

Concrete implementations of Domain repository interfaces.

Exports:
    - InMemoryCandidatePool: CandidatePoolProtocol over in-memory snapshots
    - candidate_pool_from_env: Pool configured by CANDIDATE_POOL_PATH
"""

from .in_memory_candidate_pool import InMemoryCandidatePool, candidate_pool_from_env

__all__ = [
    "InMemoryCandidatePool",
    "candidate_pool_from_env",
]
