"""
Matching Repository Interfaces

Contracts defined by the Domain Layer and implemented by Infrastructure.
"""

from .candidate_pool_repository import CandidatePoolCriteria, CandidatePoolProtocol
from .request_context_repository import RequestContextProviderProtocol

__all__ = [
    "CandidatePoolCriteria",
    "CandidatePoolProtocol",
    "RequestContextProviderProtocol",
]
