"""
Shared Domain Module

Shared domain concepts used across subdomains.

This module exports:
    - DomainException: Base exception for all domain errors
    - InvalidInputError, InvalidMatchRequestError, InvalidCandidateError,
      InvalidRankCommandError
    - StrategyTimeoutError, NoQuorumError, RequestNotFoundError
"""

from .exceptions import (
    DomainException,
    InvalidCandidateError,
    InvalidInputError,
    InvalidMatchRequestError,
    InvalidRankCommandError,
    NoQuorumError,
    RequestNotFoundError,
    StrategyTimeoutError,
)

__all__ = [
    "DomainException",
    "InvalidInputError",
    "InvalidMatchRequestError",
    "InvalidCandidateError",
    "InvalidRankCommandError",
    "StrategyTimeoutError",
    "NoQuorumError",
    "RequestNotFoundError",
]
