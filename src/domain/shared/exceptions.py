"""
Domain Layer Exceptions

This module defines the exception hierarchy for the Domain Layer.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Type-safe error handling across layers
    - Clear separation from framework exceptions

Error Taxonomy (matching engine):
    - InvalidInputError: malformed request/candidate, fails fast before scoring
    - StrategyTimeoutError: one strategy exceeded its timeout for one candidate
      (recovered by exclusion, never surfaced as a pipeline error)
    - NoQuorumError: no confident evaluator result for a candidate
      (candidate excluded from ranking and counted as skipped)
    - RequestNotFoundError: request context lookup failed

Cancellation is not modelled here: asyncio.CancelledError propagates untouched.
"""


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    Usage:
        - Catch this in Application Layer to handle all domain errors
        - API Layer converts to appropriate HTTP status codes
        - Infrastructure Layer should not raise DomainException (use own exceptions)

    Examples:
        >>> raise DomainException("Business rule violation")

        >>> try:
        ...     # domain operation
        ... except DomainException as e:
        ...     logger.error(f"Domain error: {e}")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidInputError(DomainException):
    """
    Raised when a request, candidate or ranking option is malformed.

    This exception is raised when:
    - Coordinates are non-finite or outside the valid lat/lon range
    - Budget or price values are negative or non-finite
    - Ranking options are out of range (top_k < 1, min_score outside [0, 1])

    Invalid input is never silently defaulted. On the Request itself (or the
    ranking options) it aborts the whole ranking call.

    Examples:
        >>> raise InvalidInputError("latitude must be finite", field_name="latitude")
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        """
        Initialize input validation error.

        Args:
            message: Error description
            field_name: Name of field that caused error (optional)
        """
        self.field_name = field_name
        super().__init__(message)


class InvalidMatchRequestError(InvalidInputError):
    """
    Raised when MatchRequest validation fails.

    Examples:
        >>> raise InvalidMatchRequestError("request_id cannot be empty", field_name="request_id")
    """


class InvalidCandidateError(InvalidInputError):
    """
    Raised when ArtistCandidate validation fails.

    Attributes:
        candidate_id: Identifier of the rejected candidate (if known)

    Examples:
        >>> raise InvalidCandidateError(
        ...     "average_rating must be 0-5, got 7.0",
        ...     field_name="average_rating",
        ...     candidate_id="artist-42",
        ... )
    """

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        candidate_id: str | None = None,
    ) -> None:
        self.candidate_id = candidate_id
        super().__init__(message, field_name=field_name)


class InvalidRankCommandError(InvalidInputError):
    """
    Raised when a rank command breaks a business rule.

    Collects every violation instead of failing on the first one.

    Attributes:
        errors: List of validation error messages

    Examples:
        >>> raise InvalidRankCommandError(
        ...     "Command validation failed",
        ...     errors=["either request or request_id is required"],
        ... )
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        if self.errors:
            return f"{super().__str__()} ({'; '.join(self.errors)})"
        return super().__str__()


class StrategyTimeoutError(DomainException):
    """
    Raised (and immediately recovered) when a strategy exceeds its timeout.

    Local to one (candidate, strategy) pair. EvaluatorRunner builds this error
    for logging and excludes the strategy from the result set; it is never
    propagated to the caller.

    Attributes:
        strategy_name: Name of the strategy that timed out
        timeout_s: Timeout that was exceeded (seconds)
        candidate_id: Candidate being evaluated (optional)
    """

    def __init__(
        self,
        message: str,
        strategy_name: str,
        timeout_s: float,
        candidate_id: str | None = None,
    ) -> None:
        self.strategy_name = strategy_name
        self.timeout_s = timeout_s
        self.candidate_id = candidate_id
        super().__init__(message)


class NoQuorumError(DomainException):
    """
    Raised when no evaluator result survives the confidence floor.

    The caller must exclude the candidate from ranking rather than invent a
    score. RankingPipeline records the candidate as skipped.

    Attributes:
        candidate_id: Candidate without quorum (optional, set by the pipeline)
        received: Number of evaluator results received
        surviving: Number of results above the confidence floor
        confidence_floor: Floor that was applied

    Examples:
        >>> raise NoQuorumError("No evaluator results", received=0, surviving=0)
    """

    def __init__(
        self,
        message: str,
        received: int = 0,
        surviving: int = 0,
        confidence_floor: float | None = None,
        candidate_id: str | None = None,
    ) -> None:
        self.received = received
        self.surviving = surviving
        self.confidence_floor = confidence_floor
        self.candidate_id = candidate_id
        super().__init__(message)


class RequestNotFoundError(DomainException):
    """
    Raised when a request context cannot be found by its identifier.

    Attributes:
        request_id: Identifier that was looked up
    """

    def __init__(self, message: str, request_id: str | None = None) -> None:
        self.request_id = request_id
        super().__init__(message)
