"""
Rank Candidates Use Case - Application Orchestration

Responsibility:
    Resolves the request and the candidate list for a RankCandidatesCommand,
    then runs the domain RankingPipeline.

Architecture Notes:
    - Part of Application Layer (Services/Use Cases)
    - Depends on Domain Layer (pipeline, repository protocols)
    - Infrastructure injected through constructor (request context store,
      candidate pool)
    - Shared by the HTTP API (in-process) and the Celery task

Flow:
    1. Command business rules validated
    2. Request resolved: inline record, or loaded by request_id
    3. Candidates resolved: inline records (malformed ones skipped and
       counted), or queried from the configured candidate pool
    4. RankingPipeline.rank with the command options
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from src.application.commands.rank_candidates import RankCandidatesCommand
from src.domain.matching import (
    ArtistCandidate,
    CandidatePoolCriteria,
    CandidatePoolProtocol,
    MatchRequest,
    RankingPipeline,
    RankingResult,
    RequestContextProviderProtocol,
)
from src.domain.shared.exceptions import InvalidInputError
from src.infrastructure.persistence.repositories import InMemoryCandidatePool

logger = logging.getLogger(__name__)


# ============================================================================
# RESULT
# ============================================================================


@dataclass(frozen=True)
class RankCandidatesResult:
    """
    Ranking plus the number of inline candidate records rejected as malformed.

    Attributes:
        ranking: Domain ranking result
        rejected_candidates: Inline records that could not be parsed
    """

    ranking: RankingResult
    rejected_candidates: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {**self.ranking.to_dict(), "rejected_candidates": self.rejected_candidates}


# ============================================================================
# USE CASE
# ============================================================================


class RankCandidatesUseCase:
    """
    Orchestrates one ranking run.

    Dependencies:
        - pipeline: Domain RankingPipeline
        - candidate_pool: Source used when the command has no inline candidates
        - request_context_provider: Source used when the command has a request_id

    Usage:
        >>> use_case = RankCandidatesUseCase(RankingPipeline())
        >>> result = await use_case.execute(command)
        >>> result.ranking.top_match.candidate_id
        'artist-1'
    """

    def __init__(
        self,
        pipeline: RankingPipeline,
        candidate_pool: Optional[CandidatePoolProtocol] = None,
        request_context_provider: Optional[RequestContextProviderProtocol] = None,
    ) -> None:
        self.pipeline = pipeline
        self.candidate_pool = candidate_pool
        self.request_context_provider = request_context_provider

    async def execute(self, command: RankCandidatesCommand) -> RankCandidatesResult:
        """
        Run a ranking for the command.

        Raises:
            InvalidRankCommandError: If the command breaks a business rule
            InvalidInputError: If the request, criteria or options are invalid,
                or a needed source is not configured
            RequestNotFoundError: If request_id is unknown or expired
        """
        command.validate_business_rules()

        request = await self._resolve_request(command)
        criteria = command.criteria.to_domain() if command.criteria else None
        candidates, rejected = await self._resolve_candidates(command, criteria)

        logger.info(
            f"Ranking request {request.request_id}: {len(candidates)} candidates resolved, "
            f"{rejected} rejected"
        )

        options = command.options
        ranking = await self.pipeline.rank(
            request,
            candidates,
            min_score=options.min_score,
            top_k=options.top_k,
            per_strategy_timeout=options.per_strategy_timeout_s,
            strategy_timeouts=options.strategy_timeouts or None,
        )
        return RankCandidatesResult(ranking=ranking, rejected_candidates=rejected)

    async def _resolve_request(self, command: RankCandidatesCommand) -> MatchRequest:
        if command.request is not None:
            return MatchRequest.from_dict(command.request)

        if self.request_context_provider is None:
            raise InvalidInputError(
                "request_id lookup is not available; send the request inline",
                field_name="request_id",
            )
        return await self.request_context_provider.get_request_context(command.request_id)

    async def _resolve_candidates(
        self,
        command: RankCandidatesCommand,
        criteria: Optional[CandidatePoolCriteria],
    ) -> tuple[list[ArtistCandidate], int]:
        if command.candidates is not None:
            pool = InMemoryCandidatePool.from_records(command.candidates)
            # Inline candidates are all ranked unless criteria narrow them
            effective = criteria or CandidatePoolCriteria(active_only=False)
            return await pool.get_candidate_pool(effective), pool.rejected_records

        if self.candidate_pool is None:
            raise InvalidInputError(
                "No candidate pool configured; send candidates inline",
                field_name="candidates",
            )
        return await self.candidate_pool.get_candidate_pool(
            criteria or CandidatePoolCriteria()
        ), 0
