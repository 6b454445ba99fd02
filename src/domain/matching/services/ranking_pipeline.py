"""
RankingPipeline Domain Service

Ranks candidates for one request: extract features, run every strategy,
reach consensus, then order and truncate.

Responsibility:
    - Validate the request-level options (fail fast before any scoring)
    - Evaluate candidates concurrently through a bounded worker pool
    - Isolate per-candidate failures (skip and count, never abort the batch)
    - Deterministic ordering: final_score desc, overall_confidence desc,
      candidate_id asc
    - Explain a ranked match per strategy

Business Rules:
    - Only candidates with final_score > min_score are ranked
    - Candidates without quorum are skipped, never scored 0
    - Cancellation propagates and discards partial results
"""

import asyncio
import logging
import math
import time
from typing import Mapping, Optional, Sequence

from src.domain.shared.exceptions import InvalidInputError, NoQuorumError

from ..entities.artist_candidate import ArtistCandidate
from ..entities.match_request import MatchRequest
from ..matching_config import MatchingConfig
from ..value_objects.consensus_decision import ConsensusDecision
from ..value_objects.feature_set import FeatureSet
from ..value_objects.ranked_match import (
    MatchExplanation,
    RankedMatch,
    RankingResult,
    StrategyBreakdown,
)
from .consensus_aggregator import ConsensusAggregator
from .evaluator_runner import EvaluatorRunner
from .feature_extractor import FeatureExtractor
from .scoring_strategy import EvaluationContext, ScoringStrategy
from .strategy_registry import StrategyRegistry, default_registry

logger = logging.getLogger(__name__)

# (candidate, decision, features) for a candidate that reached consensus
_Evaluated = tuple[ArtistCandidate, ConsensusDecision, FeatureSet]


class RankingPipeline:
    """
    End-to-end ranking over a candidate list.

    Attributes:
        registry: Strategies to run for every candidate
        config: Thresholds, timeouts and worker pool size
        extractor: FeatureExtractor (built from config when not given)
        runner: EvaluatorRunner (built from config when not given)
        aggregator: ConsensusAggregator (built from config when not given)

    Usage:
        pipeline = RankingPipeline(default_registry(), MatchingConfig.default())
        result = await pipeline.rank(request, candidates, top_k=5)
        explanation = pipeline.explain(result.matches[0])
    """

    def __init__(
        self,
        registry: Optional[StrategyRegistry] = None,
        config: Optional[MatchingConfig] = None,
        extractor: Optional[FeatureExtractor] = None,
        runner: Optional[EvaluatorRunner] = None,
        aggregator: Optional[ConsensusAggregator] = None,
    ) -> None:
        self.config = config or MatchingConfig.default()
        self.registry = registry if registry is not None else default_registry()
        self.extractor = extractor or FeatureExtractor(self.config)
        self.runner = runner or EvaluatorRunner(self.config)
        self.aggregator = aggregator or ConsensusAggregator(self.config)

    async def rank(
        self,
        request: MatchRequest,
        candidates: Sequence[ArtistCandidate],
        min_score: Optional[float] = None,
        top_k: Optional[int] = None,
        per_strategy_timeout: Optional[float] = None,
        strategy_timeouts: Optional[Mapping[str, float]] = None,
    ) -> RankingResult:
        """
        Rank candidates for a request.

        Args:
            request: Validated customer request
            candidates: Candidate snapshots (unique candidate_id)
            min_score: Exclusive lower bound on final_score (default config 0.3)
            top_k: Maximum matches returned (default config 10)
            per_strategy_timeout: Default timeout per strategy in seconds
            strategy_timeouts: Per-strategy timeout overrides for this call

        Returns:
            RankingResult with matches best-first and coverage counters

        Raises:
            InvalidInputError: If options are out of range or candidate ids repeat
            asyncio.CancelledError: If the call is cancelled
        """
        started = time.perf_counter()
        min_score = self.config.default_min_score if min_score is None else min_score
        top_k = self.config.default_top_k if top_k is None else top_k
        timeout = (
            self.config.default_strategy_timeout_s
            if per_strategy_timeout is None
            else per_strategy_timeout
        )
        self._validate_options(request, candidates, min_score, top_k, timeout, strategy_timeouts)

        strategies = self.registry.strategies()
        strategy_names = tuple(self.registry.names())
        logger.info(
            f"Ranking request {request.request_id}: {len(candidates)} candidates, "
            f"{len(strategies)} strategies, min_score={min_score}, top_k={top_k}"
        )

        semaphore = asyncio.Semaphore(self.config.max_concurrent_candidates)

        async def evaluate_bounded(candidate: ArtistCandidate) -> Optional[_Evaluated]:
            async with semaphore:
                return await self._evaluate_candidate(
                    request, candidate, strategies, timeout, strategy_timeouts
                )

        tasks = [
            asyncio.create_task(
                evaluate_bounded(candidate), name=f"rank:{candidate.candidate_id}"
            )
            for candidate in candidates
        ]
        try:
            outcomes = await asyncio.gather(*tasks)
        except BaseException:
            # Cancellation (or an unexpected error) discards partial results
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        evaluated: list[_Evaluated] = []
        skipped_ids: list[str] = []
        for candidate, outcome in zip(candidates, outcomes):
            if outcome is None:
                skipped_ids.append(candidate.candidate_id)
            else:
                evaluated.append(outcome)

        above = [item for item in evaluated if item[1].final_score > min_score]
        below_threshold = len(evaluated) - len(above)
        above.sort(
            key=lambda item: (
                -item[1].final_score,
                -item[1].overall_confidence,
                item[0].candidate_id,
            )
        )

        matches = tuple(
            RankedMatch(
                candidate_id=candidate.candidate_id,
                display_name=candidate.display_name,
                rank=position,
                decision=decision,
                features=features,
            )
            for position, (candidate, decision, features) in enumerate(
                above[:top_k], start=1
            )
        )

        processing_time_ms = (time.perf_counter() - started) * 1000.0
        result = RankingResult(
            request_id=request.request_id,
            matches=matches,
            candidates_considered=len(candidates),
            candidates_ranked=len(above),
            candidates_skipped=len(skipped_ids),
            skipped_candidate_ids=tuple(sorted(skipped_ids)),
            candidates_below_threshold=below_threshold,
            processing_time_ms=processing_time_ms,
            strategies=strategy_names,
        )
        logger.info(
            f"Ranked request {request.request_id}: {len(matches)} returned, "
            f"{len(above)} above threshold, {below_threshold} below, "
            f"{len(skipped_ids)} skipped ({processing_time_ms:.1f}ms)"
        )
        return result

    def explain(self, ranked_match: RankedMatch) -> MatchExplanation:
        """
        Per-strategy breakdown of a ranked match.

        Every received evaluation is listed; contributed is False for those
        dropped by the confidence floor.
        """
        decision = ranked_match.decision
        contributing = set(decision.contributing_strategies)
        breakdown = {
            evaluation.strategy_name: StrategyBreakdown(
                score=evaluation.score,
                confidence=evaluation.confidence,
                rationale=evaluation.rationale,
                elapsed_ms=evaluation.elapsed_ms,
                contributed=evaluation.strategy_name in contributing,
            )
            for evaluation in decision.evaluations
        }
        return MatchExplanation(
            candidate_id=ranked_match.candidate_id,
            rank=ranked_match.rank,
            final_score=decision.final_score,
            overall_confidence=decision.overall_confidence,
            per_strategy_breakdown=breakdown,
            conflict=decision.conflict,
            conflict_magnitude=decision.conflict_magnitude,
            features=ranked_match.features,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _evaluate_candidate(
        self,
        request: MatchRequest,
        candidate: ArtistCandidate,
        strategies: Sequence[ScoringStrategy],
        timeout: float,
        strategy_timeouts: Optional[Mapping[str, float]],
    ) -> Optional[_Evaluated]:
        """Extract, run, aggregate. None when the candidate must be skipped."""
        try:
            features = self.extractor.extract(request, candidate)
            context = EvaluationContext(
                request_id=request.request_id, candidate_id=candidate.candidate_id
            )
            results = await self.runner.run(
                strategies,
                features,
                context,
                timeout=timeout,
                strategy_timeouts=strategy_timeouts,
            )
            decision = self.aggregator.aggregate(
                results, expected_strategies=len(strategies)
            )
        except NoQuorumError as e:
            e.candidate_id = candidate.candidate_id
            logger.warning(f"Skipping candidate {candidate.candidate_id}: {e}")
            return None
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"Unexpected error evaluating candidate {candidate.candidate_id}, "
                f"skipped: {e}",
                exc_info=True,
            )
            return None
        return candidate, decision, features

    @staticmethod
    def _validate_options(
        request: MatchRequest,
        candidates: Sequence[ArtistCandidate],
        min_score: float,
        top_k: int,
        timeout: float,
        strategy_timeouts: Optional[Mapping[str, float]],
    ) -> None:
        if not isinstance(request, MatchRequest):
            raise InvalidInputError("request must be a MatchRequest", field_name="request")
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
            raise InvalidInputError(f"top_k must be >= 1, got {top_k}", field_name="top_k")
        if (
            isinstance(min_score, bool)
            or not isinstance(min_score, (int, float))
            or not math.isfinite(min_score)
            or not 0.0 <= min_score <= 1.0
        ):
            raise InvalidInputError(
                f"min_score must be in [0, 1], got {min_score}", field_name="min_score"
            )
        for name, value in [("per_strategy_timeout", timeout)] + list(
            (strategy_timeouts or {}).items()
        ):
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
                or value <= 0
            ):
                raise InvalidInputError(
                    f"Timeout for '{name}' must be a positive number of seconds, "
                    f"got {value}",
                    field_name="per_strategy_timeout",
                )

        seen: set[str] = set()
        for candidate in candidates:
            if not isinstance(candidate, ArtistCandidate):
                raise InvalidInputError(
                    f"candidates must be ArtistCandidate, got {type(candidate).__name__}",
                    field_name="candidates",
                )
            if candidate.candidate_id in seen:
                raise InvalidInputError(
                    f"Duplicate candidate_id '{candidate.candidate_id}'",
                    field_name="candidates",
                )
            seen.add(candidate.candidate_id)
