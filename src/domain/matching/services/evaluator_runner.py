"""
EvaluatorRunner Domain Service

Runs every strategy concurrently for one candidate, each under its own
timeout, and collects the results that arrive in time.

Responsibility:
    - Launch all strategies as asyncio tasks (fan-out)
    - Race each strategy against its own timeout
    - Exclude timed-out or failing strategies without failing the call
    - Stamp elapsed_ms on every result

Business Rules:
    - A slow or broken strategy never blocks or breaks the others
    - The call returns within max(timeouts) plus scheduling overhead
    - Results are in completion order; consumers key by strategy_name
    - Cancelling the caller cancels every pending strategy task
"""

import asyncio
import logging
import time
from typing import Mapping, Optional, Sequence

from src.domain.shared.exceptions import StrategyTimeoutError

from ..matching_config import MatchingConfig
from ..value_objects.evaluator_result import EvaluatorResult
from ..value_objects.feature_set import FeatureSet
from .scoring_strategy import EvaluationContext, ScoringStrategy

logger = logging.getLogger(__name__)


class EvaluatorRunner:
    """
    Concurrent fan-out/fan-in over scoring strategies.

    Attributes:
        config: Supplies the default and per-strategy timeouts
    """

    def __init__(self, config: Optional[MatchingConfig] = None) -> None:
        self.config = config or MatchingConfig.default()

    async def run(
        self,
        strategies: Sequence[ScoringStrategy],
        feature_set: FeatureSet,
        context: EvaluationContext,
        timeout: Optional[float] = None,
        strategy_timeouts: Optional[Mapping[str, float]] = None,
    ) -> list[EvaluatorResult]:
        """
        Evaluate one candidate with every strategy.

        Args:
            strategies: Strategies to run
            feature_set: Features of the candidate
            context: Request/candidate identifiers
            timeout: Default per-strategy timeout in seconds
                (falls back to config.default_strategy_timeout_s)
            strategy_timeouts: Per-strategy overrides for this call; take
                precedence over config.strategy_timeouts

        Returns:
            Results of the strategies that finished in time, completion order

        Raises:
            asyncio.CancelledError: If the caller is cancelled
        """
        if not strategies:
            return []

        overrides = dict(strategy_timeouts or {})
        tasks = [
            asyncio.create_task(
                self._evaluate_one(
                    strategy,
                    feature_set,
                    context,
                    overrides[strategy.name]
                    if strategy.name in overrides
                    else self.config.timeout_for(strategy.name, timeout),
                ),
                name=f"evaluate:{strategy.name}:{context.candidate_id}",
            )
            for strategy in strategies
        ]

        results: list[EvaluatorResult] = []
        try:
            for next_done in asyncio.as_completed(tasks):
                result = await next_done
                if result is not None:
                    results.append(result)
        finally:
            # Only non-empty when the caller was cancelled mid-join
            for task in tasks:
                if not task.done():
                    task.cancel()

        logger.debug(
            f"Candidate {context.candidate_id}: {len(results)}/{len(strategies)} "
            "strategies returned a result"
        )
        return results

    async def _evaluate_one(
        self,
        strategy: ScoringStrategy,
        feature_set: FeatureSet,
        context: EvaluationContext,
        timeout_s: float,
    ) -> Optional[EvaluatorResult]:
        """Run one strategy; None when it timed out, failed or returned garbage."""
        started = time.perf_counter()
        try:
            result = await asyncio.wait_for(
                strategy.evaluate(feature_set, context), timeout=timeout_s
            )
        except asyncio.TimeoutError:
            error = StrategyTimeoutError(
                f"Strategy '{strategy.name}' exceeded {timeout_s:.3f}s",
                strategy_name=strategy.name,
                timeout_s=timeout_s,
                candidate_id=context.candidate_id,
            )
            logger.warning(f"{error} for candidate {context.candidate_id}, excluded")
            return None
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(
                f"Strategy '{strategy.name}' failed for candidate "
                f"{context.candidate_id}, excluded: {e}",
                exc_info=True,
            )
            return None

        if not isinstance(result, EvaluatorResult):
            logger.warning(
                f"Strategy '{strategy.name}' returned {type(result).__name__} "
                f"instead of EvaluatorResult for candidate {context.candidate_id}, excluded"
            )
            return None

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        if result.strategy_name != strategy.name:
            result = result.model_copy(update={"strategy_name": strategy.name})
        return result.with_elapsed(elapsed_ms)
