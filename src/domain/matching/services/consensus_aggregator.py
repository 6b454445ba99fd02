"""
ConsensusAggregator Domain Service

Merges the evaluator results for one candidate into a ConsensusDecision.

Algorithm:
    1. Empty input -> NoQuorumError
    2. Drop results with confidence <= confidence_floor; fewer than
       min_quorum survivors -> NoQuorumError
    3. overall_confidence = sum(c) / n
    4. final_score = sum(s * c) / sum(c)
    5. spread = max(s) - min(s); conflict when spread > conflict_threshold

Business Rules:
    - Sums use math.fsum, so the decision does not depend on the order in
      which strategies happened to finish
    - A candidate without quorum is excluded, never scored 0
"""

import logging
import math
from typing import Optional, Sequence

from src.domain.shared.exceptions import NoQuorumError

from ..matching_config import MatchingConfig
from ..value_objects.consensus_decision import ConsensusDecision
from ..value_objects.evaluator_result import EvaluatorResult

logger = logging.getLogger(__name__)


class ConsensusAggregator:
    """
    Confidence-weighted consensus with conflict detection.

    Attributes:
        config: Supplies confidence_floor, min_quorum and conflict_threshold

    Examples:
        >>> aggregator = ConsensusAggregator()
        >>> decision = aggregator.aggregate([
        ...     EvaluatorResult(strategy_name="a", score=0.8, confidence=0.9),
        ...     EvaluatorResult(strategy_name="b", score=0.5, confidence=0.6),
        ...     EvaluatorResult(strategy_name="c", score=0.2, confidence=0.3),
        ... ])
        >>> round(decision.final_score, 3)
        0.68
        >>> decision.contributing_strategies
        ('a', 'b')
    """

    def __init__(self, config: Optional[MatchingConfig] = None) -> None:
        self.config = config or MatchingConfig.default()

    def aggregate(
        self,
        results: Sequence[EvaluatorResult],
        expected_strategies: Optional[int] = None,
    ) -> ConsensusDecision:
        """
        Merge results into one decision.

        Args:
            results: Evaluator results for one candidate (any order)
            expected_strategies: Number of strategies that were run, for
                coverage (defaults to len(results))

        Returns:
            ConsensusDecision over the surviving results

        Raises:
            NoQuorumError: If no result (or fewer than min_quorum) survives the floor
        """
        floor = self.config.confidence_floor

        if not results:
            raise NoQuorumError(
                "No evaluator results to aggregate",
                received=0,
                surviving=0,
                confidence_floor=floor,
            )

        ordered = sorted(results, key=lambda r: r.strategy_name)
        survivors = [r for r in ordered if r.confidence > floor]

        if len(survivors) < self.config.min_quorum:
            raise NoQuorumError(
                f"{len(survivors)} of {len(results)} evaluator results above "
                f"confidence floor {floor} (quorum {self.config.min_quorum})",
                received=len(results),
                surviving=len(survivors),
                confidence_floor=floor,
            )

        confidence_sum = math.fsum(r.confidence for r in survivors)
        weighted_sum = math.fsum(r.score * r.confidence for r in survivors)

        final_score = _clamp(weighted_sum / confidence_sum)
        overall_confidence = _clamp(confidence_sum / len(survivors))

        scores = [r.score for r in survivors]
        spread = max(scores) - min(scores)
        conflict = spread > self.config.conflict_threshold

        expected = expected_strategies if expected_strategies else len(results)
        coverage = _clamp(len(survivors) / max(expected, 1))

        if conflict:
            logger.debug(
                f"Strategies disagree (spread {spread:.3f} > "
                f"{self.config.conflict_threshold}): "
                + ", ".join(f"{r.strategy_name}={r.score:.3f}" for r in survivors)
            )

        return ConsensusDecision(
            final_score=final_score,
            overall_confidence=overall_confidence,
            contributing_strategies=tuple(r.strategy_name for r in survivors),
            conflict=conflict,
            conflict_magnitude=spread if conflict else 0.0,
            score_spread=spread,
            evaluations=tuple(ordered),
            coverage=coverage,
        )


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))
