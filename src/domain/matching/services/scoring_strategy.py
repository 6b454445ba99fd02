"""
ScoringStrategy Protocol

Contract for independent evaluators that score a FeatureSet.

Responsibility:
    - Define the evaluator contract (Protocol-based interface)
    - Carry per-evaluation context (request, candidate, metadata)

Architecture Notes:
    - Protocol interface (structural typing, no base class to inherit)
    - Async interface: a strategy may await remote models or other I/O
    - Strategies never raise for a well-formed FeatureSet; they abstain by
      returning confidence 0.0
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

from ..value_objects.evaluator_result import EvaluatorResult
from ..value_objects.feature_set import FeatureSet


@dataclass(frozen=True)
class EvaluationContext:
    """
    Identifies what is being evaluated.

    Attributes:
        request_id: Request being ranked
        candidate_id: Candidate being evaluated
        metadata: Free-form extra context (e.g. trace ids)
    """

    request_id: str
    candidate_id: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


@runtime_checkable
class ScoringStrategy(Protocol):
    """
    Protocol for a scoring strategy.

    Attributes:
        name: Unique strategy identifier (used as key in results)
        description: One-line human-readable summary

    Examples:
        >>> class ConstantStrategy:
        ...     name = "constant"
        ...     description = "Always 0.5"
        ...     async def evaluate(self, feature_set, context):
        ...         return EvaluatorResult(
        ...             strategy_name=self.name, score=0.5, confidence=0.9
        ...         )
        >>> isinstance(ConstantStrategy(), ScoringStrategy)
        True
    """

    name: str
    description: str

    async def evaluate(
        self, feature_set: FeatureSet, context: EvaluationContext
    ) -> EvaluatorResult:
        """
        Score one candidate.

        Args:
            feature_set: Normalised features of the candidate
            context: Request/candidate identifiers

        Returns:
            EvaluatorResult with score and confidence in [0, 1]
        """
        ...
