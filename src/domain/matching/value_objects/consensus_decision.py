"""
ConsensusDecision Value Object

Confidence-weighted merge of the evaluator results for one candidate.

Responsibility:
    - Hold the final score and overall confidence
    - Record which strategies contributed and whether they disagreed
    - Keep every received result for explanation (contributing or not)

Architecture Notes:
    - Produced only by ConsensusAggregator
    - A candidate without quorum has no ConsensusDecision at all
"""

from typing import Any

from pydantic import BaseModel, Field

from .evaluator_result import EvaluatorResult


class ConsensusDecision(BaseModel):
    """
    Immutable consensus over evaluator results.

    Attributes:
        final_score: sum(score * confidence) / sum(confidence) over survivors
        overall_confidence: Mean confidence of survivors
        contributing_strategies: Names of surviving strategies, sorted
        conflict: True when the surviving score spread exceeds the threshold
        conflict_magnitude: The spread when conflicting, else 0.0
        score_spread: max - min of surviving scores (always reported)
        evaluations: Every received result, sorted by strategy name
        coverage: Contributing strategies / expected strategies
    """

    final_score: float = Field(..., ge=0.0, le=1.0)
    overall_confidence: float = Field(..., ge=0.0, le=1.0)
    contributing_strategies: tuple[str, ...] = Field(..., min_length=1)
    conflict: bool = False
    conflict_magnitude: float = Field(default=0.0, ge=0.0, le=1.0)
    score_spread: float = Field(default=0.0, ge=0.0, le=1.0)
    evaluations: tuple[EvaluatorResult, ...] = Field(default=())
    coverage: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = {"frozen": True}

    def evaluation_for(self, strategy_name: str) -> EvaluatorResult | None:
        for evaluation in self.evaluations:
            if evaluation.strategy_name == strategy_name:
                return evaluation
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
