"""
EvaluatorResult Value Object

Output of one scoring strategy for one candidate.
"""

from typing import Any

from pydantic import BaseModel, Field


class EvaluatorResult(BaseModel):
    """
    Immutable score + confidence produced by a single strategy.

    A confidence of 0.0 means the strategy abstained. elapsed_ms is stamped
    by the runner after the strategy completes.

    Examples:
        >>> result = EvaluatorResult(
        ...     strategy_name="analytical", score=0.8, confidence=0.9,
        ...     rationale="design 0.40*0.90",
        ... )
        >>> result.contribution
        0.72
    """

    strategy_name: str = Field(..., min_length=1, description="Strategy identifier")
    score: float = Field(..., ge=0.0, le=1.0, description="Match score")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Self-reported confidence")
    rationale: str = Field(default="", description="Human-readable explanation")
    elapsed_ms: float = Field(default=0.0, ge=0.0, description="Evaluation time")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "strategy_name": "analytical",
                    "score": 0.82,
                    "confidence": 0.85,
                    "rationale": "design 0.40*0.90 + experience 0.30*0.70 + ...",
                    "elapsed_ms": 0.4,
                }
            ]
        },
    }

    @property
    def contribution(self) -> float:
        """score * confidence, the numerator term of the consensus mean."""
        return self.score * self.confidence

    def with_elapsed(self, elapsed_ms: float) -> "EvaluatorResult":
        return self.model_copy(update={"elapsed_ms": max(0.0, elapsed_ms)})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
