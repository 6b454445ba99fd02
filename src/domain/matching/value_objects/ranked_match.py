"""
Ranking Output Value Objects

RankedMatch, RankingResult and MatchExplanation: what RankingPipeline returns
to its consumers (API, Celery task, application services).

Responsibility:
    - Carry the ordered top-K matches with their consensus decisions
    - Report coverage counters (considered / ranked / skipped / below threshold)
    - Provide a per-strategy breakdown for transparency and debugging

Architecture Notes:
    - Value Objects (immutable)
    - Uses Pydantic for validation and JSON serialisation
    - to_dict() output is JSON-serialisable as-is
"""

from typing import Any

from pydantic import BaseModel, Field, computed_field

from .consensus_decision import ConsensusDecision
from .feature_set import FeatureSet


class RankedMatch(BaseModel):
    """
    One candidate in a ranking.

    Attributes:
        candidate_id: Artist identifier
        display_name: Artist display name
        rank: 1-based position in the result
        decision: Consensus over the strategies that evaluated this candidate
        features: Features the strategies were given
    """

    candidate_id: str = Field(..., min_length=1)
    display_name: str = ""
    rank: int = Field(..., ge=1)
    decision: ConsensusDecision
    features: FeatureSet

    model_config = {"frozen": True}

    @computed_field
    @property
    def final_score(self) -> float:
        return self.decision.final_score

    @computed_field
    @property
    def overall_confidence(self) -> float:
        return self.decision.overall_confidence

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class RankingResult(BaseModel):
    """
    Outcome of one ranking call.

    Coverage counters always satisfy:
        candidates_considered == candidates_ranked + candidates_skipped
                                 + candidates_below_threshold

    where candidates_ranked counts every candidate with a decision above
    min_score (before top-K truncation), so len(matches) <= candidates_ranked.

    Attributes:
        request_id: Request that was ranked
        matches: Top-K matches, best first
        candidates_considered: Candidates given to the pipeline
        candidates_ranked: Candidates with a decision above min_score
        candidates_skipped: Candidates without quorum or with evaluation errors
        skipped_candidate_ids: Identifiers of skipped candidates, sorted
        candidates_below_threshold: Candidates with a decision at or below min_score
        processing_time_ms: Wall-clock duration of the call
        strategies: Strategy names that were run
    """

    request_id: str
    matches: tuple[RankedMatch, ...] = Field(default=())
    candidates_considered: int = Field(default=0, ge=0)
    candidates_ranked: int = Field(default=0, ge=0)
    candidates_skipped: int = Field(default=0, ge=0)
    skipped_candidate_ids: tuple[str, ...] = Field(default=())
    candidates_below_threshold: int = Field(default=0, ge=0)
    processing_time_ms: float = Field(default=0.0, ge=0.0)
    strategies: tuple[str, ...] = Field(default=())

    model_config = {"frozen": True}

    @property
    def top_match(self) -> RankedMatch | None:
        return self.matches[0] if self.matches else None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class StrategyBreakdown(BaseModel):
    """One strategy's contribution inside a MatchExplanation."""

    score: float = Field(..., ge=0.0, le=1.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    rationale: str = ""
    elapsed_ms: float = Field(default=0.0, ge=0.0)
    contributed: bool

    model_config = {"frozen": True}


class MatchExplanation(BaseModel):
    """
    Why a candidate ranked where it did.

    per_strategy_breakdown lists every strategy that returned a result,
    including those dropped by the confidence floor (contributed=False).
    """

    candidate_id: str
    rank: int = Field(..., ge=1)
    final_score: float = Field(..., ge=0.0, le=1.0)
    overall_confidence: float = Field(..., ge=0.0, le=1.0)
    per_strategy_breakdown: dict[str, StrategyBreakdown]
    conflict: bool
    conflict_magnitude: float = Field(..., ge=0.0, le=1.0)
    features: FeatureSet

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
