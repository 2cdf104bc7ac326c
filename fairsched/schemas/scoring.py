"""
Scoring Schemas

Pydantic models for multi-factor candidate scoring and ranking.

MultiFactorInput is unbounded: it scores whatever factors the
caller passes. The bounds on fairness adjustment and VIP weight are enforced
where those values are produced (FairnessResult, VipWeightResult).
"""

from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from fairsched.schemas.base import Proofs


class MultiFactorInput(BaseModel):
    """The four numeric factors of a candidate score."""
    time_preference_score: float = Field(..., description="Base time-of-day preference score")
    constraint_score: float = Field(..., description="Constraint bonus/penalty (may be negative)")
    fairness_adjustment: float = Field(1.0, description="Fairness multiplier (0.5-1.5)")
    vip_weight: float = Field(1.0, description="VIP multiplier (>= 1.0)")

    model_config = ConfigDict(frozen=True)


class ScoreComponents(MultiFactorInput):
    """
    Score factors plus the text fragments used to explain them.

    Transient: built per candidate evaluation, never persisted.
    """
    base_explanation: str = Field("", description="Why the slot scored as it did before adjustments")
    fairness_explanation: Optional[str] = Field(None, description="Fairness note")
    vip_explanation: Optional[str] = Field(None, description="VIP note")


class CandidateScore(BaseModel):
    """Output of compute_multi_factor_score()."""
    final_score: float = Field(..., description="(time + constraint) * fairness * vip")
    components: MultiFactorInput = Field(..., description="Inputs echoed for auditing")

    model_config = ConfigDict(frozen=True)


# ==================== Ranking ====================

class Candidate(BaseModel):
    """
    One proposed meeting slot produced by the candidate generator.

    preferred_participant_hash names the participant whose preferred slot
    this is; their fairness adjustment applies to the candidate.
    participant_hashes overrides the meeting-level attendee list for VIP matching.
    """
    candidate_id: str = Field(..., description="Candidate identifier")
    start: Optional[str] = Field(None, description="Slot start (ISO 8601)")
    end: Optional[str] = Field(None, description="Slot end (ISO 8601)")
    time_preference_score: float = Field(..., description="Base time-of-day preference score")
    constraint_score: float = Field(0.0, description="Constraint bonus/penalty")
    base_explanation: str = Field("", description="Generator's explanation of the base score")
    preferred_participant_hash: Optional[str] = Field(None, description="Whose preferred slot this is")
    participant_hashes: Optional[List[str]] = Field(None, description="Attendees of this candidate")

    model_config = ConfigDict(extra="allow")


class RankedCandidate(BaseModel):
    """Candidate with its score, components and explanation."""
    rank: int = Field(..., description="1-based rank", ge=1)
    candidate: Candidate = Field(..., description="Candidate as supplied")
    score: CandidateScore = Field(..., description="Multi-factor score")
    components: ScoreComponents = Field(..., description="Factors and explanation fragments")
    explanation: str = Field(..., description="Human-readable justification")


class RankingResult(BaseModel):
    """Output of rank_candidates()."""
    recommended: List[RankedCandidate] = Field(..., description="Top candidates")
    ranked: List[RankedCandidate] = Field(..., description="All candidates, best first")
    strategy: str = Field(..., description="Which adjustments shaped the ranking")
    reasons: List[str] = Field(..., description="Overall ranking notes")
    proofs: Proofs = Field(..., description="Audit information")
