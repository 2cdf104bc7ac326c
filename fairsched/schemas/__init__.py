"""
Pydantic Schemas Package

Typed models for every value the scoring engine consumes or produces.

Export Groups:
- Base: Proofs, ensure_model, ensure_models
- History: SchedulingHistoryEntry, FairnessResult
- VIP: VipPolicy, VipWeightResult
- Scoring: MultiFactorInput, ScoreComponents, CandidateScore
- Ranking: Candidate, RankedCandidate, RankingResult
"""

from fairsched.schemas.base import (
    Proofs,
    ensure_model,
    ensure_models
)

from fairsched.schemas.history import (
    SchedulingHistoryEntry,
    FairnessResult
)

from fairsched.schemas.vip import (
    VipPolicy,
    VipWeightResult
)

from fairsched.schemas.scoring import (
    MultiFactorInput,
    ScoreComponents,
    CandidateScore,
    Candidate,
    RankedCandidate,
    RankingResult
)

__all__ = [
    # Base
    "Proofs",
    "ensure_model",
    "ensure_models",

    # History
    "SchedulingHistoryEntry",
    "FairnessResult",

    # VIP
    "VipPolicy",
    "VipWeightResult",

    # Scoring
    "MultiFactorInput",
    "ScoreComponents",
    "CandidateScore",
    "Candidate",
    "RankedCandidate",
    "RankingResult",
]
