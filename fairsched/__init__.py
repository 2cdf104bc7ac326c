"""
fairsched - Fairness-Aware Meeting Candidate Scoring

Ranks candidate meeting slots from base preference/constraint scores,
correcting for historical inequity between participants and honoring VIP
priority overrides. Every score is deterministic and explainable.

Packages:
- core: Settings, logging with trace ids, error classes
- schemas: Pydantic models for history, VIP policies, scores and rankings
- algorithms: Fairness, VIP weighting, multi-factor scoring, explanations,
  outcome recording, ranking
"""

from fairsched.algorithms import (
    compute_fairness_score,
    compute_cohort_fairness,
    apply_vip_weight,
    compute_multi_factor_score,
    build_explanation,
    record_scheduling_outcome,
    aggregate_history,
    rank_candidates,
)

from fairsched.schemas import (
    SchedulingHistoryEntry,
    FairnessResult,
    VipPolicy,
    VipWeightResult,
    MultiFactorInput,
    ScoreComponents,
    CandidateScore,
    Candidate,
    RankedCandidate,
    RankingResult,
)

__version__ = "0.1.0"

__all__ = [
    "compute_fairness_score",
    "compute_cohort_fairness",
    "apply_vip_weight",
    "compute_multi_factor_score",
    "build_explanation",
    "record_scheduling_outcome",
    "aggregate_history",
    "rank_candidates",
    "SchedulingHistoryEntry",
    "FairnessResult",
    "VipPolicy",
    "VipWeightResult",
    "MultiFactorInput",
    "ScoreComponents",
    "CandidateScore",
    "Candidate",
    "RankedCandidate",
    "RankingResult",
]
