"""
Algorithms Package

Provides deterministic scoring algorithms for multi-party meeting scheduling:
- fairness: Bounded fairness adjustment (0.5-1.5) from scheduling history
- vip_weighting: VIP priority multiplier (>= 1.0) from VIP policies
- multi_factor: Final candidate score from base scores and multipliers
- explanation: Human-readable justification per candidate
- outcomes: Outcome recording and history aggregation after commit
- ranking: End-to-end ranking of pre-generated candidates

All algorithms are pure (no randomness, no I/O) and return pydantic models.
"""

from fairsched.algorithms.fairness import compute_fairness_score, compute_cohort_fairness
from fairsched.algorithms.vip_weighting import apply_vip_weight
from fairsched.algorithms.multi_factor import compute_multi_factor_score
from fairsched.algorithms.explanation import build_explanation
from fairsched.algorithms.outcomes import record_scheduling_outcome, aggregate_history
from fairsched.algorithms.ranking import rank_candidates

__all__ = [
    "compute_fairness_score",
    "compute_cohort_fairness",
    "apply_vip_weight",
    "compute_multi_factor_score",
    "build_explanation",
    "record_scheduling_outcome",
    "aggregate_history",
    "rank_candidates"
]
