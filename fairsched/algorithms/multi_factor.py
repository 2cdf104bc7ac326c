"""
Multi-Factor Scoring Algorithm

finalScore = (time_preference_score + constraint_score) * fairness_adjustment * vip_weight

- Base scoring (time preference + constraints) sets slot quality
- Fairness adjusts for historical equity across participants
- VIP weight elevates priority for important participants

The product is neither clamped nor rounded; round only for display.
"""

from typing import Any

from fairsched.schemas.base import ensure_model
from fairsched.schemas.scoring import CandidateScore, MultiFactorInput


def compute_multi_factor_score(factors: Any) -> CandidateScore:
    """
    Compute the final score for a candidate slot.

    Args:
        factors: MultiFactorInput (a ScoreComponents works too) or a mapping
            with the four factor fields.

    Returns:
        CandidateScore whose components echo the inputs.
    """
    factors = ensure_model(MultiFactorInput, factors)

    base_score = factors.time_preference_score + factors.constraint_score
    final_score = base_score * factors.fairness_adjustment * factors.vip_weight

    return CandidateScore(final_score=final_score, components=factors)
