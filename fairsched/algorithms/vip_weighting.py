"""
VIP Weighting Algorithm

Determines the VIP priority multiplier for a meeting's participant set.
The highest matching priority_weight wins; VIP status never lowers a score.
"""

import logging
from typing import Any, Iterable

from fairsched.schemas.base import ensure_models
from fairsched.schemas.vip import VipPolicy, VipWeightResult

logger = logging.getLogger(__name__)

NEUTRAL_VIP_WEIGHT = 1.0


def apply_vip_weight(
    policies: Iterable[Any],
    participant_hashes: Iterable[str]
) -> VipWeightResult:
    """
    Compute the VIP weight for a set of participants.

    Args:
        policies: VipPolicy models (or mappings).
        participant_hashes: Hashes of the participants in the candidate meeting.

    Returns:
        VipWeightResult with weight >= 1.0. The explanation names the
        winning policy, or is None when no VIP applies.
    """
    policies = ensure_models(VipPolicy, policies)
    participants = set(participant_hashes or ())

    if not policies or not participants:
        return VipWeightResult(weight=NEUTRAL_VIP_WEIGHT, explanation=None)

    matching = [p for p in policies if p.participant_hash in participants]
    if not matching:
        return VipWeightResult(weight=NEUTRAL_VIP_WEIGHT, explanation=None)

    # Strict comparison keeps the first policy on ties
    best = matching[0]
    for policy in matching[1:]:
        if policy.priority_weight > best.priority_weight:
            best = policy

    if best.priority_weight <= NEUTRAL_VIP_WEIGHT:
        logger.debug(
            f"VIP policy {best.display_name} has weight {best.priority_weight}; using neutral weight"
        )
        return VipWeightResult(weight=NEUTRAL_VIP_WEIGHT, explanation=None)

    return VipWeightResult(
        weight=best.priority_weight,
        explanation=f"VIP priority: {best.display_name} ({best.priority_weight}x)"
    )
