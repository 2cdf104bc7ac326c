"""
Score Explanation Builder

Renders ScoreComponents into one human-readable justification string.

The fairness note is included only when the adjustment differs from 1.0 and
the VIP note only when the weight exceeds 1.0, so neutral scores read as the
base explanation alone.
"""

from typing import Any, List

from fairsched.schemas.base import ensure_model
from fairsched.schemas.scoring import ScoreComponents

EXPLANATION_SEPARATOR = "; "


def build_explanation(components: Any) -> str:
    """
    Build the explanation for a scored candidate.

    Args:
        components: ScoreComponents or an equivalent mapping.

    Returns:
        Non-empty parts joined with "; ".
    """
    components = ensure_model(ScoreComponents, components)
    parts: List[str] = []

    if components.base_explanation:
        parts.append(components.base_explanation)

    if components.fairness_adjustment != 1.0 and components.fairness_explanation:
        parts.append(components.fairness_explanation)

    if components.vip_weight > 1.0 and components.vip_explanation:
        parts.append(components.vip_explanation)

    return EXPLANATION_SEPARATOR.join(parts)
