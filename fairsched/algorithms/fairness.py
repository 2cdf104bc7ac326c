"""
Fairness Scoring Algorithm

Deterministic algorithm computing a bounded fairness multiplier for one
participant from a cohort's scheduling history.

Algorithm:
  rate_i     = sessions_preferred_i / sessions_participated_i
  average    = mean(rate_i) over entries with sessions_participated > 0
  deviation  = rate_target - average
  adjustment = clamp(1 - deviation, 0.5, 1.5)

A participant who got their preferred slot more often than the cohort
(deviation > 0) gets adjustment < 1.0; one who got it less often gets > 1.0.

Rates are exact fractions, converted to float once. Equal rates give exactly
1.0; a lower rate always gives a strictly larger adjustment.

No external dependencies or randomness - purely based on the history snapshot.
"""

import logging
from fractions import Fraction
from typing import Any, Dict, Iterable, List, Optional

from fairsched.schemas.base import ensure_models
from fairsched.schemas.history import FairnessResult, SchedulingHistoryEntry

logger = logging.getLogger(__name__)

# ============================================================================
# Fairness Configuration
# ============================================================================

MIN_FAIRNESS_ADJUSTMENT = Fraction(1, 2)  # 50% of base score
MAX_FAIRNESS_ADJUSTMENT = Fraction(3, 2)  # 150% of base score
NEUTRAL_ADJUSTMENT = 1.0

# Cohort must have at least this many participants with sessions to compare
MIN_COHORT_SIZE = 2


# ============================================================================
# Scoring Functions
# ============================================================================


def compute_fairness_score(
    history: Iterable[Any],
    participant_hash: Optional[str] = None
) -> FairnessResult:
    """
    Compute the fairness adjustment for a participant.

    Args:
        history: SchedulingHistoryEntry models (or mappings) for the cohort.
        participant_hash: Participant to compute the adjustment for.

    Returns:
        FairnessResult with adjustment in [0.5, 1.5] and an explanation.
    """
    entries = ensure_models(SchedulingHistoryEntry, history)

    if not entries:
        return _neutral("no history: fairness neutral")

    rates = _preferred_rates(entries)

    if not rates:
        return _neutral("no sessions recorded: fairness neutral")

    if len(rates) < MIN_COHORT_SIZE:
        return _neutral("single participant with history: fairness neutral")

    if not participant_hash:
        return _neutral("no target participant: fairness neutral")

    if participant_hash not in rates:
        return _neutral(f"{participant_hash} has no session history: fairness neutral")

    average = sum(rates.values(), Fraction(0)) / len(rates)
    deviation = rates[participant_hash] - average
    adjustment = float(_clamp(1 - deviation))

    logger.debug(
        f"Fairness for {participant_hash}: rate={float(rates[participant_hash]):.4f} "
        f"average={float(average):.4f} adjustment={adjustment}"
    )

    if adjustment == NEUTRAL_ADJUSTMENT:
        return FairnessResult(
            adjustment=NEUTRAL_ADJUSTMENT,
            explanation="fairness: at cohort average"
        )

    direction = "advantaged" if adjustment < NEUTRAL_ADJUSTMENT else "disadvantaged"
    return FairnessResult(
        adjustment=adjustment,
        explanation=f"fairness adjustment for {participant_hash} "
                    f"({_format_multiplier(adjustment)}x, {direction})"
    )


def compute_cohort_fairness(
    history: Iterable[Any],
    participant_hashes: Optional[Iterable[str]] = None
) -> Dict[str, FairnessResult]:
    """
    Compute fairness adjustments for several participants from one snapshot.

    Args:
        history: SchedulingHistoryEntry models (or mappings) for the cohort.
        participant_hashes: Participants to score. Defaults to every
            participant appearing in the history.

    Returns:
        Dict of participant_hash -> FairnessResult, in request order.
    """
    entries = ensure_models(SchedulingHistoryEntry, history)

    if participant_hashes is None:
        participant_hashes = [e.participant_hash for e in entries]

    results: Dict[str, FairnessResult] = {}
    for participant in participant_hashes:
        if participant not in results:
            results[participant] = compute_fairness_score(entries, participant)
    return results


# ============================================================================
# Helpers
# ============================================================================


def _preferred_rates(entries: List[SchedulingHistoryEntry]) -> Dict[str, Fraction]:
    """
    Exact preferred-rate per participant, skipping entries without sessions.

    Inconsistent counters never raise: rates are clamped to [0, 1].
    """
    rates: Dict[str, Fraction] = {}
    for entry in entries:
        if entry.sessions_participated <= 0:
            if entry.sessions_participated < 0:
                logger.warning(
                    f"Negative sessions_participated for {entry.participant_hash}; ignoring entry"
                )
            continue
        # First entry wins if a snapshot repeats a participant
        if entry.participant_hash in rates:
            logger.warning(f"Duplicate history entry for {entry.participant_hash}; using the first")
            continue
        rates[entry.participant_hash] = _rate(entry)
    return rates


def _rate(entry: SchedulingHistoryEntry) -> Fraction:
    """sessions_preferred / sessions_participated, clamped to [0, 1]."""
    preferred = entry.sessions_preferred
    if preferred < 0 or preferred > entry.sessions_participated:
        logger.warning(
            f"Inconsistent counters for {entry.participant_hash} "
            f"(preferred={preferred}, participated={entry.sessions_participated}); clamping rate"
        )
        preferred = max(0, min(preferred, entry.sessions_participated))
    return Fraction(preferred, entry.sessions_participated)


def _clamp(value: Fraction) -> Fraction:
    return max(MIN_FAIRNESS_ADJUSTMENT, min(MAX_FAIRNESS_ADJUSTMENT, value))


def _neutral(explanation: str) -> FairnessResult:
    return FairnessResult(adjustment=NEUTRAL_ADJUSTMENT, explanation=explanation)


def _format_multiplier(value: float) -> str:
    """Presentation-only rounding: 0.7 -> '0.7', 1.3333 -> '1.33'."""
    return f"{round(value, 2):g}"
