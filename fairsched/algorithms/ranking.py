"""
Candidate Ranking

Runs fairness, VIP weighting, multi-factor scoring and explanation over a
list of pre-generated candidate slots and returns them best first.

Each candidate takes the fairness adjustment of the participant whose
preferred slot it is, and the VIP weight of its attendee list. Candidates
with equal final scores keep their input order.

No external ML or randomness - purely based on the supplied snapshot.
"""

import logging
import time
from typing import Any, Dict, Iterable, List, Optional

from fairsched.algorithms.explanation import build_explanation
from fairsched.algorithms.fairness import NEUTRAL_ADJUSTMENT, compute_cohort_fairness
from fairsched.algorithms.multi_factor import compute_multi_factor_score
from fairsched.algorithms.vip_weighting import NEUTRAL_VIP_WEIGHT, apply_vip_weight
from fairsched.core.config import settings
from fairsched.core.logging import reset_trace_id, set_trace_id
from fairsched.schemas.base import Proofs, ensure_models
from fairsched.schemas.history import FairnessResult, SchedulingHistoryEntry
from fairsched.schemas.scoring import (
    Candidate,
    RankedCandidate,
    RankingResult,
    ScoreComponents,
)
from fairsched.schemas.vip import VipPolicy, VipWeightResult

logger = logging.getLogger(__name__)

ALGORITHM_ID = "closed_form_fairness_vip_scoring"


# ============================================================================
# Ranking Functions
# ============================================================================


def rank_candidates(
    candidates: Iterable[Any],
    history: Optional[Iterable[Any]] = None,
    policies: Optional[Iterable[Any]] = None,
    participant_hashes: Optional[Iterable[str]] = None,
    session_id: Optional[str] = None,
    top_n: Optional[int] = None
) -> RankingResult:
    """
    Score and rank candidate slots.

    Args:
        candidates: Candidate models (or mappings) with base scores.
        history: Cohort history snapshot for fairness.
        policies: Active VIP policies.
        participant_hashes: Meeting attendees, used for VIP matching when a
            candidate has no attendee list of its own.
        session_id: Scheduling session id, used as the log trace id for the
            duration of the call.
        top_n: Size of the recommended list (defaults to settings.RANKING_TOP_N).

    Returns:
        RankingResult with recommended, ranked, strategy, reasons and proofs.
    """
    if not session_id:
        return _rank(candidates, history, policies, participant_hashes, session_id, top_n)

    token = set_trace_id(session_id)
    try:
        return _rank(candidates, history, policies, participant_hashes, session_id, top_n)
    finally:
        reset_trace_id(token)


def _rank(
    candidates: Iterable[Any],
    history: Optional[Iterable[Any]],
    policies: Optional[Iterable[Any]],
    participant_hashes: Optional[Iterable[str]],
    session_id: Optional[str],
    top_n: Optional[int]
) -> RankingResult:
    started = time.perf_counter()

    candidates = ensure_models(Candidate, candidates)
    history = ensure_models(SchedulingHistoryEntry, history)
    policies = ensure_models(VipPolicy, policies)
    meeting_participants = list(participant_hashes or ())

    fairness_enabled = settings.ENABLE_FAIRNESS
    vip_enabled = settings.ENABLE_VIP_WEIGHTING
    if top_n is None:
        top_n = settings.RANKING_TOP_N

    if not candidates:
        return RankingResult(
            recommended=[],
            ranked=[],
            strategy="no_candidates",
            reasons=["No candidate slots to rank"],
            proofs=_proofs(session_id, 0, fairness_enabled, vip_enabled, started)
        )

    fairness: Dict[str, FairnessResult] = {}
    if fairness_enabled:
        preferred = [c.preferred_participant_hash for c in candidates if c.preferred_participant_hash]
        fairness = compute_cohort_fairness(history, preferred)

    scored = []
    for candidate in candidates:
        components = _score_components(
            candidate=candidate,
            fairness=fairness,
            policies=policies if vip_enabled else [],
            meeting_participants=meeting_participants
        )
        scored.append((candidate, components, compute_multi_factor_score(components)))

    # sort is stable, so ties keep input order
    scored.sort(key=lambda item: item[2].final_score, reverse=True)

    ranked = [
        RankedCandidate(
            rank=position,
            candidate=candidate,
            score=score,
            components=components,
            explanation=build_explanation(components)
        )
        for position, (candidate, components, score) in enumerate(scored, start=1)
    ]
    recommended = ranked[:max(top_n, 0)]

    fairness_applied = any(r.components.fairness_adjustment != NEUTRAL_ADJUSTMENT for r in ranked)
    vip_applied = any(r.components.vip_weight > NEUTRAL_VIP_WEIGHT for r in ranked)
    strategy = _strategy(fairness_applied, vip_applied)

    logger.info(
        f"Ranked {len(ranked)} candidates (strategy={strategy}, "
        f"top={ranked[0].candidate.candidate_id})"
    )

    return RankingResult(
        recommended=recommended,
        ranked=ranked,
        strategy=strategy,
        reasons=_generate_overall_reasons(
            ranked=ranked,
            recommended=recommended,
            fairness_enabled=fairness_enabled,
            vip_enabled=vip_enabled
        ),
        proofs=_proofs(session_id, len(ranked), fairness_enabled, vip_enabled, started)
    )


def _score_components(
    candidate: Candidate,
    fairness: Dict[str, FairnessResult],
    policies: List[VipPolicy],
    meeting_participants: List[str]
) -> ScoreComponents:
    """Collect the factors and explanation fragments for one candidate."""
    fairness_result = fairness.get(candidate.preferred_participant_hash or "")
    if fairness_result is None:
        fairness_result = FairnessResult(adjustment=NEUTRAL_ADJUSTMENT, explanation="fairness neutral")

    attendees = candidate.participant_hashes
    if attendees is None:
        attendees = meeting_participants
    vip_result: VipWeightResult = apply_vip_weight(policies, attendees)

    return ScoreComponents(
        time_preference_score=candidate.time_preference_score,
        constraint_score=candidate.constraint_score,
        fairness_adjustment=fairness_result.adjustment,
        vip_weight=vip_result.weight,
        base_explanation=candidate.base_explanation,
        fairness_explanation=fairness_result.explanation,
        vip_explanation=vip_result.explanation
    )


def _strategy(fairness_applied: bool, vip_applied: bool) -> str:
    if fairness_applied and vip_applied:
        return "fairness_adjusted+vip_priority"
    if fairness_applied:
        return "fairness_adjusted"
    if vip_applied:
        return "vip_priority"
    return "standard"


def _generate_overall_reasons(
    ranked: List[RankedCandidate],
    recommended: List[RankedCandidate],
    fairness_enabled: bool,
    vip_enabled: bool
) -> List[str]:
    """Generate overall reasons for the ranking."""
    reasons = []

    adjusted = sorted({
        r.candidate.preferred_participant_hash
        for r in ranked
        if r.components.fairness_adjustment != NEUTRAL_ADJUSTMENT
    })
    if adjusted:
        reasons.append(
            f"Fairness adjustments applied for {len(adjusted)} participant(s) "
            f"with uneven scheduling history: {', '.join(adjusted)}"
        )
    elif not fairness_enabled:
        reasons.append("Fairness adjustment disabled")

    vip_notes = sorted({
        r.components.vip_explanation
        for r in ranked
        if r.components.vip_weight > NEUTRAL_VIP_WEIGHT and r.components.vip_explanation
    })
    reasons.extend(vip_notes)
    if not vip_enabled:
        reasons.append("VIP weighting disabled")

    top = ranked[0]
    when = f" at {top.candidate.start}" if top.candidate.start else ""
    reasons.append(
        f"Top recommendation: {top.candidate.candidate_id}{when} "
        f"(score {top.score.final_score:.2f})"
    )

    if len(recommended) > 1:
        reasons.append(f"Showing top {len(recommended)} of {len(ranked)} candidates")

    return reasons


def _proofs(
    session_id: Optional[str],
    candidate_count: int,
    fairness_enabled: bool,
    vip_enabled: bool,
    started: float
) -> Proofs:
    return Proofs(
        trace_id=session_id,
        algorithm=ALGORITHM_ID,
        candidate_count=candidate_count,
        fairness_enabled=fairness_enabled,
        vip_enabled=vip_enabled,
        latency_ms=round((time.perf_counter() - started) * 1000, 3)
    )
