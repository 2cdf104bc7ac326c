"""
Ranking and History Aggregation Tests

Tests for:
- ranking.rank_candidates()
- outcomes.aggregate_history()

Run: pytest fairsched/tests/test_ranking.py -v
"""

import logging

import pytest


# ==================== Fixtures ====================

@pytest.fixture
def cohort(make_history):
    """Alice got her preferred slot 8/10 times, Bob 2/10."""
    return [make_history("alice", 10, 8), make_history("bob", 10, 2)]


@pytest.fixture
def candidates():
    """Three candidate slots with base scores from the slot generator."""
    return [
        {
            "candidate_id": "slot-a",
            "start": "2026-03-02T09:00:00Z",
            "end": "2026-03-02T09:30:00Z",
            "time_preference_score": 30,
            "constraint_score": 10,
            "base_explanation": "morning slot (+30), within working hours (+10)",
            "preferred_participant_hash": "alice",
        },
        {
            "candidate_id": "slot-b",
            "start": "2026-03-02T14:00:00Z",
            "end": "2026-03-02T14:30:00Z",
            "time_preference_score": 25,
            "constraint_score": 10,
            "base_explanation": "afternoon slot (+25), within working hours (+10)",
            "preferred_participant_hash": "bob",
        },
        {
            "candidate_id": "slot-c",
            "start": "2026-03-02T17:00:00Z",
            "end": "2026-03-02T17:30:00Z",
            "time_preference_score": 20,
            "constraint_score": 0,
            "base_explanation": "late afternoon slot (+20)",
        },
    ]


# ==================== Ranking Tests ====================

def test_ranking_applies_fairness(cohort, candidates):
    """Bob's preferred slot overtakes Alice's after the fairness adjustment."""
    from fairsched.algorithms.ranking import rank_candidates

    result = rank_candidates(candidates, history=cohort, participant_hashes=["alice", "bob"])

    assert [r.candidate.candidate_id for r in result.ranked] == ["slot-b", "slot-a", "slot-c"]
    assert [r.rank for r in result.ranked] == [1, 2, 3]
    assert result.strategy == "fairness_adjusted"

    top = result.ranked[0]
    assert top.components.fairness_adjustment == 1.3
    assert top.score.final_score == (25 + 10) * 1.3 * 1.0
    assert "fairness adjustment for bob" in top.explanation
    assert top.explanation.startswith("afternoon slot (+25)")

    neutral = result.ranked[2]
    assert neutral.explanation == "late afternoon slot (+20)"
    assert any("alice, bob" in reason for reason in result.reasons)
    assert any("Top recommendation: slot-b" in reason for reason in result.reasons)


def test_ranking_applies_vip(cohort, candidates, make_vip_policy):
    """Meeting-level VIP weight applies unless a candidate lists its own attendees."""
    from fairsched.algorithms.ranking import rank_candidates

    candidates[2]["participant_hashes"] = ["alice"]
    policies = [make_vip_policy("ceo", "CEO", 2.0)]

    result = rank_candidates(
        candidates,
        history=cohort,
        policies=policies,
        participant_hashes=["alice", "bob", "ceo"],
    )

    by_id = {r.candidate.candidate_id: r for r in result.ranked}
    assert by_id["slot-a"].components.vip_weight == 2.0
    assert by_id["slot-b"].components.vip_weight == 2.0
    assert by_id["slot-c"].components.vip_weight == 1.0
    assert "VIP priority: CEO (2.0x)" in by_id["slot-b"].explanation
    assert "VIP" not in by_id["slot-c"].explanation
    assert result.strategy == "fairness_adjusted+vip_priority"
    assert "VIP priority: CEO (2.0x)" in result.reasons


def test_ranking_vip_only(candidates, make_vip_policy):
    """Without history only VIP weighting shapes the ranking."""
    from fairsched.algorithms.ranking import rank_candidates

    result = rank_candidates(
        candidates,
        policies=[make_vip_policy("ceo", "CEO", 2.0)],
        participant_hashes=["ceo"],
    )

    assert result.strategy == "vip_priority"
    assert [r.candidate.candidate_id for r in result.ranked] == ["slot-a", "slot-b", "slot-c"]


def test_ranking_top_n(cohort, candidates):
    """recommended is the head of ranked."""
    from fairsched.algorithms.ranking import rank_candidates

    result = rank_candidates(candidates, history=cohort, top_n=2)

    assert len(result.ranked) == 3
    assert len(result.recommended) == 2
    assert result.recommended == result.ranked[:2]
    assert "Showing top 2 of 3 candidates" in result.reasons


def test_ranking_top_n_from_settings(monkeypatch, cohort, candidates):
    """RANKING_TOP_N sets the default recommended size."""
    from fairsched.algorithms.ranking import rank_candidates

    monkeypatch.setenv("RANKING_TOP_N", "1")

    result = rank_candidates(candidates, history=cohort)

    assert len(result.recommended) == 1
    assert result.recommended[0].candidate.candidate_id == "slot-b"


def test_ranking_ties_keep_input_order():
    """Equal final scores keep the generator's order."""
    from fairsched.algorithms.ranking import rank_candidates

    candidates = [
        {"candidate_id": f"slot-{i}", "time_preference_score": 10, "constraint_score": 5}
        for i in range(4)
    ]

    result = rank_candidates(candidates)

    assert [r.candidate.candidate_id for r in result.ranked] == ["slot-0", "slot-1", "slot-2", "slot-3"]
    assert result.strategy == "standard"


def test_ranking_fairness_disabled(monkeypatch, cohort, candidates):
    """ENABLE_FAIRNESS=false ranks on base scores only."""
    from fairsched.algorithms.ranking import rank_candidates

    monkeypatch.setenv("ENABLE_FAIRNESS", "false")

    result = rank_candidates(candidates, history=cohort)

    assert [r.candidate.candidate_id for r in result.ranked] == ["slot-a", "slot-b", "slot-c"]
    assert all(r.components.fairness_adjustment == 1.0 for r in result.ranked)
    assert result.strategy == "standard"
    assert "Fairness adjustment disabled" in result.reasons
    assert result.proofs.fairness_enabled is False


def test_ranking_vip_disabled(monkeypatch, candidates, make_vip_policy):
    """ENABLE_VIP_WEIGHTING=false ignores VIP policies."""
    from fairsched.algorithms.ranking import rank_candidates

    monkeypatch.setenv("ENABLE_VIP_WEIGHTING", "false")

    result = rank_candidates(
        candidates,
        policies=[make_vip_policy("ceo", "CEO", 2.0)],
        participant_hashes=["ceo"],
    )

    assert all(r.components.vip_weight == 1.0 for r in result.ranked)
    assert "VIP weighting disabled" in result.reasons
    assert result.proofs.vip_enabled is False


def test_ranking_empty_candidates():
    """No candidates is a valid, empty ranking."""
    from fairsched.algorithms.ranking import rank_candidates

    result = rank_candidates([])

    assert result.strategy == "no_candidates"
    assert result.ranked == []
    assert result.recommended == []
    assert "No candidate slots" in result.reasons[0]
    assert result.proofs.candidate_count == 0


def test_ranking_proofs_and_trace_id(caplog, cohort, candidates):
    """The session id tags the ranking's log lines and is recorded in proofs."""
    from fairsched.algorithms.ranking import ALGORITHM_ID, rank_candidates
    from fairsched.core.logging import TraceIdFilter, get_trace_id

    caplog.handler.addFilter(TraceIdFilter())
    with caplog.at_level(logging.INFO, logger="fairsched.algorithms.ranking"):
        result = rank_candidates(candidates, history=cohort, session_id="ses_42")

    assert result.proofs.trace_id == "ses_42"
    assert result.proofs.algorithm == ALGORITHM_ID
    assert result.proofs.candidate_count == 3
    assert result.proofs.latency_ms >= 0

    ranked_logs = [r for r in caplog.records if r.getMessage().startswith("Ranked 3 candidates")]
    assert [r.trace_id for r in ranked_logs] == ["ses_42"]
    assert get_trace_id() == "-"


def test_ranking_restores_trace_id(cohort, candidates):
    """A session's trace id does not carry over to later calls."""
    from fairsched.algorithms.ranking import rank_candidates
    from fairsched.core.logging import get_trace_id, reset_trace_id, set_trace_id

    rank_candidates(candidates, history=cohort, session_id="ses_A")
    assert get_trace_id() == "-"

    rank_candidates(candidates, history=cohort)
    assert get_trace_id() == "-"

    token = set_trace_id("outer")
    try:
        rank_candidates(candidates, history=cohort, session_id="ses_B")
        assert get_trace_id() == "outer"
    finally:
        reset_trace_id(token)


def test_ranking_restores_trace_id_on_error():
    """The trace id is restored even when validation fails."""
    from fairsched.algorithms.ranking import rank_candidates
    from fairsched.core.errors import ValidationError
    from fairsched.core.logging import get_trace_id

    with pytest.raises(ValidationError):
        rank_candidates([{"candidate_id": "slot-x"}], session_id="ses_C")

    assert get_trace_id() == "-"


def test_ranking_survives_corrupt_history(candidates):
    """One inconsistent history row does not abort the ranking."""
    from fairsched.algorithms.ranking import rank_candidates

    history = [
        {"participant_hash": "alice", "sessions_participated": 2, "sessions_preferred": 3},
        {"participant_hash": "bob", "sessions_participated": 10, "sessions_preferred": 2},
    ]

    result = rank_candidates(candidates, history=history)

    by_id = {r.candidate.candidate_id: r for r in result.ranked}
    assert by_id["slot-a"].components.fairness_adjustment == 0.6
    assert by_id["slot-b"].components.fairness_adjustment == 1.4
    assert result.ranked[0].candidate.candidate_id == "slot-b"


def test_ranking_deterministic(cohort, candidates, make_vip_policy):
    """Same snapshot, same ranking."""
    from fairsched.algorithms.ranking import rank_candidates

    policies = [make_vip_policy("ceo", "CEO", 2.0)]
    first = rank_candidates(candidates, history=cohort, policies=policies, participant_hashes=["ceo"])
    second = rank_candidates(candidates, history=cohort, policies=policies, participant_hashes=["ceo"])

    assert [r.model_dump() for r in first.ranked] == [r.model_dump() for r in second.ranked]


def test_ranking_invalid_candidate():
    """A candidate without a base score is rejected at the boundary."""
    from fairsched.algorithms.ranking import rank_candidates
    from fairsched.core.errors import ValidationError

    with pytest.raises(ValidationError) as exc_info:
        rank_candidates([{"candidate_id": "slot-x"}])

    assert exc_info.value.details["model"] == "Candidate"


# ==================== History Aggregation Tests ====================

def test_aggregate_from_outcomes():
    """Outcome entries fold into cumulative counters."""
    from fairsched.algorithms.outcomes import aggregate_history, record_scheduling_outcome

    outcomes = (
        record_scheduling_outcome("ses_1", ["alice", "bob"], "alice", "2026-03-02T10:00:00Z")
        + record_scheduling_outcome("ses_2", ["alice", "bob"], "alice", "2026-03-09T10:00:00Z")
        + record_scheduling_outcome("ses_3", ["bob", "carol"], None, "2026-03-05T10:00:00Z")
    )

    history = {e.participant_hash: e for e in aggregate_history(outcomes)}

    assert list(history) == ["alice", "bob", "carol"]
    assert (history["alice"].sessions_participated, history["alice"].sessions_preferred) == (2, 2)
    assert (history["bob"].sessions_participated, history["bob"].sessions_preferred) == (3, 0)
    assert (history["carol"].sessions_participated, history["carol"].sessions_preferred) == (1, 0)
    assert history["bob"].last_session_ts == "2026-03-09T10:00:00Z"
    assert history["carol"].last_session_ts == "2026-03-05T10:00:00Z"


def test_aggregate_replay_is_idempotent():
    """Replaying the same outcome entries counts them once."""
    from fairsched.algorithms.outcomes import aggregate_history, record_scheduling_outcome

    outcomes = record_scheduling_outcome("ses_1", ["alice", "bob"], "bob", "2026-03-02T10:00:00Z")

    once = aggregate_history(outcomes)
    replayed = aggregate_history(outcomes + outcomes)

    assert once == replayed


def test_aggregate_with_baseline(make_history):
    """New outcomes add to baseline counters without mutating the baseline."""
    from fairsched.algorithms.outcomes import aggregate_history, record_scheduling_outcome

    baseline = [make_history("alice", 10, 8, "2026-03-01T10:00:00Z")]
    outcomes = record_scheduling_outcome("ses_9", ["dave", "alice"], "dave", "2026-03-10T09:00:00Z")

    history = aggregate_history(outcomes, baseline=baseline)

    assert [e.participant_hash for e in history] == ["alice", "dave"]
    assert (history[0].sessions_participated, history[0].sessions_preferred) == (11, 8)
    assert history[0].last_session_ts == "2026-03-10T09:00:00Z"
    assert (history[1].sessions_participated, history[1].sessions_preferred) == (1, 1)
    assert baseline[0].sessions_participated == 10


def test_aggregate_ignores_rows_without_session():
    """Cumulative rows passed as outcomes are not counted."""
    from fairsched.algorithms.outcomes import aggregate_history

    history = aggregate_history([{"participant_hash": "alice", "sessions_participated": 4}])

    assert history == []


def test_aggregate_feeds_fairness():
    """Aggregated history is directly usable for fairness scoring."""
    from fairsched.algorithms.fairness import compute_fairness_score
    from fairsched.algorithms.outcomes import aggregate_history, record_scheduling_outcome

    outcomes = []
    for i in range(4):
        preferred = "alice" if i < 3 else "bob"
        outcomes += record_scheduling_outcome(f"ses_{i}", ["alice", "bob"], preferred, f"2026-03-0{i + 1}T10:00:00Z")

    history = aggregate_history(outcomes)

    # alice 3/4, bob 1/4, average 0.5
    assert compute_fairness_score(history, "alice").adjustment == 0.75
    assert compute_fairness_score(history, "bob").adjustment == 1.25


def test_aggregate_carries_corrupt_baseline():
    """A corrupt baseline row is folded as-is instead of raising."""
    from fairsched.algorithms.outcomes import aggregate_history, record_scheduling_outcome

    baseline = [{"participant_hash": "alice", "sessions_participated": 1, "sessions_preferred": 3}]
    outcomes = record_scheduling_outcome("ses_1", ["alice"], "alice", "2026-03-02T10:00:00Z")

    history = aggregate_history(outcomes, baseline=baseline)

    assert (history[0].sessions_participated, history[0].sessions_preferred) == (2, 4)
