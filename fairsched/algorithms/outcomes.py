"""
Scheduling Outcome Recording

Turns a committed scheduling decision into append-only history entries, and
folds those entries back into the cumulative counters that fairness scoring
reads.

record_scheduling_outcome() is pure: it emits one per-session entry per
participant and never touches counters. aggregate_history() recomputes the
counters from the event log; each (session_id, participant_hash) pair counts
once.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union

from fairsched.schemas.base import ensure_models
from fairsched.schemas.history import SchedulingHistoryEntry

logger = logging.getLogger(__name__)


# ============================================================================
# Recording
# ============================================================================


def record_scheduling_outcome(
    session_id: str,
    participant_hashes: Iterable[str],
    preferred_participant_hash: Optional[str],
    scheduled_ts: Union[str, datetime]
) -> List[SchedulingHistoryEntry]:
    """
    Create outcome entries for every participant of a committed session.

    Args:
        session_id: The committed scheduling session id.
        participant_hashes: All participants in the meeting (order preserved).
        preferred_participant_hash: Participant whose preferred slot was used,
            or None for a compromise slot.
        scheduled_ts: Scheduled meeting time (ISO string or datetime).

    Returns:
        One SchedulingHistoryEntry per participant.
    """
    ts = _format_ts(scheduled_ts)

    return [
        SchedulingHistoryEntry(
            participant_hash=participant,
            session_id=session_id,
            scheduled_ts=ts,
            got_preferred=participant == preferred_participant_hash,
        )
        for participant in participant_hashes
    ]


# ============================================================================
# Aggregation
# ============================================================================


def aggregate_history(
    outcomes: Iterable[Any],
    baseline: Optional[Iterable[Any]] = None
) -> List[SchedulingHistoryEntry]:
    """
    Fold per-session outcome entries into cumulative history entries.

    Args:
        outcomes: Per-session entries (from record_scheduling_outcome).
            Each (session_id, participant_hash) pair is counted once.
        baseline: Optional cumulative entries to start from.

    Returns:
        New cumulative entries: baseline participants first, in baseline
        order, then new participants in order of first appearance.
    """
    outcomes = ensure_models(SchedulingHistoryEntry, outcomes)
    baseline = ensure_models(SchedulingHistoryEntry, baseline)

    counters: Dict[str, Dict[str, Any]] = {}
    for entry in baseline:
        if entry.participant_hash in counters:
            logger.warning(f"Duplicate baseline entry for {entry.participant_hash}; using the first")
            continue
        counters[entry.participant_hash] = {
            "sessions_participated": entry.sessions_participated,
            "sessions_preferred": entry.sessions_preferred,
            "last_session_ts": entry.last_session_ts,
        }

    seen: Set[Tuple[str, str]] = set()
    skipped = 0
    for outcome in outcomes:
        if not outcome.session_id:
            skipped += 1
            continue
        key = (outcome.session_id, outcome.participant_hash)
        if key in seen:
            continue
        seen.add(key)

        row = counters.setdefault(outcome.participant_hash, {
            "sessions_participated": 0,
            "sessions_preferred": 0,
            "last_session_ts": None,
        })
        row["sessions_participated"] += 1
        if outcome.got_preferred:
            row["sessions_preferred"] += 1
        row["last_session_ts"] = _latest_ts(row["last_session_ts"], outcome.scheduled_ts)

    if skipped:
        logger.debug(f"Ignored {skipped} outcome entries without session_id")

    return [
        SchedulingHistoryEntry(participant_hash=participant, **row)
        for participant, row in counters.items()
    ]


# ============================================================================
# Helpers
# ============================================================================


def _format_ts(ts: Union[str, datetime]) -> str:
    if isinstance(ts, datetime):
        return ts.isoformat()
    return ts


def _parse_time(time_input: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp, accepting a trailing Z."""
    if not time_input:
        return None
    try:
        return datetime.fromisoformat(time_input.replace("Z", "+00:00"))
    except ValueError:
        return None


def _latest_ts(current: Optional[str], candidate: Optional[str]) -> Optional[str]:
    """Return whichever timestamp is later; unparseable values compare as strings."""
    if not current:
        return candidate
    if not candidate:
        return current

    current_dt = _parse_time(current)
    candidate_dt = _parse_time(candidate)
    if current_dt is not None and candidate_dt is not None:
        try:
            return candidate if candidate_dt > current_dt else current
        except TypeError:
            # naive vs aware datetimes
            pass
    return candidate if candidate > current else current
