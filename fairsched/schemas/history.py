"""
History Schemas

Pydantic models for scheduling history and fairness results.

A SchedulingHistoryEntry is either a cumulative row (counters filled in) or a
per-session outcome row (session_id, scheduled_ts and got_preferred filled in,
counters left at zero). Entries are frozen: history is append-only.

Counters are not range-checked here; rows read back from a store may be
inconsistent, and fairness scoring sanitizes them.
"""

from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class SchedulingHistoryEntry(BaseModel):
    """
    One participant's scheduling-outcome record.

    Cumulative fields feed compute_fairness_score(); per-session fields are
    emitted by record_scheduling_outcome() and folded by aggregate_history().
    """
    participant_hash: str = Field(..., description="Hashed participant identifier")
    sessions_participated: int = Field(0, description="Sessions the participant took part in")
    sessions_preferred: int = Field(0, description="Sessions where the preferred slot was used")
    last_session_ts: Optional[str] = Field(None, description="Most recent session (ISO 8601)")
    session_id: Optional[str] = Field(None, description="Session id (per-session rows)")
    scheduled_ts: Optional[str] = Field(None, description="Scheduled meeting time (ISO 8601)")
    got_preferred: Optional[bool] = Field(None, description="Participant got the preferred slot")

    model_config = ConfigDict(frozen=True, extra="ignore")


class FairnessResult(BaseModel):
    """Output of compute_fairness_score()."""
    adjustment: float = Field(..., description="Fairness multiplier", ge=0.5, le=1.5)
    explanation: str = Field(..., description="Human-readable fairness note")

    model_config = ConfigDict(frozen=True)
