import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so that "fairsched" can be imported
# without installing the package
current_dir = Path(__file__).parent.absolute()
root_dir = current_dir.parent.parent
sys.path.insert(0, str(root_dir))


@pytest.fixture
def make_history():
    """Factory for cumulative SchedulingHistoryEntry models."""
    from fairsched.schemas import SchedulingHistoryEntry

    def _make(participant_hash="alice_hash", participated=5, preferred=3,
              last_session_ts="2026-03-01T10:00:00Z"):
        return SchedulingHistoryEntry(
            participant_hash=participant_hash,
            sessions_participated=participated,
            sessions_preferred=preferred,
            last_session_ts=last_session_ts,
        )

    return _make


@pytest.fixture
def make_vip_policy():
    """Factory for VipPolicy models."""
    from fairsched.schemas import VipPolicy

    def _make(participant_hash="vip_hash", display_name="Sarah - Investor", priority_weight=2.0):
        return VipPolicy(
            participant_hash=participant_hash,
            display_name=display_name,
            priority_weight=priority_weight,
        )

    return _make


@pytest.fixture(autouse=True)
def clean_engine_env(monkeypatch):
    """Keep engine settings at their defaults unless a test overrides them."""
    for name in ("RANKING_TOP_N", "ENABLE_FAIRNESS", "ENABLE_VIP_WEIGHTING", "APP_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
