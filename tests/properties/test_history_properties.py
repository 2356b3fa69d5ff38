"""Property-based tests for the history list.

Verifies, for any sequence of accesses:
- No id appears twice.
- The list never exceeds its cap.
- The order is most-recent-first over distinct ids.
"""
from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from projectpilot.discovery.models import ProjectEntry
from projectpilot.storage.history import HistoryStore
from projectpilot.storage.kv import HISTORY_KEY, MemoryStore

accesses = st.lists(st.sampled_from(["a", "b", "c", "d", "e", "f", "g"]), max_size=30)


def _expected(names: list[str], limit: int) -> list[str]:
    order: list[str] = []
    for name in reversed(names):
        if name not in order:
            order.append(name)
    return order[:limit]


class TestHistoryInvariants:

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(names=accesses, limit=st.integers(min_value=1, max_value=8))
    def test_unique_capped_most_recent_first(self, names: list[str], limit: int) -> None:
        history: HistoryStore[ProjectEntry] = HistoryStore(
            MemoryStore(), HISTORY_KEY, ProjectEntry, limit=limit,
        )
        for name in names:
            history.add(ProjectEntry.for_path(f"/w/{name}"))

        ids = history.ids()
        assert len(ids) == len(set(ids))
        assert len(ids) <= limit
        assert ids == [f"/w/{n}" for n in _expected(names, limit)]
