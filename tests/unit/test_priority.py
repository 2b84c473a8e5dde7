from __future__ import annotations

from messaging_service.domain.value_objects.enums import Priority


def test_priority_rank_follows_severity():
    ordered = sorted(Priority, key=lambda p: p.rank)

    assert ordered == [Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.URGENT]
    assert Priority.HIGH.rank > Priority.LOW.rank
    assert Priority("URGENT").rank == 3
