"""Tests for the waiting pool."""

from datetime import UTC, datetime

from mood_match.domain.moods import Mood
from mood_match.services.pool import WaitingPool

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def test_enqueue_is_idempotent() -> None:
    pool = WaitingPool()

    first = pool.enqueue("a", Mood.SAD, NOW)
    second = pool.enqueue("a", Mood.HAPPY, NOW)

    assert first is second
    assert second.mood == Mood.SAD
    assert len(pool) == 1


def test_dequeue_absent_handle_is_silent() -> None:
    pool = WaitingPool()

    assert pool.dequeue("missing") is None
    pool.enqueue("a", Mood.SAD, NOW)
    assert pool.dequeue("a") is not None
    assert "a" not in pool
    assert len(pool) == 0


def test_scan_yields_fifo_order_with_predicate() -> None:
    pool = WaitingPool()
    pool.enqueue("a", Mood.SAD, NOW)
    pool.enqueue("b", Mood.HAPPY, NOW)
    pool.enqueue("c", Mood.SAD, NOW)

    ids = [entry.handle_id for entry in pool.scan(lambda e: e.mood == Mood.SAD)]

    assert ids == ["a", "c"]
    assert [entry.handle_id for entry in pool.scan()] == ["a", "b", "c"]


def test_scan_survives_mutation_and_skips_removed_entries() -> None:
    pool = WaitingPool()
    pool.enqueue("a", Mood.SAD, NOW)
    pool.enqueue("b", Mood.SAD, NOW)
    pool.enqueue("c", Mood.SAD, NOW)

    seen = []
    for entry in pool.scan():
        seen.append(entry.handle_id)
        if entry.handle_id == "a":
            pool.dequeue("b")
            pool.enqueue("d", Mood.SAD, NOW)

    assert seen == ["a", "c"]
    assert [entry.handle_id for entry in pool.scan()] == ["a", "c", "d"]


def test_position_is_one_based() -> None:
    pool = WaitingPool()
    pool.enqueue("a", Mood.SAD, NOW)
    pool.enqueue("b", Mood.SAD, NOW)

    assert pool.position("a") == 1
    assert pool.position("b") == 2
    assert pool.position("missing") is None
