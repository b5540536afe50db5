"""Tests for the dispatch queue and full scan scheduler."""

import json

from uft_discovery.config import STATE_DIR
from uft_discovery.dispatch import (
    DISPATCH_QUEUE_FILE,
    FULL_SCAN_MARKER,
    DispatchQueue,
    MarkerFullScanScheduler,
    QueuedResult,
)


class TestDispatchQueue:
    def test_fifo_without_duplicates(self, tmp_path):
        queue = DispatchQueue(tmp_path / "queue.db")

        queue.enqueue_result("nightly", 4)
        queue.enqueue_result("nightly", 5)
        queue.enqueue_result("nightly", 4)

        assert len(queue) == 2
        assert queue.pending() == [QueuedResult("nightly", 4), QueuedResult("nightly", 5)]
        assert queue.pop_next() == ("nightly", 4)
        assert queue.pop_next() == ("nightly", 5)
        assert queue.pop_next() is None

    def test_entries_survive_a_new_instance(self, workspace):
        DispatchQueue.for_workspace(workspace).enqueue_result("nightly", 7)

        reopened = DispatchQueue.for_workspace(workspace)

        assert reopened.db_path == workspace / STATE_DIR / DISPATCH_QUEUE_FILE
        assert reopened.pending() == [QueuedResult("nightly", 7)]
        reopened.enqueue_result("nightly", 7)
        assert reopened.size() == 1

    def test_same_build_of_different_jobs(self, tmp_path):
        queue = DispatchQueue(tmp_path / "queue.db")

        queue.enqueue_result("nightly", 1)
        queue.enqueue_result("weekly", 1)

        assert queue.size() == 2

    def test_pending_does_not_remove(self, tmp_path):
        queue = DispatchQueue(tmp_path / "queue.db")
        queue.enqueue_result("nightly", 1)

        queue.pending()

        assert queue.size() == 1


def test_marker_scheduler_lifecycle(tmp_path):
    scheduler = MarkerFullScanScheduler(tmp_path / "state")
    assert scheduler.is_pending() is False

    scheduler.schedule_full_scan(60, cause="Full sync required by build 7")

    assert scheduler.is_pending() is True
    payload = json.loads((tmp_path / "state" / FULL_SCAN_MARKER).read_text(encoding="utf-8"))
    assert payload["cause"] == "Full sync required by build 7"
    assert payload["delay_seconds"] == 60
    assert "requested_at" in payload

    scheduler.clear()
    assert scheduler.is_pending() is False
    scheduler.clear()
