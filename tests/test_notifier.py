"""Tests for the notification queue."""

import pytest

from services.notifier import Notification, Notifier, QueueNotifier


class TestQueueNotifier:
    def test_helpers_set_level(self, notifier):
        notifier.success("saved")
        notifier.error("failed")
        notifier.warning("careful")
        notifier.info("fyi")

        assert [n.level for n in notifier.pending] == ["success", "error", "warning", "info"]

    def test_drain_empties_queue(self, notifier):
        notifier.success("saved")

        assert notifier.drain() == [Notification("saved", "success")]
        assert notifier.drain() == []

    def test_shares_backing_list(self):
        store = []
        QueueNotifier(store).error("boom")

        assert QueueNotifier(store).drain() == [Notification("boom", "error")]
        assert store == []

    def test_unknown_level_rejected(self, notifier):
        with pytest.raises(ValueError):
            notifier.notify("hi", "fatal")

    def test_base_notifier_is_abstract(self):
        with pytest.raises(TypeError):
            Notifier()
