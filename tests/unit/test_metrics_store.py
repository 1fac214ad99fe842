"""
Unit tests for the bounded sync metrics store.
"""

import threading
from datetime import datetime, timezone

import pytest

from ingest_engine.core.models import SyncMetrics
from ingest_engine.sync import SyncMetricsStore
from ingest_engine.utils.validation import ValidationError


def sample(source_id, new_items=0):
    now = datetime.now(timezone.utc)
    return SyncMetrics(source_id=source_id, start_time=now, end_time=now, duration_ms=1.0, new_items=new_items)


class TestSyncMetricsStore:
    """Tests for SyncMetricsStore"""

    def test_put_and_get(self):
        store = SyncMetricsStore()
        store.put("fda_510k", sample("fda_510k"))

        assert store.get("fda_510k").source_id == "fda_510k"
        assert store.get("ema_epar") is None
        assert "fda_510k" in store
        assert len(store) == 1

    def test_overwrites_previous_entry(self):
        store = SyncMetricsStore()
        store.put("fda_510k", sample("fda_510k", new_items=1))
        store.put("fda_510k", sample("fda_510k", new_items=2))

        assert store.get("fda_510k").new_items == 2
        assert len(store) == 1

    def test_evicts_least_recently_updated(self):
        """Test capacity bound evicts the oldest update, not the oldest insert"""
        store = SyncMetricsStore(capacity=2)
        store.put("a", sample("a"))
        store.put("b", sample("b"))
        store.put("a", sample("a"))
        store.put("c", sample("c"))

        assert list(store.snapshot()) == ["a", "c"]
        assert store.get("b") is None

    def test_clear(self):
        store = SyncMetricsStore()
        store.put("a", sample("a"))
        store.clear()

        assert store.snapshot() == {}

    @pytest.mark.parametrize("capacity", [0, -1, True, "10"])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValidationError):
            SyncMetricsStore(capacity=capacity)

    def test_concurrent_writers_respect_capacity(self):
        store = SyncMetricsStore(capacity=50)

        def writer(prefix):
            for n in range(200):
                store.put(f"{prefix}-{n}", sample(f"{prefix}-{n}"))

        threads = [threading.Thread(target=writer, args=(f"w{i}",)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 50
