"""
Bounded per-source store for the latest SyncMetrics.
"""

import threading
from collections import OrderedDict

from ingest_engine.core.models import SyncMetrics
from ingest_engine.utils.validation import validate_limit

DEFAULT_CAPACITY = 256


class SyncMetricsStore:
    """
    Keeps the most recent SyncMetrics per source id.

    A new entry replaces the previous one for that source. When capacity is
    exceeded, the least recently updated source is evicted. Safe to use from
    multiple threads.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self.capacity = validate_limit(capacity, "capacity", max_limit=1_000_000)
        self._entries: OrderedDict[str, SyncMetrics] = OrderedDict()
        self._lock = threading.Lock()

    def put(self, source_id: str, metrics: SyncMetrics) -> None:
        with self._lock:
            self._entries[source_id] = metrics
            self._entries.move_to_end(source_id)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def get(self, source_id: str) -> SyncMetrics | None:
        with self._lock:
            return self._entries.get(source_id)

    def snapshot(self) -> dict[str, SyncMetrics]:
        """Copy of all entries, least recently updated first."""
        with self._lock:
            return dict(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, source_id: str) -> bool:
        with self._lock:
            return source_id in self._entries
