"""
Per-source sync coordination with single-flight semantics.
"""

from .coordinator import DEFAULT_SYNC_TIMEOUT_SECONDS, SyncCoordinator, SyncTimeoutError
from .metrics_store import SyncMetricsStore
from .strategies import CollectorStrategy, CountsExisting, NoopStrategy, SyncStrategy

__all__ = [
    "SyncCoordinator",
    "SyncTimeoutError",
    "SyncMetricsStore",
    "SyncStrategy",
    "CountsExisting",
    "NoopStrategy",
    "CollectorStrategy",
    "DEFAULT_SYNC_TIMEOUT_SECONDS",
]
