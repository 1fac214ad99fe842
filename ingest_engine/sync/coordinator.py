"""
Per-source synchronization coordinator.

Each source id is either Idle or Running. A sync request for a Running
source does not start a second operation: the caller joins the in-flight one
and receives its result. Requests for different sources run in parallel.

Collaborator failures never escape: exceptions and timeouts are recorded in
the SyncResult, which always comes back with success == (no errors).
"""

import asyncio
import time
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

import psutil

from ingest_engine.core.models import SyncMetrics, SyncOutcome, SyncResult
from ingest_engine.core.standardization import Standardizer
from ingest_engine.observability import metrics
from ingest_engine.observability.logger import get_logger
from ingest_engine.quality.assessment import QualityAssessor
from ingest_engine.utils.validation import validate_source_id

from .metrics_store import DEFAULT_CAPACITY, SyncMetricsStore
from .strategies import CountsExisting, NoopStrategy, SyncStrategy

logger = get_logger(__name__)

DEFAULT_SYNC_TIMEOUT_SECONDS = 300.0
BYTES_PER_MB = 1024 * 1024


class SyncTimeoutError(Exception):
    """A sync run exceeded the coordinator deadline."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Sync timed out after {timeout_seconds}s")


def current_memory_bytes() -> int:
    """Resident set size of this process."""
    return psutil.Process().memory_info().rss


class SyncCoordinator:
    """
    Runs source-specific sync strategies with single-flight semantics and
    records timing, memory and throughput metrics per source.

    Args:
        strategies: source id -> strategy
        default_strategy: Strategy for unregistered sources (no-op when omitted)
        timeout_seconds: Deadline for one run, covering count_existing and
            fetch together; None disables the limit
        metrics_capacity: Number of sources whose last metrics are retained
        assessor: When set, batches returned by strategies are standardized
            and assessed, and the metrics attached to the SyncResult
        standardizer: Standardizer used before assessment
    """

    def __init__(
        self,
        strategies: Mapping[str, SyncStrategy] | None = None,
        default_strategy: SyncStrategy | None = None,
        timeout_seconds: float | None = DEFAULT_SYNC_TIMEOUT_SECONDS,
        metrics_capacity: int = DEFAULT_CAPACITY,
        assessor: QualityAssessor | None = None,
        standardizer: Standardizer | None = None,
    ):
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")

        self._strategies: dict[str, SyncStrategy] = {}
        for source_id, strategy in (strategies or {}).items():
            self.register(source_id, strategy)

        self.default_strategy = default_strategy or NoopStrategy()
        self.timeout_seconds = timeout_seconds
        self.assessor = assessor
        self.standardizer = standardizer or Standardizer()

        self._metrics = SyncMetricsStore(metrics_capacity)
        self._in_flight: dict[str, asyncio.Task] = {}
        self._in_flight_lock = asyncio.Lock()

    def register(self, source_id: str, strategy: SyncStrategy) -> None:
        """Register (or replace) the strategy for a source."""
        self._strategies[validate_source_id(source_id)] = strategy

    def strategy_for(self, source_id: str) -> SyncStrategy:
        return self._strategies.get(source_id, self.default_strategy)

    # =======================
    # SYNC ENTRY POINTS
    # =======================

    async def sync(self, source_id: str, options: Mapping[str, Any] | None = None) -> SyncResult:
        """
        Synchronize one source, joining the in-flight run if there is one.

        Args:
            source_id: Source to synchronize
            options: Passed through to the strategy (ignored when joining)

        Returns:
            SyncResult of the run this call started or joined

        Raises:
            ValidationError: If source_id is malformed
        """
        source_id = validate_source_id(source_id)

        async with self._in_flight_lock:
            task = self._in_flight.get(source_id)
            if task is not None:
                logger.info(
                    f"Sync for {source_id} already in progress, joining it",
                    extra={"source_id": source_id}
                )
                metrics.increment_counter(metrics.sync_joins_total, 1, source_id=source_id)
            else:
                task = asyncio.create_task(
                    self._run(source_id, dict(options or {})),
                    name=f"sync:{source_id}",
                )
                self._in_flight[source_id] = task
                metrics.set_gauge(metrics.syncs_in_flight, len(self._in_flight))

        # Cancelling one waiter must not cancel the run other callers share
        return await asyncio.shield(task)

    async def sync_many(self, source_ids: Iterable[str],
                        options: Mapping[str, Any] | None = None) -> dict[str, SyncResult]:
        """Synchronize several sources concurrently."""
        unique_ids = list(dict.fromkeys(validate_source_id(s) for s in source_ids))
        results = await asyncio.gather(*(self.sync(s, options) for s in unique_ids))
        return dict(zip(unique_ids, results))

    async def _run(self, source_id: str, options: dict[str, Any]) -> SyncResult:
        try:
            return await self._perform_sync(source_id, options)
        finally:
            self._in_flight.pop(source_id, None)
            metrics.set_gauge(metrics.syncs_in_flight, len(self._in_flight))

    # =======================
    # RUN
    # =======================

    async def _perform_sync(self, source_id: str, options: dict[str, Any]) -> SyncResult:
        start_time = datetime.now(timezone.utc)
        started = time.perf_counter()
        memory_start = current_memory_bytes()

        strategy = self.strategy_for(source_id)
        errors: list[str] = []
        outcome = SyncOutcome()
        existing_count = 0

        logger.info(
            f"Starting sync for {source_id}",
            extra={"source_id": source_id, "strategy": type(strategy).__name__, "options": options}
        )

        try:
            existing_count, outcome = await self._with_timeout(self._collect(strategy, source_id, options))
            errors.extend(outcome.errors)
            for _ in outcome.errors:
                metrics.record_sync_error(source_id, "reported")
        except SyncTimeoutError as e:
            message = str(e)
            logger.error(message, extra={"source_id": source_id})
            errors.append(message)
            outcome = SyncOutcome()
            metrics.record_sync_error(source_id, "timeout")
        except Exception as e:
            logger.error(
                f"Sync failed for {source_id}: {e}",
                extra={"source_id": source_id, "error_type": type(e).__name__},
                exc_info=True
            )
            errors.append(str(e) or type(e).__name__)
            outcome = SyncOutcome()
            metrics.record_sync_error(source_id, "exception")

        quality = None
        if outcome.records and self.assessor is not None:
            quality = await self._assess(source_id, outcome.records)

        duration_seconds = time.perf_counter() - started
        memory_end = current_memory_bytes()
        throughput = outcome.processed_items / duration_seconds if duration_seconds > 0 else 0.0

        sync_metrics = SyncMetrics(
            source_id=source_id,
            start_time=start_time,
            end_time=datetime.now(timezone.utc),
            duration_ms=round(duration_seconds * 1000, 3),
            memory_start_bytes=memory_start,
            memory_end_bytes=memory_end,
            memory_delta_mb=round((memory_end - memory_start) / BYTES_PER_MB, 2),
            new_items=outcome.new_items,
            processed_items=outcome.processed_items,
            errors=len(errors),
            throughput=round(throughput, 2),
        )
        self._metrics.put(source_id, sync_metrics)

        success = not errors
        metrics.record_sync_run(
            source_id=source_id,
            success=success,
            duration_seconds=duration_seconds,
            new_items=outcome.new_items,
            throughput=sync_metrics.throughput,
            memory_delta_mb=sync_metrics.memory_delta_mb,
        )

        logger.info(
            f"Sync completed for {source_id}",
            extra={
                "source_id": source_id,
                "success": success,
                "duration_ms": sync_metrics.duration_ms,
                "new_items": sync_metrics.new_items,
                "processed_items": sync_metrics.processed_items,
                "errors": len(errors),
                "memory_delta_mb": sync_metrics.memory_delta_mb,
                "throughput": sync_metrics.throughput,
            }
        )

        return SyncResult(
            success=success,
            metrics=sync_metrics,
            new_updates_count=outcome.new_items,
            existing_data_count=existing_count,
            errors=errors,
            quality=quality,
        )

    async def _collect(self, strategy: SyncStrategy, source_id: str,
                       options: dict[str, Any]) -> tuple[int, SyncOutcome]:
        existing_count = await self._count_existing(strategy, source_id)
        outcome = await self._fetch(strategy, source_id, options)
        return existing_count, outcome

    async def _count_existing(self, strategy: SyncStrategy, source_id: str) -> int:
        if not isinstance(strategy, CountsExisting):
            return 0
        return max(0, int(await strategy.count_existing(source_id)))

    async def _fetch(self, strategy: SyncStrategy, source_id: str, options: dict[str, Any]) -> SyncOutcome:
        outcome = await strategy.fetch(source_id, options)
        if not isinstance(outcome, SyncOutcome):
            raise TypeError(
                f"Strategy {type(strategy).__name__} returned {type(outcome).__name__}, expected SyncOutcome"
            )
        return outcome

    async def _with_timeout(self, awaitable):
        """
        Await under the coordinator deadline.

        Only the deadline itself raises SyncTimeoutError. A TimeoutError
        raised by the strategy propagates unchanged.
        """
        if self.timeout_seconds is None:
            return await awaitable

        task = asyncio.ensure_future(awaitable)
        try:
            done, _ = await asyncio.wait({task}, timeout=self.timeout_seconds)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if not done:
            task.cancel()
            await asyncio.wait({task})
            raise SyncTimeoutError(self.timeout_seconds)
        return task.result()

    async def _assess(self, source_id: str, records: list[Any]):
        try:
            standardized, _ = self.standardizer.standardize(records)
            return await self.assessor.assess(standardized)
        except Exception as e:
            logger.warning(
                f"Quality assessment of synced batch failed for {source_id}: {e}",
                extra={"source_id": source_id, "error_type": type(e).__name__},
                exc_info=True
            )
            return None

    # =======================
    # STATE AND METRICS ACCESS
    # =======================

    def is_running(self, source_id: str) -> bool:
        return source_id in self._in_flight

    def running_sources(self) -> list[str]:
        return sorted(self._in_flight)

    def get_sync_metrics(self, source_id: str) -> SyncMetrics | None:
        """Metrics of the most recent run for a source, if retained."""
        return self._metrics.get(source_id)

    def get_all_sync_metrics(self) -> dict[str, SyncMetrics]:
        return self._metrics.snapshot()

    def clear_metrics(self) -> None:
        self._metrics.clear()
        logger.info("Sync metrics cleared")
