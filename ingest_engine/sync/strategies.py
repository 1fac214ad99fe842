"""
Fetch/ingest strategies plugged into the sync coordinator.

A strategy is the source-specific collaborator that talks to an upstream
system (FDA, EMA, court registries, ...). The coordinator only needs it to be
awaitable and to report what it did as a SyncOutcome.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from ingest_engine.core.models import SyncOutcome
from ingest_engine.observability.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class SyncStrategy(Protocol):
    """Fetches and ingests new data for one source."""

    async def fetch(self, source_id: str, options: Mapping[str, Any]) -> SyncOutcome:
        ...


@runtime_checkable
class CountsExisting(Protocol):
    """Optional capability: report how many items a source already has."""

    async def count_existing(self, source_id: str) -> int:
        ...


class NoopStrategy:
    """
    Used for sources without a registered strategy: reports nothing new,
    never invents items.
    """

    async def fetch(self, source_id: str, options: Mapping[str, Any]) -> SyncOutcome:
        logger.info(
            f"No sync strategy registered for {source_id}, nothing to fetch",
            extra={"source_id": source_id}
        )
        return SyncOutcome()


class CollectorStrategy:
    """
    Adapts a plain record collector to a SyncStrategy.

    The collector is an async callable returning the freshly fetched raw
    records. Every returned record is counted as processed; `is_new` decides
    which of them count as new (all of them when omitted).

    Args:
        collector: async (source_id, options) -> sequence of raw records
        is_new: Optional predicate over a record
        existing_counter: Optional async (source_id) -> int
    """

    def __init__(
        self,
        collector: Callable[[str, Mapping[str, Any]], Awaitable[Sequence[Any]]],
        is_new: Callable[[Any], bool] | None = None,
        existing_counter: Callable[[str], Awaitable[int]] | None = None,
    ):
        self.collector = collector
        self.is_new = is_new
        self.existing_counter = existing_counter

    async def fetch(self, source_id: str, options: Mapping[str, Any]) -> SyncOutcome:
        records = list(await self.collector(source_id, options))
        new_items = len(records) if self.is_new is None else sum(1 for r in records if self.is_new(r))
        return SyncOutcome(new_items=new_items, processed_items=len(records), records=records)

    async def count_existing(self, source_id: str) -> int:
        if self.existing_counter is None:
            return 0
        return await self.existing_counter(source_id)
