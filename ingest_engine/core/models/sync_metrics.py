"""
Sync run models: the metrics captured per run and the result handed to callers.
"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from .quality_metrics import DataQualityMetrics


class SyncMetrics(BaseModel):
    """
    Timing, memory and throughput figures for one sync run of a source.

    Attributes:
        source_id: Source that was synchronized
        start_time: Wall-clock start (UTC)
        end_time: Wall-clock end (UTC)
        duration_ms: Run duration in milliseconds
        memory_start_bytes: Process RSS when the run started
        memory_end_bytes: Process RSS when the run finished
        memory_delta_mb: (end - start) in megabytes, rounded
        new_items: New items reported by the strategy
        processed_items: Items the strategy processed
        errors: Number of errors recorded
        throughput: processed_items per second, rounded to 2 decimals
    """

    model_config = ConfigDict(frozen=True)

    source_id: str
    start_time: datetime
    end_time: datetime
    duration_ms: float = Field(..., ge=0.0)
    memory_start_bytes: int = 0
    memory_end_bytes: int = 0
    memory_delta_mb: float = 0.0
    new_items: int = Field(0, ge=0)
    processed_items: int = Field(0, ge=0)
    errors: int = Field(0, ge=0)
    throughput: float = Field(0.0, ge=0.0)


class SyncOutcome(BaseModel):
    """
    What a source-specific fetch/ingest strategy reports back.

    Attributes:
        new_items: Items that were new to the system
        processed_items: Items fetched and processed
        errors: Non-fatal errors the strategy recorded itself
        records: Freshly fetched raw records, when the strategy exposes them
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    new_items: int = Field(0, ge=0)
    processed_items: int = Field(0, ge=0)
    errors: List[str] = Field(default_factory=list)
    records: List[Any] | None = None


class SyncResult(BaseModel):
    """
    Structured result of a sync request. Never replaced by an exception.

    Attributes:
        success: True iff errors is empty
        metrics: Metrics captured for the run
        new_updates_count: New items (0 on failure or no-op)
        existing_data_count: Items the source already had before the run
        errors: Error messages recorded during the run
        quality: Quality metrics of the fetched batch, when assessed
    """

    success: bool
    metrics: SyncMetrics
    new_updates_count: int = Field(0, ge=0)
    existing_data_count: int = Field(0, ge=0)
    errors: List[str] = Field(default_factory=list)
    quality: DataQualityMetrics | None = None
