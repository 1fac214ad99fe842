"""
Prometheus metrics collection for the ingestion quality engine

Covers two concerns: data quality of assessed batches and the health of
per-source synchronization runs.
"""
import os
from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from typing import Optional


REGISTRY = CollectorRegistry()


# =======================
# DATA QUALITY METRICS
# =======================

records_assessed_total = Counter(
    name="ingest_records_assessed_total",
    documentation="Total number of records run through quality assessment",
    labelnames=["status"],  # status: valid, invalid
    registry=REGISTRY,
)

validation_failures_total = Counter(
    name="ingest_validation_failures_total",
    documentation="Total number of validation error messages produced",
    labelnames=["field_name"],
    registry=REGISTRY,
)

duplicate_matches_total = Counter(
    name="ingest_duplicate_matches_total",
    documentation="Total number of duplicate pairs detected",
    labelnames=["match_type"],  # match_type: exact, fuzzy
    registry=REGISTRY,
)

quality_score = Histogram(
    name="ingest_quality_score",
    documentation="Distribution of per-record quality scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
    registry=REGISTRY,
)

assessment_duration_seconds = Histogram(
    name="ingest_assessment_duration_seconds",
    documentation="Time spent assessing a batch in seconds",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)

batch_size = Histogram(
    name="ingest_batch_size_records",
    documentation="Number of records in each assessed batch",
    buckets=[1, 10, 50, 100, 500, 1000, 5000],
    registry=REGISTRY,
)

# =======================
# SYNC METRICS
# =======================

sync_runs_total = Counter(
    name="ingest_sync_runs_total",
    documentation="Total number of sync runs",
    labelnames=["source_id", "status"],  # status: success, failure
    registry=REGISTRY,
)

sync_duration_seconds = Histogram(
    name="ingest_sync_duration_seconds",
    documentation="Duration of sync runs in seconds",
    labelnames=["source_id"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0],
    registry=REGISTRY,
)

sync_new_items_total = Counter(
    name="ingest_sync_new_items_total",
    documentation="Total number of new items reported by sync strategies",
    labelnames=["source_id"],
    registry=REGISTRY,
)

sync_errors_total = Counter(
    name="ingest_sync_errors_total",
    documentation="Total number of errors recorded by sync runs",
    labelnames=["source_id", "error_type"],  # error_type: exception, timeout, reported
    registry=REGISTRY,
)

sync_throughput_items_per_second = Gauge(
    name="ingest_sync_throughput_items_per_second",
    documentation="Throughput of the last sync run per source",
    labelnames=["source_id"],
    registry=REGISTRY,
)

sync_memory_delta_megabytes = Gauge(
    name="ingest_sync_memory_delta_megabytes",
    documentation="Process memory delta observed over the last sync run",
    labelnames=["source_id"],
    registry=REGISTRY,
)

syncs_in_flight = Gauge(
    name="ingest_syncs_in_flight",
    documentation="Number of sync operations currently running",
    registry=REGISTRY,
)

sync_joins_total = Counter(
    name="ingest_sync_joins_total",
    documentation="Sync requests that joined an already running operation",
    labelnames=["source_id"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """Generate Prometheus metrics in text format"""
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Get content type for Prometheus metrics"""
    return CONTENT_TYPE_LATEST


def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """Increment a counter metric, with or without labels."""
    if value <= 0:
        return
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    """Set a gauge metric value"""
    if labels:
        gauge.labels(**labels).set(value)
    else:
        gauge.set(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """Observe a value in a histogram metric"""
    if labels:
        histogram.labels(**labels).observe(value)
    else:
        histogram.observe(value)


# =======================
# DOMAIN HELPERS
# =======================

def record_assessment(
    total_records: int,
    valid_records: int,
    exact_matches: int,
    fuzzy_matches: int,
    scores: list[int],
    duration_seconds: float,
) -> None:
    """
    Record the outcome of one batch assessment.

    Args:
        total_records: Records in the batch
        valid_records: Records that passed validation
        exact_matches: Exact duplicate pairs found
        fuzzy_matches: Fuzzy duplicate pairs found
        scores: Per-record quality scores
        duration_seconds: Wall-clock duration of the assessment
    """
    increment_counter(records_assessed_total, valid_records, status="valid")
    increment_counter(records_assessed_total, total_records - valid_records, status="invalid")
    increment_counter(duplicate_matches_total, exact_matches, match_type="exact")
    increment_counter(duplicate_matches_total, fuzzy_matches, match_type="fuzzy")

    for score in scores:
        observe_histogram(quality_score, score)

    observe_histogram(batch_size, total_records)
    observe_histogram(assessment_duration_seconds, duration_seconds)


def record_validation_failure(field_name: str) -> None:
    """Record a single validation error for a field."""
    increment_counter(validation_failures_total, 1, field_name=field_name)


def record_sync_run(
    source_id: str,
    success: bool,
    duration_seconds: float,
    new_items: int,
    throughput: float,
    memory_delta_mb: float,
) -> None:
    """
    Record the outcome of one sync run.

    Args:
        source_id: Source that was synchronized
        success: Whether the run recorded no errors
        duration_seconds: Run duration
        new_items: New items reported by the strategy
        throughput: Items per second
        memory_delta_mb: Process memory delta in megabytes
    """
    status = "success" if success else "failure"
    increment_counter(sync_runs_total, 1, source_id=source_id, status=status)
    observe_histogram(sync_duration_seconds, duration_seconds, source_id=source_id)
    increment_counter(sync_new_items_total, new_items, source_id=source_id)
    set_gauge(sync_throughput_items_per_second, throughput, source_id=source_id)
    set_gauge(sync_memory_delta_megabytes, memory_delta_mb, source_id=source_id)


def record_sync_error(source_id: str, error_type: str) -> None:
    """Record one sync error by type (exception, timeout, reported)."""
    increment_counter(sync_errors_total, 1, source_id=source_id, error_type=error_type)
