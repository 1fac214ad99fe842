"""
Unit tests for Prometheus metric helpers.
"""

from ingest_engine.observability import metrics


class TestMetricHelpers:
    """Tests for metric helper functions"""

    def test_increment_counter_skips_non_positive(self):
        labels = {"source_id": "metrics_probe"}
        before = metrics.REGISTRY.get_sample_value("ingest_sync_new_items_total", labels) or 0.0

        metrics.increment_counter(metrics.sync_new_items_total, 0, **labels)
        metrics.increment_counter(metrics.sync_new_items_total, 4, **labels)

        assert metrics.REGISTRY.get_sample_value("ingest_sync_new_items_total", labels) == before + 4

    def test_unlabelled_gauge(self):
        metrics.set_gauge(metrics.syncs_in_flight, 2)

        assert metrics.REGISTRY.get_sample_value("ingest_syncs_in_flight") == 2
        metrics.set_gauge(metrics.syncs_in_flight, 0)

    def test_record_validation_failure(self):
        labels = {"field_name": "metrics_probe_field"}
        before = metrics.REGISTRY.get_sample_value("ingest_validation_failures_total", labels) or 0.0

        metrics.record_validation_failure("metrics_probe_field")

        assert metrics.REGISTRY.get_sample_value("ingest_validation_failures_total", labels) == before + 1

    def test_exposition(self):
        metrics.record_sync_error("metrics_probe", "timeout")

        body = metrics.generate_metrics().decode()

        assert 'ingest_sync_errors_total{error_type="timeout",source_id="metrics_probe"}' in body \
            or 'ingest_sync_errors_total{source_id="metrics_probe",error_type="timeout"}' in body
        assert metrics.get_content_type().startswith("text/plain")
