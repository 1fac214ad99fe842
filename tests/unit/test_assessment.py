"""
Unit tests for the quality assessment orchestrator.
"""

import pytest

from ingest_engine.core.dedup import DuplicateDetector
from ingest_engine.core.models import DataQualityMetrics, ValidationResult
from ingest_engine.core.rules import RuleConfigBuilder
from ingest_engine.observability import metrics
from ingest_engine.quality import QualityAssessor, build_recommendations, classify_severity, extract_common_issues


def result(*errors):
    return ValidationResult(record={}, is_valid=not errors, errors=list(errors))


class TestSeverity:
    """Tests for issue severity thresholds"""

    @pytest.mark.parametrize("count,total,expected", [
        (5, 10, "critical"),
        (3, 10, "high"),
        (1, 10, "medium"),
        (1, 11, "low"),
        (0, 0, "low"),
    ])
    def test_thresholds(self, count, total, expected):
        assert classify_severity(count, total) == expected


class TestCommonIssues:
    """Tests for common issue extraction"""

    def test_sorted_by_frequency_then_first_seen(self):
        results = [
            result("b", "a"),
            result("a", "c"),
            result("c"),
            result(),
        ]

        issues = extract_common_issues(results)

        assert [(i.issue, i.count) for i in issues] == [("a", 2), ("c", 2), ("b", 1)]
        assert issues[0].severity == "critical"
        assert issues[2].severity == "high"

    def test_limit(self):
        results = [result(*(f"issue {n}" for n in range(15)))]

        assert len(extract_common_issues(results, limit=10)) == 10


class TestRecommendations:
    """Tests for recommendation generation"""

    def test_empty_batch_has_none(self):
        assert build_recommendations(DataQualityMetrics(), [], []) == []

    def test_all_hints(self):
        summary = DataQualityMetrics(
            total_records=4, valid_records=2, invalid_records=2,
            duplicate_records=2, average_quality_score=55.0,
        )
        results = [result("x"), result("y", "z"), result(), result()]

        hints = build_recommendations(summary, results, [40, 50, 60, 70])

        assert hints == [
            "Overall data quality is below acceptable threshold. Review data collection processes.",
            "High number of duplicates detected. Implement better deduplication strategies.",
            "3 validation errors found. Address critical data issues.",
            "2 records have low quality scores. Review and improve data sources.",
            "Less than 95% of records are valid. Strengthen validation at data ingestion.",
        ]

    def test_healthy_batch(self):
        summary = DataQualityMetrics(total_records=2, valid_records=2, average_quality_score=100.0)

        assert build_recommendations(summary, [result(), result()], [100, 100]) == []


class TestQualityAssessor:
    """Tests for QualityAssessor"""

    @pytest.mark.asyncio
    async def test_empty_batch(self):
        """Test an empty batch yields zeroed metrics without errors"""
        summary = await QualityAssessor().assess([])

        assert summary.total_records == 0
        assert summary.average_quality_score == 0
        assert summary.common_issues == []
        assert summary.duplicate_records == 0

    @pytest.mark.asyncio
    async def test_placeholder_record(self):
        """Test a placeholder record is valid but scores 55"""
        summary = await QualityAssessor().assess([{"title": "Test Title", "description": "Test Title"}])

        assert summary.valid_records == 1
        assert summary.invalid_records == 0
        assert summary.average_quality_score == 55
        assert summary.quality_distribution.fair == 1

    @pytest.mark.asyncio
    async def test_mixed_batch(self, regulatory_batch, dirty_record):
        records = regulatory_batch + [dirty_record]

        summary = await QualityAssessor().assess(records)

        assert summary.total_records == 4
        assert summary.valid_records == 3
        assert summary.invalid_records == 1
        assert summary.duplicate_records == 2
        assert summary.unique_duplicate_records == 2
        assert summary.quality_distribution.excellent == 3
        assert summary.common_issues[0].issue == "Field 'title' is required but missing"
        assert summary.common_issues[0].severity == "high"

    @pytest.mark.asyncio
    async def test_out_of_range_dates_do_not_abort_batch(self, clean_record):
        """Test dates that overflow in UTC count as invalid dates"""
        records = [
            dict(clean_record, published_at="0001-01-01T00:00:00+05:00"),
            dict(clean_record, title="EMA updates device guidance", published_at="9999-12-31T23:00:00-05:00"),
        ]

        summary = await QualityAssessor().assess(records)

        assert summary.total_records == 2
        assert summary.invalid_records == 2

    @pytest.mark.asyncio
    async def test_duplicate_involvement_counts_per_match(self, clean_record):
        """Test a record in several matches is counted once per match"""
        summary = await QualityAssessor().assess([clean_record] * 3)

        assert summary.duplicate_records == 6
        assert summary.unique_duplicate_records == 3

    @pytest.mark.asyncio
    async def test_report_detail(self, regulatory_batch):
        report = await QualityAssessor().build_report(regulatory_batch)

        assert len(report.validation_results) == 3
        assert report.scores == [100, 100, 100]
        assert [m.indices for m in report.duplicates] == [(0, 1)]
        assert report.duplicate_clusters == [[0, 1]]
        assert report.recommendations == [
            "High number of duplicates detected. Implement better deduplication strategies."
        ]
        assert report.generated_at is not None

    @pytest.mark.asyncio
    async def test_custom_collaborators(self, clean_record):
        rules = RuleConfigBuilder().add_required_string("summary").build()
        assessor = QualityAssessor(rules=rules, detector=DuplicateDetector(threshold=1.0), top_issues_limit=1)

        summary = await assessor.assess([clean_record, dict(clean_record, title="Other")])

        assert summary.valid_records == 0
        assert summary.duplicate_records == 0
        assert len(summary.common_issues) == 1
        assert summary.average_quality_score == 80

    @pytest.mark.asyncio
    async def test_records_prometheus_metrics(self, dirty_record):
        before = metrics.REGISTRY.get_sample_value(
            "ingest_records_assessed_total", {"status": "invalid"}
        ) or 0.0

        await QualityAssessor().assess([dirty_record])

        after = metrics.REGISTRY.get_sample_value("ingest_records_assessed_total", {"status": "invalid"})
        assert after == before + 1
