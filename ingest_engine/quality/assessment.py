"""
Quality assessment orchestration.

Runs validation, duplicate detection and scoring over a batch and aggregates
the results into DataQualityMetrics. The three passes share no state and run
concurrently; detection is quadratic and usually dominates, so validation and
scoring are never held up waiting for it.
"""

import asyncio
import time
from collections import Counter
from collections.abc import Sequence
from typing import Any

from ingest_engine.core.dedup import DuplicateDetector, cluster_matches, unique_indices
from ingest_engine.core.models import (
    CommonIssue,
    DataQualityMetrics,
    DuplicateMatch,
    QualityDistribution,
    QualityReport,
    ValidationResult,
    ValidationRule,
)
from ingest_engine.core.rules import RuleEngine, default_rules
from ingest_engine.core.scoring import QualityScorer
from ingest_engine.observability import metrics
from ingest_engine.observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TOP_ISSUES = 10


def classify_severity(count: int, total_records: int) -> str:
    """
    Severity of an issue by the share of records it affects:
    critical >= 50%, high >= 25%, medium >= 10%, low otherwise.
    """
    if total_records <= 0:
        return "low"
    percentage = count / total_records * 100
    if percentage >= 50:
        return "critical"
    if percentage >= 25:
        return "high"
    if percentage >= 10:
        return "medium"
    return "low"


def score_distribution(scores: Sequence[int]) -> QualityDistribution:
    return QualityDistribution(
        excellent=sum(1 for s in scores if s >= 90),
        good=sum(1 for s in scores if 70 <= s < 90),
        fair=sum(1 for s in scores if 50 <= s < 70),
        poor=sum(1 for s in scores if s < 50),
    )


def extract_common_issues(results: Sequence[ValidationResult],
                          limit: int = DEFAULT_TOP_ISSUES) -> list[CommonIssue]:
    """Most frequent error messages; ties keep the order they were first seen in."""
    counts = Counter(error for result in results for error in result.errors)
    ranked = sorted(counts.items(), key=lambda item: -item[1])[:limit]
    return [
        CommonIssue(issue=issue, count=count, severity=classify_severity(count, len(results)))
        for issue, count in ranked
    ]


def build_recommendations(metrics_: DataQualityMetrics, results: Sequence[ValidationResult],
                          scores: Sequence[int]) -> list[str]:
    """Operator-facing hints derived from a batch's metrics."""
    if metrics_.total_records == 0:
        return []

    recommendations = []
    if metrics_.average_quality_score < 70:
        recommendations.append(
            "Overall data quality is below acceptable threshold. Review data collection processes."
        )
    if metrics_.duplicate_records > metrics_.total_records * 0.1:
        recommendations.append(
            "High number of duplicates detected. Implement better deduplication strategies."
        )
    total_errors = sum(len(result.errors) for result in results)
    if total_errors > 0:
        recommendations.append(f"{total_errors} validation errors found. Address critical data issues.")
    low_quality = sum(1 for score in scores if score < 60)
    if low_quality > 0:
        recommendations.append(
            f"{low_quality} records have low quality scores. Review and improve data sources."
        )
    if metrics_.valid_records / metrics_.total_records < 0.95:
        recommendations.append(
            "Less than 95% of records are valid. Strengthen validation at data ingestion."
        )
    return recommendations


class QualityAssessor:
    """
    Validates, deduplicates and scores batches of records.

    Args:
        rules: Validation rules (the default regulatory rule set when omitted)
        detector: Duplicate detector (default threshold and weights when omitted)
        scorer: Quality scorer (built from `rules` when omitted)
        top_issues_limit: Maximum number of common issues reported
    """

    def __init__(
        self,
        rules: Sequence[ValidationRule] | None = None,
        detector: DuplicateDetector | None = None,
        scorer: QualityScorer | None = None,
        top_issues_limit: int = DEFAULT_TOP_ISSUES,
    ):
        rules = list(rules) if rules is not None else default_rules()
        self.rule_engine = RuleEngine(rules)
        self.detector = detector or DuplicateDetector()
        self.scorer = scorer or QualityScorer(rules)
        self.top_issues_limit = top_issues_limit

    async def assess(self, records: Sequence[Any]) -> DataQualityMetrics:
        """
        Assess a batch and return aggregate metrics.

        Never raises for data-quality reasons; an empty batch yields zeroed metrics.
        """
        report = await self.build_report(records)
        return report.metrics

    async def build_report(self, records: Sequence[Any]) -> QualityReport:
        """Assess a batch and return the metrics with the per-record detail behind them."""
        records = list(records)
        start = time.perf_counter()
        logger.info("Starting data quality assessment", extra={"record_count": len(records)})

        results, matches, scores = await asyncio.gather(
            asyncio.to_thread(self.rule_engine.validate_batch, records),
            asyncio.to_thread(self.detector.detect_duplicates, records),
            asyncio.to_thread(self.scorer.score_all, records),
        )

        summary = self.aggregate(records, results, matches, scores)
        duration = time.perf_counter() - start
        self._record_metrics(summary, results, matches, scores, duration)

        logger.info(
            "Data quality assessment completed",
            extra={
                "record_count": summary.total_records,
                "processing_time_ms": round(duration * 1000, 2),
                "average_quality_score": summary.average_quality_score,
                "duplicate_records": summary.duplicate_records,
            }
        )

        return QualityReport(
            metrics=summary,
            validation_results=results,
            scores=scores,
            duplicates=matches,
            duplicate_clusters=cluster_matches(matches),
            recommendations=build_recommendations(summary, results, scores),
        )

    def aggregate(
        self,
        records: Sequence[Any],
        results: Sequence[ValidationResult],
        matches: Sequence[DuplicateMatch],
        scores: Sequence[int],
    ) -> DataQualityMetrics:
        """Combine the three passes into batch metrics."""
        total = len(records)
        valid = sum(1 for result in results if result.is_valid)

        return DataQualityMetrics(
            total_records=total,
            valid_records=valid,
            invalid_records=total - valid,
            duplicate_records=sum(len(match.indices) for match in matches),
            unique_duplicate_records=len(unique_indices(matches)),
            average_quality_score=sum(scores) / len(scores) if scores else 0.0,
            quality_distribution=score_distribution(scores),
            common_issues=extract_common_issues(results, self.top_issues_limit),
        )

    @staticmethod
    def _record_metrics(summary: DataQualityMetrics, results: Sequence[ValidationResult],
                        matches: Sequence[DuplicateMatch], scores: Sequence[int],
                        duration: float) -> None:
        exact = sum(1 for match in matches if match.type == "exact")
        metrics.record_assessment(
            total_records=summary.total_records,
            valid_records=summary.valid_records,
            exact_matches=exact,
            fuzzy_matches=len(matches) - exact,
            scores=list(scores),
            duration_seconds=duration,
        )
        for result in results:
            for error in result.errors:
                metrics.record_validation_failure(_field_of(error))


def _field_of(message: str) -> str:
    """Extract the field name from "Field '<name>' ..." messages."""
    if message.startswith("Field '"):
        end = message.find("'", 7)
        if end > 7:
            return message[7:end]
    return "unknown"
