"""
Aggregate data-quality models produced by the assessment orchestrator.
"""

from datetime import datetime, timezone
from typing import List, Literal

from pydantic import BaseModel, Field

from .duplicate_match import DuplicateMatch
from .validation_result import ValidationResult

Severity = Literal["low", "medium", "high", "critical"]


class QualityDistribution(BaseModel):
    """Record counts per score bucket."""

    excellent: int = 0  # 90-100
    good: int = 0       # 70-89
    fair: int = 0       # 50-69
    poor: int = 0       # 0-49


class CommonIssue(BaseModel):
    """A validation error message and how often it occurred in a batch."""

    issue: str
    count: int = Field(..., ge=1)
    severity: Severity


class DataQualityMetrics(BaseModel):
    """
    Aggregate quality metrics for one batch.

    Attributes:
        total_records: Records in the batch
        valid_records: Records with no validation errors
        invalid_records: total_records - valid_records
        duplicate_records: Sum of indices over all duplicate matches. A record
            in several matches is counted once per match: this measures
            duplicate involvement.
        unique_duplicate_records: Distinct records involved in any match
        average_quality_score: Mean quality score, 0 for an empty batch
        quality_distribution: Score bucket counts
        common_issues: Most frequent validation errors, most frequent first
    """

    total_records: int = 0
    valid_records: int = 0
    invalid_records: int = 0
    duplicate_records: int = 0
    unique_duplicate_records: int = 0
    average_quality_score: float = 0.0
    quality_distribution: QualityDistribution = Field(default_factory=QualityDistribution)
    common_issues: List[CommonIssue] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "total_records": 2,
                "valid_records": 1,
                "invalid_records": 1,
                "duplicate_records": 0,
                "unique_duplicate_records": 0,
                "average_quality_score": 72.5,
                "quality_distribution": {"excellent": 1, "good": 0, "fair": 1, "poor": 0},
                "common_issues": [
                    {
                        "issue": "Field 'title' is required but missing",
                        "count": 1,
                        "severity": "critical",
                    }
                ],
            }
        }


class QualityReport(BaseModel):
    """Full assessment output: metrics plus the per-record detail behind them."""

    metrics: DataQualityMetrics
    validation_results: List[ValidationResult] = Field(default_factory=list)
    scores: List[int] = Field(default_factory=list)
    duplicates: List[DuplicateMatch] = Field(default_factory=list)
    duplicate_clusters: List[List[int]] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
