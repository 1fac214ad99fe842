"""
Core data models for the ingestion quality engine.

Structured types use Pydantic for runtime validation; records themselves
stay plain mappings read through RecordView.
"""

from .duplicate_match import DuplicateMatch
from .quality_metrics import CommonIssue, DataQualityMetrics, QualityDistribution, QualityReport
from .record import RecordView, is_missing
from .standardization_report import StandardizationReport
from .sync_metrics import SyncMetrics, SyncOutcome, SyncResult
from .validation_result import ValidationResult
from .validation_rule import ValidationRule

__all__ = [
    "RecordView",
    "is_missing",
    "ValidationRule",
    "ValidationResult",
    "DuplicateMatch",
    "QualityDistribution",
    "CommonIssue",
    "DataQualityMetrics",
    "QualityReport",
    "StandardizationReport",
    "SyncMetrics",
    "SyncOutcome",
    "SyncResult",
]
