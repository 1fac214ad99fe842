"""
Batch quality assessment.
"""

from .assessment import QualityAssessor, build_recommendations, classify_severity, extract_common_issues

__all__ = [
    "QualityAssessor",
    "build_recommendations",
    "classify_severity",
    "extract_common_issues",
]
