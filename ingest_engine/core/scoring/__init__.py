"""
Record quality scoring.
"""

from .quality_scorer import QualityPenalties, QualityScorer, score_all

__all__ = ["QualityPenalties", "QualityScorer", "score_all"]
