"""
Per-record quality scoring.

Every record starts at 100 and loses a fixed penalty for each issue found.
Issues are evaluated independently; the score is clamped to [0, 100].
"""

import re
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from ingest_engine.core.models import RecordView, ValidationRule
from ingest_engine.utils.dates import DATE_FIELDS

MAX_SCORE = 100
PLACEHOLDER_PATTERN = re.compile(r"test|sample|example", re.IGNORECASE)


class QualityPenalties(BaseModel):
    """Penalty constants, configurable per deployment."""

    missing_required_field: int = Field(15, ge=0)
    short_title: int = Field(10, ge=0)
    short_description: int = Field(10, ge=0)
    invalid_date: int = Field(15, ge=0)
    short_source: int = Field(10, ge=0)
    placeholder_title: int = Field(20, ge=0)
    description_equals_title: int = Field(15, ge=0)

    min_title_length: int = Field(10, ge=0)
    min_description_length: int = Field(50, ge=0)
    min_source_length: int = Field(3, ge=0)


class QualityScorer:
    """
    Computes 0-100 quality scores from completeness and suspicious-content
    heuristics.

    Args:
        rules: Rule set whose required fields count towards completeness
        penalties: Penalty constants (defaults when omitted)
    """

    def __init__(self, rules: Sequence[ValidationRule], penalties: QualityPenalties | None = None):
        self.required_fields = [rule.field for rule in rules if rule.required]
        self.penalties = penalties or QualityPenalties()

    def score(self, record: Any) -> int:
        view = RecordView(record)
        p = self.penalties
        penalty = 0

        penalty += sum(p.missing_required_field for field in self.required_fields if view.is_missing(field))

        title = view.get_string("title") if view.has("title") else None
        description = view.get_string("description") if view.has("description") else None
        source = view.get_string("source") if view.has("source") else None

        if title is not None and len(title) < p.min_title_length:
            penalty += p.short_title
        if description is not None and len(description) < p.min_description_length:
            penalty += p.short_description
        if any(view.has(field) and view.get_date(field) is None for field in DATE_FIELDS):
            penalty += p.invalid_date
        if source is not None and len(source) < p.min_source_length:
            penalty += p.short_source

        if title is not None and PLACEHOLDER_PATTERN.search(title):
            penalty += p.placeholder_title
        if view.has("title") and view.has("description") and view.get("description") == view.get("title"):
            penalty += p.description_equals_title

        return max(0, min(MAX_SCORE, MAX_SCORE - penalty))

    def score_all(self, records: Sequence[Any]) -> list[int]:
        """Score every record, preserving batch order."""
        return [self.score(record) for record in records]


def score_all(records: Sequence[Any], rules: Sequence[ValidationRule],
              penalties: QualityPenalties | None = None) -> list[int]:
    return QualityScorer(rules, penalties).score_all(records)
