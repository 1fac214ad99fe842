"""
Best-effort normalization of country, date and category fields.

Standardization is advisory: a value that cannot be normalized is left
exactly as it was and is not reported as an error.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from ingest_engine.core.models import StandardizationReport, ValidationResult
from ingest_engine.observability.logger import get_logger
from ingest_engine.utils.dates import DATE_FIELDS, canonical_timestamp

from .lookup_tables import StandardizationTables

logger = get_logger(__name__)


class Standardizer:
    """
    Normalizes raw field values against static lookup tables.

    Records are copied, never modified in place, and no field is ever
    added. Running the standardizer on its own output changes nothing.
    """

    def __init__(self, tables: StandardizationTables | None = None):
        self.tables = tables or StandardizationTables()

    def standardize(self, records: Sequence[Any]) -> tuple[list[Any], StandardizationReport]:
        """
        Standardize a batch of records.

        Args:
            records: Raw records in batch order

        Returns:
            Tuple of (standardized copies in the same order, report of changes)
        """
        report = StandardizationReport()
        standardized = [self._standardize_record(record, report) for record in records]

        logger.info(
            "Standardized batch",
            extra={
                "record_count": report.records_processed,
                "countries_standardized": report.countries_standardized,
                "dates_fixed": report.dates_fixed,
                "categories_normalized": report.categories_normalized,
            }
        )
        return standardized, report

    def _standardize_record(self, record: Any, report: StandardizationReport) -> Any:
        report.records_processed += 1
        if not isinstance(record, Mapping):
            return record

        result = dict(record)

        country = self._lookup(self.tables.countries, result.get("country"))
        if country is not None and country != result["country"]:
            result["country"] = country
            report.countries_standardized += 1

        for field in DATE_FIELDS:
            if field not in result:
                continue
            normalized = canonical_timestamp(result[field])
            if normalized is not None and normalized != result[field]:
                result[field] = normalized
                report.dates_fixed += 1

        category = self._lookup(self.tables.categories, result.get("category"))
        if category is not None and category != result["category"]:
            result["category"] = category
            report.categories_normalized += 1

        return result

    @staticmethod
    def _lookup(table: Mapping[str, str], value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        return table.get(value.strip().lower())

    def clean_batch(self, records: Sequence[Any], results: Sequence[ValidationResult],
                    scores: Sequence[int]) -> list[Any]:
        """
        Standardize records and annotate each copy with its quality outcome.

        Args:
            records: Raw records
            results: Validation results for the raw records, same order
            scores: Quality scores for the raw records, same order

        Returns:
            Standardized copies carrying a '_quality' block
        """
        if not (len(records) == len(results) == len(scores)):
            raise ValueError("records, results and scores must have the same length")

        standardized, _ = self.standardize(records)
        cleaned_at = datetime.now(timezone.utc).isoformat()
        cleaned = []
        for record, result, score in zip(standardized, results, scores):
            if not isinstance(record, Mapping):
                cleaned.append(record)
                continue
            cleaned.append({
                **record,
                "_quality": {
                    "score": score,
                    "is_valid": result.is_valid,
                    "errors": list(result.errors),
                    "cleaned_at": cleaned_at,
                },
            })
        return cleaned


def standardize(records: Sequence[Any],
                tables: StandardizationTables | None = None) -> tuple[list[Any], StandardizationReport]:
    """Standardize `records` with the default (or given) lookup tables."""
    return Standardizer(tables).standardize(records)
