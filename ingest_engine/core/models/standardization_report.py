"""
StandardizationReport model counting the values a standardization pass changed.
"""

from pydantic import BaseModel


class StandardizationReport(BaseModel):
    """
    Counts of normalizations that actually changed a value.

    Attributes:
        countries_standardized: Country values rewritten to a canonical name
        dates_fixed: Date values rewritten to the canonical timestamp form
        categories_normalized: Category values rewritten to a canonical label
        records_processed: Records seen by the pass
    """

    countries_standardized: int = 0
    dates_fixed: int = 0
    categories_normalized: int = 0
    records_processed: int = 0

    @property
    def total_changes(self) -> int:
        return self.countries_standardized + self.dates_fixed + self.categories_normalized
