"""
Static lookup tables used to standardize free-form field values.

Keys are lower-case aliases; values are canonical labels. Every canonical
label is also a key of its own table so that standardized data stays put on
a second pass.
"""

from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

DEFAULT_COUNTRY_ALIASES: dict[str, str] = {
    "usa": "United States",
    "us": "United States",
    "u.s.": "United States",
    "united states": "United States",
    "united states of america": "United States",
    "america": "United States",
    "uk": "United Kingdom",
    "u.k.": "United Kingdom",
    "united kingdom": "United Kingdom",
    "britain": "United Kingdom",
    "great britain": "United Kingdom",
    "england": "United Kingdom",
    "germany": "Germany",
    "deutschland": "Germany",
    "switzerland": "Switzerland",
    "schweiz": "Switzerland",
    "suisse": "Switzerland",
    "svizzera": "Switzerland",
    "canada": "Canada",
    "ca": "Canada",
    "european union": "European Union",
    "eu": "European Union",
}

DEFAULT_CATEGORY_ALIASES: dict[str, str] = {
    "medical device": "Medical Device",
    "medical devices": "Medical Device",
    "pharmaceutical": "Pharmaceutical",
    "pharma": "Pharmaceutical",
    "biotechnology": "Biotechnology",
    "biotech": "Biotechnology",
    "diagnostics": "Diagnostics",
    "digital health": "Digital Health",
    "510k": "FDA 510(k) Clearance",
    "510(k)": "FDA 510(k) Clearance",
    "pma": "FDA PMA Approval",
    "recall": "Safety Recall",
    "guidance": "Regulatory Guidance",
    "guideline": "Regulatory Guidance",
}


def _normalize_table(table: Mapping[str, str]) -> dict[str, str]:
    normalized = {str(alias).strip().lower(): canonical for alias, canonical in table.items()}
    for canonical in list(normalized.values()):
        normalized.setdefault(canonical.strip().lower(), canonical)
    return normalized


class StandardizationTables(BaseModel):
    """
    Alias tables for country and category standardization.

    Attributes:
        countries: alias -> canonical country name
        categories: alias -> canonical category label
    """

    countries: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COUNTRY_ALIASES))
    categories: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CATEGORY_ALIASES))

    @field_validator("countries", "categories")
    @classmethod
    def normalize_keys(cls, v):
        return _normalize_table(v)

    def merged(self, countries: Mapping[str, str] | None = None,
               categories: Mapping[str, str] | None = None) -> "StandardizationTables":
        """Return new tables with operator overrides layered on top."""
        return StandardizationTables(
            countries={**self.countries, **(countries or {})},
            categories={**self.categories, **(categories or {})},
        )
