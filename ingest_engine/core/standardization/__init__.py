"""
Field standardization (country, date, category).
"""

from .lookup_tables import DEFAULT_CATEGORY_ALIASES, DEFAULT_COUNTRY_ALIASES, StandardizationTables
from .standardizer import Standardizer, standardize

__all__ = [
    "Standardizer",
    "StandardizationTables",
    "DEFAULT_COUNTRY_ALIASES",
    "DEFAULT_CATEGORY_ALIASES",
    "standardize",
]
