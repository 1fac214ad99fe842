"""
Data quality and ingestion coordination engine for regulatory, legal and
knowledge records.
"""

__version__ = "0.1.0"
