"""
RecordView - typed, read-only access to a loosely typed ingested record.
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from ingest_engine.utils.dates import parse_timestamp

_EMPTY: Mapping[str, Any] = {}


def is_missing(value: Any) -> bool:
    """A value counts as missing when it is None or a blank string."""
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


class RecordView:
    """
    Read-only view over a record produced by an upstream collaborator.

    Records have no fixed schema. Accessors return None when a field is
    absent or holds a value of the wrong type; nothing is coerced. Entries
    that are not mappings at all (None, bare strings) behave as empty
    records so one malformed entry cannot break a batch.
    """

    __slots__ = ("_data",)

    def __init__(self, record: Any):
        self._data: Mapping[str, Any] = record if isinstance(record, Mapping) else _EMPTY

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def get(self, field: str) -> Any:
        return self._data.get(field)

    def has(self, field: str) -> bool:
        """True when the field exists and is not missing/empty."""
        return not is_missing(self._data.get(field))

    def is_missing(self, field: str) -> bool:
        return not self.has(field)

    def get_string(self, field: str) -> str | None:
        value = self._data.get(field)
        return value if isinstance(value, str) else None

    def get_number(self, field: str) -> float | None:
        value = self._data.get(field)
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        if isinstance(value, float) and math.isnan(value):
            return None
        return value

    def get_date(self, field: str) -> datetime | None:
        return parse_timestamp(self._data.get(field))

    def first_present(self, *fields: str) -> str | None:
        """Name of the first field in `fields` that is present, if any."""
        for field in fields:
            if self.has(field):
                return field
        return None

    def __contains__(self, field: str) -> bool:
        return field in self._data

    def __repr__(self) -> str:
        return f"RecordView({dict(self._data)!r})"
