"""
Timestamp parsing shared by the validator, scorer, detector and standardizer.

Upstream sources deliver dates in many shapes ("2024-01-15", "01/15/2024",
"Jan 15, 2024", ISO timestamps with offsets). They are all parsed with
python-dateutil; naive values are taken to be UTC.
"""

from datetime import date, datetime, timezone
from typing import Any

from dateutil import parser as date_parser

# Fields treated as publication dates, in lookup priority order
DATE_FIELDS = ("published_at", "date")


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a value into an aware UTC datetime.

    Accepts datetime, date and string values. Anything else, any string
    dateutil cannot make sense of, and any instant that falls outside the
    datetime range once moved to UTC yields None.
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, date):
        return None

    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        else:
            parsed = date_parser.parse(value)

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (date_parser.ParserError, ValueError, OverflowError):
        return None


def is_valid_timestamp(value: Any) -> bool:
    return parse_timestamp(value) is not None


def format_timestamp(value: datetime) -> str:
    """Render a datetime as canonical UTC, e.g. 2024-01-15T10:30:00.000Z."""
    utc = value.astimezone(timezone.utc)
    # strftime("%Y") does not pad years below 1000 on every platform
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}.{utc.microsecond // 1000:03d}Z"
    )


def canonical_timestamp(value: Any) -> str | None:
    """Parse and re-render a value, or None when it cannot be parsed."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return format_timestamp(parsed)
