"""
Date parsing for memorial records.

Accepts ISO dates (``1945-03-15``), ISO timestamps (``1945-03-15T00:00:00Z``),
``date``/``datetime`` objects and a few common written forms. Anything that
cannot be read is treated as unknown rather than an error.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

UNKNOWN_DATE = "unknown"

_ISO_PREFIX = re.compile(r'^\s*(\d{4})-(\d{1,2})-(\d{1,2})')

_WRITTEN_FORMATS = (
    '%m/%d/%Y',     # 03/15/1945
    '%d %b %Y',     # 15 MAR 1945
    '%d %B %Y',     # 15 March 1945
    '%B %d, %Y',    # March 15, 1945
    '%b %d, %Y',    # Mar 15, 1945
)


def parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """Parse a date value, returning None when missing or unreadable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    match = _ISO_PREFIX.match(value)
    if match:
        year, month, day = (int(g) for g in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    text = ' '.join(value.split())
    for fmt in _WRITTEN_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def normalize_date(value: Union[str, date, datetime, None]) -> str:
    """Return ``YYYY-MM-DD`` or the ``unknown`` token."""
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else UNKNOWN_DATE
