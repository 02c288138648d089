"""Release-date parsing and listing age."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime]

# Store pages render dates in the locale of the request; these cover the
# English variants plus ISO.
_DATE_FORMATS: tuple[str, ...] = (
    "%b %d, %Y",     # Mar 4, 2015
    "%B %d, %Y",     # March 4, 2015
    "%d %b %Y",      # 4 Mar 2015
    "%d %B %Y",      # 4 March 2015
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%SZ",
)


def parse_release_date(value: DateLike) -> date:
    """Parse a release date; raise ``ValueError`` when it is not a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a release date: {value!r}")

    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return datetime.fromisoformat(text).date()


def age_in_days(released: DateLike, today: Optional[date] = None) -> int:
    """Whole days between *released* and *today* (may be negative)."""
    today = today or date.today()
    return (today - parse_release_date(released)).days
