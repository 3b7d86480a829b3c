"""Date parsing for sheet cells.

Cells hold whatever the sheet displays: ISO dates from the API
(``2025-03-04``, possibly with a time part) or US-style dates typed by hand
(``3/4/2025``). Anything else parses to None and is skipped by callers.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")


def parse_date(value: object) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    if "T" in text:
        text = text.split("T", 1)[0]
    elif " " in text:
        text = text.split(" ", 1)[0]
    for fmt in _FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def today() -> date:
    return date.today()


def today_iso() -> str:
    return today().isoformat()


def start_of_month(ref: date) -> date:
    return ref.replace(day=1)


def start_of_week(ref: date) -> date:
    """Most recent Sunday on or before ``ref``."""
    return ref - timedelta(days=(ref.weekday() + 1) % 7)


def days_between(start: object, end: object) -> int | None:
    """Whole days from ``start`` to ``end``; None when either is unparseable."""
    s, e = parse_date(start), parse_date(end)
    if s is None or e is None:
        return None
    return (e - s).days
