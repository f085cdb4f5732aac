"""Timestamp coercion shared by the story linker and collection sorting.

Front matter dates arrive in several shapes: ``ruamel.yaml`` turns
``2014-08-23`` into a :class:`datetime.date`, timestamps with a time part into
naive :class:`datetime.datetime` values, and quoted values stay strings. This
module folds all of them into timezone-aware UTC datetimes so they can be
compared without ``TypeError``.

Examples
--------
>>> import datetime as dt
>>> from sillage_pages.dates import parse_timestamp
>>> parse_timestamp(dt.date(2015, 3, 1)).isoformat()
'2015-03-01T00:00:00+00:00'
>>> parse_timestamp("2015-03-01T10:00:00Z").hour
10
>>> parse_timestamp("not a date") is None
True
"""

from __future__ import annotations

import datetime as dt


def parse_timestamp(value: object) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = ["parse_timestamp"]
