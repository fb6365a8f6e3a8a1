"""DD/MM/YYYY date codec.

Job dates travel between the grid, the import sheets and the API as
day/month/year text (``05/09/2025`` is the fifth of September).  Every
module that reads or writes such a value goes through these helpers so
the format is parsed and rendered the same way everywhere.
"""

from __future__ import annotations

import datetime
import re

from .exceptions import InvalidInput

DATE_FORMAT = "%d/%m/%Y"

_DMY_RE = re.compile(r"^([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})$")


def parse_date(value: object) -> datetime.date:
    """Return a ``date`` for a DD/MM/YYYY string or a date-like object.

    ``datetime`` values are truncated to their calendar date.  Text must be
    day/month/year separated by slashes; ISO strings and impossible dates
    such as ``31/02/2025`` raise ``InvalidInput``.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise InvalidInput(f"Expected a DD/MM/YYYY date, got {value!r}.")

    match = _DMY_RE.match(value.strip())
    if not match:
        raise InvalidInput(f"Invalid date {value!r}. Please use DD/MM/YYYY.")
    day, month, year = (int(part) for part in match.groups())
    try:
        return datetime.date(year, month, day)
    except ValueError as exc:
        raise InvalidInput(f"Invalid date {value!r}: {exc}.") from exc


def parse_optional_date(value: object) -> datetime.date | None:
    """Like ``parse_date`` but empty values map to ``None``."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return parse_date(value)


def format_date(value: datetime.date | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime.datetime):
        value = value.date()
    return value.strftime(DATE_FORMAT)
