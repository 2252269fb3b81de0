from __future__ import annotations

import re
from datetime import date, datetime

from yrno.core.errors import ParseError

# YYYY-MM-DD, any single separator character, HH:MM:SS
_DATETIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2}).(\d{2}):(\d{2}):(\d{2})$"
)
_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_xml_datetime(value: str | None) -> datetime:
    # Example: "2014-03-07T10:00:00"
    if value is None:
        raise ParseError("Missing timestamp")
    match = _DATETIME_RE.match(value.strip())
    if match is None:
        raise ParseError(f"Unexpected timestamp format: {value!r}")
    try:
        return datetime(*(int(part) for part in match.groups()))
    except ValueError as e:
        raise ParseError(f"Invalid timestamp: {value!r}") from e


def parse_xml_date(value: str | None) -> date:
    # Example: "2014-03-07"
    if value is None:
        raise ParseError("Missing date")
    match = _DATE_RE.match(value.strip())
    if match is None:
        raise ParseError(f"Unexpected date format: {value!r}")
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError as e:
        raise ParseError(f"Invalid date: {value!r}") from e
