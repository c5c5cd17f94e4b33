from __future__ import annotations
import re
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dateparser

from pacesplits.errors import UnparseableTimestamp

_STRICT_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?Z$"
)


def _parse_strict(text: str) -> float:
    m = _STRICT_RE.match(text)
    if m is None:
        raise ValueError(text)
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    dt = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    fraction = float(f"0.{m.group(7)}") if m.group(7) else 0.0
    return dt.timestamp() + fraction


def _parse_lenient(text: str) -> float:
    dt = dateparser.isoparse(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def parse_timestamp(text: str, mode: str = "strict", line: Optional[int] = None) -> float:
    '''
    Convert a GPX time string to seconds since the Unix epoch.

    Always UTC; the process timezone is never consulted.
        - strict:  YYYY-MM-DDTHH:MM:SSZ, optionally with fractional seconds before Z
        - lenient: any ISO-8601 form dateutil understands; naive values are taken as UTC

    Raises UnparseableTimestamp instead of returning a placeholder value.
    '''
    value = text.strip()
    try:
        if mode == "lenient":
            return _parse_lenient(value)
        return _parse_strict(value)
    except (ValueError, OverflowError):
        raise UnparseableTimestamp(text, line=line) from None


def format_timestamp(seconds: float) -> str:
    return datetime.fromtimestamp(int(seconds), tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
