"""Fixed-layout text form of ``datetime.timedelta``.

Durations travel as ``[-][d.]hh:mm:ss[.fffffff]``: the day part is written
only when non-zero and the fraction, always seven digits (100 ns ticks), only
when the duration has sub-second precision.

``timedelta`` stops at microseconds. A parsed value whose seventh fractional
digit is not zero is returned as :class:`PreciseTimedelta`, which keeps the
full tick count so it is written back unchanged.
"""

import re
from datetime import timedelta
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator

_DURATION_PATTERN = re.compile(
    r"^(?P<sign>-)?"
    r"(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})"
    r"(?:\.(?P<fraction>\d{1,7}))?$"
)
_DAYS_ONLY_PATTERN = re.compile(r"^(?P<sign>-)?(?P<days>\d+)$")

_TICKS_PER_MICROSECOND = 10
_TICKS_PER_SECOND = 10_000_000
_SECONDS_PER_DAY = 86_400


class PreciseTimedelta(timedelta):
    """``timedelta`` that remembers its duration in 100 ns ticks.

    Compares and computes like the microsecond-truncated ``timedelta``;
    ``ticks`` is only consulted when the value is formatted.
    """

    ticks: int

    def __new__(cls, ticks: int) -> "PreciseTimedelta":
        sign = -1 if ticks < 0 else 1
        self = super().__new__(
            cls, microseconds=sign * (abs(ticks) // _TICKS_PER_MICROSECOND)
        )
        self.ticks = ticks
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.ticks,)

    def __repr__(self) -> str:
        return f"PreciseTimedelta(ticks={self.ticks})"


def to_ticks(value: timedelta) -> int:
    if isinstance(value, PreciseTimedelta):
        return value.ticks
    seconds = value.days * _SECONDS_PER_DAY + value.seconds
    return seconds * _TICKS_PER_SECOND + value.microseconds * _TICKS_PER_MICROSECOND


def format_duration(value: timedelta) -> str:
    ticks = to_ticks(value)
    sign = "-" if ticks < 0 else ""

    seconds, fraction = divmod(abs(ticks), _TICKS_PER_SECOND)
    days, seconds = divmod(seconds, _SECONDS_PER_DAY)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if fraction:
        text = f"{text}.{fraction:07d}"
    return f"{sign}{text}"


def parse_duration(text: str) -> timedelta:
    """Parse a duration written by :func:`format_duration`.

    Raises:
        ValueError: If ``text`` is not in the duration layout.
    """
    match = _DURATION_PATTERN.match(text)
    if match is None:
        days_only = _DAYS_ONLY_PATTERN.match(text)
        if days_only is None:
            raise ValueError(f"Duration is in wrong format: {text!r}")
        result = timedelta(days=int(days_only["days"]))
        return -result if days_only["sign"] else result

    hours, minutes, seconds = (
        int(match["hours"]),
        int(match["minutes"]),
        int(match["seconds"]),
    )
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"Duration is in wrong format: {text!r}")

    total_seconds = (
        int(match["days"] or 0) * _SECONDS_PER_DAY + hours * 3600 + minutes * 60 + seconds
    )
    ticks = total_seconds * _TICKS_PER_SECOND + int(
        (match["fraction"] or "0").ljust(7, "0")
    )
    if match["sign"]:
        ticks = -ticks

    if ticks % _TICKS_PER_MICROSECOND:
        return PreciseTimedelta(ticks)
    return timedelta(microseconds=ticks // _TICKS_PER_MICROSECOND)


def _validate_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, str):
        return parse_duration(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    raise ValueError(f"Duration must be a timedelta or a duration string, got {type(value).__name__}")


Duration = Annotated[
    timedelta,
    PlainValidator(_validate_duration),
    PlainSerializer(format_duration, return_type=str),
]
"""``timedelta`` that pydantic reads and writes in the fixed duration layout."""
