"""Current-time helpers and conversions between timestamps and date strings."""

from __future__ import annotations

import re
import time
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DATE = "%Y-%m-%d"
DATE_UNTIL_SECOND = "%Y-%m-%d %H:%M:%S"

_LOCAL = "Local"
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_SECOND_RE = re.compile(r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})")
_MILLI_RE = re.compile(r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\.(\d{3})")
_NANO_RE = re.compile(r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\.(\d{9})")


def current_time() -> datetime:
    """Return the current local time."""
    return datetime.now().astimezone()


def current_timestamp() -> int:
    """Return the current Unix time in seconds."""
    return time.time_ns() // 1_000_000_000


def current_milli_timestamp() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def current_nano_timestamp() -> int:
    """Return the current Unix time in nanoseconds."""
    return time.time_ns()


def current_nano() -> int:
    """Return the nanosecond part of the current second."""
    return time.time_ns() % 1_000_000_000


def current_year() -> int:
    return datetime.now().year


def current_month() -> str:
    """Return the English name of the current month."""
    return _MONTHS[datetime.now().month - 1]


def current_weekday() -> int:
    """Return the current weekday, Sunday being 0."""
    return (datetime.now().weekday() + 1) % 7


def current_day() -> int:
    return datetime.now().day


def current_year_month_day() -> tuple[int, int, int]:
    now = datetime.now()
    return now.year, now.month, now.day


def current_hour() -> int:
    return datetime.now().hour


def current_minute() -> int:
    return datetime.now().minute


def current_second() -> int:
    return datetime.now().second


def current_day_of_year() -> int:
    return datetime.now().timetuple().tm_yday


def current_date() -> str:
    return timestamp_to_date(current_timestamp())


def current_date_until_second() -> str:
    return timestamp_to_date_until_second(current_timestamp())


def current_date_until_milli() -> str:
    return timestamp_to_date_until_milli(current_timestamp())


def current_date_until_nano() -> str:
    return timestamp_to_date_until_nano(current_timestamp())


def _zone(time_zone: str) -> tzinfo | None:
    name = time_zone or _LOCAL
    if name == _LOCAL:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"unknown time zone {name}") from exc


def _seconds(date_part: str, time_zone: str) -> int:
    zone = _zone(time_zone)
    parsed = datetime.strptime(date_part, DATE_UNTIL_SECOND)
    if zone is not None:
        parsed = parsed.replace(tzinfo=zone)
    return round(parsed.timestamp())


def _parse(pattern: re.Pattern[str], value: str, layout: str) -> re.Match[str]:
    match = pattern.fullmatch(value)
    if match is None:
        raise ValueError(f"cannot parse {value!r} as {layout!r}")
    return match


def date_until_second_to_timestamp(value: str, time_zone: str = "") -> int:
    """Parse 'YYYY-MM-DD HH:MM:SS' in ``time_zone`` (local if empty) to Unix seconds."""
    match = _parse(_SECOND_RE, value, "2006-01-02 15:04:05")
    return _seconds(match.group(1), time_zone)


def date_until_milli_to_timestamp(value: str, time_zone: str = "") -> int:
    """Parse 'YYYY-MM-DD HH:MM:SS.mmm' to Unix milliseconds."""
    match = _parse(_MILLI_RE, value, "2006-01-02 15:04:05.000")
    return _seconds(match.group(1), time_zone) * 1000 + int(match.group(2))


def date_until_nano_to_timestamp(value: str, time_zone: str = "") -> int:
    """Parse 'YYYY-MM-DD HH:MM:SS.nnnnnnnnn' to Unix nanoseconds."""
    match = _parse(_NANO_RE, value, "2006-01-02 15:04:05.000000000")
    return _seconds(match.group(1), time_zone) * 1_000_000_000 + int(match.group(2))


def _local(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp)


def timestamp_to_date(timestamp: int) -> str:
    return _local(timestamp).strftime(DATE)


def timestamp_to_date_until_second(timestamp: int) -> str:
    return _local(timestamp).strftime(DATE_UNTIL_SECOND)


def timestamp_to_date_until_milli(timestamp: int) -> str:
    return timestamp_to_date_until_second(timestamp) + ".000"


def timestamp_to_date_until_nano(timestamp: int) -> str:
    return timestamp_to_date_until_second(timestamp) + ".000000000"