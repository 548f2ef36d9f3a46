"""A point in time held as microseconds since the Unix epoch."""

from __future__ import annotations

import functools
import re
import time

from cooperutil.funcs import split_string

MICRO_SECONDS_PER_SEC = 1_000_000
_STRFTIME_LIMIT = 256
_LEADING_INT_RE = re.compile(r"\s*[+-]?\d+")


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Divide rounding toward zero; the remainder takes the sign of ``value``."""
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


def _parse_leading_int(text: str) -> int:
    """Read the integer at the start of ``text``, ignoring what follows it."""
    match = _LEADING_INT_RE.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group())


@functools.lru_cache(maxsize=None)
def _timezone_offset() -> int:
    local = Date.from_db_string_local("1970-01-03 00:00:00")
    return -(local.seconds_since_epoch() - 2 * 3600 * 24)


@functools.total_ordering
class Date:
    """An immutable time point with microsecond resolution."""

    __slots__ = ("_micro",)

    def __init__(self, micro_seconds: int = 0) -> None:
        self._micro = int(micro_seconds)

    @staticmethod
    def from_components(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        micro_second: int = 0,
    ) -> Date:
        """Build a date from local-time calendar fields."""
        epoch = time.mktime((year, month, day, hour, minute, second, 0, 0, -1))
        return Date(int(epoch) * MICRO_SECONDS_PER_SEC + micro_second)

    @staticmethod
    def now() -> Date:
        """Return the current time."""
        return Date(time.time_ns() // 1000)

    @staticmethod
    def timezone_offset() -> int:
        """Seconds east of UTC for the local time zone, computed once."""
        return _timezone_offset()

    def after(self, second: float) -> Date:
        """Return the date ``second`` seconds later (earlier if negative)."""
        return Date(int(self._micro + second * MICRO_SECONDS_PER_SEC))

    def round_second(self) -> Date:
        """Return this date with the microseconds dropped."""
        _, rem = _trunc_divmod(self._micro, MICRO_SECONDS_PER_SEC)
        return Date(self._micro - rem)

    def round_day(self) -> Date:
        """Return local midnight of this date's day."""
        t = time.localtime(self.seconds_since_epoch())
        midnight = time.mktime(
            (t.tm_year, t.tm_mon, t.tm_mday, 0, 0, 0, t.tm_wday, t.tm_yday, t.tm_isdst)
        )
        return Date(int(midnight) * MICRO_SECONDS_PER_SEC)

    def micro_seconds_since_epoch(self) -> int:
        return self._micro

    def seconds_since_epoch(self) -> int:
        return _trunc_divmod(self._micro, MICRO_SECONDS_PER_SEC)[0]

    def _micro_part(self) -> int:
        return _trunc_divmod(self._micro, MICRO_SECONDS_PER_SEC)[1]

    def tm_struct(self) -> time.struct_time:
        """Return the UTC calendar fields of this date."""
        return time.gmtime(self.seconds_since_epoch())

    @staticmethod
    def _format_fields(t: time.struct_time, micro: int | None) -> str:
        text = "%4d%02d%02d %02d:%02d:%02d" % (
            t.tm_year, t.tm_mon, t.tm_mday, t.tm_hour, t.tm_min, t.tm_sec,
        )
        if micro is not None:
            text += ".%06d" % micro
        return text

    def _custom_format(self, fmt: str, t: time.struct_time, show_microseconds: bool) -> str:
        text = time.strftime(fmt, t)
        if len(text) >= _STRFTIME_LIMIT:
            text = ""
        if show_microseconds:
            text += ".%06d" % self._micro_part()
        return text

    def to_formatted_string(self, show_microseconds: bool) -> str:
        """UTC time as ``YYYYMMDD HH:MM:SS[.ffffff]``."""
        micro = self._micro_part() if show_microseconds else None
        return self._format_fields(self.tm_struct(), micro)

    def to_customed_formatted_string(self, fmt: str, show_microseconds: bool = False) -> str:
        """UTC time formatted with a strftime pattern."""
        return self._custom_format(fmt, self.tm_struct(), show_microseconds)

    def to_formatted_string_local(self, show_microseconds: bool) -> str:
        """Local time as ``YYYYMMDD HH:MM:SS[.ffffff]``."""
        micro = self._micro_part() if show_microseconds else None
        return self._format_fields(time.localtime(self.seconds_since_epoch()), micro)

    def to_customed_formatted_string_local(self, fmt: str, show_microseconds: bool = False) -> str:
        """Local time formatted with a strftime pattern."""
        return self._custom_format(
            fmt, time.localtime(self.seconds_since_epoch()), show_microseconds
        )

    def to_db_string_local(self) -> str:
        """Local time for a database: date only at midnight, micros when present."""
        t = time.localtime(self.seconds_since_epoch())
        date_part = "%4d-%02d-%02d" % (t.tm_year, t.tm_mon, t.tm_mday)
        micro = self._micro_part()
        if micro != 0:
            return "%s %02d:%02d:%02d.%06d" % (date_part, t.tm_hour, t.tm_min, t.tm_sec, micro)
        if self == self.round_day():
            return date_part
        return "%s %02d:%02d:%02d" % (date_part, t.tm_hour, t.tm_min, t.tm_sec)

    def to_db_string(self) -> str:
        """UTC time for a database, in the same layout as the local form."""
        return self.after(float(-Date.timezone_offset())).to_db_string_local()

    @staticmethod
    def from_db_string_local(datetime_str: str) -> Date:
        """Parse ``YYYY-MM-DD HH:MM:SS[.ffffff]`` as local time."""
        year = month = day = hour = minute = second = micro = 0
        parts = split_string(datetime_str, " ")
        if len(parts) == 2:
            date_fields = split_string(parts[0], "-")
            if len(date_fields) == 3:
                year, month, day = (_parse_leading_int(f) for f in date_fields)
                time_fields = split_string(parts[1], ":")
                if len(time_fields) > 2:
                    hour = _parse_leading_int(time_fields[0])
                    minute = _parse_leading_int(time_fields[1])
                    seconds = split_string(time_fields[2], ".")
                    if not seconds:
                        raise ValueError(f"malformed seconds in {datetime_str!r}")
                    second = _parse_leading_int(seconds[0])
                    if len(seconds) > 1:
                        micro = _parse_leading_int(seconds[1][:6].ljust(6, "0"))
        return Date.from_components(year, month, day, hour, minute, second, micro)

    @staticmethod
    def from_db_string(datetime_str: str) -> Date:
        """Parse a UTC database string; inverse of :meth:`to_db_string`."""
        return Date.from_db_string_local(datetime_str).after(float(Date.timezone_offset()))

    def is_same_second(self, other: Date) -> bool:
        return self.seconds_since_epoch() == other.seconds_since_epoch()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._micro == other._micro

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._micro < other._micro

    def __hash__(self) -> int:
        return hash(self._micro)

    def __repr__(self) -> str:
        return f"Date({self._micro})"