"""
Time normalization for the ephemeris engine.

Converts calendar instants to a continuous Julian Day and to Julian
centuries since J2000.0. Calendar input is treated as UTC and used as if
it were Terrestrial Time; the tens-of-seconds UTC/TT offset is ignored.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from astropy.time import Time

from orrery.exceptions import InvalidInstantError

J2000_JD = 2451545.0
DAYS_PER_JULIAN_CENTURY = 36525.0

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# Simulated seconds per wall-clock second used by the orrery display.
DEFAULT_SPEED = 3600.0

Instant = Union[str, date, datetime, Time, None]


def ensure_datetime(instant: Instant = None) -> datetime:
    """
    Convert a supported instant to a naive UTC datetime.

    Args:
        instant: ISO-8601 string (a trailing ``Z`` or a numeric UTC offset
                 is accepted), date, datetime (naive values are taken as
                 UTC), astropy Time, or None for the current time. A Time
                 on another scale (TT, TDB, ...) is converted to UTC first,
                 so its calendar fields shift by that scale's offset.

    Returns:
        Naive datetime in UTC.

    Raises:
        InvalidInstantError: If the value cannot be interpreted as a time.
    """
    if instant is None:
        return datetime.now(timezone.utc).replace(tzinfo=None)

    if isinstance(instant, datetime):
        if instant.tzinfo is not None:
            instant = instant.astimezone(timezone.utc).replace(tzinfo=None)
        return instant

    if isinstance(instant, date):
        return datetime(instant.year, instant.month, instant.day)

    if isinstance(instant, str):
        text = instant.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1]
        try:
            instant = Time(text, scale="utc")
        except ValueError as e:
            # astropy has no ISO format with a UTC offset suffix
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                raise InvalidInstantError(f"Cannot parse time: {instant!r}") from e
            return ensure_datetime(parsed)

    if isinstance(instant, Time):
        if not instant.isscalar:
            raise InvalidInstantError("Expected a scalar Time, got an array")
        try:
            return instant.utc.to_datetime()
        except ValueError as e:
            raise InvalidInstantError(f"Time not representable as a datetime: {instant}") from e

    raise InvalidInstantError(f"Unsupported instant type: {type(instant).__name__}")


def julian_day_from_calendar(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
    millisecond: float = 0.0,
) -> float:
    """
    Gregorian calendar date to Julian Day.

    Works for any proleptic-Gregorian year, including years before 1 AD
    that ``datetime`` cannot represent. The fraction is noon based:
    12:00 is JD fraction 0.

    Example:
        >>> julian_day_from_calendar(2000, 1, 1, 12)
        2451545.0
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3

    jdn = day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045

    fraction = (
        (hour - 12) / 24
        + minute / 1440
        + second / SECONDS_PER_DAY
        + millisecond / 86400000
    )
    return jdn + fraction


def date_to_julian_day(instant: Instant = None) -> float:
    """
    Convert an instant to a continuous Julian Day Number.

    Args:
        instant: Any value accepted by :func:`ensure_datetime`.

    Returns:
        Julian Day (2451545.0 at 2000-01-01T12:00:00).
    """
    dt = ensure_datetime(instant)
    return julian_day_from_calendar(
        dt.year,
        dt.month,
        dt.day,
        dt.hour,
        dt.minute,
        dt.second,
        dt.microsecond / 1000.0,
    )


def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0 (negative before the epoch)."""
    return (jd - J2000_JD) / DAYS_PER_JULIAN_CENTURY


def simulated_instant(
    start: Instant,
    elapsed_seconds: float,
    speed: float = DEFAULT_SPEED,
) -> datetime:
    """
    Instant reached after ``elapsed_seconds`` of wall-clock time at ``speed``.

    ``speed`` is simulated seconds per wall-clock second; 3600 runs the
    orrery at one hour per second.
    """
    return ensure_datetime(start) + timedelta(seconds=elapsed_seconds * speed)


def format_speed(speed: float) -> str:
    """Human-readable label for a simulation speed, e.g. ``'1 h/s'``."""
    if speed < SECONDS_PER_MINUTE:
        return f"{speed:g}x"
    if speed < SECONDS_PER_HOUR:
        return f"{round(speed / SECONDS_PER_MINUTE)} min/s"
    if speed < SECONDS_PER_DAY:
        return f"{round(speed / SECONDS_PER_HOUR)} h/s"
    return f"{round(speed / SECONDS_PER_DAY)} days/s"
