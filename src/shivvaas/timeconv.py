"""Civil time <-> Julian Day conversion and timezone helpers."""

import logging
from datetime import date, datetime, time, timedelta, tzinfo

from pytz import timezone, utc
from pytz.exceptions import UnknownTimeZoneError
from timezonefinder import TimezoneFinder

logger = logging.getLogger(__name__)

J2000 = 2451545.0
UNIX_EPOCH_JD = 2440587.5
DAYS_PER_CENTURY = 36525.0

_tf = TimezoneFinder()


def _as_datetime(instant: date) -> datetime:
    if isinstance(instant, datetime):
        return instant
    return datetime.combine(instant, time())


def to_julian_day(instant: date) -> float:
    """Convert a civil instant to a Julian Day.

    Naive datetimes are taken field by field (treated as UTC); aware ones are
    converted to UTC first. A bare date means midnight. The integer part
    comes from the Gregorian day-number formula and .0 falls on noon.

    Args:
        instant: date or datetime.

    Returns:
        Julian Day as a float.
    """
    dt = _as_datetime(instant)
    if dt.tzinfo is not None and dt.utcoffset() is not None:
        dt = dt.astimezone(utc)

    a = (14 - dt.month) // 12
    y = dt.year + 4800 - a
    m = dt.month + 12 * a - 3
    jdn = (
        dt.day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        - 32045
    )
    hour = (
        dt.hour
        + dt.minute / 60.0
        + dt.second / 3600.0
        + dt.microsecond / 3_600_000_000.0
    )
    return jdn + (hour - 12.0) / 24.0


def from_julian_day(jd: float) -> datetime:
    """Inverse of to_julian_day. Returns a UTC-aware datetime."""
    return datetime(1970, 1, 1, tzinfo=utc) + timedelta(days=jd - UNIX_EPOCH_JD)


def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (jd - J2000) / DAYS_PER_CENTURY


def epoch_days(instant: date) -> float:
    """Days since 1970-01-01T00:00 UTC (naive instants read as UTC)."""
    return to_julian_day(instant) - UNIX_EPOCH_JD


def resolve_timezone(lat: float, lon: float, tz_name: str | None = None) -> tzinfo:
    """Pick the civil timezone for a location.

    An explicit tz_name wins. Otherwise the zone is looked up from the
    coordinates; UTC is used when neither yields a zone.
    """
    if tz_name:
        try:
            return timezone(tz_name)
        except UnknownTimeZoneError:
            logger.warning("Unknown timezone %r, looking up from coordinates", tz_name)
    found = _tf.timezone_at(lat=lat, lng=lon)
    if found is None:
        logger.warning("Timezone not found: lat=%s, lng=%s; using UTC", lat, lon)
        return utc
    return timezone(found)


def localize(dt: datetime, tz: tzinfo) -> datetime:
    """Attach tz to a naive datetime (pytz-aware); aware datetimes are converted."""
    if dt.tzinfo is not None:
        return dt.astimezone(tz)
    if hasattr(tz, "localize"):
        return tz.localize(dt)  # type: ignore[attr-defined]
    return dt.replace(tzinfo=tz)


def at_local_time(day: date, tz: tzinfo, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Civil time on day in tz."""
    return localize(datetime(day.year, day.month, day.day, hour, minute, second), tz)


def local_midnight(day: date, tz: tzinfo) -> datetime:
    return at_local_time(day, tz)
