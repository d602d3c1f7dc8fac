"""Input validation for values arriving from forms and query strings."""

import math
import re
from datetime import date, datetime, time

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


class InvalidInputError(ValueError):
    """Coordinates, date or time outside what the calculator accepts."""


def validate_coordinates(lat: float, lon: float) -> tuple[float, float]:
    """Return (lat, lon) as floats, or raise InvalidInputError."""
    try:
        lat_f, lon_f = float(lat), float(lon)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Coordinates must be numbers: {lat!r}, {lon!r}") from exc
    if math.isnan(lat_f) or math.isnan(lon_f):
        raise InvalidInputError("Coordinates must not be NaN")
    if not -90.0 <= lat_f <= 90.0:
        raise InvalidInputError(f"Latitude out of range [-90, 90]: {lat_f}")
    if not -180.0 <= lon_f <= 180.0:
        raise InvalidInputError(f"Longitude out of range [-180, 180]: {lon_f}")
    return lat_f, lon_f


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidInputError(f"Date must be YYYY-MM-DD: {value!r}")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidInputError(f"Not a calendar date: {value!r}") from exc


def parse_time(value: str) -> time:
    """Parse an HH:MM (24-hour) string."""
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise InvalidInputError(f"Time must be HH:MM: {value!r}")
    hour, minute = value.split(":")
    return time(int(hour), int(minute))


def combine_date_time(day: str, clock: str) -> datetime:
    """Naive local datetime from separate date and time strings."""
    return datetime.combine(parse_date(day), parse_time(clock))
