"""Sunrise, sunset and solar noon — skyfield almanac with a fixed civil-time fallback."""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Protocol

from skyfield import almanac
from skyfield.api import wgs84

from shivvaas.ephemeris import SkyfieldEphemeris
from shivvaas.models import DegradedReason, RiseSetTimes
from shivvaas.timeconv import at_local_time, local_midnight, resolve_timezone

logger = logging.getLogger(__name__)

FALLBACK_SUNRISE = (6, 0, 0)
FALLBACK_SUNSET = (18, 0, 0)
FALLBACK_NOON = (12, 0, 0)


class RiseSetSource(Protocol):
    """Anything that can produce horizon events for a local day.

    rise_set returns None when the Sun does not rise or set that day;
    moon_times reports a missing moonrise or moonset as None.
    """

    def rise_set(
        self, day: date, lat: float, lon: float, tz: tzinfo
    ) -> tuple[datetime, datetime, datetime] | None: ...

    def moon_times(
        self, day: date, lat: float, lon: float, tz: tzinfo
    ) -> tuple[datetime | None, datetime | None]: ...


def _first_event(times, flags, tz: tzinfo) -> datetime | None:
    for i, happened in enumerate(flags):
        if bool(happened):
            return times[i].astimezone(tz)
    return None


class SkyfieldRiseSet:
    """Rise/set source backed by skyfield's almanac search."""

    def __init__(self, ephemeris: SkyfieldEphemeris) -> None:
        self.ephemeris = ephemeris

    def _window(self, day: date, lat: float, lon: float, tz: tzinfo):
        """Ground observer plus the local-midnight to local-midnight search window."""
        ts = self.ephemeris.timescale
        eph = self.ephemeris.kernel
        # Rising/setting searches need a ground observer (earth + latlon), not a bare topos
        observer = eph["earth"] + wgs84.latlon(
            latitude_degrees=lat, longitude_degrees=lon
        )
        t0 = ts.from_datetime(local_midnight(day, tz))
        t1 = ts.from_datetime(local_midnight(day + timedelta(days=1), tz))
        return observer, t0, t1

    def rise_set(
        self, day: date, lat: float, lon: float, tz: tzinfo
    ) -> tuple[datetime, datetime, datetime] | None:
        observer, t0, t1 = self._window(day, lat, lon, tz)
        sun = self.ephemeris.kernel["sun"]

        rise_t, rise_y = almanac.find_risings(observer, sun, t0, t1)
        set_t, set_y = almanac.find_settings(observer, sun, t0, t1)
        sunrise = _first_event(rise_t, rise_y, tz)
        sunset = _first_event(set_t, set_y, tz)
        if sunrise is None or sunset is None:
            return None

        transits = almanac.find_transits(observer, sun, t0, t1)
        if len(transits):
            solar_noon = transits[0].astimezone(tz)
        else:
            solar_noon = sunrise + (sunset - sunrise) / 2
        return sunrise, sunset, solar_noon

    def moon_times(
        self, day: date, lat: float, lon: float, tz: tzinfo
    ) -> tuple[datetime | None, datetime | None]:
        observer, t0, t1 = self._window(day, lat, lon, tz)
        moon = self.ephemeris.kernel["moon"]

        rise_t, rise_y = almanac.find_risings(observer, moon, t0, t1)
        set_t, set_y = almanac.find_settings(observer, moon, t0, t1)
        return _first_event(rise_t, rise_y, tz), _first_event(set_t, set_y, tz)


def _moon_times(
    source: RiseSetSource, day: date, lat: float, lon: float, tz: tzinfo
) -> tuple[datetime | None, datetime | None]:
    try:
        return source.moon_times(day, lat, lon, tz)
    except Exception:
        logger.warning(
            "Moonrise/moonset search failed for %s at (%s, %s)", day, lat, lon, exc_info=True
        )
        return None, None


def fallback_times(
    day: date,
    tz: tzinfo,
    moonrise: datetime | None = None,
    moonset: datetime | None = None,
) -> RiseSetTimes:
    """Fixed local civil times for a day the source could not resolve."""
    return RiseSetTimes(
        sunrise=at_local_time(day, tz, *FALLBACK_SUNRISE),
        sunset=at_local_time(day, tz, *FALLBACK_SUNSET),
        solar_noon=at_local_time(day, tz, *FALLBACK_NOON),
        moonrise=moonrise,
        moonset=moonset,
        degraded=(DegradedReason.RISE_SET_UNAVAILABLE,),
    )


def rise_set_times(
    day: date,
    lat: float,
    lon: float,
    *,
    source: RiseSetSource,
    tz: tzinfo | str | None = None,
) -> RiseSetTimes:
    """Sunrise, sunset, solar noon, moonrise and moonset for day at (lat, lon).

    Never raises for validated input: when the source fails or reports no
    sunrise/sunset (polar day or night), 06:00/18:00/12:00 local on the same
    day are returned with DegradedReason.RISE_SET_UNAVAILABLE. Moon events are
    searched independently and left as None when absent or unavailable.

    Args:
        day: Calendar date (a datetime is reduced to its date).
        lat: Latitude (decimal degrees).
        lon: Longitude (decimal degrees).
        source: Rise/set delegate.
        tz: tzinfo, IANA name, or None to look up from the coordinates.

    Returns:
        RiseSetTimes with timezone-aware local datetimes.
    """
    if isinstance(day, datetime):
        day = day.date()
    if not isinstance(tz, tzinfo):
        tz = resolve_timezone(lat, lon, tz)

    moonrise, moonset = _moon_times(source, day, lat, lon, tz)

    try:
        times = source.rise_set(day, lat, lon, tz)
    except Exception:
        logger.warning(
            "Rise/set source failed for %s at (%s, %s); using fixed civil times",
            day,
            lat,
            lon,
            exc_info=True,
        )
        return fallback_times(day, tz, moonrise, moonset)

    if times is None:
        logger.warning(
            "No sunrise/sunset on %s at (%s, %s); using fixed civil times",
            day,
            lat,
            lon,
        )
        return fallback_times(day, tz, moonrise, moonset)

    sunrise, sunset, solar_noon = times
    return RiseSetTimes(
        sunrise=sunrise,
        sunset=sunset,
        solar_noon=solar_noon,
        moonrise=moonrise,
        moonset=moonset,
    )
