from datetime import date, datetime, tzinfo

import pytest

from shivvaas.compute import PanchangCalculator
from shivvaas.models import Precision
from shivvaas.timeconv import at_local_time

NEW_DELHI = (28.6139, 77.2090)


class FixedRiseSet:
    """Same local clock times every day. Records the days asked for."""

    def __init__(
        self,
        sunrise=(5, 24, 0),
        sunset=(19, 22, 0),
        noon=(12, 23, 0),
        moonrise=(14, 5, 0),
        moonset=(1, 12, 0),
    ):
        self.sunrise = sunrise
        self.sunset = sunset
        self.noon = noon
        self.moonrise = moonrise
        self.moonset = moonset
        self.calls: list[date] = []

    def rise_set(
        self, day: date, lat: float, lon: float, tz: tzinfo
    ) -> tuple[datetime, datetime, datetime]:
        self.calls.append(day)
        return (
            at_local_time(day, tz, *self.sunrise),
            at_local_time(day, tz, *self.sunset),
            at_local_time(day, tz, *self.noon),
        )

    def moon_times(self, day, lat, lon, tz):
        rise = at_local_time(day, tz, *self.moonrise) if self.moonrise else None
        set_ = at_local_time(day, tz, *self.moonset) if self.moonset else None
        return rise, set_


class PolarRiseSet:
    """The Sun neither rises nor sets."""

    def rise_set(self, day, lat, lon, tz):
        return None

    def moon_times(self, day, lat, lon, tz):
        return None, None


class BrokenRiseSet:
    def rise_set(self, day, lat, lon, tz):
        raise RuntimeError("ephemeris unavailable")

    def moon_times(self, day, lat, lon, tz):
        raise RuntimeError("ephemeris unavailable")


@pytest.fixture
def fixed_source() -> FixedRiseSet:
    return FixedRiseSet()


@pytest.fixture
def calculator(fixed_source) -> PanchangCalculator:
    return PanchangCalculator(
        source=fixed_source, precision=Precision.SERIES, tz="Asia/Kolkata"
    )


@pytest.fixture
def polar_calculator() -> PanchangCalculator:
    return PanchangCalculator(
        source=PolarRiseSet(), precision=Precision.SERIES, tz="Arctic/Longyearbyen"
    )
