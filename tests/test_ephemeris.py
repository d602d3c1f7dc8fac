import pytest

from shivvaas.ephemeris import (
    MOON_SPEED,
    SUN_SPEED,
    moon_position,
    position_of,
    sun_position,
    wrap360,
)
from shivvaas.models import Body


def test_wrap360():
    assert wrap360(0.0) == 0.0
    assert wrap360(360.0) == 0.0
    assert wrap360(-30.0) == 330.0
    assert wrap360(725.0) == 5.0
    assert 0.0 <= wrap360(-1e-15) < 360.0


def test_sun_at_j2000():
    sun = sun_position(2451545.0)
    assert sun.longitude == pytest.approx(280.38, abs=0.05)
    assert sun.latitude == 0.0
    assert sun.distance == pytest.approx(0.983, abs=0.002)
    assert sun.speed == SUN_SPEED


def test_moon_at_j2000():
    moon = moon_position(2451545.0)
    assert moon.longitude == pytest.approx(223.3, abs=1.0)
    assert abs(moon.latitude) < 5.5
    assert 356000 < moon.distance < 407000
    assert moon.speed == MOON_SPEED


@pytest.mark.parametrize("body", [Body.SUN, Body.MOON])
def test_longitude_always_normalized(body):
    jd = 2415020.0  # 1900
    while jd < 2488070.0:  # 2100
        lon = position_of(body, jd).longitude
        assert 0.0 <= lon < 360.0
        jd += 97.3


@pytest.mark.parametrize("body", [Body.SUN, Body.MOON])
def test_far_epochs_still_normalized(body):
    for jd in (-1.0e6, 0.0, 1.0e7):
        assert 0.0 <= position_of(body, jd).longitude < 360.0


def test_deterministic():
    assert position_of(Body.MOON, 2460478.5) == position_of(Body.MOON, 2460478.5)


def test_continuous_apart_from_wrap():
    step = 1.0 / 24.0
    jd = 2460478.5
    previous = position_of(Body.MOON, jd).longitude
    for _ in range(24 * 30):
        jd += step
        current = position_of(Body.MOON, jd).longitude
        delta = (current - previous) % 360.0
        # about 0.55 degrees per hour, never backwards
        assert 0.3 < delta < 0.8
        previous = current
