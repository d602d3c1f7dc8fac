"""Sun and Moon ecliptic positions — series approximations and a skyfield-backed model."""

import logging
import math
from pathlib import Path

from skyfield.api import Loader
from skyfield.framelib import ecliptic_frame

from shivvaas.models import Body, CelestialPosition
from shivvaas.timeconv import julian_centuries

logger = logging.getLogger(__name__)

SUN_SPEED = 0.9856  # degrees/day
MOON_SPEED = 13.176  # degrees/day

_TARGETS: dict[Body, str] = {
    Body.SUN: "sun",
    Body.MOON: "moon",
}


def wrap360(x: float) -> float:
    """Normalize an angle into [0, 360)."""
    x = float(x) % 360.0
    # -1e-15 % 360.0 == 360.0
    return 0.0 if x >= 360.0 else x


def _sin_deg(x: float) -> float:
    return math.sin(math.radians(x))


def _cos_deg(x: float) -> float:
    return math.cos(math.radians(x))


def sun_position(jd: float) -> CelestialPosition:
    """Geometric Sun from mean longitude plus the equation of center."""
    t = julian_centuries(jd)
    l0 = 280.46646 + 36000.76983 * t + 0.0003032 * t * t
    m = 357.52911 + 35999.05029 * t - 0.0001537 * t * t
    c = (
        (1.914602 - 0.004817 * t - 0.000014 * t * t) * _sin_deg(m)
        + (0.019993 - 0.000101 * t) * _sin_deg(2 * m)
        + 0.000289 * _sin_deg(3 * m)
    )
    true_anomaly = m + c
    return CelestialPosition(
        body=Body.SUN,
        longitude=wrap360(l0 + c),
        latitude=0.0,
        distance=1.000001018 * (1 - 0.01671123 * _cos_deg(true_anomaly)),
        speed=SUN_SPEED,
    )


def moon_position(jd: float) -> CelestialPosition:
    """Moon from mean elements with the five largest periodic longitude terms."""
    t = julian_centuries(jd)
    t2, t3, t4 = t * t, t**3, t**4
    # Mean longitude, mean elongation, solar and lunar mean anomalies
    lm = 218.3164477 + 481267.88123421 * t - 0.0015786 * t2 + t3 / 538841 - t4 / 65194000
    d = 297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868 - t4 / 113065000
    m = 357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000
    mp = 134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699 - t4 / 14712000

    longitude = (
        lm
        + 6.289 * _sin_deg(mp)
        + 1.274 * _sin_deg(2 * d - mp)
        + 0.658 * _sin_deg(2 * d)
        + 0.214 * _sin_deg(2 * mp)
        - 0.185 * _sin_deg(m)
    )
    latitude = 5.128 * _sin_deg(mp + 93.27) + 0.281 * _sin_deg(mp - 2 * d + 119.75)
    return CelestialPosition(
        body=Body.MOON,
        longitude=wrap360(longitude),
        latitude=latitude,
        distance=385000.56 + 20905.355 * _cos_deg(mp),  # km
        speed=MOON_SPEED,
    )


def position_of(body: Body, jd: float) -> CelestialPosition:
    """Series-model position of body at Julian Day jd."""
    if body is Body.SUN:
        return sun_position(jd)
    return moon_position(jd)


class SkyfieldEphemeris:
    """Apparent geocentric ecliptic positions from a JPL kernel.

    The kernel is opened on first use and reused afterwards. Missing kernels
    are downloaded into directory by skyfield.
    """

    def __init__(self, directory: Path | str, filename: str = "de421.bsp") -> None:
        self._loader = Loader(str(directory))
        self.filename = filename
        self._ts = None
        self._eph = None

    @property
    def timescale(self):
        if self._ts is None:
            self._ts = self._loader.timescale()
        return self._ts

    @property
    def kernel(self):
        if self._eph is None:
            logger.info("Loading ephemeris %s", self.filename)
            self._eph = self._loader(self.filename)
        return self._eph

    def _ecliptic(self, body: Body, jd: float):
        t = self.timescale.ut1_jd(jd)
        earth = self.kernel["earth"]
        target = self.kernel[_TARGETS[body]]
        return earth.at(t).observe(target).apparent().frame_latlon(ecliptic_frame)

    def position_of(self, body: Body, jd: float) -> CelestialPosition:
        """Position of body at jd; speed from a +/- 1 minute finite difference."""
        lat, lon, dist = self._ecliptic(body, jd)
        _, lon_p, _ = self._ecliptic(body, jd + 1.0 / 1440.0)
        _, lon_m, _ = self._ecliptic(body, jd - 1.0 / 1440.0)

        delta = lon_p.degrees - lon_m.degrees
        if delta > 180:
            delta -= 360
        if delta < -180:
            delta += 360

        return CelestialPosition(
            body=body,
            longitude=wrap360(lon.degrees),
            latitude=float(lat.degrees),
            distance=float(dist.au),
            speed=float((delta / 2.0) * 1440.0),
        )
