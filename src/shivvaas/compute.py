"""Calculation layer — rise/set, Sun/Moon positions and the Panchang for a day and place."""

import calendar
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, tzinfo

from shivvaas.config import Settings, load_settings
from shivvaas.ephemeris import SkyfieldEphemeris
from shivvaas.ephemeris import position_of as series_position_of
from shivvaas.models import (
    Body,
    DayReport,
    DegradedReason,
    PanchangResult,
    Precision,
    QueryInput,
    RiseSetTimes,
    ShivVaasResult,
    TithiResult,
)
from shivvaas.panchang import (
    approximate_tithi,
    day_segments,
    karana_at,
    nakshatra_at,
    tithi_at,
    vaara_of,
    yoga_at,
)
from shivvaas.puja import puja_time_for
from shivvaas.riseset import RiseSetSource, SkyfieldRiseSet, rise_set_times
from shivvaas.shivvaas import classify
from shivvaas.timeconv import localize, resolve_timezone, to_julian_day
from shivvaas.validation import combine_date_time, parse_date, validate_coordinates

logger = logging.getLogger(__name__)


def _merge(*groups: tuple[DegradedReason, ...]) -> tuple[DegradedReason, ...]:
    return tuple(dict.fromkeys(reason for group in groups for reason in group))


def _as_day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


class PanchangCalculator:
    """Computes tithi, Panchang and Shiv Vaas for a day and location.

    Holds no per-call state; one instance can serve any number of callers.

    Args:
        source: Rise/set delegate.
        precision: How Sun/Moon longitudes are obtained.
        ephemeris: Skyfield model, required for Precision.DELEGATED.
        tz: Fixed timezone for every call. None looks it up from the coordinates.
    """

    def __init__(
        self,
        source: RiseSetSource,
        precision: Precision = Precision.SERIES,
        ephemeris: SkyfieldEphemeris | None = None,
        tz: tzinfo | str | None = None,
    ) -> None:
        if precision is Precision.DELEGATED and ephemeris is None:
            raise ValueError("Precision.DELEGATED needs a SkyfieldEphemeris")
        self.source = source
        self.precision = precision
        self.ephemeris = ephemeris
        self.tz = tz

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PanchangCalculator":
        """Skyfield-backed calculator configured from SHIVVAAS_* variables."""
        settings = settings or load_settings()
        eph = SkyfieldEphemeris(settings.ephemeris_dir, settings.ephemeris_file)
        return cls(source=SkyfieldRiseSet(eph), precision=settings.precision, ephemeris=eph)

    # --- building blocks ---

    def _zone(self, lat: float, lon: float) -> tzinfo:
        if isinstance(self.tz, tzinfo):
            return self.tz
        return resolve_timezone(lat, lon, self.tz)

    def _longitudes(self, jd: float) -> tuple[float, float]:
        if self.precision is Precision.DELEGATED:
            position_of = self.ephemeris.position_of  # type: ignore[union-attr]
        else:
            position_of = series_position_of
        return position_of(Body.SUN, jd).longitude, position_of(Body.MOON, jd).longitude

    def _tithi_at_instant(
        self, instant: datetime, lang: str
    ) -> tuple[TithiResult, float | None, float | None]:
        """Tithi at instant plus the longitudes used (None when none were computed)."""
        if self.precision is Precision.APPROXIMATE:
            return approximate_tithi(instant, lang), None, None
        try:
            sun, moon = self._longitudes(to_julian_day(instant))
        except Exception:
            logger.warning(
                "Position model (%s) failed at %s; using day-count tithi",
                self.precision.value,
                instant,
                exc_info=True,
            )
            fallback = approximate_tithi(
                instant, lang, degraded=(DegradedReason.POSITION_MODEL_FAILED,)
            )
            return fallback, None, None
        return tithi_at(sun, moon, lang), sun, moon

    def _reference(
        self, rise_set: RiseSetTimes, instant: datetime | None, zone: tzinfo
    ) -> tuple[datetime, tuple[DegradedReason, ...]]:
        """Instant the tithi is read at, and the degradation it inherits."""
        if instant is None:
            return rise_set.sunrise, rise_set.degraded
        return localize(instant, zone), ()

    def rise_set(
        self, day: date, lat: float, lon: float, zone: tzinfo | None = None
    ) -> RiseSetTimes:
        """Sun and Moon horizon events for day; zone defaults to the calculator's."""
        if zone is None:
            zone = self._zone(lat, lon)
        return rise_set_times(_as_day(day), lat, lon, source=self.source, tz=zone)

    # --- public operations ---

    def tithi(
        self,
        day: date,
        lat: float,
        lon: float,
        lang: str = "en",
        instant: datetime | None = None,
    ) -> TithiResult:
        """Tithi at sunrise of day, or at instant when one is given.

        A naive instant is local civil time at the location.
        """
        zone = self._zone(lat, lon)
        rise_set = self.rise_set(day, lat, lon, zone)
        reference, inherited = self._reference(rise_set, instant, zone)
        result, _, _ = self._tithi_at_instant(reference, lang)
        return replace(result, degraded=_merge(inherited, result.degraded))

    def panchang(
        self,
        day: date,
        lat: float,
        lon: float,
        lang: str = "en",
        instant: datetime | None = None,
    ) -> PanchangResult:
        """Full Panchang for day at (lat, lon)."""
        day = _as_day(day)
        zone = self._zone(lat, lon)
        rise_set = self.rise_set(day, lat, lon, zone)
        reference, inherited = self._reference(rise_set, instant, zone)
        tithi, sun, moon = self._tithi_at_instant(reference, lang)
        tithi = replace(tithi, degraded=_merge(inherited, tithi.degraded))

        return PanchangResult(
            day=day,
            tithi=tithi,
            nakshatra=nakshatra_at(day, lang),
            yoga=yoga_at(day, lang),
            karana=karana_at(sun, moon, lang) if sun is not None and moon is not None else None,
            vaara=vaara_of(day, lang),
            rise_set=rise_set,
            segments=day_segments(rise_set),
            precision=self.precision,
            sun_longitude=sun,
            moon_longitude=moon,
            degraded=_merge(rise_set.degraded, tithi.degraded),
        )

    def shiv_vaas(
        self,
        day: date,
        lat: float,
        lon: float,
        lang: str = "en",
        instant: datetime | None = None,
    ) -> ShivVaasResult:
        """Shiv Vaas for day, valid from its sunrise to the next day's sunrise."""
        day = _as_day(day)
        zone = self._zone(lat, lon)
        today = self.rise_set(day, lat, lon, zone)
        tomorrow = self.rise_set(day + timedelta(days=1), lat, lon, zone)
        reference, inherited = self._reference(today, instant, zone)
        tithi, _, _ = self._tithi_at_instant(reference, lang)
        tithi = replace(tithi, degraded=_merge(inherited, tithi.degraded))

        return classify(
            tithi,
            sunrise=today.sunrise,
            next_sunrise=tomorrow.sunrise,
            lang=lang,
            specific_time=reference if instant is not None else None,
            degraded=_merge(today.degraded, tomorrow.degraded),
            day=day,
        )

    def month(
        self, year: int, month: int, lat: float, lon: float, lang: str = "en"
    ) -> tuple[PanchangResult, ...]:
        """Panchang for every day of a calendar month."""
        _, days = calendar.monthrange(year, month)
        return tuple(
            self.panchang(date(year, month, d), lat, lon, lang) for d in range(1, days + 1)
        )


_default: PanchangCalculator | None = None


def default_calculator() -> PanchangCalculator:
    """Skyfield-backed calculator built from the environment once and reused."""
    global _default
    if _default is None:
        _default = PanchangCalculator.from_settings()
    return _default


def compute_tithi(
    day: date,
    lat: float,
    lon: float,
    lang: str = "en",
    instant: datetime | None = None,
    *,
    calculator: PanchangCalculator | None = None,
) -> TithiResult:
    """Tithi of day (at sunrise, or at instant). See PanchangCalculator.tithi."""
    calculator = calculator or default_calculator()
    return calculator.tithi(day, lat, lon, lang, instant)


def compute_panchang(
    day: date,
    lat: float,
    lon: float,
    lang: str = "en",
    instant: datetime | None = None,
    *,
    calculator: PanchangCalculator | None = None,
) -> PanchangResult:
    """Panchang for day at (lat, lon). See PanchangCalculator.panchang."""
    calculator = calculator or default_calculator()
    return calculator.panchang(day, lat, lon, lang, instant)


def compute_shiv_vaas(
    day: date,
    lat: float,
    lon: float,
    lang: str = "en",
    instant: datetime | None = None,
    *,
    calculator: PanchangCalculator | None = None,
) -> ShivVaasResult:
    """Shiv Vaas for day at (lat, lon). See PanchangCalculator.shiv_vaas."""
    calculator = calculator or default_calculator()
    return calculator.shiv_vaas(day, lat, lon, lang, instant)


def compute_month(
    year: int,
    month: int,
    lat: float,
    lon: float,
    lang: str = "en",
    *,
    calculator: PanchangCalculator | None = None,
) -> tuple[PanchangResult, ...]:
    """Panchang for each day of year-month."""
    calculator = calculator or default_calculator()
    return calculator.month(year, month, lat, lon, lang)


def run(query: QueryInput, calculator: PanchangCalculator | None = None) -> DayReport:
    """Top-level entry point: takes a QueryInput and returns a DayReport.

    Args:
        query: User input (date and optional time strings, coordinates, language).
        calculator: Calculator to use; built from the environment when omitted.

    Returns:
        Fully computed DayReport.

    Raises:
        InvalidInputError: On malformed date/time strings or out-of-range coordinates.
    """
    lat, lon = validate_coordinates(query.lat, query.lon)
    day = parse_date(query.day)
    instant = combine_date_time(query.day, query.when) if query.when else None

    if calculator is None:
        calculator = default_calculator()
    if query.tz:
        calculator = PanchangCalculator(
            source=calculator.source,
            precision=calculator.precision,
            ephemeris=calculator.ephemeris,
            tz=query.tz,
        )

    return DayReport(
        panchang=calculator.panchang(day, lat, lon, query.lang, instant),
        shiv_vaas=calculator.shiv_vaas(day, lat, lon, query.lang, instant),
        puja=puja_time_for(instant, query.lang) if instant is not None else None,
    )
