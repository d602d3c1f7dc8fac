from datetime import date, datetime, timedelta

import pytest

from shivvaas.compute import (
    PanchangCalculator,
    compute_month,
    compute_panchang,
    compute_shiv_vaas,
    compute_tithi,
    default_calculator,
    run,
)
from shivvaas.config import Settings
from shivvaas.models import (
    Body,
    CelestialPosition,
    DegradedReason,
    ObservanceKind,
    Paksha,
    Precision,
    QueryInput,
)
from shivvaas.riseset import SkyfieldRiseSet
from shivvaas.validation import InvalidInputError

from conftest import NEW_DELHI, FixedRiseSet

SVALBARD = (78.2232, 15.6267)
DAY = date(2024, 6, 17)


class FakeEphemeris:
    """Fixed longitudes standing in for a skyfield kernel."""

    def __init__(self, sun=0.0, moon=130.0):
        self.longitudes = {Body.SUN: sun, Body.MOON: moon}

    def position_of(self, body, jd):
        return CelestialPosition(
            body=body, longitude=self.longitudes[body], latitude=0.0, distance=1.0, speed=0.0
        )


def test_shukla_ekadashi_at_new_delhi(calculator):
    tithi = calculator.tithi(DAY, *NEW_DELHI)
    assert tithi.paksha is Paksha.SHUKLA
    assert 10 <= tithi.number <= 11
    assert not tithi.is_degraded


def test_shiv_vaas_window_is_sunrise_to_sunrise(calculator):
    result = calculator.shiv_vaas(DAY, *NEW_DELHI)
    assert result.sunrise_time.date() == DAY
    assert (result.sunrise_time.hour, result.sunrise_time.minute) == (5, 24)
    assert result.validity_window.start == result.sunrise_time
    assert result.validity_window.end.date() == DAY + timedelta(days=1)
    assert result.validity_window.end - result.validity_window.start == timedelta(days=1)
    assert result.specific_time is None
    assert 1 <= result.index <= 7
    assert not result.is_degraded


def test_results_are_deterministic(calculator):
    assert calculator.shiv_vaas(DAY, *NEW_DELHI) == calculator.shiv_vaas(DAY, *NEW_DELHI)
    assert calculator.panchang(DAY, *NEW_DELHI) == calculator.panchang(DAY, *NEW_DELHI)


def test_shiv_vaas_index_follows_tithi(calculator):
    result = calculator.shiv_vaas(DAY, *NEW_DELHI)
    expected = (result.tithi.number * 2 + 5) % 7 or 7
    assert result.index == expected


def test_panchang_fields(calculator):
    panchang = calculator.panchang(DAY, *NEW_DELHI)
    assert panchang.day == DAY
    assert panchang.vaara == "Monday"
    assert panchang.precision is Precision.SERIES
    assert 0.0 <= panchang.sun_longitude < 360.0
    assert 0.0 <= panchang.moon_longitude < 360.0
    assert panchang.karana is not None
    assert panchang.nakshatra.basis == "day_of_year"
    rise_set = panchang.rise_set
    assert rise_set.sunrise < panchang.segments.abhijit.start < rise_set.sunset
    assert not panchang.is_degraded


def test_datetime_day_is_reduced_to_date(calculator):
    panchang = calculator.panchang(datetime(2024, 6, 17, 21, 0), *NEW_DELHI)
    assert panchang.day == DAY


def test_position_failure_degrades_to_day_count(calculator, monkeypatch):
    def broken(body, jd):
        raise ArithmeticError("series blew up")

    monkeypatch.setattr("shivvaas.compute.series_position_of", broken)
    panchang = calculator.panchang(DAY, *NEW_DELHI)
    assert DegradedReason.POSITION_MODEL_FAILED in panchang.degraded
    assert panchang.tithi.is_degraded
    assert panchang.karana is None
    assert panchang.sun_longitude is None
    assert 1 <= panchang.tithi.number <= 15

    result = calculator.shiv_vaas(DAY, *NEW_DELHI)
    assert result.degraded == (DegradedReason.POSITION_MODEL_FAILED,)


def test_delegated_needs_ephemeris(fixed_source):
    with pytest.raises(ValueError):
        PanchangCalculator(source=fixed_source, precision=Precision.DELEGATED)


def test_delegated_uses_ephemeris(fixed_source):
    calculator = PanchangCalculator(
        source=fixed_source,
        precision=Precision.DELEGATED,
        ephemeris=FakeEphemeris(sun=0.0, moon=130.0),
        tz="Asia/Kolkata",
    )
    panchang = calculator.panchang(DAY, *NEW_DELHI)
    assert panchang.tithi.number == 11
    assert panchang.tithi.elongation == pytest.approx(130.0)
    assert panchang.sun_longitude == 0.0
    assert panchang.moon_longitude == 130.0
    assert panchang.karana.number == 22


def test_approximate_computes_no_longitudes(fixed_source):
    calculator = PanchangCalculator(
        source=fixed_source, precision=Precision.APPROXIMATE, tz="Asia/Kolkata"
    )
    panchang = calculator.panchang(DAY, *NEW_DELHI)
    assert panchang.precision is Precision.APPROXIMATE
    assert panchang.sun_longitude is None
    assert panchang.moon_longitude is None
    assert panchang.karana is None
    assert panchang.tithi.elongation is None
    assert not panchang.is_degraded


def test_specific_instant(calculator):
    at_sunrise = calculator.tithi(DAY, *NEW_DELHI)
    evening = calculator.tithi(DAY, *NEW_DELHI, instant=datetime(2024, 6, 17, 19, 0))
    assert evening.number in (at_sunrise.number, at_sunrise.number % 30 + 1)

    result = calculator.shiv_vaas(DAY, *NEW_DELHI, instant=datetime(2024, 6, 17, 19, 0))
    assert result.specific_time.hour == 19
    assert result.specific_time.utcoffset() == timedelta(hours=5, minutes=30)
    assert result.validity_window.start.hour == 5


def test_polar_day_falls_back(polar_calculator):
    result = polar_calculator.shiv_vaas(date(2024, 6, 21), *SVALBARD)
    assert result.degraded[0] is DegradedReason.RISE_SET_UNAVAILABLE
    assert result.is_degraded
    assert result.sunrise_time.date() == date(2024, 6, 21)
    assert (result.sunrise_time.hour, result.sunrise_time.minute) == (6, 0)
    assert result.validity_window.end.date() == date(2024, 6, 22)
    assert result.tithi.degraded == (DegradedReason.RISE_SET_UNAVAILABLE,)


def test_polar_instant_tithi_is_not_degraded(polar_calculator):
    tithi = polar_calculator.tithi(
        date(2024, 6, 21), *SVALBARD, instant=datetime(2024, 6, 21, 12, 0)
    )
    assert not tithi.is_degraded


def test_month(calculator, fixed_source):
    days = calculator.month(2024, 6, *NEW_DELHI)
    assert len(days) == 30
    assert [p.day for p in days] == [date(2024, 6, d) for d in range(1, 31)]
    assert fixed_source.calls == [date(2024, 6, d) for d in range(1, 31)]


def test_month_leap_february(calculator):
    assert len(compute_month(2024, 2, *NEW_DELHI, calculator=calculator)) == 29


def test_module_functions_delegate(calculator):
    assert compute_tithi(DAY, *NEW_DELHI, calculator=calculator) == calculator.tithi(
        DAY, *NEW_DELHI
    )
    assert compute_panchang(DAY, *NEW_DELHI, "hi", calculator=calculator).vaara == "सोमवार"
    assert compute_shiv_vaas(DAY, *NEW_DELHI, "hi", calculator=calculator).lang == "hi"


def test_from_settings_builds_skyfield_calculator(tmp_path):
    settings = Settings(
        ephemeris_dir=tmp_path,
        ephemeris_file="de421.bsp",
        precision=Precision.DELEGATED,
        lang="en",
        log_level="WARNING",
    )
    calculator = PanchangCalculator.from_settings(settings)
    assert isinstance(calculator.source, SkyfieldRiseSet)
    assert calculator.precision is Precision.DELEGATED
    assert calculator.ephemeris is calculator.source.ephemeris


def test_run_at_sunrise(calculator):
    report = run(QueryInput(day="2024-06-17", lat=NEW_DELHI[0], lon=NEW_DELHI[1]), calculator)
    assert report.puja is None
    assert report.panchang.tithi == report.shiv_vaas.tithi
    assert report.shiv_vaas.specific_time is None


def test_run_with_time(calculator):
    query = QueryInput(
        day="2024-06-17", lat=NEW_DELHI[0], lon=NEW_DELHI[1], when="19:00", lang="hi"
    )
    report = run(query, calculator)
    assert report.puja.label == "संध्या काल"
    assert report.shiv_vaas.specific_time.hour == 19
    assert report.shiv_vaas.lang == "hi"


def test_run_timezone_override():
    query = QueryInput(day="2024-06-17", lat=NEW_DELHI[0], lon=NEW_DELHI[1], tz="Europe/London")
    calculator = PanchangCalculator(source=FixedRiseSet(), tz="Asia/Kolkata")
    report = run(query, calculator)
    assert report.panchang.rise_set.sunrise.tzinfo.zone == "Europe/London"


@pytest.mark.parametrize(
    "query",
    [
        QueryInput(day="2024-06-17", lat=95.0, lon=77.2),
        QueryInput(day="2024-06-17", lat=28.6, lon=-200.0),
        QueryInput(day="17-06-2024", lat=28.6, lon=77.2),
        QueryInput(day="2024-06-17", lat=28.6, lon=77.2, when="25:00"),
    ],
)
def test_run_rejects_bad_input(calculator, query):
    with pytest.raises(InvalidInputError):
        run(query, calculator)


def test_approximate_shiv_vaas_uses_folded_tithi(fixed_source):
    calculator = PanchangCalculator(
        source=fixed_source, precision=Precision.APPROXIMATE, tz="Asia/Kolkata"
    )
    result = calculator.shiv_vaas(DAY, *NEW_DELHI)
    # 2024-06-16 23:54 UTC is day 18 of the mean month, Krishna Tritiya
    assert result.tithi.number == 3
    assert result.tithi.paksha is Paksha.KRISHNA
    assert result.index == 4


def test_failed_position_model_shiv_vaas_stays_in_fortnight(calculator, monkeypatch):
    def broken(body, jd):
        raise ArithmeticError("series blew up")

    monkeypatch.setattr("shivvaas.compute.series_position_of", broken)
    result = calculator.shiv_vaas(DAY, *NEW_DELHI)
    assert result.tithi.number == 3
    assert result.index == 4


def test_monday_shiv_vaas_carries_somvar(calculator):
    result = calculator.shiv_vaas(DAY, *NEW_DELHI)
    assert result.observance.kind is ObservanceKind.SOMVAR


def test_rise_set_includes_moon(calculator):
    rise_set = calculator.rise_set(datetime(2024, 6, 17, 20, 0), *NEW_DELHI)
    assert rise_set.sunrise.tzinfo.zone == "Asia/Kolkata"
    assert (rise_set.moonrise.hour, rise_set.moonrise.minute) == (14, 5)
    assert calculator.panchang(DAY, *NEW_DELHI).rise_set == rise_set


def test_default_calculator_is_built_once(monkeypatch):
    built = []

    def from_settings(settings=None):
        built.append(settings)
        return PanchangCalculator(source=FixedRiseSet(), tz="Asia/Kolkata")

    monkeypatch.setattr("shivvaas.compute._default", None)
    monkeypatch.setattr(PanchangCalculator, "from_settings", from_settings)
    first = compute_tithi(DAY, *NEW_DELHI)
    second = compute_shiv_vaas(DAY, *NEW_DELHI)
    assert first == second.tithi
    assert len(built) == 1
    assert default_calculator() is default_calculator()
    assert len(built) == 1
