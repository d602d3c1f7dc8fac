"""CLI entry point: print the day's Panchang and Shiva's abode for a place.

    python -m shivvaas.report 2024-06-17 28.6139 77.2090 --time 19:00 --lang hi
"""

from dotenv import load_dotenv

load_dotenv()

import argparse  # noqa: E402

from shivvaas.compute import PanchangCalculator, run  # noqa: E402
from shivvaas.config import configure_logging, load_settings  # noqa: E402
from shivvaas.i18n import t  # noqa: E402
from shivvaas.models import DayReport, QueryInput  # noqa: E402
from shivvaas.validation import InvalidInputError  # noqa: E402


def _clock(dt) -> str:
    return dt.strftime("%H:%M") if dt is not None else "--:--"


def format_report(report: DayReport) -> str:
    panchang = report.panchang
    vaas = report.shiv_vaas
    tithi = panchang.tithi
    segments = panchang.segments
    lines = [
        f"{panchang.day.isoformat()} ({panchang.vaara})",
        f"Sunrise {_clock(panchang.rise_set.sunrise)}  Sunset {_clock(panchang.rise_set.sunset)}",
        f"Moonrise {_clock(panchang.rise_set.moonrise)}  Moonset {_clock(panchang.rise_set.moonset)}",
        f"Tithi     {tithi.display_number} {tithi.name}, {tithi.paksha_name}",
        f"Nakshatra {panchang.nakshatra.name}",
        f"Yoga      {panchang.yoga.name}",
    ]
    if panchang.karana is not None:
        lines.append(f"Karana    {panchang.karana.name}")
    lines += [
        f"Rahu Kaal {_clock(segments.rahu_kaal.start)}-{_clock(segments.rahu_kaal.end)}",
        f"Abhijit   {_clock(segments.abhijit.start)}-{_clock(segments.abhijit.end)}",
        "",
        vaas.verse,
        t("shiv_vaas_abodes_verse", vaas.lang),
        f"{t('shiv_vaas_formula_title', vaas.lang)}: {vaas.formula}",
        f"Shiv Vaas: {vaas.name}",
        f"  {vaas.significance}",
        f"  {vaas.abode.result[vaas.lang]}",
    ]
    if vaas.validity_window is not None:
        window = vaas.validity_window
        lines.append(f"  Valid {window.start:%Y-%m-%d %H:%M} to {window.end:%Y-%m-%d %H:%M}")
    if vaas.observance is not None:
        lines.append(f"Observance: {vaas.observance.name} - {vaas.observance.significance}")
        lines += [f"  * {practice}" for practice in vaas.observance.practices]
    if report.puja is not None:
        lines.append(f"Puja time: {report.puja.label} - {report.puja.significance}")
    if vaas.is_degraded or panchang.is_degraded:
        reasons = dict.fromkeys(panchang.degraded + vaas.degraded)
        lines.append("Approximate: " + ", ".join(r.value for r in reasons))
    return "\n".join(lines)


def main(argv=None) -> int:
    settings = load_settings(dotenv=False)
    configure_logging(settings.log_level)

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("date", help="YYYY-MM-DD")
    parser.add_argument("lat", type=float)
    parser.add_argument("lon", type=float)
    parser.add_argument("--time", dest="when", help="HH:MM local; default is sunrise")
    parser.add_argument("--lang", default=settings.lang)
    parser.add_argument("--tz", help="IANA timezone; default is looked up")
    args = parser.parse_args(argv)

    query = QueryInput(
        day=args.date, lat=args.lat, lon=args.lon, when=args.when, lang=args.lang, tz=args.tz
    )
    try:
        report = run(query, PanchangCalculator.from_settings(settings))
    except InvalidInputError as e:
        parser.error(str(e))
    print(format_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
