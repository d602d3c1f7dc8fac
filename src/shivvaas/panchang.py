"""Panchang limbs (tithi, nakshatra, yoga, karana, vaara) and daylight segments.

Tithi and karana come from the Moon-Sun elongation. Nakshatra and yoga are
indexed by day of year modulo 27, a calendar heuristic rather than a
longitude computation; results carry basis="day_of_year" to say so.
"""

import math
from dataclasses import replace
from datetime import date, datetime

from shivvaas.ephemeris import wrap360
from shivvaas.i18n import pick, t
from shivvaas.models import (
    DaySegments,
    DegradedReason,
    KaranaResult,
    NakshatraResult,
    Paksha,
    RiseSetTimes,
    TimeSpan,
    TithiResult,
    YogaResult,
)
from shivvaas.timeconv import epoch_days

TITHI_SPAN = 12.0
KARANA_SPAN = 6.0
SYNODIC_MONTH = 29.53  # days

# (en, hi). The last entry doubles as the fallback for out-of-range indices.
TITHI_NAMES: tuple[tuple[str, str], ...] = (
    ("Pratipada", "प्रतिपदा"),
    ("Dwitiya", "द्वितीया"),
    ("Tritiya", "तृतीया"),
    ("Chaturthi", "चतुर्थी"),
    ("Panchami", "पंचमी"),
    ("Shashthi", "षष्ठी"),
    ("Saptami", "सप्तमी"),
    ("Ashtami", "अष्टमी"),
    ("Navami", "नवमी"),
    ("Dashami", "दशमी"),
    ("Ekadashi", "एकादशी"),
    ("Dwadashi", "द्वादशी"),
    ("Trayodashi", "त्रयोदशी"),
    ("Chaturdashi", "चतुर्दशी"),
    ("Purnima/Amavasya", "पूर्णिमा/अमावस्या"),
)

NAKSHATRA_NAMES: tuple[tuple[str, str], ...] = (
    ("Ashwini", "अश्विनी"),
    ("Bharani", "भरणी"),
    ("Krittika", "कृत्तिका"),
    ("Rohini", "रोहिणी"),
    ("Mrigashira", "मृगशीर्षा"),
    ("Ardra", "आर्द्रा"),
    ("Punarvasu", "पुनर्वसु"),
    ("Pushya", "पुष्य"),
    ("Ashlesha", "आश्लेषा"),
    ("Magha", "मघा"),
    ("Purva Phalguni", "पूर्व फाल्गुनी"),
    ("Uttara Phalguni", "उत्तर फाल्गुनी"),
    ("Hasta", "हस्त"),
    ("Chitra", "चित्रा"),
    ("Swati", "स्वाती"),
    ("Vishakha", "विशाखा"),
    ("Anuradha", "अनुराधा"),
    ("Jyeshtha", "ज्येष्ठा"),
    ("Mula", "मूल"),
    ("Purva Ashadha", "पूर्वाषाढ़ा"),
    ("Uttara Ashadha", "उत्तराषाढ़ा"),
    ("Shravana", "श्रवण"),
    ("Dhanishta", "धनिष्ठा"),
    ("Shatabhisha", "शतभिषा"),
    ("Purva Bhadrapada", "पूर्वभाद्रपद"),
    ("Uttara Bhadrapada", "उत्तरभाद्रपद"),
    ("Revati", "रेवती"),
)

YOGA_NAMES: tuple[tuple[str, str], ...] = (
    ("Vishkumbha", "विष्कुम्भ"),
    ("Priti", "प्रीति"),
    ("Ayushman", "आयुष्मान"),
    ("Saubhagya", "सौभाग्य"),
    ("Shobhana", "शोभन"),
    ("Atiganda", "अतिगण्ड"),
    ("Sukarman", "सुकर्मा"),
    ("Dhriti", "धृति"),
    ("Shoola", "शूल"),
    ("Ganda", "गण्ड"),
    ("Vriddhi", "वृद्धि"),
    ("Dhruva", "ध्रुव"),
    ("Vyaghata", "व्याघात"),
    ("Harshana", "हर्षण"),
    ("Vajra", "वज्र"),
    ("Siddhi", "सिद्धि"),
    ("Vyatipata", "व्यतीपात"),
    ("Variyana", "वरीयान"),
    ("Parigha", "परिघ"),
    ("Shiva", "शिव"),
    ("Siddha", "सिद्ध"),
    ("Sadhya", "साध्य"),
    ("Shubha", "शुभ"),
    ("Shukla", "शुक्ल"),
    ("Brahma", "ब्रह्म"),
    ("Indra", "इन्द्र"),
    ("Vaidhriti", "वैधृति"),
)

MOVABLE_KARANAS: tuple[tuple[str, str], ...] = (
    ("Bava", "बव"),
    ("Balava", "बालव"),
    ("Kaulava", "कौलव"),
    ("Taitila", "तैतिल"),
    ("Garaja", "गर"),
    ("Vanija", "वणिज"),
    ("Vishti", "विष्टि"),
)

FIXED_KARANAS: tuple[tuple[str, str], ...] = (
    ("Kimstughna", "किंस्तुघ्न"),
    ("Shakuni", "शकुनि"),
    ("Chatushpada", "चतुष्पद"),
    ("Naga", "नाग"),
)

# Sunday first
VAARA_NAMES: tuple[tuple[str, str], ...] = (
    ("Sunday", "रविवार"),
    ("Monday", "सोमवार"),
    ("Tuesday", "मंगलवार"),
    ("Wednesday", "बुधवार"),
    ("Thursday", "गुरुवार"),
    ("Friday", "शुक्रवार"),
    ("Saturday", "शनिवार"),
)

# Which eighth of the daylight span (1-based), Sunday first
RAHU_SEGMENT = (8, 2, 7, 5, 6, 4, 3)
YAMAGANDA_SEGMENT = (5, 4, 3, 2, 1, 7, 6)
GULIKA_SEGMENT = (7, 6, 5, 4, 3, 2, 1)


def tithi_from_number(
    number: int,
    lang: str = "en",
    elongation: float | None = None,
    degraded: tuple[DegradedReason, ...] = (),
) -> TithiResult:
    """TithiResult for a 1..30 tithi number. Unknown numbers get the last name."""
    paksha = Paksha.SHUKLA if number <= 15 else Paksha.KRISHNA
    display = number if number <= 15 else number - 15
    index = display - 1
    if not 0 <= index < len(TITHI_NAMES):
        index = len(TITHI_NAMES) - 1
    return TithiResult(
        number=number,
        display_number=display,
        name=pick(TITHI_NAMES, index, lang),
        paksha=paksha,
        paksha_name=t(f"paksha_{paksha.value}", lang),
        elongation=elongation,
        degraded=degraded,
    )


def elongation(sun_longitude: float, moon_longitude: float) -> float:
    """Moon minus Sun, in [0, 360)."""
    return wrap360(moon_longitude - sun_longitude + 360.0)


def tithi_at(sun_longitude: float, moon_longitude: float, lang: str = "en") -> TithiResult:
    """Tithi for the given Sun and Moon ecliptic longitudes.

    Each tithi spans 12 degrees of elongation: 1..15 fall in Shukla paksha,
    16..30 in Krishna paksha.

    Args:
        sun_longitude: Sun ecliptic longitude (degrees).
        moon_longitude: Moon ecliptic longitude (degrees).
        lang: 'en' or 'hi'.

    Returns:
        TithiResult with number in 1..30.
    """
    diff = elongation(sun_longitude, moon_longitude)
    number = min(int(math.floor(diff / TITHI_SPAN)) + 1, 30)
    return tithi_from_number(number, lang, elongation=diff)


def approximate_tithi(
    instant: date,
    lang: str = "en",
    degraded: tuple[DegradedReason, ...] = (),
) -> TithiResult:
    """Day-count tithi: days since the Unix epoch modulo a mean synodic month.

    Used when no Sun/Moon positions are available. The number is folded into
    1..15; the paksha still follows the unfolded day count.
    """
    phase = epoch_days(instant) % SYNODIC_MONTH
    raw = min(int(math.floor(phase)) + 1, 30)
    number = raw - 15 if raw > 15 else raw
    paksha = Paksha.SHUKLA if raw <= 15 else Paksha.KRISHNA
    result = tithi_from_number(number, lang, degraded=degraded)
    return replace(result, paksha=paksha, paksha_name=t(f"paksha_{paksha.value}", lang))


def day_of_year(day: date) -> int:
    """Whole days since January 0, so January 1 is 1."""
    if isinstance(day, datetime):
        day = day.date()
    return (day - date(day.year, 1, 1)).days + 1


def nakshatra_at(day: date, lang: str = "en") -> NakshatraResult:
    """Nakshatra by day of year modulo 27."""
    index = day_of_year(day) % 27
    return NakshatraResult(number=index + 1, name=pick(NAKSHATRA_NAMES, index, lang))


def yoga_at(day: date, lang: str = "en") -> YogaResult:
    """Yoga by day of year modulo 27, from its own name table."""
    index = day_of_year(day) % 27
    return YogaResult(number=index + 1, name=pick(YOGA_NAMES, index, lang))


def karana_at(sun_longitude: float, moon_longitude: float, lang: str = "en") -> KaranaResult:
    """Karana (half tithi) from the elongation.

    The first karana of the month is Kimstughna, then the seven movable
    karanas repeat eight times, and Shakuni, Chatushpada, Naga close it.
    """
    diff = elongation(sun_longitude, moon_longitude)
    number = min(int(math.floor(diff / KARANA_SPAN)) + 1, 60)
    if number == 1:
        name = pick(FIXED_KARANAS, 0, lang)
    elif number >= 58:
        name = pick(FIXED_KARANAS, number - 57, lang)
    else:
        name = pick(MOVABLE_KARANAS, (number - 2) % 7, lang)
    return KaranaResult(number=number, name=name)


def _sunday_index(day: date) -> int:
    return (day.weekday() + 1) % 7


def vaara_of(day: date, lang: str = "en") -> str:
    """Weekday name."""
    return pick(VAARA_NAMES, _sunday_index(day), lang)


def day_segments(rise_set: RiseSetTimes) -> DaySegments:
    """Rahu Kaal, Yamaganda, Gulika and Abhijit muhurta for a day.

    Rahu Kaal, Yamaganda and Gulika are each one eighth of sunrise-to-sunset,
    picked by weekday. Abhijit is the eighth of fifteen muhurtas.
    """
    sunrise = rise_set.sunrise
    span = rise_set.sunset - sunrise
    wd = _sunday_index(sunrise.date())

    def eighth(n: int) -> TimeSpan:
        return TimeSpan(start=sunrise + span * (n - 1) / 8, end=sunrise + span * n / 8)

    return DaySegments(
        rahu_kaal=eighth(RAHU_SEGMENT[wd]),
        yamaganda=eighth(YAMAGANDA_SEGMENT[wd]),
        gulika=eighth(GULIKA_SEGMENT[wd]),
        abhijit=TimeSpan(start=sunrise + span * 7 / 15, end=sunrise + span * 8 / 15),
    )
