"""Data model definitions — explicit boundaries between time, ephemeris, and calendar layers."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class Body(Enum):
    """Bodies the position models know about."""

    SUN = "sun"
    MOON = "moon"


class Precision(Enum):
    """Strategy used to obtain Sun/Moon longitudes."""

    APPROXIMATE = "approximate"  # day-count tithi, no positions
    SERIES = "series"  # low-order trigonometric series
    DELEGATED = "delegated"  # skyfield + JPL kernel


class DegradedReason(Enum):
    """Why a result is less precise than requested."""

    RISE_SET_UNAVAILABLE = "rise_set_unavailable"
    POSITION_MODEL_FAILED = "position_model_failed"


class Paksha(Enum):
    """Lunar fortnight."""

    SHUKLA = "shukla"  # waxing, tithi 1-15
    KRISHNA = "krishna"  # waning, tithi 16-30


class ObservanceKind(Enum):
    """Shiva observance falling on a day."""

    SOMVAR = "somvar"  # Monday vrat
    PRADOSH = "pradosh"  # Trayodashi
    MASIK_SHIVARATRI = "masik_shivaratri"  # Chaturdashi
    SHRAVAN_SOMVAR = "shravan_somvar"  # Monday in Shravan


@dataclass(frozen=True)
class CelestialPosition:
    """Ecliptic position of a single body at one Julian Day."""

    body: Body
    longitude: float  # Ecliptic longitude, [0, 360)
    latitude: float  # Ecliptic latitude (degrees)
    distance: float  # AU for the Sun; km for the series Moon, AU for the skyfield Moon
    speed: float  # Longitude rate (degrees/day)


@dataclass(frozen=True)
class TimeSpan:
    """Half-open interval [start, end)."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass(frozen=True)
class RiseSetTimes:
    """Sun and Moon horizon events for one calendar day at one place."""

    sunrise: datetime
    sunset: datetime
    solar_noon: datetime
    moonrise: datetime | None = None  # None when the Moon does not rise that local day
    moonset: datetime | None = None
    degraded: tuple[DegradedReason, ...] = ()

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)

    @property
    def daylight(self) -> TimeSpan:
        return TimeSpan(start=self.sunrise, end=self.sunset)


@dataclass(frozen=True)
class TithiResult:
    """Lunar day derived from the Moon-Sun elongation."""

    number: int  # 1..30 from the elongation (Shukla Pratipada = 1); 1..15 for the day-count tithi
    display_number: int  # 1..15 within the paksha
    name: str
    paksha: Paksha
    paksha_name: str
    elongation: float | None = None  # Moon - Sun (degrees); None for the day-count fallback
    degraded: tuple[DegradedReason, ...] = ()

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)


@dataclass(frozen=True)
class NakshatraResult:
    """Lunar mansion. basis records how the index was obtained."""

    number: int  # 1..27
    name: str
    basis: str = "day_of_year"


@dataclass(frozen=True)
class YogaResult:
    """Sun+Moon yoga. basis records how the index was obtained."""

    number: int  # 1..27
    name: str
    basis: str = "day_of_year"


@dataclass(frozen=True)
class KaranaResult:
    """Half-tithi."""

    number: int  # 1..60
    name: str


@dataclass(frozen=True)
class DaySegments:
    """Traditional sub-divisions of the daylight span."""

    rahu_kaal: TimeSpan
    yamaganda: TimeSpan
    gulika: TimeSpan
    abhijit: TimeSpan


@dataclass(frozen=True)
class Abode:
    """One of the seven Shiv Vaas abodes. Static reference data."""

    index: int  # 1..7
    name: dict[str, str]  # lang -> name
    significance: dict[str, str]
    statement: dict[str, str]  # Shastric statement for this abode
    result: dict[str, str]  # Short outcome label
    recommended: dict[str, tuple[str, ...]]
    avoided: dict[str, tuple[str, ...]]
    auspicious: bool


@dataclass(frozen=True)
class Observance:
    """Vrat or puja the day calls for, in one language."""

    kind: ObservanceKind
    name: str
    significance: str
    practices: tuple[str, ...]


@dataclass(frozen=True)
class ShivVaasResult:
    """Shiv Vaas classification for one tithi, valid from sunrise to next sunrise."""

    index: int  # 1..7
    abode: Abode
    lang: str
    formula: str  # Worked arithmetic, e.g. "(2 × 2 + 5) mod 7 = 9 mod 7 = 2 → 2"
    verse: str  # Sanskrit verse the formula comes from
    tithi: TithiResult
    sunrise_time: datetime | None = None
    validity_window: TimeSpan | None = None  # [sunrise, next sunrise)
    specific_time: datetime | None = None
    observance: Observance | None = None  # None on ordinary days or without a date
    degraded: tuple[DegradedReason, ...] = ()

    @property
    def is_observance_day(self) -> bool:
        return self.observance is not None

    @property
    def name(self) -> str:
        return self.abode.name.get(self.lang) or self.abode.name["en"]

    @property
    def significance(self) -> str:
        return self.abode.significance.get(self.lang) or self.abode.significance["en"]

    @property
    def is_auspicious(self) -> bool:
        return self.abode.auspicious

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)


@dataclass(frozen=True)
class PanchangResult:
    """Everything computed for one day. The sole input to presentation layers."""

    day: date
    tithi: TithiResult
    nakshatra: NakshatraResult
    yoga: YogaResult
    karana: KaranaResult | None  # None when no elongation is available
    vaara: str
    rise_set: RiseSetTimes
    segments: DaySegments
    precision: Precision
    sun_longitude: float | None = None  # Diagnostics; None for APPROXIMATE
    moon_longitude: float | None = None
    degraded: tuple[DegradedReason, ...] = ()

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)


@dataclass(frozen=True)
class PujaTime:
    """Time-of-day band for Shiva worship."""

    label: str
    significance: str


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    day: str  # "YYYY-MM-DD"
    lat: float
    lon: float
    when: str | None = None  # "HH:MM" local; None means sunrise
    lang: str = "en"
    tz: str | None = None  # IANA name; None means look up from coordinates


@dataclass(frozen=True)
class DayReport:
    """Everything a presentation layer needs for one query."""

    panchang: PanchangResult
    shiv_vaas: ShivVaasResult
    puja: PujaTime | None  # Only when a specific time was asked for
