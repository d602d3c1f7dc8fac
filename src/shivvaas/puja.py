"""Time-of-day bands for Shiva worship. Independent of location."""

from datetime import datetime, time

from shivvaas.i18n import t
from shivvaas.models import PujaTime


def _band(moment: time) -> str:
    hour = moment.hour
    if 4 <= hour < 6:
        return "brahma"
    if 18 <= hour < 20:
        return "sandhya"
    if hour >= 23 or hour < 2:
        return "nishitha"
    return "general"


def puja_time_for(instant: datetime | time, lang: str = "en") -> PujaTime:
    """Classify the local clock time of instant.

    04:00-06:00 is Brahma Muhurta, 18:00-20:00 Sandhya (Pradosh),
    23:00-02:00 Nishitha; everything else is the general band.
    """
    moment = instant.time() if isinstance(instant, datetime) else instant
    band = _band(moment)
    return PujaTime(label=t(f"puja_{band}", lang), significance=t(f"puja_{band}_sig", lang))
