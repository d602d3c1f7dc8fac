"""Shiv Vaas classification — which abode Shiva occupies on a tithi.

Double the tithi, add five and divide by seven; the remainder (seven when
it is zero) names the abode:

    तिथिं च द्विगुणी कृत्वा पुनः पञ्च समन्वितम ।
    सप्तभिस्तुहरेद्भागम शेषं शिव वास उच्यते ।।
"""

from datetime import date, datetime, timedelta

from shivvaas.i18n import normalize_lang, t
from shivvaas.models import (
    Abode,
    DegradedReason,
    Observance,
    ObservanceKind,
    ShivVaasResult,
    TimeSpan,
    TithiResult,
)
from shivvaas.panchang import tithi_from_number

ABODES: dict[int, Abode] = {
    1: Abode(
        index=1,
        name={"en": "Kailash", "hi": "कैलाश"},
        significance={
            "en": "Shiva resides at Mount Kailash. Rituals bring happiness.",
            "hi": "शिव कैलाश पर्वत पर विराजमान हैं। अनुष्ठान से सुख प्राप्त होता है।",
        },
        statement={
            "en": "Performing rituals when Shiva resides at Kailash brings happiness and fulfillment.",
            "hi": "कैलाश वासी शिव का अनुष्ठान करने से सुख प्राप्ति होती है।",
        },
        result={"en": "Happiness", "hi": "सुख"},
        recommended={
            "en": ("Rudrabhishek", "Shiva puja", "Mantra japa", "Vrat"),
            "hi": ("रुद्राभिषेक", "शिव पूजन", "मंत्र जाप", "व्रत"),
        },
        avoided={"en": (), "hi": ()},
        auspicious=True,
    ),
    2: Abode(
        index=2,
        name={"en": "With Gauri", "hi": "गौरी सन्निधि"},
        significance={
            "en": "Shiva is in the company of Gauri. Worship brings prosperity.",
            "hi": "शिव गौरी के सान्निध्य में हैं। पूजा से सुख-सम्पदा मिलती है।",
        },
        statement={
            "en": "When in the company of Gauri, one attains happiness and prosperity.",
            "hi": "गौरी-सानिध्य में रहने पर सुख-सम्पदा की प्राप्ति होती है।",
        },
        result={"en": "Prosperity", "hi": "सुख-सम्पदा"},
        recommended={
            "en": ("Rudrabhishek", "Shiva-Parvati puja", "Family rituals", "Vrat"),
            "hi": ("रुद्राभिषेक", "शिव-पार्वती पूजन", "पारिवारिक अनुष्ठान", "व्रत"),
        },
        avoided={"en": (), "hi": ()},
        auspicious=True,
    ),
    3: Abode(
        index=3,
        name={"en": "Riding Nandi", "hi": "वृषभारूढ़"},
        significance={
            "en": "Shiva rides the bull Nandi. Special worship fulfils desires.",
            "hi": "शिव नंदी पर आरूढ़ हैं। विशेष उपासना से अभीष्ट सिद्धि होती है।",
        },
        statement={
            "en": "Special worship of Shiva riding the bull fulfills desired objectives.",
            "hi": "वृषारुढ़ शिव की विशेष उपासना से अभीष्ट की सिद्धि होती है।",
        },
        result={"en": "Fulfilment of desires", "hi": "अभीष्ट सिद्धि"},
        recommended={
            "en": ("Rudrabhishek", "Sankalp for wishes", "Nandi darshan", "Mantra japa"),
            "hi": ("रुद्राभिषेक", "मनोकामना संकल्प", "नंदी दर्शन", "मंत्र जाप"),
        },
        avoided={"en": (), "hi": ()},
        auspicious=True,
    ),
    4: Abode(
        index=4,
        name={"en": "In Assembly", "hi": "सभा"},
        significance={
            "en": "Shiva sits in assembly. Kamya rituals cause distress.",
            "hi": "शिव सभा में विराजमान हैं। काम्य अनुष्ठान संताप देते हैं।",
        },
        statement={
            "en": "Worship of Shiva in assembly causes distress and suffering.",
            "hi": "सभासद शिव पूजन से संताप होता है।",
        },
        result={"en": "Distress", "hi": "संताप"},
        recommended={
            "en": ("Daily puja", "Nama japa"),
            "hi": ("नित्य पूजा", "नाम जप"),
        },
        avoided={
            "en": ("Rudrabhishek", "Kamya anushthan"),
            "hi": ("रुद्राभिषेक", "काम्य अनुष्ठान"),
        },
        auspicious=False,
    ),
    5: Abode(
        index=5,
        name={"en": "Dining", "hi": "भोजन"},
        significance={
            "en": "Shiva is taking food. Elaborate worship causes trouble.",
            "hi": "शिव भोजन कर रहे हैं। विशेष आराधना पीड़ा देती है।",
        },
        statement={
            "en": "Worship of Shiva while He is eating causes pain and trouble.",
            "hi": "भोजन करते हुए शिव की आराधना पीड़ादायी है।",
        },
        result={"en": "Pain", "hi": "पीड़ा"},
        recommended={
            "en": ("Daily puja", "Naivedya offering"),
            "hi": ("नित्य पूजा", "नैवेद्य अर्पण"),
        },
        avoided={
            "en": ("Rudrabhishek", "Kamya anushthan"),
            "hi": ("रुद्राभिषेक", "काम्य अनुष्ठान"),
        },
        auspicious=False,
    ),
    6: Abode(
        index=6,
        name={"en": "At Play", "hi": "क्रीड़ा"},
        significance={
            "en": "Shiva is at play. Worship brings difficulties.",
            "hi": "शिव क्रीड़ारत हैं। आराधना कष्टकारी है।",
        },
        statement={
            "en": "Worship of Shiva while He is at play also causes difficulties.",
            "hi": "क्रीड़ारत शिवाराधन भी कष्टकारी है।",
        },
        result={"en": "Difficulty", "hi": "कष्ट"},
        recommended={
            "en": ("Daily puja", "Stotra path"),
            "hi": ("नित्य पूजा", "स्तोत्र पाठ"),
        },
        avoided={
            "en": ("Rudrabhishek", "Kamya anushthan"),
            "hi": ("रुद्राभिषेक", "काम्य अनुष्ठान"),
        },
        auspicious=False,
    ),
    7: Abode(
        index=7,
        name={"en": "Cremation Ground", "hi": "श्मशान"},
        significance={
            "en": "Shiva resides in the cremation ground. Most inauspicious for rituals.",
            "hi": "शिव श्मशान में वास करते हैं। अनुष्ठान के लिए सर्वाधिक अशुभ।",
        },
        statement={
            "en": "Worship of Shiva residing in cremation ground brings death or death-like suffering.",
            "hi": "श्मशानवासी शिवाराधन मरण या मरण तुल्य कष्ट देता है।",
        },
        result={"en": "Death-like suffering", "hi": "मरण तुल्य कष्ट"},
        recommended={
            "en": ("Mahamrityunjaya japa",),
            "hi": ("महामृत्युंजय जाप",),
        },
        avoided={
            "en": ("Rudrabhishek", "Kamya anushthan", "New undertakings"),
            "hi": ("रुद्राभिषेक", "काम्य अनुष्ठान", "नए कार्य का आरंभ"),
        },
        auspicious=False,
    ),
}


# (name, significance, practices) per kind, by language
OBSERVANCES: dict[ObservanceKind, dict[str, tuple[str, str, tuple[str, ...]]]] = {
    ObservanceKind.SOMVAR: {
        "en": (
            "Somvar Vrat",
            "Monday, the day sacred to Lord Shiva",
            ("Fast from sunrise to sunset", "Shiva mantra japa", "Rudrabhishek", "Offer bilva leaves"),
        ),
        "hi": (
            "सोमवार व्रत",
            "भगवान शिव को समर्पित पवित्र दिन",
            ("सूर्योदय से सूर्यास्त तक उपवास", "शिव मंत्र जाप", "रुद्राभिषेक", "बिल्व पत्र अर्पण"),
        ),
    },
    ObservanceKind.MASIK_SHIVARATRI: {
        "en": (
            "Masik Shivaratri",
            "Monthly Shivaratri, highly meritorious",
            ("Night vigil", "Nirjala fast", "Shiva Tandava Stotram", "Mahamrityunjaya mantra"),
        ),
        "hi": (
            "मासिक शिवरात्रि",
            "मासिक शिवरात्रि - अत्यंत पुण्यकारी",
            ("रात्रि जागरण", "निर्जला उपवास", "शिव तांडव स्तोत्र", "महामृत्युंजय मंत्र"),
        ),
    },
    ObservanceKind.PRADOSH: {
        "en": (
            "Pradosh Vrat",
            "Shiva worship in Pradosh kaal is most fruitful",
            ("Evening puja", "Shiva Chalisa path", "Nandi darshan", "Offer incense and lamp"),
        ),
        "hi": (
            "प्रदोष व्रत",
            "प्रदोष काल में शिव पूजा अत्यंत फलदायी",
            ("संध्या काल पूजा", "शिव चालीसा पाठ", "नंदी दर्शन", "धूप दीप अर्पण"),
        ),
    },
    ObservanceKind.SHRAVAN_SOMVAR: {
        "en": (
            "Shravan Somvar Vrat",
            "Monday of the Shravan month, the finest Shiva vrat",
            ("Fast from sunrise to sunset", "Shiva mantra japa", "Rudrabhishek", "Offer bilva leaves"),
        ),
        "hi": (
            "श्रावण सोमवार व्रत",
            "श्रावण मास का सोमवार - सर्वोत्तम शिव व्रत",
            ("सूर्योदय से सूर्यास्त तक उपवास", "शिव मंत्र जाप", "रुद्राभिषेक", "बिल्व पत्र अर्पण"),
        ),
    },
}

# Shravan taken as the civil months July and August
SHRAVAN_MONTHS = (7, 8)


def observance_for(day: date, tithi: TithiResult, lang: str = "en") -> Observance | None:
    """Shiva observance for a day, or None.

    Trayodashi is Pradosh and Chaturdashi Masik Shivaratri in either paksha;
    these take precedence over the Monday vrat. A Monday in Shravan is named
    Shravan Somvar whatever else falls on it, keeping that observance's practices.
    """
    lang = normalize_lang(lang)
    monday = day.weekday() == 0
    if tithi.display_number == 13:
        kind = ObservanceKind.PRADOSH
    elif tithi.display_number == 14:
        kind = ObservanceKind.MASIK_SHIVARATRI
    elif monday:
        kind = ObservanceKind.SOMVAR
    else:
        return None

    name, significance, practices = OBSERVANCES[kind][lang]
    if monday and day.month in SHRAVAN_MONTHS:
        kind = ObservanceKind.SHRAVAN_SOMVAR
        name, significance, _ = OBSERVANCES[kind][lang]
    return Observance(kind=kind, name=name, significance=significance, practices=practices)


def shiv_vaas_index(tithi_number: int) -> int:
    """(tithi × 2 + 5) mod 7, with a zero remainder counted as 7."""
    remainder = (tithi_number * 2 + 5) % 7
    return 7 if remainder == 0 else remainder


def formula_text(tithi_number: int) -> str:
    x = tithi_number * 2 + 5
    return f"({tithi_number} × 2 + 5) mod 7 = {x} mod 7 = {x % 7} → {shiv_vaas_index(tithi_number)}"


def classify(
    tithi: TithiResult | int,
    sunrise: datetime | None = None,
    next_sunrise: datetime | None = None,
    lang: str = "en",
    specific_time: datetime | None = None,
    degraded: tuple[DegradedReason, ...] = (),
    day: date | None = None,
) -> ShivVaasResult:
    """Classify a tithi into one of the seven abodes.

    The classification holds from sunrise to the next sunrise.

    Args:
        tithi: Tithi of the day, or its 1..30 number.
        sunrise: Sunrise of the reference day. Without it there is no validity window.
        next_sunrise: Sunrise of the following day. Defaults to sunrise + 1 day.
        lang: 'en' or 'hi'.
        specific_time: The instant the tithi was evaluated at, if not sunrise.
        degraded: Reasons inherited from the rise/set and position steps.
        day: Calendar date for the observance lookup. Defaults to the date of sunrise.

    Returns:
        ShivVaasResult.
    """
    if isinstance(tithi, int):
        tithi = tithi_from_number(tithi, lang)
    window = None
    if sunrise is not None:
        if next_sunrise is None:
            next_sunrise = sunrise + timedelta(days=1)
        window = TimeSpan(start=sunrise, end=next_sunrise)

    if day is None and sunrise is not None:
        day = sunrise.date()

    index = shiv_vaas_index(tithi.number)
    merged = tuple(dict.fromkeys(degraded + tithi.degraded))
    return ShivVaasResult(
        index=index,
        abode=ABODES[index],
        lang=normalize_lang(lang),
        formula=formula_text(tithi.number),
        verse=t("shiv_vaas_verse", lang),
        tithi=tithi,
        sunrise_time=sunrise,
        validity_window=window,
        specific_time=specific_time,
        observance=observance_for(day, tithi, lang) if day is not None else None,
        degraded=merged,
    )
