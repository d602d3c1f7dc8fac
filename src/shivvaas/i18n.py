"""Simple two-language (en/hi) translation helper."""

LANGS = ("en", "hi")

_STRINGS: dict[str, dict[str, str]] = {
    "paksha_shukla": {
        "en": "Shukla Paksha",
        "hi": "शुक्ल पक्ष",
    },
    "paksha_krishna": {
        "en": "Krishna Paksha",
        "hi": "कृष्ण पक्ष",
    },
    "puja_brahma": {
        "en": "Brahma Muhurta",
        "hi": "ब्रह्म मुहूर्त",
    },
    "puja_brahma_sig": {
        "en": "The best time for worship",
        "hi": "सर्वोत्तम पूजा काल",
    },
    "puja_sandhya": {
        "en": "Sandhya Kaal",
        "hi": "संध्या काल",
    },
    "puja_sandhya_sig": {
        "en": "Time for Pradosh worship",
        "hi": "प्रदोष पूजा का समय",
    },
    "puja_nishitha": {
        "en": "Nishitha Kaal",
        "hi": "निशीथ काल",
    },
    "puja_nishitha_sig": {
        "en": "Time for Shivaratri worship",
        "hi": "शिवरात्रि पूजा काल",
    },
    "puja_general": {
        "en": "General Time",
        "hi": "सामान्य काल",
    },
    "puja_general_sig": {
        "en": "Regular worship time",
        "hi": "नियमित पूजा समय",
    },
    "shiv_vaas_verse": {
        "en": "तिथिं च द्विगुणी कृत्वा पुनः पञ्च समन्वितम । सप्तभिस्तुहरेद्भागम शेषं शिव वास उच्यते ।।",
        "hi": "तिथिं च द्विगुणी कृत्वा पुनः पञ्च समन्वितम । सप्तभिस्तुहरेद्भागम शेषं शिव वास उच्यते ।।",
    },
    "shiv_vaas_abodes_verse": {
        "en": "एकेन वासः कैलाशे द्वितीये गौरी सन्निधौ ।  तृतीये वृषभारुढ़ः सभायां च चतुष्टये । पंचमे भोजने चैव क्रीड़ायां च रसात्मके ।  श्मशाने सप्तशेषे च शिववासः उदीरितः ।।",
        "hi": "एकेन वासः कैलाशे द्वितीये गौरी सन्निधौ ।  तृतीये वृषभारुढ़ः सभायां च चतुष्टये । पंचमे भोजने चैव क्रीड़ायां च रसात्मके ।  श्मशाने सप्तशेषे च शिववासः उदीरितः ।।",
    },
    "shiv_vaas_formula_title": {
        "en": "By applying the formula shared by Devarshi Narad Ji",
        "hi": "देवर्षि नारद जी द्वारा साझा किए गए सूत्र के अनुसार",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(normalize_lang(lang)) or entry.get("en") or key


def pick(names: tuple[tuple[str, str], ...], index: int, lang: str) -> str:
    """Select lang's form from a table of (en, hi) pairs."""
    en, hi = names[index]
    return hi if normalize_lang(lang) == "hi" else en


_ALIASES = {"sanskrit": "hi", "hindi": "hi", "english": "en"}


def normalize_lang(lang: str | None) -> str:
    """Map 'sanskrit'/'english' style names onto 'hi'/'en'. Unknown values become 'en'."""
    if not lang:
        return "en"
    code = _ALIASES.get(lang.lower(), lang.lower())
    return code if code in LANGS else "en"
