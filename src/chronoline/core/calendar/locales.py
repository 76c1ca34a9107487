"""Static locale tables: which codes read right-to-left, which are known.

Pure data plus lookups. Codes are lower-case, ``-``-separated (``zh-cn``);
lookups accept ``_`` and any casing.
"""

from __future__ import annotations

from collections.abc import Iterable

from babel import Locale, UnknownLocaleError

RTL_LOCALES: frozenset[str] = frozenset({"ar", "fa", "he", "ks", "ku", "ur", "yi"})

LTR_LOCALES: frozenset[str] = frozenset(
    {
        "af", "az", "be", "bg", "bn", "bs", "ca", "cs", "cy", "da",
        "de", "el", "en", "eo", "es", "et", "eu", "fi", "fr", "ga",
        "gl", "gu", "hi", "hr", "hu", "hy", "id", "is", "it", "ja",
        "jv", "ka", "kk", "km", "kn", "ko", "ky", "la", "lb", "lo",
        "lt", "lv", "mg", "mi", "mk", "ml", "mn", "mr", "ms", "mt",
        "my", "nb", "ne", "nl", "nn", "pl", "pt", "ro", "ru", "si",
        "sk", "sl", "so", "sq", "sr", "su", "sv", "sw", "ta", "te",
        "th", "tr", "uk", "vi", "xh", "zh-cn", "zh-tw", "zu",
    }
)  # fmt: skip

KNOWN_LOCALES: tuple[str, ...] = tuple(sorted(RTL_LOCALES | LTR_LOCALES))

DEFAULT_LOCALE = "en"


def canonical_code(locale: str) -> str:
    """Return ``locale`` lower-cased with ``-`` as the subtag separator."""
    return locale.strip().replace("_", "-").lower()


def base_language(locale: str) -> str:
    """Return the primary language subtag (``"zh-tw"`` → ``"zh"``)."""
    return canonical_code(locale).split("-", 1)[0]


def is_rtl(locale: str) -> bool:
    """True when ``locale`` (or its base language) is a right-to-left locale."""
    code = canonical_code(locale)
    return code in RTL_LOCALES or base_language(code) in RTL_LOCALES


def known_locales(extra: Iterable[str] = ()) -> list[str]:
    """Return a fresh sorted list of known codes, plus any host-supplied ``extra``."""
    return sorted(set(KNOWN_LOCALES) | {canonical_code(code) for code in extra})


def locale_display_name(locale: str) -> str:
    """Return the locale's native display name, or the code when Babel lacks it.

    >>> locale_display_name("de")
    'Deutsch'
    """
    try:
        name = Locale.parse(canonical_code(locale), sep="-").get_display_name()
    except (UnknownLocaleError, ValueError):
        return locale
    return name or locale


__all__ = [
    "RTL_LOCALES",
    "LTR_LOCALES",
    "KNOWN_LOCALES",
    "DEFAULT_LOCALE",
    "canonical_code",
    "base_language",
    "is_rtl",
    "known_locales",
    "locale_display_name",
]
