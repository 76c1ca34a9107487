"""
Range formatter: one or two canonical dates → compact, locale-aware text.

Rules (first match wins)
------------------------
1. No end, start at midnight Jan 1 → bare year (``2020``, ``2020年``).
2. No end → full date (``Jun 1, 2023``).
3. Same day → as rule 2.
4. Same month → compact day range (``Jun 1-20, 2023``, ``2023年6月1~20日``).
5. Both at midnight Jan 1 → ``2020 - 2022``, identical for every locale.
6. Otherwise → ``FULL - FULL``.

Right-to-left locales put the day first and wrap month and year tokens
with U+200E (LEFT-TO-RIGHT MARK) so digits keep their order inside RTL text.

Locale data
-----------
Names and date patterns come from a :class:`LocaleService`. The default
:class:`BabelLocaleService` reads Babel's bundled CLDR data (never the
platform locale database); :class:`PlainLocaleService` is the unlocalized
fallback. :func:`format_range` never raises: if the service fails, the
whole string is rebuilt with the plain service.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Protocol

from babel import Locale
from babel.dates import format_skeleton, get_month_names

from chronoline.core.calendar.locales import base_language, canonical_code, is_rtl
from chronoline.core.calendar.normalizer import CanonicalDate
from chronoline.core.settings import get_logger

logger = get_logger("chronoline.formatter")

LRM = "\u200e"
RANGE_SEPARATOR = " - "

_PLAIN_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip

# Russian years take a narrow no-break space before "г."; Babel output is
# normalized to the same suffix.
_YEAR_SUFFIXES: dict[str, str] = {
    "ja": "年",
    "zh": "年",
    "ko": "년",
    "ru": "\u202fг.",
}
_RU_YEAR = re.compile(r"(?<=[0-9])\s*г\.")


class LocaleService(Protocol):
    """Locale lookups the formatter needs; injectable for hosts and tests."""

    def is_rtl(self, locale: str) -> bool: ...

    def month_abbr(self, month: int, locale: str) -> str: ...

    def full_date(self, date: CanonicalDate, locale: str) -> str: ...


class PlainLocaleService:
    """Unlocalized default: English month abbreviations, ``Mon D, YYYY``."""

    def is_rtl(self, locale: str) -> bool:
        return is_rtl(locale)

    def month_abbr(self, month: int, locale: str) -> str:
        return _PLAIN_MONTHS[month - 1]

    def full_date(self, date: CanonicalDate, locale: str) -> str:
        return f"{self.month_abbr(date.month, locale)} {date.day}, {date.year}"


class BabelLocaleService(PlainLocaleService):
    """CLDR-backed names via Babel; direction still comes from the static tables.

    Babel formats through :class:`datetime.datetime`, so years outside
    1-9999 use the plain full-date pattern with localized month names.
    """

    def _locale(self, locale: str) -> Locale:
        return Locale.parse(canonical_code(locale), sep="-")

    def month_abbr(self, month: int, locale: str) -> str:
        return str(get_month_names("abbreviated", locale=self._locale(locale))[month])

    def full_date(self, date: CanonicalDate, locale: str) -> str:
        if not 1 <= date.year <= 9999:
            return f"{self.month_abbr(date.month, locale)} {date.day}, {date.year}"
        moment = datetime(
            date.year, date.month, date.day, date.hour, date.minute, date.second, tzinfo=timezone.utc
        )
        text = str(
            format_skeleton("yMMMd", moment, tzinfo=timezone.utc, locale=self._locale(locale))
        )
        if base_language(locale) == "ru":
            text = _RU_YEAR.sub(_YEAR_SUFFIXES["ru"], text)
        return text


DEFAULT_SERVICE: LocaleService = BabelLocaleService()
PLAIN_SERVICE: LocaleService = PlainLocaleService()


def _year_label(year: int, lang: str) -> str:
    return f"{year}{_YEAR_SUFFIXES.get(lang, '')}"


def _single(date: CanonicalDate, locale: str, rtl: bool, service: LocaleService) -> str:
    if rtl:
        return f"{date.day} {LRM}{service.month_abbr(date.month, locale)} {LRM}{date.year}"
    return service.full_date(date, locale)


def _same_month(
    start: CanonicalDate, end: CanonicalDate, locale: str, rtl: bool, service: LocaleService
) -> str:
    month = service.month_abbr(start.month, locale)
    year, d1, d2 = start.year, start.day, end.day
    if rtl:
        return f"{d1}-{d2} {LRM}{month} {LRM}{year}"

    lang = base_language(locale)
    if lang == "en":
        return f"{month} {d1}-{d2}, {year}"
    if lang in ("ja", "zh"):
        return f"{_year_label(year, lang)}{month}{d1}~{d2}日"
    if lang == "ko":
        return f"{_year_label(year, lang)} {month} {d1}~{d2}일"
    if lang == "ru":
        return f"{d1}-{d2} {month} {_year_label(year, lang)}"
    return f"{d1}-{d2} {month} {year}"


def _render(
    start: CanonicalDate, end: CanonicalDate | None, locale: str, service: LocaleService
) -> str:
    rtl = service.is_rtl(locale)

    if end is None or start.same_day(end):
        if end is None and start.is_year_start:
            return str(start.year) if rtl else _year_label(start.year, base_language(locale))
        return _single(start, locale, rtl, service)

    if start.same_month(end):
        return _same_month(start, end, locale, rtl, service)

    if start.is_year_start and end.is_year_start:
        return f"{start.year}{RANGE_SEPARATOR}{end.year}"

    return (
        f"{_single(start, locale, rtl, service)}{RANGE_SEPARATOR}"
        f"{_single(end, locale, rtl, service)}"
    )


def format_range(
    start: CanonicalDate,
    end: CanonicalDate | None = None,
    locale: str = "en",
    *,
    service: LocaleService | None = None,
) -> str:
    """Format a date or date range for display.

    Parameters
    ----------
    start, end:
        Canonical dates from the normalizer; ``end`` is optional.
    locale:
        Locale code such as ``"en"``, ``"ja"``, ``"zh-tw"`` or ``"ar"``.
    service:
        Locale lookups; defaults to :data:`DEFAULT_SERVICE`.

    Returns
    -------
    str
        The formatted text. Never raises; lookup failures degrade to the
        unlocalized pattern.

    Examples
    --------
    >>> from chronoline.core.calendar.normalizer import to_canonical
    >>> format_range(to_canonical("2023-06-01"), to_canonical("2023-06-20"), "en")
    'Jun 1-20, 2023'
    """
    active = service or DEFAULT_SERVICE
    try:
        return _render(start, end, locale, active)
    except Exception as exc:  # never raise from a render pass
        logger.warning("Locale lookup failed for %r (%s); using plain format", locale, exc)
        return _render(start, end, locale, PLAIN_SERVICE)


__all__ = [
    "LocaleService",
    "PlainLocaleService",
    "BabelLocaleService",
    "DEFAULT_SERVICE",
    "PLAIN_SERVICE",
    "LRM",
    "format_range",
]
