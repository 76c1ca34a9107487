"""Calendrical subsystem: date normalization, range formatting, locale tables."""

from __future__ import annotations

from .formatter import BabelLocaleService, LocaleService, PlainLocaleService, format_range
from .locales import KNOWN_LOCALES, RTL_LOCALES, is_rtl, known_locales, locale_display_name
from .normalizer import CanonicalDate, normalize, to_canonical

__all__ = [
    "CanonicalDate",
    "normalize",
    "to_canonical",
    "format_range",
    "LocaleService",
    "BabelLocaleService",
    "PlainLocaleService",
    "KNOWN_LOCALES",
    "RTL_LOCALES",
    "is_rtl",
    "known_locales",
    "locale_display_name",
]
