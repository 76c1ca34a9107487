"""Tests for the static locale tables and lookups."""

from __future__ import annotations

from chronoline.core.calendar.locales import (
    DEFAULT_LOCALE,
    KNOWN_LOCALES,
    LTR_LOCALES,
    RTL_LOCALES,
    base_language,
    canonical_code,
    is_rtl,
    known_locales,
    locale_display_name,
)


def test_tables_are_disjoint_and_sorted() -> None:
    """No code is both RTL and LTR; the known list is their sorted union."""
    assert not RTL_LOCALES & LTR_LOCALES
    assert list(KNOWN_LOCALES) == sorted(RTL_LOCALES | LTR_LOCALES)
    assert DEFAULT_LOCALE in KNOWN_LOCALES


def test_code_normalization() -> None:
    assert canonical_code(" zh_TW ") == "zh-tw"
    assert base_language("zh-CN") == "zh"
    assert base_language("en") == "en"


def test_rtl_lookup_uses_base_language() -> None:
    assert is_rtl("ar")
    assert is_rtl("HE")
    assert is_rtl("fa_IR")
    assert not is_rtl("en")
    assert not is_rtl("zh-cn")
    assert not is_rtl("unknown")


def test_known_locales_returns_a_fresh_list() -> None:
    """Callers may mutate the returned list without touching the table."""
    first = known_locales()
    first.append("zz")
    assert "zz" not in known_locales()


def test_known_locales_merges_host_extras() -> None:
    codes = known_locales(["pt_BR", "en"])
    assert "pt-br" in codes
    assert codes.count("en") == 1
    assert codes == sorted(codes)


def test_display_name_falls_back_to_code() -> None:
    assert locale_display_name("de") == "Deutsch"
    assert locale_display_name("xx") == "xx"
