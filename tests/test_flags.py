"""Tests for flag handlers and ORDERBY ordering."""

from __future__ import annotations

import pytest

from chronoline.core.calendar.normalizer import to_canonical
from chronoline.core.contracts.timeline import EventItem, Item, PointItem
from chronoline.core.errors import MalformedFlagArgument
from chronoline.dsl.flags import (
    FLAG_HANDLERS,
    default_view_flag,
    height_flag,
    order_by_flag,
    order_items,
)
from chronoline.dsl.grammar import DEFAULT_GRAMMAR, Grammar


def _items() -> list[Item]:
    return [
        EventItem(id=0, content="beta", start=to_canonical("2021"), color="red", source_line=1),
        EventItem(id=1, content="Alpha", start=to_canonical("2020"), source_line=2),
        PointItem(id=2, content="gamma", start=to_canonical("2021"), color="blue", source_line=3),
        EventItem(
            id=3,
            content="delta",
            start=to_canonical("2019"),
            end=to_canonical("2022"),
            source_line=4,
        ),
    ]


def test_handler_table_covers_every_keyword() -> None:
    assert set(FLAG_HANDLERS) == {"ORDERBY", "DEFAULTVIEW", "NOTODAY", "HEIGHT"}


def test_order_by_trims_whitespace() -> None:
    assert order_by_flag(" start | -content ", DEFAULT_GRAMMAR) == {
        "order_by": ["start", "-content"]
    }


def test_order_by_respects_grammar_keys() -> None:
    narrow = Grammar(order_keys=frozenset({"start"}))
    with pytest.raises(MalformedFlagArgument):
        order_by_flag("content", narrow)


def test_default_view_uses_the_argument_separator() -> None:
    grammar = Grammar(flag_argument_separator=",")
    view = default_view_flag("2019, 2023", grammar)["default_view"]
    assert view.start == to_canonical("2019")
    assert view.end == to_canonical("2023")


def test_height_rejects_non_integers() -> None:
    assert height_flag("250", DEFAULT_GRAMMAR) == {"height": 250}
    for bad in ("", "2.5", "100px", "0"):
        with pytest.raises(MalformedFlagArgument):
            height_flag(bad, DEFAULT_GRAMMAR)


def test_order_items_without_keys_keeps_source_order() -> None:
    assert [item.id for item in order_items(_items(), None)] == [0, 1, 2, 3]
    assert [item.id for item in order_items(_items(), [])] == [0, 1, 2, 3]


def test_order_items_by_start_is_stable() -> None:
    assert [item.id for item in order_items(_items(), ["start"])] == [3, 1, 0, 2]


def test_order_items_descending_and_secondary_keys() -> None:
    ordered = order_items(_items(), ["-start", "content"])
    assert [item.id for item in ordered] == [0, 2, 1, 3]


def test_order_items_text_is_case_insensitive() -> None:
    assert [item.content for item in order_items(_items(), ["content"])] == [
        "Alpha",
        "beta",
        "delta",
        "gamma",
    ]


def test_missing_values_sort_last_in_both_directions() -> None:
    assert [item.id for item in order_items(_items(), ["color"])] == [2, 0, 1, 3]
    assert [item.id for item in order_items(_items(), ["-color"])] == [0, 2, 1, 3]
    assert [item.id for item in order_items(_items(), ["end"])] == [3, 0, 1, 2]
