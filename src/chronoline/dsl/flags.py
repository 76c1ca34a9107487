"""Flag-line handlers (``> KEYWORD ARGS``) and the ORDERBY item ordering.

Each handler receives the raw argument text and returns the `Flags` fields
it sets, or raises :class:`MalformedFlagArgument`. Handlers are looked up by
upper-cased keyword in :data:`FLAG_HANDLERS`; keywords missing from the
table are ignored by the parser.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from chronoline.core.calendar.normalizer import CanonicalDate, normalize
from chronoline.core.contracts.timeline import DefaultView, Item
from chronoline.core.errors import MalformedFlagArgument
from chronoline.dsl.grammar import Grammar

FlagHandler = Callable[[str, Grammar], dict[str, Any]]

_POSITIVE_INT = re.compile(r"[0-9]+")


def _split_args(args: str, grammar: Grammar) -> list[str]:
    return [part.strip() for part in args.split(grammar.flag_argument_separator)]


def order_by_flag(args: str, grammar: Grammar) -> dict[str, Any]:
    """``ORDERBY start|-content``: sort keys, ``-`` for descending."""
    keys = _split_args(args, grammar)
    if not args.strip() or not all(keys):
        raise MalformedFlagArgument("ORDERBY needs sort keys, e.g. 'ORDERBY start|-content'")
    for key in keys:
        name = key[1:] if key.startswith("-") else key
        if name not in grammar.order_keys:
            allowed = ", ".join(sorted(grammar.order_keys))
            raise MalformedFlagArgument(f"ORDERBY: unknown sort key {key!r} (use {allowed})")
    return {"order_by": keys}


def default_view_flag(args: str, grammar: Grammar) -> dict[str, Any]:
    """``DEFAULTVIEW 2019|2023``: initial visible window."""
    parts = _split_args(args, grammar)
    if len(parts) != 2 or not all(parts):
        raise MalformedFlagArgument(
            "DEFAULTVIEW needs a start and end date, e.g. 'DEFAULTVIEW 2019|2023'"
        )
    start, end = (normalize(part) for part in parts)
    for outcome in (start, end):
        if outcome.is_err():
            raise MalformedFlagArgument(f"DEFAULTVIEW: {outcome.unwrap_err().message}")
    if end.unwrap() < start.unwrap():
        raise MalformedFlagArgument("DEFAULTVIEW: end date precedes start date")
    return {"default_view": DefaultView(start=start.unwrap(), end=end.unwrap())}


def no_today_flag(args: str, grammar: Grammar) -> dict[str, Any]:
    """``NOTODAY``: hide the current-time line."""
    if args.strip():
        raise MalformedFlagArgument(f"NOTODAY takes no arguments, got {args.strip()!r}")
    return {"hide_current_time_marker": True}


def height_flag(args: str, grammar: Grammar) -> dict[str, Any]:
    """``HEIGHT 300``: timeline height in pixels."""
    text = args.strip()
    if not _POSITIVE_INT.fullmatch(text) or int(text) == 0:
        raise MalformedFlagArgument(f"HEIGHT needs a positive number of pixels, got {text!r}")
    return {"height": int(text)}


FLAG_HANDLERS: Mapping[str, FlagHandler] = MappingProxyType(
    {
        "ORDERBY": order_by_flag,
        "DEFAULTVIEW": default_view_flag,
        "NOTODAY": no_today_flag,
        "HEIGHT": height_flag,
    }
)


# --------------------------------------------------------------------------- #
# Ordering
# --------------------------------------------------------------------------- #


def _sort_value(item: Item, name: str) -> Any:
    value = getattr(item, name, None)
    if isinstance(value, CanonicalDate):
        return value.timestamp
    if isinstance(value, str):
        return value.casefold()
    return value


def order_items(items: Iterable[Item], order_by: Sequence[str] | None) -> list[Item]:
    """Return ``items`` sorted by ``ORDERBY`` keys.

    The first key has the highest precedence; ``-key`` sorts descending.
    Items missing a key's value go after those that have it. The sort is
    stable, so equal items keep source order.
    """
    ordered = list(items)
    for key in reversed(order_by or ()):
        descending = key.startswith("-")
        name = key[1:] if descending else key
        present = [item for item in ordered if _sort_value(item, name) is not None]
        missing = [item for item in ordered if _sort_value(item, name) is None]
        present.sort(key=lambda item, field=name: _sort_value(item, field), reverse=descending)
        ordered = present + missing
    return ordered


__all__ = [
    "FlagHandler",
    "FLAG_HANDLERS",
    "order_by_flag",
    "default_view_flag",
    "no_today_flag",
    "height_flag",
    "order_items",
]
