"""
Grammar table for the timeline DSL.

The parser reads every surface token from a :class:`Grammar` instance rather
than hard-coding it, so hosts can swap sigils or keywords without touching
parsing logic. :data:`DEFAULT_GRAMMAR` is the standard dialect::

    # comment
    - [1789~1799] French Revolution #red {Europe} | See [[Revolutions]]
    @ [1939-09-01~1945-09-02] World War II #gray
    * [1969-07-20] Moon landing
    = [2000] Millennium
    [2020] Sigil-less event (inline form)
    > ORDERBY start|-content
    > DEFAULTVIEW 1700|2025
    > NOTODAY
    > HEIGHT 300
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

EntityKind = Literal["event", "period", "point", "marker"]

FlagKeyword = Literal["ORDERBY", "DEFAULTVIEW", "NOTODAY", "HEIGHT"]

_DEFAULT_SIGILS: Mapping[str, EntityKind] = MappingProxyType(
    {"-": "event", "@": "period", "*": "point", "=": "marker"}
)

_DEFAULT_ORDER_KEYS: frozenset[str] = frozenset(
    {"start", "end", "content", "color", "group", "description"}
)


@dataclass(frozen=True)
class Grammar:
    """Surface syntax of one DSL dialect.

    Attributes
    ----------
    comment_marker:
        Lines starting with it are skipped.
    flag_prefix:
        Lines starting with it carry ``KEYWORD [ARGS]``.
    sigils:
        Leading character → entity kind.
    bare_opener:
        A line starting with it (no sigil) is an event; used by inline spans.
    date_open, date_close:
        Bracket pair around the date token(s).
    range_separator:
        Splits start and end dates inside the brackets.
    description_separator:
        Text after its first occurrence is the description.
    flag_argument_separator:
        Splits multi-valued flag arguments (``ORDERBY``, ``DEFAULTVIEW``).
    order_keys:
        Item fields ``ORDERBY`` may name.
    """

    comment_marker: str = "#"
    flag_prefix: str = ">"
    sigils: Mapping[str, EntityKind] = field(default_factory=lambda: _DEFAULT_SIGILS)
    bare_opener: str = "["
    date_open: str = "["
    date_close: str = "]"
    range_separator: str = "~"
    description_separator: str = "|"
    flag_argument_separator: str = "|"
    order_keys: frozenset[str] = _DEFAULT_ORDER_KEYS

    def entity_pattern(self) -> re.Pattern[str]:
        """Regex for an entity body once the sigil is removed."""
        return re.compile(
            rf"^\s*{re.escape(self.date_open)}(?P<dates>[^{re.escape(self.date_close)}]*)"
            rf"{re.escape(self.date_close)}(?P<rest>.*)$"
        )


DEFAULT_GRAMMAR = Grammar()

# Tokens that may lead or trail an entity's content.
TAG_LEADING = re.compile(r"^#(?P<tag>[\w-]+)(?:\s+|$)")
TAG_TRAILING = re.compile(r"(?:^|\s)#(?P<tag>[\w-]+)$")
GROUP_LEADING = re.compile(r"^\{(?P<group>[^{}]*)\}\s*")
GROUP_TRAILING = re.compile(r"\s*\{(?P<group>[^{}]*)\}$")

# Link-like shapes recognized in descriptions; kept verbatim.
LINK_PATTERN = re.compile(r"\[\[[^\[\]]+\]\]|https?://\S+")

CHEATSHEET = """\
# Chronoline cheatsheet

- [2020] Event on a single date
- [2020-03~2021-06-15] Event spanning a range
- [2020] Event #blue              (color/tag)
- [2020] Event {Team A}           (group / lane)
- [2020] Event | A description    (hover text)
- [2020] Event | See [[Some note]] (link, resolved by the host)
@ [2020~2022] Period drawn as a background band
* [2021-05-04] Point
= [2022-01-01T12:00] Marker line with a label
# Comment lines start with '#'

> ORDERBY start|-content     (sort keys: start end content color group description)
> DEFAULTVIEW 2019|2023       (initial visible window)
> NOTODAY                     (hide the current-time line)
> HEIGHT 300                  (height in pixels)

Dates: YYYY[-MM[-DD[THH[:MM[:SS]]]]][Z]; a leading '-' marks a negative year (-0044-03-15).
"""


__all__ = [
    "EntityKind",
    "FlagKeyword",
    "Grammar",
    "DEFAULT_GRAMMAR",
    "TAG_LEADING",
    "TAG_TRAILING",
    "GROUP_LEADING",
    "GROUP_TRAILING",
    "LINK_PATTERN",
    "CHEATSHEET",
]
