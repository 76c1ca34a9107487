"""Timeline DSL: grammar table, line parser, flags, assembler, document surfaces."""

from __future__ import annotations

from .assembler import assemble
from .flags import FLAG_HANDLERS, order_items
from .grammar import CHEATSHEET, DEFAULT_GRAMMAR, Grammar
from .parser import TimelineParser, parse
from .surfaces import DslBlock, extract_blocks

__all__ = [
    "parse",
    "TimelineParser",
    "assemble",
    "Grammar",
    "DEFAULT_GRAMMAR",
    "CHEATSHEET",
    "FLAG_HANDLERS",
    "order_items",
    "DslBlock",
    "extract_blocks",
]
