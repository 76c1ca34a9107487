"""chronoline: compile a line-oriented timeline DSL into renderer-ready data.

Public entry points:

- :func:`parse`: DSL text to :class:`ParseResult`
- :func:`normalize`: partial date string to ``Result[CanonicalDate, DateError]``
- :func:`format_range`: canonical date(s) plus locale to a display string
"""

from __future__ import annotations

from chronoline.core.calendar.formatter import format_range
from chronoline.core.calendar.normalizer import CanonicalDate, normalize
from chronoline.core.contracts.timeline import ParseConfig, ParseResult
from chronoline.core.errors import AggregateParseError, DateError
from chronoline.dsl.parser import parse

__all__ = [
    "__version__",
    "parse",
    "normalize",
    "format_range",
    "CanonicalDate",
    "ParseConfig",
    "ParseResult",
    "AggregateParseError",
    "DateError",
]
__version__ = "0.1.0"
