"""
Error taxonomy for date normalization and DSL parsing.

Hierarchy
---------
- :class:`ChronolineError`: base for everything raised by the package.
- :class:`DateError`: a partial date string could not be normalized.
  Also a :class:`ValueError`, so Pydantic validators turn it into a
  regular ``ValidationError``.
- :class:`LineError`: a DSL line (entity or flag) is malformed.
- :class:`AggregateParseError`: the single error surfaced by ``parse()``,
  wrapping every :class:`LineIssue` found in one pass.

Line-level failures are never raised on their own by the parser; they are
recorded as :class:`LineIssue` values and only the aggregate escapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chronoline.core.contracts.timeline import ParseResult

#: Joins per-line messages inside :class:`AggregateParseError`. Callers split
#: on it to list every problem separately.
ERROR_SEPARATOR = ";;"


class ChronolineError(Exception):
    """Base exception for all chronoline errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def kind(self) -> str:
        """Short machine label for the error (the class name)."""
        return type(self).__name__


# --------------------------------------------------------------------------- #
# Date normalizer failures
# --------------------------------------------------------------------------- #


class DateError(ChronolineError, ValueError):
    """Raised (or returned inside ``Err``) when a date string is rejected.

    Attributes
    ----------
    value:
        The offending input, or the offending component for range checks.
    """

    def __init__(self, message: str, value: str = "") -> None:
        self.value = value
        super().__init__(message)


class InvalidDateFormat(DateError):
    """The text does not match ``±YYYY[-MM[-DD[THH[:MM[:SS]]]]][Z]``."""


class InvalidMonth(DateError):
    """Month outside 01-12."""


class InvalidDay(DateError):
    """Day outside 01-31."""


class InvalidHour(DateError):
    """Hour outside 00-23."""


class InvalidMinute(DateError):
    """Minute outside 00-59."""


class InvalidSecond(DateError):
    """Second outside 00-59."""


class InvalidDate(DateError):
    """Fields are individually valid but do not form a real calendar date."""


# --------------------------------------------------------------------------- #
# Line grammar failures
# --------------------------------------------------------------------------- #


class LineError(ChronolineError):
    """A DSL line could not be turned into an entity or flag."""


class UnrecognizedEntityLine(LineError):
    """Line does not match any entity shape known to the grammar."""


class MalformedFlagArgument(LineError):
    """A recognized flag keyword received arguments it cannot use."""


class InvalidRange(LineError):
    """An end date precedes its start date."""


@dataclass(frozen=True)
class LineIssue:
    """One recorded failure, bound to its 1-based source line."""

    line: int
    error: ChronolineError

    def format(self) -> str:
        """Return the user-facing ``Line N: message`` text."""
        return f"Line {self.line}: {self.error.message}"


class AggregateParseError(ChronolineError):
    """
    Raised once at the end of a parse that recorded line issues.

    The message is every issue's ``Line N: message`` text joined with
    :data:`ERROR_SEPARATOR`. ``result`` holds the entities assembled from the
    lines that did parse, so callers can still show partial output.
    """

    def __init__(
        self,
        issues: list[LineIssue] | tuple[LineIssue, ...],
        result: ParseResult | None = None,
    ) -> None:
        self.issues: tuple[LineIssue, ...] = tuple(issues)
        self.result = result
        super().__init__(ERROR_SEPARATOR.join(issue.format() for issue in self.issues))

    def messages(self) -> list[str]:
        """Return the per-line messages in source order."""
        return [issue.format() for issue in self.issues]


__all__ = [
    "ERROR_SEPARATOR",
    "ChronolineError",
    "DateError",
    "InvalidDateFormat",
    "InvalidMonth",
    "InvalidDay",
    "InvalidHour",
    "InvalidMinute",
    "InvalidSecond",
    "InvalidDate",
    "LineError",
    "UnrecognizedEntityLine",
    "MalformedFlagArgument",
    "InvalidRange",
    "LineIssue",
    "AggregateParseError",
]
