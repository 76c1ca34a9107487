"""
Date normalizer: partial ISO-like strings → fully specified UTC instants.

Input grammar
-------------
``±YYYY[-MM[-DD[THH[:MM[:SS[.fff]]]]]][Z]``

Only ASCII digits are accepted and the year takes one to nine of them.
Missing trailing components default to ``01`` (month, day) and ``00``
(hour, minute, second). Fractional seconds are accepted and dropped. A
leading ``-`` marks a negative (pre-epoch) year; years use astronomical
numbering on the proleptic Gregorian calendar, so year ``0`` exists and is a
leap year.

Validation order
----------------
1. grammar → :class:`InvalidDateFormat`
2. month 1-12 → :class:`InvalidMonth`
3. day 1-31 → :class:`InvalidDay`
4. hour / minute / second → :class:`InvalidHour` / :class:`InvalidMinute` /
   :class:`InvalidSecond`
5. calendar consistency: the fields are turned into a UTC instant and read
   back; any drift (Feb 30 → Mar 2) → :class:`InvalidDate`.

Python's :mod:`datetime` stops at year 1, so instants are computed with the
days-from-civil / civil-from-days pair over plain integers. Nothing here
touches the local time zone or locale.

Examples
--------
>>> normalize("2020").unwrap().isoformat()
'2020-01-01T00:00:00Z'
>>> normalize("-44-03-15").unwrap().isoformat()
'-0044-03-15T00:00:00Z'
>>> normalize("2021-02-30").unwrap_err().kind
'InvalidDate'
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from chronoline.core.errors import (
    DateError,
    InvalidDate,
    InvalidDateFormat,
    InvalidDay,
    InvalidHour,
    InvalidMinute,
    InvalidMonth,
    InvalidSecond,
)
from chronoline.core.result import Result, err, ok

# ASCII digits only; the year is capped at nine digits.
_PARTIAL_ISO = re.compile(
    r"^(?P<year>[+-]?[0-9]{1,9})"
    r"(?:-(?P<month>[0-9]{2})"
    r"(?:-(?P<day>[0-9]{2})"
    r"(?:T(?P<hour>[0-9]{2})"
    r"(?::(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})(?:\.[0-9]+)?)?)?)?)?)?"
    r"Z?$"
)

_SECONDS_PER_DAY = 86_400
# 1970-03-01 counted from 0000-03-01.
_EPOCH_SHIFT_DAYS = 719_468


def days_from_civil(year: int, month: int, day: int) -> int:
    """Return days since 1970-01-01 for a proleptic Gregorian date.

    ``day`` may overflow its month; the result is then the day it rolls
    over to, which is what the consistency check relies on.
    """
    y = year - (1 if month <= 2 else 0)
    era = y // 400
    yoe = y - era * 400
    mp = (month + 9) % 12
    doy = (153 * mp + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146_097 + doe - _EPOCH_SHIFT_DAYS


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of :func:`days_from_civil`: ``(year, month, day)``."""
    z = days + _EPOCH_SHIFT_DAYS
    era = z // 146_097
    doe = z - era * 146_097
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def _format_year(year: int) -> str:
    sign = "-" if year < 0 else ""
    return f"{sign}{abs(year):04d}"


def _check_fields(
    year: int, month: int, day: int, hour: int, minute: int, second: int
) -> DateError | None:
    """Run validation steps 2-5 over numeric fields; return the first failure."""
    if not 1 <= month <= 12:
        return InvalidMonth(f"Invalid month: {month:02d}. Must be between 01-12", str(month))
    if not 1 <= day <= 31:
        return InvalidDay(f"Invalid day: {day:02d}. Must be between 01-31", str(day))
    if not 0 <= hour <= 23:
        return InvalidHour(f"Invalid hour: {hour:02d}. Must be between 00-23", str(hour))
    if not 0 <= minute <= 59:
        return InvalidMinute(
            f"Invalid minute: {minute:02d}. Must be between 00-59", str(minute)
        )
    if not 0 <= second <= 59:
        return InvalidSecond(
            f"Invalid second: {second:02d}. Must be between 00-59", str(second)
        )

    instant = (
        days_from_civil(year, month, day) * _SECONDS_PER_DAY + hour * 3600 + minute * 60 + second
    )
    days, rest = divmod(instant, _SECONDS_PER_DAY)
    if civil_from_days(days) + (rest // 3600, rest % 3600 // 60, rest % 60) != (
        year,
        month,
        day,
        hour,
        minute,
        second,
    ):
        shown = f"{_format_year(year)}-{month:02d}-{day:02d}"
        return InvalidDate(
            f"Invalid date: {shown}. Make sure you have correct month, day, etc.", shown
        )
    return None


def _fields_from_text(partial: str) -> dict[str, int] | DateError:
    text = partial.strip()
    match = _PARTIAL_ISO.match(text)
    if match is None:
        return InvalidDateFormat(f"Invalid date format: {partial!r}", partial)

    groups = match.groupdict()
    fields = {
        "year": int(groups["year"]),
        "month": int(groups["month"] or 1),
        "day": int(groups["day"] or 1),
        "hour": int(groups["hour"] or 0),
        "minute": int(groups["minute"] or 0),
        "second": int(groups["second"] or 0),
    }
    problem = _check_fields(**fields)
    if problem is not None:
        return problem
    return fields


class CanonicalDate(BaseModel):
    """A fully specified UTC instant produced by :func:`normalize`.

    Serializes (``str()``, ``model_dump``, JSON) to the canonical
    ``±YYYY-MM-DDTHH:MM:SSZ`` text. Validating a string goes through the
    normalizer; validating numeric fields re-runs the same checks.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data: Any) -> Any:
        """Accept canonical or partial date strings as input."""
        if isinstance(data, str):
            fields = _fields_from_text(data)
            if isinstance(fields, DateError):
                raise fields
            return fields
        return data

    @model_validator(mode="after")
    def _calendar_consistent(self) -> CanonicalDate:
        problem = _check_fields(
            self.year, self.month, self.day, self.hour, self.minute, self.second
        )
        if problem is not None:
            raise problem
        return self

    @model_serializer(mode="plain")
    def _serialize(self) -> str:
        return self.isoformat()

    # ----- Views -------------------------------------------------------------

    def isoformat(self) -> str:
        """Return the canonical ``±YYYY-MM-DDTHH:MM:SSZ`` string."""
        return (
            f"{_format_year(self.year)}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}Z"
        )

    @property
    def timestamp(self) -> int:
        """Seconds relative to 1970-01-01T00:00:00Z (negative before it)."""
        return (
            days_from_civil(self.year, self.month, self.day) * _SECONDS_PER_DAY
            + self.hour * 3600
            + self.minute * 60
            + self.second
        )

    @property
    def is_year_start(self) -> bool:
        """True when the instant is exactly midnight on January 1."""
        return (self.month, self.day, self.hour, self.minute, self.second) == (1, 1, 0, 0, 0)

    def same_day(self, other: CanonicalDate) -> bool:
        """True when both instants fall on the same calendar day."""
        return (self.year, self.month, self.day) == (other.year, other.month, other.day)

    def same_month(self, other: CanonicalDate) -> bool:
        """True when both instants fall in the same calendar month."""
        return (self.year, self.month) == (other.year, other.month)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CanonicalDate):
            return NotImplemented
        return self.timestamp < other.timestamp

    def __str__(self) -> str:
        return self.isoformat()


def normalize(partial: str) -> Result[CanonicalDate, DateError]:
    """Normalize a partial date string.

    Parameters
    ----------
    partial:
        Text such as ``"2020"``, ``"-0044-03-15"`` or ``"2023-06-01T12:30"``.

    Returns
    -------
    Result[CanonicalDate, DateError]
        ``Ok`` with the canonical date, or ``Err`` with the first failed
        validation step.
    """
    fields = _fields_from_text(partial)
    if isinstance(fields, DateError):
        return err(fields)
    # Fields were fully checked above; skip re-validation.
    return ok(CanonicalDate.model_construct(**fields))


def to_canonical(partial: str) -> CanonicalDate:
    """Like :func:`normalize`, but raise the :class:`DateError` on failure."""
    return normalize(partial).unwrap()


__all__ = [
    "CanonicalDate",
    "normalize",
    "to_canonical",
    "days_from_civil",
    "civil_from_days",
]
