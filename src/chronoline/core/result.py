"""Lightweight, typed Result container for explicit success/failure returns.

Motivation
----------
Date normalization runs once per date token of every DSL line, and a bad
token must never abort the surrounding parse. Rather than using exceptions
for that inner loop, the normalizer hands back a `Result[T, E]` with:
- `Ok(value)` / `Err(error)` variants,
- helpers: `is_ok`, `is_err`, `unwrap`, `unwrap_err`.

Example
-------
>>> from chronoline.core.result import ok, err, Result
>>> def parse_month(x: str) -> Result[int, str]:
...     return ok(int(x)) if x.isdigit() and 1 <= int(x) <= 12 else err("bad month")
>>> parse_month("06").unwrap()
6
>>> parse_month("13").unwrap_err()
'bad month'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    def unwrap(self) -> T:
        """Return the inner value if ``Ok``.

        Raises
        ------
        Exception
            The error payload itself when it is an exception (so a
            :class:`~chronoline.core.errors.DateError` surfaces unchanged),
            otherwise a :class:`RuntimeError` describing it.
        """
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        error = cast(Err[T, E], self).error
        if isinstance(error, BaseException):
            raise error
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True, repr=False)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True, repr=False)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)
