"""Unit tests for the lightweight Result utilities."""

from __future__ import annotations

import pytest

from chronoline.core.errors import InvalidMonth
from chronoline.core.result import Err, Ok, Result, err, ok


def test_ok_and_err_variants() -> None:
    """`ok`/`err` build the matching variant and report it."""
    good: Result[int, str] = ok(10)
    bad: Result[int, str] = err("boom")
    assert good.is_ok() and not good.is_err()
    assert bad.is_err() and not bad.is_ok()
    assert isinstance(good, Ok) and isinstance(bad, Err)


def test_unwrap_variants() -> None:
    """Unwrap returns the payload of the matching variant and raises otherwise."""
    assert ok("x").unwrap() == "x"
    assert err("e").unwrap_err() == "e"

    with pytest.raises(RuntimeError):
        err("e").unwrap()
    with pytest.raises(RuntimeError):
        ok(1).unwrap_err()


def test_unwrap_reraises_exception_payload() -> None:
    """An exception stored in `Err` is raised as-is, keeping its type."""
    problem = InvalidMonth("Invalid month: 13. Must be between 01-12", "13")
    with pytest.raises(InvalidMonth) as info:
        err(problem).unwrap()
    assert info.value is problem


def test_variant_reprs() -> None:
    """`Ok`/`Err` render their payloads for debugging."""
    assert repr(Ok(3)) == "Ok(3)"
    assert repr(Err("x")) == "Err('x')"
