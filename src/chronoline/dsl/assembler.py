"""Result assembler: package parsed entities into a :class:`ParseResult`.

When any group was declared, a synthetic default group is appended and every
ungrouped item is moved onto it, so each item renders on a lane. Nothing is
reordered, filtered or re-validated here.
"""

from __future__ import annotations

from collections.abc import Sequence

from chronoline.core.contracts.timeline import (
    DEFAULT_GROUP_ID,
    DEFAULT_GROUP_LABEL,
    Flags,
    Group,
    Item,
    Marker,
    ParseConfig,
    ParseResult,
)


def assemble(
    items: Sequence[Item],
    markers: Sequence[Marker],
    raw_groups: Sequence[Group],
    flags: Flags,
    *,
    locale: str = "en",
    config: ParseConfig | None = None,
) -> ParseResult:
    """Build the final result from parser output.

    Parameters
    ----------
    items, markers:
        Entities in source order.
    raw_groups:
        Groups declared by `{label}` tokens, ids starting at 1.
    flags:
        Display flags collected from flag lines.
    locale, config:
        Passed through unchanged.

    Returns
    -------
    ParseResult
        New result; the input sequences are not mutated.
    """
    groups = list(raw_groups)
    placed = list(items)
    if groups:
        groups.append(Group(id=DEFAULT_GROUP_ID, label=DEFAULT_GROUP_LABEL))
        placed = [
            item if item.group is not None else item.model_copy(update={"group": DEFAULT_GROUP_ID})
            for item in placed
        ]

    return ParseResult(
        items=placed,
        markers=list(markers),
        groups=groups,
        flags=flags,
        locale=locale,
        config=config or ParseConfig(),
    )


__all__ = ["assemble"]
