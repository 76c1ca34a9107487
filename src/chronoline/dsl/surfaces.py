"""Locate DSL text inside Markdown documents.

Two surface forms share the line grammar:

- fenced blocks::

      ```chronos
      - [2020] Event
      ```

- inline spans: a one-backtick code span whose text starts with
  ``chronos``, e.g. ``chronos [2020] Event`` wrapped in single backticks.

The fence or backticks are stripped and the inner text returned with the
1-based document line where it starts. No parsing happens here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

SurfaceKind = Literal["fenced", "inline", "document"]

FENCE_LANGUAGE = "chronos"

_FENCED = re.compile(
    rf"^(?P<fence>`{{3,}}|~{{3,}})[ \t]*{FENCE_LANGUAGE}[ \t]*\n(?P<body>.*?)^(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
_INLINE = re.compile(rf"(?<!`)`{FENCE_LANGUAGE}\s+(?P<body>[^`\n]+?)`(?!`)")


@dataclass(frozen=True)
class DslBlock:
    """DSL text found in a document.

    ``kind="document"`` is never produced here; callers use it when a whole
    file is DSL source.
    """

    kind: SurfaceKind
    source: str
    line: int


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def extract_blocks(markdown: str) -> list[DslBlock]:
    """Return every fenced block and inline span, in document order."""
    text = markdown.replace("\r\n", "\n")
    found: list[tuple[int, DslBlock]] = []
    fenced_spans: list[tuple[int, int]] = []

    for match in _FENCED.finditer(text):
        body_start = match.start("body")
        fenced_spans.append((match.start(), match.end()))
        found.append(
            (
                match.start(),
                DslBlock("fenced", match["body"].rstrip("\n"), _line_of(text, body_start)),
            )
        )

    for match in _INLINE.finditer(text):
        if any(start <= match.start() < end for start, end in fenced_spans):
            continue
        found.append(
            (
                match.start(),
                DslBlock("inline", match["body"].strip(), _line_of(text, match.start())),
            )
        )

    return [block for _, block in sorted(found, key=lambda pair: pair[0])]


__all__ = ["DslBlock", "SurfaceKind", "FENCE_LANGUAGE", "extract_blocks"]
