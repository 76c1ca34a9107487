"""Tests for locating DSL blocks inside Markdown."""

from __future__ import annotations

from chronoline.dsl.parser import parse
from chronoline.dsl.surfaces import DslBlock, extract_blocks

DOCUMENT = """\
# Project notes

Intro with an inline span: `chronos [2020] Kickoff #green` inside prose.

```chronos
- [2021] Beta
> HEIGHT 200
```

```python
print("not a timeline")
```

~~~chronos
* [2022-05-04] Release
~~~
"""


def test_blocks_come_back_in_document_order() -> None:
    blocks = extract_blocks(DOCUMENT)
    assert [block.kind for block in blocks] == ["inline", "fenced", "fenced"]
    assert blocks[0] == DslBlock("inline", "[2020] Kickoff #green", 3)
    assert blocks[1].source == "- [2021] Beta\n> HEIGHT 200"
    assert blocks[1].line == 6
    assert blocks[2].source == "* [2022-05-04] Release"
    assert blocks[2].line == 15


def test_inline_span_parses_as_event() -> None:
    block = extract_blocks(DOCUMENT)[0]
    item = parse(block.source).items[0]
    assert item.kind == "event"
    assert (item.content, item.color) == ("Kickoff", "green")


def test_inline_lookalikes_inside_fences_are_skipped() -> None:
    text = "```chronos\n- [2020] A `chronos [1999] nested` here\n```\n"
    blocks = extract_blocks(text)
    assert [block.kind for block in blocks] == ["fenced"]


def test_other_languages_and_plain_text_yield_nothing() -> None:
    assert extract_blocks("```js\nlet x = 1\n```\nplain `code` text") == []


def test_crlf_documents() -> None:
    blocks = extract_blocks("```chronos\r\n- [2020] A\r\n```\r\n")
    assert [block.source for block in blocks] == ["- [2020] A"]
    assert blocks[0].line == 2
