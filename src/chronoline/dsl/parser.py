"""
Line grammar parser: DSL text → :class:`ParseResult`.

One pass over the source, one line at a time. Each line is classified as:

- blank or comment → skipped;
- flag line (``> KEYWORD ARGS``) → handed to the keyword's flag handler;
  unknown keywords are ignored;
- entity line (sigil, or a bare ``[`` for the inline form) → an item or a
  marker; date tokens go through the normalizer;
- anything else → :class:`UnrecognizedEntityLine`.

Error policy
------------
A failing line never stops the scan. Its error is recorded as a
:class:`LineIssue` with the 1-based line number; once every line has been
read, the valid entities are assembled and, if any issue was recorded, a
single :class:`AggregateParseError` carrying all issues and the partial
result is raised.

Concurrency
-----------
:class:`TimelineParser` holds only immutable grammar data. The line cursor
and every accumulator live in a :class:`_ParseState` created per call, so
concurrent ``parse`` calls share nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from chronoline.core.calendar.locales import DEFAULT_LOCALE
from chronoline.core.calendar.normalizer import CanonicalDate, normalize
from chronoline.core.contracts.timeline import (
    EventItem,
    Flags,
    Group,
    Item,
    Marker,
    ParseConfig,
    ParseResult,
    PeriodItem,
    PointItem,
)
from chronoline.core.errors import (
    AggregateParseError,
    ChronolineError,
    InvalidRange,
    LineIssue,
    MalformedFlagArgument,
    UnrecognizedEntityLine,
)
from chronoline.core.settings import get_logger
from chronoline.dsl.assembler import assemble
from chronoline.dsl.flags import FLAG_HANDLERS, FlagHandler
from chronoline.dsl.grammar import (
    DEFAULT_GRAMMAR,
    GROUP_LEADING,
    GROUP_TRAILING,
    LINK_PATTERN,
    TAG_LEADING,
    TAG_TRAILING,
    EntityKind,
    Grammar,
)

logger = get_logger("chronoline.parser")


@dataclass(frozen=True)
class SourceLine:
    """One physical line of DSL source."""

    number: int
    text: str


class LineCursor:
    """Explicit scan position over a single source text."""

    def __init__(self, source: str) -> None:
        self._lines = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        self._position = 0

    @property
    def position(self) -> int:
        """Number of lines consumed so far."""
        return self._position

    def __iter__(self) -> Iterator[SourceLine]:
        return self

    def __next__(self) -> SourceLine:
        if self._position >= len(self._lines):
            raise StopIteration
        line = SourceLine(self._position + 1, self._lines[self._position])
        self._position += 1
        return line


@dataclass
class _ParseState:
    items: list[Item] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    groups: dict[str, Group] = field(default_factory=dict)
    flag_fields: dict[str, Any] = field(default_factory=dict)
    issues: list[LineIssue] = field(default_factory=list)

    def group_id(self, label: str) -> int:
        """Return the id for ``label``, declaring the group on first use."""
        group = self.groups.get(label)
        if group is None:
            group = Group(id=len(self.groups) + 1, label=label)
            self.groups[label] = group
        return group.id


@dataclass(frozen=True)
class _Head:
    content: str
    color: str | None
    group: str | None


def _split_description(text: str, separator: str) -> tuple[str, str | None]:
    """Split at the first ``separator`` outside ``[[...]]`` links.

    >>> _split_description(" [[Note|Alias]] happened | why", "|")
    (' [[Note|Alias]] happened ', ' why')
    """
    for token in re.finditer(rf"\[\[.*?\]\]|{re.escape(separator)}", text):
        if token.group(0) == separator:
            return text[: token.start()], text[token.end() :]
    return text, None


def _split_head(text: str) -> _Head:
    """Peel `#tag` and `{group}` tokens off both ends of an entity's content."""
    color: str | None = None
    group: str | None = None
    rest = text.strip()

    while True:
        tag = TAG_LEADING.match(rest)
        lane = GROUP_LEADING.match(rest)
        if tag is not None:
            color = color or tag["tag"]
            rest = rest[tag.end() :]
        elif lane is not None:
            group = group or lane["group"].strip() or None
            rest = rest[lane.end() :]
        else:
            break

    while True:
        tag = TAG_TRAILING.search(rest)
        lane = GROUP_TRAILING.search(rest)
        if tag is not None:
            color = color or tag["tag"]
            rest = rest[: tag.start()].rstrip()
        elif lane is not None:
            group = group or lane["group"].strip() or None
            rest = rest[: lane.start()].rstrip()
        else:
            break

    return _Head(content=rest.strip(), color=color, group=group)


class TimelineParser:
    """Parser for one DSL dialect.

    Parameters
    ----------
    grammar:
        Surface syntax; defaults to :data:`DEFAULT_GRAMMAR`.
    flag_handlers:
        Upper-case keyword → handler; defaults to :data:`FLAG_HANDLERS`.
    """

    def __init__(
        self,
        grammar: Grammar = DEFAULT_GRAMMAR,
        flag_handlers: Mapping[str, FlagHandler] = FLAG_HANDLERS,
    ) -> None:
        self.grammar = grammar
        self.flag_handlers = flag_handlers
        self._entity = grammar.entity_pattern()
        # Longest sigil first so multi-character sigils win over their prefixes.
        self._sigils = sorted(grammar.sigils.items(), key=lambda pair: -len(pair[0]))

    # ----- Public API --------------------------------------------------------

    def parse(
        self,
        source: str,
        locale: str = DEFAULT_LOCALE,
        config: ParseConfig | Mapping[str, Any] | None = None,
    ) -> ParseResult:
        """Parse ``source`` into a :class:`ParseResult`.

        Raises
        ------
        AggregateParseError
            If any line failed; ``.result`` holds the valid entities.
        pydantic.ValidationError
            If ``config`` has unknown keys or bad values.
        """
        parse_config = (
            config if isinstance(config, ParseConfig) else ParseConfig.model_validate(config or {})
        )
        state = _ParseState()
        cursor = LineCursor(source)

        for line in cursor:
            try:
                self._parse_line(line, state)
            except ChronolineError as exc:
                state.issues.append(LineIssue(line.number, exc))

        result = assemble(
            state.items,
            state.markers,
            list(state.groups.values()),
            Flags(**state.flag_fields),
            locale=locale.strip() or DEFAULT_LOCALE,
            config=parse_config,
        )
        logger.debug(
            "Parsed %d lines: %d items, %d markers, %d groups, %d issues",
            cursor.position,
            len(result.items),
            len(result.markers),
            len(state.groups),
            len(state.issues),
        )
        if state.issues:
            raise AggregateParseError(state.issues, result)
        return result

    # ----- Line classification ----------------------------------------------

    def _parse_line(self, line: SourceLine, state: _ParseState) -> None:
        grammar = self.grammar
        text = line.text.strip()
        if not text or text.startswith(grammar.comment_marker):
            return
        if text.startswith(grammar.flag_prefix):
            self._parse_flag(text[len(grammar.flag_prefix) :], line, state)
            return

        for sigil, kind in self._sigils:
            if text.startswith(sigil):
                self._parse_entity(kind, text[len(sigil) :], line, state)
                return
        if text.startswith(grammar.bare_opener):
            self._parse_entity("event", text, line, state)
            return

        raise UnrecognizedEntityLine(f"Unrecognized line: {text!r}")

    def _parse_flag(self, body: str, line: SourceLine, state: _ParseState) -> None:
        parts = body.strip().split(None, 1)
        if not parts:
            raise MalformedFlagArgument("Flag line has no keyword")
        keyword = parts[0].upper()
        handler = self.flag_handlers.get(keyword)
        if handler is None:
            logger.debug("Ignoring unknown flag %r on line %d", parts[0], line.number)
            return
        state.flag_fields.update(handler(parts[1] if len(parts) > 1 else "", self.grammar))

    # ----- Entities ----------------------------------------------------------

    def _parse_entity(
        self, kind: EntityKind, body: str, line: SourceLine, state: _ParseState
    ) -> None:
        grammar = self.grammar
        match = self._entity.match(body)
        if match is None:
            raise UnrecognizedEntityLine(
                f"Expected {grammar.date_open}DATE{grammar.date_close} or "
                f"{grammar.date_open}DATE{grammar.range_separator}DATE{grammar.date_close} "
                f"after the {kind} sigil: {line.text.strip()!r}"
            )

        start_text, has_end, end_text = match["dates"].partition(grammar.range_separator)
        start = normalize(start_text).unwrap()
        end = normalize(end_text).unwrap() if has_end else None
        if end is not None and end < start:
            raise InvalidRange(f"End date {end} precedes start date {start}")

        head_text, description_text = _split_description(
            match["rest"], grammar.description_separator
        )

        if kind == "marker":
            if end is not None:
                raise UnrecognizedEntityLine("Markers take a single date")
            state.markers.append(
                Marker(start=start, label=head_text.strip(), source_line=line.number)
            )
            return

        if kind == "period" and end is None:
            raise UnrecognizedEntityLine(
                "Periods need a start and end date, e.g. '@ [2020~2022] label'"
            )
        if kind == "point" and end is not None:
            raise UnrecognizedEntityLine("Points take a single date")

        head = _split_head(head_text)
        description = description_text.strip() if description_text is not None else None
        link = LINK_PATTERN.search(description) if description else None
        common: dict[str, Any] = {
            "id": len(state.items),
            "content": head.content,
            "start": start,
            "group": state.group_id(head.group) if head.group else None,
            "color": head.color,
            "description": description or None,
            "link": link.group(0) if link else None,
            "source_line": line.number,
        }
        state.items.append(self._build_item(kind, common, end))

    def _build_item(
        self, kind: EntityKind, common: dict[str, Any], end: CanonicalDate | None
    ) -> Item:
        if kind == "period" and end is not None:
            return PeriodItem(end=end, **common)
        if kind == "point":
            return PointItem(**common)
        return EventItem(end=end, **common)


def parse(
    source: str,
    locale: str = DEFAULT_LOCALE,
    config: ParseConfig | Mapping[str, Any] | None = None,
    *,
    grammar: Grammar = DEFAULT_GRAMMAR,
) -> ParseResult:
    """Parse DSL ``source`` with a fresh :class:`TimelineParser`.

    Examples
    --------
    >>> result = parse("- [2020~2021] Launch #blue | more info")
    >>> result.items[0].content, result.items[0].color, str(result.items[0].end)
    ('Launch', 'blue', '2021-01-01T00:00:00Z')
    """
    return TimelineParser(grammar).parse(source, locale, config)


__all__ = ["LineCursor", "SourceLine", "TimelineParser", "parse"]
