# src/chronoline/cli.py
"""
chronoline Command Line Interface (CLI).

A developer-facing wrapper around the core, built with `typer` and `rich`.
The core never touches the filesystem; this module does the reading and the
printing.

Commands
--------
- **parse**: Compile every DSL block in a file and show items, markers and flags
  (or the raw `ParseResult` JSON). Markdown files are scanned for ```chronos
  fences and inline spans; any other file is treated as one DSL block.
- **normalize**: Print the canonical form of a partial date.
- **format**: Print a date or range the way tooltips show it.
- **locales**: List known locale codes with display names and direction.
- **cheatsheet**: Print the DSL syntax summary.

Usage
-----
    $ chronoline parse notes/history.md --locale ja
    $ chronoline normalize -- -44-03-15
    $ chronoline format 2023-06-01 2023-06-20
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from chronoline.core.calendar.formatter import format_range
from chronoline.core.calendar.locales import is_rtl, known_locales, locale_display_name
from chronoline.core.calendar.normalizer import CanonicalDate, normalize
from chronoline.core.contracts.timeline import Flags, ParseConfig, ParseResult
from chronoline.core.errors import AggregateParseError, DateError
from chronoline.core.settings import load_settings
from chronoline.dsl.flags import order_items
from chronoline.dsl.grammar import CHEATSHEET
from chronoline.dsl.parser import parse
from chronoline.dsl.surfaces import DslBlock, extract_blocks

# Ensure env vars (like CHRONOLINE_LOCALE) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="chronoline: compile timeline DSL blocks into renderer-ready data.",
    rich_markup_mode="markdown",
)
console = Console()

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _load_blocks(file: Path) -> list[DslBlock]:
    """Read ``file`` and return the DSL blocks it contains."""
    text = file.read_text(encoding="utf-8")
    if file.suffix.lower() in MARKDOWN_SUFFIXES:
        return extract_blocks(text)
    return [DslBlock("document", text, 1)]


def _to_canonical_or_exit(text: str) -> CanonicalDate:
    outcome = normalize(text)
    if outcome.is_err():
        error: DateError = outcome.unwrap_err()
        console.print(f"[bold red]{error.kind}:[/bold red] {escape(error.message)}")
        raise typer.Exit(code=1)
    return outcome.unwrap()


def _flags_summary(flags: Flags) -> str | None:
    lines: list[str] = []
    if flags.order_by:
        lines.append(f"Order by: {', '.join(flags.order_by)}")
    if flags.default_view:
        lines.append(f"Default view: {flags.default_view.start} → {flags.default_view.end}")
    if flags.hide_current_time_marker:
        lines.append("Current-time marker hidden")
    if flags.height:
        lines.append(f"Height: {flags.height}px")
    return "\n".join(lines) or None


def _render_result(result: ParseResult) -> None:
    """Print items (in ORDERBY order), markers and flags for one block."""
    labels = {group.id: group.label for group in result.groups}

    table = Table(show_lines=False)
    for column in ("#", "Kind", "When", "Content", "Color", "Group", "Line"):
        table.add_column(column)
    for item in order_items(result.items, result.flags.order_by):
        table.add_row(
            str(item.id),
            item.kind,
            escape(format_range(item.start, item.end, result.locale)),
            escape(item.content),
            escape(item.color or ""),
            escape(labels.get(item.group, "") if item.group is not None else ""),
            str(item.source_line),
        )
    console.print(table)

    for marker in result.markers:
        when = format_range(marker.start, None, result.locale)
        console.print(f" [magenta]|[/magenta] {escape(when)}: {escape(marker.label)}")

    summary = _flags_summary(result.flags)
    if summary:
        console.print(Panel(escape(summary), title="Flags", border_style="blue"))


def _render_errors(block: DslBlock, exc: AggregateParseError) -> None:
    console.print(f"[bold red]❌ {len(exc.issues)} problem(s):[/bold red]")
    for issue in exc.issues:
        document_line = block.line + issue.line - 1
        console.print(
            f"  - {escape(issue.format())} [dim](document line {document_line})[/dim]"
        )


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command("parse")  # type: ignore[misc]
def parse_cmd(
    file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Markdown document or raw DSL file.",
        ),
    ],
    locale: Annotated[
        str | None,
        typer.Option("--locale", "-l", help="Locale code; defaults to CHRONOLINE_LOCALE."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the ParseResult of each block as JSON."),
    ] = False,
    round_ranges: Annotated[
        bool,
        typer.Option(
            "--round-ranges",
            help="Ask renderers for rounded range end caps (overrides CHRONOLINE_ROUND_RANGES).",
        ),
    ] = False,
) -> None:
    """
    Compile every timeline block in FILE.

    Exits with code 1 when any block has errors; the valid lines of that
    block are still shown.
    """
    settings = load_settings()
    active_locale = locale or settings.locale
    config = ParseConfig(
        round_ranges=round_ranges or settings.round_ranges,
        use_utc=settings.use_utc,
    )

    blocks = _load_blocks(file)
    if not blocks:
        console.print(f"[yellow]No chronos blocks found in {escape(file.name)}.[/yellow]")
        return

    failed = False
    payload: list[dict[str, Any]] = []
    for index, block in enumerate(blocks, start=1):
        problem: AggregateParseError | None = None
        try:
            result = parse(block.source, active_locale, config)
        except AggregateParseError as exc:
            failed = True
            problem = exc
            result = exc.result if exc.result is not None else ParseResult()

        if as_json:
            payload.append(
                {
                    "kind": block.kind,
                    "line": block.line,
                    "errors": problem.messages() if problem is not None else [],
                    "result": result.model_dump(mode="json"),
                }
            )
            continue

        console.rule(f"[bold]Block {index}[/bold] ({block.kind}, line {block.line})")
        if problem is not None:
            _render_errors(block, problem)
        _render_result(result)

    if as_json:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))

    if failed:
        raise typer.Exit(code=1)


@app.command("normalize")  # type: ignore[misc]
def normalize_cmd(
    date: Annotated[str, typer.Argument(help="Partial date, e.g. 2020-06 or -0044-03-15.")],
) -> None:
    """Print the canonical UTC form of DATE."""
    typer.echo(_to_canonical_or_exit(date).isoformat())


@app.command("format")  # type: ignore[misc]
def format_cmd(
    start: Annotated[str, typer.Argument(help="Start date (partial ISO).")],
    end: Annotated[str | None, typer.Argument(help="Optional end date.")] = None,
    locale: Annotated[
        str | None,
        typer.Option("--locale", "-l", help="Locale code; defaults to CHRONOLINE_LOCALE."),
    ] = None,
) -> None:
    """Print START (and END) as a compact, localized range."""
    first = _to_canonical_or_exit(start)
    last = _to_canonical_or_exit(end) if end is not None else None
    typer.echo(format_range(first, last, locale or load_settings().locale))


@app.command("locales")  # type: ignore[misc]
def locales_cmd() -> None:
    """List known locale codes, their display names and text direction."""
    table = Table(title="Known locales")
    table.add_column("Code")
    table.add_column("Name")
    table.add_column("Direction")
    for code in known_locales():
        table.add_row(code, escape(locale_display_name(code)), "rtl" if is_rtl(code) else "ltr")
    console.print(table)


@app.command("cheatsheet")  # type: ignore[misc]
def cheatsheet_cmd() -> None:
    """Print the DSL syntax summary."""
    typer.echo(CHEATSHEET)


if __name__ == "__main__":
    app()
