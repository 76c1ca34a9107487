"""Timeline contracts: the typed output of the DSL parser.

This module defines the Pydantic v2 models handed to a rendering layer:

- `EventItem` / `PeriodItem` / `PointItem`: one model per entity kind,
  sharing `ItemBase`; `Item` is the discriminated union over `kind`.
- `Marker`: a labelled vertical reference line.
- `Group`: a lane; items reference it by `id`.
- `Flags`: display settings collected from `>` lines.
- `ParseConfig`: renderer options passed through the parser unchanged.
- `ParseResult`: the sole output of `parse()`.

All models are frozen. Dates are :class:`CanonicalDate` values, which dump
to canonical ``±YYYY-MM-DDTHH:MM:SSZ`` strings in JSON.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from chronoline.core.calendar.normalizer import CanonicalDate

#: Id of the synthetic lane that collects ungrouped items.
DEFAULT_GROUP_ID = 0
DEFAULT_GROUP_LABEL = " "

RenderType = Literal["box", "range", "background", "point"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---- Items -------------------------------------------------------------------


class ItemBase(_Frozen):
    """Fields every timeline item carries."""

    id: int = Field(ge=0, description="0-based position among items, in source order.")
    content: str = Field(description="Text shown on the item.")
    start: CanonicalDate
    group: int | None = Field(default=None, description="Id of the item's Group, if any.")
    color: str | None = Field(default=None, description="Tag/color name from `#tag`.")
    description: str | None = Field(default=None, description="Text after `|`.")
    link: str | None = Field(
        default=None, description="Opaque link found in the description; resolved by the host."
    )
    source_line: int = Field(ge=1, description="1-based line in the DSL source.")


class EventItem(ItemBase):
    """A single date, or a range when `end` is present."""

    kind: Literal["event"] = "event"
    end: CanonicalDate | None = None

    @property
    def render_type(self) -> RenderType:
        return "range" if self.end is not None else "box"


class PeriodItem(ItemBase):
    """A span drawn as a background band behind the lanes."""

    kind: Literal["period"] = "period"
    end: CanonicalDate

    @property
    def render_type(self) -> RenderType:
        return "background"


class PointItem(ItemBase):
    """A dot at one instant; never has an end."""

    kind: Literal["point"] = "point"
    end: None = None

    @property
    def render_type(self) -> RenderType:
        return "point"


Item = Annotated[EventItem | PeriodItem | PointItem, Field(discriminator="kind")]


class Marker(_Frozen):
    """A fixed vertical line with a label."""

    start: CanonicalDate
    label: str
    source_line: int = Field(ge=1)


class Group(_Frozen):
    """A lane items can be assigned to."""

    id: int = Field(ge=0)
    label: str


# ---- Flags & config ----------------------------------------------------------


class DefaultView(_Frozen):
    """Initial visible window requested by `> DEFAULTVIEW`."""

    start: CanonicalDate
    end: CanonicalDate

    @model_validator(mode="after")
    def _ordered(self) -> DefaultView:
        if self.end < self.start:
            raise ValueError("default view end precedes its start")
        return self


class Flags(_Frozen):
    """Display settings; syntax-checked by the parser, interpreted by renderers."""

    order_by: list[str] | None = Field(
        default=None, description="Sort keys, `-` prefix for descending."
    )
    default_view: DefaultView | None = None
    hide_current_time_marker: bool = False
    height: PositiveInt | None = Field(default=None, description="Timeline height in pixels.")


class ParseConfig(_Frozen):
    """Renderer options accepted by `parse()` and returned unchanged."""

    round_ranges: bool = Field(default=False, description="Draw rounded end caps on ranges.")
    use_utc: bool = Field(default=True, description="Display instants in UTC, not local time.")


class ParseResult(_Frozen):
    """Everything a renderer needs to draw one DSL block."""

    items: list[Item] = Field(default_factory=list)
    markers: list[Marker] = Field(default_factory=list)
    groups: list[Group] = Field(default_factory=list)
    flags: Flags = Field(default_factory=Flags)
    locale: str = "en"
    config: ParseConfig = Field(default_factory=ParseConfig)

    @model_validator(mode="after")
    def _groups_resolve(self) -> ParseResult:
        known = {group.id for group in self.groups}
        for item in self.items:
            if item.group is not None and item.group not in known:
                raise ValueError(f"item {item.id} references unknown group {item.group}")
        return self


__all__ = [
    "DEFAULT_GROUP_ID",
    "DEFAULT_GROUP_LABEL",
    "ItemBase",
    "EventItem",
    "PeriodItem",
    "PointItem",
    "Item",
    "Marker",
    "Group",
    "DefaultView",
    "Flags",
    "ParseConfig",
    "ParseResult",
]
