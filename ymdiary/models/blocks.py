"""
Block data models for YMDiary.

This module defines the typed records the parser produces from diary text.
Every block variant shares the fields of BaseBlock and adds its own; the
`Block` union is discriminated on the `type` field so serialized blocks
validate back into the right variant.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# zero-padded 24-hour "HH:MM"
TimeString = Annotated[str, Field(pattern=r"^\d{2}:\d{2}$")]


class BaseBlock(BaseModel):
    """
    Fields shared by every block variant.

    Blocks are immutable once built; edits produce a new instance.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Identifier unique across all blocks created in the process"
    )

    text: str = Field(
        default="",
        description="Display text of the block with tag tokens removed"
    )

    tags: List[str] = Field(
        default_factory=list,
        description="Raw tags in first-occurrence order, without the leading '#'"
    )

    created_at: datetime = Field(
        ...,
        description="When the block was parsed"
    )

    updated_at: datetime = Field(
        ...,
        description="When the block was last edited"
    )


class TodoBlock(BaseBlock):
    """A checkbox line."""

    type: Literal["todo"] = "todo"
    completed: bool = False


class NoteBlock(BaseBlock):
    type: Literal["note"] = "note"


class ImportantBlock(BaseBlock):
    type: Literal["important"] = "important"


class EventBlock(BaseBlock):
    """
    A scheduled item with a normalized 24-hour start time.
    """

    type: Literal["event"] = "event"

    start_time: TimeString
    end_time: Optional[TimeString] = None

    title: str = Field(
        default="",
        description="Event title, defaults to the block text"
    )

    location: Optional[str] = None

    date_label: Optional[str] = Field(
        default=None,
        description="Relative-date keyword the event was written with, kept verbatim"
    )


class LongMemoBlock(BaseBlock):
    """
    A multi-line memo: a title line followed by body lines up to a blank line.
    """

    type: Literal["long_memo"] = "long_memo"
    title: Optional[str] = None
    body: str = ""
    collapsed: bool = True


Block = Annotated[
    Union[TodoBlock, NoteBlock, ImportantBlock, EventBlock, LongMemoBlock],
    Field(discriminator="type"),
]


class ParseResult(BaseModel):
    """
    Output of a single parse call.

    Errors are formatted as "Line <n>: <message>" with 1-based line numbers.
    """

    blocks: List[Block] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class ParserOptions(BaseModel):
    """Feature switches for the block parser."""

    enable_long_memo: bool = True
    enable_event_parsing: bool = True
    enable_tag_extraction: bool = True
