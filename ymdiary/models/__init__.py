"""Data models for YMDiary."""

from .blocks import (
    BaseBlock,
    Block,
    EventBlock,
    ImportantBlock,
    LongMemoBlock,
    NoteBlock,
    ParseResult,
    ParserOptions,
    TodoBlock,
)

__all__ = [
    "BaseBlock",
    "Block",
    "EventBlock",
    "ImportantBlock",
    "LongMemoBlock",
    "NoteBlock",
    "ParseResult",
    "ParserOptions",
    "TodoBlock",
]
