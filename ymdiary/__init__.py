"""
YMDiary: structured blocks from free-form diary text.

Parses line-oriented diary entries into todo, note, important, event and
long-memo blocks with extracted hashtags and normalized times.
"""

__version__ = "0.1.0"
__author__ = "YMDiary Project"

# Import main components
from .models import (
    Block,
    EventBlock,
    ImportantBlock,
    LongMemoBlock,
    NoteBlock,
    ParseResult,
    ParserOptions,
    TodoBlock,
)
from .parser import BlockParser, CounterIdGenerator
from .exceptions import BlockParseError, YMDiaryError

__all__ = [
    "Block",
    "BlockParseError",
    "BlockParser",
    "CounterIdGenerator",
    "EventBlock",
    "ImportantBlock",
    "LongMemoBlock",
    "NoteBlock",
    "ParseResult",
    "ParserOptions",
    "TodoBlock",
    "YMDiaryError",
]
