"""
Line classification rules.

Each rule owns one of the diary markers:

    > Title        long memo, body runs until the next blank line
    - [ ] text     todo (also "- [x]", "[ ]", "[x]")
    ! text         important
    @ 15:00 text   event (the "@" is optional when the line starts with a time)
    anything else  note
"""

import re
from typing import List, Optional, Tuple

from ..exceptions import BlockParseError
from ..models import EventBlock, ImportantBlock, LongMemoBlock, NoteBlock, TodoBlock
from .base import BaseRule, BlockBuilder, RuleResult
from .hashtags import strip_tags
from .timefmt import (
    NUMERIC_TIME,
    RELATIVE_DATE_TIME,
    match_ampm_time,
    match_relative_date,
    normalize_time,
    starts_with_ampm_time,
)

LONG_MEMO_PREFIX = "> "
IMPORTANT_PREFIX = "! "
EVENT_MARKER = "@"

UNCHECKED_TODO_PREFIXES = ("- [ ]", "[ ]")
CHECKED_TODO_PREFIXES = ("- [x]", "- [X]", "[x]", "[X]")
TODO_PREFIXES = UNCHECKED_TODO_PREFIXES + CHECKED_TODO_PREFIXES

_EVENT_MARKER_RE = re.compile(r"^@\s*")
_NUMERIC_TIME_PREFIX_RE = re.compile(r"^" + NUMERIC_TIME)
_NUMERIC_EVENT_RE = re.compile(r"^(" + NUMERIC_TIME + r")\s+(.+)")


def strip_event_marker(line: str) -> str:
    return _EVENT_MARKER_RE.sub("", line, count=1)


def is_event_line(line: str) -> bool:
    """
    Tell whether `line` looks like an event.

    This is looser than what EventRule accepts: "@ 15:00" with no title
    passes here and is then rejected by the rule.
    """
    rest = strip_event_marker(line)
    return bool(
        _NUMERIC_TIME_PREFIX_RE.match(rest)
        or starts_with_ampm_time(rest)
        or match_relative_date(rest)
    )


class BlankLineRule(BaseRule):
    """An empty line on its own becomes an empty note."""

    name = "blank"

    def matches(self, line: str) -> bool:
        return not line

    def apply(self, line: str, lines: List[str], index: int, builder: BlockBuilder) -> RuleResult:
        return RuleResult(builder.build(NoteBlock, text="", tags=[]), index + 1)


class LongMemoRule(BaseRule):
    name = "long_memo"

    def matches(self, line: str) -> bool:
        return line.startswith(LONG_MEMO_PREFIX)

    def apply(self, line: str, lines: List[str], index: int, builder: BlockBuilder) -> RuleResult:
        title = line[len(LONG_MEMO_PREFIX):].strip()

        body_lines = []
        next_index = index + 1
        while next_index < len(lines):
            body_line = lines[next_index].strip()
            if not body_line:
                # the terminating blank line belongs to this memo
                next_index += 1
                break
            body_lines.append(body_line)
            next_index += 1

        body = "\n".join(body_lines)
        tags = builder.tags(title + " " + body)
        clean_title = strip_tags(title)
        # a tag-only line leaves nothing behind; a blank would end the memo on re-parse
        clean_lines = (strip_tags(body_line) for body_line in body_lines)
        clean_body = "\n".join(body_line for body_line in clean_lines if body_line)

        block = builder.build(
            LongMemoBlock,
            text=clean_title,
            title=clean_title or None,
            body=clean_body,
            tags=tags,
            collapsed=True
        )
        return RuleResult(block, next_index)


class TodoRule(BaseRule):
    name = "todo"

    def matches(self, line: str) -> bool:
        return line.startswith(TODO_PREFIXES)

    def apply(self, line: str, lines: List[str], index: int, builder: BlockBuilder) -> RuleResult:
        prefix = next(p for p in TODO_PREFIXES if line.startswith(p))
        text = line[len(prefix):]

        block = builder.build(
            TodoBlock,
            text=strip_tags(text),
            tags=builder.tags(text),
            completed=prefix in CHECKED_TODO_PREFIXES
        )
        return RuleResult(block, index + 1)


class ImportantRule(BaseRule):
    name = "important"

    def matches(self, line: str) -> bool:
        return line.startswith(IMPORTANT_PREFIX)

    def apply(self, line: str, lines: List[str], index: int, builder: BlockBuilder) -> RuleResult:
        text = line[len(IMPORTANT_PREFIX):]

        block = builder.build(
            ImportantBlock,
            text=strip_tags(text),
            tags=builder.tags(text)
        )
        return RuleResult(block, index + 1)


class EventRule(BaseRule):
    """
    Timed lines: "@ 15:00 회의", "14시30분 점심", "오후 3시 미팅", "내일 병원".

    Localized forms (AM/PM, relative dates) are tried before the bare
    numeric form.
    """

    name = "event"

    def matches(self, line: str) -> bool:
        return is_event_line(line)

    def _parse_localized(self, rest: str) -> Optional[Tuple[str, Optional[str], str]]:
        ampm = match_ampm_time(rest)
        if ampm is not None:
            start_time, remainder = ampm
            return start_time, None, remainder

        relative = match_relative_date(rest)
        if relative is not None:
            keyword, remainder = relative
            return RELATIVE_DATE_TIME, keyword, remainder

        return None

    def _parse_numeric(self, rest: str) -> Optional[Tuple[str, Optional[str], str]]:
        match = _NUMERIC_EVENT_RE.match(rest)
        if not match:
            return None
        time_str, remainder = match.groups()
        return normalize_time(time_str), None, remainder

    def apply(self, line: str, lines: List[str], index: int, builder: BlockBuilder) -> RuleResult:
        rest = strip_event_marker(line)

        parsed = self._parse_localized(rest) or self._parse_numeric(rest)
        if parsed is None:
            raise BlockParseError("Invalid event format")

        start_time, date_label, remainder = parsed
        text = strip_tags(rest)
        title = strip_tags(remainder) or text

        block = builder.build(
            EventBlock,
            text=text,
            tags=builder.tags(rest),
            start_time=start_time,
            title=title,
            date_label=date_label
        )
        return RuleResult(block, index + 1)


class NoteRule(BaseRule):
    """Fallback: the whole line is the note."""

    name = "note"

    def matches(self, line: str) -> bool:
        return True

    def apply(self, line: str, lines: List[str], index: int, builder: BlockBuilder) -> RuleResult:
        block = builder.build(
            NoteBlock,
            text=strip_tags(line),
            tags=builder.tags(line)
        )
        return RuleResult(block, index + 1)
