"""
Block editing and rendering for YMDiary.

Blocks are immutable; every edit here returns a new block with `updated_at`
refreshed. The renderer writes blocks back in the diary syntax the parser
reads, so an edited day can be saved as plain text and parsed again.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from .models import (
    BaseBlock,
    EventBlock,
    ImportantBlock,
    LongMemoBlock,
    NoteBlock,
    TodoBlock,
)
from .parser.base import Clock
from .parser.hashtags import extract_tags, strip_tags
from .tags import format_tags


def _touch(block: BaseBlock, clock: Optional[Clock] = None, **changes) -> BaseBlock:
    now = (clock or datetime.now)()
    return block.model_copy(update={**changes, "updated_at": now})


def toggle_todo(block: TodoBlock, clock: Optional[Clock] = None) -> TodoBlock:
    """
    Flip the completion flag of a todo block.

    Args:
        block: The todo to toggle
        clock: Source of the new modification time

    Returns:
        A new TodoBlock

    Raises:
        TypeError: If `block` is not a todo
    """
    if not isinstance(block, TodoBlock):
        raise TypeError(f"Only todo blocks can be toggled, got '{block.type}'")

    logging.debug(f"Toggling todo {block.id}: completed={not block.completed}")
    return _touch(block, clock, completed=not block.completed)


def update_block_text(block: BaseBlock, text: str, clock: Optional[Clock] = None) -> BaseBlock:
    """
    Replace the text of a block, re-deriving its tags from the new text.

    Events and long memos get their title updated along with the text.
    """
    clean_text = strip_tags(text)
    changes = {"text": clean_text, "tags": extract_tags(text)}

    if isinstance(block, EventBlock):
        changes["title"] = clean_text
    elif isinstance(block, LongMemoBlock):
        changes["title"] = clean_text or None

    logging.debug(f"Updating text of {block.type} block {block.id}")
    return _touch(block, clock, **changes)


def set_collapsed(block: LongMemoBlock, collapsed: bool, clock: Optional[Clock] = None) -> LongMemoBlock:
    """Collapse or expand a long memo."""
    if not isinstance(block, LongMemoBlock):
        raise TypeError(f"Only long memo blocks can be collapsed, got '{block.type}'")
    return _touch(block, clock, collapsed=collapsed)


def _with_tags(line: str, tags: List[str]) -> str:
    if not tags:
        return line
    return f"{line} {format_tags(tags)}" if line else format_tags(tags)


def render_block(block: BaseBlock) -> str:
    """
    Render a block back to diary syntax.

    Tags are appended to the first line as '#tag' tokens.

    Raises:
        TypeError: For an unknown block variant
    """
    if isinstance(block, TodoBlock):
        mark = "x" if block.completed else " "
        return _with_tags(f"- [{mark}] {block.text}".rstrip(), block.tags)

    if isinstance(block, ImportantBlock):
        return _with_tags(f"! {block.text}".rstrip(), block.tags)

    if isinstance(block, EventBlock):
        when = block.date_label or block.start_time
        return _with_tags(f"@ {when} {block.title}".rstrip(), block.tags)

    if isinstance(block, LongMemoBlock):
        header = _with_tags(f"> {block.title or ''}".rstrip(), block.tags)
        body_lines = [line for line in block.body.split("\n") if line.strip()]
        return "\n".join([header] + body_lines)

    if isinstance(block, NoteBlock):
        return _with_tags(block.text, block.tags)

    raise TypeError(f"Cannot render block of type {type(block).__name__}")


def render_blocks(blocks: Iterable[BaseBlock]) -> str:
    """
    Render a sequence of blocks as one diary text.

    A long memo is followed by a blank line so the next block does not
    become part of its body.
    """
    lines = []
    for block in blocks:
        lines.append(render_block(block))
        if isinstance(block, LongMemoBlock):
            lines.append("")
    return "\n".join(lines).rstrip("\n")
