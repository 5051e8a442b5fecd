"""Diary text parsing: line rules, tag extraction and time normalization."""

from .base import BaseRule, BlockBuilder, RuleResult
from .engine import DISPATCH_ORDER, BlockParser, build_rules
from .hashtags import extract_tags, strip_tags
from .ids import CounterIdGenerator, uuid_id_generator
from .rules import (
    BlankLineRule,
    EventRule,
    ImportantRule,
    LongMemoRule,
    NoteRule,
    TodoRule,
    is_event_line,
)
from .timefmt import normalize_ampm_time, normalize_time

__all__ = [
    "BaseRule",
    "BlankLineRule",
    "BlockBuilder",
    "BlockParser",
    "CounterIdGenerator",
    "DISPATCH_ORDER",
    "EventRule",
    "ImportantRule",
    "LongMemoRule",
    "NoteRule",
    "RuleResult",
    "TodoRule",
    "build_rules",
    "extract_tags",
    "is_event_line",
    "normalize_ampm_time",
    "normalize_time",
    "strip_tags",
    "uuid_id_generator",
]
