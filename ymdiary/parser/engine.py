"""
Block parser for YMDiary.

Turns free-form diary text into an ordered list of typed blocks. Lines are
scanned once, top to bottom; each non-blank line goes to the first matching
rule in a fixed precedence order, and a rule may consume more than one line.

A line that cannot be parsed never aborts the run: it is reported in
`ParseResult.errors` and scanning resumes on the next line.
"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from ..exceptions import BlockParseError
from ..models import Block, ParseResult, ParserOptions
from .base import BaseRule, BlockBuilder, Clock
from .ids import IdGenerator, uuid_id_generator
from .rules import (
    BlankLineRule,
    EventRule,
    ImportantRule,
    LongMemoRule,
    NoteRule,
    TodoRule,
)

DISPATCH_ORDER = ("blank", "long_memo", "todo", "important", "event", "note")


def build_rules(options: Optional[ParserOptions] = None) -> List[BaseRule]:
    """
    Build the dispatch list in precedence order.

    Disabled features drop out of the list; the relative order of the
    remaining rules never changes.

    Args:
        options: Feature switches, defaults to everything enabled

    Returns:
        Ordered list of rules, first match wins
    """
    options = options or ParserOptions()

    rules: List[BaseRule] = [BlankLineRule()]
    if options.enable_long_memo:
        rules.append(LongMemoRule())
    rules.append(TodoRule())
    rules.append(ImportantRule())
    if options.enable_event_parsing:
        rules.append(EventRule())
    rules.append(NoteRule())
    return rules


class BlockParser:
    """
    Parses diary text into blocks.

    The clock and the identifier generator are injectable so that output is
    reproducible under test.
    """

    def __init__(
        self,
        options: Optional[ParserOptions] = None,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        rules: Optional[Sequence[BaseRule]] = None,
    ):
        """
        Initialize the parser.

        Args:
            options: Feature switches
            clock: Source of block timestamps, defaults to datetime.now
            id_generator: Source of block identifiers, defaults to UUIDs
            rules: Custom dispatch list replacing the one built from options
        """
        self.options = options or ParserOptions()
        self.rules = list(rules) if rules is not None else build_rules(self.options)
        self.builder = BlockBuilder(
            clock=clock or datetime.now,
            id_generator=id_generator or uuid_id_generator,
            enable_tag_extraction=self.options.enable_tag_extraction
        )

    @classmethod
    def from_config(cls, config, overrides: Optional[Dict[str, bool]] = None, **kwargs) -> "BlockParser":
        """
        Create a parser from the `parser` section of a ConfigManager.

        Args:
            config: Loaded configuration
            overrides: Option values taking precedence over the configured ones
            **kwargs: Passed on to the constructor (clock, id_generator, rules)
        """
        options = config.parser_options.model_copy(update=overrides or {})
        return cls(options=options, **kwargs)

    def parse(self, text: str) -> ParseResult:
        """
        Parse diary text into blocks.

        Args:
            text: Multi-line diary text

        Returns:
            Blocks in source order and one error per rejected line
        """
        lines = text.replace("\r\n", "\n").split("\n")
        blocks: List[Block] = []
        errors: List[str] = []
        index = 0

        while index < len(lines):
            line = lines[index].strip()

            if not line:
                index += 1
                continue

            try:
                block, next_index = self._dispatch(line, lines, index)
            except BlockParseError as e:
                errors.append(f"Line {index + 1}: {e}")
                index += 1
                continue
            except Exception as e:
                errors.append(f"Line {index + 1}: Unexpected error: {str(e) or type(e).__name__}")
                index += 1
                continue

            blocks.append(block)
            index = next_index

        return ParseResult(blocks=blocks, errors=errors)

    def parse_line(self, line: str) -> Block:
        """
        Classify a single line on its own.

        A blank line yields an empty note. A long memo parsed this way has
        no body.

        Raises:
            BlockParseError: If the line is rejected by its rule
        """
        block, _ = self._dispatch(line.strip(), [line], 0)
        return block

    def _dispatch(self, line: str, lines: List[str], index: int) -> Tuple[Block, int]:
        for rule in self.rules:
            if rule.matches(line):
                return rule.apply(line, lines, index, self.builder)
        raise BlockParseError("No rule matched the line")

