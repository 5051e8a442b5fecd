"""
Base rule interface for the YMDiary block parser.

A rule recognizes one kind of diary line and turns it into a block. The
parser keeps its rules in an ordered list and hands each line to the first
rule whose `matches` returns True.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, NamedTuple, Type

from ..models import BaseBlock
from .hashtags import extract_tags
from .ids import IdGenerator

Clock = Callable[[], datetime]


class RuleResult(NamedTuple):
    block: BaseBlock
    next_index: int


class BlockBuilder:
    """
    Stamps new blocks with an identifier and creation time.

    Shared by every rule of one parser so they agree on the clock, the
    identifier strategy and whether tags are collected.
    """

    def __init__(self, clock: Clock, id_generator: IdGenerator, enable_tag_extraction: bool = True):
        self.clock = clock
        self.id_generator = id_generator
        self.enable_tag_extraction = enable_tag_extraction

    def tags(self, text: str) -> List[str]:
        """Extract tags from `text`, or nothing when extraction is disabled."""
        if not self.enable_tag_extraction:
            return []
        return extract_tags(text)

    def build(self, block_cls: Type[BaseBlock], **fields) -> BaseBlock:
        now = self.clock()
        return block_cls(
            id=self.id_generator(),
            created_at=now,
            updated_at=now,
            **fields
        )


class BaseRule(ABC):
    """
    Abstract base class for line classification rules.
    """

    name: str = ""

    @abstractmethod
    def matches(self, line: str) -> bool:
        """
        Decide whether this rule handles `line`.

        Args:
            line: The current line, already trimmed

        Returns:
            True if the rule should be applied
        """
        pass

    @abstractmethod
    def apply(self, line: str, lines: List[str], index: int, builder: BlockBuilder) -> RuleResult:
        """
        Build a block starting at `lines[index]`.

        Args:
            line: The trimmed text of `lines[index]`
            lines: Every line of the input, untrimmed
            index: Position of the current line
            builder: Factory used to stamp the block

        Returns:
            The block and the index of the next line to scan

        Raises:
            BlockParseError: If the line cannot be turned into a block
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}')"
