"""
Hashtag extraction for diary lines.

Tags are `#` followed by one or more word characters. Extraction keeps the
raw case and any duplicates; normalization lives in `ymdiary.tags`.
"""

import re
from typing import List

TAG_PATTERN = re.compile(r"#(\w+)")

# Removes a tag together with the blanks in front of it so that
# "buy #x milk" becomes "buy milk" rather than "buy  milk".
_TAG_WITH_LEADING_BLANKS = re.compile(r"[ \t]*#\w+")


def extract_tags(text: str) -> List[str]:
    """
    Return the tags in `text` in first-occurrence order, without the '#'.

    Args:
        text: Any line or slice of a line

    Returns:
        List of raw tag names
    """
    return TAG_PATTERN.findall(text)


def strip_tags(text: str) -> str:
    """Remove every tag token from `text` and trim the result."""
    return _TAG_WITH_LEADING_BLANKS.sub("", text).strip()
