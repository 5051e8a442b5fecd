"""
Tag normalization utilities.

The parser keeps tags exactly as written. Callers that want a canonical form
(lowercase, no '#', no whitespace, no duplicates) apply these helpers after
parsing.
"""

import re
from typing import Iterable, List


def normalize_tag(tag: str) -> str:
    """
    Normalize a single tag.

    - trim surrounding whitespace
    - lowercase
    - drop one leading '#'
    - remove inner whitespace
    """
    return re.sub(r"\s+", "", tag.strip().lower().removeprefix("#"))


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Normalize tags, drop empty ones and de-duplicate keeping first occurrence."""
    normalized = (normalize_tag(tag) for tag in tags)
    return list(dict.fromkeys(tag for tag in normalized if tag))


def parse_tags(tag_string: str) -> List[str]:
    """
    Parse a free-form tag string such as "#Work, home  #errand".

    Tags may be separated by whitespace or commas.
    """
    if not tag_string.strip():
        return []
    return normalize_tags(re.split(r"[\s,]+", tag_string))


def format_tags(tags: Iterable[str]) -> str:
    """Render tags for display: ["a", "b"] -> "#a #b"."""
    return " ".join(f"#{tag}" for tag in tags)
