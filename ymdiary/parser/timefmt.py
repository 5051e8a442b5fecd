"""
Time expression normalization.

Diary lines write times as "9:30", "14시30분", "오후 3시" or "PM 3:15". These
helpers turn them into zero-padded 24-hour "HH:MM" strings. No calendar
arithmetic is performed: relative-date keywords map to a fixed time.
"""

import re
from typing import Optional, Tuple

from ..exceptions import BlockParseError

HOUR_MARKER = "시"
MINUTE_MARKER = "분"

AM_KEYWORDS = ("오전", "AM")
PM_KEYWORDS = ("오후", "PM")

RELATIVE_DATE_KEYWORDS = ("오늘", "내일", "모레")
RELATIVE_DATE_TIME = "00:00"

NUMERIC_TIME = r"[0-9]{1,2}[:시][0-9]{0,2}분?"

_NUMERIC_TIME_RE = re.compile(r"^([0-9]{1,2})[:시]([0-9]{0,2})분?$")

# "오후 3시", "오전 11시 30분", "PM 3:15", "am 9"
_AMPM_RE = re.compile(
    r"^(오전|오후|AM|PM)\s*([0-9]{1,2})(?:\s*[:시](?:\s*([0-9]{1,2})분?)?)?",
    re.IGNORECASE,
)

_RELATIVE_DATE_RE = re.compile(
    r"^(" + "|".join(RELATIVE_DATE_KEYWORDS) + r")(?=\s|$)"
)


def normalize_time(time_str: str) -> str:
    """
    Normalize a numeric time such as "12시", "9:5" or "14시30분" to "HH:MM".

    Hour and minute are zero-padded independently; a missing minute is "00".
    Neither is range-checked, so "25:99" passes through unchanged. AM/PM
    times are validated by `normalize_ampm_time` instead.

    Raises:
        BlockParseError: If `time_str` is not a numeric time expression
    """
    match = _NUMERIC_TIME_RE.match(time_str.strip())
    if not match:
        raise BlockParseError(f"Invalid time format: {time_str!r}")

    hour, minute = match.groups()
    return f"{hour.zfill(2)}:{(minute or '00').zfill(2)}"


def _format_ampm(meridiem: str, hour: int, minute: int) -> str:
    if hour > 12 or minute > 59:
        raise BlockParseError(f"Time out of range: {meridiem} {hour}:{minute:02d}")

    is_pm = meridiem.upper() in PM_KEYWORDS
    if is_pm and hour != 12:
        hour += 12
    elif not is_pm and hour == 12:
        hour = 0

    return f"{hour:02d}:{minute:02d}"


def match_ampm_time(text: str) -> Optional[Tuple[str, str]]:
    """
    Match an AM/PM-prefixed time at the start of `text`.

    Returns:
        (normalized time, remainder of text) or None when `text` does not
        start with an AM/PM time followed by whitespace or end of text
    """
    match = _AMPM_RE.match(text)
    if not match:
        return None

    remainder = text[match.end():]
    if remainder and not remainder[0].isspace():
        return None

    meridiem, hour, minute = match.groups()
    normalized = _format_ampm(meridiem, int(hour), int(minute or 0))
    return normalized, remainder.strip()


def normalize_ampm_time(time_str: str) -> str:
    """
    Normalize an AM/PM time such as "오후 3시" or "오전 12시" to "HH:MM".

    PM adds twelve hours except at 12; AM turns 12 into 0.

    Raises:
        BlockParseError: If `time_str` is not a complete AM/PM time
    """
    matched = match_ampm_time(time_str.strip())
    if matched is None or matched[1]:
        raise BlockParseError(f"Invalid time format: {time_str!r}")
    return matched[0]


def starts_with_ampm_time(text: str) -> bool:
    return _AMPM_RE.match(text) is not None


def match_relative_date(text: str) -> Optional[Tuple[str, str]]:
    """
    Match a relative-date keyword at the start of `text`.

    Returns:
        (keyword, remainder of text) or None
    """
    match = _RELATIVE_DATE_RE.match(text)
    if not match:
        return None
    return match.group(1), text[match.end():].strip()
