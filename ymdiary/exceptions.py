"""Exceptions raised by YMDiary."""


class YMDiaryError(Exception):
    """Base class for YMDiary errors."""


class BlockParseError(YMDiaryError, ValueError):
    """
    A rule recognized a line but could not extract a well-formed value from it.

    The scanner turns these into line-indexed error strings instead of
    propagating them.
    """
