"""
Block identifier generators.

The parser takes any zero-argument callable returning a string. The default
draws a UUID; CounterIdGenerator gives predictable ids for tests and
reproducible exports.
"""

import itertools
import threading
import uuid
from typing import Callable

IdGenerator = Callable[[], str]


def uuid_id_generator() -> str:
    """Return a new random block identifier."""
    return f"block_{uuid.uuid4().hex}"


class CounterIdGenerator:
    """
    Sequential identifiers: block_1, block_2, ...

    Safe to share between threads.
    """

    def __init__(self, prefix: str = "block_", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.prefix}{value}"
