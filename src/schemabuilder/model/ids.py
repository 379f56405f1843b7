from __future__ import annotations

import itertools
import secrets
import threading


class IdAllocator:
    """Hands out process-unique property ids.

    Ids look like ``prop-3f9a1c2e-17``: a per-allocator random token keeps two
    allocators from colliding, the counter keeps one allocator from repeating.
    """

    def __init__(self, prefix: str = "prop"):
        self.prefix = prefix
        self._token = secrets.token_hex(4)
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self.prefix}-{self._token}-{n}"

    def __call__(self) -> str:
        return self.next()


class SequentialIdAllocator(IdAllocator):
    """Deterministic ids (``prop-1``, ``prop-2``, ...)."""

    def next(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self.prefix}-{n}"


_default = IdAllocator()


def default_allocator() -> IdAllocator:
    return _default
