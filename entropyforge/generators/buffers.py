"""
Reusable Password Buffers
==========================

The buffer-in generators write into a caller-owned :class:`io.StringIO`
that they reset on entry.  Reusing one buffer per thread avoids a fresh
allocation per password.  :class:`BufferPool` is an optional process-wide
pool for callers that do not want to manage buffers themselves; a checked
out buffer belongs to exactly one holder until it is returned.
"""

from __future__ import annotations

import io
import threading
from contextlib import contextmanager
from typing import Iterator


def reset_buffer(buffer: io.StringIO) -> None:
    """Empty *buffer* in place, keeping the object for reuse."""
    buffer.seek(0)
    buffer.truncate(0)


class BufferPool:
    """Thread-safe pool of reusable :class:`io.StringIO` buffers.

    Usage::

        pool = BufferPool()
        with pool.checkout() as buf:
            generator.csprng_into(32, buf)
            password = buf.getvalue()

    Args:
        max_idle: Maximum number of idle buffers retained; extra buffers
            returned to a full pool are dropped.
    """

    def __init__(self, max_idle: int = 16) -> None:
        self._max_idle = max(0, max_idle)
        self._idle: list[io.StringIO] = []
        self._lock = threading.Lock()

    def acquire(self) -> io.StringIO:
        """Take an idle buffer, or a new one when the pool is empty."""
        with self._lock:
            if self._idle:
                return self._idle.pop()
        return io.StringIO()

    def release(self, buffer: io.StringIO) -> None:
        """Reset *buffer* and return it to the pool."""
        reset_buffer(buffer)
        with self._lock:
            if len(self._idle) < self._max_idle:
                self._idle.append(buffer)

    @contextmanager
    def checkout(self) -> Iterator[io.StringIO]:
        """Borrow a buffer for the duration of a ``with`` block."""
        buffer = self.acquire()
        try:
            yield buffer
        finally:
            self.release(buffer)

    @property
    def idle(self) -> int:
        """Number of buffers currently waiting in the pool."""
        with self._lock:
            return len(self._idle)


_DEFAULT_POOL = BufferPool()


def default_pool() -> BufferPool:
    """The process-wide buffer pool."""
    return _DEFAULT_POOL
