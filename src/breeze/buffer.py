"""Append-only output sink for the renderer.

Output is accumulated StringBuilder-style in a list of chunks and joined once
at the end, which keeps appends O(1) amortized. The buffer also tracks an
explicit reserved ``capacity`` that doubles whenever a write would not fit,
and can enforce a ``max_size`` so runaway templates fail with a memory
error instead of exhausting the process.

The only way output ever shrinks is ``truncate_to_line_start()``, used by
the standalone-tag rule to drop indentation already written on the current
line.
"""

from __future__ import annotations

DEFAULT_CAPACITY = 1024


class OutputLimitExceeded(MemoryError):
    """A write would grow the buffer past its ``max_size``."""


class OutputBuffer:
    """Growable text buffer with explicit size and capacity.

    Example:
            >>> buf = OutputBuffer(4)
            >>> buf.append("Hello")
            >>> buf.capacity
            8
            >>> buf.getvalue()
            'Hello'
    """

    __slots__ = ("_capacity", "_chunks", "_max_size", "_size")

    def __init__(self, capacity: int = 0, max_size: int | None = None):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._chunks: list[str] = []
        self._size = 0
        self._capacity = capacity or DEFAULT_CAPACITY
        self._max_size = max_size

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_size(self) -> int | None:
        return self._max_size

    def append(self, text: str) -> None:
        """Write ``text`` at the end; empty input is a no-op.

        Raises:
            OutputLimitExceeded: If the write would exceed ``max_size``.
                Nothing is written in that case.
        """
        if not text:
            return
        new_size = self._size + len(text)
        if self._max_size is not None and new_size > self._max_size:
            raise OutputLimitExceeded(
                f"Output would grow to {new_size} characters (limit {self._max_size})"
            )
        # One slot is kept free, like a terminator would need.
        if new_size + 1 > self._capacity:
            capacity = self._capacity * 2
            while new_size + 1 > capacity:
                capacity *= 2
            self._capacity = capacity
        self._chunks.append(text)
        self._size = new_size

    def truncate_to_line_start(self) -> None:
        """Drop everything written after the last newline."""
        chunks = self._chunks
        for i in range(len(chunks) - 1, -1, -1):
            newline = chunks[i].rfind("\n")
            if newline != -1:
                removed = sum(len(chunk) for chunk in chunks[i + 1 :])
                removed += len(chunks[i]) - newline - 1
                chunks[i] = chunks[i][: newline + 1]
                del chunks[i + 1 :]
                self._size -= removed
                return
        chunks.clear()
        self._size = 0

    def getvalue(self) -> str:
        if len(self._chunks) > 1:
            self._chunks[:] = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def __len__(self) -> int:
        return self._size

    def __str__(self) -> str:
        return self.getvalue()
