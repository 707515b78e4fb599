"""Control stacks that give the single-pass renderer its block structure.

The renderer never builds a syntax tree. Instead it keeps one LIFO stack of
active ``{% for %}`` frames and one of active ``{% if %}`` frames; a frame is
pushed when its opening tag executes and popped at its closing tag, so the
stacks mirror the nesting of the blocks the scanner is currently inside.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from breeze.values import Value

F = TypeVar("F")


@dataclass(slots=True)
class LoopFrame:
    """State of one active ``{% for var in array %}`` loop.

    Attributes:
        array: The ARRAY value being iterated.
        var_name: Loop variable name (the frame's own copy).
        body_start: Template offset where the loop body begins; ``endfor``
            jumps back here while elements remain.
        opened_at: Template offset of the ``{%`` of the ``for`` tag.
        index: 0-based index of the current element.
    """

    array: Value
    var_name: str
    body_start: int
    opened_at: int
    index: int = 0

    @property
    def exhausted(self) -> bool:
        return self.index >= self.array.count

    def current(self) -> Value:
        """The element bound to the loop variable in this iteration."""
        return self.array.item(self.index)


@dataclass(slots=True)
class ConditionalFrame:
    """State of one active ``{% if %}`` block.

    Attributes:
        condition_met: Result of the guard.
        opened_at: Template offset of the ``{%`` of the ``if`` tag.
        in_else_branch: Set once the matching ``else`` is reached.
        outer_skipped: The ``if`` was met inside a branch being skipped; the
            whole block is then skipped regardless of its own state.
    """

    condition_met: bool
    opened_at: int
    in_else_branch: bool = False
    outer_skipped: bool = False

    @property
    def skipping(self) -> bool:
        """True while the scanner is inside a branch that must not render."""
        return self.outer_skipped or self.condition_met == self.in_else_branch


class FrameStack(Generic[F]):
    """Minimal LIFO stack of frames."""

    __slots__ = ("_frames",)

    def __init__(self) -> None:
        self._frames: list[F] = []

    def push(self, frame: F) -> F:
        self._frames.append(frame)
        return frame

    def pop(self) -> F:
        """Remove and return the top frame; IndexError when empty."""
        if not self._frames:
            raise IndexError(f"pop from empty {type(self).__name__}")
        return self._frames.pop()

    def top(self) -> F | None:
        return self._frames[-1] if self._frames else None

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    def __iter__(self) -> Iterator[F]:
        """Iterate frames from innermost to outermost."""
        return reversed(self._frames)


class LoopStack(FrameStack[LoopFrame]):
    """Stack of active loops; the top frame is the innermost loop."""

    __slots__ = ()

    def lookup(self, name: str) -> Value | None:
        """Current element if ``name`` is the innermost loop's variable.

        Only the innermost loop is consulted, never enclosing ones.
        """
        frame = self.top()
        if frame is not None and frame.var_name == name:
            return frame.current()
        return None


class ConditionalStack(FrameStack[ConditionalFrame]):
    """Stack of active conditionals; the top frame decides skipping."""

    __slots__ = ()

    @property
    def skipping(self) -> bool:
        frame = self.top()
        return frame is not None and frame.skipping
