"""Read-only variable context for a render.

A ``Context`` is an ordered sequence of ``(name, Value)`` pairs. Names are
not required to be unique: lookup scans in order and the first match wins,
which is what lets render-time variables shadow environment globals simply
by coming first.

    >>> ctx = Context([("name", Value.string("John")), ("name", Value.string("Jane"))])
    >>> ctx.get("name").to_string()
    'John'

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from breeze.values import Value, infer


class Context:
    """Immutable ordered name/value store with first-match-wins lookup.

    Entries that are not already ``Value`` instances are converted with
    ``breeze.values.infer``.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[tuple[str, Any]] = ()):
        pairs: list[tuple[str, Value]] = []
        for name, value in entries:
            if not isinstance(name, str):
                raise TypeError(f"context names must be str, got {type(name).__name__}")
            pairs.append((name, infer(value)))
        self._entries: tuple[tuple[str, Value], ...] = tuple(pairs)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None = None, /, **variables: Any) -> Context:
        """Build a context from a mapping and/or keyword arguments.

        Keyword arguments come first, so they shadow mapping entries.
        """
        entries: list[tuple[str, Any]] = list(variables.items())
        if mapping:
            entries.extend(mapping.items())
        return cls(entries)

    @classmethod
    def chain(cls, *contexts: Context) -> Context:
        """Concatenate contexts; earlier ones win on lookup."""
        merged = cls()
        merged._entries = tuple(pair for ctx in contexts for pair in ctx._entries)
        return merged

    def get(self, name: str) -> Value | None:
        """Return the first value bound to ``name``, or None."""
        for key, value in self._entries:
            if key == name:
                return value
        return None

    def names(self) -> frozenset[str]:
        return frozenset(key for key, _ in self._entries)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._entries)

    def __iter__(self) -> Iterator[tuple[str, Value]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        names = ", ".join(key for key, _ in self._entries)
        return f"Context({names})"
