"""Typed template values.

A ``Value`` is a tagged union over the scalar kinds Breeze understands plus
arrays of one scalar kind:

    ======== ==================== ======================
    Tag      Python payload       Rendered as
    ======== ==================== ======================
    STRING   ``str`` or ``None``  the text ('' if None)
    INT      Int32 ``int``        decimal digits
    FLOAT    Float32 ``float``    ``%.4f``
    DOUBLE   Float64 ``float``    ``%.4f``
    BOOL     ``bool``             ``true``/``false``
    LONG     Int64 ``int``        decimal digits
    UINT     UInt32 ``int``       decimal digits
    ARRAY    ``tuple`` of scalars ``[array of size N]``
    ======== ==================== ======================

Payloads are validated when the value is built, so rendering never has to
deal with a malformed value:

    >>> Value.int32(42).to_string()
    '42'
    >>> Value.float32(36.6).to_string()
    '36.6000'
    >>> infer(["a", "b"]).count
    2

"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any


class ValueType(Enum):
    """Tag identifying the variant held by a ``Value``."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"
    LONG = "long"
    UINT = "uint"
    ARRAY = "array"

    @property
    def is_scalar(self) -> bool:
        return self is not ValueType.ARRAY


_INTEGER_BOUNDS: dict[ValueType, tuple[int, int]] = {
    ValueType.INT: (-(2**31), 2**31 - 1),
    ValueType.LONG: (-(2**63), 2**63 - 1),
    ValueType.UINT: (0, 2**32 - 1),
}

_FLOAT_TYPES = frozenset({ValueType.FLOAT, ValueType.DOUBLE})


def _to_float32(number: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        raise ValueError(f"{number!r} is out of range for a 32-bit float") from None


def _coerce_scalar(kind: ValueType, payload: Any) -> Any:
    """Validate ``payload`` for scalar ``kind`` and return its stored form."""
    if kind is ValueType.STRING:
        if payload is not None and not isinstance(payload, str):
            raise TypeError(f"STRING value must be str or None, got {type(payload).__name__}")
        return payload
    if kind is ValueType.BOOL:
        if not isinstance(payload, bool):
            raise TypeError(f"BOOL value must be bool, got {type(payload).__name__}")
        return payload
    if kind in _INTEGER_BOUNDS:
        if isinstance(payload, bool) or not isinstance(payload, int):
            raise TypeError(f"{kind.name} value must be int, got {type(payload).__name__}")
        low, high = _INTEGER_BOUNDS[kind]
        if not low <= payload <= high:
            raise ValueError(f"{payload} is out of range for {kind.name} [{low}, {high}]")
        return payload
    if kind in _FLOAT_TYPES:
        if isinstance(payload, bool) or not isinstance(payload, Real):
            raise TypeError(f"{kind.name} value must be a real number, got {type(payload).__name__}")
        number = float(payload)
        return _to_float32(number) if kind is ValueType.FLOAT else number
    raise TypeError(f"{kind.name} is not a scalar value type")


@dataclass(frozen=True, slots=True)
class Value:
    """Immutable tagged template value.

    For scalars ``data`` is the payload. For arrays ``data`` is a tuple of
    scalar payloads and ``item_type`` names their kind.
    """

    type: ValueType
    data: Any = None
    item_type: ValueType | None = None

    def __post_init__(self) -> None:
        if self.type is ValueType.ARRAY:
            if self.item_type is None or not self.item_type.is_scalar:
                raise TypeError("array item type must be a scalar value type")
            items = tuple(_coerce_scalar(self.item_type, item) for item in self.data or ())
            object.__setattr__(self, "data", items)
        else:
            if self.item_type is not None:
                raise TypeError("item_type is only valid for ARRAY values")
            object.__setattr__(self, "data", _coerce_scalar(self.type, self.data))

    @classmethod
    def string(cls, text: str | None) -> Value:
        return cls(ValueType.STRING, text)

    @classmethod
    def int32(cls, number: int) -> Value:
        return cls(ValueType.INT, number)

    @classmethod
    def float32(cls, number: float) -> Value:
        return cls(ValueType.FLOAT, number)

    @classmethod
    def float64(cls, number: float) -> Value:
        return cls(ValueType.DOUBLE, number)

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        return cls(ValueType.BOOL, flag)

    @classmethod
    def int64(cls, number: int) -> Value:
        return cls(ValueType.LONG, number)

    @classmethod
    def uint32(cls, number: int) -> Value:
        return cls(ValueType.UINT, number)

    @classmethod
    def array(cls, items: Iterable[Any], item_type: ValueType) -> Value:
        """Build an ARRAY value from scalar payloads of ``item_type``."""
        return cls(ValueType.ARRAY, tuple(items), item_type)

    @property
    def count(self) -> int:
        """Number of elements; only meaningful for arrays."""
        if self.type is not ValueType.ARRAY:
            raise TypeError(f"{self.type.name} value has no element count")
        return len(self.data)

    def item(self, index: int) -> Value:
        """Return element ``index`` of an array as a scalar value."""
        if self.type is not ValueType.ARRAY:
            raise TypeError(f"{self.type.name} value is not indexable")
        return Value(self.item_type, self.data[index])

    def to_string(self) -> str:
        return to_string(self)

    def is_truthy(self) -> bool:
        return is_truthy(self)

    def __str__(self) -> str:
        return to_string(self)


def to_string(value: Value) -> str:
    """Render ``value`` the way ``{{ name }}`` prints it."""
    kind = value.type
    if kind is ValueType.STRING:
        return value.data or ""
    if kind is ValueType.BOOL:
        return "true" if value.data else "false"
    if kind in _FLOAT_TYPES:
        return f"{value.data:.4f}"
    if kind is ValueType.ARRAY:
        return f"[array of size {len(value.data)}]"
    return str(value.data)


def is_truthy(value: Value) -> bool:
    """Truthiness used by ``{% if %}``."""
    if value.type is ValueType.ARRAY:
        return len(value.data) > 0
    if value.type is ValueType.STRING:
        return bool(value.data)
    return value.data != 0


def _infer_item_type(items: tuple[Any, ...]) -> ValueType:
    if not items:
        return ValueType.STRING
    kinds = {_infer_scalar_type(item) for item in items}
    if len(kinds) == 1:
        return kinds.pop()
    if kinds <= {ValueType.INT, ValueType.LONG}:
        return ValueType.LONG
    if kinds <= {ValueType.INT, ValueType.LONG, ValueType.DOUBLE}:
        return ValueType.DOUBLE
    names = ", ".join(sorted(kind.name for kind in kinds))
    raise TypeError(f"cannot infer a single element type for array of {names}")


def _infer_scalar_type(obj: Any) -> ValueType:
    if obj is None or isinstance(obj, str):
        return ValueType.STRING
    if isinstance(obj, bool):
        return ValueType.BOOL
    if isinstance(obj, int):
        low, high = _INTEGER_BOUNDS[ValueType.INT]
        return ValueType.INT if low <= obj <= high else ValueType.LONG
    if isinstance(obj, float):
        return ValueType.DOUBLE
    raise TypeError(f"cannot convert {type(obj).__name__} to a template value")


def infer(obj: Any) -> Value:
    """Convert a plain Python object to a ``Value``.

    ``Value`` instances pass through unchanged. Sequences become arrays whose
    element type is inferred from their contents; nested sequences are
    rejected.
    """
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, (list, tuple)):
        items = tuple(obj)
        return Value.array(items, _infer_item_type(items))
    return Value(_infer_scalar_type(obj), obj)
