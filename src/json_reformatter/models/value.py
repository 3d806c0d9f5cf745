"""Tagged JSON value model."""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Tuple
from ..types import ValueKind


_COLLECTION_KINDS = (ValueKind.ARRAY, ValueKind.OBJECT)


@dataclass(frozen=True)
class Value:
    """
    A parsed JSON value tagged with its kind.

    The kind is fixed when the value is built from its syntax, so an object
    and an array of key/value-looking pairs can never be confused. Arrays
    hold a tuple of values; objects hold a tuple of ``(key, value)`` pairs in
    source order.
    """

    kind: ValueKind
    data: Any = None

    def __post_init__(self):
        """Validate payload after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate that the payload matches the kind."""
        if self.kind == ValueKind.NULL:
            if self.data is not None:
                raise ValueError("null value cannot carry data")

        elif self.kind == ValueKind.BOOL:
            if not isinstance(self.data, bool):
                raise ValueError(f"bool value requires bool data, got {type(self.data).__name__}")

        elif self.kind == ValueKind.NUMBER:
            if isinstance(self.data, bool) or not isinstance(self.data, (int, float)):
                raise ValueError(f"number value requires int or float data, got {type(self.data).__name__}")
            if isinstance(self.data, float) and not math.isfinite(self.data):
                raise ValueError("number value must be finite")

        elif self.kind == ValueKind.STRING:
            if not isinstance(self.data, str):
                raise ValueError(f"string value requires str data, got {type(self.data).__name__}")

        elif self.kind == ValueKind.ARRAY:
            if not isinstance(self.data, tuple):
                raise ValueError("array value requires a tuple of values")
            for item in self.data:
                if not isinstance(item, Value):
                    raise ValueError(f"array element must be a Value, got {type(item).__name__}")

        elif self.kind == ValueKind.OBJECT:
            if not isinstance(self.data, tuple):
                raise ValueError("object value requires a tuple of (key, value) pairs")
            seen = set()
            for member in self.data:
                if not isinstance(member, tuple) or len(member) != 2:
                    raise ValueError("object member must be a (key, value) pair")
                key, value = member
                if not isinstance(key, str):
                    raise ValueError(f"object key must be str, got {type(key).__name__}")
                if not isinstance(value, Value):
                    raise ValueError(f"object member value must be a Value, got {type(value).__name__}")
                if key in seen:
                    raise ValueError(f"duplicate object key: {key!r}")
                seen.add(key)

    # Constructors

    @classmethod
    def null(cls) -> 'Value':
        return cls(ValueKind.NULL)

    @classmethod
    def boolean(cls, flag: bool) -> 'Value':
        return cls(ValueKind.BOOL, flag)

    @classmethod
    def number(cls, number) -> 'Value':
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def string(cls, text: str) -> 'Value':
        return cls(ValueKind.STRING, text)

    @classmethod
    def array(cls, items: Iterable['Value']) -> 'Value':
        return cls(ValueKind.ARRAY, tuple(items))

    @classmethod
    def object(cls, members: Iterable[Tuple[str, 'Value']]) -> 'Value':
        return cls(ValueKind.OBJECT, tuple(members))

    @classmethod
    def from_python(cls, data: Any) -> 'Value':
        """
        Build a Value from plain Python data.

        Args:
            data: dict, list, tuple, str, int, float, bool or None

        Returns:
            Equivalent tagged Value

        Raises:
            TypeError: If data contains a type with no JSON counterpart
        """
        if data is None:
            return cls.null()
        if isinstance(data, bool):
            return cls.boolean(data)
        if isinstance(data, (int, float)):
            return cls.number(data)
        if isinstance(data, str):
            return cls.string(data)
        if isinstance(data, dict):
            return cls.object((str(key), cls.from_python(value)) for key, value in data.items())
        if isinstance(data, (list, tuple)):
            return cls.array(cls.from_python(item) for item in data)
        raise TypeError(f"Unsupported type for JSON value: {type(data).__name__}")

    # Conversion and inspection

    def to_python(self) -> Any:
        """Convert back to plain Python data (dict, list, scalars, None)."""
        if self.kind == ValueKind.OBJECT:
            return {key: value.to_python() for key, value in self.data}
        if self.kind == ValueKind.ARRAY:
            return [item.to_python() for item in self.data]
        return self.data

    def is_null(self) -> bool:
        return self.kind == ValueKind.NULL

    def is_collection(self) -> bool:
        """Check if this value is an array or an object."""
        return self.kind in _COLLECTION_KINDS

    def is_empty(self) -> bool:
        """Check if this is a collection without children."""
        return self.is_collection() and len(self.data) == 0

    def children(self) -> Iterator['Value']:
        """Iterate over array elements or object member values."""
        if self.kind == ValueKind.ARRAY:
            yield from self.data
        elif self.kind == ValueKind.OBJECT:
            for _, value in self.data:
                yield value

    def keys(self) -> Tuple[str, ...]:
        """Object keys in source order (empty for anything else)."""
        if self.kind != ValueKind.OBJECT:
            return ()
        return tuple(key for key, _ in self.data)

    def nesting_depth(self) -> int:
        """
        Number of collection levels in this value.

        Scalars have depth 0, a flat collection depth 1.
        """
        if not self.is_collection():
            return 0
        return 1 + max((child.nesting_depth() for child in self.children()), default=0)
