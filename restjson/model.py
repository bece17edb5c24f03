"""In-memory JSON document model: values, objects and arrays."""

from __future__ import annotations

import enum
import math
import numbers
from collections.abc import Iterator, Mapping
from typing import Any

from restjson.text import is_valid_utf8

__all__ = ["ValueType", "JsonError", "JsonValue", "JsonObject", "JsonArray"]

_EPSILON = 0.000001


class ValueType(enum.IntEnum):
    """Kind of a JSON value."""

    ERROR = -1
    NULL = 1
    STRING = 2
    NUMBER = 3
    OBJECT = 4
    ARRAY = 5
    BOOLEAN = 6


class JsonError(ValueError):
    """Raised when a JSON value cannot be built, read or attached."""


def _coerce(value: Any) -> JsonValue:
    if isinstance(value, JsonValue):
        return value
    return JsonValue.from_python(value)


def _check_attachable(owner: JsonValue | None, value: JsonValue) -> None:
    if value.parent is not None:
        raise JsonError("value already belongs to a container")
    node = owner
    while node is not None:
        if node is value:
            raise JsonError("a value cannot be placed inside itself")
        node = node.parent


class JsonValue:
    """A single JSON value with a link to the container that holds it."""

    __slots__ = ("type", "parent", "_payload")

    def __init__(self, value_type: ValueType, payload: Any = None) -> None:
        self.type = value_type
        self.parent: JsonValue | None = None
        self._payload = payload

    @classmethod
    def null(cls) -> JsonValue:
        """Create a null value."""
        return cls(ValueType.NULL)

    @classmethod
    def string(cls, text: str | bytes | bytearray) -> JsonValue:
        """Create a string value; the text must be valid UTF-8."""
        if isinstance(text, (bytes, bytearray, memoryview)):
            if not is_valid_utf8(text):
                raise JsonError("string is not valid UTF-8")
            return cls(ValueType.STRING, bytes(text).decode("utf-8"))
        if not isinstance(text, str):
            raise TypeError(f"expected str or bytes, got {type(text).__name__}")
        if not is_valid_utf8(text):
            raise JsonError("string is not valid UTF-8")
        return cls(ValueType.STRING, text)

    @classmethod
    def number(cls, number: float) -> JsonValue:
        """Create a number value; NaN and infinities are rejected."""
        if not isinstance(number, numbers.Real):
            raise TypeError(f"expected a number, got {type(number).__name__}")
        result = float(number)
        if not math.isfinite(result):
            raise JsonError("JSON numbers must be finite")
        return cls(ValueType.NUMBER, result)

    @classmethod
    def boolean(cls, flag: Any) -> JsonValue:
        """Create a boolean value from the truth of ``flag``."""
        return cls(ValueType.BOOLEAN, bool(flag))

    @classmethod
    def object(cls) -> JsonValue:
        """Create an empty object value."""
        value = cls(ValueType.OBJECT)
        value._payload = JsonObject(value)
        return value

    @classmethod
    def array(cls) -> JsonValue:
        """Create an empty array value."""
        value = cls(ValueType.ARRAY)
        value._payload = JsonArray(value)
        return value

    @classmethod
    def from_python(cls, data: Any) -> JsonValue:
        """Build a value tree from plain Python data."""
        if isinstance(data, JsonValue):
            return data.deep_copy()
        if data is None:
            return cls.null()
        if isinstance(data, bool):
            return cls.boolean(data)
        if isinstance(data, numbers.Real):
            return cls.number(data)
        if isinstance(data, (str, bytes, bytearray)):
            return cls.string(data)
        if isinstance(data, Mapping):
            result = cls.object()
            obj = result._payload
            for key, item in data.items():
                if not isinstance(key, str):
                    raise TypeError(f"object keys must be str, got {type(key).__name__}")
                obj.set(key, cls.from_python(item))
            return result
        if isinstance(data, (list, tuple)):
            result = cls.array()
            arr = result._payload
            for item in data:
                arr.append(cls.from_python(item))
            return result
        raise TypeError(f"cannot represent {type(data).__name__} as JSON")

    def _expect(self, value_type: ValueType) -> Any:
        if self.type is not value_type:
            raise JsonError(
                f"value is {self.type.name.lower()}, not {value_type.name.lower()}"
            )
        return self._payload

    def as_object(self) -> JsonObject:
        """Return the object payload; raise JsonError for other kinds."""
        return self._expect(ValueType.OBJECT)

    def as_array(self) -> JsonArray:
        """Return the array payload; raise JsonError for other kinds."""
        return self._expect(ValueType.ARRAY)

    def as_string(self) -> str:
        """Return the string payload; raise JsonError for other kinds."""
        return self._expect(ValueType.STRING)

    def as_number(self) -> float:
        """Return the number payload; raise JsonError for other kinds."""
        return self._expect(ValueType.NUMBER)

    def as_boolean(self) -> bool:
        """Return the boolean payload; raise JsonError for other kinds."""
        return self._expect(ValueType.BOOLEAN)

    def deep_copy(self) -> JsonValue:
        """Return an independent copy of this value with no parent."""
        if self.type is ValueType.OBJECT:
            result = JsonValue.object()
            target = result._payload
            for name, item in self._payload.items():
                target.set(name, item.deep_copy())
            return result
        if self.type is ValueType.ARRAY:
            result = JsonValue.array()
            target = result._payload
            for item in self._payload:
                target.append(item.deep_copy())
            return result
        return JsonValue(self.type, self._payload)

    def to_python(self) -> Any:
        """Convert the value tree to dicts, lists and scalars."""
        if self.type is ValueType.OBJECT:
            return {name: item.to_python() for name, item in self._payload.items()}
        if self.type is ValueType.ARRAY:
            return [item.to_python() for item in self._payload]
        if self.type is ValueType.NULL:
            return None
        return self._payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        if self.type is not other.type:
            return False
        if self.type is ValueType.ARRAY:
            mine, theirs = self._payload, other._payload
            return len(mine) == len(theirs) and all(
                a == b for a, b in zip(mine, theirs)
            )
        if self.type is ValueType.OBJECT:
            mine, theirs = self._payload, other._payload
            if len(mine) != len(theirs):
                return False
            for name, item in mine.items():
                counterpart = theirs.get(name)
                if counterpart is None or item != counterpart:
                    return False
            return True
        if self.type is ValueType.NUMBER:
            return abs(self._payload - other._payload) < _EPSILON
        if self.type in (ValueType.STRING, ValueType.BOOLEAN):
            return self._payload == other._payload
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonValue({self.type.name}, {self.to_python()!r})"


class JsonObject:
    """Ordered name/value pairs owned by an object value."""

    __slots__ = ("_owner", "_names", "_values", "_index")

    def __init__(self, owner: JsonValue) -> None:
        self._owner = owner
        self._names: list[str] = []
        self._values: list[JsonValue] = []
        self._index: dict[str, int] = {}

    @property
    def value(self) -> JsonValue:
        """The object value that wraps this container."""
        return self._owner

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __getitem__(self, name: str) -> JsonValue:
        return self._values[self._index[name]]

    def get(self, name: str) -> JsonValue | None:
        """Return the value stored under ``name``, or None."""
        idx = self._index.get(name)
        return None if idx is None else self._values[idx]

    def name_at(self, index: int) -> str:
        """Return the name at position ``index``."""
        return self._names[index]

    def value_at(self, index: int) -> JsonValue:
        """Return the value at position ``index``."""
        return self._values[index]

    def items(self) -> Iterator[tuple[str, JsonValue]]:
        """Yield (name, value) pairs in storage order."""
        return iter(list(zip(self._names, self._values)))

    def set(self, name: str, value: Any) -> None:
        """Store ``value`` under ``name``, replacing any existing value in place."""
        if not isinstance(name, str):
            raise TypeError(f"object keys must be str, got {type(name).__name__}")
        value = _coerce(value)
        _check_attachable(self._owner, value)
        idx = self._index.get(name)
        if idx is None:
            self._index[name] = len(self._names)
            self._names.append(name)
            self._values.append(value)
        else:
            self._values[idx].parent = None
            self._values[idx] = value
        value.parent = self._owner

    def remove(self, name: str) -> JsonValue:
        """Remove ``name`` and return its detached value.

        The last pair takes the removed pair's position. Raises KeyError if
        the name is absent.
        """
        idx = self._index.pop(name)
        removed = self._values[idx]
        last = len(self._names) - 1
        if idx < last:
            moved_name = self._names[last]
            self._names[idx] = moved_name
            self._values[idx] = self._values[last]
            self._index[moved_name] = idx
        self._names.pop()
        self._values.pop()
        removed.parent = None
        return removed

    def clear(self) -> None:
        """Remove every pair."""
        for item in self._values:
            item.parent = None
        self._names.clear()
        self._values.clear()
        self._index.clear()

    def has(self, name: str, value_type: ValueType | None = None) -> bool:
        """Return True if ``name`` exists, and is of ``value_type`` when given."""
        found = self.get(name)
        return found is not None and (value_type is None or found.type is value_type)

    def dotget(self, name: str) -> JsonValue | None:
        """Look up a dotted path such as ``"a.b.c"``; None if any step is missing."""
        head, sep, rest = name.partition(".")
        if not sep:
            return self.get(name)
        child = self.get(head)
        if child is None or child.type is not ValueType.OBJECT:
            return None
        return child._payload.dotget(rest)

    def dotset(self, name: str, value: Any) -> None:
        """Store ``value`` at a dotted path, creating intermediate objects.

        Raises JsonError if an intermediate name holds a non-object.
        """
        head, sep, rest = name.partition(".")
        if not sep:
            self.set(name, value)
            return
        child = self.get(head)
        if child is not None:
            if child.type is not ValueType.OBJECT:
                raise JsonError(f"{head!r} is not an object")
            child._payload.dotset(rest, value)
            return
        created = JsonValue.object()
        created._payload.dotset(rest, value)
        self.set(head, created)

    def dotremove(self, name: str) -> JsonValue:
        """Remove the value at a dotted path and return it detached."""
        head, sep, rest = name.partition(".")
        if not sep:
            return self.remove(name)
        child = self.get(head)
        if child is None:
            raise KeyError(head)
        if child.type is not ValueType.OBJECT:
            raise JsonError(f"{head!r} is not an object")
        return child._payload.dotremove(rest)

    def dothas(self, name: str, value_type: ValueType | None = None) -> bool:
        """Return True if a dotted path exists, and is of ``value_type`` when given."""
        found = self.dotget(name)
        return found is not None and (value_type is None or found.type is value_type)

    def __repr__(self) -> str:
        return f"JsonObject({self._owner.to_python()!r})"


class JsonArray:
    """An ordered list of values owned by an array value."""

    __slots__ = ("_owner", "_items")

    def __init__(self, owner: JsonValue) -> None:
        self._owner = owner
        self._items: list[JsonValue] = []

    @property
    def value(self) -> JsonValue:
        """The array value that wraps this container."""
        return self._owner

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> JsonValue:
        return self._items[index]

    def append(self, value: Any) -> None:
        """Add ``value`` at the end."""
        value = _coerce(value)
        _check_attachable(self._owner, value)
        self._items.append(value)
        value.parent = self._owner

    def replace(self, index: int, value: Any) -> None:
        """Put ``value`` at ``index``, detaching the value that was there."""
        value = _coerce(value)
        old = self._items[index]
        _check_attachable(self._owner, value)
        old.parent = None
        self._items[index] = value
        value.parent = self._owner

    def remove(self, index: int) -> JsonValue:
        """Remove the value at ``index`` and return it detached."""
        removed = self._items.pop(index)
        removed.parent = None
        return removed

    def clear(self) -> None:
        """Remove every value."""
        for item in self._items:
            item.parent = None
        self._items.clear()

    def __repr__(self) -> str:
        return f"JsonArray({self._owner.to_python()!r})"