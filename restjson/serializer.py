"""Turn a JSON document model back into text."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from restjson.model import JsonError, JsonValue, ValueType

__all__ = ["Serializer", "serialize", "serialize_pretty"]

DEFAULT_FLOAT_FORMAT = "%1.17g"
INDENT = "    "

_NAMED_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


@dataclass
class _Frame:
    items: list[tuple[str | None, JsonValue]]
    level: int
    closer: str
    index: int = field(default=0)


class Serializer:
    """Configurable JSON writer.

    ``escape_slashes`` writes ``/`` as ``\\/``; ``float_format`` is a
    printf-style format used for numbers; ``number_function``, when given,
    turns each number into its text and takes precedence over the format.
    """

    def __init__(
        self,
        escape_slashes: bool = True,
        float_format: str | None = None,
        number_function: Callable[[float], str] | None = None,
    ) -> None:
        self.escape_slashes = escape_slashes
        self.float_format = float_format or DEFAULT_FLOAT_FORMAT
        self.number_function = number_function

    def serialize(self, value: Any) -> str:
        """Return compact JSON text for ``value``."""
        return self._write(value, pretty=False)

    def serialize_pretty(self, value: Any) -> str:
        """Return indented JSON text for ``value``."""
        return self._write(value, pretty=True)

    def serialization_size(self, value: Any) -> int:
        """Bytes needed to hold the compact UTF-8 text plus a terminator."""
        return len(self.serialize(value).encode("utf-8")) + 1

    def serialization_size_pretty(self, value: Any) -> int:
        """Bytes needed to hold the pretty UTF-8 text plus a terminator."""
        return len(self.serialize_pretty(value).encode("utf-8")) + 1

    def to_file(self, value: Any, path: str | os.PathLike[str]) -> None:
        """Write compact JSON text for ``value`` to ``path``."""
        self._save(self.serialize(value), path)

    def to_file_pretty(self, value: Any, path: str | os.PathLike[str]) -> None:
        """Write indented JSON text for ``value`` to ``path``."""
        self._save(self.serialize_pretty(value), path)

    @staticmethod
    def _save(text: str, path: str | os.PathLike[str]) -> None:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)

    def _string(self, text: str) -> str:
        parts = ['"']
        for ch in text:
            escaped = _NAMED_ESCAPES.get(ch)
            if escaped is not None:
                parts.append(escaped)
            elif ord(ch) < 0x20:
                parts.append(f"\\u{ord(ch):04x}")
            elif ch == "/" and self.escape_slashes:
                parts.append("\\/")
            else:
                parts.append(ch)
        parts.append('"')
        return "".join(parts)

    def _number(self, number: float) -> str:
        if self.number_function is not None:
            return self.number_function(number)
        try:
            return self.float_format % number
        except (TypeError, ValueError) as exc:
            raise JsonError(f"cannot format number: {exc}") from None

    def _open(self, value: JsonValue, level: int, out: list[str],
              stack: list[_Frame], pretty: bool) -> None:
        kind = value.type
        if kind is ValueType.OBJECT:
            items: list[tuple[str | None, JsonValue]] = list(value.as_object().items())
            out.append("{")
            if items and pretty:
                out.append("\n")
            stack.append(_Frame(items, level, "}"))
        elif kind is ValueType.ARRAY:
            items = [(None, item) for item in value.as_array()]
            out.append("[")
            if items and pretty:
                out.append("\n")
            stack.append(_Frame(items, level, "]"))
        elif kind is ValueType.STRING:
            out.append(self._string(value.as_string()))
        elif kind is ValueType.NUMBER:
            out.append(self._number(value.as_number()))
        elif kind is ValueType.BOOLEAN:
            out.append("true" if value.as_boolean() else "false")
        elif kind is ValueType.NULL:
            out.append("null")
        else:
            raise JsonError("cannot serialize an invalid value")

    def _write(self, value: Any, pretty: bool) -> str:
        if not isinstance(value, JsonValue):
            value = JsonValue.from_python(value)
        out: list[str] = []
        stack: list[_Frame] = []
        self._open(value, 0, out, stack, pretty)
        while stack:
            frame = stack[-1]
            if frame.index == len(frame.items):
                stack.pop()
                if frame.items and pretty:
                    out.append("\n")
                    out.append(INDENT * frame.level)
                out.append(frame.closer)
                continue
            if frame.index > 0:
                out.append(",")
                if pretty:
                    out.append("\n")
            name, item = frame.items[frame.index]
            frame.index += 1
            if pretty:
                out.append(INDENT * (frame.level + 1))
            if name is not None:
                out.append(self._string(name.split("\0", 1)[0]))
                out.append(": " if pretty else ":")
            self._open(item, frame.level + 1, out, stack, pretty)
        return "".join(out)


_DEFAULT = Serializer()


def serialize(value: Any) -> str:
    """Return compact JSON text using default settings."""
    return _DEFAULT.serialize(value)


def serialize_pretty(value: Any) -> str:
    """Return indented JSON text using default settings."""
    return _DEFAULT.serialize_pretty(value)