"""Parse JSON text into a document model."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from restjson.model import JsonError, JsonValue, ValueType
from restjson.text import is_decimal, parse_utf16_hex, remove_comments

__all__ = [
    "JsonParseError",
    "parse_string",
    "parse_string_with_comments",
    "parse_file",
    "parse_file_with_comments",
]

MAX_NESTING = 2048

_WHITESPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset("0123456789")
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_NUMBER = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_NUMBER = re.compile(r"-?0[xX]\.?[0-9a-fA-F]")
_UTF8_BOM = b"\xef\xbb\xbf"


class JsonParseError(JsonError):
    """Raised when JSON text cannot be parsed."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


@dataclass
class _Frame:
    container: JsonValue
    closer: str
    key: str | None = None


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _fail(self, message: str) -> None:
        raise JsonParseError(message, self.pos)

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip_whitespace(self) -> None:
        text, pos = self.text, self.pos
        while pos < len(text) and text[pos] in _WHITESPACE:
            pos += 1
        self.pos = pos

    def parse(self) -> JsonValue:
        stack: list[_Frame] = []
        while True:
            if len(stack) > MAX_NESTING:
                self._fail("nesting too deep")
            self._skip_whitespace()
            ch = self._peek()
            if ch == "{" or ch == "[":
                is_object = ch == "{"
                self.pos += 1
                self._skip_whitespace()
                container = JsonValue.object() if is_object else JsonValue.array()
                closer = "}" if is_object else "]"
                if self._peek() == closer:
                    self.pos += 1
                    value = container
                else:
                    frame = _Frame(container, closer)
                    if is_object:
                        frame.key = self._read_key()
                    stack.append(frame)
                    continue
            else:
                value = self._parse_scalar(ch)
            finished = self._close(stack, value)
            if finished is not None:
                return finished

    def _close(self, stack: list[_Frame], value: JsonValue) -> JsonValue | None:
        """Attach ``value`` to open containers; None means another value follows."""
        while stack:
            frame = stack[-1]
            self._attach(frame, value)
            self._skip_whitespace()
            if self._peek() == ",":
                self.pos += 1
                self._skip_whitespace()
                if self._peek() != frame.closer:
                    if frame.container.type is ValueType.OBJECT:
                        frame.key = self._read_key()
                    return None
            elif self._peek() != frame.closer:
                self._fail(f"expected ',' or {frame.closer!r}")
            self.pos += 1
            value = stack.pop().container
        return value

    def _attach(self, frame: _Frame, value: JsonValue) -> None:
        if frame.container.type is ValueType.OBJECT:
            obj = frame.container.as_object()
            if frame.key in obj:
                self._fail(f"duplicate key {frame.key!r}")
            obj.set(frame.key, value)
            frame.key = None
        else:
            frame.container.as_array().append(value)

    def _read_key(self) -> str:
        key = self._read_string()
        if "\0" in key:
            self._fail("object keys must not contain NUL characters")
        self._skip_whitespace()
        if self._peek() != ":":
            self._fail("expected ':'")
        self.pos += 1
        return key

    def _read_string(self) -> str:
        text = self.text
        start = self.pos
        if self._peek() != '"':
            self._fail("expected '\"'")
        end = start + 1
        while True:
            if end >= len(text):
                self._fail("unterminated string")
            ch = text[end]
            if ch == '"':
                break
            if ch == "\\":
                end += 1
                if end >= len(text):
                    self._fail("unterminated string")
            end += 1
        self.pos = end + 1
        return self._unescape(text[start + 1:end], start + 1)

    def _unescape(self, raw: str, offset: int) -> str:
        out: list[str] = []
        i = 0
        while i < len(raw):
            ch = raw[i]
            if ch == "\\":
                i += 1
                escape = raw[i]
                if escape in _ESCAPES:
                    out.append(_ESCAPES[escape])
                elif escape == "u":
                    char, consumed = self._decode_unicode(raw, i + 1, offset)
                    out.append(char)
                    i += consumed
                else:
                    raise JsonParseError(f"invalid escape '\\{escape}'", offset + i)
            elif ord(ch) < 0x20:
                raise JsonParseError("control character in string", offset + i)
            else:
                out.append(ch)
            i += 1
        return "".join(out)

    @staticmethod
    def _decode_unicode(raw: str, start: int, offset: int) -> tuple[str, int]:
        """Decode a ``\\u`` escape whose hex digits begin at ``start``.

        Returns the character and how many characters after the ``u`` it used.
        """
        try:
            code = parse_utf16_hex(raw[start:])
        except ValueError:
            raise JsonParseError("invalid \\u escape", offset + start) from None
        if code < 0xD800 or code > 0xDFFF:
            return chr(code), 4
        if code > 0xDBFF:
            raise JsonParseError("trail surrogate without lead", offset + start)
        trail_at = start + 4
        if raw[trail_at:trail_at + 2] != "\\u":
            raise JsonParseError("lead surrogate without trail", offset + trail_at)
        try:
            trail = parse_utf16_hex(raw[trail_at + 2:])
        except ValueError:
            raise JsonParseError("invalid \\u escape", offset + trail_at) from None
        if not 0xDC00 <= trail <= 0xDFFF:
            raise JsonParseError("invalid trail surrogate", offset + trail_at)
        combined = (((code - 0xD800) & 0x3FF) << 10 | ((trail - 0xDC00) & 0x3FF)) + 0x10000
        return chr(combined), 10

    def _parse_scalar(self, ch: str) -> JsonValue:
        if ch == '"':
            start = self.pos
            text = self._read_string()
            try:
                return JsonValue.string(text)
            except JsonError as exc:
                raise JsonParseError(str(exc), start) from None
        if ch == "t" or ch == "f":
            for token, flag in (("true", True), ("false", False)):
                if self.text.startswith(token, self.pos):
                    self.pos += len(token)
                    return JsonValue.boolean(flag)
            self._fail("invalid literal")
        if ch == "n":
            if self.text.startswith("null", self.pos):
                self.pos += 4
                return JsonValue.null()
            self._fail("invalid literal")
        if ch == "-" or ch in _DIGITS:
            return self._parse_number()
        if not ch:
            self._fail("unexpected end of input")
        self._fail(f"unexpected character {ch!r}")
        raise AssertionError("unreachable")

    def _parse_number(self) -> JsonValue:
        if _HEX_NUMBER.match(self.text, self.pos):
            self._fail("hexadecimal numbers are not allowed")
        unsigned = self.text[self.pos + 1:self.pos + 4].lower()
        if self._peek() == "-" and unsigned in ("inf", "nan"):
            self._fail("non-finite number")
        match = _NUMBER.match(self.text, self.pos)
        if match is None:
            # Nothing convertible: the value is zero and no input is consumed.
            return JsonValue.number(0.0)
        literal = match.group()
        if not is_decimal(literal):
            self._fail(f"invalid number {literal!r}")
        try:
            value = JsonValue.number(float(literal))
        except JsonError:
            self._fail(f"number out of range {literal!r}")
        self.pos = match.end()
        return value


def _decode(data: str | bytes | bytearray, strip_bom: bool) -> str:
    if isinstance(data, (bytes, bytearray)):
        raw = bytes(data)
        if strip_bom and raw.startswith(_UTF8_BOM):
            raw = raw[len(_UTF8_BOM):]
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise JsonParseError("input is not valid UTF-8", exc.start) from None
    elif isinstance(data, str):
        text = data
        if strip_bom and text.startswith("\ufeff"):
            text = text[1:]
    else:
        raise TypeError(f"expected str or bytes, got {type(data).__name__}")
    return text.split("\0", 1)[0]


def parse_string(text: str | bytes | bytearray) -> JsonValue:
    """Parse the first JSON value in ``text``; anything after it is ignored.

    A leading UTF-8 byte order mark is skipped. Raises JsonParseError on
    malformed input.
    """
    return _Parser(_decode(text, strip_bom=True)).parse()


def parse_string_with_comments(text: str | bytes | bytearray) -> JsonValue:
    """Parse ``text`` after blanking ``/* */`` and ``//`` comments."""
    source = _decode(text, strip_bom=False)
    source = remove_comments(source, "/*", "*/")
    source = remove_comments(source, "//", "\n")
    return _Parser(source).parse()


def parse_file(path: str | os.PathLike[str]) -> JsonValue:
    """Read and parse a JSON file."""
    with open(path, "rb") as handle:
        return parse_string(handle.read())


def parse_file_with_comments(path: str | os.PathLike[str]) -> JsonValue:
    """Read and parse a JSON file that may contain comments."""
    with open(path, "rb") as handle:
        return parse_string_with_comments(handle.read())