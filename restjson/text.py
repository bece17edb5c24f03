"""Low-level text helpers used by the JSON parser and object store."""

from __future__ import annotations

import string

__all__ = [
    "is_valid_utf8",
    "remove_comments",
    "is_decimal",
    "parse_utf16_hex",
    "hash_string",
]

_HEX_DIGITS = frozenset(string.hexdigits)
_HASH_MASK = (1 << 64) - 1
_HASH_SEED = 5381


def is_valid_utf8(data: bytes | bytearray | memoryview | str) -> bool:
    """Return True if ``data`` is well-formed UTF-8.

    Overlong encodings, surrogate halves, code points above U+10FFFF and
    truncated sequences are all rejected. A ``str`` is checked through its
    UTF-8 encoding, so lone surrogates make it invalid.
    """
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogatepass")
    try:
        bytes(data).decode("utf-8", "strict")
    except UnicodeDecodeError:
        return False
    return True


def remove_comments(text: str, start_token: str, end_token: str) -> str:
    """Blank out comments delimited by ``start_token`` and ``end_token``.

    Every character of a comment, delimiters included, is replaced by a
    space so offsets are preserved. Text inside double-quoted strings is
    left alone. An unterminated comment only has its opening token blanked.
    Empty tokens leave the text unchanged.
    """
    if not start_token or not end_token:
        return text
    chars = list(text)
    in_string = False
    escaped = False
    pos = 0
    length = len(text)
    while pos < length:
        current = text[pos]
        if current == "\\" and not escaped:
            escaped = True
            pos += 1
            continue
        if current == '"' and not escaped:
            in_string = not in_string
        elif not in_string and text.startswith(start_token, pos):
            body = pos + len(start_token)
            end = text.find(end_token, body)
            if end == -1:
                chars[pos:body] = " " * len(start_token)
                return "".join(chars)
            stop = end + len(end_token)
            chars[pos:stop] = " " * (stop - pos)
            pos = stop
            escaped = False
            continue
        escaped = False
        pos += 1
    return "".join(chars)


def is_decimal(text: str) -> bool:
    """Return True if a numeric literal is acceptable as a JSON number.

    Leading zeros (other than before a decimal point) and hexadecimal
    notation are rejected.
    """
    if len(text) > 1 and text[0] == "0" and text[1] != ".":
        return False
    if len(text) > 2 and text.startswith("-0") and text[2] != ".":
        return False
    return not any(ch in "xX" for ch in text)


def parse_utf16_hex(text: str) -> int:
    """Decode the first four hex digits of ``text`` into a UTF-16 code unit.

    Raises ValueError if fewer than four characters are present or any of
    them is not a hexadecimal digit.
    """
    digits = text[:4]
    if len(digits) < 4 or "\0" in digits:
        raise ValueError(f"expected four hex digits, got {text!r}")
    if not all(ch in _HEX_DIGITS for ch in digits):
        raise ValueError(f"invalid hex digits in {digits!r}")
    return int(digits, 16)


def hash_string(text: str | bytes) -> int:
    """Return the 64-bit djb2 hash of ``text``, stopping at the first NUL."""
    if isinstance(text, str):
        text = text.encode("utf-8", "surrogatepass")
    value = _HASH_SEED
    for byte in text:
        if byte == 0:
            break
        value = (value * 33 + byte) & _HASH_MASK
    return value