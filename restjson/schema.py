"""Check a JSON value against a schema given as an example document."""

from __future__ import annotations

from typing import Any

from restjson.model import JsonValue, ValueType

__all__ = ["validate"]


def _as_value(data: Any) -> JsonValue:
    if isinstance(data, JsonValue):
        return data
    return JsonValue.from_python(data)


def validate(schema: Any, value: Any) -> bool:
    """Return True if ``value`` has the shape described by ``schema``.

    The schema is itself a JSON value:

    * ``null`` accepts any value;
    * a string, number or boolean accepts any value of the same kind;
    * an empty array accepts any array; otherwise every element of the
      value must match the schema's first element (the rest are ignored);
    * an empty object accepts any object; otherwise the value must have
      at least as many pairs and every schema name must be present with a
      value that matches.

    Plain Python data is converted with ``JsonValue.from_python`` first.
    """
    pending: list[tuple[JsonValue, JsonValue]] = [(_as_value(schema), _as_value(value))]
    while pending:
        expected, actual = pending.pop()
        kind = expected.type
        if kind is not actual.type and kind is not ValueType.NULL:
            return False
        if kind is ValueType.ARRAY:
            schema_items = expected.as_array()
            if len(schema_items) == 0:
                continue
            template = schema_items[0]
            pending.extend((template, item) for item in actual.as_array())
        elif kind is ValueType.OBJECT:
            schema_obj = expected.as_object()
            if len(schema_obj) == 0:
                continue
            value_obj = actual.as_object()
            if len(value_obj) < len(schema_obj):
                return False
            for name, template in schema_obj.items():
                candidate = value_obj.get(name)
                if candidate is None:
                    return False
                pending.append((template, candidate))
        elif kind is ValueType.ERROR:
            return False
    return True