import pytest

from restjson.model import JsonError, JsonValue, ValueType
from restjson.parser import parse_file, parse_string
from restjson.serializer import Serializer, serialize, serialize_pretty


def test_compact_round_trip_text():
    text = '{"a":[1,true,null],"b":"x","c":{}}'
    assert serialize(parse_string(text)) == text


def test_pretty_layout():
    value = parse_string('{"a":[1,2],"b":{}}')
    expected = '{\n    "a": [\n        1,\n        2\n    ],\n    "b": {}\n}'
    assert serialize_pretty(value) == expected


def test_pretty_round_trip_value():
    value = parse_string('{"a":[1,{"b":[true,false,null]}],"c":"d"}')
    assert parse_string(serialize_pretty(value)) == value


def test_slashes_escaped_by_default():
    assert serialize(JsonValue.string("a/b")) == '"a\\/b"'


def test_slashes_not_escaped_when_disabled():
    assert Serializer(escape_slashes=False).serialize(JsonValue.string("a/b")) == '"a/b"'


def test_control_character_escape():
    assert serialize(JsonValue.string("\x01")) == '"\\u0001"'


def test_special_characters_round_trip():
    original = JsonValue.string('quote " back \\ nl \n tab \t bell \x07')
    assert parse_string(serialize(original)) == original


def test_non_ascii_written_raw():
    assert serialize(JsonValue.string("é")) == '"é"'


def test_integer_number():
    assert serialize(JsonValue.number(3)) == "3"


def test_float_round_trips_exactly():
    text = serialize(JsonValue.number(0.1))
    assert parse_string(text).as_number() == 0.1


def test_custom_number_function():
    ser = Serializer(number_function=lambda n: "N")
    out = ser.serialize(JsonValue.from_python([1, 2]))
    assert out.count("N") == 2


def test_float_format_applied():
    ser = Serializer(float_format="%d")
    assert ser.serialize(JsonValue.number(7.9)) == "7"


def test_serialization_size_counts_bytes_plus_one():
    value = JsonValue.from_python({"k": "é"})
    assert Serializer().serialization_size(value) == len(serialize(value).encode("utf-8")) + 1


def test_serialization_size_pretty():
    value = JsonValue.from_python({"k": [1, 2]})
    assert Serializer().serialization_size_pretty(value) == len(serialize_pretty(value)) + 1


def test_plain_python_accepted():
    assert parse_string(serialize({"x": [1, None]})).to_python() == {"x": [1.0, None]}


def test_to_file_round_trip(tmp_path):
    value = JsonValue.from_python({"a": [1, "two", False]})
    path = tmp_path / "out.json"
    Serializer().to_file(value, path)
    assert parse_file(path) == value


def test_to_file_pretty_round_trip(tmp_path):
    value = JsonValue.from_python({"a": {"b": [None]}})
    path = tmp_path / "out.json"
    Serializer().to_file_pretty(value, path)
    assert path.read_text(encoding="utf-8") == serialize_pretty(value)


def test_deep_nesting():
    text = "[" * 1500 + "]" * 1500
    assert serialize(parse_string(text)) == text


def test_invalid_value_rejected():
    with pytest.raises(JsonError):
        serialize(JsonValue(ValueType.ERROR))


def test_empty_containers_pretty():
    assert serialize_pretty(JsonValue.array()) == "[]"
    assert serialize_pretty(JsonValue.object()) == "{}"