import math

import pytest

from restjson.model import JsonArray, JsonError, JsonObject, JsonValue, ValueType


def make_object(data):
    return JsonValue.from_python(data).as_object()


def test_null_value():
    value = JsonValue.null()
    assert value.type is ValueType.NULL
    assert value.to_python() is None


def test_string_from_str_and_bytes():
    assert JsonValue.string("hello").as_string() == "hello"
    assert JsonValue.string("caf\u00e9".encode("utf-8")).as_string() == "caf\u00e9"


@pytest.mark.parametrize("bad", [b"\xc0\xaf", b"\xed\xa0\x80", b"\xff", "\ud800"])
def test_string_rejects_invalid_utf8(bad):
    with pytest.raises(JsonError):
        JsonValue.string(bad)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_number_rejects_non_finite(bad):
    with pytest.raises(JsonError):
        JsonValue.number(bad)


def test_number_and_boolean_payloads():
    assert JsonValue.number(3).as_number() == 3.0
    assert JsonValue.boolean(0).as_boolean() is False
    assert JsonValue.boolean("x").as_boolean() is True


def test_accessor_type_mismatch_raises():
    value = JsonValue.number(1.5)
    with pytest.raises(JsonError):
        value.as_string()
    with pytest.raises(JsonError):
        value.as_object()
    with pytest.raises(JsonError):
        JsonValue.null().as_array()


def test_python_round_trip():
    data = {"a": [1.5, True, None, "x"], "b": {"c": 2.0}}
    assert JsonValue.from_python(data).to_python() == data


def test_from_python_rejects_unsupported():
    with pytest.raises(TypeError):
        JsonValue.from_python({1, 2})
    with pytest.raises(TypeError):
        JsonValue.from_python({1: "a"})


def test_set_assigns_parent():
    root = JsonValue.object()
    obj = root.as_object()
    obj.set("k", "v")
    assert obj["k"].parent is root
    assert obj.value is root


def test_set_existing_replaces_in_place():
    obj = make_object({"a": 1, "b": 2})
    old = obj["a"]
    obj.set("a", "new")
    assert list(obj) == ["a", "b"]
    assert obj["a"].as_string() == "new"
    assert old.parent is None


def test_set_value_with_parent_raises():
    first = make_object({"a": 1})
    second = make_object({})
    with pytest.raises(JsonError):
        second.set("a", first["a"])
    assert "a" not in second


def test_set_into_itself_raises():
    root = JsonValue.object()
    with pytest.raises(JsonError):
        root.as_object().set("self", root)
    child = JsonValue.object()
    root.as_object().set("child", child)
    root_copy_holder = child.as_object()
    with pytest.raises(JsonError):
        root.parent = None
        root_copy_holder.set("loop", root)


def test_remove_moves_last_into_gap():
    obj = make_object({"a": 1, "b": 2, "c": 3})
    removed = obj.remove("a")
    assert removed.as_number() == 1.0
    assert removed.parent is None
    assert list(obj) == ["c", "b"]
    assert obj.name_at(0) == "c"
    assert obj.value_at(0).as_number() == 3.0


def test_remove_missing_raises_key_error():
    obj = make_object({"a": 1})
    with pytest.raises(KeyError):
        obj.remove("missing")


def test_clear_detaches_values():
    obj = make_object({"a": 1, "b": [1]})
    values = [v for _, v in obj.items()]
    obj.clear()
    assert len(obj) == 0
    assert all(v.parent is None for v in values)


def test_get_and_has():
    obj = make_object({"a": "x"})
    assert obj.get("missing") is None
    assert obj.has("a")
    assert obj.has("a", ValueType.STRING)
    assert not obj.has("a", ValueType.NUMBER)
    with pytest.raises(KeyError):
        obj["missing"]


def test_dotset_creates_intermediates_and_dotget():
    obj = make_object({})
    obj.dotset("a.b.c", 5)
    assert obj.dotget("a.b.c").as_number() == 5.0
    assert obj.dothas("a.b", ValueType.OBJECT)
    assert obj.to_python() if False else obj.value.to_python() == {"a": {"b": {"c": 5.0}}}


def test_dotset_into_existing_object():
    obj = make_object({"a": {"x": 1}})
    obj.dotset("a.y", True)
    assert obj.value.to_python() == {"a": {"x": 1.0, "y": True}}


def test_dotset_through_non_object_raises():
    obj = make_object({"a": 1})
    with pytest.raises(JsonError):
        obj.dotset("a.b", 2)
    assert obj["a"].as_number() == 1.0


def test_dotget_missing_path_returns_none():
    obj = make_object({"a": 1})
    assert obj.dotget("a.b") is None
    assert obj.dotget("x.y") is None
    assert not obj.dothas("a.b")


def test_dotremove():
    obj = make_object({"a": {"b": 1, "c": 2}})
    removed = obj.dotremove("a.b")
    assert removed.as_number() == 1.0
    assert obj.value.to_python() == {"a": {"c": 2.0}}
    with pytest.raises(KeyError):
        obj.dotremove("x.y")
    obj.set("n", 3)
    with pytest.raises(JsonError):
        obj.dotremove("n.y")


def test_array_append_and_index():
    root = JsonValue.array()
    arr = root.as_array()
    arr.append(1)
    arr.append("two")
    assert len(arr) == 2
    assert arr[1].as_string() == "two"
    assert arr[0].parent is root
    assert isinstance(arr, JsonArray)


def test_array_replace_and_remove():
    arr = JsonValue.from_python([1, 2, 3]).as_array()
    old = arr[1]
    arr.replace(1, None)
    assert old.parent is None
    assert arr.value.to_python() == [1.0, None, 3.0]
    removed = arr.remove(0)
    assert removed.as_number() == 1.0
    assert arr.value.to_python() == [None, 3.0]
    with pytest.raises(IndexError):
        arr.replace(10, 1)
    with pytest.raises(IndexError):
        arr.remove(10)


def test_array_append_attached_value_raises():
    arr = JsonValue.from_python([1]).as_array()
    other = JsonValue.array().as_array()
    with pytest.raises(JsonError):
        other.append(arr[0])


def test_array_clear():
    arr = JsonValue.from_python([1, 2]).as_array()
    items = list(arr)
    arr.clear()
    assert len(arr) == 0
    assert all(item.parent is None for item in items)


def test_equality_numbers_within_epsilon():
    assert JsonValue.number(1.0) == JsonValue.number(1.0000001)
    assert JsonValue.number(1.0) != JsonValue.number(1.1)


def test_equality_objects_ignore_order():
    a = JsonValue.from_python({"x": 1, "y": [True, None]})
    b = JsonValue.from_python({"y": [True, None], "x": 1})
    assert a == b
    c = JsonValue.from_python({"x": 1, "z": [True, None]})
    assert a != c


def test_equality_different_types():
    assert JsonValue.null() != JsonValue.boolean(False)
    assert JsonValue.from_python([1]) != JsonValue.from_python([1, 2])
    assert JsonValue.null() == JsonValue.null()


def test_deep_copy_is_independent():
    original = JsonValue.from_python({"a": {"b": [1, 2]}})
    copy = original.deep_copy()
    assert copy == original
    assert copy.parent is None
    copy.as_object().dotset("a.c", 3)
    assert original.as_object().dotget("a.c") is None
    assert copy.as_object()["a"].as_object()["b"] is not original.as_object()["a"].as_object()["b"]


def test_deep_copy_of_attached_value_has_no_parent():
    obj = make_object({"a": [1]})
    copy = obj["a"].deep_copy()
    assert copy.parent is None
    assert copy == obj["a"]
    assert isinstance(obj, JsonObject)