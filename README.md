# restjson

A small JSON toolkit with no dependencies, plus helpers that build raw
HTTP/1.1 request messages as text.

- **Document model** (`restjson.model`): `JsonValue`, `JsonObject` and
  `JsonArray`. Objects keep their keys in insertion order and support dotted
  paths such as `"a.b.c"`. Each value records the container that holds it in
  `parent`.
- **Parser** (`restjson.parser`): strict JSON. A second mode blanks out
  `/* ... */` and `// ...` comments before parsing.
- **Serializer** (`restjson.serializer`): compact output, or pretty output
  indented by four spaces. By default `/` is escaped as `\/`.
- **Schema validation** (`restjson.schema`): checks that a value has the same
  shape as a sample document.
- **HTTP request builders** (`restjson.http_requests`): return GET, POST, PUT
  and DELETE messages as strings.
- **Text helpers** (`restjson.text`): UTF-8 validation, comment blanking, and
  the djb2 string hash.

## Installation

```
pip install .
```

Python 3.10 or later is required.

## Parsing and querying

```python
from restjson.parser import parse_string

doc = parse_string('{"user": {"name": "alice", "age": 30}, "tags": ["a", "b"]}')
root = doc.as_object()

root.dotget("user.name").as_string()    # "alice"
root["tags"].as_array()[1].as_string()  # "b"
```

`parse_string` accepts `str` or `bytes` and skips a leading byte order mark.
It parses the first JSON value in the input and ignores anything after it.
`parse_string_with_comments`, `parse_file` and `parse_file_with_comments`
work the same way.

Malformed input raises `JsonParseError`. Its `position` attribute holds the
offset where parsing failed. The parser also rejects:

- nesting deeper than 2048 levels,
- duplicate keys,
- hexadecimal numbers,
- numbers with leading zeros,
- numbers that are out of range.

## Building documents

```python
from restjson.model import JsonValue, ValueType

value = JsonValue.object()
obj = value.as_object()
obj.set("title", JsonValue.string("hello"))
obj.dotset("meta.count", JsonValue.number(3))

items = JsonValue.array()
items.as_array().append(JsonValue.boolean(True))
obj.set("items", items)

obj.dothas("meta.count", ValueType.NUMBER)  # True
```

`set`, `append` and `replace` also take plain Python data, which they convert
first. `JsonValue.from_python` converts dicts, lists, tuples, strings, bytes,
numbers, booleans and `None`, and `to_python` converts back.

The model raises `JsonError` in these cases:

- a value is read as the wrong kind, for example `as_string()` on a number,
- a number is NaN or infinite,
- a string is not valid UTF-8,
- a value that already has a parent is attached again,
- a value is placed inside itself.

`JsonObject.remove` and `dotremove` return the value they detach. After a
removal, the last pair moves into the position of the removed pair.

When two values are compared with `==`, numbers count as equal if they differ
by less than 0.000001.

## Serializing

```python
from restjson.serializer import Serializer, serialize, serialize_pretty

serialize(value)          # '{"title":"hello","meta":{"count":3},"items":[true]}'
print(serialize_pretty(value))

writer = Serializer(escape_slashes=False, float_format="%.3f")
writer.serialize(JsonValue.from_python({"path": "/tmp", "x": 1.5}))
# '{"path":"/tmp","x":1.500}'
```

By default numbers are written with the printf format `%1.17g`. You can pass
another format as `float_format`. You can also pass `number_function`, a
callable that turns a float into text; when given, it is used instead of the
format.

`Serializer` can also:

- write to a file with `to_file` and `to_file_pretty`,
- report the UTF-8 size of the output plus one terminator byte with
  `serialization_size` and `serialization_size_pretty`.

## Validating against a schema

```python
from restjson.parser import parse_string
from restjson.schema import validate

schema = parse_string('{"name": "", "age": 0}')
validate(schema, parse_string('{"name": "bob", "age": 41, "x": null}'))  # True
```

The rules are:

- A `null` in the schema accepts a value of any type.
- A string, number or boolean in the schema accepts any value of the same kind.
- An empty array or empty object in the schema accepts any array or object.
- A non-empty array in the schema checks every element of the value against
  the schema's first element.
- A non-empty object in the schema requires each of its names to be present
  in the value with a matching value.

## HTTP request messages

```python
from restjson.http_requests import compute_get_request, compute_post_request

compute_get_request("example.com", "/api/books", None, ["token"])

compute_post_request(
    "example.com", "/api/login", "application/json",
    ['{"username":"user","password":"password"}'], None,
)
```

Each function returns the full request text. Every header line ends with
`\r\n`, and a blank line separates the headers from the body. Cookies are
joined with `; ` into a single `Cookie` header. For POST and PUT, the body
fields are concatenated and `Content-Length` is set to their size in UTF-8
bytes.

## What it does not do

The request builders only produce text. The package opens no connections,
sends nothing, and does not parse HTTP responses. It also has no
command-line program.