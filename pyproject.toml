[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "restjson"
version = "1.0.0"
description = "A JSON document model with parser, serializer and schema validation, plus raw HTTP/1.1 request builders"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "parser", "serializer", "schema", "http", "requests"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats :: JSON",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["restjson"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
