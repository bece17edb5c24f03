"""JSON document model, parser, serializer, schema validation, text helpers and HTTP request builders."""

__version__ = "1.0.0"

__all__ = ["text", "model", "parser", "serializer", "schema", "http_requests"]