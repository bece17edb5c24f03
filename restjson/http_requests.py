"""Build raw HTTP/1.1 request messages for a JSON REST client."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "compute_get_request",
    "compute_post_request",
    "compute_put_request",
    "compute_delete_request",
]

CRLF = "\r\n"


def _request_line(method: str, url: str, query_params: str | None) -> str:
    target = url if query_params is None else f"{url}?{query_params}"
    return f"{method} {target} HTTP/1.1"


def _cookie_header(cookies: Iterable[str] | None) -> list[str]:
    if cookies is None:
        return []
    names = list(cookies)
    if not names:
        return []
    return ["Cookie: " + "; ".join(names)]


def _join_body(body_data: str | Iterable[str]) -> str:
    if isinstance(body_data, str):
        return body_data
    return "".join(body_data)


def _message(lines: Iterable[str], body: str = "") -> str:
    return "".join(line + CRLF for line in lines) + CRLF + body


def _without_body(
    method: str,
    host: str,
    url: str,
    query_params: str | None,
    cookies: Iterable[str] | None,
) -> str:
    lines = [_request_line(method, url, query_params), f"Host: {host}"]
    lines.extend(_cookie_header(cookies))
    return _message(lines)


def _with_body(
    method: str,
    host: str,
    url: str,
    content_type: str,
    body_data: str | Iterable[str],
    cookies: Iterable[str] | None,
) -> str:
    body = _join_body(body_data)
    lines = [
        _request_line(method, url, None),
        f"Host: {host}",
        f"Content-Type: {content_type}",
        f"Content-Length: {len(body.encode('utf-8'))}",
    ]
    lines.extend(_cookie_header(cookies))
    return _message(lines, body)


def compute_get_request(
    host: str,
    url: str,
    query_params: str | None = None,
    cookies: Iterable[str] | None = None,
) -> str:
    """Return a GET request; query parameters and cookies are optional."""
    return _without_body("GET", host, url, query_params, cookies)


def compute_post_request(
    host: str,
    url: str,
    content_type: str,
    body_data: str | Iterable[str],
    cookies: Iterable[str] | None = None,
) -> str:
    """Return a POST request whose body is the concatenation of ``body_data``."""
    return _with_body("POST", host, url, content_type, body_data, cookies)


def compute_put_request(
    host: str,
    url: str,
    content_type: str,
    body_data: str | Iterable[str],
    cookies: Iterable[str] | None = None,
) -> str:
    """Return a PUT request whose body is the concatenation of ``body_data``."""
    return _with_body("PUT", host, url, content_type, body_data, cookies)


def compute_delete_request(
    host: str,
    url: str,
    query_params: str | None = None,
    cookies: Iterable[str] | None = None,
) -> str:
    """Return a DELETE request; query parameters and cookies are optional."""
    return _without_body("DELETE", host, url, query_params, cookies)