from __future__ import annotations

import pytest

from manage_service.infrastructure.http.transport import (
    RequestConstructionError,
    build_service_url,
    decode_error_body,
    status_line,
)


@pytest.mark.parametrize(
    ("base_url", "expected"),
    [
        ("http://auth:9004", "http://auth:9004/internal/auth/hash"),
        ("http://auth:9004/", "http://auth:9004/internal/auth/hash"),
        ("https://auth.example.org/prefix?x=1", "https://auth.example.org/internal/auth/hash?x=1"),
    ],
)
def test_build_service_url_replaces_path(base_url: str, expected: str) -> None:
    assert build_service_url(base_url, "/internal/auth/hash") == expected


@pytest.mark.parametrize(
    "base_url",
    ["", "auth:9004", "ftp://auth:21", "http://", "http://auth:notaport"],
)
def test_build_service_url_rejects_malformed_base(base_url: str) -> None:
    with pytest.raises(RequestConstructionError):
        build_service_url(base_url, "/internal/auth/hash")


def test_status_line_uses_reason_or_standard_phrase() -> None:
    assert status_line(404, "Not Found") == "404 Not Found"
    assert status_line(502, "") == "502 Bad Gateway"
    assert status_line(599, "") == "599"


def test_decode_error_body_placeholder_and_replacement() -> None:
    assert decode_error_body(None) == "[can not read body]"
    assert decode_error_body(b"plain") == "plain"
    assert decode_error_body(b"\xff") == "�"
