from __future__ import annotations

import json
from dataclasses import dataclass

import pytest

from manage_service.application.dto.set_password_models import SetPasswordCommand
from manage_service.domain.deadline import Deadline
from manage_service.infrastructure.http.manage_client import ManageApiClient, normalize_address
from manage_service.infrastructure.http.transport import HttpResponse, UpstreamStatusError


@dataclass
class _QueuedTransport:
    responses: list[HttpResponse]

    def __post_init__(self) -> None:
        self.calls: list[tuple[str, bytes | None]] = []

    async def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        timeout_seconds: float,
    ) -> HttpResponse:
        _ = (method, headers, timeout_seconds)
        self.calls.append((url, body))
        return self.responses.pop(0)


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("localhost:9008", "http://localhost:9008"),
        (" manage:9008 ", "http://manage:9008"),
        ("https://manage.example.org", "https://manage.example.org"),
    ],
)
def test_normalize_address(address: str, expected: str) -> None:
    assert normalize_address(address) == expected


@pytest.mark.asyncio
async def test_set_password_posts_command_to_manage_server() -> None:
    transport = _QueuedTransport(
        responses=[HttpResponse(status_code=200, reason="OK", body_bytes=b"{}")]
    )
    client = ManageApiClient(address="manage:9008", transport=transport)

    await client.set_password(
        SetPasswordCommand(user_id=3, password="pw"),
        deadline=Deadline.after(5.0),
    )

    url, body = transport.calls[0]
    assert url == "http://manage:9008/internal/manage/set_password"
    assert json.loads((body or b"").decode("utf-8")) == {"user_id": 3, "password": "pw"}


@pytest.mark.asyncio
async def test_set_password_surfaces_server_failure_detail() -> None:
    transport = _QueuedTransport(
        responses=[
            HttpResponse(
                status_code=502,
                reason="Bad Gateway",
                body_bytes=b'{"detail":"hash password: boom"}',
            )
        ]
    )
    client = ManageApiClient(address="manage:9008", transport=transport)

    with pytest.raises(UpstreamStatusError) as exc_info:
        await client.set_password(
            SetPasswordCommand(user_id=3, password="pw"),
            deadline=Deadline.after(5.0),
        )

    assert "hash password: boom" in str(exc_info.value)
