"""Client for the manage-api HTTP surface used by the command line."""

from __future__ import annotations

from manage_service.application.dto.set_password_models import SetPasswordCommand
from manage_service.domain.deadline import Deadline
from manage_service.infrastructure.http.manage_router import SET_PASSWORD_PATH
from manage_service.infrastructure.http.transport import (
    HttpTransportPort,
    UrllibHttpTransport,
    build_service_url,
    post_json,
)

_SERVICE_NAME = "manage service"


def normalize_address(address: str) -> str:
    """Turn `host:port` into an http base URL; full URLs pass through."""

    stripped = address.strip()
    if "://" in stripped:
        return stripped
    return f"http://{stripped}"


class ManageApiClient:
    """Single-attempt client for the manage-api set-password endpoint."""

    def __init__(self, *, address: str, transport: HttpTransportPort | None = None) -> None:
        self._base_url = normalize_address(address)
        self._transport = transport or UrllibHttpTransport()

    async def set_password(self, command: SetPasswordCommand, *, deadline: Deadline) -> None:
        await post_json(
            transport=self._transport,
            service=_SERVICE_NAME,
            url=build_service_url(self._base_url, SET_PASSWORD_PATH),
            payload=command,
            deadline=deadline,
        )
