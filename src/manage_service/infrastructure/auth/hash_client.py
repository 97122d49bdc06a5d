"""Authentication service adapter turning plaintext passwords into stored hashes."""

from __future__ import annotations

import logging
from typing import Final

from pydantic import ValidationError

from manage_service.application.dto.set_password_models import HashRequest, HashResponse
from manage_service.domain.deadline import Deadline
from manage_service.infrastructure.http.transport import (
    DecodeError,
    HttpTransportPort,
    UrllibHttpTransport,
    build_service_url,
    decode_json_object,
    post_json,
)

AUTH_HASH_PATH: Final = "/internal/auth/hash"
_SERVICE_NAME: Final = "auth service"

logger = logging.getLogger(__name__)


class AuthHashClient:
    """Single-attempt client for the auth service `/internal/auth/hash` endpoint."""

    def __init__(
        self,
        *,
        auth_url: str,
        transport: HttpTransportPort | None = None,
    ) -> None:
        self._auth_url = auth_url
        self._transport = transport or UrllibHttpTransport()

    async def hash(self, plaintext: str, *, deadline: Deadline) -> str:
        """Return the hash the auth service computes for plaintext."""

        url = build_service_url(self._auth_url, AUTH_HASH_PATH)
        logger.debug("auth_hash_request url=%s", url)
        response = await post_json(
            transport=self._transport,
            service=_SERVICE_NAME,
            url=url,
            payload=HashRequest(to_hash=plaintext),
            deadline=deadline,
        )
        decoded = decode_json_object(response.body_bytes, service=_SERVICE_NAME)
        try:
            return HashResponse.model_validate(decoded).hash
        except ValidationError as error:
            raise DecodeError(
                f"decoding {_SERVICE_NAME} response: missing or invalid hash field"
            ) from error
