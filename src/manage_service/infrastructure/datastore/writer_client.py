"""Datastore writer adapter emitting single-field update events."""

from __future__ import annotations

import logging
from typing import Final

from manage_service.application.dto.set_password_models import WriteEvent, WriteRequest
from manage_service.domain.deadline import Deadline
from manage_service.domain.fqid import user_fqid
from manage_service.infrastructure.http.transport import (
    HttpTransportPort,
    RequestConstructionError,
    UrllibHttpTransport,
    build_service_url,
    post_json,
)

DATASTORE_WRITE_PATH: Final = "/internal/datastore/writer/write"
_SERVICE_NAME: Final = "datastore writer service"

logger = logging.getLogger(__name__)


def build_password_write_request(*, user_id: int, password_hash: str) -> WriteRequest:
    """Build the write envelope updating the password field of one user."""

    return WriteRequest(
        events=[
            WriteEvent(
                type="update",
                fqid=user_fqid(user_id),
                fields={"password": password_hash},
            )
        ],
    )


class DatastoreWriterClient:
    """Single-attempt client for the datastore writer `write` endpoint."""

    def __init__(
        self,
        *,
        datastore_writer_url: str,
        transport: HttpTransportPort | None = None,
    ) -> None:
        self._datastore_writer_url = datastore_writer_url
        self._transport = transport or UrllibHttpTransport()

    async def write_password_field(
        self,
        user_id: int,
        password_hash: str,
        *,
        deadline: Deadline,
    ) -> None:
        """Write hash into the `password` field of `user/<user_id>`."""

        url = build_service_url(self._datastore_writer_url, DATASTORE_WRITE_PATH)
        try:
            payload = build_password_write_request(user_id=user_id, password_hash=password_hash)
        except ValueError as error:
            raise RequestConstructionError(f"building write request: {error}") from error

        logger.debug("datastore_write_request url=%s fqid=%s", url, payload.events[0].fqid)
        await post_json(
            transport=self._transport,
            service=_SERVICE_NAME,
            url=url,
            payload=payload,
            deadline=deadline,
        )
