"""Port for datastore write events touching the user password field."""

from __future__ import annotations

from typing import Protocol

from manage_service.domain.deadline import Deadline


class DatastoreWriterPort(Protocol):
    """Datastore writer contract."""

    async def write_password_field(
        self,
        user_id: int,
        password_hash: str,
        *,
        deadline: Deadline,
    ) -> None:
        """Persist hash as the `password` field of `user/<user_id>`."""
