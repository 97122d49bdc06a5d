"""Port for delegated password hashing."""

from __future__ import annotations

from typing import Protocol

from manage_service.domain.deadline import Deadline


class PasswordHashPort(Protocol):
    """Password hashing contract fulfilled by the authentication service."""

    async def hash(self, plaintext: str, *, deadline: Deadline) -> str:
        """Return the stored-credential hash for plaintext."""
