"""Application service resetting one user's password via auth and datastore."""

from __future__ import annotations

import logging
from typing import Literal

from manage_service.application.dto.set_password_models import SetPasswordCommand
from manage_service.application.ports.datastore_writer_port import DatastoreWriterPort
from manage_service.application.ports.password_hash_port import PasswordHashPort
from manage_service.domain.deadline import Deadline
from manage_service.domain.set_password_state import SetPasswordState, assert_transition

logger = logging.getLogger(__name__)

SetPasswordStep = Literal["hash password", "set password"]


class SetPasswordError(RuntimeError):
    """Raised when one step of the set-password pipeline fails.

    The adapter error that caused the failure is chained as `__cause__`.
    """

    def __init__(self, *, step: SetPasswordStep, user_id: int, cause: Exception) -> None:
        super().__init__(f"{step}: {cause}")
        self.step = step
        self.user_id = user_id


class SetPasswordService:
    """Hash a plaintext password and commit the hash to the user entity."""

    def __init__(
        self,
        *,
        password_hasher: PasswordHashPort,
        datastore_writer: DatastoreWriterPort,
    ) -> None:
        self._password_hasher = password_hasher
        self._datastore_writer = datastore_writer

    async def set_password(self, command: SetPasswordCommand, *, deadline: Deadline) -> None:
        """Run hash then write under one shared deadline, failing fast on either step."""

        state = self._advance(SetPasswordState.IDLE, SetPasswordState.HASHING, command)
        try:
            password_hash = await self._password_hasher.hash(command.password, deadline=deadline)
            if not password_hash:
                raise ValueError("empty hash returned")
        except Exception as error:
            self._advance(state, SetPasswordState.FAILED, command)
            raise SetPasswordError(
                step="hash password",
                user_id=command.user_id,
                cause=error,
            ) from error

        state = self._advance(state, SetPasswordState.WRITING, command)
        try:
            await self._datastore_writer.write_password_field(
                command.user_id,
                password_hash,
                deadline=deadline,
            )
        except Exception as error:
            self._advance(state, SetPasswordState.FAILED, command)
            raise SetPasswordError(
                step="set password",
                user_id=command.user_id,
                cause=error,
            ) from error

        self._advance(state, SetPasswordState.DONE, command)

    def _advance(
        self,
        from_state: SetPasswordState,
        to_state: SetPasswordState,
        command: SetPasswordCommand,
    ) -> SetPasswordState:
        assert_transition(from_state, to_state)
        log = logger.warning if to_state is SetPasswordState.FAILED else logger.info
        log("set_password_state user_id=%s state=%s", command.user_id, to_state.value)
        return to_state
