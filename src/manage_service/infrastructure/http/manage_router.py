"""FastAPI router exposing administrative manage operations."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from manage_service.application.dto.set_password_models import (
    SetPasswordCommand,
    SetPasswordResponse,
)
from manage_service.application.services.set_password_service import (
    SetPasswordError,
    SetPasswordService,
)
from manage_service.domain.deadline import Deadline

SET_PASSWORD_PATH = "/internal/manage/set_password"

logger = logging.getLogger(__name__)


def build_manage_router(
    *,
    set_password_service: SetPasswordService,
    timeout_seconds: float,
) -> APIRouter:
    """Build router exposing the set-password operation."""

    router = APIRouter(tags=["manage"])

    @router.post(SET_PASSWORD_PATH, response_model=SetPasswordResponse)
    async def set_password(payload: SetPasswordCommand) -> SetPasswordResponse:
        deadline = Deadline.after(timeout_seconds)
        try:
            await set_password_service.set_password(payload, deadline=deadline)
        except SetPasswordError as error:
            logger.warning(
                "set_password_failed user_id=%s step=%s error=%s",
                payload.user_id,
                error.step,
                error,
            )
            raise HTTPException(status_code=502, detail=str(error)) from error
        return SetPasswordResponse()

    return router
