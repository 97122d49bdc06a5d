"""Pydantic models for set-password wire contracts."""

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

MAX_USER_ID: Final = 2**63 - 1


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class HashRequest(StrictModel):
    """Body sent to the auth service hash endpoint."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    to_hash: str = Field(alias="toHash")


class HashResponse(BaseModel):
    """Auth service hash response; extra fields are tolerated."""

    model_config = ConfigDict(extra="ignore", strict=True)

    hash: str = Field(min_length=1)


class WriteEvent(StrictModel):
    """One event of a datastore write request."""

    type: Literal["update"] = "update"
    fqid: str = Field(min_length=3)
    fields: dict[str, object]


class WriteRequest(StrictModel):
    """Datastore writer request envelope."""

    user_id: int = 0
    information: dict[str, object] = Field(default_factory=dict)
    locked_fields: dict[str, int] = Field(default_factory=dict)
    events: list[WriteEvent] = Field(min_length=1)


class SetPasswordCommand(StrictModel):
    """Inbound set-password operation payload."""

    user_id: int = Field(ge=0, le=MAX_USER_ID)
    password: str


class SetPasswordResponse(StrictModel):
    """Empty success result of the set-password operation."""
