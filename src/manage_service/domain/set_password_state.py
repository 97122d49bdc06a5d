"""Deterministic transition guards for the set-password state machine."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class SetPasswordState(StrEnum):
    """Lifecycle of one set-password invocation."""

    IDLE = "IDLE"
    HASHING = "HASHING"
    WRITING = "WRITING"
    DONE = "DONE"
    FAILED = "FAILED"


class InvalidSetPasswordTransitionError(ValueError):
    """Raised when an attempted set-password state transition is not allowed."""


_ALLOWED_TRANSITIONS: Final[dict[SetPasswordState, frozenset[SetPasswordState]]] = {
    SetPasswordState.IDLE: frozenset({SetPasswordState.HASHING}),
    SetPasswordState.HASHING: frozenset({SetPasswordState.WRITING, SetPasswordState.FAILED}),
    SetPasswordState.WRITING: frozenset({SetPasswordState.DONE, SetPasswordState.FAILED}),
    SetPasswordState.DONE: frozenset(),
    SetPasswordState.FAILED: frozenset(),
}


def can_transition(from_state: SetPasswordState, to_state: SetPasswordState) -> bool:
    """Return whether the transition is valid for the set-password state machine."""

    return to_state in _ALLOWED_TRANSITIONS[from_state]


def assert_transition(from_state: SetPasswordState, to_state: SetPasswordState) -> None:
    """Assert a transition is allowed, else raise deterministic domain error."""

    if not can_transition(from_state, to_state):
        raise InvalidSetPasswordTransitionError(
            f"Invalid set-password transition: {from_state.value} -> {to_state.value}"
        )
