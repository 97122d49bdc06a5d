"""Fully-qualified datastore identifiers (`<collection>/<id>`)."""

from __future__ import annotations

from typing import Final

USER_COLLECTION: Final = "user"


def build_fqid(collection: str, entity_id: int) -> str:
    """Compose one fully-qualified identifier for a datastore entity."""

    if not collection or "/" in collection:
        raise ValueError(f"invalid collection name: {collection!r}")
    if entity_id < 0:
        raise ValueError(f"entity id must be non-negative, got {entity_id}")
    return f"{collection}/{entity_id}"


def user_fqid(user_id: int) -> str:
    return build_fqid(USER_COLLECTION, user_id)
