"""ID generation for records created by this service."""

from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Generate a new opaque record identifier (UUID v4 hex)."""
    return uuid4().hex
