from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque system identifier for employees and attendance records."""
    return str(uuid.uuid4())
