from __future__ import annotations

from typing import Optional

from .gateway import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Process-local store; contents are lost at shutdown."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def load(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def save(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
