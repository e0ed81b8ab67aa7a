from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Persistence gateway used by the repository.

    Values are opaque serialized blobs. A missing key loads as None, which the
    repository reads as "empty collection" or "default settings".
    """

    def load(self, key: str) -> Optional[bytes]:
        raise NotImplementedError

    def save(self, key: str, value: bytes) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
