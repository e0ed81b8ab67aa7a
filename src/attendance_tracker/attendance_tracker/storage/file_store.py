from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional

from .gateway import KeyValueStore

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9._-]+$")


class JsonFileStore(KeyValueStore):
    """One file per key under a data directory.

    Note: writes go to a temp file first and are then renamed over the target, so a
    reader never sees a half-written blob.
    """

    def __init__(self, data_dir: str | Path):
        self._dir = Path(data_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def load(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def save(self, key: str, value: bytes) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_bytes(value)
        os.replace(tmp, path)
        logger.debug("saved %s (%d bytes)", path, len(value))

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
            logger.debug("deleted %s", path)
