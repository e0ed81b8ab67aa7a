from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_RECENT_LIMIT
from .reports.service import ReportService
from .repository import EntityRepository
from .storage.file_store import JsonFileStore
from .storage.gateway import KeyValueStore
from .storage.memory_store import InMemoryStore
from .transfer.service import TransferService


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    repository: EntityRepository

    report_service: ReportService
    transfer_service: TransferService


def build_store(*, backend: str, data_dir: Optional[str] = None, db_config: Optional[dict] = None) -> KeyValueStore:
    backend = (backend or "file").lower()
    if backend == "memory":
        return InMemoryStore()
    if backend == "file":
        return JsonFileStore(Path(data_dir or "data"))
    if backend == "mysql":
        # Imported lazily so the file/memory backends work without a MySQL driver configured.
        from .database.connection import DatabaseConnection, db_config_from_dict
        from .storage.mysql_store import MySQLKeyValueStore

        conn = DatabaseConnection.get_instance(db_config_from_dict(db_config or {}))
        return MySQLKeyValueStore(conn)
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_container(*, store: KeyValueStore, recent_limit: int = DEFAULT_RECENT_LIMIT) -> Container:
    repository = EntityRepository(store)

    report_service = ReportService(repository, recent_limit=recent_limit)
    transfer_service = TransferService(repository)

    return Container(
        store=store,
        repository=repository,
        report_service=report_service,
        transfer_service=transfer_service,
    )


def build_container_from_settings(settings) -> Container:
    store = build_store(
        backend=getattr(settings, "STORAGE_BACKEND", "file"),
        data_dir=getattr(settings, "DATA_DIR", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )
    return build_container(
        store=store,
        recent_limit=int(getattr(settings, "RECENT_ACTIVITY_LIMIT", DEFAULT_RECENT_LIMIT)),
    )
