from __future__ import annotations

import pytest

from attendance_tracker.container import build_store
from attendance_tracker.repository import EntityRepository
from attendance_tracker.storage.file_store import JsonFileStore
from attendance_tracker.storage.memory_store import InMemoryStore


def test_memory_store_roundtrip():
    store = InMemoryStore()
    assert store.load("k") is None

    store.save("k", b"[]")
    assert store.load("k") == b"[]"

    store.delete("k")
    store.delete("k")
    assert store.load("k") is None


def test_file_store_writes_one_file_per_key(tmp_path):
    store = JsonFileStore(tmp_path / "data")
    store.save("attendance-app-employees", b"[1]")

    assert (tmp_path / "data" / "attendance-app-employees.json").read_bytes() == b"[1]"
    assert store.load("attendance-app-employees") == b"[1]"
    assert store.load("missing") is None

    store.delete("attendance-app-employees")
    assert store.load("attendance-app-employees") is None


def test_file_store_rejects_path_like_keys(tmp_path):
    with pytest.raises(ValueError):
        JsonFileStore(tmp_path).save("../escape", b"x")


def test_repository_persists_through_file_store(tmp_path):
    repo = EntityRepository(JsonFileStore(tmp_path))
    emp = repo.add_employee(name="Ada", employee_id="E1", department="IT", position="Eng", join_date="2024-01-01")
    repo.add_or_update_attendance(employee_id=emp.id, date="2024-03-01", status="wfh")

    reopened = EntityRepository(JsonFileStore(tmp_path))

    assert reopened.employees == repo.employees
    assert reopened.attendance_records == repo.attendance_records


def test_build_store_selects_backend(tmp_path):
    assert isinstance(build_store(backend="memory"), InMemoryStore)
    assert isinstance(build_store(backend="file", data_dir=str(tmp_path)), JsonFileStore)
    with pytest.raises(ValueError):
        build_store(backend="redis")


class FakeCursor:
    def __init__(self, table: dict):
        self._table = table
        self._row = None

    def execute(self, sql: str, params: tuple) -> None:
        verb = sql.strip().split()[0].upper()
        if verb == "SELECT":
            value = self._table.get(params[0])
            self._row = None if value is None else {"value": value}
        elif verb == "INSERT":
            self._table[params[0]] = params[1]
        elif verb == "DELETE":
            self._table.pop(params[0], None)

    def fetchone(self):
        return self._row

    def close(self) -> None:
        pass


class FakeConnection:
    def __init__(self, table: dict):
        self._table = table
        self.commits = 0

    def cursor(self, dictionary: bool = False):
        return FakeCursor(self._table)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        pass

    def close(self) -> None:
        pass


class FakeConnectionFactory:
    def __init__(self):
        self.table: dict = {}

    def connect(self):
        return FakeConnection(self.table)


def test_mysql_store_roundtrip_with_fake_connection():
    from attendance_tracker.storage.mysql_store import MySQLKeyValueStore

    factory = FakeConnectionFactory()
    store = MySQLKeyValueStore(factory)

    assert store.load("k") is None
    store.save("k", b'{"a": 1}')
    assert store.load("k") == b'{"a": 1}'

    factory.table["s"] = "[]"
    assert store.load("s") == b"[]"

    store.delete("k")
    assert store.load("k") is None


def test_bootstrap_creates_database_then_table(monkeypatch):
    import mysql.connector

    from attendance_tracker.database import bootstrap

    calls = []
    statements = []

    class RecordingCursor(FakeCursor):
        def execute(self, sql: str, params: tuple = ()) -> None:
            statements.append(" ".join(sql.split()))

        def fetchall(self):
            return [("kv_store",)]

    class RecordingConnection(FakeConnection):
        def cursor(self, dictionary: bool = False):
            return RecordingCursor(self._table)

    def fake_connect(**options):
        calls.append(options)
        return RecordingConnection({})

    monkeypatch.setattr(mysql.connector, "connect", fake_connect)
    db_config = {"host": "db", "port": "3307", "user": "u", "password": "p", "database": "attend"}

    bootstrap.ensure_database(db_config)
    tables = bootstrap.list_tables(db_config)

    assert "database" not in calls[0]
    assert calls[1]["database"] == "attend"
    assert calls[1]["port"] == 3307
    assert statements[0].startswith("CREATE DATABASE IF NOT EXISTS `attend`")
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS kv_store")
    assert tables == ["kv_store"]
