from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


def db_config_from_dict(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "attendance_tracker")),
    )


class DatabaseConnection:
    """Opens a fresh mysql-connector connection for every store call.

    One shared instance per process; the key/value store only touches the database
    when a whole collection is loaded or written back.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        options = {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
        }
        # without a database: server-level session, used before CREATE DATABASE
        if with_database:
            options["database"] = self._config.database
        return mysql.connector.connect(**options)
