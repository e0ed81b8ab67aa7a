from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "attendance_tracker"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from attendance_tracker.database.bootstrap import ensure_database, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    if getattr(settings, "STORAGE_BACKEND", "file") != "mysql":
        raise SystemExit("STORAGE_BACKEND is not 'mysql'; nothing to initialize.")

    db_config = dict(settings.DB_CONFIG)
    ensure_database(db_config)
    tables = list_tables(db_config)
    print(
        "OK: key/value table ready -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
