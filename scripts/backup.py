"""Backup the dataset as a portable JSON snapshot.

The file can be restored with `POST /api/import/snapshot`.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "attendance_tracker"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from attendance_tracker.container import build_container_from_settings


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_export_{ts}.json"

    snapshot = container.transfer_service.export_snapshot()
    out_file.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    print(
        f"OK: Backup created: {out_file} "
        f"({len(snapshot['employees'])} employees, {len(snapshot['attendanceRecords'])} records)"
    )


if __name__ == "__main__":
    main()
