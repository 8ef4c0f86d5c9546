"""Backup the SQLite database.

Note: Uses SQLite's online backup API, so the kiosk can keep running while
the copy is taken.
"""

from __future__ import annotations

import importlib
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_path = Path(settings.DATABASE_PATH)
    if not db_path.exists():
        raise SystemExit(f"Database file not found: {db_path}")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{db_path.stem}_{ts}.sqlite"

    src = sqlite3.connect(str(db_path))
    dst = sqlite3.connect(str(out_file))
    try:
        src.backup(dst)
    finally:
        dst.close()
        src.close()
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
