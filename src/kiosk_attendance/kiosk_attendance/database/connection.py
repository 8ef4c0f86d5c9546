from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


@dataclass
class DBConfig:
    path: str
    timeout: float = 5.0


class DatabaseConnection:
    """SQLite connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Transactions are opened explicitly by ``db_cursor``, so connections run in
    autocommit mode.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def path(self) -> str:
        return self._config.path

    def connect(self) -> sqlite3.Connection:
        if self._config.path != ":memory:":
            Path(self._config.path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._config.path, timeout=self._config.timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        # SQLite LOWER() only folds ASCII; match Python str.lower used by the local store.
        conn.create_function("unicode_lower", 1, _unicode_lower, deterministic=True)
        return conn
