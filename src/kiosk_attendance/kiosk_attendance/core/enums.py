from __future__ import annotations

from enum import Enum


class DataMode(str, Enum):
    """Which backend the kiosk gateway talks to."""

    LOCAL = "local"
    API = "api"
