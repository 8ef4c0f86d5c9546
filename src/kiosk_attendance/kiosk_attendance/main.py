from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_POLL_INTERVAL_SECONDS
from .database.bootstrap import apply_schema, list_tables
from .kiosk.controller import register as register_kiosk

logger = logging.getLogger(__name__)

_SETTING_NAMES = (
    "DATABASE_PATH",
    "LOCAL_STORE_PATH",
    "DATA_MODE",
    "API_BASE_URL",
    "API_TIMEOUT_SECONDS",
    "POLL_INTERVAL_SECONDS",
    "AUTO_INIT_DB",
    "LOG_LEVEL",
)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    root = Path(__file__).resolve().parents[3]
    app = Flask(__name__, template_folder=str(root / "templates"), static_folder=str(root / "static"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    for name in _SETTING_NAMES:
        if hasattr(settings, name):
            app.config[name] = getattr(settings, name)
    app.config.setdefault("POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS)

    logging.basicConfig(
        level=str(app.config.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        container = build_container(app_config=app.config)

    if bool(app.config.get("AUTO_INIT_DB", False)):
        apply_schema(container.conn)
        logger.info("Schema ready at %s (tables=%d)", container.conn.path, len(list_tables(container.conn)))

    logger.info("Kiosk data mode: %s", container.data_mode.value)
    app.extensions["kiosk_container"] = container

    register_attendance(app, container)
    register_kiosk(app, container)

    return app
