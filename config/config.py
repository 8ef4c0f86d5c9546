import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "kiosk-dev-secret"

    # Relational backend (single SQLite file).
    DATABASE_PATH = os.environ.get("DATABASE_PATH", os.path.join("instance", "database.sqlite"))

    # Kiosk gateway: DATA_MODE is 'local' or 'api'; unset means "api if API_BASE_URL else local".
    DATA_MODE = os.environ.get("DATA_MODE", "")
    API_BASE_URL = os.environ.get("API_BASE_URL", "")
    API_TIMEOUT_SECONDS = float(os.environ.get("API_TIMEOUT_SECONDS", "10"))
    LOCAL_STORE_PATH = os.environ.get("LOCAL_STORE_PATH", os.path.join("instance", "local_store.json"))

    POLL_INTERVAL_SECONDS = int(os.environ.get("POLL_INTERVAL_SECONDS", "5"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "1")))
