import os
import tempfile

SECRET_KEY = "test-secret"

DATABASE_PATH = os.getenv("DATABASE_PATH", os.path.join(tempfile.gettempdir(), "kiosk_attendance_test.sqlite"))
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", os.path.join(tempfile.gettempdir(), "kiosk_attendance_test.json"))
DATA_MODE = "local"
API_BASE_URL = ""
API_TIMEOUT_SECONDS = 2.0
POLL_INTERVAL_SECONDS = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
