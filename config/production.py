import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATABASE_PATH = Config.DATABASE_PATH
LOCAL_STORE_PATH = Config.LOCAL_STORE_PATH
DATA_MODE = Config.DATA_MODE
API_BASE_URL = Config.API_BASE_URL
API_TIMEOUT_SECONDS = Config.API_TIMEOUT_SECONDS
POLL_INTERVAL_SECONDS = Config.POLL_INTERVAL_SECONDS

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = Config.AUTO_INIT_DB
