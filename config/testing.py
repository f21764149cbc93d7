import os
import tempfile

from config import BASE_DIR

SECRET_KEY = "test-secret"

PUNCH_STORAGE = "json"
DATA_DIR = os.getenv("DATA_DIR", tempfile.mkdtemp(prefix="timeclock-test-"))
USERS_FILE = os.getenv("USERS_FILE", str(BASE_DIR / "data" / "users.json"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
