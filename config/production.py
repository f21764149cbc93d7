import os

from config import BASE_DIR

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

PUNCH_STORAGE = os.getenv("PUNCH_STORAGE", "json")
DATA_DIR = os.getenv("DATA_DIR", str(BASE_DIR / "var" / "punches"))
USERS_FILE = os.getenv("USERS_FILE", str(BASE_DIR / "data" / "users.json"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
