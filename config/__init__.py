import os
from pathlib import Path

# Repository root; bundled data lives under <root>/data.
BASE_DIR = Path(__file__).resolve().parents[1]


def get_settings_module() -> str:
    # Environment comes from APP_ENV, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"
