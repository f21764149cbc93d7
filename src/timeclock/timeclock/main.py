from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_utils import configure_logging, get_logger
from .container import Container, build_container
from .core.enums import StorageBackend
from .payroll.controller import register as register_hours
from .punches.controller import register as register_punches
from .users.controller import register as register_users

logger = get_logger("main")


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    storage = str(getattr(settings, "PUNCH_STORAGE", StorageBackend.JSON.value))
    db_config = getattr(settings, "DB_CONFIG", None)

    if container is None:
        if storage == StorageBackend.MYSQL.value:
            logger.info(
                "settings=%s storage=mysql db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )
        else:
            logger.info("settings=%s storage=%s data_dir=%s", settings_module, storage, getattr(settings, "DATA_DIR", None))

        container = build_container(
            users_file=getattr(settings, "USERS_FILE"),
            storage=storage,
            data_dir=getattr(settings, "DATA_DIR", None),
            db_config=db_config,
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        )

    app.extensions["timeclock"] = container

    register_users(app, container)
    register_punches(app, container)
    register_hours(app, container)

    return app
