"""Example: using the service layer directly (no Flask).

Controllers are a thin layer; punching and hours live in the services.
"""

import importlib

from config import get_settings_module

from src.timeclock.timeclock.container import build_container
from src.timeclock.timeclock.core.enums import PunchKind


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        users_file=settings.USERS_FILE,
        storage=settings.PUNCH_STORAGE,
        data_dir=settings.DATA_DIR,
        db_config=settings.DB_CONFIG,
    )

    user = container.auth_service.authenticate("alice", "alice123")
    screen = container.punch_service.get_punch_screen(user)
    if screen.actions.can_clock_in:
        container.punch_service.record_punch(user, PunchKind.CLOCK_IN)

    report = container.hours_report_service.build_period_report(user)
    print(report.to_dict())


if __name__ == "__main__":
    main()
