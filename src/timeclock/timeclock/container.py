from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.enums import StorageBackend
from .core.exceptions import ValidationError
from .database.bootstrap import ensure_schema
from .database.connection import DatabaseConnection, DBConfig
from .payroll.service import HoursReportService
from .punches.json_punch_repository import JsonPunchRepository
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchService
from .users.json_user_repository import JsonUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    punches_repo: PunchRepository

    auth_service: AuthService
    punch_service: PunchService
    hours_report_service: HoursReportService


def build_services(*, users_repo: UserRepository, punches_repo: PunchRepository) -> Container:
    punch_service = PunchService(punches_repo)
    return Container(
        users_repo=users_repo,
        punches_repo=punches_repo,
        auth_service=AuthService(users_repo),
        punch_service=punch_service,
        hours_report_service=HoursReportService(punch_service),
    )


def build_container(
    *,
    users_file: str | Path,
    storage: str = StorageBackend.JSON.value,
    data_dir: Optional[str | Path] = None,
    db_config: Optional[dict] = None,
    auto_init_db: bool = False,
) -> Container:
    try:
        backend = StorageBackend(str(storage).lower())
    except ValueError:
        raise ValidationError(f"Unknown punch storage: {storage!r}")

    if backend == StorageBackend.MYSQL:
        if not db_config:
            raise ValidationError("DB_CONFIG is required for mysql storage")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        if auto_init_db:
            ensure_schema(conn)
        punches_repo: PunchRepository = MySQLPunchRepository(conn)
    else:
        if not data_dir:
            raise ValidationError("DATA_DIR is required for json storage")
        punches_repo = JsonPunchRepository(data_dir)

    return build_services(users_repo=JsonUserRepository(users_file), punches_repo=punches_repo)
