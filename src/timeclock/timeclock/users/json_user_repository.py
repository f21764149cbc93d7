from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from ..common.logging_utils import get_logger
from ..core.exceptions import InvalidRecordError, StorageError
from .model import User
from .repository import UserRepository

logger = get_logger("users.json_repository")


def user_from_dict(data: Mapping[str, Any]) -> User:
    if not isinstance(data, Mapping):
        raise InvalidRecordError("User record must be an object", record=data)

    username = data.get("username")
    password_hash = data.get("password_hash")
    if not isinstance(username, str) or not username.strip():
        raise InvalidRecordError("User record without username", record=data)
    if not isinstance(password_hash, str) or not password_hash:
        raise InvalidRecordError(f"User {username!r} has no password_hash", record=data)

    return User(
        username=username.strip(),
        password_hash=password_hash,
        display_name=str(data.get("display_name") or username).strip(),
        is_admin=bool(data.get("is_admin", False)),
    )


class JsonUserRepository(UserRepository):
    """Users loaded once from a bundled JSON file; lookups are case-insensitive."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._users = self._load()

    def _load(self) -> dict[str, User]:
        try:
            records = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot load users from {self._path}") from e

        if not isinstance(records, list):
            raise StorageError(f"{self._path} must hold a list of users")

        users: dict[str, User] = {}
        for rec in records:
            try:
                user = user_from_dict(rec)
            except InvalidRecordError as e:
                logger.warning("Skipped user record: %s", e)
                continue
            users[user.username.lower()] = user

        logger.info("Loaded %d users from %s", len(users), self._path)
        return users

    def get_by_username(self, username: str) -> Optional[User]:
        if not username:
            return None
        return self._users.get(username.strip().lower())

    def list_all(self) -> Sequence[User]:
        return sorted(self._users.values(), key=lambda u: u.username.lower())
