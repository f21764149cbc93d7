from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..common.logging_utils import get_logger
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import UserRepository

logger = get_logger("users.service")


@dataclass(frozen=True)
class SessionUser:
    """Explicit session context passed to every service call.

    This is also what we store into the Flask session after login.
    """

    username: str
    display_name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "display_name": self.display_name,
            "role": self.role.value,
            "is_admin": self.is_admin,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionUser":
        return cls(
            username=str(data["username"]),
            display_name=str(data.get("display_name") or data["username"]),
            role=Role(data.get("role", Role.USER.value)),
        )


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        try:
            username = require_non_empty(username, "Username")
        except ValidationError:
            raise AuthenticationError("Invalid username or password")

        user = self._users.get_by_username(username)
        if not user:
            logger.info("Login failed for unknown user %r", username)
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Login failed for %r", user.username)
            raise AuthenticationError("Invalid username or password")

        return SessionUser(username=user.username, display_name=user.display_name, role=user.role)
