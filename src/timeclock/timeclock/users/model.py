from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a user from the bundled directory.

    Note: Plain data object; loading lives in the repository.
    """

    username: str
    password_hash: str
    display_name: str
    is_admin: bool = False

    @property
    def role(self) -> Role:
        return Role.ADMIN if self.is_admin else Role.USER
