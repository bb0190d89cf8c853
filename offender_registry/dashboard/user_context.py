# Offender Registry - a records dashboard for persons, offenders and crimes
# Copyright (C) 2025 Offender Registry Authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# =============================================================================
"""A UserContext for all of the operations of the dashboard"""
from typing import Any, Dict, MutableMapping, Optional

import attr

from offender_registry.dashboard.authorization import AuthenticatedUser, UserRole

SESSION_USER_KEY = "user"


@attr.s(frozen=True)
class UserContext:
    """The signed-in user on whose behalf an operation runs. The role is captured when
    the user logs in and is not re-read until they log in again."""

    user_id: str = attr.ib()
    name: str = attr.ib()
    role: UserRole = attr.ib(converter=UserRole)

    @classmethod
    def for_user(cls, user: AuthenticatedUser) -> "UserContext":
        return UserContext(user_id=user.user_id, name=user.name, role=user.role)

    @classmethod
    def from_session(
        cls, session: MutableMapping[str, Any]
    ) -> Optional["UserContext"]:
        stored = session.get(SESSION_USER_KEY)
        if not stored:
            return None
        try:
            return UserContext(
                user_id=stored["id"], name=stored["name"], role=stored["role"]
            )
        except (KeyError, ValueError):
            return None

    def to_session_json(self) -> Dict[str, str]:
        return {"id": self.user_id, "name": self.name, "role": self.role.value}

    @property
    def can_write(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_json(self) -> Dict[str, Any]:
        return {**self.to_session_json(), "canWrite": self.can_write}
