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
"""Roles, and the swappable authenticator that vouches for a user's credentials."""
import abc
import json
import logging
from enum import Enum
from typing import Dict, Optional

import attr
from werkzeug.security import check_password_hash


class UserRole(Enum):
    """Identifies what a signed-in user may do."""

    # User can perform all read and write operations.
    ADMIN = "ADMIN"

    # User can perform read operations only.
    VIEWER = "VIEWER"


@attr.s(frozen=True)
class AuthenticatedUser:
    user_id: str = attr.ib()
    name: str = attr.ib()
    role: UserRole = attr.ib(converter=UserRole)


class Authenticator(abc.ABC):
    """Checks a username / password pair against some credential store."""

    @abc.abstractmethod
    def authenticate(self, username: str, password: str) -> Optional[AuthenticatedUser]:
        """Returns the user the credentials belong to, or None if they do not match."""


class UserFileAuthenticator(Authenticator):
    """Authenticates against a JSON file of users, of the form:

    {
        "jdoe": {"name": "Jane Doe", "role": "ADMIN", "password_hash": "scrypt:..."},
        ...
    }

    Hashes are produced by `python -m offender_registry.tools.hash_password`. The file
    is read lazily and cached, so a missing file only fails log-in attempts.
    """

    def __init__(self, users_file: Optional[str]) -> None:
        self.users_file = users_file
        self._users: Optional[Dict[str, Dict[str, str]]] = None

    @property
    def users(self) -> Dict[str, Dict[str, str]]:
        if self._users is None:
            if not self.users_file:
                logging.warning("No users file configured, every log-in will fail")
                self._users = {}
            else:
                with open(self.users_file, encoding="utf-8") as f:
                    self._users = json.load(f)
        return self._users

    def authenticate(self, username: str, password: str) -> Optional[AuthenticatedUser]:
        entry = self.users.get(username)
        if entry is None or not check_password_hash(entry["password_hash"], password):
            logging.info("Rejected log-in attempt for user [%s]", username)
            return None

        return AuthenticatedUser(
            user_id=username, name=entry.get("name", username), role=entry["role"]
        )
