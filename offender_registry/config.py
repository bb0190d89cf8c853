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
"""Flask configs for different environments."""
import os
from typing import Optional

import attr

from offender_registry.dashboard.authorization import (
    Authenticator,
    UserFileAuthenticator,
)
from offender_registry.utils.environment import in_development, in_test

DEFAULT_DB_URL = "sqlite:///offender_registry.db"

# Only ever used when running locally or under test.
_DEVELOPMENT_SECRET_KEY = "offender-registry-development-key"  # nosec


@attr.define
class Config:
    """Config class builds database and authentication objects for the dashboard"""

    DB_URL: str = attr.field()
    SECRET_KEY: str = attr.field()
    USERS_FILE: Optional[str] = attr.field()
    AUTHENTICATOR: Authenticator = attr.field()
    SENTRY_DSN: Optional[str] = attr.field()
    # Indicates whether CSRF protection is enabled for the whole app. Should be set to False for tests.
    WTF_CSRF_ENABLED: bool = True
    # Should be set to False for tests.
    RATELIMIT_ENABLED: bool = True

    @DB_URL.default
    def _db_url_factory(self) -> str:
        return os.environ.get("DATABASE_URL", DEFAULT_DB_URL)

    @SECRET_KEY.default
    def _secret_key_factory(self) -> str:
        secret_key = os.environ.get("SECRET_KEY")
        if secret_key:
            return secret_key
        if in_development() or in_test():
            return _DEVELOPMENT_SECRET_KEY
        raise ValueError("SECRET_KEY must be set outside of development")

    @USERS_FILE.default
    def _users_file_factory(self) -> Optional[str]:
        return os.environ.get("USERS_FILE")

    @AUTHENTICATOR.default
    def _authenticator_factory(self) -> Authenticator:
        return UserFileAuthenticator(self.USERS_FILE)

    @SENTRY_DSN.default
    def _sentry_dsn_factory(self) -> Optional[str]:
        return os.environ.get("SENTRY_DSN")
