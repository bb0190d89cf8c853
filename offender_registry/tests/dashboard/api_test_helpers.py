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
""" Test helpers for the dashboard API """
import contextlib
from typing import Dict, Generator, Optional

import attr
from flask import Flask
from flask.testing import FlaskClient

from offender_registry.config import Config
from offender_registry.dashboard.authorization import (
    AuthenticatedUser,
    Authenticator,
    UserRole,
)
from offender_registry.dashboard.user_context import SESSION_USER_KEY, UserContext
from offender_registry.persistence.database.sqlalchemy_engine_manager import (
    SQLAlchemyEngineManager,
)
from offender_registry.persistence.database.sqlalchemy_flask_utils import (
    current_session,
)
from offender_registry.server import create_app
from offender_registry.tests.dashboard.dashboard_helpers import IN_MEMORY_DB_URL


class FakeAuthenticator(Authenticator):
    """Accepts the password "password" for every user it knows about."""

    def __init__(self, roles: Dict[str, UserRole]) -> None:
        self.roles = roles

    def authenticate(self, username: str, password: str) -> Optional[AuthenticatedUser]:
        if username not in self.roles or password != "password":
            return None
        return AuthenticatedUser(
            user_id=username, name=username.title(), role=self.roles[username]
        )


def create_test_app(authenticator: Optional[Authenticator] = None) -> Flask:
    """Creates the app against a fresh in-memory database with every table created."""
    app = create_app(
        Config(
            DB_URL=IN_MEMORY_DB_URL,
            SECRET_KEY="NOT-A-SECRET",
            USERS_FILE=None,
            AUTHENTICATOR=authenticator or FakeAuthenticator({}),
            SENTRY_DSN=None,
            WTF_CSRF_ENABLED=False,
            RATELIMIT_ENABLED=False,
        )
    )
    with app.app_context():
        SQLAlchemyEngineManager.create_all_tables(current_session.get_bind())
    return app


@attr.s
class DashboardTestHelpers:
    """Helpers for our dashboard API tests"""

    test_app: Flask = attr.ib()

    def __attrs_post_init__(self) -> None:
        self.test_client = self.test_app.test_client()

    @contextlib.contextmanager
    def using_user(self, user_context: UserContext) -> Generator[FlaskClient, None, None]:
        with self.test_client.session_transaction() as sess:
            sess[SESSION_USER_KEY] = user_context.to_session_json()

        yield self.test_client

        with self.test_client.session_transaction() as sess:
            sess.clear()
