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
"""Implements the application-level authorization blueprint. """
import logging

from flask import Blueprint, Response, g, jsonify, session
from flask_wtf.csrf import generate_csrf

from offender_registry.dashboard.api_schemas import LogInSchema
from offender_registry.dashboard.api_schemas_utils import requires_api_schema
from offender_registry.dashboard.authorization import Authenticator
from offender_registry.dashboard.exceptions import DashboardAuthorizationError
from offender_registry.dashboard.user_context import SESSION_USER_KEY, UserContext


def create_auth_blueprint(authenticator: Authenticator) -> Blueprint:
    """Creates the log in / log out routes, checking credentials with |authenticator|."""
    auth = Blueprint("auth", __name__)

    @auth.route("/bootstrap")
    def _bootstrap() -> Response:
        user_context = UserContext.from_session(session)
        return jsonify(
            {
                "csrf": generate_csrf(),
                "user": user_context.to_json() if user_context else None,
            }
        )

    @auth.route("/log_in", methods=["POST"])
    @requires_api_schema(LogInSchema)
    def _log_in() -> Response:
        user = authenticator.authenticate(
            g.api_data["username"], g.api_data["password"]
        )
        if user is None:
            raise DashboardAuthorizationError(
                code="invalid_credentials",
                description="The username or password is incorrect.",
            )

        # The role is captured here and kept until the next log in.
        user_context = UserContext.for_user(user)
        session.clear()
        session[SESSION_USER_KEY] = user_context.to_session_json()
        logging.info(
            "User [%s] logged in with role [%s]",
            user_context.user_id,
            user_context.role.value,
        )
        return jsonify({"user": user_context.to_json()})

    @auth.route("/log_out", methods=["POST"])
    def _log_out() -> Response:
        # Deletes the session cookie and corresponding data
        session.clear()
        return jsonify({"status": "ok"})

    return auth
