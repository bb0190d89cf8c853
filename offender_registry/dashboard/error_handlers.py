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
"""Renders every error raised while serving a request as a {code, description} body."""
import logging
from http import HTTPStatus

from flask import Flask, Response
from flask_wtf.csrf import CSRFError
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from offender_registry.dashboard.exceptions import (
    DashboardAuthorizationError,
    DashboardStoreException,
)
from offender_registry.dashboard.records.interface import ReadOnlyUserError
from offender_registry.persistence.database.sqlalchemy_flask_utils import (
    current_session,
)
from offender_registry.utils.flask_exception import FlaskException


def handle_flask_exception(ex: FlaskException) -> Response:
    return ex.to_response()


def handle_validation_error(ex: ValidationError) -> Response:
    return handle_flask_exception(
        FlaskException(
            code="bad_request",
            description=ex.messages,
            status_code=HTTPStatus.BAD_REQUEST,
        )
    )


def handle_csrf_error(error: CSRFError) -> Response:
    return handle_flask_exception(
        FlaskException(
            code="invalid_csrf_token",
            description=f"The provided X-CSRF-Token header could not be validated ({error.description})",
            status_code=HTTPStatus.BAD_REQUEST,
        )
    )


def handle_read_only_user_error(error: ReadOnlyUserError) -> Response:
    logging.warning("Blocked write: %s", error)
    return handle_flask_exception(
        DashboardAuthorizationError(
            code="insufficient_permissions",
            description="You do not have sufficient permissions to perform this action.",
            status_code=HTTPStatus.FORBIDDEN,
        )
    )


def handle_store_error(error: SQLAlchemyError) -> Response:
    logging.error("Record store error: %s", error, exc_info=True)
    current_session.rollback()
    return handle_flask_exception(DashboardStoreException())


def register_error_handlers(app: Flask) -> None:
    """Registers error handlers"""
    app.errorhandler(CSRFError)(handle_csrf_error)
    app.errorhandler(ValidationError)(handle_validation_error)
    app.errorhandler(ReadOnlyUserError)(handle_read_only_user_error)
    app.errorhandler(SQLAlchemyError)(handle_store_error)
    app.errorhandler(FlaskException)(handle_flask_exception)
