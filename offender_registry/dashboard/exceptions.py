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
"""Contains the list of custom exceptions used by the dashboard."""
from http import HTTPStatus

from offender_registry.utils.flask_exception import FlaskException


class DashboardAuthorizationError(FlaskException):
    """Exception for when the request is not made on behalf of a signed-in user, or the
    user's role does not allow the attempted action."""

    def __init__(
        self, code: str, description: str, status_code: HTTPStatus = HTTPStatus.UNAUTHORIZED
    ) -> None:
        super().__init__(code, description, status_code)


class DashboardBadRequestException(FlaskException):
    """Exception for when the incoming request is improper in some way."""

    def __init__(self, code: str, description: str) -> None:
        super().__init__(code, description, HTTPStatus.BAD_REQUEST)


class DashboardNotFoundException(FlaskException):
    def __init__(self, description: str) -> None:
        super().__init__("not_found", description, HTTPStatus.NOT_FOUND)


class DashboardStoreException(FlaskException):
    """Exception for when the record store failed to complete a read or write."""

    def __init__(self) -> None:
        super().__init__(
            "store_error",
            "The record store could not complete the request.",
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
