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
"""Base class for errors that the Flask server renders as a JSON response."""
from http import HTTPStatus
from typing import Any, Dict, List, Union

from flask import Response, jsonify


class FlaskException(Exception):
    """An error carrying a machine-readable |code|, a |description| for the client
    (either a message or a structure of per-field messages) and the HTTP status to
    respond with."""

    def __init__(
        self,
        code: str,
        description: Union[str, List[Any], Dict[Any, Any]],
        status_code: HTTPStatus,
    ) -> None:
        super().__init__(code)
        self.code = code
        self.description = description
        self.status_code = status_code

    def to_response(self) -> Response:
        response = jsonify({"code": self.code, "description": self.description})
        response.status_code = self.status_code
        return response
