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
""" Contains utils for API Marshmallow schemas"""
from functools import wraps
from typing import Any, Callable, Dict, List, Type, Union

from flask import g, request
from marshmallow import RAISE, Schema, ValidationError, pre_load
from marshmallow.fields import Field

from offender_registry.common.str_field_utils import blank_to_none, snake_to_camel


class CamelCaseSchema(Schema):
    """
    Schema that uses camel-case for its external representation
    and snake-case for its internal representation.

    Values submitted blank for fields that accept None are loaded as None, so that
    an optional input left empty is never stored as an empty string.
    """

    def on_bind_field(self, field_name: str, field_obj: Field) -> None:
        field_obj.data_key = snake_to_camel(field_obj.data_key or field_name)

    @pre_load
    def normalize_blanks(self, data: Any, **_kwargs: Dict[str, Any]) -> Any:
        if not isinstance(data, dict):
            return data

        optional_keys = {
            field_obj.data_key
            for field_obj in self.load_fields.values()
            if field_obj.allow_none
        }
        return {
            key: blank_to_none(value) if key in optional_keys else value
            for key, value in data.items()
        }


def load_api_schema(
    api_schema: Type[Schema], source_data: Any
) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    if not isinstance(source_data, (dict, list)):
        raise ValidationError("Request data must be a JSON object or array.")

    return api_schema(unknown=RAISE).load(source_data)


def requires_api_schema(api_schema: Type[Schema], location: str = "json") -> Callable:
    """Loads the request body (or, with |location| "args", the query string) through
    |api_schema| into g.api_data before the route runs."""

    def inner(route: Callable) -> Callable:
        @wraps(route)
        def decorated(*args: List[Any], **kwargs: Dict[str, Any]) -> Any:
            source_data = (
                request.args.to_dict()
                if location == "args"
                else request.get_json(silent=True)
            )
            g.api_data = load_api_schema(api_schema, source_data)

            return route(*args, **kwargs)

        return decorated

    return inner
