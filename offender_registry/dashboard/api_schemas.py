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
"""Marshmallow schemas validating everything submitted to the dashboard API.

Every rule is checked independently and all failures are reported together, keyed
by the camel-case name of the field they concern. Rules spanning two dates attach
their error to the later field of the pair and only apply when both are present.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from marshmallow import ValidationError, fields, post_load, validates_schema
from marshmallow.validate import Range

from offender_registry.common.constants.facilities import (
    MAX_FACILITY_ID,
    MIN_FACILITY_ID,
)
from offender_registry.common.str_field_utils import normalize_name, snake_to_camel
from offender_registry.dashboard.api_schemas_utils import CamelCaseSchema
from offender_registry.dashboard.composition import (
    ClassificationFilter,
    PersonSortField,
    SortDirection,
)

MIN_NAME_LENGTH = 2

NAME_FIELDS = ("first_name", "paternal_surname", "maternal_surname")


def name_length(data: str) -> None:
    if len(normalize_name(data) or "") < MIN_NAME_LENGTH:
        raise ValidationError(f"Must be at least {MIN_NAME_LENGTH} characters long.")


def non_empty_string(data: str) -> None:
    if not data or not data.strip():
        raise ValidationError("Field must be non-empty.")


def date_order_errors(
    data: Dict[str, Any], earlier: str, later: str, allow_equal: bool = False
) -> Dict[str, List[str]]:
    """Returns the error for |later| if it does not come after |earlier|, or nothing
    if either date is absent."""
    first: Optional[date] = data.get(earlier)
    second: Optional[date] = data.get(later)
    if first is None or second is None:
        return {}
    if second > first or (allow_equal and second == first):
        return {}

    comparison = "on or after" if allow_equal else "after"
    return {
        snake_to_camel(later): [f"Must be {comparison} {snake_to_camel(earlier)}."]
    }


class PersonSchema(CamelCaseSchema):
    first_name = fields.Str(required=True, validate=name_length)
    paternal_surname = fields.Str(required=True, validate=name_length)
    maternal_surname = fields.Str(required=True, validate=name_length)
    birth_date = fields.Date(required=True)
    end_date = fields.Date(allow_none=True)

    @validates_schema(skip_on_field_errors=False)
    def validate_end_date(self, data: Dict[str, Any], **_kwargs: Any) -> None:
        errors = date_order_errors(data, "birth_date", "end_date")
        if errors:
            raise ValidationError(errors)

    @post_load
    def normalize_names(self, data: Dict[str, Any], **_kwargs: Any) -> Dict[str, Any]:
        for name_field in NAME_FIELDS:
            if name_field in data:
                data[name_field] = normalize_name(data[name_field])
        return data


class OffenderRecordSchema(CamelCaseSchema):
    offender_since = fields.Date(required=True)
    alias = fields.Str(allow_none=True)
    background = fields.Str(allow_none=True)
    detention_date = fields.Date(allow_none=True)
    detention_location = fields.Str(allow_none=True)

    @validates_schema(skip_on_field_errors=False)
    def validate_detention_date(self, data: Dict[str, Any], **_kwargs: Any) -> None:
        errors = date_order_errors(
            data, "offender_since", "detention_date", allow_equal=True
        )
        if errors:
            raise ValidationError(errors)


class IncarcerationStatusSchema(CamelCaseSchema):
    facility_id = fields.Integer(
        allow_none=True, validate=Range(min=MIN_FACILITY_ID, max=MAX_FACILITY_ID)
    )
    cell_id = fields.Str(allow_none=True)
    intake_date = fields.Date(allow_none=True)
    expected_release_date = fields.Date(allow_none=True)
    actual_release_date = fields.Date(allow_none=True)
    reason = fields.Str(allow_none=True)

    @validates_schema(skip_on_field_errors=False)
    def validate_expected_release_date(
        self, data: Dict[str, Any], **_kwargs: Any
    ) -> None:
        errors = date_order_errors(data, "intake_date", "expected_release_date")
        if errors:
            raise ValidationError(errors)


class UpdatePersonSchema(PersonSchema):
    offender = fields.Nested(OffenderRecordSchema, allow_none=True)
    incarceration_status = fields.Nested(IncarcerationStatusSchema, allow_none=True)


class CreatePersonSchema(UpdatePersonSchema):
    @validates_schema
    def validate_status_has_offender(
        self, data: Dict[str, Any], **_kwargs: Any
    ) -> None:
        if data.get("incarceration_status") and not data.get("offender"):
            raise ValidationError(
                {
                    "incarcerationStatus": [
                        "An incarceration status requires an offender record."
                    ]
                }
            )


class CreateOffenderSchema(OffenderRecordSchema):
    person_id = fields.Integer(required=True)


class PersonSearchSchema(CamelCaseSchema):
    id = fields.Integer(allow_none=True)
    first_name = fields.Str(allow_none=True)
    paternal_surname = fields.Str(allow_none=True)
    maternal_surname = fields.Str(allow_none=True)
    birth_date = fields.Date(allow_none=True)
    end_date = fields.Date(allow_none=True)


class PersonListQuerySchema(CamelCaseSchema):
    classification = fields.Enum(
        ClassificationFilter, by_value=True, load_default=ClassificationFilter.ALL
    )
    sort_by = fields.Enum(
        PersonSortField, by_value=True, load_default=PersonSortField.ID
    )
    direction = fields.Enum(
        SortDirection, by_value=True, load_default=SortDirection.ASC
    )


class CrimeSchema(CamelCaseSchema):
    description = fields.Str(required=True, validate=non_empty_string)
    occurred_on = fields.Date(required=True)
    location = fields.Str(allow_none=True)


class CrimeLinkSchema(CamelCaseSchema):
    crime_id = fields.Integer(required=True)
    participation_date = fields.Date(allow_none=True)
    role = fields.Str(allow_none=True)


class LogInSchema(CamelCaseSchema):
    username = fields.Str(required=True, validate=non_empty_string)
    password = fields.Str(required=True, validate=non_empty_string)
