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
"""Implements API routes for the dashboard."""
from functools import wraps
from http import HTTPStatus
from typing import Any, Callable, Dict, List

from flask import Blueprint, Response, g, jsonify, session

from offender_registry.common.constants.facilities import Facility
from offender_registry.dashboard.api_schemas import (
    CreateOffenderSchema,
    CreatePersonSchema,
    CrimeLinkSchema,
    CrimeSchema,
    PersonListQuerySchema,
    PersonSearchSchema,
    UpdatePersonSchema,
)
from offender_registry.dashboard.api_schemas_utils import requires_api_schema
from offender_registry.dashboard.authorization import UserRole
from offender_registry.dashboard.composition import classify_all
from offender_registry.dashboard.exceptions import (
    DashboardAuthorizationError,
    DashboardBadRequestException,
    DashboardNotFoundException,
)
from offender_registry.dashboard.querier.person_presenter import (
    CrimePresenter,
    OffenderRecordPresenter,
    OffenderSummaryPresenter,
    PersonAggregatePresenter,
    PersonPresenter,
)
from offender_registry.dashboard.querier.querier import (
    CrimeDoesNotExistError,
    PersonDoesNotExistError,
    PersonSearchCriteria,
    RegistryQuerier,
)
from offender_registry.dashboard.records.interface import (
    OffenderAlreadyExistsError,
    OffenderRequiredError,
    RecordsInterface,
)
from offender_registry.dashboard.user_context import UserContext
from offender_registry.persistence.database.sqlalchemy_flask_utils import (
    current_session,
)

ALL_ROLES = [UserRole.ADMIN, UserRole.VIEWER]


def route_with_permissions(
    blueprint: Blueprint, rule: str, permissions: List[UserRole], **options: Any
) -> Callable:
    def inner(route: Callable) -> Callable:
        @blueprint.route(rule, **options)
        @wraps(route)
        def decorated(*args: List[Any], **kwargs: Dict[str, Any]) -> Callable:
            if g.user_context.role not in permissions:
                raise DashboardAuthorizationError(
                    code="insufficient_permissions",
                    description="You do not have sufficient permissions to perform this action.",
                    status_code=HTTPStatus.FORBIDDEN,
                )
            return route(*args, **kwargs)

        return decorated

    return inner


def person_not_found(person_id: int) -> DashboardNotFoundException:
    return DashboardNotFoundException(f"Person [{person_id}] could not be found.")


def create_api_blueprint() -> Blueprint:
    """Creates the Blueprint serving every /api route. All routes require a signed-in
    user; routes that write require the ADMIN role."""

    api = Blueprint("api", __name__)

    @api.before_request
    def fetch_user_info() -> None:
        user_context = UserContext.from_session(session)
        if user_context is None:
            raise DashboardAuthorizationError(
                code="not_authenticated",
                description="You must be logged in to access this resource.",
            )
        g.user_context = user_context

    @route_with_permissions(api, "/stats", ALL_ROLES)
    def _get_stats() -> Response:
        return jsonify(RegistryQuerier.counts(current_session))

    @route_with_permissions(api, "/facilities", ALL_ROLES)
    def _get_facilities() -> Response:
        return jsonify(Facility.to_json())

    @route_with_permissions(api, "/persons", ALL_ROLES)
    @requires_api_schema(PersonListQuerySchema, location="args")
    def _get_persons() -> Response:
        listing = RegistryQuerier.list_persons(
            current_session,
            g.api_data["classification"],
            g.api_data["sort_by"],
            g.api_data["direction"],
        )
        classifications = classify_all(listing.persons, listing.offender_ids)
        return jsonify(
            [
                PersonPresenter(person, classifications[person.id]).to_json()
                for person in listing.persons
            ]
        )

    @route_with_permissions(api, "/persons/search", ALL_ROLES)
    @requires_api_schema(PersonSearchSchema, location="args")
    def _search_persons() -> Response:
        """Searches persons. Expects query parameters of the form:
        ?id=<int>&firstName=<str>&paternalSurname=<str>&maternalSurname=<str>
        &birthDate=<YYYY-MM-DD>&endDate=<YYYY-MM-DD>
        where every parameter is optional.
        """
        persons = RegistryQuerier.search_persons(
            current_session, PersonSearchCriteria(**g.api_data)
        )
        classifications = classify_all(
            persons, RegistryQuerier.offender_ids(current_session)
        )
        return jsonify(
            [
                PersonPresenter(person, classifications[person.id]).to_json()
                for person in persons
            ]
        )

    @route_with_permissions(api, "/persons/<int:person_id>", ALL_ROLES)
    def _get_person(person_id: int) -> Response:
        try:
            aggregate = RegistryQuerier.aggregate_for_person_id(
                current_session, person_id
            )
        except PersonDoesNotExistError as e:
            raise person_not_found(person_id) from e

        return jsonify(PersonAggregatePresenter(aggregate).to_json())

    @route_with_permissions(api, "/persons", [UserRole.ADMIN], methods=["POST"])
    @requires_api_schema(CreatePersonSchema)
    def _create_person() -> Response:
        """Creates a person. Expects input in the form:
        {
            firstName: str,
            paternalSurname: str,
            maternalSurname: str,
            birthDate: str,
            endDate?: str,
            offender?: {offenderSince: str, alias?: str, ...},
            incarcerationStatus?: {facilityId?: int, cellId?: str, ...},
        }
        """
        offender = g.api_data.pop("offender", None)
        incarceration_status = g.api_data.pop("incarceration_status", None)
        try:
            aggregate = RecordsInterface.create_person(
                current_session,
                g.user_context,
                g.api_data,
                offender,
                incarceration_status,
            )
        except OffenderRequiredError as e:
            raise DashboardBadRequestException("offender_required", str(e)) from e

        response = jsonify(PersonAggregatePresenter(aggregate).to_json())
        response.status_code = HTTPStatus.CREATED
        return response

    @route_with_permissions(
        api, "/persons/<int:person_id>", [UserRole.ADMIN], methods=["PUT"]
    )
    @requires_api_schema(UpdatePersonSchema)
    def _update_person(person_id: int) -> Response:
        offender = g.api_data.pop("offender", None)
        incarceration_status = g.api_data.pop("incarceration_status", None)
        try:
            aggregate = RecordsInterface.update_person(
                current_session,
                g.user_context,
                person_id,
                g.api_data,
                offender,
                incarceration_status,
            )
        except PersonDoesNotExistError as e:
            raise person_not_found(person_id) from e
        except OffenderRequiredError as e:
            raise DashboardBadRequestException("offender_required", str(e)) from e

        return jsonify(PersonAggregatePresenter(aggregate).to_json())

    @route_with_permissions(api, "/offenders", ALL_ROLES)
    def _get_offenders() -> Response:
        return jsonify(
            [
                OffenderSummaryPresenter(aggregate).to_json()
                for aggregate in RegistryQuerier.offender_summaries(current_session)
            ]
        )

    @route_with_permissions(api, "/offenders/candidates", ALL_ROLES)
    def _get_offender_candidates() -> Response:
        return jsonify(
            [
                PersonPresenter(person).to_json()
                for person in RegistryQuerier.classification_candidates(
                    current_session
                )
            ]
        )

    @route_with_permissions(api, "/offenders", [UserRole.ADMIN], methods=["POST"])
    @requires_api_schema(CreateOffenderSchema)
    def _create_offender() -> Response:
        person_id = g.api_data.pop("person_id")
        try:
            offender = RecordsInterface.create_offender(
                current_session, g.user_context, person_id, g.api_data
            )
        except PersonDoesNotExistError as e:
            raise person_not_found(person_id) from e
        except OffenderAlreadyExistsError as e:
            raise DashboardBadRequestException(
                "offender_already_exists", str(e)
            ) from e

        response = jsonify(OffenderRecordPresenter(offender).to_json())
        response.status_code = HTTPStatus.CREATED
        return response

    @route_with_permissions(
        api, "/offenders/<int:person_id>/crimes", [UserRole.ADMIN], methods=["POST"]
    )
    @requires_api_schema(CrimeLinkSchema)
    def _link_crime(person_id: int) -> Response:
        try:
            RecordsInterface.link_crime(
                current_session,
                g.user_context,
                person_id,
                g.api_data["crime_id"],
                participation_date=g.api_data.get("participation_date"),
                role=g.api_data.get("role"),
            )
        except PersonDoesNotExistError as e:
            raise person_not_found(person_id) from e
        except CrimeDoesNotExistError as e:
            raise DashboardNotFoundException(
                f"Crime [{g.api_data['crime_id']}] could not be found."
            ) from e
        except OffenderRequiredError as e:
            raise DashboardBadRequestException("offender_required", str(e)) from e

        aggregate = RegistryQuerier.aggregate_for_person_id(current_session, person_id)
        response = jsonify(PersonAggregatePresenter(aggregate).to_json())
        response.status_code = HTTPStatus.CREATED
        return response

    @route_with_permissions(api, "/crimes", ALL_ROLES)
    def _get_crimes() -> Response:
        return jsonify(
            [
                CrimePresenter(crime).to_json()
                for crime in RegistryQuerier.all_crimes(current_session)
            ]
        )

    @route_with_permissions(api, "/crimes", [UserRole.ADMIN], methods=["POST"])
    @requires_api_schema(CrimeSchema)
    def _create_crime() -> Response:
        crime = RecordsInterface.create_crime(
            current_session, g.user_context, g.api_data
        )
        response = jsonify(CrimePresenter(crime).to_json())
        response.status_code = HTTPStatus.CREATED
        return response

    return api
