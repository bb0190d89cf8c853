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
"""Defines the interface for writing person, offender and crime records."""
import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, Optional, Tuple

from marshmallow import ValidationError
from sqlalchemy.orm import Session

from offender_registry.dashboard.api_schemas import date_order_errors
from offender_registry.dashboard.composition import PersonAggregate
from offender_registry.dashboard.querier.querier import (
    PersonDoesNotExistError,
    RegistryQuerier,
)
from offender_registry.dashboard.user_context import UserContext
from offender_registry.persistence.database.schema import (
    Crime,
    IncarcerationStatus,
    OffenderCrime,
    OffenderRecord,
    Person,
)


class ReadOnlyUserError(PermissionError):
    pass


class OffenderAlreadyExistsError(ValueError):
    pass


class OffenderRequiredError(ValueError):
    pass


def _check_can_write(user_context: UserContext) -> None:
    if not user_context.can_write:
        raise ReadOnlyUserError(
            f"User [{user_context.user_id}] with role [{user_context.role.value}] cannot modify records"
        )


@contextmanager
def _transaction(session: Session) -> Iterator[None]:
    """Commits every write made inside the block together, or none of them."""
    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        raise


def _apply(row: Any, fields: Dict[str, Any]) -> None:
    for key, value in fields.items():
        setattr(row, key, value)


def _merged(
    row: Optional[Any], fields: Dict[str, Any], keys: Tuple[str, ...]
) -> Dict[str, Any]:
    """Returns the values |keys| will hold once |fields| is applied to |row|."""
    merged = {key: getattr(row, key) for key in keys} if row is not None else {}
    merged.update({key: fields[key] for key in keys if key in fields})
    return merged


def _check_merged_dates(
    existing_person: Person,
    person: Dict[str, Any],
    existing_offender: Optional[OffenderRecord],
    offender: Optional[Dict[str, Any]],
    existing_status: Optional[IncarcerationStatus],
    incarceration_status: Optional[Dict[str, Any]],
) -> None:
    """Raises a ValidationError if a partial update would leave a pair of dates out
    of order, checking the values that are sent against the ones already stored."""
    errors: Dict[str, Any] = date_order_errors(
        _merged(existing_person, person, ("birth_date", "end_date")),
        "birth_date",
        "end_date",
    )
    if offender is not None:
        offender_errors = date_order_errors(
            _merged(existing_offender, offender, ("offender_since", "detention_date")),
            "offender_since",
            "detention_date",
            allow_equal=True,
        )
        if offender_errors:
            errors["offender"] = offender_errors
    if incarceration_status is not None:
        status_errors = date_order_errors(
            _merged(
                existing_status,
                incarceration_status,
                ("intake_date", "expected_release_date"),
            ),
            "intake_date",
            "expected_release_date",
        )
        if status_errors:
            errors["incarcerationStatus"] = status_errors
    if errors:
        raise ValidationError(errors)


class RecordsInterface:
    """Defines the interface for writing registry records. Every write that touches
    more than one table is committed as a single transaction."""

    @staticmethod
    def create_person(
        session: Session,
        user_context: UserContext,
        person: Dict[str, Any],
        offender: Optional[Dict[str, Any]] = None,
        incarceration_status: Optional[Dict[str, Any]] = None,
    ) -> PersonAggregate:
        """Creates a person, along with their offender record and incarceration status
        when given."""
        _check_can_write(user_context)
        if incarceration_status is not None and offender is None:
            raise OffenderRequiredError(
                "An incarceration status can only be recorded for an offender"
            )

        with _transaction(session):
            new_person = Person(**person)
            session.add(new_person)
            # Assigns the person id the dependent rows are keyed by.
            session.flush()

            if offender is not None:
                session.add(OffenderRecord(person_id=new_person.id, **offender))
                session.flush()
            if incarceration_status is not None:
                session.add(
                    IncarcerationStatus(person_id=new_person.id, **incarceration_status)
                )

        logging.info(
            "User [%s] created person [%s] (offender: [%s])",
            user_context.user_id,
            new_person.id,
            offender is not None,
        )
        return RegistryQuerier.aggregate_for_person_id(session, new_person.id)

    @staticmethod
    def update_person(
        session: Session,
        user_context: UserContext,
        person_id: int,
        person: Dict[str, Any],
        offender: Optional[Dict[str, Any]] = None,
        incarceration_status: Optional[Dict[str, Any]] = None,
    ) -> PersonAggregate:
        """Updates a person, creating or updating their offender record and
        incarceration status when given. Relations that are not given are left as they
        are; nothing is ever deleted."""
        _check_can_write(user_context)
        existing_person = RegistryQuerier.person_for_id(session, person_id)
        existing_offender = session.get(OffenderRecord, person_id)
        existing_status = session.get(IncarcerationStatus, person_id)
        _check_merged_dates(
            existing_person,
            person,
            existing_offender,
            offender,
            existing_status,
            incarceration_status,
        )

        with _transaction(session):
            _apply(existing_person, person)

            if offender is not None:
                if existing_offender is None:
                    existing_offender = OffenderRecord(person_id=person_id, **offender)
                    session.add(existing_offender)
                    session.flush()
                else:
                    _apply(existing_offender, offender)

            if incarceration_status is not None:
                if existing_offender is None:
                    raise OffenderRequiredError(
                        f"Person [{person_id}] has no offender record to attach an incarceration status to"
                    )
                if existing_status is None:
                    session.add(
                        IncarcerationStatus(person_id=person_id, **incarceration_status)
                    )
                else:
                    _apply(existing_status, incarceration_status)

        logging.info("User [%s] updated person [%s]", user_context.user_id, person_id)
        return RegistryQuerier.aggregate_for_person_id(session, person_id)

    @staticmethod
    def create_offender(
        session: Session,
        user_context: UserContext,
        person_id: int,
        offender: Dict[str, Any],
    ) -> OffenderRecord:
        """Classifies an existing person as an offender."""
        _check_can_write(user_context)
        try:
            RegistryQuerier.person_for_id(session, person_id)
        except PersonDoesNotExistError:
            logging.warning(
                "Cannot classify missing person [%s] as an offender", person_id
            )
            raise
        if session.get(OffenderRecord, person_id) is not None:
            raise OffenderAlreadyExistsError(
                f"Person [{person_id}] is already an offender"
            )

        record = OffenderRecord(person_id=person_id, **offender)
        with _transaction(session):
            session.add(record)

        logging.info(
            "User [%s] classified person [%s] as an offender",
            user_context.user_id,
            person_id,
        )
        return record

    @staticmethod
    def create_crime(
        session: Session, user_context: UserContext, crime: Dict[str, Any]
    ) -> Crime:
        _check_can_write(user_context)
        new_crime = Crime(**crime)
        with _transaction(session):
            session.add(new_crime)

        logging.info("User [%s] created crime [%s]", user_context.user_id, new_crime.id)
        return new_crime

    @staticmethod
    def link_crime(
        session: Session,
        user_context: UserContext,
        person_id: int,
        crime_id: int,
        participation_date: Optional[date] = None,
        role: Optional[str] = None,
    ) -> OffenderCrime:
        """Links a crime to an offender. The same crime may be linked to any number of
        offenders."""
        _check_can_write(user_context)
        RegistryQuerier.person_for_id(session, person_id)
        if session.get(OffenderRecord, person_id) is None:
            raise OffenderRequiredError(
                f"Person [{person_id}] must be an offender to be linked to a crime"
            )
        RegistryQuerier.crime_for_id(session, crime_id)

        link = OffenderCrime(
            person_id=person_id,
            crime_id=crime_id,
            participation_date=participation_date,
            role=role,
        )
        with _transaction(session):
            session.add(link)

        logging.info(
            "User [%s] linked crime [%s] to offender [%s]",
            user_context.user_id,
            crime_id,
            person_id,
        )
        return link
