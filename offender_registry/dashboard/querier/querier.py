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
"""Implements the Querier abstraction that is responsible for reading rows from the
registry tables and coalescing them into the views the dashboard serves."""
from datetime import date
from typing import Dict, List, Optional, Set

import attr
from sqlalchemy import func
from sqlalchemy.orm import Session

from offender_registry.dashboard.composition import (
    ClassificationFilter,
    PersonAggregate,
    PersonSortField,
    SortDirection,
    build_aggregate,
    filter_by_classification,
    sort_by_field,
)
from offender_registry.persistence.database.schema import (
    Crime,
    IncarcerationStatus,
    OffenderCrime,
    OffenderRecord,
    Person,
)


class PersonDoesNotExistError(ValueError):
    pass


class CrimeDoesNotExistError(ValueError):
    pass


@attr.s(frozen=True, auto_attribs=True)
class PersonSearchCriteria:
    """Criteria for searching persons. Criteria left as None impose no constraint."""

    id: Optional[int] = None
    first_name: Optional[str] = None
    paternal_surname: Optional[str] = None
    maternal_surname: Optional[str] = None
    birth_date: Optional[date] = None
    end_date: Optional[date] = None


@attr.s(frozen=True, auto_attribs=True)
class PersonListing:
    """The persons to show on the list screen, plus the offender id set used to
    label each of them."""

    persons: List[Person]
    offender_ids: Set[int]


class RegistryQuerier:
    """Implements Querier abstraction for the registry tables."""

    @staticmethod
    def offender_ids(session: Session) -> Set[int]:
        return {
            person_id for (person_id,) in session.query(OffenderRecord.person_id).all()
        }

    @staticmethod
    def expected_release_dates(session: Session) -> Dict[int, Optional[date]]:
        return dict(
            session.query(
                IncarcerationStatus.person_id,
                IncarcerationStatus.expected_release_date,
            ).all()
        )

    @staticmethod
    def list_persons(
        session: Session,
        classification: ClassificationFilter = ClassificationFilter.ALL,
        sort_field: PersonSortField = PersonSortField.ID,
        direction: SortDirection = SortDirection.ASC,
    ) -> PersonListing:
        """Fetches every person and filters / sorts them in memory, since neither the
        classification nor the release date live on the person table."""
        persons = session.query(Person).order_by(Person.id.asc()).all()
        offender_ids = RegistryQuerier.offender_ids(session)

        exit_dates = None
        if sort_field == PersonSortField.EXPECTED_RELEASE_DATE:
            exit_dates = RegistryQuerier.expected_release_dates(session)

        filtered = filter_by_classification(persons, offender_ids, classification)
        return PersonListing(
            persons=sort_by_field(filtered, sort_field, direction, exit_dates),
            offender_ids=offender_ids,
        )

    @staticmethod
    def search_persons(session: Session, criteria: PersonSearchCriteria) -> List[Person]:
        """Each criterion that is set narrows the result. The id and dates must match
        exactly; names match on a case-insensitive substring."""
        query = session.query(Person)

        if criteria.id is not None:
            query = query.filter(Person.id == criteria.id)

        if criteria.birth_date is not None:
            query = query.filter(Person.birth_date == criteria.birth_date)

        if criteria.end_date is not None:
            query = query.filter(Person.end_date == criteria.end_date)

        name_criteria = [
            (column, value)
            for column, value in (
                (Person.first_name, criteria.first_name),
                (Person.paternal_surname, criteria.paternal_surname),
                (Person.maternal_surname, criteria.maternal_surname),
            )
            if value
        ]
        # SQLite's lower() only folds ASCII letters, so names are matched here.
        fold_in_python = session.get_bind().dialect.name == "sqlite"
        if not fold_in_python:
            for column, value in name_criteria:
                query = query.filter(
                    func.lower(column).contains(value.lower(), autoescape=True)
                )

        persons = query.order_by(Person.paternal_surname.asc(), Person.id.asc()).all()
        if fold_in_python:
            persons = [
                person
                for person in persons
                if all(
                    value.casefold() in getattr(person, column.key).casefold()
                    for column, value in name_criteria
                )
            ]
        return persons

    @staticmethod
    def person_for_id(session: Session, person_id: int) -> Person:
        person = session.get(Person, person_id)
        if person is None:
            raise PersonDoesNotExistError(f"could not find person with id: {person_id}")
        return person

    @staticmethod
    def crimes_for_offender(session: Session, person_id: int) -> List[Crime]:
        return (
            session.query(Crime)
            .join(OffenderCrime, OffenderCrime.crime_id == Crime.id)
            .filter(OffenderCrime.person_id == person_id)
            .order_by(OffenderCrime.id)
            .all()
        )

    @staticmethod
    def aggregate_for_person_id(session: Session, person_id: int) -> PersonAggregate:
        person = RegistryQuerier.person_for_id(session, person_id)
        offender = session.get(OffenderRecord, person_id)
        status = session.get(IncarcerationStatus, person_id) if offender else None
        crimes = (
            RegistryQuerier.crimes_for_offender(session, person_id) if offender else []
        )
        return build_aggregate(person, offender, status, crimes)

    @staticmethod
    def offender_summaries(session: Session) -> List[PersonAggregate]:
        """Every offender joined with their person row and incarceration status,
        ordered by person id."""
        rows = (
            session.query(Person, OffenderRecord, IncarcerationStatus)
            .join(OffenderRecord, OffenderRecord.person_id == Person.id)
            .outerjoin(
                IncarcerationStatus,
                IncarcerationStatus.person_id == OffenderRecord.person_id,
            )
            .order_by(OffenderRecord.person_id.asc())
            .all()
        )
        return [
            build_aggregate(person, offender, status)
            for person, offender, status in rows
        ]

    @staticmethod
    def classification_candidates(session: Session) -> List[Person]:
        """Persons that are not yet offenders, ordered by paternal surname."""
        return (
            session.query(Person)
            .outerjoin(OffenderRecord, OffenderRecord.person_id == Person.id)
            .filter(OffenderRecord.person_id.is_(None))
            .order_by(Person.paternal_surname.asc(), Person.id.asc())
            .all()
        )

    @staticmethod
    def counts(session: Session) -> Dict[str, int]:
        return {
            "personCount": session.query(func.count(Person.id)).scalar() or 0,
            "offenderCount": session.query(func.count(OffenderRecord.person_id)).scalar()
            or 0,
        }

    @staticmethod
    def all_crimes(session: Session) -> List[Crime]:
        return session.query(Crime).order_by(Crime.id.asc()).all()

    @staticmethod
    def crime_for_id(session: Session, crime_id: int) -> Crime:
        crime = session.get(Crime, crime_id)
        if crime is None:
            raise CrimeDoesNotExistError(f"could not find crime with id: {crime_id}")
        return crime
