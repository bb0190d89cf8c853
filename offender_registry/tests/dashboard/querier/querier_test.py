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
"""This class implements tests for the RegistryQuerier."""
from datetime import date
from unittest import TestCase

import pytest

from offender_registry.dashboard.composition import (
    ClassificationFilter,
    PersonSortField,
    SortDirection,
)
from offender_registry.dashboard.querier.querier import (
    CrimeDoesNotExistError,
    PersonDoesNotExistError,
    PersonSearchCriteria,
    RegistryQuerier,
)
from offender_registry.persistence.database.schema import OffenderCrime
from offender_registry.persistence.database.session_factory import SessionFactory
from offender_registry.persistence.database.sqlalchemy_engine_manager import (
    SQLAlchemyEngineManager,
)
from offender_registry.tests.dashboard.dashboard_helpers import (
    create_test_engine,
    generate_fake_crime,
    generate_fake_offender,
    generate_fake_person,
    generate_fake_status,
)


@pytest.mark.uses_db
class TestRegistryQuerier(TestCase):
    """Implements tests for the RegistryQuerier."""

    def setUp(self) -> None:
        self.engine = create_test_engine()
        with SessionFactory.using_database(self.engine) as session:
            session.add_all(
                [
                    generate_fake_person(
                        1,
                        first_name="María",
                        paternal_surname="Zúñiga",
                        birth_date=date(1990, 5, 17),
                    ),
                    generate_fake_person(
                        2, first_name="José", paternal_surname="Alvarez"
                    ),
                    generate_fake_person(
                        3, first_name="Josefina", paternal_surname="Mendoza"
                    ),
                    generate_fake_person(
                        4, first_name="Pedro", paternal_surname="Mendoza"
                    ),
                    generate_fake_crime(10),
                    generate_fake_crime(11, description="Fraude"),
                ]
            )
            session.flush()
            session.add_all(
                [
                    generate_fake_offender(2, alias="El Güero"),
                    generate_fake_offender(4),
                ]
            )
            session.flush()
            session.add_all(
                [
                    generate_fake_status(
                        2, expected_release_date=date(2030, 1, 1)
                    ),
                    OffenderCrime(person_id=2, crime_id=11),
                    OffenderCrime(person_id=2, crime_id=10),
                    OffenderCrime(person_id=4, crime_id=10),
                ]
            )

    def tearDown(self) -> None:
        SQLAlchemyEngineManager.teardown_engines()

    def test_empty_search_returns_everything_by_surname(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            persons = RegistryQuerier.search_persons(session, PersonSearchCriteria())
            self.assertEqual([person.id for person in persons], [2, 3, 4, 1])

    def test_search_names_case_insensitive_substring(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(first_name="JOS")
            )
            self.assertEqual([person.id for person in persons], [2, 3])

            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(paternal_surname="endo")
            )
            self.assertEqual([person.id for person in persons], [3, 4])

    def test_search_names_folds_accented_capitals(self) -> None:
        with SessionFactory.using_database(self.engine) as session:
            session.add(
                generate_fake_person(5, first_name="ÉDGAR", paternal_surname="ÁVILA")
            )

        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(paternal_surname="ávila")
            )
            self.assertEqual([person.id for person in persons], [5])

            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(first_name="édg", paternal_surname="VIL")
            )
            self.assertEqual([person.id for person in persons], [5])

    def test_search_escapes_wildcards(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(first_name="%")
            )
            self.assertEqual(persons, [])

    def test_search_exact_fields(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(birth_date=date(1990, 5, 17))
            )
            self.assertEqual([person.id for person in persons], [1])

            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(id=3, paternal_surname="mendoza")
            )
            self.assertEqual([person.id for person in persons], [3])

            persons = RegistryQuerier.search_persons(
                session, PersonSearchCriteria(id=3, first_name="Pedro")
            )
            self.assertEqual(persons, [])

    def test_list_persons(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            listing = RegistryQuerier.list_persons(
                session, ClassificationFilter.CIVILIANS, direction=SortDirection.DESC
            )
            self.assertEqual([person.id for person in listing.persons], [3, 1])
            self.assertEqual(listing.offender_ids, {2, 4})

            listing = RegistryQuerier.list_persons(
                session,
                ClassificationFilter.ALL,
                PersonSortField.EXPECTED_RELEASE_DATE,
                SortDirection.ASC,
            )
            self.assertEqual([person.id for person in listing.persons], [2, 1, 3, 4])

    def test_aggregate_without_offender(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            aggregate = RegistryQuerier.aggregate_for_person_id(session, 1)
            self.assertIsNone(aggregate.offender)
            self.assertIsNone(aggregate.incarceration_status)
            self.assertEqual(aggregate.crimes, [])

    def test_aggregate_for_offender(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            aggregate = RegistryQuerier.aggregate_for_person_id(session, 2)
            self.assertEqual(aggregate.offender.alias, "El Güero")
            self.assertEqual(aggregate.incarceration_status.facility_id, 1)
            # Crimes come back in the order they were linked.
            self.assertEqual([crime.id for crime in aggregate.crimes], [11, 10])

    def test_crime_shared_by_offenders(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            aggregate = RegistryQuerier.aggregate_for_person_id(session, 4)
            self.assertEqual([crime.id for crime in aggregate.crimes], [10])
            self.assertIsNone(aggregate.incarceration_status)

    def test_nonexistent_person(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            with self.assertRaises(PersonDoesNotExistError):
                RegistryQuerier.aggregate_for_person_id(session, 404)

    def test_nonexistent_crime(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            with self.assertRaises(CrimeDoesNotExistError):
                RegistryQuerier.crime_for_id(session, 404)

    def test_offender_summaries(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            summaries = RegistryQuerier.offender_summaries(session)
            self.assertEqual([s.person.id for s in summaries], [2, 4])
            self.assertIsNotNone(summaries[0].incarceration_status)
            self.assertIsNone(summaries[1].incarceration_status)

    def test_classification_candidates(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            candidates = RegistryQuerier.classification_candidates(session)
            self.assertEqual([person.id for person in candidates], [3, 1])

    def test_counts(self) -> None:
        with SessionFactory.using_database(self.engine, autocommit=False) as session:
            self.assertEqual(
                RegistryQuerier.counts(session),
                {"personCount": 4, "offenderCount": 2},
            )
            self.assertEqual(
                [crime.id for crime in RegistryQuerier.all_crimes(session)], [10, 11]
            )
