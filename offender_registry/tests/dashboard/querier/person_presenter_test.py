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
"""Tests for the registry presenters."""
from datetime import date
from unittest import TestCase

from offender_registry.dashboard.composition import (
    PersonClassification,
    build_aggregate,
)
from offender_registry.dashboard.querier.person_presenter import (
    OffenderSummaryPresenter,
    PersonAggregatePresenter,
    PersonPresenter,
)
from offender_registry.tests.dashboard.dashboard_helpers import (
    generate_fake_crime,
    generate_fake_offender,
    generate_fake_person,
    generate_fake_status,
)


class TestPersonPresenters(TestCase):
    """Tests the JSON produced for persons and aggregates."""

    def test_person(self) -> None:
        person = generate_fake_person(7, end_date=date(2020, 6, 1))
        self.assertEqual(
            PersonPresenter(person, PersonClassification.CIVILIAN).to_json(),
            {
                "id": 7,
                "firstName": "Juan",
                "paternalSurname": "Pérez",
                "maternalSurname": "López",
                "birthDate": "1980-01-01",
                "endDate": "2020-06-01",
                "classification": "CIVILIAN",
            },
        )
        self.assertNotIn("classification", PersonPresenter(person).to_json())

    def test_aggregate_without_offender(self) -> None:
        json = PersonAggregatePresenter(
            build_aggregate(generate_fake_person(7))
        ).to_json()

        self.assertIsNone(json["offender"])
        self.assertIsNone(json["incarcerationStatus"])
        self.assertEqual(json["crimes"], [])
        self.assertEqual(json["classification"], "CIVILIAN")

    def test_aggregate_with_offender(self) -> None:
        json = PersonAggregatePresenter(
            build_aggregate(
                generate_fake_person(7),
                generate_fake_offender(7, alias="El Tigre"),
                generate_fake_status(7, facility_id=2),
                [generate_fake_crime(3)],
            )
        ).to_json()

        self.assertEqual(json["classification"], "OFFENDER")
        self.assertEqual(json["offender"]["alias"], "El Tigre")
        self.assertEqual(json["offender"]["offenderSince"], "2020-01-01")
        self.assertEqual(json["incarcerationStatus"]["facilityId"], 2)
        self.assertTrue(
            json["incarcerationStatus"]["facilityName"].startswith("Puente Grande")
        )
        self.assertEqual(json["crimes"][0]["occurredOn"], "2019-12-24")

    def test_offender_summary(self) -> None:
        json = OffenderSummaryPresenter(
            build_aggregate(generate_fake_person(7), generate_fake_offender(7))
        ).to_json()
        self.assertEqual(json["personId"], 7)
        self.assertIsNone(json["facilityId"])
        self.assertIsNone(json["facilityName"])

        with self.assertRaises(ValueError):
            OffenderSummaryPresenter(build_aggregate(generate_fake_person(7)))
