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
"""Implements presenters that turn registry rows and aggregates into the JSON
representation consumed by the dashboard frontend."""
from datetime import date
from typing import Any, Dict, Optional

from offender_registry.common.constants.facilities import Facility
from offender_registry.dashboard.composition import (
    PersonAggregate,
    PersonClassification,
)
from offender_registry.persistence.database.schema import (
    Crime,
    IncarcerationStatus,
    OffenderRecord,
    Person,
)


def dates_to_iso(json_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Serializes date values as YYYY-MM-DD. Left to itself, jsonify would render
    them as RFC 822 datetimes at midnight GMT."""
    return {
        key: value.isoformat() if isinstance(value, date) else value
        for key, value in json_dict.items()
    }


def _facility_name(facility_id: Optional[int]) -> Optional[str]:
    if facility_id is None or not Facility.is_facility_id(facility_id):
        return None
    return Facility(facility_id).display_name


class PersonPresenter:
    """Presents a single person row, optionally with its classification."""

    def __init__(
        self,
        person: Person,
        classification: Optional[PersonClassification] = None,
    ):
        self.person = person
        self.classification = classification

    def to_json(self) -> Dict[str, Any]:
        base_dict: Dict[str, Any] = {
            "id": self.person.id,
            "firstName": self.person.first_name,
            "paternalSurname": self.person.paternal_surname,
            "maternalSurname": self.person.maternal_surname,
            "birthDate": self.person.birth_date,
            "endDate": self.person.end_date,
        }
        if self.classification is not None:
            base_dict["classification"] = self.classification.value
        return dates_to_iso(base_dict)


class OffenderRecordPresenter:
    def __init__(self, offender: OffenderRecord):
        self.offender = offender

    def to_json(self) -> Dict[str, Any]:
        return dates_to_iso(
            {
                "personId": self.offender.person_id,
                "offenderSince": self.offender.offender_since,
                "alias": self.offender.alias,
                "background": self.offender.background,
                "detentionDate": self.offender.detention_date,
                "detentionLocation": self.offender.detention_location,
            }
        )


class IncarcerationStatusPresenter:
    def __init__(self, status: IncarcerationStatus):
        self.status = status

    def to_json(self) -> Dict[str, Any]:
        return dates_to_iso(
            {
                "personId": self.status.person_id,
                "facilityId": self.status.facility_id,
                "facilityName": _facility_name(self.status.facility_id),
                "cellId": self.status.cell_id,
                "intakeDate": self.status.intake_date,
                "expectedReleaseDate": self.status.expected_release_date,
                "actualReleaseDate": self.status.actual_release_date,
                "reason": self.status.reason,
            }
        )


class CrimePresenter:
    def __init__(self, crime: Crime):
        self.crime = crime

    def to_json(self) -> Dict[str, Any]:
        return dates_to_iso(
            {
                "id": self.crime.id,
                "description": self.crime.description,
                "occurredOn": self.crime.occurred_on,
                "location": self.crime.location,
            }
        )


class PersonAggregatePresenter:
    """Presents the detail view of a person. Relations the person does not have
    are rendered as null so the frontend can tell "no offender record" apart from
    "offender record with empty fields"."""

    def __init__(self, aggregate: PersonAggregate):
        self.aggregate = aggregate

    def to_json(self) -> Dict[str, Any]:
        offender = self.aggregate.offender
        status = self.aggregate.incarceration_status
        return {
            **PersonPresenter(
                self.aggregate.person, self.aggregate.classification
            ).to_json(),
            "offender": OffenderRecordPresenter(offender).to_json()
            if offender
            else None,
            "incarcerationStatus": IncarcerationStatusPresenter(status).to_json()
            if status
            else None,
            "crimes": [CrimePresenter(crime).to_json() for crime in self.aggregate.crimes],
        }


class OffenderSummaryPresenter:
    """Presents one row of the offenders table: who they are, their alias and
    where they are currently held."""

    def __init__(self, aggregate: PersonAggregate):
        if aggregate.offender is None:
            raise ValueError(
                f"Person [{aggregate.person.id}] has no offender record to summarize"
            )
        self.aggregate = aggregate

    def to_json(self) -> Dict[str, Any]:
        person = self.aggregate.person
        offender = self.aggregate.offender
        status = self.aggregate.incarceration_status
        return dates_to_iso(
            {
                "personId": person.id,
                "firstName": person.first_name,
                "paternalSurname": person.paternal_surname,
                "maternalSurname": person.maternal_surname,
                "alias": offender.alias if offender else None,
                "detentionDate": offender.detention_date if offender else None,
                "facilityId": status.facility_id if status else None,
                "facilityName": _facility_name(status.facility_id) if status else None,
                "cellId": status.cell_id if status else None,
                "intakeDate": status.intake_date if status else None,
            }
        )
