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
"""Builds the person-centric views served by the dashboard.

Rows are fetched from several tables by the querier and joined here, in memory,
into the shapes the list, search and detail routes render. Everything in this
module is pure: nothing here reads from or writes to the database.

Whether a person is an offender is never stored on the person. It is derived
from membership of the person's id in the set of offender record ids, and is
recomputed every time one of these functions is called so that it cannot go
stale relative to either source collection.
"""
from datetime import date
from enum import Enum
from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional, Sequence

import attr

from offender_registry.persistence.database.schema import (
    Crime,
    IncarcerationStatus,
    OffenderRecord,
    Person,
)


class PersonClassification(Enum):
    CIVILIAN = "CIVILIAN"
    OFFENDER = "OFFENDER"


class ClassificationFilter(Enum):
    ALL = "ALL"
    OFFENDERS = "OFFENDERS"
    CIVILIANS = "CIVILIANS"


class PersonSortField(Enum):
    ID = "ID"
    EXPECTED_RELEASE_DATE = "EXPECTED_RELEASE_DATE"


class SortDirection(Enum):
    ASC = "ASC"
    DESC = "DESC"


def classify(person: Person, offender_ids: AbstractSet[int]) -> PersonClassification:
    if person.id in offender_ids:
        return PersonClassification.OFFENDER
    return PersonClassification.CIVILIAN


def classify_all(
    persons: Iterable[Person], offender_ids: AbstractSet[int]
) -> Dict[int, PersonClassification]:
    """Maps each person's id to their classification."""
    return {person.id: classify(person, offender_ids) for person in persons}


def filter_by_classification(
    persons: Sequence[Person],
    offender_ids: AbstractSet[int],
    mode: ClassificationFilter,
) -> List[Person]:
    """Returns the persons matching |mode|, preserving their relative order."""
    if mode == ClassificationFilter.ALL:
        return list(persons)

    wanted = (
        PersonClassification.OFFENDER
        if mode == ClassificationFilter.OFFENDERS
        else PersonClassification.CIVILIAN
    )
    return [person for person in persons if classify(person, offender_ids) == wanted]


def sort_by_field(
    persons: Sequence[Person],
    field: PersonSortField,
    direction: SortDirection,
    exit_dates: Optional[Mapping[int, Optional[date]]] = None,
) -> List[Person]:
    """Stable sort of |persons| by id or by expected release date.

    Expected release dates are looked up in |exit_dates|, keyed by person id.
    Persons without a date are always placed after every dated person, in their
    original relative order, whichever |direction| is requested.
    """
    descending = direction == SortDirection.DESC

    if field == PersonSortField.ID:
        # sorted() keeps equal elements in input order even when reversing.
        return sorted(persons, key=lambda person: person.id, reverse=descending)

    exit_dates = exit_dates or {}
    dated = [person for person in persons if exit_dates.get(person.id) is not None]
    undated = [person for person in persons if exit_dates.get(person.id) is None]
    return (
        sorted(dated, key=lambda person: exit_dates[person.id], reverse=descending)
        + undated
    )


@attr.s(frozen=True)
class PersonAggregate:
    """A person merged with their optional offender record, incarceration status
    and linked crimes. Missing relations are None rather than empty objects."""

    person: Person = attr.ib()
    offender: Optional[OffenderRecord] = attr.ib(default=None)
    incarceration_status: Optional[IncarcerationStatus] = attr.ib(default=None)
    crimes: List[Crime] = attr.ib(factory=list)

    @property
    def is_offender(self) -> bool:
        return self.offender is not None

    @property
    def classification(self) -> PersonClassification:
        return (
            PersonClassification.OFFENDER
            if self.is_offender
            else PersonClassification.CIVILIAN
        )


def build_aggregate(
    person: Person,
    offender: Optional[OffenderRecord] = None,
    incarceration_status: Optional[IncarcerationStatus] = None,
    crimes: Iterable[Crime] = (),
) -> PersonAggregate:
    """Composes the detail view of a single person.

    Raises a ValueError if a related row belongs to a different person, or if an
    incarceration status is given without the offender record that owns it.
    """
    if offender is not None and offender.person_id != person.id:
        raise ValueError(
            f"Offender record for person [{offender.person_id}] cannot be attached to person [{person.id}]"
        )
    if incarceration_status is not None:
        if offender is None:
            raise ValueError(
                f"Incarceration status for person [{person.id}] requires an offender record"
            )
        if incarceration_status.person_id != person.id:
            raise ValueError(
                f"Incarceration status for person [{incarceration_status.person_id}] cannot be attached to person [{person.id}]"
            )

    return PersonAggregate(
        person=person,
        offender=offender,
        incarceration_status=incarceration_status,
        crimes=list(crimes),
    )
