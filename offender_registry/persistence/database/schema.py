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
"""Define the ORM schema objects that map directly to the registry database.

The below schema uses only generic SQLAlchemy types, and therefore should be
portable between database implementations (Postgres in deployed environments,
SQLite for local development and tests).

A Person is the root of every record. An OffenderRecord and an
IncarcerationStatus are optional one-to-one extensions keyed by the person's id:
a person is an offender if and only if an offender_record row exists for them.
Crimes are shared and are attached to offenders through the offender_crime
association table, which deliberately has no uniqueness constraint so the same
crime may be linked to any number of offenders.
"""
from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeMeta, declarative_base, relationship

from offender_registry.common.constants.facilities import (
    MAX_FACILITY_ID,
    MIN_FACILITY_ID,
)

# Base class for all table classes
RegistryBase: DeclarativeMeta = declarative_base()


class Person(RegistryBase):
    """Identity record for anyone tracked by the registry."""

    __tablename__ = "person"

    __table_args__ = (
        CheckConstraint(
            "end_date IS NULL OR end_date > birth_date",
            name="end_date_after_birth_date",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    paternal_surname = Column(String(255), nullable=False, index=True)
    maternal_surname = Column(String(255), nullable=False)
    birth_date = Column(Date, nullable=False)
    # Date the record was closed, if it has been.
    end_date = Column(Date)

    offender_record = relationship(
        "OffenderRecord", uselist=False, back_populates="person"
    )


class OffenderRecord(RegistryBase):
    """Marks a person as an offender. Shares its primary key with the person."""

    __tablename__ = "offender_record"

    __table_args__ = (
        CheckConstraint(
            "detention_date IS NULL OR offender_since <= detention_date",
            name="offender_since_not_after_detention_date",
        ),
    )

    person_id = Column(Integer, ForeignKey("person.id"), primary_key=True)
    # Date the person was classified as an offender.
    offender_since = Column(Date, nullable=False)
    alias = Column(String(255))
    background = Column(Text)
    detention_date = Column(Date)
    detention_location = Column(String(255))

    person = relationship("Person", back_populates="offender_record")
    incarceration_status = relationship(
        "IncarcerationStatus", uselist=False, back_populates="offender_record"
    )


class IncarcerationStatus(RegistryBase):
    """Where and for how long an offender is held."""

    __tablename__ = "incarceration_status"

    __table_args__ = (
        CheckConstraint(
            f"facility_id IS NULL OR facility_id BETWEEN {MIN_FACILITY_ID} AND {MAX_FACILITY_ID}",
            name="facility_id_in_catalog",
        ),
        CheckConstraint(
            "intake_date IS NULL OR expected_release_date IS NULL "
            "OR intake_date < expected_release_date",
            name="intake_date_before_expected_release_date",
        ),
    )

    person_id = Column(
        Integer, ForeignKey("offender_record.person_id"), primary_key=True
    )
    facility_id = Column(Integer)
    cell_id = Column(String(255))
    intake_date = Column(Date)
    expected_release_date = Column(Date)
    actual_release_date = Column(Date)
    reason = Column(Text)

    offender_record = relationship(
        "OffenderRecord", back_populates="incarceration_status"
    )


class Crime(RegistryBase):
    """A crime that one or more offenders may be linked to."""

    __tablename__ = "crime"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    occurred_on = Column(Date, nullable=False)
    location = Column(String(255))


class OffenderCrime(RegistryBase):
    """Association between an offender and a crime they took part in."""

    __tablename__ = "offender_crime"

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(
        Integer, ForeignKey("offender_record.person_id"), nullable=False, index=True
    )
    crime_id = Column(Integer, ForeignKey("crime.id"), nullable=False, index=True)
    participation_date = Column(Date)
    role = Column(String(255))
