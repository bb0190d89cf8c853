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
"""
Class for generating SQLAlchemy Session objects outside of a request, for tools
and tests.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session


class SessionFactory:
    """Creates SQLAlchemy sessions bound to a registry database engine"""

    @classmethod
    def for_engine(cls, engine: Engine) -> Session:
        return Session(bind=engine, expire_on_commit=False)

    @classmethod
    @contextmanager
    def using_database(
        cls, engine: Engine, *, autocommit: bool = True
    ) -> Iterator[Session]:
        """Yields a session that is committed on a clean exit (when |autocommit| is
        set), rolled back if the block raises, and closed either way."""
        session = cls.for_engine(engine)
        try:
            yield session
            if autocommit:
                session.commit()
        except Exception:
            logging.warning("Rolling back session after error.")
            session.rollback()
            raise
        finally:
            session.close()
