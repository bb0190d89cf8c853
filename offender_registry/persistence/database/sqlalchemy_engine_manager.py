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
"""A class to manage the SQLAlchemy Engines for the registry database."""
import logging
from typing import Any, Dict, List

import sqlalchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from offender_registry.persistence.database.schema import RegistryBase


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ignores foreign key constraints unless asked per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SQLAlchemyEngineManager:
    """Creates and tracks the engines used by the server, tools and tests."""

    _engines: List[Engine] = []

    @classmethod
    def init_engine(cls, db_url: str) -> Engine:
        """Initializes a sqlalchemy Engine object for the given database URL and
        tracks it so it can be disposed of on teardown."""
        url = make_url(db_url)
        is_sqlite = url.get_backend_name() == "sqlite"

        additional_kwargs: Dict[str, Any] = {}
        if is_sqlite:
            additional_kwargs["connect_args"] = {"check_same_thread": False}
            if not url.database or url.database == ":memory:":
                # Every session must see the same in-memory database.
                additional_kwargs["poolclass"] = StaticPool
        else:
            additional_kwargs["pool_pre_ping"] = True

        try:
            engine = sqlalchemy.create_engine(url, **additional_kwargs)
        except BaseException as e:
            logging.error(
                "Unable to create engine for database [%s]: %s",
                url.render_as_string(hide_password=True),
                str(e),
            )
            raise e

        if is_sqlite:
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        cls._engines.append(engine)
        return engine

    @classmethod
    def create_all_tables(cls, engine: Engine) -> None:
        RegistryBase.metadata.create_all(engine)

    @classmethod
    def teardown_engines(cls) -> None:
        for engine in cls._engines:
            engine.dispose()
        cls._engines.clear()
