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
"""Creates every registry table that does not exist yet.

Example usage:

python -m offender_registry.tools.create_tables --db-url postgresql://localhost/registry
"""
import argparse
import logging

from offender_registry.config import DEFAULT_DB_URL
from offender_registry.persistence.database.sqlalchemy_engine_manager import (
    SQLAlchemyEngineManager,
)


def create_tables(db_url: str) -> None:
    engine = SQLAlchemyEngineManager.init_engine(db_url)
    try:
        SQLAlchemyEngineManager.create_all_tables(engine)
    finally:
        SQLAlchemyEngineManager.teardown_engines()


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--db-url",
        dest="db_url",
        default=DEFAULT_DB_URL,
        help="SQLAlchemy URL of the database to create tables in.",
    )
    return parser


if __name__ == "__main__":
    logging.getLogger().setLevel(logging.INFO)
    args = _create_parser().parse_args()
    create_tables(args.db_url)
