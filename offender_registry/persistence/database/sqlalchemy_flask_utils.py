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
"""Binds a request-scoped SQLAlchemy session to a Flask app."""
from threading import get_ident
from typing import Optional

from flask import Flask, current_app, has_app_context
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from werkzeug.local import LocalProxy

from offender_registry.persistence.database.sqlalchemy_engine_manager import (
    SQLAlchemyEngineManager,
)

_EXTENSION_KEY = "registry_session"


def setup_scoped_sessions(app: Flask, db_url: str) -> Engine:
    """Creates the engine for |db_url| and gives each worker thread of |app| its own
    session, which is discarded when the app context it was used in ends."""
    engine = SQLAlchemyEngineManager.init_engine(db_url)
    sessions = scoped_session(sessionmaker(bind=engine), scopefunc=get_ident)
    app.extensions[_EXTENSION_KEY] = sessions

    @app.teardown_appcontext
    def remove_session(_exception: Optional[BaseException]) -> None:
        sessions.remove()

    return engine


def _get_session() -> Session:
    if not has_app_context():
        raise RuntimeError(
            "Cannot access current_session when outside of an application context."
        )
    try:
        return current_app.extensions[_EXTENSION_KEY]
    except KeyError as e:
        raise RuntimeError(
            f"{current_app} has no registry session. Call setup_scoped_sessions first."
        ) from e


current_session: Session = LocalProxy(_get_session)  # type: ignore[assignment]
