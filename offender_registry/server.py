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
"""Backend entry point for the Offender Registry dashboard API."""
import logging
from http import HTTPStatus
from typing import Optional, Tuple

import sentry_sdk
from flask import Flask, Response
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect
from sentry_sdk.integrations.flask import FlaskIntegration
from werkzeug.middleware.proxy_fix import ProxyFix

from offender_registry.config import Config
from offender_registry.dashboard.api_routes import create_api_blueprint
from offender_registry.dashboard.auth_routes import create_auth_blueprint
from offender_registry.dashboard.error_handlers import register_error_handlers
from offender_registry.persistence.database.sqlalchemy_engine_manager import (
    SQLAlchemyEngineManager,
)
from offender_registry.persistence.database.sqlalchemy_flask_utils import (
    setup_scoped_sessions,
)
from offender_registry.utils.environment import in_development, in_test


def create_app(config: Optional[Config] = None) -> Flask:
    """
    This function is known as the application factory. It is responsible
    for returning the Flask app instance. Any configuration, registration,
    and other setup the application needs should happen inside the function,
    and then the application will be returned.
    """
    logging.getLogger().setLevel(logging.INFO)
    config = config or Config()

    if config.SENTRY_DSN:
        # pylint: disable=abstract-class-instantiated
        sentry_sdk.init(
            dsn=config.SENTRY_DSN,
            integrations=[FlaskIntegration()],
            # This value may need to be adjusted over time as usage increases.
            traces_sample_rate=1.0,
        )

    app = Flask(__name__)
    app.config.from_object(config)
    engine = setup_scoped_sessions(app, config.DB_URL)
    if in_development():
        SQLAlchemyEngineManager.create_all_tables(engine)

    app.register_blueprint(
        create_auth_blueprint(config.AUTHENTICATOR), url_prefix="/auth"
    )
    app.register_blueprint(create_api_blueprint(), url_prefix="/api")

    # Need to silence mypy error `Cannot assign to a method`
    app.wsgi_app = ProxyFix(app.wsgi_app)  # type: ignore[assignment]
    CSRFProtect(app)
    register_error_handlers(app)

    Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=["15 per second"],
    )

    app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024  # 16 MiB max body size

    if not in_development() and not in_test():
        app.config["SESSION_COOKIE_HTTPONLY"] = True
        app.config["SESSION_COOKIE_SECURE"] = True
        app.config["SESSION_COOKIE_SAMESITE"] = "Strict"

    # Security headers
    @app.after_request
    def set_headers(response: Response) -> Response:
        if not in_development():
            response.headers[
                "Strict-Transport-Security"
            ] = "max-age=63072000; includeSubDomains"  # max age of 2 years
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; object-src 'none'; frame-ancestors 'none'"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        # Set cache control to no-store if it isn't already set
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"

        return response

    @app.route("/health")
    def health() -> Tuple[str, HTTPStatus]:
        """This just returns 200, and is used by Docker to verify that the app is running."""

        return "", HTTPStatus.OK

    return app
