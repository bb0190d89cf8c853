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
"""Packaging for the Offender Registry dashboard backend.

Installs the `offender_registry` package along with everything the Flask server,
the command line tools and the test suite need.
"""
import setuptools

REQUIRED_PACKAGES = [
    "attrs",
    "Flask",
    "Flask-Limiter",
    "Flask-WTF",
    "gunicorn",
    "marshmallow>=3.18",
    # Postgres driver for deployed environments; local runs and tests use SQLite.
    "psycopg2-binary",
    "sentry-sdk[flask]",
    "SQLAlchemy>=1.4",
    "Werkzeug",
]

TEST_PACKAGES = [
    "pytest",
]

setuptools.setup(
    name="offender-registry",
    version="1.0.0",
    install_requires=REQUIRED_PACKAGES,
    extras_require={"test": TEST_PACKAGES},
    packages=setuptools.find_packages(include=["offender_registry", "offender_registry.*"]),
    python_requires=">=3.8",
)
