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
"""Tools for working with environment variables.

Developers set IS_DEV locally, and the test suite flips a flag on the top-level
package from conftest.py.
"""
import os

import offender_registry


def in_development() -> bool:
    return os.environ.get("IS_DEV") == "true"


def in_test() -> bool:
    """Check whether we are running in a test"""
    # Pytest sets offender_registry.called_from_test in conftest.py
    return getattr(offender_registry, "called_from_test", False)
