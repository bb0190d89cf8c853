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
"""Tests for the Flask config."""
import os
from unittest import TestCase
from unittest.mock import patch

from offender_registry.config import DEFAULT_DB_URL, Config
from offender_registry.dashboard.authorization import UserFileAuthenticator


class TestConfig(TestCase):
    """Tests for the Flask config."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        config = Config()

        self.assertEqual(config.DB_URL, DEFAULT_DB_URL)
        self.assertTrue(config.SECRET_KEY)
        self.assertTrue(config.WTF_CSRF_ENABLED)
        self.assertIsNone(config.SENTRY_DSN)
        self.assertIsInstance(config.AUTHENTICATOR, UserFileAuthenticator)

    @patch.dict(
        os.environ,
        {
            "DATABASE_URL": "postgresql://localhost/registry",
            "SECRET_KEY": "from-env",
            "USERS_FILE": "/etc/registry/users.json",
        },
    )
    def test_from_environment(self) -> None:
        config = Config()

        self.assertEqual(config.DB_URL, "postgresql://localhost/registry")
        self.assertEqual(config.SECRET_KEY, "from-env")
        self.assertEqual(config.AUTHENTICATOR.users_file, "/etc/registry/users.json")

    @patch.dict(os.environ, {}, clear=True)
    def test_secret_key_required_when_deployed(self) -> None:
        with patch("offender_registry.config.in_test", return_value=False):
            with self.assertRaises(ValueError):
                Config()
