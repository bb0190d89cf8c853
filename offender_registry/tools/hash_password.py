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
"""Prints the password hash to store for a user in the dashboard's users file.

Example usage:

python -m offender_registry.tools.hash_password
"""
import argparse
import getpass
import json

from werkzeug.security import generate_password_hash

from offender_registry.dashboard.authorization import UserRole


def user_entry(name: str, role: UserRole, password: str) -> dict:
    return {
        "name": name,
        "role": role.value,
        "password_hash": generate_password_hash(password),
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--username", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument(
        "--role",
        type=UserRole,
        choices=list(UserRole),
        default=UserRole.VIEWER,
    )
    args = parser.parse_args()

    password = getpass.getpass(prompt="Enter password: ")
    print(json.dumps({args.username: user_entry(args.name, args.role, password)}, indent=2))
