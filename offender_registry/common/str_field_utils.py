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
"""Helpers for normalizing the free-text fields submitted through the API."""
from typing import Any, Optional


def snake_to_camel(s: str) -> str:
    """Converts a snake case string (e.g. "paternal_surname") to a camel case string
    (e.g. "paternalSurname")."""
    parts = iter(s.split("_"))
    return next(parts) + "".join(i.title() for i in parts)


def blank_to_none(value: Any) -> Any:
    """Returns None for empty or whitespace-only strings, leaving every other value
    untouched. Used so that an optional field left blank is stored as absent rather
    than as an empty string."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_name(value: Optional[str]) -> Optional[str]:
    """Collapses internal runs of whitespace and strips the ends of a name."""
    if value is None:
        return None
    return " ".join(value.split())
