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
"""Constants for the fixed catalog of incarceration facilities.

The catalog is a reference table that lives in code rather than in the
database: incarceration statuses store the integer key only.
"""

import enum
from typing import Any, Dict, List


class Facility(enum.Enum):
    """Every facility an incarceration status may reference, keyed by catalog id."""

    EL_ALTIPLANO = 1
    PUENTE_GRANDE = 2
    ISLAS_MARIAS = 3
    RECLUSORIO_NORTE = 4
    RECLUSORIO_ORIENTE = 5
    RECLUSORIO_SUR = 6
    EL_HONGO = 7
    CERESO_CANCUN = 8
    TIZAYUCA = 9
    CERESO_ACAPULCO = 10

    @property
    def display_name(self) -> str:
        return _FACILITY_NAMES[self]

    @classmethod
    def is_facility_id(cls, facility_id: Any) -> bool:
        try:
            cls(int(facility_id))
            return True
        except (TypeError, ValueError):
            return False

    @classmethod
    def to_json(cls) -> List[Dict[str, Any]]:
        return [
            {"id": facility.value, "name": facility.display_name} for facility in cls
        ]


_FACILITY_NAMES: Dict[Facility, str] = {
    Facility.EL_ALTIPLANO: "El Altiplano (oficialmente CEFERESO n.º 1, en Almoloya de Juárez, Estado de México)",
    Facility.PUENTE_GRANDE: "Puente Grande (oficialmente CEFERESO n.º 2 Occidente, en Jalisco)",
    Facility.ISLAS_MARIAS: "Islas Marías (antigua colonia penal federal, en Nayarit)",
    Facility.RECLUSORIO_NORTE: "Reclusorio Norte (Ciudad de México)",
    Facility.RECLUSORIO_ORIENTE: "Reclusorio Oriente (Ciudad de México)",
    Facility.RECLUSORIO_SUR: "Reclusorio Sur (Ciudad de México)",
    Facility.EL_HONGO: "El Hongo (en Baja California)",
    Facility.CERESO_CANCUN: "Cereso de Cancún (Centro de Reinserción Social Benito Juárez, en Quintana Roo)",
    Facility.TIZAYUCA: "Cárcel Distrital de Tizayuca (en Hidalgo)",
    Facility.CERESO_ACAPULCO: "Cereso de Acapulco (Centro Regional de Reinserción Social de Acapulco de Juárez, en Guerrero)",
}

MIN_FACILITY_ID = min(facility.value for facility in Facility)
MAX_FACILITY_ID = max(facility.value for facility in Facility)
