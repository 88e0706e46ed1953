# ****************************************************************************
#
# Copyright (C) 2024-2026, PgaCalc Developers.
# This file is part of PgaCalc.
#
# PgaCalc is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# PgaCalc is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# with this download. If not, see <http://www.gnu.org/licenses/>
#
# ****************************************************************************
"""
Catalog of ground-motion model identifiers.

The catalog is closed: weight documents and logic trees may only refer
to the members listed here. The identifiers follow the USGS National
Seismic Hazard Model naming.
"""

from enum import Enum


class Gmm(Enum):
    """
    Ground-motion model identifier. The value is the display name.
    """

    # Western US (NGA-West2)
    ASK_14 = 'Abrahamson et al. (2014)'
    BSSA_14 = 'Boore et al. (2014)'
    CB_14 = 'Campbell & Bozorgnia (2014)'
    CY_14 = 'Chiou & Youngs (2014)'
    IDRISS_14 = 'Idriss (2014)'

    # Central & Eastern US
    AB_06_PRIME = "Atkinson & Boore (2006): Prime"
    ATKINSON_08_PRIME = "Atkinson (2008): Prime"
    CAMPBELL_03 = 'Campbell (2003)'
    FRANKEL_96 = 'Frankel et al. (1996)'
    PEZESHK_11 = 'Pezeshk et al. (2011)'
    SILVA_02 = 'Silva et al. (2002)'
    SOMERVILLE_01 = 'Somerville et al. (2001)'
    TP_05 = 'Tavakoli & Pezeshk (2005)'
    TORO_97_MW = 'Toro et al. (1997)'

    def __str__(self):
        return self.name

    @property
    def label(self):
        return self.value

    @classmethod
    def from_string(cls, name):
        """
        Resolve an identifier. Unknown identifiers raise ``KeyError``.
        """
        if not isinstance(name, str) or not name.strip():
            raise KeyError('GMM identifier must be a non-empty string.')
        try:
            return cls[name.strip()]
        except KeyError:
            raise KeyError(f'Unknown GMM identifier {name!r}')
