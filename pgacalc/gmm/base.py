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
"""

import abc as _abc
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class GmmInput:
    """
    Rupture and site parameters passed to a ground-motion model.

    Distances are in kilometers, vs30 in m/s, z1p0 in meters and
    z2p5 in kilometers. Missing basin depths are left to the model.
    """

    magnitude: float = 6.5
    rjb: float = 10.0
    rrup: float = 10.3
    rx: float = 10.0
    dip: float = 90.0
    width: float = 14.0
    ztor: float = 0.5
    zhyp: float = 7.5
    rake: float = 0.0
    vs30: float = 760.0
    vs_inferred: bool = True
    z1p0: Optional[float] = None
    z2p5: Optional[float] = None

    @classmethod
    def with_defaults(cls, **kwargs):
        return cls(**kwargs)

    def replace(self, **kwargs):
        return replace(self, **kwargs)


class GroundMotionModel(metaclass=_abc.ABCMeta):
    """
    Base class for ground motion prediction equation models (GMPEs).
    """

    @property
    @_abc.abstractmethod
    def REFERENCE_VELOCITY(self):
        pass

    @property
    @_abc.abstractmethod
    def DISTANCE_METRIC(self):
        pass

    @property
    @_abc.abstractmethod
    def MAGNITUDE_TYPE(self):
        pass

    @_abc.abstractmethod
    def ground_motion(self, imt, inputs):
        """
        Return (mean, stdv) of the natural log of the intensity measure
        (g for PGA and SA) for the given :class:`GmmInput`.
        """
        pass

    def mean(self, imt, inputs):
        """
        Natural-log mean only.
        """
        return float(self.ground_motion(imt, inputs)[0])
