# -*- coding: utf-8 -*-
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
Geodetic helpers for source-to-site distances.

Conventions
-----------
* Geographic coordinates are (longitude, latitude) in decimal degrees.
* Depths are positive downward, in kilometers.
* Unlike the metric toolkits, distances here are returned in kilometers,
  which is the unit expected by ground-motion models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

Number = Union[float, int]

#: Mean Earth radius in kilometers (IUGG 2015 value).
MEAN_EARTH_RADIUS_KM: float = 6371.0088

#: Degrees-to-radians conversion factor.
DEG2RAD: float = np.pi / 180.0


@dataclass(frozen=True)
class WgsPoint:
    """
    Simple WGS84 point.

    Parameters
    ----------
    longitude : float
        Longitude in degrees.
    latitude : float
        Latitude in degrees.
    depth : float, optional
        Depth below the surface in kilometers (default 0.0).
    """

    longitude: float
    latitude: float
    depth: float = 0.0

    def to_tuple(self) -> Tuple[float, float]:
        """
        Return the point as a (lon, lat) tuple.
        """
        return self.longitude, self.latitude

    def horizontal_distance_to(self, other: 'WgsPoint') -> float:
        """
        Fast approximate surface distance to another point, in kilometers.
        """
        return horizontal_distance_fast(self, other)


def horizontal_distance_fast(source, site,
                             radius_km: float = MEAN_EARTH_RADIUS_KM
                             ) -> float:
    """
    Approximate surface distance using an equirectangular projection.

    The longitude difference is scaled by the cosine of the mean
    latitude. The error is negligible at the distances over which
    ground-motion models apply (a few hundred kilometers) and grows
    with separation and latitude.

    Parameters
    ----------
    source, site : object
        Objects exposing ``longitude`` and ``latitude`` in degrees.
    radius_km : float, optional
        Sphere radius in kilometers.

    Returns
    -------
    float
        Distance in kilometers.
    """
    lat1 = source.latitude * DEG2RAD
    lat2 = site.latitude * DEG2RAD

    dlat = lat1 - lat2
    dlon = (source.longitude - site.longitude) * DEG2RAD
    dlon *= np.cos(0.5 * (lat1 + lat2))

    return float(radius_km * np.sqrt(dlat * dlat + dlon * dlon))


def rupture_distance(distance: Number, depth: Number) -> float:
    """
    Distance to a point rupture at ``depth`` below an epicentre located
    ``distance`` kilometers away.
    """
    return float(np.hypot(distance, depth))
