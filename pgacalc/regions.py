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
Geographic regions used to select a model weight configuration.

Regions are rectangular latitude/longitude boxes. They may overlap: the
Conterminous US box contains both the Western US and the Central &
Eastern US boxes, which in turn overlap between 115W and 100W.
"""

from enum import Enum
from math import isfinite

import shapely
from shapely.geometry import box


class Region(Enum):
    """
    Named region with a bounding box.

    Values are (label, min latitude, max latitude, min longitude,
    max longitude).
    """

    AK = ('Alaska', 48.0, 72.0, -200.0, -125.0)
    CEUS = ('Central & Eastern US', 24.6, 50.0, -115.0, -65.0)
    COUS = ('Conterminous US', 24.6, 50.0, -125.0, -65.0)
    GLOBAL = ('Global', -90.0, 90.0, -180.0, 180.0)
    WUS = ('Western US', 24.6, 50.0, -125.0, -100.0)

    def __init__(self, label, min_latitude, max_latitude,
                 min_longitude, max_longitude):
        self.label = label
        self.min_latitude = min_latitude
        self.max_latitude = max_latitude
        self.min_longitude = min_longitude
        self.max_longitude = max_longitude

    def __str__(self):
        return self.name

    @property
    def bounds(self):
        """
        Bounding box as (min lon, min lat, max lon, max lat).
        """
        return (self.min_longitude, self.min_latitude,
                self.max_longitude, self.max_latitude)

    @property
    def geometry(self):
        """
        Bounding box as a shapely polygon (x = longitude).
        """
        return box(*self.bounds)

    def contains(self, latitude, longitude):
        """
        True if the point lies inside the box or on its boundary.
        """
        if not (isfinite(latitude) and isfinite(longitude)):
            return False
        return bool(shapely.intersects_xy(self.geometry,
                                          longitude, latitude))

    @classmethod
    def from_string(cls, name):
        """
        Resolve a region from its (case-insensitive) member name.
        """
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            available = ', '.join(r.name for r in cls)
            raise KeyError(
                f'Unknown region {name!r}. Available: {available}'
            )


def split_conterminous(longitude):
    """
    Split a Conterminous US longitude into Western or Central & Eastern
    US. Longitudes in the band where the two boxes overlap stay in the
    Conterminous US region.
    """
    if longitude <= Region.CEUS.min_longitude:
        return Region.WUS
    if longitude >= Region.WUS.max_longitude:
        return Region.CEUS
    return Region.COUS


def classify(latitude, longitude):
    """
    Return the region of a point.

    The Conterminous US box is tested first and resolved further with
    :func:`split_conterminous`; then Alaska; anything else is Global.
    Non-finite coordinates are Global.

    Parameters
    ----------
    latitude, longitude : float
        Coordinates in decimal degrees. Longitudes are not normalized.

    Returns
    -------
    Region
    """
    try:
        latitude = float(latitude)
        longitude = float(longitude)
    except (TypeError, ValueError):
        return Region.GLOBAL

    if Region.COUS.contains(latitude, longitude):
        return split_conterminous(longitude)

    if Region.AK.contains(latitude, longitude):
        return Region.AK

    return Region.GLOBAL
