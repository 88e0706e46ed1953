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
Unit tests for :mod:`pgacalc.libutils.geodetic`.
"""

from __future__ import annotations

import unittest
from math import isclose

from pgacalc.libutils.geodetic import (
    DEG2RAD,
    MEAN_EARTH_RADIUS_KM,
    WgsPoint,
    horizontal_distance_fast,
    rupture_distance,
)

DEGREE_KM = MEAN_EARTH_RADIUS_KM * DEG2RAD


class TestGeodeticDistance(unittest.TestCase):

    def test_zero_distance(self):
        p = WgsPoint(-118.0, 34.0)
        self.assertEqual(horizontal_distance_fast(p, p), 0.0)

    def test_one_degree_of_latitude(self):
        p1 = WgsPoint(-90.0, 35.0)
        p2 = WgsPoint(-90.0, 36.0)
        self.assertTrue(isclose(horizontal_distance_fast(p1, p2),
                                DEGREE_KM, rel_tol=1e-12))

    def test_longitude_scaled_by_latitude(self):
        p1 = WgsPoint(0.0, 60.0)
        p2 = WgsPoint(1.0, 60.0)
        self.assertTrue(isclose(horizontal_distance_fast(p1, p2),
                                0.5 * DEGREE_KM, rel_tol=1e-6))

    def test_reference_distance(self):
        # Los Angeles to a point about 170 km north-east
        site = WgsPoint(-118.25, 34.05)
        source = WgsPoint(-117.0, 35.2)
        self.assertAlmostEqual(site.horizontal_distance_to(source), 171.56,
                               delta=0.05)

    def test_symmetry(self):
        p1 = WgsPoint(-100.0, 40.0)
        p2 = WgsPoint(-95.0, 42.0)
        self.assertEqual(horizontal_distance_fast(p1, p2),
                         horizontal_distance_fast(p2, p1))

    def test_rupture_distance(self):
        self.assertEqual(rupture_distance(30.0, 40.0), 50.0)
        self.assertEqual(rupture_distance(30.0, 0.0), 30.0)

    def test_point(self):
        p = WgsPoint(13.0, 46.0, 10.0)
        self.assertEqual(p.to_tuple(), (13.0, 46.0))
        self.assertEqual(p.depth, 10.0)


if __name__ == '__main__':
    unittest.main()
