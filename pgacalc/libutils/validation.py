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
Range checks for earthquake and site parameters.

Each ``check_*`` function accepts a number or a string and returns the
validated float, raising :class:`pgacalc.errors.ValidationError`
otherwise.
"""

from math import isfinite

from pgacalc.errors import ValidationError

# (min, max, closed)
LATITUDE_RANGE = (-90.0, 90.0, True)
LONGITUDE_RANGE = (-360.0, 360.0, False)
MAGNITUDE_RANGE = (-2.0, 9.7, True)
DEPTH_RANGE = (-5.0, 700.0, True)
VS30_RANGE = (150.0, 1500.0, True)

VS30_DEFAULT = 760.0


def parse_float(value):
    """
    Convert text (or a number) to a finite float.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Illegal double value ({value})')

    if not isfinite(number):
        raise ValidationError(f'Illegal double value ({value})')

    return number


def _check_range(value, limits, name, unit):
    number = parse_float(value)
    lo, hi, closed = limits

    if closed:
        inside = lo <= number <= hi
        interval = f'[{lo}..{hi}]'
    else:
        inside = lo < number < hi
        interval = f'({lo}..{hi})'

    if not inside:
        raise ValidationError(
            f'{name} [{number}] must be in the range {interval}{unit}'
        )
    return number


def check_latitude(value):
    """Ensure that -90 <= latitude <= 90 degrees."""
    return _check_range(value, LATITUDE_RANGE, 'Latitude', ' deg')


def check_longitude(value):
    """Ensure that -360 < longitude < 360 degrees."""
    return _check_range(value, LONGITUDE_RANGE, 'Longitude', ' deg')


def check_magnitude(value):
    """Ensure that -2.0 <= magnitude <= 9.7."""
    return _check_range(value, MAGNITUDE_RANGE, 'Magnitude', '')


def check_depth(value):
    """Ensure that -5 <= depth <= 700 km."""
    return _check_range(value, DEPTH_RANGE, 'Depth', ' km')


def check_vs30(value):
    """
    Ensure that 150 <= vs30 <= 1500 m/s. ``None`` returns the default.
    """
    if value is None:
        return VS30_DEFAULT
    try:
        return _check_range(value, VS30_RANGE, 'Vs30', ' m/s')
    except ValidationError as e:
        raise ValidationError(f'invalid vs30 argument ({value}): {e}')


def range_text(limits):
    """
    Return the bounds of a range as a ``(min, max)`` pair of strings,
    used to build the command line help.
    """
    lo, hi, _ = limits
    return str(lo), str(hi)
