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
Distance-gated sets of ground-motion model weights.

A region is configured with a primary (near-field) weight set and an
optional secondary (far-field) weight set, each applicable up to a
maximum source-to-site distance. :meth:`WeightedModelSet.select`
returns the weights that apply at a given distance.

Selection policy
----------------
Beyond the primary maximum distance the secondary set is, by default,
an unconditional fallback. With ``secondary_gated=True`` it only
applies up to its own maximum distance, and an empty mapping is
returned farther away.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import fsum, isfinite
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from pgacalc.gmm.catalog import Gmm
from pgacalc.regions import Region

#: Allowed deviation of a weight sum from 1, per entry.
WEIGHT_TOLERANCE = 1e-6

EMPTY_WEIGHTS: Mapping[Gmm, float] = MappingProxyType({})


def check_weights(weights):
    """
    Check that every weight is finite and non-negative and that the
    weights sum to 1.

    The tolerance scales with the number of entries:
    ``|sum - 1| <= WEIGHT_TOLERANCE * max(1, n)``.

    Parameters
    ----------
    weights : iterable of float

    Returns
    -------
    float
        The weight sum.

    Raises
    ------
    ValueError
        If a weight is invalid or the sum differs from 1.
    """
    values = [float(w) for w in weights]

    for w in values:
        if not isfinite(w) or w < 0.0:
            raise ValueError(f'Invalid weight: {w}')

    total = fsum(values)
    tolerance = WEIGHT_TOLERANCE * max(1, len(values))
    if abs(total - 1.0) > tolerance:
        raise ValueError(
            f'Weights must sum to 1 (sum = {total}, '
            f'tolerance = {tolerance:g})'
        )
    return total


@dataclass(frozen=True)
class UncertaintyDistribution:
    """
    Discrete epistemic uncertainty: offsets and their weights.

    Parsed and carried along with a model set; the ensemble combination
    does not use it.
    """

    values: Tuple[float, ...]
    weights: Tuple[float, ...]

    def __post_init__(self):
        if len(self.values) != len(self.weights):
            raise ValueError(
                f'Uncertainty values and weights differ in length '
                f'({len(self.values)} != {len(self.weights)})'
            )
        for w in self.weights:
            if not isfinite(w) or w < 0.0:
                raise ValueError(f'Invalid uncertainty weight: {w}')

    @classmethod
    def from_sequences(cls, values: Sequence[float],
                       weights: Sequence[float]) -> 'UncertaintyDistribution':
        return cls(tuple(float(v) for v in values),
                   tuple(float(w) for w in weights))

    def __len__(self):
        return len(self.values)


@dataclass(frozen=True)
class ModelSet:
    """
    Model weights applicable up to ``max_distance`` (km).
    """

    weights: Mapping[Gmm, float]
    max_distance: float
    uncertainty: Optional[UncertaintyDistribution] = None

    def __post_init__(self):
        if not isfinite(self.max_distance) or self.max_distance < 0.0:
            raise ValueError(
                f'Invalid maximum distance: {self.max_distance}')
        # Freeze a private copy of the mapping
        object.__setattr__(self, 'weights',
                           MappingProxyType(dict(self.weights)))

    def applies(self, distance):
        return distance <= self.max_distance

    def __len__(self):
        return len(self.weights)


@dataclass(frozen=True)
class WeightedModelSet:
    """
    Model weight configuration of one region.

    Instances are immutable and may be shared by concurrent readers.

    Parameters
    ----------
    region : Region
        Region the configuration was parsed for.
    primary : ModelSet, optional
        Near-field weights.
    secondary : ModelSet, optional
        Far-field weights.
    secondary_gated : bool, optional
        Selection policy for the secondary set (see module docs).
    """

    region: Optional[Region] = None
    primary: Optional[ModelSet] = None
    secondary: Optional[ModelSet] = None
    secondary_gated: bool = field(default=False, compare=False)

    @property
    def is_empty(self):
        return self.primary is None and self.secondary is None

    @property
    def map_count(self):
        return sum(s is not None for s in (self.primary, self.secondary))

    def select(self, distance):
        """
        Return the model weights applicable at ``distance`` (km).

        An empty mapping means that no model applies.

        Raises
        ------
        ValueError
            If the distance is negative or not finite.
        """
        distance = float(distance)
        if not isfinite(distance) or distance < 0.0:
            raise ValueError(f'Invalid distance: {distance}')

        if self.primary is None:
            return EMPTY_WEIGHTS

        if self.primary.applies(distance):
            return self.primary.weights

        if self.secondary is None:
            return EMPTY_WEIGHTS

        if self.secondary_gated and not self.secondary.applies(distance):
            return EMPTY_WEIGHTS

        return self.secondary.weights
