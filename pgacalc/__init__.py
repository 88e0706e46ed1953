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
PgaCalc
=======

Deterministic peak ground acceleration from a weighted ensemble of
ground-motion models.

Example
-------
>>> from pgacalc import classify, load_weighted_model_set
>>> region = classify(34.05, -118.25)
>>> model_sets = load_weighted_model_set(region, 'gmm.xml')
>>> weights = model_sets.select(50.0)
"""

from pgacalc.config import PGACALC_VERSION as __version__
from pgacalc.ensemble import combine, evaluate_ensemble
from pgacalc.errors import (
    ConfigurationError,
    ParserExpiredError,
    PgaCalcError,
    ResourceNotFoundError,
    ValidationError,
)
from pgacalc.modelset import ModelSet, UncertaintyDistribution, WeightedModelSet
from pgacalc.parser import (
    ModelSetParser,
    WeightSetMachine,
    gmm_weight_map,
    load_weighted_model_set,
)
from pgacalc.regions import Region, classify

__all__ = [
    "ConfigurationError",
    "ModelSet",
    "ModelSetParser",
    "ParserExpiredError",
    "PgaCalcError",
    "Region",
    "ResourceNotFoundError",
    "UncertaintyDistribution",
    "ValidationError",
    "WeightSetMachine",
    "WeightedModelSet",
    "classify",
    "combine",
    "evaluate_ensemble",
    "gmm_weight_map",
    "load_weighted_model_set",
]
