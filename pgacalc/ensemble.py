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
Weighted combination of ground-motion model predictions.
"""

import logging

import numpy as _np

logger = logging.getLogger(__name__)


def _sort_key(model):
    return getattr(model, 'name', str(model))


def combine(weights, means):
    """
    Combine log-domain model means into a single linear estimate.

    Each mean is exponentiated, multiplied by its weight and summed.
    The sum is divided by the total weight unless the total is exactly
    0 or exactly 1.

    Parameters
    ----------
    weights : mapping
        Model -> weight.
    means : mapping
        Model -> natural log of the predicted mean; must hold every
        model of ``weights``.

    Returns
    -------
    float
        Combined estimate; 0.0 for an empty mapping (no applicable
        model, not a zero ground motion).

    Raises
    ------
    KeyError
        If a weighted model has no mean.
    """
    models = sorted(weights, key=_sort_key)
    if not models:
        return 0.0

    wts = _np.array([float(weights[m]) for m in models])
    linear = _np.exp(_np.array([float(means[m]) for m in models]))

    for model, wt, mean in zip(models, wts, linear):
        logger.info('Gmm %s, Weight %f, Mean %.10f', model, wt, mean)

    value = float(_np.sum(wts * linear))
    total = float(_np.sum(wts))

    if total != 0.0 and total != 1.0:
        value /= total

    return value


def evaluate_ensemble(weights, inputs, evaluate, imt='PGA'):
    """
    Evaluate every weighted model and combine the results.

    Parameters
    ----------
    weights : mapping
        Model -> weight, as returned by
        :meth:`pgacalc.modelset.WeightedModelSet.select`.
    inputs : GmmInput
        Rupture and site parameters.
    evaluate : callable
        ``evaluate(model, inputs, imt)`` returning the log mean, e.g.
        :meth:`pgacalc.gmm.registry.GmmRegistry.evaluate_mean`.
    imt : str, optional
        Intensity measure type.
    """
    means = {m: evaluate(m, inputs, imt) for m in sorted(weights,
                                                         key=_sort_key)}
    return combine(weights, means)
