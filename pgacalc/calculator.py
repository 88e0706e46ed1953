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
Deterministic PGA of a scenario earthquake at a site.

The site region selects a model weight configuration, the epicentral
distance selects its weights, and the weighted models are combined.
"""

import logging
from dataclasses import dataclass
from typing import Mapping

from pgacalc.config import GMM_FILENAME, PGACALC_VERSION, RESOURCE_DIRNAME
from pgacalc.ensemble import evaluate_ensemble
from pgacalc.errors import ValidationError
from pgacalc.gmm.base import GmmInput
from pgacalc.gmm.catalog import Gmm
from pgacalc.libutils import validation as val
from pgacalc.libutils.geodetic import (
    WgsPoint,
    horizontal_distance_fast,
    rupture_distance,
)
from pgacalc.libutils.resources import open_resource
from pgacalc.parser import gmm_weight_map
from pgacalc.regions import Region, classify

logger = logging.getLogger(__name__)

#: Regions with a model weight configuration.
SUPPORTED_REGIONS = (Region.CEUS, Region.COUS, Region.WUS)

IMT = 'PGA'


@dataclass(frozen=True)
class PgaResult:
    """
    Outcome of :func:`calc_pga`.

    Attributes
    ----------
    value : float
        Peak ground acceleration (g). Zero when ``has_estimate`` is
        False.
    region : Region
        Region of the site.
    distance : float
        Site to epicentre distance (km).
    inputs : GmmInput
        Parameters given to the models.
    weights : mapping
        Models and weights used.
    has_estimate : bool
        False if no model applies at this distance.
    """

    value: float
    region: Region
    distance: float
    inputs: GmmInput
    weights: Mapping[Gmm, float]
    has_estimate: bool

    def __str__(self):
        return f'{self.value:f}'


def check_region(region):
    """
    Raise :class:`ValidationError` if ``region`` has no configuration.
    """
    if region not in SUPPORTED_REGIONS:
        raise ValidationError(f'region is not supported: {region}')
    return region


def calc_pga(site_name, site_lon, site_lat, eq_mag, eq_lon, eq_lat,
             eq_depth, vs30=None, *, source=None, evaluate=None,
             secondary_gated=False, resource_dir=RESOURCE_DIRNAME):
    """
    Compute the deterministic PGA at a site.

    Numeric arguments may be numbers or strings (command line text).

    Parameters
    ----------
    site_name : str
        Label of the site, used in log messages only.
    site_lon, site_lat : float or str
        Site coordinates (decimal degrees).
    eq_mag : float or str
        Moment magnitude.
    eq_lon, eq_lat : float or str
        Epicentre coordinates (decimal degrees).
    eq_depth : float or str
        Hypocentral depth (km).
    vs30 : float or str, optional
        Site vs30 (m/s); 760 if omitted.
    source : str or file object, optional
        Model weight document (default ``gmm.xml``). Names are looked
        up as paths, in ``resource_dir`` and then in the package data.
    evaluate : callable, optional
        ``evaluate(gmm, inputs, imt)`` returning the log mean; by default
        the models of the packaged GMM registry are used.
    secondary_gated : bool, optional
        Selection policy of the far-field weight set.
    resource_dir : str, optional
        Directory searched for resources.

    Returns
    -------
    PgaResult

    Raises
    ------
    ValidationError
        If an argument is out of range or the region is not supported.
    ConfigurationError
        If the weight document is invalid.
    ResourceNotFoundError
        If the weight document cannot be found.
    """
    logger.info(f'PgaCalc v{PGACALC_VERSION}')

    mag = val.check_magnitude(eq_mag)
    site = WgsPoint(val.check_longitude(site_lon),
                    val.check_latitude(site_lat))

    region = check_region(classify(site.latitude, site.longitude))

    depth = val.check_depth(eq_depth)
    epicentre = WgsPoint(val.check_longitude(eq_lon),
                         val.check_latitude(eq_lat), depth)
    vs30 = val.check_vs30(vs30)

    distance = horizontal_distance_fast(site, epicentre)
    rjb = rx = distance
    rrup = rupture_distance(distance, depth)

    if source is None:
        source = GMM_FILENAME

    if isinstance(source, str):
        with open_resource(source, resource_dir) as stream:
            weights = gmm_weight_map(region, distance, stream,
                                     secondary_gated=secondary_gated)
    else:
        weights = gmm_weight_map(region, distance, source,
                                 secondary_gated=secondary_gated)

    logger.info('site=%s, region=%s, mag=%f, depth=%f, rJB=%f, rX=%f, '
                'rRup=%f, vs30=%f', site_name, region, mag, depth,
                rjb, rx, rrup, vs30)

    inputs = GmmInput.with_defaults(magnitude=mag, rjb=rjb, rx=rx,
                                    rrup=rrup, vs30=vs30)

    if not weights:
        logger.warning(f'No ground motion model applies to {region} '
                       f'at {distance:.1f} km')
        return PgaResult(0.0, region, distance, inputs, weights, False)

    if evaluate is None:
        evaluate = _default_evaluate()

    value = evaluate_ensemble(weights, inputs, evaluate, IMT)
    logger.info(f'PGA={value:f}')

    return PgaResult(value, region, distance, inputs, weights, True)


def _default_evaluate():
    from pgacalc.gmm.registry import load_registry

    return load_registry().evaluate_mean
