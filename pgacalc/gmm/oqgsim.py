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
Ground-motion models evaluated through the OpenQuake hazardlib.

The hazardlib is an optional dependency (``pip install pgacalc[oq]``);
it is imported when a model is instantiated, so that the rest of the
package works without it.
"""

import numpy as _np

from pgacalc.gmm.base import GroundMotionModel


def z1pt0_from_vs30(vs30):
    """
    Depth to the 1.0 km/s shear-wave horizon (m) from vs30 (m/s),
    California relation of Chiou & Youngs (2014).
    """
    return _np.exp(-7.15 / 4. * _np.log((vs30**4 + 571.**4) /
                                        (1360.**4 + 571.**4)))


def z2pt5_from_vs30(vs30):
    """
    Depth to the 2.5 km/s shear-wave horizon (km) from vs30 (m/s),
    California relation of Campbell & Bozorgnia (2014).
    """
    return _np.exp(7.089 - 1.144 * _np.log(vs30))


class OpenQuakeGsim(GroundMotionModel):
    """
    Adapter around an OpenQuake GSIM class.

    Parameters
    ----------
    gsim : str
        Name of the hazardlib GSIM class (e.g. "BooreEtAl2014").
    """

    REFERENCE_VELOCITY = 760.
    DISTANCE_METRIC = 'rupture'
    MAGNITUDE_TYPE = 'Mw'

    def __init__(self, gsim):
        from openquake.hazardlib import valid

        self.gsim_name = gsim
        self.gsim = valid.gsim(gsim)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.gsim_name!r})'

    def build_context(self, inputs, ctx=None):
        """
        Fill an OpenQuake rupture context for a single site.

        Parameters
        ----------
        inputs : GmmInput
            Rupture and site parameters.
        ctx : object, optional
            Context to fill; a new ``RuptureContext`` by default.
        """
        if ctx is None:
            from openquake.hazardlib.contexts import RuptureContext
            ctx = RuptureContext()

        def _site(value):
            return _np.array([float(value)])

        z1p0 = inputs.z1p0
        if z1p0 is None:
            z1p0 = z1pt0_from_vs30(inputs.vs30)

        z2p5 = inputs.z2p5
        if z2p5 is None:
            z2p5 = z2pt5_from_vs30(inputs.vs30)

        ctx.sids = _np.array([0])

        # Rupture
        ctx.mag = float(inputs.magnitude)
        ctx.rake = float(inputs.rake)
        ctx.dip = float(inputs.dip)
        ctx.ztor = float(inputs.ztor)
        ctx.width = float(inputs.width)
        ctx.hypo_depth = float(inputs.zhyp)

        # Distances
        ctx.rjb = _site(inputs.rjb)
        ctx.rrup = _site(inputs.rrup)
        ctx.rx = _site(inputs.rx)
        ctx.ry0 = _site(0.)
        ctx.repi = _site(inputs.rjb)
        ctx.rhypo = _site(_np.hypot(inputs.rjb, inputs.zhyp))

        # Site
        ctx.vs30 = _site(inputs.vs30)
        ctx.vs30measured = _np.array([not inputs.vs_inferred])
        ctx.z1pt0 = _site(z1p0)
        ctx.z2pt5 = _site(z2p5)

        return ctx

    def ground_motion(self, imt, inputs):
        from openquake.hazardlib import const
        from openquake.hazardlib.imt import from_string

        ctx = self.build_context(inputs)

        mean, stddevs = self.gsim.get_mean_and_stddevs(
            ctx, ctx, ctx, from_string(imt), [const.StdDev.TOTAL])

        return (float(_np.ravel(mean)[0]),
                float(_np.ravel(stddevs[0])[0]))
