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
OpenQuake adapter - TEST
"""
import json
from importlib import resources
from types import SimpleNamespace

import numpy as np
import pytest

from pgacalc.gmm.base import GmmInput
from pgacalc.gmm.catalog import Gmm
from pgacalc.gmm.oqgsim import (
    OpenQuakeGsim,
    z1pt0_from_vs30,
    z2pt5_from_vs30,
)
from pgacalc.gmm.registry import load_registry


def test_basin_depths_decrease_with_vs30():
    vs30 = np.array([200., 400., 760., 1200.])
    assert np.all(np.diff(z1pt0_from_vs30(vs30)) < 0)
    assert np.all(np.diff(z2pt5_from_vs30(vs30)) < 0)


def test_basin_depth_reference_values():
    # About 41 m at 760 m/s
    assert z1pt0_from_vs30(760.) == pytest.approx(41.3, abs=0.2)
    assert z2pt5_from_vs30(760.) == pytest.approx(0.607, abs=0.01)


def test_openquake_gsim():
    pytest.importorskip('openquake.hazardlib')

    gsim = OpenQuakeGsim('BooreEtAl2014')
    near = gsim.mean('PGA', GmmInput(magnitude=6.5, rjb=10., rrup=12.))
    far = gsim.mean('PGA', GmmInput(magnitude=6.5, rjb=100., rrup=101.))
    assert np.isfinite(near)
    assert near > far


# hazardlib class behind each catalog member
OPENQUAKE_GSIMS = {
    Gmm.ASK_14: 'AbrahamsonEtAl2014',
    Gmm.BSSA_14: 'BooreEtAl2014',
    Gmm.CB_14: 'CampbellBozorgnia2014',
    Gmm.CY_14: 'ChiouYoungs2014',
    Gmm.IDRISS_14: 'Idriss2014',
    Gmm.AB_06_PRIME: 'AtkinsonBoore2006Modified2011',
    Gmm.ATKINSON_08_PRIME: 'Atkinson2008prime',
    Gmm.CAMPBELL_03: 'Campbell2003MwNSHMP2008',
    Gmm.FRANKEL_96: 'FrankelEtAl1996MwNSHMP2008',
    Gmm.PEZESHK_11: 'PezeshkEtAl2011NEHRPBC',
    Gmm.SILVA_02: 'SilvaEtAl2002MwNSHMP2008',
    Gmm.SOMERVILLE_01: 'SomervilleEtAl2001NSHMP2008',
    Gmm.TP_05: 'TavakoliPezeshk2005MwNSHMP2008',
    Gmm.TORO_97_MW: 'ToroEtAl1997MwNSHMP2008',
}


def _packaged_registry():
    data = resources.files('pgacalc.gmm').joinpath('registry.json')
    with data.open('r', encoding='utf-8') as f:
        return json.load(f)['gmmmap']


def test_registry_gsim_names():
    gmmmap = _packaged_registry()
    assert set(gmmmap) == {g.name for g in OPENQUAKE_GSIMS}

    for gmm, gsim in OPENQUAKE_GSIMS.items():
        entry = gmmmap[gmm.name]
        assert entry['pointer'] == 'pgacalc.gmm.oqgsim:OpenQuakeGsim'
        assert entry['options'] == {'gsim': gsim}


def test_registry_resolves_adapter(monkeypatch):
    monkeypatch.delenv('PGACALC_GMM_REGISTRY', raising=False)
    registry = load_registry()
    for gmm in Gmm:
        assert registry.get_gmm_class(gmm) is OpenQuakeGsim


def _unbound_gsim():
    # Skips __init__, which needs the hazardlib
    return object.__new__(OpenQuakeGsim)


def test_build_context_fills_given_context():
    inputs = GmmInput(magnitude=6.8, rjb=20., rrup=25., rx=18., dip=60.,
                      width=12., ztor=2., zhyp=8., rake=90., vs30=400.,
                      vs_inferred=False, z2p5=1.5)
    target = SimpleNamespace()

    ctx = _unbound_gsim().build_context(inputs, target)

    assert ctx is target
    assert ctx.mag == 6.8
    assert ctx.rake == 90.
    assert ctx.dip == 60.
    assert ctx.ztor == 2.
    assert ctx.width == 12.
    assert ctx.hypo_depth == 8.
    np.testing.assert_array_equal(ctx.sids, [0])
    np.testing.assert_array_equal(ctx.rjb, [20.])
    np.testing.assert_array_equal(ctx.rrup, [25.])
    np.testing.assert_array_equal(ctx.rx, [18.])
    np.testing.assert_array_equal(ctx.ry0, [0.])
    np.testing.assert_array_equal(ctx.repi, [20.])
    np.testing.assert_allclose(ctx.rhypo, [np.hypot(20., 8.)])
    np.testing.assert_array_equal(ctx.vs30, [400.])
    np.testing.assert_array_equal(ctx.vs30measured, [True])
    np.testing.assert_allclose(ctx.z1pt0, [z1pt0_from_vs30(400.)])
    np.testing.assert_array_equal(ctx.z2pt5, [1.5])


def test_build_context_defaults():
    ctx = _unbound_gsim().build_context(GmmInput(), SimpleNamespace())

    np.testing.assert_array_equal(ctx.vs30, [760.])
    np.testing.assert_array_equal(ctx.vs30measured, [False])
    np.testing.assert_allclose(ctx.z1pt0, [z1pt0_from_vs30(760.)])
    np.testing.assert_allclose(ctx.z2pt5, [z2pt5_from_vs30(760.)])
    assert ctx.z1pt0.shape == ctx.z2pt5.shape == (1,)
