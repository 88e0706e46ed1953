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
Shared fixtures.
"""
import io
import textwrap

import pytest


def xml_source(text):
    """
    Binary stream of an XML document written inline in a test.
    """
    return io.BytesIO(textwrap.dedent(text).strip().encode('utf-8'))


@pytest.fixture
def make_xml():
    return xml_source


@pytest.fixture
def wus_document():
    return xml_source("""
        <GroundMotionModels>
          <ModelSet id="CEUS" maxDistance="500.0">
            <Model id="AB_06_PRIME" weight="1.0"/>
          </ModelSet>
          <ModelSet id="WUS" maxDistance="200.0">
            <Model id="ASK_14" weight="0.6"/>
            <Model id="BSSA_14" weight="0.4"/>
          </ModelSet>
        </GroundMotionModels>
        """)


@pytest.fixture
def constant_means():
    """
    Evaluation callable returning ln(0.1) for every model, recording
    the calls.
    """
    calls = []

    def evaluate(gmm, inputs, imt):
        calls.append((gmm, inputs, imt))
        return -2.302585092994046

    evaluate.calls = calls
    return evaluate
