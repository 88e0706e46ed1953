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
Weight document parser - TEST
"""
import os

import pytest

from pgacalc.errors import ConfigurationError, ParserExpiredError
from pgacalc.gmm.catalog import Gmm
from pgacalc.parser import (
    ModelSetParser,
    State,
    WeightSetMachine,
    gmm_weight_map,
    load_weighted_model_set,
)
from pgacalc.regions import Region

DATA = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(
    __file__))), 'pgacalc', 'data', 'gmm.xml')


# -----------------------------------------------------------------------------
# State machine

def _feed(machine, events):
    for event in events:
        if event[0] == 'start':
            machine.start(*event[1:])
        else:
            machine.end(*event[1:])
    return machine.result()


def test_machine_states():
    machine = WeightSetMachine(Region.WUS)
    assert machine.state is State.READY

    machine.start('GroundMotionModels', {})
    assert machine.state is State.DOCUMENT

    machine.start('ModelSet', {'id': 'CEUS', 'maxDistance': '500'})
    assert machine.state is State.SKIPPED_SET
    machine.start('Model', {})
    assert machine.state is State.SKIPPED
    machine.end('Model')
    machine.end('ModelSet')

    machine.start('ModelSet', {'id': 'WUS', 'maxDistance': '200'})
    assert machine.state is State.MATCHING_SET
    machine.start('Model', {'id': 'ASK_14', 'weight': '1.0'})
    assert machine.state is State.MODEL
    machine.end('Model')
    machine.end('ModelSet')

    machine.end('GroundMotionModels')
    assert machine.state is State.DONE
    assert dict(machine.result().primary.weights) == {Gmm.ASK_14: 1.0}


def test_machine_without_xml():
    result = _feed(WeightSetMachine('CEUS'), [
        ('start', 'GroundMotionModels', {}),
        ('start', 'ModelSet', {'id': 'CEUS', 'maxDistance': '500'}),
        ('start', 'Uncertainty', {'values': '-0.4 0.0 0.4',
                                  'weights': '0.2,0.6,0.2'}),
        ('end', 'Uncertainty'),
        ('start', 'Model', {'id': 'AB_06_PRIME', 'weight': '0.5'}),
        ('end', 'Model'),
        ('start', 'Model', {'id': 'TP_05', 'weight': '0.5'}),
        ('end', 'Model'),
        ('end', 'ModelSet'),
        ('start', 'ModelSet', {'id': 'CEUS', 'maxDistance': '1000'}),
        ('start', 'Model', {'id': 'TP_05', 'weight': '1'}),
        ('end', 'Model'),
        ('end', 'ModelSet'),
        ('end', 'GroundMotionModels'),
    ])
    assert result.region is Region.CEUS
    assert result.primary.max_distance == 500.0
    assert result.primary.uncertainty.values == (-0.4, 0.0, 0.4)
    assert dict(result.secondary.weights) == {Gmm.TP_05: 1.0}


def test_machine_unusable_after_error():
    machine = WeightSetMachine(Region.WUS)
    with pytest.raises(ConfigurationError):
        machine.start('ModelSet', {'id': 'WUS', 'maxDistance': '1'}, 3)
    assert machine.state is State.FAILED
    with pytest.raises(ParserExpiredError):
        machine.start('GroundMotionModels', {})


def test_machine_incomplete_document():
    machine = WeightSetMachine(Region.WUS)
    machine.start('GroundMotionModels', {})
    with pytest.raises(ConfigurationError, match='Incomplete document'):
        machine.result()


def test_machine_mismatched_end():
    machine = WeightSetMachine(Region.WUS)
    machine.start('GroundMotionModels', {})
    with pytest.raises(ConfigurationError, match='Unexpected end'):
        machine.end('ModelSet', 7)


# -----------------------------------------------------------------------------
# Documents

def test_select_scenario(wus_document):
    weights = gmm_weight_map(Region.WUS, 50.0, wus_document)
    assert dict(weights) == {Gmm.ASK_14: 0.6, Gmm.BSSA_14: 0.4}


def test_no_secondary_far_away(wus_document):
    assert dict(gmm_weight_map('WUS', 500.0, wus_document)) == {}


def test_other_regions_are_skipped(wus_document):
    model_sets = load_weighted_model_set(Region.WUS, wus_document)
    assert model_sets.map_count == 1
    assert Gmm.AB_06_PRIME not in model_sets.primary.weights


def test_region_without_sets(wus_document, caplog):
    with caplog.at_level('WARNING', logger='pgacalc.parser'):
        weights = gmm_weight_map(Region.COUS, 10.0, wus_document)
    assert dict(weights) == {}
    assert 'no map found' in caplog.text


def test_weights_summing_to_half(make_xml):
    source = make_xml("""
        <GroundMotionModels>
          <ModelSet id="WUS" maxDistance="200">
            <Model id="ASK_14" weight="0.25"/>
            <Model id="BSSA_14" weight="0.25"/>
          </ModelSet>
        </GroundMotionModels>
        """)
    with pytest.raises(ConfigurationError) as err:
        load_weighted_model_set(Region.WUS, source)
    assert err.value.element == 'ModelSet'
    assert err.value.line == 2


def test_three_matching_sets(make_xml):
    block = ('<ModelSet id="WUS" maxDistance="{}">'
             '<Model id="ASK_14" weight="1"/></ModelSet>')
    source = make_xml('<GroundMotionModels>' +
                      ''.join(block.format(d) for d in (100, 200, 300)) +
                      '</GroundMotionModels>')
    with pytest.raises(ConfigurationError, match='Only 2'):
        load_weighted_model_set(Region.WUS, source)


def test_third_set_of_other_region_is_fine(make_xml):
    block = ('<ModelSet id="{}" maxDistance="100">'
             '<Model id="ASK_14" weight="1"/></ModelSet>')
    source = make_xml('<GroundMotionModels>' +
                      ''.join(block.format(r) for r in
                              ('WUS', 'CEUS', 'WUS', 'CEUS', 'CEUS')) +
                      '</GroundMotionModels>')
    assert load_weighted_model_set(Region.WUS, source).map_count == 2


def test_parser_is_single_use(wus_document, make_xml):
    parser = ModelSetParser(Region.WUS)
    parser.parse(wus_document)
    with pytest.raises(ParserExpiredError):
        parser.parse(make_xml('<GroundMotionModels/>'))


def test_failed_parser_is_not_reusable(make_xml):
    parser = ModelSetParser(Region.WUS)
    with pytest.raises(ConfigurationError):
        parser.parse(make_xml('<Models/>'))
    with pytest.raises(ParserExpiredError):
        parser.parse(make_xml('<GroundMotionModels/>'))


@pytest.mark.parametrize('body, message', [
    ('<ModelSet id="WUS" maxDistance="1"><Mdel id="ASK_14" weight="1"/>'
     '</ModelSet>', 'Invalid element'),
    ('<ModelSet id="CEUS" maxDistance="1"><Foo/></ModelSet>',
     'Invalid element'),
    ('<Model id="ASK_14" weight="1"/>', 'Unexpected element'),
    ('<ModelSet id="WUS" maxDistance="1"><ModelSet id="WUS"/></ModelSet>',
     'Unexpected element'),
    ('<ModelSet maxDistance="1"/>', "Missing required attribute 'id'"),
    ('<ModelSet id="WUS"/>', "'maxDistance'"),
    ('<ModelSet id="WUS" maxDistance="far"/>', 'Invalid number'),
    ('<ModelSet id="WUS" maxDistance="-5"/>', 'non-negative'),
    ('<ModelSet id="WUS" maxDistance="1"><Model id="XYZ_99" weight="1"/>'
     '</ModelSet>', 'Unknown GMM identifier'),
    ('<ModelSet id="WUS" maxDistance="1"><Model id="ASK_14"/></ModelSet>',
     "'weight'"),
    ('<ModelSet id="WUS" maxDistance="1"><Model id="ASK_14" weight="nan"/>'
     '</ModelSet>', 'Invalid number'),
    ('<ModelSet id="WUS" maxDistance="1">'
     '<Model id="ASK_14" weight="0.5"/><Model id="ASK_14" weight="0.5"/>'
     '</ModelSet>', 'Duplicate model'),
    ('<ModelSet id="WUS" maxDistance="1">'
     '<Uncertainty values="[0, 1]" weights="[1]"/></ModelSet>',
     'differ in length'),
    ('<ModelSet id="WUS" maxDistance="1">'
     '<Uncertainty values="0" weights="1"/>'
     '<Uncertainty values="0" weights="1"/></ModelSet>',
     'Only one <Uncertainty>'),
])
def test_schema_violations(make_xml, body, message):
    source = make_xml(f'<GroundMotionModels>{body}</GroundMotionModels>')
    with pytest.raises(ConfigurationError, match=message):
        load_weighted_model_set(Region.WUS, source)


def test_wrong_root(make_xml):
    with pytest.raises(ConfigurationError, match='Document root'):
        load_weighted_model_set(Region.WUS, make_xml('<ModelSet id="WUS"/>'))


def test_malformed_xml(make_xml):
    source = make_xml('<GroundMotionModels>'
                      '<ModelSet id="WUS" maxDistance="1">')
    with pytest.raises(ConfigurationError, match='Malformed document'):
        load_weighted_model_set(Region.WUS, source)


def test_empty_document(make_xml):
    model_sets = load_weighted_model_set(Region.WUS,
                                         make_xml('<GroundMotionModels/>'))
    assert model_sets.is_empty


def test_empty_matching_set_is_counted(make_xml):
    source = make_xml("""
        <GroundMotionModels>
          <ModelSet id="WUS" maxDistance="100"/>
          <ModelSet id="WUS" maxDistance="300">
            <Model id="CY_14" weight="1"/>
          </ModelSet>
        </GroundMotionModels>
        """)
    parser = ModelSetParser(Region.WUS)
    model_sets = parser.parse(source)
    assert parser.map_count == 2
    assert model_sets.primary is None
    assert dict(model_sets.secondary.weights) == {Gmm.CY_14: 1.0}
    # Nothing is selected without a primary set
    assert dict(model_sets.select(10.0)) == {}


def test_namespaced_document(make_xml):
    source = make_xml("""
        <GroundMotionModels xmlns="http://example.org/gmm">
          <ModelSet id="WUS" maxDistance="100">
            <Model id="CY_14" weight="1"/>
          </ModelSet>
        </GroundMotionModels>
        """)
    model_sets = load_weighted_model_set(Region.WUS, source)
    assert dict(model_sets.primary.weights) == {Gmm.CY_14: 1.0}


def test_secondary_policy_from_parser(make_xml):
    text = """
        <GroundMotionModels>
          <ModelSet id="CEUS" maxDistance="500">
            <Model id="TP_05" weight="1"/>
          </ModelSet>
          <ModelSet id="CEUS" maxDistance="1000">
            <Model id="SILVA_02" weight="1"/>
          </ModelSet>
        </GroundMotionModels>
        """
    assert dict(gmm_weight_map(Region.CEUS, 1500.0, make_xml(text))) == \
        {Gmm.SILVA_02: 1.0}
    assert dict(gmm_weight_map(Region.CEUS, 1500.0, make_xml(text),
                               secondary_gated=True)) == {}


# -----------------------------------------------------------------------------
# Packaged document

@pytest.mark.parametrize('region, count', [
    (Region.WUS, 1), (Region.CEUS, 2), (Region.COUS, 1), (Region.AK, 0),
])
def test_packaged_document(region, count):
    parser = ModelSetParser(region)
    model_sets = parser.parse(DATA)
    assert parser.map_count == count
    assert model_sets.map_count == count


def test_packaged_ceus_sets():
    model_sets = load_weighted_model_set(Region.CEUS, DATA)
    assert model_sets.primary.max_distance == 500.0
    assert model_sets.secondary.max_distance == 1000.0
    assert Gmm.SOMERVILLE_01 in model_sets.select(100.0)
    assert Gmm.SOMERVILLE_01 not in model_sets.select(600.0)


def test_packaged_wus_uncertainty():
    model_sets = load_weighted_model_set(Region.WUS, DATA)
    assert model_sets.primary.uncertainty.weights == (0.185, 0.63, 0.185)
