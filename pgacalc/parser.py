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
Parser of model weight documents (gmm.xml).

The document lists weight sets for all regions::

    <GroundMotionModels>
      <ModelSet id="CEUS" maxDistance="500.0">
        <Uncertainty values="[-0.4, 0.0, 0.4]" weights="[0.2, 0.6, 0.2]"/>
        <Model id="AB_06_PRIME" weight="0.22"/>
        ...
      </ModelSet>
      <ModelSet id="CEUS" maxDistance="1000.0">
        ...
      </ModelSet>
    </GroundMotionModels>

Only the blocks of the requested region are read; the first becomes the
primary set, the second the secondary set, a third is an error.

Parsing is split in two layers:

* :class:`WeightSetMachine`, a finite-state machine driven by
  element start/end events. It has no dependency on any XML library.
* :class:`ModelSetParser`, a single-use driver feeding the machine with
  events from :func:`lxml.etree.iterparse`.

Any schema violation raises :class:`pgacalc.errors.ConfigurationError`
and no partial result is returned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from math import isfinite
from typing import Dict, List, Optional

from lxml import etree

from pgacalc.errors import ConfigurationError, ParserExpiredError
from pgacalc.gmm.catalog import Gmm
from pgacalc.modelset import (
    ModelSet,
    UncertaintyDistribution,
    WeightedModelSet,
    check_weights,
)
from pgacalc.regions import Region

logger = logging.getLogger(__name__)

# Elements
GROUND_MOTION_MODELS = 'GroundMotionModels'
MODEL_SET = 'ModelSet'
MODEL = 'Model'
UNCERTAINTY = 'Uncertainty'

# Attributes
ID = 'id'
MAX_DISTANCE = 'maxDistance'
WEIGHT = 'weight'
VALUES = 'values'
WEIGHTS = 'weights'

#: At most this many weight sets per region.
MAX_SETS = 2

# Allowed children of each element (None is the document itself)
_CHILDREN = {
    None: (GROUND_MOTION_MODELS,),
    GROUND_MOTION_MODELS: (MODEL_SET,),
    MODEL_SET: (MODEL, UNCERTAINTY),
    MODEL: (),
    UNCERTAINTY: (),
}


class State(Enum):
    """
    States of :class:`WeightSetMachine`.
    """

    READY = 'ready'
    DOCUMENT = 'document'
    MATCHING_SET = 'matching set'
    SKIPPED_SET = 'skipped set'
    MODEL = 'model'
    UNCERTAINTY = 'uncertainty'
    SKIPPED = 'skipped'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class _SetAccumulator:
    ordinal: int
    max_distance: float
    weights: Dict[Gmm, float] = field(default_factory=dict)
    uncertainty: Optional[UncertaintyDistribution] = None


@dataclass(frozen=True)
class _Frame:
    element: str
    state: State
    accumulator: Optional[_SetAccumulator] = None


class WeightSetMachine:
    """
    Event-driven builder of a :class:`WeightedModelSet`.

    Feed it with :meth:`start` and :meth:`end` events in document order,
    then call :meth:`result`. After the first error the machine is
    unusable.

    Parameters
    ----------
    region : Region or str
        Region whose weight sets are collected.
    secondary_gated : bool, optional
        Selection policy given to the resulting configuration.
    """

    def __init__(self, region, secondary_gated=False):
        if not isinstance(region, Region):
            region = Region.from_string(region)
        self.region = region
        self.secondary_gated = secondary_gated
        self.set_count = 0
        self._stack: List[_Frame] = []
        self._primary: Optional[ModelSet] = None
        self._secondary: Optional[ModelSet] = None
        self._result: Optional[WeightedModelSet] = None
        self._finished = False
        self._failed = False

    @property
    def state(self):
        if self._failed:
            return State.FAILED
        if self._finished:
            return State.DONE
        if not self._stack:
            return State.READY
        return self._stack[-1].state

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def start(self, tag, attrib=None, line=None):
        """
        Process the start of element ``tag`` with attributes ``attrib``.
        """
        self._check_usable()
        attrib = {} if attrib is None else attrib

        if tag not in _CHILDREN:
            self._fail(f'Invalid element <{tag}>', tag, line)

        if self._finished:
            self._fail('Element after the end of the document', tag, line)

        parent = self._stack[-1] if self._stack else None
        parent_tag = parent.element if parent else None

        if tag not in _CHILDREN[parent_tag]:
            if parent is None:
                self._fail(f'Document root must be <{GROUND_MOTION_MODELS}>',
                           tag, line)
            self._fail(f'Unexpected element inside <{parent_tag}>',
                       tag, line)

        if parent is not None and parent.state in (State.SKIPPED_SET,
                                                   State.SKIPPED):
            self._stack.append(_Frame(tag, State.SKIPPED))
            return

        try:
            if tag == GROUND_MOTION_MODELS:
                frame = _Frame(tag, State.DOCUMENT)
            elif tag == MODEL_SET:
                frame = self._start_model_set(attrib)
            elif tag == MODEL:
                frame = self._start_model(parent, attrib)
            else:
                frame = self._start_uncertainty(parent, attrib)
        except ConfigurationError as e:
            self._fail(e.message, tag, line)
        except (ValueError, KeyError) as e:
            self._fail(f'Error parsing <{tag}>: {_reason(e)}', tag, line)

        self._stack.append(frame)

    def end(self, tag, line=None):
        """
        Process the end of element ``tag``.
        """
        self._check_usable()

        if not self._stack or self._stack[-1].element != tag:
            self._fail(f'Unexpected end of element </{tag}>', tag, line)

        frame = self._stack.pop()

        try:
            if frame.state is State.MATCHING_SET:
                self._end_model_set(frame.accumulator)
            elif frame.state is State.DOCUMENT:
                self._result = WeightedModelSet(
                    region=self.region,
                    primary=self._primary,
                    secondary=self._secondary,
                    secondary_gated=self.secondary_gated,
                )
                self._finished = True
        except (ValueError, KeyError) as e:
            self._fail(f'Error parsing <{tag}>: {_reason(e)}', tag, line)

    def result(self):
        """
        Return the finished :class:`WeightedModelSet`.

        Raises
        ------
        ConfigurationError
            If the document has not been closed.
        """
        self._check_usable()
        if not self._finished:
            self._fail(f'Incomplete document: missing </{GROUND_MOTION_MODELS}>',
                       GROUND_MOTION_MODELS)
        return self._result

    # ------------------------------------------------------------------
    # Element handlers
    # ------------------------------------------------------------------

    def _start_model_set(self, attrib):
        set_id = _read_string(attrib, ID)

        if set_id != self.region.name:
            return _Frame(MODEL_SET, State.SKIPPED_SET)

        self.set_count += 1
        if self.set_count > MAX_SETS:
            raise ConfigurationError(
                f'Only {MAX_SETS} ground motion model sets are allowed '
                f'({self.region.name})')

        max_distance = _read_float(attrib, MAX_DISTANCE)
        if max_distance < 0.0:
            raise ConfigurationError(
                f"Attribute '{MAX_DISTANCE}' must be non-negative "
                f'({max_distance})')

        logger.debug(f'        Set: {self.set_count} '
                     f'[max distance = {max_distance}]')

        return _Frame(MODEL_SET, State.MATCHING_SET,
                      _SetAccumulator(self.set_count, max_distance))

    def _start_model(self, parent, attrib):
        accumulator = parent.accumulator
        model = Gmm.from_string(_read_string(attrib, ID))
        weight = _read_float(attrib, WEIGHT)

        if weight < 0.0:
            raise ConfigurationError(
                f"Attribute '{WEIGHT}' must be non-negative ({weight})")

        if model in accumulator.weights:
            raise ConfigurationError(f'Duplicate model {model.name}')

        accumulator.weights[model] = weight
        logger.debug(f' Model [wt]: {model.name:<44} [{weight}]')

        return _Frame(MODEL, State.MODEL)

    def _start_uncertainty(self, parent, attrib):
        accumulator = parent.accumulator

        if accumulator.uncertainty is not None:
            raise ConfigurationError(
                f'Only one <{UNCERTAINTY}> is allowed per <{MODEL_SET}>')

        values = _read_float_array(attrib, VALUES)
        weights = _read_float_array(attrib, WEIGHTS)
        accumulator.uncertainty = UncertaintyDistribution.from_sequences(
            values, weights)

        logger.debug('Uncertainty...')
        logger.debug(f'     Values: {values}')
        logger.debug(f'    Weights: {weights}')

        return _Frame(UNCERTAINTY, State.UNCERTAINTY)

    def _end_model_set(self, accumulator):
        # Sets without models are counted but not stored
        if not accumulator.weights:
            return

        check_weights(accumulator.weights.values())

        model_set = ModelSet(
            weights=accumulator.weights,
            max_distance=accumulator.max_distance,
            uncertainty=accumulator.uncertainty,
        )

        if accumulator.ordinal == 1:
            self._primary = model_set
        else:
            self._secondary = model_set

    # ------------------------------------------------------------------

    def _check_usable(self):
        if self._failed:
            raise ParserExpiredError(
                'Weight set machine is unusable after a parse error')

    def _fail(self, message, element=None, line=None):
        self._failed = True
        self._stack.clear()
        self._primary = self._secondary = self._result = None
        raise ConfigurationError(message, element=element, line=line)


class ModelSetParser:
    """
    Single-use parser of a model weight document.

    A parser reads exactly one document; create a new instance for
    every document or region.

    Parameters
    ----------
    region : Region or str
        Region whose weight sets are collected.
    secondary_gated : bool, optional
        Selection policy given to the resulting configuration.
    """

    def __init__(self, region, secondary_gated=False):
        self._machine = WeightSetMachine(region, secondary_gated)
        self._used = False

    @property
    def region(self):
        return self._machine.region

    @property
    def map_count(self):
        """
        Number of weight sets found for the region.
        """
        return self._machine.set_count

    def parse(self, source):
        """
        Parse a document.

        Parameters
        ----------
        source : str or file object
            Path or binary stream of the document.

        Returns
        -------
        WeightedModelSet

        Raises
        ------
        ParserExpiredError
            If the parser was already used.
        ConfigurationError
            If the document is malformed or violates the schema.
        """
        if self._used:
            raise ParserExpiredError('This parser has expired')
        self._used = True

        if source is None:
            raise TypeError('source must be a path or a file object')

        machine = self._machine
        try:
            for event, elem in etree.iterparse(
                    source, events=('start', 'end'),
                    remove_comments=True, remove_pis=True,
                    resolve_entities=False, no_network=True):
                tag = etree.QName(elem).localname
                if event == 'start':
                    machine.start(tag, elem.attrib, elem.sourceline)
                else:
                    machine.end(tag, elem.sourceline)
                    elem.clear()
        except etree.XMLSyntaxError as e:
            raise ConfigurationError(f'Malformed document: {e.msg}',
                                     line=e.lineno) from e

        return machine.result()


def load_weighted_model_set(region, source, secondary_gated=False):
    """
    Parse ``source`` for ``region`` with a fresh parser.
    """
    return ModelSetParser(region, secondary_gated).parse(source)


def gmm_weight_map(region, distance, source, secondary_gated=False):
    """
    Model weights applicable to ``region`` at ``distance`` (km).

    Parameters
    ----------
    region : Region or str
    distance : float
        Source-to-site distance in kilometers.
    source : str or file object
        Model weight document.

    Returns
    -------
    mapping
        Gmm -> weight; empty if no set applies.
    """
    parser = ModelSetParser(region, secondary_gated)
    model_sets = parser.parse(source)

    if parser.map_count == 0:
        logger.warning(f'{parser.region}: no map found')
    else:
        logger.debug(f'{parser.region}: map count is {parser.map_count}')

    return model_sets.select(distance)


# ---------------------------------------------------------------------
# Attribute readers
# ---------------------------------------------------------------------

def _reason(error):
    if isinstance(error, KeyError) and error.args:
        return str(error.args[0])
    return str(error)


def _read_string(attrib, name):
    value = attrib.get(name)
    if value is None or not value.strip():
        raise ConfigurationError(f"Missing required attribute '{name}'")
    return value.strip()


def _to_float(text, name):
    try:
        value = float(text)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid number for attribute '{name}': {text!r}")
    if not isfinite(value):
        raise ConfigurationError(
            f"Invalid number for attribute '{name}': {text!r}")
    return value


def _read_float(attrib, name):
    return _to_float(_read_string(attrib, name), name)


def _read_float_array(attrib, name):
    text = _read_string(attrib, name)
    if text.startswith('[') and text.endswith(']'):
        text = text[1:-1]
    return [_to_float(t, name) for t in re.split(r'[,\s]+', text) if t]
