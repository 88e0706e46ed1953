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
Ground-motion model logic trees by region (gmm-trees.json).

Format
------
[
  {"id": "<Region>",
   "tree": [{"id": "<branch>", "weight": <w>, "value": "<Gmm>"}, ...]},
  ...
]

``value`` defaults to the branch ``id``. Trees are loaded once into a
:class:`LogicTreeRegistry`, which callers keep and pass on.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Tuple

from pgacalc.config import GMM_TREES_FILENAME, RESOURCE_DIRNAME
from pgacalc.gmm.catalog import Gmm
from pgacalc.libutils.resources import open_resource
from pgacalc.modelset import check_weights
from pgacalc.regions import Region

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Branch:
    """
    Weighted branch of a logic tree.
    """

    id: str
    weight: float
    value: Gmm

    def __str__(self):
        return f'{self.id:<24} {self.weight:.4f}  {self.value.label}'


@dataclass(frozen=True)
class LogicTree:
    """
    Ordered branches whose weights sum to 1.
    """

    branches: Tuple[Branch, ...]

    def __post_init__(self):
        if not self.branches:
            raise ValueError('A logic tree needs at least one branch')
        ids = [b.id for b in self.branches]
        if len(set(ids)) != len(ids):
            raise ValueError(f'Duplicate branch identifiers: {ids}')
        check_weights(b.weight for b in self.branches)

    def __iter__(self):
        return iter(self.branches)

    def __len__(self):
        return len(self.branches)

    def weights(self):
        """
        Return the tree as a Gmm -> weight mapping (weights of branches
        sharing a model are added).
        """
        out = {}
        for b in self.branches:
            out[b.value] = out.get(b.value, 0.0) + b.weight
        return MappingProxyType(out)

    def __str__(self):
        return '\n'.join(str(b) for b in self.branches)


class LogicTreeRegistry(Mapping):
    """
    Read-only mapping Region -> LogicTree.
    """

    def __init__(self, trees):
        self._trees = MappingProxyType(dict(trees))

    def __getitem__(self, region):
        if not isinstance(region, Region):
            region = Region.from_string(region)
        return self._trees[region]

    def __iter__(self):
        return iter(self._trees)

    def __len__(self):
        return len(self._trees)

    def __repr__(self):
        regions = ', '.join(r.name for r in self._trees)
        return f'{self.__class__.__name__}({regions})'


def parse_tree(raw):
    """
    Build a :class:`LogicTree` from its JSON list of branches.
    """
    if not isinstance(raw, list):
        raise TypeError('A logic tree must be a JSON list of branches.')

    branches = []
    for item in raw:
        if not isinstance(item, dict):
            raise TypeError(f'Invalid logic tree branch: {item!r}')
        try:
            branch_id = str(item['id'])
            weight = float(item['weight'])
        except KeyError as e:
            raise ValueError(f'Logic tree branch without {e.args[0]!r}')
        value = Gmm.from_string(item.get('value', branch_id))
        branches.append(Branch(branch_id, weight, value))

    return LogicTree(tuple(branches))


def read_logic_trees(raw):
    """
    Build a registry from parsed JSON (see module documentation).
    """
    if not isinstance(raw, list):
        raise TypeError('gmm-trees.json must contain a JSON list.')

    trees = {}
    for entry in raw:
        region = Region.from_string(entry['id'])
        if region in trees:
            raise ValueError(f'Duplicate logic tree for {region}')
        trees[region] = parse_tree(entry['tree'])
        logger.debug(f'Logic tree {region}: {len(trees[region])} branches')

    return LogicTreeRegistry(trees)


def load_logic_trees(source=None, resource_dir=RESOURCE_DIRNAME):
    """
    Load the logic trees.

    Parameters
    ----------
    source : str or file object, optional
        Path or stream of the JSON document; by default the
        ``gmm-trees.json`` resource is used.
    resource_dir : str, optional
        Directory searched for the default resource.

    Returns
    -------
    LogicTreeRegistry
    """
    if source is None:
        with open_resource(GMM_TREES_FILENAME, resource_dir) as f:
            return read_logic_trees(json.load(f))

    if hasattr(source, 'read'):
        return read_logic_trees(json.load(source))

    with open(source, 'r', encoding='utf-8') as f:
        return read_logic_trees(json.load(f))
