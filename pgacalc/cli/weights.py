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

import logging
import sys

from pgacalc.config import Settings
from pgacalc.libutils.resources import open_resource
from pgacalc.parser import ModelSetParser
from pgacalc.regions import Region

logger = logging.getLogger(__name__)

DEFAULT_REGIONS = ('CEUS', 'WUS', 'COUS')


def setup_parser(parser):
    parser.add_argument('regions', type=str, nargs='*',
                        default=list(DEFAULT_REGIONS),
                        help='Regions to list (default: CEUS WUS COUS)')

    # Optional parameters
    parser.add_argument('-f', '--gmm-file', type=str, default=None,
                        help='Model weight document (default: gmm.xml)')
    parser.add_argument('-d', '--distance', type=float, default=None,
                        help='Also show the weights selected at this '
                             'distance (km)')
    parser.add_argument('--gate-secondary', action='store_true',
                        help='Use the gated far-field selection policy')


def format_model_set(index, model_set):
    lines = [f'  Set {index} [max distance = {model_set.max_distance} km]']
    for gmm, weight in sorted(model_set.weights.items(),
                              key=lambda kv: kv[0].name):
        lines.append(f'    {gmm.name:<20} {weight:.4f}')
    if model_set.uncertainty is not None:
        lines.append(f'    Uncertainty values:  '
                     f'{list(model_set.uncertainty.values)}')
        lines.append(f'    Uncertainty weights: '
                     f'{list(model_set.uncertainty.weights)}')
    return '\n'.join(lines)


def run(args, settings=None, out=None):
    """
    Print the weight sets of each requested region.
    """
    settings = Settings.from_env() if settings is None else settings
    out = sys.stdout if out is None else out
    gmm_file = args.gmm_file or settings.gmm_file

    try:
        for name in args.regions:
            region = Region.from_string(name)
            parser = ModelSetParser(region, args.gate_secondary or
                                    settings.secondary_gated)

            with open_resource(gmm_file, settings.resource_dir) as stream:
                model_sets = parser.parse(stream)

            print(f'{region}: {parser.map_count} set(s)', file=out)
            for index, model_set in enumerate(
                    (model_sets.primary, model_sets.secondary), 1):
                if model_set is not None:
                    print(format_model_set(index, model_set), file=out)

            if args.distance is not None:
                selected = model_sets.select(args.distance)
                names = ', '.join(f'{g.name}={w}' for g, w in
                                  sorted(selected.items(),
                                         key=lambda kv: kv[0].name))
                print(f'  At {args.distance} km: {names or "none"}',
                      file=out)
        return True

    except Exception as e:
        logger.error(f'Error while reading weights: {e}')
        return False
