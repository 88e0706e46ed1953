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

import argparse
import sys
import logging
from pgacalc.cli import pga
from pgacalc.cli import trees
from pgacalc.cli import weights

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)


def pgacalc(argv=None):
    """
    Deterministic PGA of a scenario earthquake at a site.
    """
    return pga.main(argv)


def tools(argv=None):
    """
    Inspection of the packaged configuration.
    """
    parser = argparse.ArgumentParser(
        prog='pgacalc-tools',
        description='PgaCalc: inspect model weights and logic trees.'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Choose a functionality'
    )

    # Add subparser for weights with detailed help
    weights_parser = subparsers.add_parser(
        'weights',
        help='List the model weight sets of one or more regions.'
    )
    weights.setup_parser(weights_parser)

    # Add subparser for trees with detailed help
    trees_parser = subparsers.add_parser(
        'trees',
        help='List the ground-motion model logic trees.'
    )
    trees.setup_parser(trees_parser)

    args = parser.parse_args(argv)

    if args.command == 'weights':
        return 0 if weights.run(args) else 1
    elif args.command == 'trees':
        return 0 if trees.run(args) else 1
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(pgacalc())
