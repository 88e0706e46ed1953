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
from pgacalc.gmm.trees import load_logic_trees

logger = logging.getLogger(__name__)


def setup_parser(parser):
    # Optional parameters
    parser.add_argument('-f', '--file', type=str, default=None,
                        help='Logic tree document (default: gmm-trees.json)')


def run(args, settings=None, out=None):
    """
    Print the logic tree of every region.
    """
    settings = Settings.from_env() if settings is None else settings
    out = sys.stdout if out is None else out

    try:
        trees = load_logic_trees(args.file, settings.resource_dir)
        for region, tree in trees.items():
            print(region, file=out)
            print(tree, file=out)
        return True

    except Exception as e:
        logger.error(f'Error while reading logic trees: {e}')
        return False
