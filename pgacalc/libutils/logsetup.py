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
Process-wide logging initialization.
"""

import logging
import logging.config
import os

from pgacalc.config import LOGGING_FILENAME


def logging_init(config_file=None, level=logging.WARNING):
    """
    Configure the root logger once per process.

    If ``config_file`` (or the default ``lib/logging.ini``) is a
    readable file, it is loaded with :func:`logging.config.fileConfig`;
    otherwise a basic configuration at ``level`` is installed.

    Returns
    -------
    str or None
        The configuration file used, if any.
    """
    for path in (config_file, LOGGING_FILENAME):
        if path and os.path.isfile(path) and os.access(path, os.R_OK):
            logging.config.fileConfig(path,
                                      disable_existing_loggers=False)
            return path

    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)
    return None
