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
Run-time settings.

Settings come from environment variables and are read once, when the
caller builds a :class:`Settings` instance (usually the command line
front-end). Nothing in the library reads the environment behind the
caller's back, except the optional GMM registry override.

Environment
-----------
PGACALC_NO_RESULT
    Text written to standard output when no value can be produced.
PGACALC_RESOURCE_DIR
    Directory searched for resource files (default ``res/``).
PGACALC_GMM_FILE
    Name or path of the model weight document (default ``gmm.xml``).
PGACALC_SECONDARY_GATED
    If truthy, the secondary weight set only applies up to its own
    maximum distance.
PGACALC_LOGGING_CONFIG
    Logging configuration file (``logging.config.fileConfig`` format).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

PGACALC_VERSION = '1.4.0'

ENV_NO_RESULT = 'PGACALC_NO_RESULT'
ENV_RESOURCE_DIR = 'PGACALC_RESOURCE_DIR'
ENV_GMM_FILE = 'PGACALC_GMM_FILE'
ENV_SECONDARY_GATED = 'PGACALC_SECONDARY_GATED'
ENV_LOGGING_CONFIG = 'PGACALC_LOGGING_CONFIG'

RESOURCE_DIRNAME = 'res/'
GMM_FILENAME = 'gmm.xml'
GMM_TREES_FILENAME = 'gmm-trees.json'
LOGGING_FILENAME = 'lib/logging.ini'

_TRUE_STRINGS = ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class Settings:
    """
    Immutable run-time configuration.
    """

    no_result: Optional[str] = None
    resource_dir: str = RESOURCE_DIRNAME
    gmm_file: str = GMM_FILENAME
    secondary_gated: bool = False
    logging_config: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None
                 ) -> 'Settings':
        """
        Build the settings from an environment mapping
        (``os.environ`` by default).
        """
        env = os.environ if environ is None else environ

        gated = env.get(ENV_SECONDARY_GATED, '').strip().lower()

        return cls(
            no_result=env.get(ENV_NO_RESULT),
            resource_dir=env.get(ENV_RESOURCE_DIR) or RESOURCE_DIRNAME,
            gmm_file=env.get(ENV_GMM_FILE) or GMM_FILENAME,
            secondary_gated=gated in _TRUE_STRINGS,
            logging_config=env.get(ENV_LOGGING_CONFIG) or None,
        )
