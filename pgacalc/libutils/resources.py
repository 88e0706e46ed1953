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
Resource lookup.

A resource name is resolved, in order, as:

1. a filesystem path (absolute or relative to the working directory);
2. a file inside the resource directory (``res/`` unless configured);
3. a data file shipped with the package (``pgacalc/data``).

Packaged files are read via importlib.resources to work for installed
packages.
"""

import logging
import os
from importlib import resources as importlib_resources

from pgacalc.config import RESOURCE_DIRNAME
from pgacalc.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)

_DATA_PACKAGE = 'pgacalc.data'


def _relative_name(name):
    # Names may carry the default directory prefix ("res/gmm.xml")
    if name.startswith(RESOURCE_DIRNAME):
        return name[len(RESOURCE_DIRNAME):]
    return name


def find_resource(name, resource_dir=RESOURCE_DIRNAME):
    """
    Return the filesystem path of a resource, or ``None`` if the
    resource is only available as packaged data (or not at all).
    """
    if os.path.isfile(name):
        return name

    candidate = os.path.join(resource_dir, _relative_name(name))
    if os.path.isfile(candidate):
        return candidate

    return None


def open_resource(name, resource_dir=RESOURCE_DIRNAME):
    """
    Open a resource as a binary stream.

    Parameters
    ----------
    name : str
        File name, path or packaged resource name.
    resource_dir : str, optional
        Directory searched before the packaged data.

    Returns
    -------
    file object
        Binary stream, to be closed by the caller.

    Raises
    ------
    ResourceNotFoundError
        If the resource cannot be located.
    """
    path = find_resource(name, resource_dir)
    if path is not None:
        logger.debug(f'Opening resource file {path}')
        return open(path, 'rb')

    data = importlib_resources.files(_DATA_PACKAGE).joinpath(
        _relative_name(name))
    if data.is_file():
        logger.debug(f'Opening packaged resource {name}')
        return data.open('rb')

    raise ResourceNotFoundError(f'Could not open input stream ({name})')
