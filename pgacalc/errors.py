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
Exceptions raised by PgaCalc.

Library code raises these; only the command line front-end catches them
and turns them into log records and exit codes.
"""


class PgaCalcError(Exception):
    """
    Base class of all PgaCalc errors.
    """


class ValidationError(PgaCalcError, ValueError):
    """
    Out-of-range or unparseable input value.
    """


class ConfigurationError(PgaCalcError):
    """
    Schema violation in a model weight document.

    Parameters
    ----------
    message : str
        Description of the violation.
    element : str, optional
        Name of the element being processed when the error occurred.
    line : int, optional
        Line number of the element in the source document.
    """

    def __init__(self, message, element=None, line=None):
        self.message = message
        self.element = element
        self.line = line
        super().__init__(self._format())

    def _format(self):
        where = []
        if self.element is not None:
            where.append(f'<{self.element}>')
        if self.line is not None:
            where.append(f'line {self.line}')
        if where:
            return f"{self.message} [{', '.join(where)}]"
        return self.message


class ParserExpiredError(PgaCalcError, RuntimeError):
    """
    A single-use parser was asked to parse a second document.
    """


class ResourceNotFoundError(PgaCalcError, FileNotFoundError):
    """
    A configuration resource could not be located.
    """
