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
Settings and errors - TEST
"""
import pytest

from pgacalc.config import GMM_FILENAME, RESOURCE_DIRNAME, Settings
from pgacalc.errors import (
    ConfigurationError,
    ParserExpiredError,
    PgaCalcError,
    ResourceNotFoundError,
    ValidationError,
)


def test_default_settings():
    settings = Settings.from_env({})
    assert settings.no_result is None
    assert settings.resource_dir == RESOURCE_DIRNAME
    assert settings.gmm_file == GMM_FILENAME
    assert settings.secondary_gated is False
    assert settings.logging_config is None


def test_settings_from_environment():
    settings = Settings.from_env({
        'PGACALC_NO_RESULT': 'CHECK LOGFILE',
        'PGACALC_RESOURCE_DIR': '/opt/pgacalc/res',
        'PGACALC_GMM_FILE': 'custom.xml',
        'PGACALC_SECONDARY_GATED': ' Yes ',
        'PGACALC_LOGGING_CONFIG': '/etc/pgacalc/logging.ini',
    })
    assert settings.no_result == 'CHECK LOGFILE'
    assert settings.resource_dir == '/opt/pgacalc/res'
    assert settings.gmm_file == 'custom.xml'
    assert settings.secondary_gated is True
    assert settings.logging_config == '/etc/pgacalc/logging.ini'


@pytest.mark.parametrize('text', ['', '0', 'no', 'false', 'off'])
def test_secondary_gated_false(text):
    assert not Settings.from_env({'PGACALC_SECONDARY_GATED': text}) \
        .secondary_gated


def test_empty_placeholder_is_kept():
    assert Settings.from_env({'PGACALC_NO_RESULT': ''}).no_result == ''


def test_settings_read_os_environ(monkeypatch):
    monkeypatch.setenv('PGACALC_GMM_FILE', 'other.xml')
    assert Settings.from_env().gmm_file == 'other.xml'


def test_error_hierarchy():
    assert issubclass(ValidationError, ValueError)
    assert issubclass(ParserExpiredError, RuntimeError)
    assert issubclass(ResourceNotFoundError, FileNotFoundError)
    for cls in (ValidationError, ConfigurationError, ParserExpiredError,
                ResourceNotFoundError):
        assert issubclass(cls, PgaCalcError)


def test_configuration_error_location():
    err = ConfigurationError('Duplicate model ASK_14', 'Model', 12)
    assert err.message == 'Duplicate model ASK_14'
    assert str(err) == 'Duplicate model ASK_14 [<Model>, line 12]'
    assert str(ConfigurationError('Bad')) == 'Bad'
    assert str(ConfigurationError('Bad', line=3)) == 'Bad [line 3]'
