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
The ``pgacalc`` program.

Exit status: 0 on success (or when called without arguments), 1 when no
model applies to the scenario, 2 on any error.
"""

import argparse
import logging
import sys

from pgacalc.calculator import calc_pga
from pgacalc.config import ENV_NO_RESULT, PGACALC_VERSION, Settings
from pgacalc.errors import ValidationError
from pgacalc.libutils import validation as val
from pgacalc.libutils.logsetup import logging_init
from pgacalc.libutils.resources import open_resource

logger = logging.getLogger(__name__)

PROG = 'pgacalc'

EXIT_OK = 0
EXIT_NO_ESTIMATE = 1
EXIT_ERROR = 2

_ARGUMENTS = '"site name" siteLon siteLat eqMag eqLon eqLat eqDepth [vs30]'
_NO_RESULT_EXAMPLE = 'CHECK LOGFILE'


class _ArgumentParser(argparse.ArgumentParser):
    """
    Argument parser raising instead of exiting on bad arguments.
    """

    def error(self, message):
        raise ValidationError(message)


def usage_text():
    """
    Return the full usage message.
    """
    lon_min, lon_max = val.range_text(val.LONGITUDE_RANGE)
    lat_min, lat_max = val.range_text(val.LATITUDE_RANGE)
    mag_min, mag_max = val.range_text(val.MAGNITUDE_RANGE)
    dep_min, dep_max = val.range_text(val.DEPTH_RANGE)
    vs_min, vs_max = val.range_text(val.VS30_RANGE)

    return (
        f'PgaCalc v{PGACALC_VERSION}\n\n'
        f'Usage:\n'
        f'{PROG} [options] {_ARGUMENTS}\n\n'
        f'Where siteLon and eqLon are longitude values (decimal degrees '
        f'between {lon_min} and {lon_max}),\n'
        f'siteLat and eqLat are latitude values (decimal degrees between '
        f'{lat_min} and {lat_max}),\n'
        f'eqMag is the moment magnitude (Mw between {mag_min} and '
        f'{mag_max}) of the earthquake,\n'
        f'and eqDepth is the depth of the earthquake (kilometers between '
        f'{dep_min} and {dep_max}),\n'
        f'vs30 is the optional vs30 value (m/s between {vs_min} and '
        f'{vs_max}, default is {val.VS30_DEFAULT}).\n\n'
        f'The PGA value (g) is written to standard output on success. If '
        f'there is no result the value\n'
        f'of the {ENV_NO_RESULT} environment variable (or of the '
        f'--no-result option) is written,\n'
        f'otherwise nothing is written.\n\n'
        f'For example to write "{_NO_RESULT_EXAMPLE}" if there is an '
        f'error:\n\n'
        f'{ENV_NO_RESULT}="{_NO_RESULT_EXAMPLE}" {PROG} {_ARGUMENTS}\n'
    )


def print_usage(file=None):
    file = sys.stderr if file is None else file
    file.write(usage_text())


def setup_parser(parser):
    parser.add_argument('site_name', type=str,
                        help='Name of the site (used in log messages)')
    parser.add_argument('site_lon', type=str,
                        help='Site longitude (decimal degrees)')
    parser.add_argument('site_lat', type=str,
                        help='Site latitude (decimal degrees)')
    parser.add_argument('eq_mag', type=str,
                        help='Moment magnitude of the earthquake')
    parser.add_argument('eq_lon', type=str,
                        help='Epicentre longitude (decimal degrees)')
    parser.add_argument('eq_lat', type=str,
                        help='Epicentre latitude (decimal degrees)')
    parser.add_argument('eq_depth', type=str,
                        help='Depth of the earthquake (km)')
    parser.add_argument('vs30', type=str, nargs='?', default=None,
                        help=f'Site vs30 in m/s (default: {val.VS30_DEFAULT})')

    # Optional parameters
    parser.add_argument('--no-result', type=str, default=None,
                        help='Text written when no value is produced '
                             f'(default: ${ENV_NO_RESULT})')
    parser.add_argument('--gmm-file', type=str, default=None,
                        help='Model weight document (default: gmm.xml)')
    parser.add_argument('--gate-secondary', action='store_true',
                        help='Apply the far-field weights only up to their '
                             'own maximum distance')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase logging verbosity')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {PGACALC_VERSION}')


def build_parser():
    parser = _ArgumentParser(
        prog=PROG,
        description='Deterministic PGA from a weighted ensemble of '
                    'ground-motion models.',
    )
    setup_parser(parser)
    return parser


def _write_no_result(text, out):
    if text is not None:
        print(text, file=out)


def run(args, settings=None, out=None):
    """
    Compute and print the PGA for parsed arguments. Return the exit
    status.
    """
    settings = Settings.from_env() if settings is None else settings
    out = sys.stdout if out is None else out

    no_result = args.no_result
    if no_result is None:
        no_result = settings.no_result

    gmm_file = args.gmm_file or settings.gmm_file
    gated = args.gate_secondary or settings.secondary_gated

    try:
        with open_resource(gmm_file, settings.resource_dir) as stream:
            result = calc_pga(args.site_name, args.site_lon, args.site_lat,
                              args.eq_mag, args.eq_lon, args.eq_lat,
                              args.eq_depth, args.vs30, source=stream,
                              secondary_gated=gated)

    except Exception as e:
        logger.warning(f'{PROG}: {e}')
        _write_no_result(no_result, out)
        print_usage()
        return EXIT_ERROR

    if not result.has_estimate:
        logger.warning(f'{PROG}: no estimate for {args.site_name} '
                       f'(region {result.region}, '
                       f'distance {result.distance:.1f} km)')
        _write_no_result(no_result, out)
        return EXIT_NO_ESTIMATE

    print(f'{result.value:f}', file=out)
    return EXIT_OK


def main(argv=None, settings=None, out=None):
    """
    Entry point of the ``pgacalc`` program.
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    settings = Settings.from_env() if settings is None else settings
    out = sys.stdout if out is None else out

    if not argv:
        print_usage()
        return EXIT_OK

    try:
        args = build_parser().parse_args(argv)
    except ValidationError as e:
        logger.warning(f'{PROG}: {e}')
        _write_no_result(settings.no_result, out)
        print_usage()
        return EXIT_ERROR

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging_init(settings.logging_config, level)

    return run(args, settings, out)
