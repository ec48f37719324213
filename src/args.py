"""Argument parsing functionality for originmap."""

import argparse


def _add_common(parser):
    parser.add_argument("-u", "--unit",
                        dest="UNIT",
                        help="Source unit document (YAML or JSON)",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Resolver configuration file (YAML or JSON); defaults to $ORIGINMAP_CONFIG",
                        action="store", type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write JSON results to this file instead of stdout",
                        action="store", type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if any resolution failed.",
                        action="store_true")


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="originmap",
        description=(
            "originmap - map JVM build artifacts to their source repositories"
        ),
        add_help=True,
    )
    sub = parser.add_subparsers(dest="COMMAND", required=True)

    origin = sub.add_parser("origin", help="Resolve jar:/file: origins to targets")
    _add_common(origin)
    origin.add_argument("ORIGINS",
                        help="Origin URIs, e.g. jar:file:/path/lib.jar!/pkg/Cls.class",
                        nargs="+")

    deps = sub.add_parser("deps", help="Resolve the unit's declared dependencies")
    _add_common(deps)
    deps.add_argument("-p", "--package",
                      dest="COORDINATES",
                      help="Resolve group:artifact:version[:scope] instead of the declared list",
                      action="append", type=str)

    return parser.parse_args(argv)
