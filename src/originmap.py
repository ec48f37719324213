"""originmap - map JVM build artifacts to their source repositories.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from args import parse_args
from common.logging_utils import configure_logging
from config import ConfigError, load_config, load_unit
from constants import Constants, ExitCodes
from resolver import RawDependency, create_resolver

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging from CLI arguments; the CLI level wins over the environment."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def _write_output(payload, path):
    text = json.dumps(payload, indent=2)
    if not path:
        sys.stdout.write(text + "\n")
        return
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text + "\n")
    except OSError as e:
        logger.error("Unable to write output %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def run_origins(resolver, origins):
    """Resolve origins; returns (payload, failures)."""
    results = resolver.resolve_origins(origins)
    payload = {uri: (t.to_dict() if t else None) for uri, t in results.items()}
    failures = sum(1 for t in results.values() if t is None)
    return payload, failures


def run_deps(resolver, coordinates=None):
    """Resolve declared dependencies (or explicit coordinates); returns (payload, failures)."""
    deps = None
    if coordinates:
        deps = [RawDependency.from_coordinate(c) for c in coordinates]
    resolutions = resolver.dependency_resolver.resolve_deps(deps)
    payload = [r.to_dict() for r in resolutions]
    failures = sum(1 for r in resolutions if not r.ok)
    return payload, failures


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        config = load_config(args.CONFIG)
        unit = load_unit(args.UNIT)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    resolver = create_resolver(unit, config)
    try:
        if args.COMMAND == "origin":
            payload, failures = run_origins(resolver, args.ORIGINS)
        else:
            payload, failures = run_deps(resolver, args.COORDINATES)
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    _write_output(payload, args.OUTPUT)

    if failures:
        logger.warning("%d item(s) could not be resolved", failures)
        if args.ERROR_ON_WARNINGS:
            sys.exit(ExitCodes.EXIT_WARNINGS.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
