"""Main entry point for dinobuild."""

import argparse
import sys

from loguru import logger

from .builder import run_build
from .errors import BuildError, ConfigurationError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="dinobuild",
        description="Build a Dockerfile, optionally in interactive debug mode",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-t",
        "--target",
        type=str,
        default="",
        help="Build target (image tag), required",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        default="Dockerfile",
        help="Dockerfile path",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Interactive debug build",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait on the Docker daemon before giving up",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show build progress and debug logging",
    )
    parser.add_argument(
        "context",
        nargs="?",
        default=".",
        help="Build context directory (informational)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Parse arguments, run the build and exit with its status."""
    args = parse_args(argv)

    # stdout is reserved for the banner and the image ID
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    try:
        exit_code = run_build(args)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(2)
    except BuildError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Build interrupted by user")
        sys.exit(130)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
