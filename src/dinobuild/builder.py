"""Build pipeline: stage the Dockerfile, package it, submit it and read the result."""

from pathlib import Path

import requests
from loguru import logger

from .core import MISSING_TARGET, BuildAPIClient, BuildRequest
from .errors import BuildSubmissionError, ConfigurationError
from .events import extract_image_id
from .report import report
from .staging import StagingDirectory
from .utils import package_context


def build(
    client: BuildAPIClient,
    dockerfile: Path | str,
    target: str,
    interactive: bool = False,
) -> str:
    """
    Build a single Dockerfile and return the resulting image ID.

    Only the Dockerfile itself is sent as build context. The staging directory
    and the daemon response are released on every exit path.

    Args:
        client: Open Docker API client
        dockerfile: Path to the Dockerfile to build
        target: Tag for the built image
        interactive: Ask the daemon to keep failed build state for debugging

    Returns:
        The image ID, or "" if the daemon reported none
    """
    with StagingDirectory(dockerfile) as staging:
        with package_context(staging.path) as context:
            request = BuildRequest(target=target, context=context, interactive=interactive)
            response = client.submit_build(request)

        try:
            return extract_image_id(response)
        except requests.exceptions.RequestException as e:
            raise BuildSubmissionError(f"lost connection to the Docker daemon: {e}") from e
        finally:
            response.close()


def run_build(args) -> int:
    """Run one build from parsed command-line arguments and return the exit code."""
    if not args.target:
        raise ConfigurationError(MISSING_TARGET)

    print("🦎 Dinosaur debug builder:")
    print("  interactive debug:", args.interactive)
    print("         dockerfile:", args.file)
    print("            context:", args.context)
    print("             target:", args.target)

    with BuildAPIClient.from_env(timeout=args.timeout) as client:
        image_id = build(client, args.file, args.target, interactive=args.interactive)

    if image_id:
        logger.success(f"✓ Built {args.target}")
    return report(image_id)
