from dataclasses import dataclass
from typing import BinaryIO, Optional

import docker
import requests
from docker.errors import DockerException
from docker.utils import kwargs_from_env
from loguru import logger

from .errors import BuildSubmissionError, ConfigurationError
from .staging import CONTEXT_DOCKERFILE

MISSING_TARGET = "Please enter a -t target to build"


@dataclass(frozen=True)
class BuildRequest:
    target: str
    context: BinaryIO
    interactive: bool = False
    dockerfile: str = CONTEXT_DOCKERFILE
    remove: bool = True
    force_remove: bool = True

    def __post_init__(self):
        if not self.target:
            raise ConfigurationError(MISSING_TARGET)

    def params(self) -> dict:
        """Query parameters for the daemon's ``/build`` endpoint."""
        params = {
            "t": self.target,
            "dockerfile": self.dockerfile,
            "rm": self.remove,
            "forcerm": self.force_remove,
        }
        # Only a debug-enabled daemon understands this; stock daemons ignore it.
        if self.interactive:
            params["interactive"] = True
        return params


class BuildAPIClient(docker.APIClient):
    """
    Low-level Docker API client that submits a single build request.

    The stock ``APIClient.build`` has no way to pass the interactive flag and
    hides the raw response, so the request is issued here directly.
    """

    @classmethod
    def from_env(cls, timeout: Optional[float] = None, environment: Optional[dict] = None):
        """
        Create a client from ``DOCKER_HOST``, ``DOCKER_TLS_VERIFY`` and
        ``DOCKER_CERT_PATH``.

        Args:
            timeout: Seconds to wait on connect and on each read of the daemon
                connection; None waits forever
            environment: Mapping to read the variables from (default: os.environ)

        Returns:
            Connected BuildAPIClient instance
        """
        try:
            return cls(timeout=timeout, **kwargs_from_env(environment=environment))
        except DockerException as e:
            raise BuildSubmissionError(f"could not connect to the Docker daemon: {e}") from e

    def submit_build(self, request: BuildRequest) -> requests.Response:
        """
        Send the build request and return the daemon's unread event stream.

        Args:
            request: BuildRequest with the packaged context and build flags

        Returns:
            Streaming response; the caller must consume and close it
        """
        headers = {"Content-Type": "application/tar"}
        self._set_auth_headers(headers)
        logger.debug(f"Submitting build: {request.params()}")

        try:
            response = self._post(
                self._url("/build"),
                data=request.context,
                params=request.params(),
                headers=headers,
                stream=True,
                timeout=self.timeout,
            )
        except (DockerException, requests.exceptions.RequestException) as e:
            raise BuildSubmissionError(f"could not build image: {e}") from e

        try:
            self._raise_for_status(response)
        except DockerException as e:
            response.close()
            raise BuildSubmissionError(f"could not build image: {e}") from e

        return response
