"""
Docker API client that streams container statistics.

This module wraps the Docker SDK and yields one RawSample per stats tick for a
single container. Failures are raised as StatsSourceError; nothing here
retries.
"""

import logging
from typing import Iterator, Optional

import docker
from docker.errors import APIError, DockerException, NotFound, StreamParseError
from requests.exceptions import RequestException
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from docker_stats.errors import StatsSourceError
from docker_stats.models import RawSample

logger = logging.getLogger(__name__)


class DockerStatsSource:
    """Streams raw stats samples for one container from the Docker daemon."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Connect to the Docker daemon.

        Args:
            base_url: Optional daemon URL (e.g. unix:///var/run/docker.sock).
                If None, uses DOCKER_HOST and friends from the environment.
            timeout: Optional API timeout in seconds.

        Raises:
            StatsSourceError: If the daemon cannot be reached.
        """
        kwargs = {}
        if timeout is not None:
            kwargs['timeout'] = timeout

        try:
            if base_url:
                self.client = docker.DockerClient(base_url=base_url, **kwargs)
            else:
                self.client = docker.from_env(**kwargs)

            # Test connection
            self.client.ping()
            logger.info("Successfully connected to Docker daemon")
        except (DockerException, RequestException) as e:
            logger.error(f"Failed to connect to Docker daemon: {e}")
            raise StatsSourceError(f"Failed to connect to Docker daemon: {e}") from e

    def samples(self, container_id: str) -> Iterator[RawSample]:
        """
        Stream stats samples for a container.

        Args:
            container_id: Container name or ID.

        Yields:
            One RawSample per stats tick, until the daemon closes the stream.

        Raises:
            StatsSourceError: If the container does not exist or the stream fails.
        """
        try:
            container = self.client.containers.get(container_id)
        except NotFound as e:
            raise StatsSourceError(f"No such container: {container_id}") from e
        except (DockerException, RequestException) as e:
            raise StatsSourceError(f"Failed to look up container {container_id}: {e}") from e

        logger.info(f"Streaming stats for container {container.name} ({container.short_id})")

        try:
            for stats in container.stats(stream=True, decode=True):
                yield RawSample.from_api(stats)
        except APIError as e:
            raise StatsSourceError(f"Stats stream for {container_id} failed: {e}") from e
        except (DockerException, RequestException, Urllib3HTTPError) as e:
            # The SDK reads the stream from urllib3 directly, so socket errors arrive unwrapped
            raise StatsSourceError(f"Lost connection while streaming {container_id}: {e}") from e
        except StreamParseError as e:
            raise StatsSourceError(f"Unreadable stats stream for {container_id}: {e}") from e

        logger.info(f"Stats stream for container {container_id} closed")

    def ping(self) -> bool:
        """Return True if the daemon answers"""
        try:
            return bool(self.client.ping())
        except (DockerException, RequestException):
            return False

    def close(self):
        """Close the Docker client connection."""
        try:
            self.client.close()
            logger.info("Docker client connection closed")
        except Exception as e:
            logger.error(f"Error closing Docker client: {e}")

    def __enter__(self) -> 'DockerStatsSource':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
