"""
Mock API factories for testing.

Provides mock implementations of the Docker SDK objects docker-stats talks to:
- docker.DockerClient (ping, containers.get, close)
- Container.stats(stream=True, decode=True)

All mocks return structures matching the real SDK.
"""

from typing import Any, Dict, Iterable, Optional
from unittest.mock import MagicMock


class MockContainer:
    """
    Mock docker.models.containers.Container.

    stats() yields the given documents, then raises ``error`` if one is set.
    """

    def __init__(
        self,
        name: str = "web",
        container_id: str = "3f4e8a9b2c1d5e6f7a8b9c0d",
        docs: Iterable[Dict[str, Any]] = (),
        error: Optional[Exception] = None,
    ):
        self.name = name
        self.id = container_id
        self.short_id = container_id[:12]
        self._docs = list(docs)
        self._error = error
        self.stats_calls = []

    def stats(self, **kwargs):
        self.stats_calls.append(kwargs)
        return self._stream()

    def _stream(self):
        for doc in self._docs:
            yield doc
        if self._error is not None:
            raise self._error


def mock_docker_client(container: Optional[MockContainer] = None, get_error: Optional[Exception] = None) -> MagicMock:
    """
    Build a mock DockerClient.

    Args:
        container: Container returned by containers.get().
        get_error: Exception raised by containers.get() instead.
    """
    client = MagicMock()
    client.ping.return_value = True
    if get_error is not None:
        client.containers.get.side_effect = get_error
    else:
        client.containers.get.return_value = container or MockContainer()
    return client
