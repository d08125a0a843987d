"""
Exceptions raised by the stats source.
"""


class DockerStatsError(Exception):
    """Base class for docker-stats errors."""


class StatsSourceError(DockerStatsError):
    """The Docker daemon or transport failed while streaming stats."""


class StatsParseError(StatsSourceError):
    """A stats document could not be turned into a sample."""
