"""
Docker Stats

Streams resource-usage samples for a single running container and derives
docker-CLI-style rates (CPU percentage, memory, network and block I/O
throughput) from the cumulative counters reported by the Docker API.
"""

__version__ = "1.0.0"
