"""
Prometheus metrics definitions for derived container statistics.

Every gauge carries the per-interval value of the latest tick, labelled by
the container being watched.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge

from docker_stats.models import DerivedMetrics


class StatsMetrics:
    """Gauges and counters for one registry."""

    def __init__(self, registry: CollectorRegistry = None):
        """
        Args:
            registry: Registry to register the metrics in. A private one is
                created if None, so several instances never collide.
        """
        self.registry = registry if registry is not None else CollectorRegistry()

        # CPU usage over the last interval, 100 = one full core
        self.cpu_percent = Gauge(
            'docker_stats_cpu_percent',
            'CPU usage over the last interval as a percentage of one CPU',
            ['container'],
            registry=self.registry,
        )

        # Memory usage excluding inactive file cache
        self.memory_mib = Gauge(
            'docker_stats_memory_mib',
            'Memory usage without inactive page cache in MiB',
            ['container'],
            registry=self.registry,
        )

        # Network bytes over the last interval
        self.network_receive_bytes = Gauge(
            'docker_stats_network_receive_bytes',
            'Bytes received over the last interval',
            ['container'],
            registry=self.registry,
        )
        self.network_transmit_bytes = Gauge(
            'docker_stats_network_transmit_bytes',
            'Bytes transmitted over the last interval',
            ['container'],
            registry=self.registry,
        )

        # Block I/O bytes over the last interval
        self.blkio_read_bytes = Gauge(
            'docker_stats_blkio_read_bytes',
            'Bytes read from block devices over the last interval',
            ['container'],
            registry=self.registry,
        )
        self.blkio_write_bytes = Gauge(
            'docker_stats_blkio_write_bytes',
            'Bytes written to block devices over the last interval',
            ['container'],
            registry=self.registry,
        )

        self.samples_total = Counter(
            'docker_stats_samples',
            'Number of derived metrics records published',
            ['container'],
            registry=self.registry,
        )


class MetricsPublisher:
    """
    Sink that copies each DerivedMetrics into Prometheus gauges.

    Values are published as computed, including negative deltas after a
    counter reset and nan when the host CPU counter did not move.
    """

    def __init__(self, container: str, metrics: StatsMetrics = None):
        self.container = container
        self.metrics = metrics if metrics is not None else StatsMetrics()

    def __call__(self, derived: DerivedMetrics):
        labels = {'container': self.container}
        self.metrics.cpu_percent.labels(**labels).set(derived.cpu_percent)
        self.metrics.memory_mib.labels(**labels).set(derived.mem_mib)
        self.metrics.network_receive_bytes.labels(**labels).set(derived.rx_bytes)
        self.metrics.network_transmit_bytes.labels(**labels).set(derived.tx_bytes)
        self.metrics.blkio_read_bytes.labels(**labels).set(derived.read_bytes)
        self.metrics.blkio_write_bytes.labels(**labels).set(derived.write_bytes)
        self.metrics.samples_total.labels(**labels).inc()
