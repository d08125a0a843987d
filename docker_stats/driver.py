"""
Stream driver: pairs consecutive samples and feeds derived metrics to sinks.

The only state kept between ticks is the previous sample. The first sample
of a stream produces no output; every later sample produces exactly one
DerivedMetrics computed against the sample before it.
"""
import logging
from typing import Callable, Iterable, Iterator, Optional, Sequence

from docker_stats.calculations import derive_metrics
from docker_stats.models import DerivedMetrics, RawSample

logger = logging.getLogger(__name__)

MetricsSink = Callable[[DerivedMetrics], None]


def stream_metrics(samples: Iterable[RawSample]) -> Iterator[DerivedMetrics]:
    """
    Derive metrics from each pair of consecutive samples.

    Args:
        samples: Lazy sequence of samples for one container, in arrival order.

    Yields:
        One DerivedMetrics per sample after the first.

    Errors raised by ``samples`` propagate unchanged and end the stream.
    """
    previous: Optional[RawSample] = None
    for sample in samples:
        if previous is not None:
            yield derive_metrics(sample, previous)
        previous = sample


class StatsDriver:
    """Pulls samples from a source and forwards derived metrics to sinks."""

    def __init__(self, sinks: Sequence[MetricsSink]):
        """
        Args:
            sinks: Callables invoked with every DerivedMetrics, in order.
        """
        self.sinks = list(sinks)
        self.records_emitted = 0

    def run(self, samples: Iterable[RawSample]) -> int:
        """
        Consume ``samples`` until it is exhausted.

        Args:
            samples: Sample stream for one container.

        Returns:
            Number of records emitted.

        Raises:
            Whatever the sample stream raises; there is no retry.
        """
        logger.debug("Stats stream started")
        self.records_emitted = 0

        metrics_stream = stream_metrics(samples)
        try:
            for metrics in metrics_stream:
                if not metrics.is_finite:
                    logger.debug(f"No CPU signal this tick (cpu_percent={metrics.cpu_percent})")
                for sink in self.sinks:
                    sink(metrics)
                self.records_emitted += 1
        finally:
            metrics_stream.close()
            logger.debug(f"Stats stream stopped after {self.records_emitted} records")

        return self.records_emitted
