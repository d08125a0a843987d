"""
CLI interface for docker-stats

Prints one CSV line of derived metrics per stats tick of a container:

    $ docker-stats my-container
    cpu,mem,rx,tx,read,write
    0.5134,12.34765625,648,0,0,4096
"""
import os
import sys
import signal
import argparse
import logging

from docker_stats import __version__
from docker_stats.config import LOG_LEVELS, load_config
from docker_stats.docker_client import DockerStatsSource
from docker_stats.driver import StatsDriver
from docker_stats.errors import StatsSourceError
from docker_stats.exporter import MetricsServer
from docker_stats.metrics import MetricsPublisher, StatsMetrics
from docker_stats.output import CsvWriter

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    """Log to stderr; stdout carries the CSV records"""
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='docker-stats',
        description='Stream CPU, memory, network and block I/O rates of a Docker container as CSV'
    )
    parser.add_argument('container', help='Container name or ID')
    parser.add_argument('--docker-host', type=str, help='Docker daemon URL (default: DOCKER_HOST)')
    parser.add_argument('--timeout', type=float, help='Docker API timeout in seconds')
    parser.add_argument('--metrics-port', type=int, help='Serve Prometheus metrics on this port')
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS, help='Log level (default: WARNING)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt(f"signal {signum}")


def _discard_stdout():
    """Point stdout at /dev/null so the flush at interpreter exit does not fail again"""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(
            docker_host=args.docker_host,
            timeout=args.timeout,
            metrics_port=args.metrics_port,
            log_level=args.log_level,
        )
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    configure_logging(config.log_level)

    writer = CsvWriter(sys.stdout)
    sinks = [writer]

    previous_handler = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        writer.write_header()
        source = DockerStatsSource(config.docker_host, config.timeout)
        with source:
            if config.metrics_port:
                metrics = StatsMetrics()
                sinks.append(MetricsPublisher(args.container, metrics))
                MetricsServer(
                    metrics,
                    args.container,
                    port=config.metrics_port,
                    health_check=source.ping
                ).start()

            driver = StatsDriver(sinks)
            records = driver.run(source.samples(args.container))
            logger.info(f"Stats stream ended after {records} records")
    except StatsSourceError as e:
        logger.error(f"{e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    except BrokenPipeError:
        # Reader closed stdout (e.g. piped into head)
        logger.info("Output closed, shutting down...")
        _discard_stdout()
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)

    return 0


if __name__ == '__main__':
    sys.exit(main())
