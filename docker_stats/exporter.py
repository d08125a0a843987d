"""
HTTP endpoint exposing the derived metrics in Prometheus format.

The server runs in a daemon thread next to the stats stream and only reads
the Prometheus registry, so the stream itself stays single-threaded.
"""

import logging
import threading
from typing import Callable, Optional

from flask import Flask, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from docker_stats import __version__
from docker_stats.metrics import StatsMetrics

logger = logging.getLogger(__name__)


class MetricsServer:
    """Serves /metrics, /health and / for one container's stats."""

    def __init__(
        self,
        metrics: StatsMetrics,
        container: str,
        port: int = 8003,
        host: str = '0.0.0.0',
        health_check: Optional[Callable[[], bool]] = None
    ):
        """
        Args:
            metrics: Metrics whose registry is exposed.
            container: Container being watched, reported on /.
            port: HTTP port to listen on.
            host: Interface to bind.
            health_check: Callable returning True while the Docker daemon is
                reachable. /health reports "initializing" if None.
        """
        self.metrics = metrics
        self.container = container
        self.port = port
        self.host = host
        self.health_check = health_check
        self.thread = None

        # Flask app for HTTP server
        self.app = Flask(__name__)
        self._setup_routes()

    def _setup_routes(self):
        """Setup Flask routes."""

        @self.app.route('/metrics')
        def metrics_endpoint():
            """Prometheus metrics endpoint."""
            return Response(generate_latest(self.metrics.registry), mimetype=CONTENT_TYPE_LATEST)

        @self.app.route('/health')
        def health():
            """Health check endpoint."""
            if self.health_check is None:
                return {'status': 'initializing'}, 503
            if self.health_check():
                return {'status': 'healthy', 'docker': 'connected'}, 200
            return {'status': 'unhealthy', 'docker': 'disconnected'}, 503

        @self.app.route('/')
        def root():
            """Root endpoint with information."""
            return {
                'name': 'Docker Stats',
                'version': __version__,
                'container': self.container,
                'endpoints': {
                    '/metrics': 'Prometheus metrics',
                    '/health': 'Health check'
                }
            }

    def start(self):
        """Start serving in a daemon thread."""
        logger.info(f"Starting metrics HTTP server on port {self.port}...")
        self.thread = threading.Thread(
            target=self.app.run,
            kwargs={'host': self.host, 'port': self.port, 'threaded': True, 'use_reloader': False},
            daemon=True,
        )
        self.thread.start()
