"""
Comma-separated console output for derived metrics.
"""
import sys
from typing import TextIO

from docker_stats.models import DerivedMetrics

HEADER = ",".join(DerivedMetrics.FIELDS)


def format_value(value) -> str:
    # repr gives the shortest string that round-trips a float
    if isinstance(value, float):
        return repr(value)
    return str(value)


def format_record(metrics: DerivedMetrics) -> str:
    """One CSV line (without newline) in cpu,mem,rx,tx,read,write order"""
    return ",".join(format_value(value) for value in metrics.as_row())


class CsvWriter:
    """Writes the header once and one line per DerivedMetrics."""

    def __init__(self, stream: TextIO = None):
        self.stream = stream if stream is not None else sys.stdout

    def write_header(self):
        self._write_line(HEADER)

    def __call__(self, metrics: DerivedMetrics):
        self._write_line(format_record(metrics))

    def _write_line(self, line: str):
        self.stream.write(line + "\n")
        self.stream.flush()
