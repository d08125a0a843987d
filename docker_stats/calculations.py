"""
Differencing engine for Docker container stats.

Turns two consecutive RawSamples into the rates shown by ``docker stats``.
The formulas follow the docker CLI (cli/command/container/stats_helpers.go):

- CPU %   = (container CPU delta / host CPU delta) * number of CPUs * 100
- Memory  = usage minus inactive file cache, in MiB
- Net I/O = delta of rx/tx bytes summed over all interfaces
- Blk I/O = delta of read/write bytes summed over all devices

Every function here is pure. Counters are Python ints, so a counter reset
shows up as a negative delta instead of wrapping; results are never clamped.
"""
import math
from typing import Tuple

from docker_stats.models import BlkioOp, DerivedMetrics, RawSample

BYTES_PER_MIB = 1048576
MIB_PER_BYTE = 1.0 / BYTES_PER_MIB


def _divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: x/0 gives +-inf, 0/0 gives nan"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def cpu_percent(cur: RawSample, prev: RawSample) -> float:
    """
    Container CPU usage between two samples as a percentage of one CPU.

    A container saturating one core of an N-core host reports ~100%, and a
    container saturating every core reports ~N*100%.

    Args:
        cur: Current sample.
        prev: Previous sample of the same container.

    Returns:
        CPU percentage. nan or +-inf when the host CPU counter did not
        advance between the samples.
    """
    cpu_delta = cur.cpu_total_usage - prev.cpu_total_usage
    system_delta = cur.cpu_system_usage - prev.cpu_system_usage
    return _divide(float(cpu_delta), float(system_delta)) * cur.cpu_count * 100.0


def mem_usage_bytes(cur: RawSample) -> int:
    """Memory usage without inactive page cache.

    The cache figure is ignored when it is not smaller than usage, which
    happens with some cgroup accounting.
    """
    if cur.mem_inactive_file < cur.mem_usage:
        return cur.mem_usage - cur.mem_inactive_file
    return cur.mem_usage


def mem_mib(cur: RawSample) -> float:
    """Memory usage gauge in MiB"""
    return mem_usage_bytes(cur) * MIB_PER_BYTE


def net_totals(sample: RawSample) -> Tuple[int, int]:
    """Cumulative (rx_bytes, tx_bytes) summed over all interfaces"""
    total_rx = 0
    total_tx = 0
    for counters in sample.networks.values():
        total_rx += counters.rx_bytes
        total_tx += counters.tx_bytes
    return total_rx, total_tx


def net_delta(cur: RawSample, prev: RawSample) -> Tuple[int, int]:
    """
    Network bytes received and transmitted between two samples.

    Interfaces that only exist in one of the samples only count towards
    that sample's total.
    """
    cur_rx, cur_tx = net_totals(cur)
    prev_rx, prev_tx = net_totals(prev)
    return cur_rx - prev_rx, cur_tx - prev_tx


def disk_totals(sample: RawSample) -> Tuple[int, int]:
    """Cumulative (read_bytes, write_bytes) summed over all block devices"""
    read_bytes = 0
    write_bytes = 0
    for entry in sample.blkio_entries:
        if entry.op is BlkioOp.READ:
            read_bytes += entry.value
        elif entry.op is BlkioOp.WRITE:
            write_bytes += entry.value
    return read_bytes, write_bytes


def disk_delta(cur: RawSample, prev: RawSample) -> Tuple[int, int]:
    """Block I/O bytes read and written between two samples"""
    cur_read, cur_write = disk_totals(cur)
    prev_read, prev_write = disk_totals(prev)
    return cur_read - prev_read, cur_write - prev_write


def derive_metrics(cur: RawSample, prev: RawSample) -> DerivedMetrics:
    """Compute all derived metrics for one pair of consecutive samples."""
    rx, tx = net_delta(cur, prev)
    read, write = disk_delta(cur, prev)
    return DerivedMetrics(
        cpu_percent=cpu_percent(cur, prev),
        mem_mib=mem_mib(cur),
        rx_bytes=rx,
        tx_bytes=tx,
        read_bytes=read,
        write_bytes=write,
    )
