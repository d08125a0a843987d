"""
Sample data builders for test fixtures.

Provides RawSample builders and Docker Engine API stats documents shaped like
what the daemon returns on cgroup v1 and cgroup v2 hosts.

Usage:
    >>> from tests.fixtures.sample_data import make_sample
    >>> sample = make_sample(cpu_total=1500, system=100500, cpus=2)
    >>> assert sample.cpu_count == 2
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from docker_stats.models import BlkioEntry, BlkioOp, NetworkCounters, RawSample


def make_sample(
    cpu_total: int = 0,
    system: int = 0,
    cpus: int = 1,
    mem_usage: int = 0,
    inactive_file: int = 0,
    networks: Optional[Dict[str, Tuple[int, int]]] = None,
    blkio: Optional[Iterable[Tuple[Any, int]]] = None,
) -> RawSample:
    """Build a RawSample from plain values.

    Args:
        networks: {interface: (rx_bytes, tx_bytes)}
        blkio: [(op, value)] with op as a BlkioOp or Docker's op string
    """
    return RawSample(
        cpu_total_usage=cpu_total,
        cpu_system_usage=system,
        cpu_count=cpus,
        mem_usage=mem_usage,
        mem_inactive_file=inactive_file,
        networks={
            name: NetworkCounters(rx_bytes=rx, tx_bytes=tx)
            for name, (rx, tx) in (networks or {}).items()
        },
        blkio_entries=tuple(
            BlkioEntry(op=op if isinstance(op, BlkioOp) else BlkioOp.parse(op), value=value)
            for op, value in (blkio or [])
        ),
    )


def make_sample_series(count: int, cpu_step: int = 100, system_step: int = 1000, cpus: int = 2) -> List[RawSample]:
    """Samples with steadily increasing counters (cpu_step / system_step share per tick)"""
    return [
        make_sample(
            cpu_total=i * cpu_step,
            system=i * system_step,
            cpus=cpus,
            mem_usage=(i + 1) * 1048576,
            networks={'eth0': (i * 10, i * 5)},
            blkio=[('Read', i * 4096), ('Write', i * 8192)],
        )
        for i in range(count)
    ]


def cgroup_v1_stats_doc() -> Dict[str, Any]:
    """Stats document as returned by the Docker API on a cgroup v1 host"""
    return {
        'read': '2024-03-01T10:00:01.000000000Z',
        'preread': '2024-03-01T10:00:00.000000000Z',
        'cpu_stats': {
            'cpu_usage': {
                'total_usage': 1500,
                'percpu_usage': [700, 800],
                'usage_in_kernelmode': 100,
                'usage_in_usermode': 1400,
            },
            'system_cpu_usage': 100500,
            'online_cpus': 2,
            'throttling_data': {'periods': 0, 'throttled_periods': 0, 'throttled_time': 0},
        },
        'precpu_stats': {
            'cpu_usage': {'total_usage': 1000, 'percpu_usage': [500, 500]},
            'system_cpu_usage': 100000,
            'online_cpus': 2,
        },
        'memory_stats': {
            'usage': 2097152,
            'max_usage': 4194304,
            'limit': 8589934592,
            'stats': {
                'cache': 1048576,
                'inactive_file': 4096,
                'total_inactive_file': 1048576,
            },
        },
        'networks': {
            'eth0': {'rx_bytes': 300, 'rx_packets': 3, 'tx_bytes': 120, 'tx_packets': 2},
            'eth1': {'rx_bytes': 10, 'rx_packets': 1, 'tx_bytes': 5, 'tx_packets': 1},
        },
        'blkio_stats': {
            'io_service_bytes_recursive': [
                {'major': 8, 'minor': 0, 'op': 'Read', 'value': 250},
                {'major': 8, 'minor': 0, 'op': 'Write', 'value': 150},
                {'major': 8, 'minor': 0, 'op': 'Sync', 'value': 400},
                {'major': 8, 'minor': 0, 'op': 'Total', 'value': 400},
                {'major': 8, 'minor': 16, 'op': 'Read', 'value': 50},
            ],
        },
    }


def cgroup_v2_stats_doc() -> Dict[str, Any]:
    """Stats document as returned by the Docker API on a cgroup v2 host (no percpu_usage)"""
    return {
        'read': '2024-03-01T10:00:01.000000000Z',
        'cpu_stats': {
            'cpu_usage': {'total_usage': 5000000, 'usage_in_kernelmode': 1000000},
            'system_cpu_usage': 900000000,
            'online_cpus': 4,
        },
        'memory_stats': {
            'usage': 3145728,
            'limit': 8589934592,
            'stats': {'inactive_file': 1048576, 'active_file': 0, 'anon': 2097152},
        },
        'networks': {
            'eth0': {'rx_bytes': 1000, 'tx_bytes': 2000},
        },
        'blkio_stats': {
            'io_service_bytes_recursive': [
                {'major': 259, 'minor': 0, 'op': 'read', 'value': 4096},
                {'major': 259, 'minor': 0, 'op': 'write', 'value': 8192},
            ],
        },
    }


def stats_doc_series(count: int) -> List[Dict[str, Any]]:
    """Consecutive cgroup v1 documents, each tick adding 500ns of CPU over 1000ns of host time"""
    docs = []
    for i in range(count):
        doc = cgroup_v1_stats_doc()
        doc['cpu_stats']['cpu_usage']['total_usage'] = 1000 + i * 500
        doc['cpu_stats']['system_cpu_usage'] = 100000 + i * 1000
        doc['networks']['eth0']['rx_bytes'] = 300 + i * 100
        docs.append(doc)
    return docs
