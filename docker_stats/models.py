"""
Data structures for raw container stats samples and the metrics derived from them.

A RawSample holds the subset of one Docker Engine API stats document that the
differencing engine needs. Samples are immutable: each tick replaces the
previous one wholesale.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from docker_stats.errors import StatsParseError


class BlkioOp(str, Enum):
    """Block I/O operation tag of an io_service_bytes entry"""
    READ = "read"
    WRITE = "write"
    OTHER = "other"

    @classmethod
    def parse(cls, op: Optional[str]) -> 'BlkioOp':
        """Map Docker's op string to a BlkioOp.

        cgroup v1 reports "Read"/"Write"/"Sync"/"Total", cgroup v2 reports
        lowercase "read"/"write". Anything that is not a read or write is OTHER.
        """
        if not op:
            return cls.OTHER
        try:
            value = cls(op.lower())
        except ValueError:
            return cls.OTHER
        return value


@dataclass(frozen=True)
class BlkioEntry:
    op: BlkioOp
    value: int


@dataclass(frozen=True)
class NetworkCounters:
    rx_bytes: int
    tx_bytes: int


@dataclass(frozen=True)
class RawSample:
    """Counters of one container at one instant.

    Attributes:
        cpu_total_usage: Cumulative CPU time used by the container (ns).
        cpu_system_usage: Cumulative CPU time used by the host (ns).
        cpu_count: Number of CPUs visible to the container.
        mem_usage: Current memory usage in bytes.
        mem_inactive_file: Inactive file-backed (page cache) memory in bytes.
        networks: Cumulative rx/tx bytes per interface name.
        blkio_entries: Cumulative block I/O bytes, one entry per device and op.
        read_at: Timestamp string reported by the daemon, if any.
    """
    cpu_total_usage: int = 0
    cpu_system_usage: int = 0
    cpu_count: int = 0
    mem_usage: int = 0
    mem_inactive_file: int = 0
    networks: Mapping[str, NetworkCounters] = field(default_factory=dict)
    blkio_entries: Tuple[BlkioEntry, ...] = ()
    read_at: Optional[str] = None

    def __post_init__(self):
        # Freeze the containers too so a sample can't change after it is taken
        object.__setattr__(self, 'networks', MappingProxyType(dict(self.networks)))
        object.__setattr__(self, 'blkio_entries', tuple(self.blkio_entries))

    def __hash__(self):
        # mappingproxy is unhashable; interface names are unique so sorting is stable
        return hash((
            self.cpu_total_usage,
            self.cpu_system_usage,
            self.cpu_count,
            self.mem_usage,
            self.mem_inactive_file,
            tuple(sorted(self.networks.items())),
            self.blkio_entries,
            self.read_at,
        ))

    @classmethod
    def from_api(cls, stats: Dict[str, Any]) -> 'RawSample':
        """
        Build a sample from a decoded Docker API stats document.

        Args:
            stats: One element of ``container.stats(stream=True, decode=True)``.

        Returns:
            RawSample with missing sections treated as zero or empty.

        Raises:
            StatsParseError: If the document does not have the expected shape.
        """
        if not isinstance(stats, dict):
            raise StatsParseError(f"Expected a stats object, got {type(stats).__name__}")

        try:
            return cls(
                cpu_total_usage=_parse_cpu_total(stats),
                cpu_system_usage=int((stats.get('cpu_stats') or {}).get('system_cpu_usage') or 0),
                cpu_count=_parse_cpu_count(stats),
                mem_usage=int((stats.get('memory_stats') or {}).get('usage') or 0),
                mem_inactive_file=_parse_inactive_file(stats),
                networks=_parse_networks(stats),
                blkio_entries=_parse_blkio(stats),
                read_at=stats.get('read'),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise StatsParseError(f"Malformed stats document: {e}") from e


def _parse_cpu_total(stats: Dict[str, Any]) -> int:
    cpu_usage = (stats.get('cpu_stats') or {}).get('cpu_usage') or {}
    return int(cpu_usage.get('total_usage') or 0)


def _parse_cpu_count(stats: Dict[str, Any]) -> int:
    """Count per-CPU entries, falling back to online_cpus (cgroup v2 has no percpu list)"""
    cpu_stats = stats.get('cpu_stats') or {}
    percpu = (cpu_stats.get('cpu_usage') or {}).get('percpu_usage') or []
    if percpu:
        return len(percpu)
    return int(cpu_stats.get('online_cpus') or 0)


def _parse_inactive_file(stats: Dict[str, Any]) -> int:
    """Inactive file memory: total_inactive_file on cgroup v1, inactive_file on v2"""
    mem_stats = (stats.get('memory_stats') or {}).get('stats') or {}
    if 'total_inactive_file' in mem_stats:
        return int(mem_stats['total_inactive_file'] or 0)
    return int(mem_stats.get('inactive_file') or 0)


def _parse_networks(stats: Dict[str, Any]) -> Dict[str, NetworkCounters]:
    networks = stats.get('networks') or {}
    return {
        interface: NetworkCounters(
            rx_bytes=int(net_stats.get('rx_bytes') or 0),
            tx_bytes=int(net_stats.get('tx_bytes') or 0),
        )
        for interface, net_stats in networks.items()
    }


def _parse_blkio(stats: Dict[str, Any]) -> Tuple[BlkioEntry, ...]:
    blkio_stats = stats.get('blkio_stats') or {}
    io_service_bytes = blkio_stats.get('io_service_bytes_recursive') or []
    return tuple(
        BlkioEntry(op=BlkioOp.parse(entry.get('op')), value=int(entry.get('value') or 0))
        for entry in io_service_bytes
    )


@dataclass(frozen=True)
class DerivedMetrics:
    """Rates computed from two consecutive samples.

    cpu_percent may be negative or non-finite (nan/inf) when the host CPU
    counter did not advance or a counter was reset; byte deltas may be
    negative after a reset. Consumers treat such values as "no signal".
    """
    cpu_percent: float
    mem_mib: float
    rx_bytes: int
    tx_bytes: int
    read_bytes: int
    write_bytes: int

    FIELDS = ('cpu', 'mem', 'rx', 'tx', 'read', 'write')

    def as_row(self) -> Tuple[float, float, int, int, int, int]:
        """Values in FIELDS order"""
        return (
            self.cpu_percent,
            self.mem_mib,
            self.rx_bytes,
            self.tx_bytes,
            self.read_bytes,
            self.write_bytes,
        )

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.cpu_percent)
