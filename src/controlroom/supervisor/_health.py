"""Host health report.

Probes the managed host with a handful of read-only system commands and
the supervisor listing, then scores the result. Each probe runs in its
own worker thread and fails on its own: a failed probe leaves its section
of the report empty instead of failing the whole report.
"""

import concurrent.futures
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar

import pendulum

from controlroom.config import HealthConfig, HostConfig, SupervisorConfig
from controlroom.exceptions import ControlRoomError
from controlroom.utils import create_null_logger

from ._models import ServiceStatus
from ._status import ServiceStatusQuery

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from controlroom.utils import CommandExecutor

T = TypeVar("T")

_CPU_PATTERN = re.compile(r"Cpu\(s\):\s*([\d.,]+)")

# Score thresholds: (limit, penalty) pairs checked from the highest limit down
_DISK_PENALTIES = ((90, 30), (80, 15))
_MEMORY_PENALTIES = ((90, 30), (80, 15))
_CPU_PENALTIES = ((90, 20), (75, 10))
_SERVICES_DOWN_PENALTY = 25
_UNIT_DOWN_PENALTY = 40
_HEALTHY_SCORE = 80
_WARNING_SCORE = 50


class HealthLevel(StrEnum):
    """Overall host health levels."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class DiskUsage:
    """Root filesystem usage, sizes as reported by ``df -h``."""

    total: str
    used: str
    available: str
    percentage: int


@dataclass(frozen=True, slots=True)
class MemoryUsage:
    """Physical memory usage in megabytes."""

    total: int
    used: int
    free: int
    percentage: int


@dataclass(frozen=True, slots=True)
class SupervisorSummary:
    """Service counts from the supervisor listing."""

    count: int
    running: int


@dataclass(frozen=True, slots=True)
class HostHealth:
    """Point-in-time health report for the managed host.

    Attributes:
        host: Configured name of the managed host.
        uptime: Output of ``uptime``, or "Unknown".
        disk: Root filesystem usage, if it could be read.
        memory: Memory usage, if it could be read.
        cpu_percent: CPU usage in percent, if it could be read.
        supervisor: Supervisor service counts, if the listing succeeded.
        units: Active state of each configured system unit.
        overall: Scored health level.
        timestamp: ISO 8601 time the report was produced.
    """

    host: str
    uptime: str
    disk: DiskUsage | None
    memory: MemoryUsage | None
    cpu_percent: int | None
    supervisor: SupervisorSummary | None
    units: dict[str, bool]
    overall: HealthLevel
    timestamp: str


def parse_disk_usage(output: str) -> DiskUsage | None:
    """Parse the data row of ``df -h /`` output."""
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return None

    parts = lines[-1].split()
    if len(parts) < 5:  # noqa: PLR2004
        return None

    try:
        percentage = int(parts[4].rstrip("%"))
    except ValueError:
        return None

    return DiskUsage(
        total=parts[1], used=parts[2], available=parts[3], percentage=percentage
    )


def parse_memory_usage(output: str) -> MemoryUsage | None:
    """Parse the ``Mem:`` row of ``free -m`` output."""
    mem_line = next(
        (line for line in output.splitlines() if line.startswith("Mem:")), None
    )
    if mem_line is None:
        return None

    parts = mem_line.split()
    try:
        total, used, free = int(parts[1]), int(parts[2]), int(parts[3])
    except (IndexError, ValueError):
        return None

    percentage = round(used / total * 100) if total else 0
    return MemoryUsage(total=total, used=used, free=free, percentage=percentage)


def parse_cpu_usage(output: str) -> int | None:
    """Parse the user CPU figure from one batch iteration of ``top``."""
    match = _CPU_PATTERN.search(output)
    if match is None:
        return None
    try:
        return round(float(match.group(1).replace(",", ".")))
    except ValueError:
        return None


def _penalty(value: int | None, thresholds: tuple[tuple[int, int], ...]) -> int:
    if value is None:
        return 0
    for limit, penalty in thresholds:
        if value > limit:
            return penalty
    return 0


def score_health(
    *,
    disk: DiskUsage | None,
    memory: MemoryUsage | None,
    cpu_percent: int | None,
    supervisor: SupervisorSummary | None,
    units: dict[str, bool],
) -> HealthLevel:
    """Score a set of probe results into an overall health level.

    Missing probe results carry no penalty.

    Returns:
        HEALTHY at 80 points or more, WARNING at 50 or more, else CRITICAL.
    """
    score = 100
    score -= _penalty(disk.percentage if disk else None, _DISK_PENALTIES)
    score -= _penalty(memory.percentage if memory else None, _MEMORY_PENALTIES)
    score -= _penalty(cpu_percent, _CPU_PENALTIES)

    if supervisor is not None and supervisor.running < supervisor.count:
        score -= _SERVICES_DOWN_PENALTY

    score -= _UNIT_DOWN_PENALTY * sum(1 for active in units.values() if not active)

    if score >= _HEALTHY_SCORE:
        return HealthLevel.HEALTHY
    if score >= _WARNING_SCORE:
        return HealthLevel.WARNING
    return HealthLevel.CRITICAL


@dataclass(frozen=True, slots=True)
class HealthChecker:
    """Build health reports for the managed host.

    Attributes:
        executor: Runs the probe commands.
        host: Identity of the managed host.
        settings: Supervisor binary and timeouts.
        health: Probe timeout and monitored units.
        logger: Structured logger.
    """

    executor: "CommandExecutor"
    host: HostConfig = field(default_factory=HostConfig)
    settings: SupervisorConfig = field(default_factory=SupervisorConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    logger: "FilteringBoundLogger" = field(
        default_factory=create_null_logger, repr=False
    )

    def check_health(self) -> HostHealth:
        """Run every probe and assemble the scored report."""
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=5 + len(self.health.units)
        ) as pool:
            uptime = pool.submit(self._probe, "uptime", self._uptime)
            disk = pool.submit(self._probe, "disk", self._disk)
            memory = pool.submit(self._probe, "memory", self._memory)
            cpu = pool.submit(self._probe, "cpu", self._cpu)
            supervisor = pool.submit(self._probe, "supervisor", self._supervisor)
            units = {
                unit: pool.submit(self._probe, f"unit:{unit}", self._unit_active, unit)
                for unit in self.health.units
            }

        unit_states = {unit: future.result() is True for unit, future in units.items()}
        report = HostHealth(
            host=self.host.name,
            uptime=uptime.result() or "Unknown",
            disk=disk.result(),
            memory=memory.result(),
            cpu_percent=cpu.result(),
            supervisor=supervisor.result(),
            units=unit_states,
            overall=score_health(
                disk=disk.result(),
                memory=memory.result(),
                cpu_percent=cpu.result(),
                supervisor=supervisor.result(),
                units=unit_states,
            ),
            timestamp=pendulum.now("UTC").to_iso8601_string(),
        )

        self.logger.info("health_checked", overall=report.overall.value)
        return report

    def _probe(
        self, name: str, probe: Callable[..., T | None], *args: object
    ) -> T | None:
        try:
            return probe(*args)
        except ControlRoomError as e:
            self.logger.warning("health_probe_failed", probe=name, error=str(e))
            return None

    def _output(self, *argv: str) -> str | None:
        result = self.executor.run(argv, timeout=self.health.timeout)
        return result.stdout if result.ok else None

    def _uptime(self) -> str | None:
        output = self._output("uptime")
        return output.strip() if output else None

    def _disk(self) -> DiskUsage | None:
        output = self._output("df", "-h", "/")
        return parse_disk_usage(output) if output else None

    def _memory(self) -> MemoryUsage | None:
        output = self._output("free", "-m")
        return parse_memory_usage(output) if output else None

    def _cpu(self) -> int | None:
        output = self._output("top", "-bn1")
        return parse_cpu_usage(output) if output else None

    def _supervisor(self) -> SupervisorSummary:
        services = ServiceStatusQuery(
            executor=self.executor, settings=self.settings, logger=self.logger
        ).list_services()
        running = sum(1 for s in services if s.status is ServiceStatus.ONLINE)
        return SupervisorSummary(count=len(services), running=running)

    def _unit_active(self, unit: str) -> bool:
        result = self.executor.run(
            ("systemctl", "is-active", "--quiet", unit), timeout=self.health.timeout
        )
        return result.ok
