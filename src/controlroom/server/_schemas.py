"""Wire models for the HTTP API.

Field aliases carry the camelCase names existing dashboards consume;
Python attribute names stay snake_case.
"""

from typing import TYPE_CHECKING, ClassVar, Literal, Self

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from controlroom.supervisor import (
        ActionResult,
        DiskUsage,
        HostHealth,
        LogSnapshot,
        MemoryUsage,
        ServiceDescriptor,
    )


class _WireModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        populate_by_name=True, extra="ignore"
    )


class ErrorResponse(_WireModel):
    """Failure envelope shared by every route."""

    success: Literal[False] = False
    error: str


class ActionBody(_WireModel):
    """Body of POST /api/services. Fields are validated by the dispatcher."""

    action: str | None = None
    service_name: str | None = Field(default=None, alias="serviceName")


class LogLinesBody(_WireModel):
    """Body of POST /api/logs."""

    service_name: str | None = Field(default=None, alias="serviceName")
    lines: int | None = None


class ServiceModel(_WireModel):
    name: str
    status: str
    cpu: float
    memory: int
    uptime: int
    restarts: int
    pid: int | None

    @classmethod
    def from_descriptor(cls, descriptor: "ServiceDescriptor") -> Self:
        return cls(
            name=descriptor.name,
            status=descriptor.status.value,
            cpu=descriptor.cpu_percent,
            memory=descriptor.memory_bytes,
            uptime=descriptor.uptime_epoch_millis,
            restarts=descriptor.restart_count,
            pid=descriptor.pid,
        )


class ServicesResponse(_WireModel):
    success: Literal[True] = True
    services: list[ServiceModel]


class ActionResponse(_WireModel):
    success: Literal[True] = True
    action: str
    service_name: str = Field(alias="serviceName")
    output: str
    error: str

    @classmethod
    def from_result(cls, result: "ActionResult") -> Self:
        return cls(
            action=result.action.value,
            service_name=result.service_name,
            output=result.stdout,
            error=result.stderr,
        )


class LogSnapshotResponse(_WireModel):
    success: Literal[True] = True
    service_name: str = Field(alias="serviceName")
    logs: str
    errors: str

    @classmethod
    def from_snapshot(cls, snapshot: "LogSnapshot") -> Self:
        return cls(
            service_name=snapshot.service_name,
            logs=snapshot.logs,
            errors=snapshot.errors,
        )


class LogLinesResponse(_WireModel):
    success: Literal[True] = True
    service_name: str = Field(alias="serviceName")
    logs: list[str]


class DiskModel(_WireModel):
    total: str
    used: str
    available: str
    percentage: int

    @classmethod
    def from_usage(cls, usage: "DiskUsage") -> Self:
        return cls(
            total=usage.total,
            used=usage.used,
            available=usage.available,
            percentage=usage.percentage,
        )


class MemoryModel(_WireModel):
    total: int
    used: int
    free: int
    percentage: int

    @classmethod
    def from_usage(cls, usage: "MemoryUsage") -> Self:
        return cls(
            total=usage.total,
            used=usage.used,
            free=usage.free,
            percentage=usage.percentage,
        )


class HostModel(_WireModel):
    name: str
    uptime: str
    disk: DiskModel | None
    memory: MemoryModel | None
    cpu: int | None


class ServiceSummaryModel(_WireModel):
    count: int
    running: int


class HealthResponse(_WireModel):
    """Host health report.

    ``services`` is null when the supervisor listing failed. Each entry of
    ``units`` is "running" or "stopped".
    """

    success: Literal[True] = True
    timestamp: str
    host: HostModel
    services: ServiceSummaryModel | None
    units: dict[str, Literal["running", "stopped"]]
    overall: Literal["healthy", "warning", "critical"]

    @classmethod
    def from_report(cls, report: "HostHealth") -> Self:
        supervisor = report.supervisor
        return cls(
            timestamp=report.timestamp,
            host=HostModel(
                name=report.host,
                uptime=report.uptime,
                disk=DiskModel.from_usage(report.disk) if report.disk else None,
                memory=MemoryModel.from_usage(report.memory)
                if report.memory
                else None,
                cpu=report.cpu_percent,
            ),
            services=ServiceSummaryModel(
                count=supervisor.count, running=supervisor.running
            )
            if supervisor
            else None,
            units={
                unit: "running" if active else "stopped"
                for unit, active in report.units.items()
            },
            overall=report.overall.value,
        )
