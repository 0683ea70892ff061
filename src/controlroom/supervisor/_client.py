"""Single entry point over the supervisor control layer."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self

from controlroom.config import (
    HealthConfig,
    HostConfig,
    LogsConfig,
    SupervisorConfig,
)
from controlroom.utils import LocalExecutor, create_null_logger

from ._actions import ActionDispatcher
from ._health import HealthChecker
from ._logs import LogRetriever
from ._status import ServiceStatusQuery

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from controlroom.config import Config
    from controlroom.utils import CommandExecutor

    from ._health import HostHealth
    from ._models import ActionRequest, ActionResult, LogSnapshot, ServiceDescriptor


@dataclass(frozen=True, slots=True)
class SupervisorClient:
    """Query and control the services of one managed host.

    All operations share one executor and one logger. Every call is an
    independent round trip to the supervisor; nothing is cached.

    Attributes:
        executor: Runs supervisor and probe commands.
        host: Identity of the managed host.
        supervisor: Supervisor binary and timeouts.
        logs: Log line defaults and limits.
        health: Health probe settings.
        logger: Structured logger.
    """

    executor: "CommandExecutor"
    host: HostConfig = field(default_factory=HostConfig)
    supervisor: SupervisorConfig = field(default_factory=SupervisorConfig)
    logs: LogsConfig = field(default_factory=LogsConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    logger: "FilteringBoundLogger" = field(
        default_factory=create_null_logger, repr=False
    )

    @classmethod
    def from_config(
        cls,
        config: "Config",
        *,
        executor: "CommandExecutor | None" = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> Self:
        """Build a client from loaded configuration.

        Args:
            config: Loaded configuration.
            executor: Command executor; a LocalExecutor by default.
            logger: Structured logger; a null logger by default.

        Returns:
            A configured client.
        """
        log = logger if logger is not None else create_null_logger()
        if executor is None:
            executor = LocalExecutor(logger=log)
        return cls(
            executor=executor,
            host=config.host,
            supervisor=config.supervisor,
            logs=config.logs,
            health=config.health,
            logger=log,
        )

    def list_services(self) -> "list[ServiceDescriptor]":
        """Return every supervised service. See ServiceStatusQuery."""
        return ServiceStatusQuery(
            executor=self.executor, settings=self.supervisor, logger=self.logger
        ).list_services()

    def dispatch(self, request: "ActionRequest") -> "ActionResult":
        """Run a lifecycle action. See ActionDispatcher."""
        return ActionDispatcher(
            executor=self.executor, settings=self.supervisor, logger=self.logger
        ).dispatch(request)

    def fetch_logs(
        self, service_name: str | None, line_count: int | None = None
    ) -> "LogSnapshot":
        """Return a raw log snapshot. See LogRetriever.fetch_logs."""
        return self._retriever().fetch_logs(service_name, line_count)

    def fetch_log_lines(
        self, service_name: str | None, line_count: int | None = None
    ) -> list[str]:
        """Return log lines. See LogRetriever.fetch_log_lines."""
        return self._retriever().fetch_log_lines(service_name, line_count)

    def check_health(self) -> "HostHealth":
        """Return a scored host health report."""
        return HealthChecker(
            executor=self.executor,
            host=self.host,
            settings=self.supervisor,
            health=self.health,
            logger=self.logger,
        ).check_health()

    def _retriever(self) -> LogRetriever:
        return LogRetriever(
            executor=self.executor,
            settings=self.supervisor,
            limits=self.logs,
            logger=self.logger,
        )
