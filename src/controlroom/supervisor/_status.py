"""Service status query."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from controlroom.config import SupervisorConfig
from controlroom.utils import create_null_logger

from ._commands import command_failure, list_command
from ._schema import decode_process_list

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from controlroom.utils import CommandExecutor

    from ._models import ServiceDescriptor


@dataclass(frozen=True, slots=True)
class ServiceStatusQuery:
    """Read the supervisor's process table as service descriptors.

    Attributes:
        executor: Runs the listing command.
        settings: Supervisor binary and timeouts.
        logger: Structured logger.
    """

    executor: "CommandExecutor"
    settings: SupervisorConfig = field(default_factory=SupervisorConfig)
    logger: "FilteringBoundLogger" = field(
        default_factory=create_null_logger, repr=False
    )

    def list_services(self) -> "list[ServiceDescriptor]":
        """Return a fresh snapshot of every supervised service.

        Returns:
            Descriptors in the supervisor's native order. An empty list
            means the supervisor manages no services.

        Raises:
            ExecutionError: If the listing command failed.
            ParseError: If the listing could not be decoded.
            CommandTimeoutError: If the listing command timed out.
        """
        result = self.executor.run(
            list_command(self.settings.binary), timeout=self.settings.query_timeout
        )
        if not result.ok:
            raise command_failure("list services", result)

        services = decode_process_list(result.stdout)
        self.logger.info("services_listed", count=len(services))
        return services
