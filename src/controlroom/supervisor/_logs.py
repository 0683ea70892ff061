"""Log tail retrieval."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from controlroom.config import LogsConfig, SupervisorConfig
from controlroom.utils import create_null_logger, truncate_output

from ._commands import command_failure, logs_command
from ._models import LogSnapshot
from ._validation import build_log_query

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from controlroom.utils import CommandExecutor, CommandResult

    from ._models import LogQuery


def split_log_lines(output: str, limit: int) -> list[str]:
    """Split raw log output into its last ``limit`` non-blank lines.

    Args:
        output: Raw log text.
        limit: Maximum number of lines to keep.

    Returns:
        Non-blank lines in their original order, at most ``limit`` of them.
    """
    lines = [line for line in output.splitlines() if line.strip()]
    return lines[-limit:] if limit > 0 else []


@dataclass(frozen=True, slots=True)
class LogRetriever:
    """Fetch bounded log tails for named services.

    Two output shapes are offered: the raw captured text for display,
    and a list of discrete lines for programmatic consumers.

    Attributes:
        executor: Runs the log tail command.
        settings: Supervisor binary and timeouts.
        limits: Default and maximum line counts.
        logger: Structured logger.
    """

    executor: "CommandExecutor"
    settings: SupervisorConfig = field(default_factory=SupervisorConfig)
    limits: LogsConfig = field(default_factory=LogsConfig)
    logger: "FilteringBoundLogger" = field(
        default_factory=create_null_logger, repr=False
    )

    def fetch_logs(
        self, service_name: str | None, line_count: int | None = None
    ) -> LogSnapshot:
        """Return the raw tail of a service's output and error streams.

        Args:
            service_name: Service whose logs are read.
            line_count: Trailing lines to request; None uses the snapshot default.

        Returns:
            LogSnapshot with the captured text as emitted, each stream cut at
            ``limits.max_output_bytes`` with a truncation marker.

        Raises:
            ValidationError: If the name is missing or the line count invalid.
            ExecutionError: If the supervisor failed to read the logs.
            CommandTimeoutError: If the log command timed out.
        """
        query = build_log_query(
            service_name,
            line_count,
            default_lines=self.limits.snapshot_lines,
            max_lines=self.limits.max_lines,
            missing_message="Missing service parameter",
        )
        result = self._tail(query, raw=False)
        ceiling = self.limits.max_output_bytes
        return LogSnapshot(
            service_name=query.service_name,
            logs=truncate_output(result.stdout, ceiling),
            errors=truncate_output(result.stderr, ceiling),
        )

    def fetch_log_lines(
        self, service_name: str | None, line_count: int | None = None
    ) -> list[str]:
        """Return the tail of a service's logs as discrete non-blank lines.

        Args:
            service_name: Service whose logs are read.
            line_count: Trailing lines to return; None uses the array default.

        Returns:
            At most ``line_count`` lines, blank lines removed.

        Raises:
            ValidationError: If the name is missing or the line count invalid.
            ExecutionError: If the supervisor failed to read the logs.
            CommandTimeoutError: If the log command timed out.
        """
        query = build_log_query(
            service_name,
            line_count,
            default_lines=self.limits.array_lines,
            max_lines=self.limits.max_lines,
            missing_message="Missing serviceName",
        )
        result = self._tail(query, raw=True)
        return split_log_lines(result.stdout, query.line_count)

    def _tail(self, query: "LogQuery", *, raw: bool) -> "CommandResult":
        result = self.executor.run(
            logs_command(
                self.settings.binary, query.service_name, query.line_count, raw=raw
            ),
            timeout=self.settings.log_timeout,
        )
        if not result.ok:
            raise command_failure(f"read logs for {query.service_name}", result)

        self.logger.info(
            "logs_fetched",
            service=query.service_name,
            lines=query.line_count,
            raw=raw,
        )
        return result
