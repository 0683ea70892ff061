"""Control layer over a process supervisor.

This package queries and drives the external process supervisor on the
managed host. Every operation is one or two synchronous command round
trips; the supervisor remains the only source of truth for service state.

Key Components:
    - ServiceStatusQuery: Lists supervised services as descriptors
    - ActionDispatcher: Validates and runs lifecycle actions
    - LogRetriever: Fetches bounded log tails
    - HealthChecker: Scores host and service health
    - SupervisorClient: Facade over all of the above, built from Config

Example:
    >>> from controlroom.config import Config
    >>> from controlroom.supervisor import ActionRequest, SupervisorClient
    >>> client = SupervisorClient.from_config(Config.load())
    >>> client.dispatch(ActionRequest(action="restart", service_name="api"))
"""

from ._actions import ActionDispatcher
from ._client import SupervisorClient
from ._commands import (
    ACTION_SUBCOMMANDS,
    action_command,
    list_command,
    logs_command,
    persist_command,
)
from ._health import (
    DiskUsage,
    HealthChecker,
    HealthLevel,
    HostHealth,
    MemoryUsage,
    SupervisorSummary,
    parse_cpu_usage,
    parse_disk_usage,
    parse_memory_usage,
    score_health,
)
from ._logs import LogRetriever, split_log_lines
from ._models import (
    ActionRequest,
    ActionResult,
    LifecycleAction,
    LogQuery,
    LogSnapshot,
    ServiceDescriptor,
    ServiceStatus,
)
from ._schema import decode_process_list
from ._status import ServiceStatusQuery
from ._validation import build_log_query, parse_action_request

__all__ = [
    "ACTION_SUBCOMMANDS",
    "ActionDispatcher",
    "ActionRequest",
    "ActionResult",
    "DiskUsage",
    "HealthChecker",
    "HealthLevel",
    "HostHealth",
    "LifecycleAction",
    "LogQuery",
    "LogRetriever",
    "LogSnapshot",
    "MemoryUsage",
    "ServiceDescriptor",
    "ServiceStatus",
    "ServiceStatusQuery",
    "SupervisorClient",
    "SupervisorSummary",
    "action_command",
    "build_log_query",
    "decode_process_list",
    "list_command",
    "logs_command",
    "parse_action_request",
    "parse_cpu_usage",
    "parse_disk_usage",
    "parse_memory_usage",
    "persist_command",
    "score_health",
    "split_log_lines",
]
