import pytest

from controlroom.config import SupervisorConfig
from controlroom.exceptions import CommandTimeoutError, ExecutionError, ParseError
from controlroom.supervisor import ServiceStatusQuery
from tests.conftest import FakeExecutor, ProcessFactory, jlist


class TestListServices:
    def test_returns_descriptors_in_order(
        self, executor: FakeExecutor, make_process: ProcessFactory
    ) -> None:
        executor.script(
            ("pm2", "jlist"),
            stdout=jlist(make_process("web"), make_process("api"), make_process("cron")),
        )

        services = ServiceStatusQuery(executor=executor).list_services()

        assert [s.name for s in services] == ["web", "api", "cron"]

    def test_uses_configured_binary_and_timeout(self, executor: FakeExecutor) -> None:
        executor.script(("/opt/pm2", "jlist"), stdout="[]")
        settings = SupervisorConfig(binary="/opt/pm2", query_timeout=3.0)

        services = ServiceStatusQuery(executor=executor, settings=settings).list_services()

        assert services == []
        assert executor.calls[0].timeout == 3.0

    def test_each_call_is_a_fresh_snapshot(
        self, executor: FakeExecutor, make_process: ProcessFactory
    ) -> None:
        query = ServiceStatusQuery(executor=executor)
        executor.script(("pm2", "jlist"), stdout=jlist(make_process("api")))
        first = query.list_services()
        executor.script(("pm2", "jlist"), stdout="[]")
        second = query.list_services()

        assert len(first) == 1
        assert second == []
        assert len(executor.calls) == 2

    def test_non_zero_exit_raises(self, executor: FakeExecutor) -> None:
        executor.script(("pm2", "jlist"), exit_code=1, stderr="daemon not running")

        with pytest.raises(ExecutionError, match="daemon not running"):
            _ = ServiceStatusQuery(executor=executor).list_services()

    def test_garbage_output_raises(self, executor: FakeExecutor) -> None:
        executor.script(("pm2", "jlist"), stdout="not json")

        with pytest.raises(ParseError):
            _ = ServiceStatusQuery(executor=executor).list_services()

    def test_timeout_propagates(self, executor: FakeExecutor) -> None:
        executor.script_error(
            ("pm2", "jlist"), CommandTimeoutError("timed out", timeout=10.0)
        )

        with pytest.raises(CommandTimeoutError):
            _ = ServiceStatusQuery(executor=executor).list_services()
