import pytest

from controlroom.supervisor import (
    ActionResult,
    LifecycleAction,
    ServiceDescriptor,
    ServiceStatus,
)


class TestServiceStatus:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("online", ServiceStatus.ONLINE),
            ("stopped", ServiceStatus.STOPPED),
            ("errored", ServiceStatus.ERRORED),
            ("launching", ServiceStatus.LAUNCHING),
        ],
    )
    def test_parses_known_states(self, raw: str, expected: ServiceStatus) -> None:
        assert ServiceStatus.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["stopping", "one-launch-status", "", "ONLINE"])
    def test_unknown_states_map_to_unknown(self, raw: str) -> None:
        assert ServiceStatus.parse(raw) is ServiceStatus.UNKNOWN


class TestLifecycleAction:
    def test_closed_set(self) -> None:
        assert {action.value for action in LifecycleAction} == {
            "restart",
            "stop",
            "start",
            "delete",
        }


class TestServiceDescriptor:
    def test_defaults(self) -> None:
        descriptor = ServiceDescriptor(name="api", status=ServiceStatus.ONLINE)

        assert descriptor.cpu_percent == 0.0
        assert descriptor.memory_bytes == 0
        assert descriptor.restart_count == 0
        assert descriptor.pid is None

    def test_frozen(self) -> None:
        descriptor = ServiceDescriptor(name="api", status=ServiceStatus.ONLINE)
        with pytest.raises(AttributeError):
            descriptor.name = "other"  # pyright: ignore[reportAttributeAccessIssue]


class TestActionResult:
    def test_defaults_to_succeeded_and_persisted(self) -> None:
        result = ActionResult(action=LifecycleAction.STOP, service_name="api")

        assert result.succeeded is True
        assert result.persisted is True
        assert result.stderr == ""
