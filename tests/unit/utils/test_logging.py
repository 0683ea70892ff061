"""Unit tests for logging utilities."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from controlroom.utils import (
    create_cli_logger,
    create_null_logger,
    create_server_logger,
)
from controlroom.utils._logging import _create_logger, _get_log_level

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        log_path = Path("/logs/test.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_level=logging.INFO)

        logger.info("test_event", key="value")

        entry = json.loads(Path("/logs/test.log").read_text().splitlines()[0])
        assert entry["event"] == "test_event"
        assert entry["key"] == "value"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_text_format(self, fs: FakeFilesystem) -> None:
        logger = _create_logger(
            "/logs/test.log", log_level=logging.INFO, log_format="text"
        )

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert "test_event" in log_content
        assert "key=value" in log_content

    def test_empty_path_writes_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = _create_logger("", log_level=logging.INFO)

        logger.info("to_stderr")

        captured = capsys.readouterr()
        assert "to_stderr" in captured.err
        assert captured.out == ""

    def test_filters_below_level(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_level=logging.ERROR)

        logger.debug("debug_level_message")
        logger.error("error_level_message")

        content = Path("/logs/test.log").read_text()
        assert "debug_level_message" not in content
        assert "error_level_message" in content


class TestCreateLoggerRotation:
    def test_with_rotation_uses_rotating_handler(self, fs: FakeFilesystem) -> None:
        _ = _create_logger("/logs/rotating.log", max_bytes=1000, backup_count=3)

        handlers = [
            handler
            for name in logging.root.manager.loggerDict
            if name.startswith("controlroom.rotating.")
            for handler in logging.getLogger(name).handlers
        ]
        assert handlers
        handler = handlers[-1]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1000
        assert handler.backupCount == 3

    def test_rotation_requires_both_params(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/partial.log", max_bytes=1000)
        logger.warning("test")

        assert Path("/logs/partial.log").exists()


class TestLogLevelFromEnvironment:
    def test_debug_variable_forces_debug(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTROLROOM_DEBUG", "1")
        assert _get_log_level() == logging.DEBUG

    def test_log_level_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CONTROLROOM_DEBUG", raising=False)
        monkeypatch.setenv("CONTROLROOM_LOG_LEVEL", "error")
        assert _get_log_level() == logging.ERROR

    def test_defaults_to_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CONTROLROOM_DEBUG", raising=False)
        monkeypatch.delenv("CONTROLROOM_LOG_LEVEL", raising=False)
        assert _get_log_level() == logging.INFO


class TestCreateServerLogger:
    def test_binds_component(self, fs: FakeFilesystem) -> None:
        logger = create_server_logger(log_file="/logs/server.log")

        logger.info("server_started")

        entry = json.loads(Path("/logs/server.log").read_text())
        assert entry["component"] == "server"

    def test_debug_variable_overrides_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTROLROOM_DEBUG", "1")
        logger = create_server_logger(level="error", log_file="/logs/server.log")

        logger.debug("debug_level_message")

        assert "debug_level_message" in Path("/logs/server.log").read_text()


class TestCreateCliLogger:
    def test_binds_command(self, fs: FakeFilesystem) -> None:
        logger = create_cli_logger(log_file="/logs/cli.log", command="services")

        logger.info("services_listed", count=2)

        entry = json.loads(Path("/logs/cli.log").read_text())
        assert entry["command"] == "services"
        assert entry["count"] == 2

    def test_respects_log_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("CONTROLROOM_DEBUG", raising=False)
        logger = create_cli_logger(level="warning", log_file="/logs/cli.log")

        logger.info("info_level_message")
        logger.warning("warning_level_message")

        content = Path("/logs/cli.log").read_text()
        assert "info_level_message" not in content
        assert "warning_level_message" in content


class TestCreateNullLogger:
    def test_discards_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = create_null_logger()

        logger.error("should_not_appear")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_supports_bind(self) -> None:
        logger = create_null_logger().bind(service="api")
        logger.info("ignored")
