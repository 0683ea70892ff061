from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from controlroom.config import safe_load_config

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


@pytest.fixture(autouse=True)
def _isolate(fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for key in list(os.environ):
        if key.startswith("CONTROLROOM_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(
        "controlroom.config._discovery.get_user_config_path",
        lambda: Path("/home/user/.config/controlroom/config.toml"),
    )
    fs.create_dir("/project")


class TestSafeLoadConfig:
    def test_returns_config_without_error(self) -> None:
        config, error = safe_load_config(project_dir=Path("/project"))

        assert error is None
        assert config.supervisor.binary == "pm2"

    def test_explicit_config_path(self, fs: FakeFilesystem) -> None:
        fs.create_file("/etc/cr.toml", contents='[host]\nname = "vps-1"\n')

        config, error = safe_load_config(config_path=Path("/etc/cr.toml"))

        assert error is None
        assert config.host.name == "vps-1"

    def test_explicit_config_path_keeps_cli_overrides(
        self, fs: FakeFilesystem
    ) -> None:
        fs.create_file("/etc/cr.toml", contents='[logging]\nlevel = "error"\n')

        config, _ = safe_load_config(
            config_path=Path("/etc/cr.toml"),
            cli_overrides={"logging": {"level": "debug"}},
        )

        assert config.logging.level == "debug"
        assert config.sources[0].name == "cli"

    def test_missing_explicit_config_path_exits(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=Path("/etc/missing.toml"))

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_config_falls_back_to_defaults(
        self, fs: FakeFilesystem, capsys: pytest.CaptureFixture[str]
    ) -> None:
        fs.create_file(
            "/project/controlroom.toml", contents="[logs]\nmax_lines = 0\n"
        )

        config, error = safe_load_config(project_dir=Path("/project"))

        assert error is not None
        assert config.logs.max_lines == 10000
        assert "Warning: Failed to load config" in capsys.readouterr().err

    def test_strict_mode_exits_on_invalid_config(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fs.create_file("/project/controlroom.toml", contents="[logs\n")
        monkeypatch.setenv("CONTROLROOM_STRICT_CONFIG", "1")

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(project_dir=Path("/project"))

        assert exc_info.value.code == 1
