"""Unit tests for configuration source discovery."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from controlroom.config import (
    DEFAULT_CONFIG,
    ConfigSourceName,
    discover_sources,
    get_project_config_path,
    get_user_config_path,
)

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem

USER_PATH = Path("/home/user/.config/controlroom/config.toml")


@pytest.fixture(autouse=True)
def user_config_path(monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(
        "controlroom.config._discovery.get_user_config_path", lambda: USER_PATH
    )
    return USER_PATH


class TestPaths:
    def test_project_path_in_given_directory(self) -> None:
        assert get_project_config_path(Path("/srv/app")) == Path(
            "/srv/app/controlroom.toml"
        )

    def test_project_path_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert get_project_config_path() == tmp_path / "controlroom.toml"

    def test_user_path_is_named_config_toml(self) -> None:
        assert get_user_config_path().name == "config.toml"


class TestDiscoverSources:
    def test_precedence_order(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/project")

        sources = discover_sources(Path("/project"), cli_overrides={"a": 1})

        assert [source.name for source in sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_skips_cli_and_env_when_not_requested(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/project")

        sources = discover_sources(Path("/project"), include_env=False)

        assert [source.name for source in sources] == [
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_marks_missing_files(self, fs: FakeFilesystem) -> None:
        fs.create_file("/project/controlroom.toml", contents="")

        sources = {
            source.name: source for source in discover_sources(Path("/project"))
        }

        assert sources[ConfigSourceName.PROJECT].exists is True
        assert sources[ConfigSourceName.PROJECT].path == Path(
            "/project/controlroom.toml"
        )
        assert sources[ConfigSourceName.USER].exists is False
        assert sources[ConfigSourceName.USER].path == USER_PATH

    def test_default_source_carries_defaults(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/project")

        default = discover_sources(Path("/project"))[-1]

        assert default.values == DEFAULT_CONFIG
