from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from controlroom.config import Config
from controlroom.server import CONFIG_PATH_ENV, PROJECT_DIR_ENV, create_app
from controlroom.supervisor import SupervisorClient
from controlroom.utils import create_null_logger
from tests.conftest import FakeExecutor


class TestStartupConfig:
    def test_passed_config_is_kept(self, executor: FakeExecutor) -> None:
        config = Config.from_dict({"host": {"name": "vps-2"}})
        app = create_app(
            config=config,
            client=SupervisorClient(executor=executor),
            logger=create_null_logger(),
        )

        with TestClient(app) as client:
            assert client.app.state.config is config  # pyright: ignore[reportAttributeAccessIssue]

    def test_loads_file_named_in_environment(
        self,
        executor: FakeExecutor,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config_file = tmp_path / "custom.toml"
        _ = config_file.write_text('[host]\nname = "from-file"\n')
        monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))
        app = create_app(
            client=SupervisorClient(executor=executor), logger=create_null_logger()
        )

        with TestClient(app) as client:
            config = client.app.state.config  # pyright: ignore[reportAttributeAccessIssue]
            assert config.host.name == "from-file"

    def test_discovers_project_file_in_environment_directory(
        self,
        executor: FakeExecutor,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _ = (tmp_path / "controlroom.toml").write_text('[host]\nname = "from-dir"\n')
        monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
        monkeypatch.setenv(PROJECT_DIR_ENV, str(tmp_path))
        app = create_app(
            client=SupervisorClient(executor=executor), logger=create_null_logger()
        )

        with TestClient(app) as client:
            config = client.app.state.config  # pyright: ignore[reportAttributeAccessIssue]
            assert config.host.name == "from-dir"
