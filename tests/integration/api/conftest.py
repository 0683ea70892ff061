from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from controlroom.config import Config
from controlroom.server import create_app
from controlroom.supervisor import SupervisorClient
from controlroom.utils import create_null_logger
from tests.conftest import FakeExecutor


@pytest.fixture
def api(executor: FakeExecutor) -> Iterator[TestClient]:
    app = create_app(
        config=Config.from_dict({"host": {"name": "vps-1"}}),
        client=SupervisorClient(executor=executor),
        logger=create_null_logger(),
    )
    with TestClient(app) as client:
        yield client
