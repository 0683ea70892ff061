from fastapi.testclient import TestClient

from tests.conftest import FakeExecutor


class TestGetLogs:
    def test_returns_snapshot(self, api: TestClient, executor: FakeExecutor) -> None:
        executor.script(
            ("pm2", "logs", "api", "--lines", "100", "--nostream"),
            stdout="out\n",
            stderr="err\n",
        )

        response = api.get("/api/logs", params={"service": "api"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "serviceName": "api",
            "logs": "out\n",
            "errors": "err\n",
        }

    def test_explicit_line_count(self, api: TestClient, executor: FakeExecutor) -> None:
        executor.script(("pm2", "logs", "api", "--lines", "25", "--nostream"))

        response = api.get("/api/logs", params={"service": "api", "lines": 25})

        assert response.status_code == 200
        assert executor.argvs == [("pm2", "logs", "api", "--lines", "25", "--nostream")]

    def test_missing_service(self, api: TestClient, executor: FakeExecutor) -> None:
        response = api.get("/api/logs")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Missing service parameter",
        }
        assert executor.calls == []

    def test_non_numeric_lines(self, api: TestClient, executor: FakeExecutor) -> None:
        response = api.get("/api/logs", params={"service": "api", "lines": "many"})

        assert response.status_code == 400
        assert executor.calls == []


class TestPostLogs:
    def test_returns_lines(self, api: TestClient, executor: FakeExecutor) -> None:
        executor.script(
            ("pm2", "logs", "api", "--lines", "50", "--nostream", "--raw"),
            stdout="one\n\ntwo\n",
        )

        response = api.post("/api/logs", json={"serviceName": "api"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "serviceName": "api",
            "logs": ["one", "two"],
        }

    def test_explicit_line_count(self, api: TestClient, executor: FakeExecutor) -> None:
        executor.script(
            ("pm2", "logs", "api", "--lines", "3", "--nostream", "--raw"),
            stdout="1\n2\n3\n4\n5\n",
        )

        response = api.post("/api/logs", json={"serviceName": "api", "lines": 3})

        assert response.json()["logs"] == ["3", "4", "5"]

    def test_missing_service(self, api: TestClient, executor: FakeExecutor) -> None:
        response = api.post("/api/logs", json={"lines": 10})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing serviceName"}
        assert executor.calls == []

    def test_zero_lines(self, api: TestClient, executor: FakeExecutor) -> None:
        response = api.post("/api/logs", json={"serviceName": "api", "lines": 0})

        assert response.status_code == 400
        assert executor.calls == []
