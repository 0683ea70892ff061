import anyio.to_thread
from fastapi import APIRouter

from controlroom.server._schemas import (
    LogLinesBody,
    LogLinesResponse,
    LogSnapshotResponse,
)

from ._deps import ClientDep

router = APIRouter(prefix="", tags=["logs"])


@router.get("/logs")
async def get_logs(
    client: ClientDep, service: str | None = None, lines: int | None = None
) -> LogSnapshotResponse:
    """Return the raw log tail of one service."""
    snapshot = await anyio.to_thread.run_sync(client.fetch_logs, service, lines)
    return LogSnapshotResponse.from_snapshot(snapshot)


@router.post("/logs")
async def post_logs(body: LogLinesBody, client: ClientDep) -> LogLinesResponse:
    """Return the log tail of one service as discrete lines."""
    lines = await anyio.to_thread.run_sync(
        client.fetch_log_lines, body.service_name, body.lines
    )
    # The name was validated by the call above
    service_name = (body.service_name or "").strip()
    return LogLinesResponse(service_name=service_name, logs=lines)
