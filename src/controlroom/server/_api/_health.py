import anyio.to_thread
from fastapi import APIRouter

from controlroom.server._schemas import HealthResponse

from ._deps import ClientDep

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
async def get_health(client: ClientDep) -> HealthResponse:
    report = await anyio.to_thread.run_sync(client.check_health)
    return HealthResponse.from_report(report)
