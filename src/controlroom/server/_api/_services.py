import anyio.to_thread
from fastapi import APIRouter

from controlroom.server._schemas import (
    ActionBody,
    ActionResponse,
    ServiceModel,
    ServicesResponse,
)
from controlroom.supervisor import ActionRequest

from ._deps import ClientDep

router = APIRouter(prefix="", tags=["services"])


@router.get("/services")
async def get_services(client: ClientDep) -> ServicesResponse:
    """List every supervised service."""
    services = await anyio.to_thread.run_sync(client.list_services)
    return ServicesResponse(
        services=[ServiceModel.from_descriptor(service) for service in services]
    )


@router.post("/services")
async def post_service_action(body: ActionBody, client: ClientDep) -> ActionResponse:
    """Run a lifecycle action against one service and persist the state."""
    request = ActionRequest(action=body.action, service_name=body.service_name)
    result = await anyio.to_thread.run_sync(client.dispatch, request)
    return ActionResponse.from_result(result)
