from typing import Annotated, cast

from fastapi import Depends, Request

from controlroom.supervisor import SupervisorClient


def get_client(request: Request) -> SupervisorClient:
    return cast("SupervisorClient", request.app.state.client)


ClientDep = Annotated[SupervisorClient, Depends(get_client)]
