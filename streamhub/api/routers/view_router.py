"""Render model route"""

from fastapi import APIRouter, Depends

from streamhub.api.dependencies import get_controller
from streamhub.api.schemas import ViewResponse
from streamhub.controller import StreamHubController

router = APIRouter(prefix="/api", tags=["view"])


@router.get("/view", response_model=ViewResponse)
async def get_view(controller: StreamHubController = Depends(get_controller)):
    """Grid columns, tiles and side panels; drains pending notices."""
    return ViewResponse.build(controller.view(), controller.drain_notices())
