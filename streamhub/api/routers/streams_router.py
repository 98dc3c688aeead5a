"""Stream slot API routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from streamhub.api.dependencies import get_controller
from streamhub.api.schemas import NoticeResponse, SlotResponse
from streamhub.controller import StreamHubController
from streamhub.models import NoticeLevel, Platform

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/streams", tags=["streams"])


# ============================================
# Request/Response Models
# ============================================


class AddStreamRequest(BaseModel):
    platform: Platform = Platform.TWITCH
    identifier: str


class AddStreamResponse(BaseModel):
    slot: SlotResponse
    notices: list[NoticeResponse]


class UpdateStreamRequest(BaseModel):
    platform: Platform | None = None
    identifier: str | None = None


class SelectSuggestionRequest(BaseModel):
    name: str


class RemoveResponse(BaseModel):
    removed: bool


class FocusRequest(BaseModel):
    slot_id: int | None = None


class FocusResponse(BaseModel):
    focused_slot_id: int | None


# ============================================
# Routes
# ============================================


@router.get("", response_model=list[SlotResponse])
async def list_streams(controller: StreamHubController = Depends(get_controller)):
    return [SlotResponse.from_slot(s) for s in controller.store]


@router.post("", response_model=AddStreamResponse, status_code=201)
async def add_stream(
    request: AddStreamRequest,
    controller: StreamHubController = Depends(get_controller),
):
    slot = controller.add_stream(request.platform, request.identifier)
    notices = controller.drain_notices()
    if slot is None:
        blocking = [n for n in notices if n.level is NoticeLevel.BLOCKING]
        message = (blocking or notices)[0].message if notices else "Stream not added"
        raise HTTPException(status_code=409, detail=message)

    return AddStreamResponse(
        slot=SlotResponse.from_slot(slot),
        notices=[NoticeResponse.from_notice(n) for n in notices],
    )


@router.patch("/{slot_id}", response_model=SlotResponse)
async def update_stream(
    slot_id: int,
    request: UpdateStreamRequest,
    controller: StreamHubController = Depends(get_controller),
):
    if slot_id not in controller.store:
        raise HTTPException(status_code=404, detail="Stream not found")

    if request.platform is not None:
        controller.change_platform(slot_id, request.platform)
    if request.identifier is not None:
        controller.edit_identifier(slot_id, request.identifier)

    slot = controller.store.get(slot_id)
    if slot is None:
        raise HTTPException(status_code=404, detail="Stream not found")
    return SlotResponse.from_slot(slot)


@router.post("/{slot_id}/select", response_model=SlotResponse)
async def select_suggestion(
    slot_id: int,
    request: SelectSuggestionRequest,
    controller: StreamHubController = Depends(get_controller),
):
    slot = controller.select_suggestion(slot_id, request.name)
    if slot is None:
        raise HTTPException(status_code=404, detail="Stream not found")
    return SlotResponse.from_slot(slot)


@router.delete("/{slot_id}", response_model=RemoveResponse)
async def remove_stream(
    slot_id: int,
    controller: StreamHubController = Depends(get_controller),
):
    return RemoveResponse(removed=controller.remove_stream(slot_id))


@router.post("/focus", response_model=FocusResponse)
async def focus_stream(
    request: FocusRequest,
    controller: StreamHubController = Depends(get_controller),
):
    return FocusResponse(focused_slot_id=controller.focus(request.slot_id))
