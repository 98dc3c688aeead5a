"""Authentication and follow-list API routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from streamhub.api.dependencies import get_controller
from streamhub.api.schemas import (
    FollowedChannelResponse,
    NoticeResponse,
    SlotResponse,
    UserInfoResponse,
)
from streamhub.controller import StreamHubController
from streamhub.models import PageLocation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["authentication"])


# ============================================
# Request/Response Models
# ============================================


class OAuthURLResponse(BaseModel):
    oauth_url: str
    redirect_uri: str


class ResumeRequest(BaseModel):
    href: str


class ResumeResponse(BaseModel):
    signed_in: bool
    from_redirect: bool
    location: str
    user: UserInfoResponse | None


class LogoutResponse(BaseModel):
    message: str


class FollowsResponse(BaseModel):
    loaded: bool
    channels: list[FollowedChannelResponse]


class AddFollowedRequest(BaseModel):
    login: str


class AddFollowedResponse(BaseModel):
    slot: SlotResponse
    notices: list[NoticeResponse]


# ============================================
# Auth Routes
# ============================================


@router.get("/auth/twitch/oauth", response_model=OAuthURLResponse)
async def get_oauth_url(controller: StreamHubController = Depends(get_controller)):
    return OAuthURLResponse(
        oauth_url=controller.sign_in_url(),
        redirect_uri=controller.location.redirect_uri,
    )


@router.get("/auth/twitch/login")
async def twitch_login(controller: StreamHubController = Depends(get_controller)):
    return RedirectResponse(url=controller.sign_in_url())


@router.post("/auth/resume", response_model=ResumeResponse)
async def resume_session(
    request: ResumeRequest,
    controller: StreamHubController = Depends(get_controller),
):
    """Called on every page load with ``location.href``.

    The returned ``location`` has the token fragment stripped; the page
    replaces its history entry with it.
    """
    result = await controller.resume(PageLocation(request.href))
    profile = controller.tokens.profile
    return ResumeResponse(
        signed_in=result.signed_in,
        from_redirect=result.from_redirect,
        location=result.location.href,
        user=UserInfoResponse.from_profile(profile) if profile else None,
    )


@router.get("/auth/user", response_model=UserInfoResponse)
async def get_current_user(controller: StreamHubController = Depends(get_controller)):
    profile = controller.tokens.profile
    if not controller.tokens.is_signed_in or profile is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return UserInfoResponse.from_profile(profile)


@router.post("/auth/logout", response_model=LogoutResponse)
async def logout(controller: StreamHubController = Depends(get_controller)):
    controller.sign_out()
    return LogoutResponse(message="Signed out")


# ============================================
# Follow Routes
# ============================================


@router.get("/follows", response_model=FollowsResponse)
async def list_follows(controller: StreamHubController = Depends(get_controller)):
    return FollowsResponse(
        loaded=bool(controller.follows.channels),
        channels=[FollowedChannelResponse.from_channel(c) for c in controller.follows.channels],
    )


@router.post("/follows/load", response_model=FollowsResponse)
async def load_follows(controller: StreamHubController = Depends(get_controller)):
    if not controller.tokens.is_signed_in:
        raise HTTPException(status_code=401, detail="Not signed in")

    loaded = await controller.load_follows()
    return FollowsResponse(
        loaded=loaded,
        channels=[FollowedChannelResponse.from_channel(c) for c in controller.follows.channels],
    )


@router.post("/follows/add", response_model=AddFollowedResponse, status_code=201)
async def add_followed(
    request: AddFollowedRequest,
    controller: StreamHubController = Depends(get_controller),
):
    slot = controller.add_followed(request.login)
    notices = controller.drain_notices()
    if slot is None:
        message = notices[0].message if notices else "Stream not added"
        raise HTTPException(status_code=409, detail=message)

    return AddFollowedResponse(
        slot=SlotResponse.from_slot(slot),
        notices=[NoticeResponse.from_notice(n) for n in notices],
    )
