"""Request/response models shared by the routers."""

from pydantic import BaseModel

from streamhub.controller import Tile, ViewModel
from streamhub.models import FollowedChannel, Notice, Platform, Slot, UserProfile


class SlotResponse(BaseModel):
    id: int
    platform: Platform
    identifier: str

    @classmethod
    def from_slot(cls, slot: Slot) -> "SlotResponse":
        return cls(id=slot.id, platform=slot.platform, identifier=slot.identifier)


class NoticeResponse(BaseModel):
    kind: str
    level: str
    message: str

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeResponse":
        return cls(kind=notice.kind.value, level=notice.level.value, message=notice.message)


class TileResponse(BaseModel):
    slot_id: int
    platform: Platform
    identifier: str
    embed_url: str
    placeholder: str | None = None

    @classmethod
    def from_tile(cls, tile: Tile) -> "TileResponse":
        return cls(
            slot_id=tile.slot_id,
            platform=tile.platform,
            identifier=tile.identifier,
            embed_url=tile.embed_url,
            placeholder=tile.placeholder,
        )


class UserInfoResponse(BaseModel):
    id: str
    login: str
    display_name: str
    avatar_url: str

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserInfoResponse":
        return cls(
            id=profile.id,
            login=profile.login,
            display_name=profile.display_name,
            avatar_url=profile.avatar_url,
        )


class FollowedChannelResponse(BaseModel):
    id: str
    login: str
    display_name: str

    @classmethod
    def from_channel(cls, channel: FollowedChannel) -> "FollowedChannelResponse":
        return cls(id=channel.id, login=channel.login, display_name=channel.display_name)


class ViewResponse(BaseModel):
    columns: int
    focused_slot_id: int | None
    tiles: list[TileResponse]
    labelled: list[SlotResponse]
    suggestions: dict[int, list[str]]
    active_suggestions: int | None
    user: UserInfoResponse | None
    followed: list[FollowedChannelResponse]
    can_load_follows: bool
    search_enabled: bool
    notices: list[NoticeResponse]

    @classmethod
    def build(cls, view: ViewModel, notices: list[Notice]) -> "ViewResponse":
        return cls(
            columns=view.columns,
            focused_slot_id=view.focused_slot_id,
            tiles=[TileResponse.from_tile(t) for t in view.tiles],
            labelled=[SlotResponse.from_slot(s) for s in view.labelled],
            suggestions=view.suggestions,
            active_suggestions=view.active_suggestions,
            user=UserInfoResponse.from_profile(view.user) if view.user else None,
            followed=[FollowedChannelResponse.from_channel(c) for c in view.followed],
            can_load_follows=view.can_load_follows,
            search_enabled=view.search_enabled,
            notices=[NoticeResponse.from_notice(n) for n in notices],
        )
