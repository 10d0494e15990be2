"""Outbound events delivered to connected clients."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mood_match.domain.models import CloseReason, UserProfile
from mood_match.domain.moods import Mood


class OutboundEvent(BaseModel):
    """Base class for server-to-client events."""

    model_config = ConfigDict(populate_by_name=True)

    type: str

    def to_payload(self) -> dict[str, object]:
        """Serialise the event for a JSON transport."""
        return self.model_dump(mode="json", by_alias=True)


class Connected(OutboundEvent):
    type: Literal["connected"] = "connected"
    handle_id: str


class StatsUpdate(OutboundEvent):
    type: Literal["stats_update"] = "stats_update"
    online: int
    waiting: int
    active_rooms: int


class Registered(OutboundEvent):
    type: Literal["registered"] = "registered"
    profile: UserProfile
    message: str = "Registration successful"


class WaitingStarted(OutboundEvent):
    type: Literal["waiting_started"] = "waiting_started"
    mood: Mood
    mood_label: str
    queue_position: int


class Paired(OutboundEvent):
    type: Literal["paired"] = "paired"
    session_id: str
    mood: Mood
    mood_label: str
    counterpart: UserProfile | None


class MessageReceived(OutboundEvent):
    type: Literal["message_received"] = "message_received"
    from_name: str = Field(alias="from")
    text: str
    timestamp: datetime


class TypingState(OutboundEvent):
    type: Literal["typing_state"] = "typing_state"
    is_typing: bool


class PartnerLeft(OutboundEvent):
    type: Literal["partner_left"] = "partner_left"
    reason: CloseReason


class ErrorEvent(OutboundEvent):
    type: Literal["error"] = "error"
    code: str
    message: str
    details: dict[str, object] = Field(default_factory=dict)


@dataclass(frozen=True)
class Delivery:
    """An outbound event addressed to one handle."""

    recipient: str
    event: OutboundEvent
