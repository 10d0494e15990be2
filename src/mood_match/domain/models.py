"""Domain models for handles, waiting entries and rooms."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from mood_match.domain.moods import Mood


class Gender(StrEnum):
    """Genders accepted at registration."""

    MALE = "male"
    FEMALE = "female"


class CloseReason(StrEnum):
    """Why a room was torn down."""

    LEFT = "left"
    DISCONNECTED = "disconnected"
    EXPIRED = "expired"


class UserProfile(BaseModel):
    """Public projection of a user shown to their counterpart."""

    name: str
    age: int = Field(ge=0)
    gender: Gender
    trust_score: int = Field(default=0, ge=0, le=100)


@dataclass
class UserHandle:
    """Per-connection identity and its matchmaking state."""

    id: str
    profile: UserProfile | None = None
    mood: Mood | None = None
    session_id: str | None = None

    @property
    def verified(self) -> bool:
        return self.profile is not None

    @property
    def display_name(self) -> str:
        return self.profile.name if self.profile else "Anonymous"


@dataclass(frozen=True)
class WaitingEntry:
    """A handle waiting for a partner."""

    handle_id: str
    mood: Mood
    enqueued_at: datetime


@dataclass(frozen=True)
class Room:
    """A live pairing of exactly two handles."""

    id: str
    member_a: str
    member_b: str
    mood: Mood
    created_at: datetime

    def counterpart(self, handle_id: str) -> str | None:
        """Return the other member's id, or None for non-members."""
        if handle_id == self.member_a:
            return self.member_b
        if handle_id == self.member_b:
            return self.member_a
        return None

    def age_seconds(self, now: datetime) -> float:
        return (now - self.created_at).total_seconds()
