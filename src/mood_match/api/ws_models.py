"""Pydantic models for client-to-server WebSocket messages."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from mood_match.domain.moods import Mood

MAX_MESSAGE_LENGTH = 2000


class RegisterCommand(BaseModel):
    """Profile submitted for admission."""

    type: Literal["register"]
    name: str = Field(min_length=1, max_length=64)
    age: int
    gender: str
    photo: str | None = None


class StartSearchCommand(BaseModel):
    """Request to find a partner with a mood."""

    type: Literal["start_search"]
    mood: Mood


class MessageCommand(BaseModel):
    """Chat text for the current partner."""

    type: Literal["message"]
    text: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)


class TypingCommand(BaseModel):
    """Typing indicator for the current partner."""

    type: Literal["typing"]
    is_typing: bool


class LeaveCommand(BaseModel):
    """Leave the current room."""

    type: Literal["leave"]


ClientCommand = Annotated[
    RegisterCommand
    | StartSearchCommand
    | MessageCommand
    | TypingCommand
    | LeaveCommand,
    Field(discriminator="type"),
]

client_command_adapter: TypeAdapter[ClientCommand] = TypeAdapter(ClientCommand)
