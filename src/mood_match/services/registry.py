"""Registry of live rooms."""

import secrets
from dataclasses import dataclass, field
from datetime import datetime

from mood_match.domain.errors import DuplicateSessionId
from mood_match.domain.models import Room


def generate_room_id(now: datetime, salt: bool = False) -> str:
    """Build a time-based room id, optionally with a random suffix."""
    room_id = f"room_{int(now.timestamp() * 1000)}"
    if salt:
        room_id = f"{room_id}_{secrets.token_hex(4)}"
    return room_id


@dataclass
class SessionRegistry:
    """Live rooms indexed by id and by member."""

    _rooms: dict[str, Room] = field(default_factory=dict)
    _by_member: dict[str, str] = field(default_factory=dict)

    def register(self, room: Room) -> None:
        """Add a room. Raises DuplicateSessionId if the id is taken."""
        if room.id in self._rooms:
            raise DuplicateSessionId(room.id)
        self._rooms[room.id] = room
        self._by_member[room.member_a] = room.id
        self._by_member[room.member_b] = room.id

    def remove(self, room_id: str) -> Room | None:
        """Remove a room and its member index. Absent ids are ignored."""
        room = self._rooms.pop(room_id, None)
        if room is None:
            return None
        for member in (room.member_a, room.member_b):
            if self._by_member.get(member) == room_id:
                del self._by_member[member]
        return room

    def get(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def find_by_member(self, handle_id: str) -> Room | None:
        room_id = self._by_member.get(handle_id)
        return self._rooms.get(room_id) if room_id else None

    def older_than(self, now: datetime, max_age_seconds: float) -> list[Room]:
        """Return rooms whose age exceeds ``max_age_seconds``."""
        return [
            room
            for room in self._rooms.values()
            if room.age_seconds(now) > max_age_seconds
        ]

    def all(self) -> list[Room]:
        return list(self._rooms.values())

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
