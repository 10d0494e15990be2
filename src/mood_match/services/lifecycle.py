"""Room lifecycle: pairing, relay, teardown and requeue."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from mood_match.domain.errors import (
    AlreadyInSession,
    DuplicateSessionId,
    NotAdmitted,
    UnknownHandle,
)
from mood_match.domain.events import (
    Delivery,
    MessageReceived,
    Paired,
    PartnerLeft,
    Registered,
    TypingState,
    WaitingStarted,
)
from mood_match.domain.models import (
    CloseReason,
    Room,
    UserHandle,
    UserProfile,
    WaitingEntry,
)
from mood_match.domain.moods import Mood, mood_label
from mood_match.services.matchmaker import Matchmaker
from mood_match.services.pool import WaitingPool
from mood_match.services.registry import SessionRegistry, generate_room_id

logger = logging.getLogger(__name__)

MAX_ROOM_ID_ATTEMPTS = 8


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class CoreStats:
    """Counters derived from the live state at query time."""

    online: int
    waiting: int
    active_rooms: int


@dataclass
class SessionLifecycleController:
    """Owns handles, the waiting pool and the room registry behind one lock.

    Every public method runs as one critical section and returns the events
    to deliver; sending happens outside the lock.
    """

    matchmaker: Matchmaker
    registry: SessionRegistry = field(default_factory=SessionRegistry)
    clock: Callable[[], datetime] = _utcnow
    _handles: dict[str, UserHandle] = field(default_factory=dict)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def pool(self) -> WaitingPool:
        return self.matchmaker.pool

    def connect(self, handle_id: str | None = None) -> UserHandle:
        """Register a new connection and return its handle."""
        with self._lock:
            handle = UserHandle(id=handle_id or uuid4().hex)
            self._handles[handle.id] = handle
            logger.info("Handle connected", extra={"handle_id": handle.id})
            return handle

    def admit(self, handle_id: str, profile: UserProfile) -> list[Delivery]:
        """Mark a handle as verified with its public profile."""
        with self._lock:
            handle = self._require(handle_id)
            handle.profile = profile
            return [Delivery(handle.id, Registered(profile=profile))]

    def get_handle(self, handle_id: str) -> UserHandle | None:
        with self._lock:
            return self._handles.get(handle_id)

    def start_search(self, handle_id: str, mood: Mood) -> list[Delivery]:
        """Validate a search request and pair or queue the handle."""
        with self._lock:
            handle = self._require(handle_id)
            if not handle.verified:
                raise NotAdmitted("Complete registration before searching")
            if handle.session_id is not None:
                raise AlreadyInSession(
                    "Leave the current chat before searching again"
                )
            # A new search replaces any previous one, possibly with a new mood.
            self.pool.dequeue(handle.id)
            handle.mood = mood
            return self._find_or_queue(handle, mood)

    def relay_message(self, handle_id: str, text: str) -> list[Delivery]:
        """Forward chat text to the sender's counterpart, if any."""
        with self._lock:
            sender, counterpart_id = self._resolve_counterpart(handle_id)
            if sender is None or counterpart_id is None:
                return []
            event = MessageReceived(
                from_name=sender.display_name, text=text, timestamp=self.clock()
            )
            return [Delivery(counterpart_id, event)]

    def relay_typing(self, handle_id: str, is_typing: bool) -> list[Delivery]:
        """Forward a typing indicator to the sender's counterpart, if any."""
        with self._lock:
            _, counterpart_id = self._resolve_counterpart(handle_id)
            if counterpart_id is None:
                return []
            return [Delivery(counterpart_id, TypingState(is_typing=is_typing))]

    def close(self, handle_id: str, reason: CloseReason) -> list[Delivery]:
        """Tear down the handle's room and requeue the partner.

        Closing a handle without a live room is a no-op.
        """
        with self._lock:
            room = self.registry.find_by_member(handle_id)
            if room is None:
                return []
            return self._teardown(room, reason, initiator=handle_id)

    def leave(self, handle_id: str) -> list[Delivery]:
        """Leave the current room and stop searching."""
        with self._lock:
            deliveries = self.close(handle_id, CloseReason.LEFT)
            self.pool.dequeue(handle_id)
            return deliveries

    def disconnect(self, handle_id: str) -> list[Delivery]:
        """Resolve a dropped connection to a consistent terminal state."""
        with self._lock:
            deliveries = self.close(handle_id, CloseReason.DISCONNECTED)
            self.pool.dequeue(handle_id)
            if self._handles.pop(handle_id, None) is not None:
                logger.info("Handle disconnected", extra={"handle_id": handle_id})
            return deliveries

    def expire_stale(self, max_age_seconds: float) -> list[Delivery]:
        """Force-close rooms older than ``max_age_seconds``."""
        with self._lock:
            now = self.clock()
            deliveries: list[Delivery] = []
            for room in self.registry.older_than(now, max_age_seconds):
                logger.info(
                    "Expiring stale room",
                    extra={"room_id": room.id, "age": room.age_seconds(now)},
                )
                deliveries.extend(
                    self._teardown(room, CloseReason.EXPIRED, initiator=None)
                )
            return deliveries

    def stats(self) -> CoreStats:
        with self._lock:
            registered = [h for h in self._handles.values() if h.verified]
            return CoreStats(
                online=len(registered),
                waiting=len(self.pool),
                active_rooms=len(self.registry),
            )

    def rooms(self) -> list[Room]:
        with self._lock:
            return self.registry.all()

    def waiting(self) -> list[WaitingEntry]:
        with self._lock:
            return list(self.pool.scan())

    def _require(self, handle_id: str) -> UserHandle:
        handle = self._handles.get(handle_id)
        if handle is None:
            raise UnknownHandle(handle_id)
        return handle

    def _resolve_counterpart(
        self, handle_id: str
    ) -> tuple[UserHandle | None, str | None]:
        sender = self._handles.get(handle_id)
        if sender is None or sender.session_id is None:
            return sender, None
        room = self.registry.get(sender.session_id)
        if room is None:
            return sender, None
        return sender, room.counterpart(handle_id)

    def _find_or_queue(self, handle: UserHandle, mood: Mood) -> list[Delivery]:
        partner_entry = self.matchmaker.claim(handle.id, mood)
        if partner_entry is not None:
            partner = self._handles.get(partner_entry.handle_id)
            if partner is not None and partner.session_id is None:
                return self._create_room(partner, handle, partner_entry.mood)
            # Stale entry for a handle that is gone or busy; it was dropped.
            logger.warning(
                "Dropped stale waiting entry",
                extra={"handle_id": partner_entry.handle_id},
            )
            return self._find_or_queue(handle, mood)

        self.pool.enqueue(handle.id, mood, self.clock())
        position = self.pool.position(handle.id) or len(self.pool)
        logger.info(
            "Handle queued",
            extra={"handle_id": handle.id, "mood": mood, "position": position},
        )
        return [
            Delivery(
                handle.id,
                WaitingStarted(
                    mood=mood, mood_label=mood_label(mood), queue_position=position
                ),
            )
        ]

    def _create_room(
        self, waiting: UserHandle, searcher: UserHandle, mood: Mood
    ) -> list[Delivery]:
        self.pool.dequeue(waiting.id)
        self.pool.dequeue(searcher.id)
        room = self._register_room(waiting.id, searcher.id, mood)
        waiting.session_id = room.id
        searcher.session_id = room.id
        logger.info(
            "Room created",
            extra={
                "room_id": room.id,
                "member_a": waiting.id,
                "member_b": searcher.id,
                "mood": mood,
            },
        )
        label = mood_label(mood)
        return [
            Delivery(
                waiting.id,
                Paired(
                    session_id=room.id,
                    mood=mood,
                    mood_label=label,
                    counterpart=searcher.profile,
                ),
            ),
            Delivery(
                searcher.id,
                Paired(
                    session_id=room.id,
                    mood=mood,
                    mood_label=label,
                    counterpart=waiting.profile,
                ),
            ),
        ]

    def _register_room(self, member_a: str, member_b: str, mood: Mood) -> Room:
        now = self.clock()
        for attempt in range(MAX_ROOM_ID_ATTEMPTS):
            room = Room(
                id=generate_room_id(now, salt=attempt > 0),
                member_a=member_a,
                member_b=member_b,
                mood=mood,
                created_at=now,
            )
            try:
                self.registry.register(room)
            except DuplicateSessionId:
                continue
            return room
        room = Room(
            id=f"room_{uuid4().hex}",
            member_a=member_a,
            member_b=member_b,
            mood=mood,
            created_at=now,
        )
        self.registry.register(room)
        return room

    def _teardown(
        self, room: Room, reason: CloseReason, initiator: str | None
    ) -> list[Delivery]:
        if self.registry.remove(room.id) is None:
            return []
        members = [
            self._handles.get(member_id) for member_id in (room.member_a, room.member_b)
        ]
        for member in members:
            if member is not None and member.session_id == room.id:
                member.session_id = None
        logger.info(
            "Room closed",
            extra={"room_id": room.id, "reason": reason, "initiator": initiator},
        )

        deliveries: list[Delivery] = []
        for member in members:
            if member is None or member.id == initiator:
                continue
            deliveries.append(Delivery(member.id, PartnerLeft(reason=reason)))
            if initiator is not None and member.mood is not None:
                deliveries.extend(self._find_or_queue(member, member.mood))
        return deliveries
