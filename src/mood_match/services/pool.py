"""Insertion-ordered pool of handles waiting for a partner."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime

from mood_match.domain.models import WaitingEntry
from mood_match.domain.moods import Mood


@dataclass
class WaitingPool:
    """FIFO collection of waiting entries keyed by handle id.

    Not locked on its own: callers mutate it under the lifecycle lock.
    Scans iterate over a snapshot, so mutation during a scan is safe.
    """

    _entries: dict[str, WaitingEntry] = field(default_factory=dict)

    def enqueue(self, handle_id: str, mood: Mood, now: datetime) -> WaitingEntry:
        """Add a handle if absent and return its entry."""
        existing = self._entries.get(handle_id)
        if existing is not None:
            return existing
        entry = WaitingEntry(handle_id=handle_id, mood=mood, enqueued_at=now)
        self._entries[handle_id] = entry
        return entry

    def dequeue(self, handle_id: str) -> WaitingEntry | None:
        """Remove a handle if present."""
        return self._entries.pop(handle_id, None)

    def scan(
        self, predicate: Callable[[WaitingEntry], bool] | None = None
    ) -> Iterator[WaitingEntry]:
        """Yield entries in FIFO order that satisfy ``predicate``."""
        for entry in list(self._entries.values()):
            # Skip entries removed since the snapshot was taken.
            if self._entries.get(entry.handle_id) is not entry:
                continue
            if predicate is None or predicate(entry):
                yield entry

    def position(self, handle_id: str) -> int | None:
        """Return the 1-based FIFO position of a handle."""
        for index, queued_id in enumerate(self._entries, start=1):
            if queued_id == handle_id:
                return index
        return None

    def get(self, handle_id: str) -> WaitingEntry | None:
        return self._entries.get(handle_id)

    def __contains__(self, handle_id: object) -> bool:
        return handle_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
