"""Partner selection over the waiting pool."""

from collections.abc import Collection
from dataclasses import dataclass
from enum import StrEnum

from mood_match.domain.models import WaitingEntry
from mood_match.domain.moods import Mood, compatible_moods, preferred_moods
from mood_match.services.pool import WaitingPool


class MatchStrategy(StrEnum):
    """How the compatibility table is applied when scanning the pool."""

    EXACT = "exact"
    COMPATIBLE = "compatible"
    PREFERRED_FIRST = "preferred_first"


@dataclass
class Matchmaker:
    """Selects the first acceptable waiting partner for a searcher.

    Callers must hold the lifecycle lock: selection and removal from the pool
    happen together here, and room creation follows in the same section.
    """

    pool: WaitingPool
    strategy: MatchStrategy = MatchStrategy.PREFERRED_FIRST

    def acceptable_passes(self, mood: Mood) -> list[frozenset[Mood]]:
        """Return the mood sets to scan with, in order of precedence."""
        if self.strategy == MatchStrategy.EXACT:
            return [frozenset({mood})]
        compatible = frozenset(compatible_moods(mood))
        if self.strategy == MatchStrategy.COMPATIBLE:
            return [compatible]
        preferred = preferred_moods(mood) & compatible
        if not preferred:
            return [compatible]
        return [preferred, compatible - preferred]

    def select(self, handle_id: str, mood: Mood) -> WaitingEntry | None:
        """Return the chosen partner entry without removing it."""
        for moods in self.acceptable_passes(mood):
            entry = self._first_in(moods, handle_id)
            if entry is not None:
                return entry
        return None

    def claim(self, handle_id: str, mood: Mood) -> WaitingEntry | None:
        """Select a partner and remove it from the pool."""
        entry = self.select(handle_id, mood)
        if entry is None:
            return None
        self.pool.dequeue(entry.handle_id)
        return entry

    def _first_in(
        self, moods: Collection[Mood], handle_id: str
    ) -> WaitingEntry | None:
        return next(
            self.pool.scan(
                lambda entry: entry.mood in moods and entry.handle_id != handle_id
            ),
            None,
        )
