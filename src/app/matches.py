"""MatchRegistry -- one ModeController per live match.

Each controller is single-writer.  The registry serializes ticks per match
with a per-match lock so concurrent HTTP requests cannot interleave two
evaluations against the same state.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field

from loguru import logger

from arena.ai.controller import ModeController
from arena.ai.modes import Mode
from arena.ai.observation import DEFAULT_TOWERS, Observation, ReferencePoint
from arena.comms.event_bus import EventBus

from app.config import Settings


@dataclass
class Match:
    match_id: str
    controller: ModeController
    own_side: str
    towers: tuple[ReferencePoint, ...]
    lock: threading.Lock = field(default_factory=threading.Lock)


class MatchRegistry:
    """Thread-safe map of match id -> Match."""

    def __init__(self, settings: Settings, bus: EventBus | None = None) -> None:
        self._settings = settings
        self._bus = bus
        self._lock = threading.Lock()
        self._matches: dict[str, Match] = {}
        self._config = settings.controller_config()
        self._table = settings.threat_table()

    def create(
        self,
        match_id: str | None = None,
        own_side: str | None = None,
        towers: tuple[ReferencePoint, ...] | None = None,
    ) -> Match:
        """Create a match.  Raises KeyError when the id is taken."""
        mid = match_id or f"match-{uuid.uuid4().hex[:8]}"
        controller = ModeController(
            config=self._config,
            threat_table=self._table,
            bus=self._bus,
            history=self._settings.history_size,
            name=mid,
        )
        match = Match(
            match_id=mid,
            controller=controller,
            own_side=own_side or self._settings.own_side,
            towers=towers or DEFAULT_TOWERS,
        )
        with self._lock:
            if mid in self._matches:
                raise KeyError(mid)
            self._matches[mid] = match
        logger.info(f"Match created: {mid} (side={match.own_side}, towers={len(match.towers)})")
        return match

    def get(self, match_id: str) -> Match | None:
        with self._lock:
            return self._matches.get(match_id)

    def remove(self, match_id: str) -> bool:
        with self._lock:
            match = self._matches.pop(match_id, None)
        if match is not None:
            logger.info(f"Match removed: {match_id} after {match.controller.tick_count} ticks")
        return match is not None

    def tick(self, match_id: str, obs: Observation) -> Mode:
        """Advance one match.  Raises KeyError for unknown ids."""
        match = self.get(match_id)
        if match is None:
            raise KeyError(match_id)
        with match.lock:
            return match.controller.tick(obs)

    def summary(self) -> list[dict]:
        with self._lock:
            matches = list(self._matches.values())
        return [
            {"match_id": m.match_id, "mode": m.controller.mode.value}
            for m in matches
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._matches)
