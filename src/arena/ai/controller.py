"""ModeController -- strategic posture FSM for the arena opponent.

Advanced once per simulation tick.  Each tick evaluates a fixed, ordered
rule list and fires at most one transition:

  1. defense override   any mode but DEFEND -> DEFEND   (threat >= 10)
  2. defend exit        DEFEND -> COUNTER | CYCLE       (dwell > 2s, towers clear)
  3. counter timeout    COUNTER -> CYCLE                (> 5s in COUNTER)
  4. push initiation    CYCLE | COUNTER -> PUSH         (cooldown >= 6s, elixir >= 7)
  5. push exit          PUSH -> CYCLE                   (> 8s committed, push force spent)

The rules live in the pure function ``evaluate`` so they can be tested
without a controller instance.  ``ModeController`` owns the current state,
keeps a short transition history and publishes mode changes.

Integration:
    the match loop builds an ``Observation`` and calls controller.tick(obs)
    spending policies read controller.mode / controller.elixir_investment
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from loguru import logger

from arena import units as archetypes

from .modes import Mode
from .observation import Observation
from .threat import NEARBY_RADIUS, ThreatAssessment, ThreatTable, assess

if TYPE_CHECKING:
    from arena.comms.event_bus import EventBus


@dataclass(frozen=True)
class ControllerConfig:
    """Transition thresholds.  Times in seconds, resources in elixir."""
    defend_threat_threshold: float = 10.0
    defend_min_dwell: float = 2.0
    nearby_threat_radius: float = NEARBY_RADIUS
    counter_elixir_threshold: float = 5.0
    counter_timeout: float = 5.0
    push_cooldown: float = 6.0
    push_elixir_threshold: float = 7.0
    push_min_duration: float = 8.0
    push_archetypes: frozenset[str] = field(default_factory=archetypes.push_archetypes)


@dataclass(frozen=True)
class ControllerState:
    mode: Mode = Mode.CYCLE
    last_mode_change: float = 0.0
    last_push_start: float = 0.0
    elixir_investment: float = 0.0

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "last_mode_change": self.last_mode_change,
            "last_push_start": self.last_push_start,
            "elixir_investment": self.elixir_investment,
        }


@dataclass(frozen=True)
class Transition:
    """One mode change."""
    from_mode: Mode
    to_mode: Mode
    time: float
    reason: str
    threat: float = 0.0

    def to_dict(self) -> dict:
        return {
            "from": self.from_mode.value,
            "to": self.to_mode.value,
            "time": self.time,
            "reason": self.reason,
            "threat": self.threat,
        }


@dataclass(frozen=True)
class Decision:
    """Outcome of evaluating one tick."""
    state: ControllerState
    assessment: ThreatAssessment
    transition: Transition | None = None

    @property
    def changed(self) -> bool:
        return self.transition is not None


def _push_force_alive(obs: Observation, config: ControllerConfig) -> bool:
    return any(u.alive and u.unit_type in config.push_archetypes for u in obs.own_units)


def evaluate(
    state: ControllerState,
    obs: Observation,
    config: ControllerConfig | None = None,
    table: ThreatTable | None = None,
) -> Decision:
    """Evaluate the transition rules once against a snapshot.

    Pure: returns the next state without touching ``state``.  The tick time
    is clamped to the latest recorded timestamp so the controller's clock
    never runs backward.  A non-finite tick time (NaN, inf) leaves the clock
    at the latest recorded timestamp.
    """
    config = config or ControllerConfig()
    table = table or ThreatTable.from_registry()

    latest = max(state.last_mode_change, state.last_push_start)
    now = max(obs.time, latest) if math.isfinite(obs.time) else latest
    assessment = assess(obs.opposing_units, obs.towers, table, config.nearby_threat_radius)
    threat = assessment.max_threat
    mode = state.mode

    def to(target: Mode, reason: str, **changes) -> Decision:
        nxt = replace(state, mode=target, last_mode_change=now, **changes)
        return Decision(nxt, assessment, Transition(mode, target, now, reason, threat))

    # 1. Defense override -- preempts everything
    if threat >= config.defend_threat_threshold and mode is not Mode.DEFEND:
        return to(Mode.DEFEND, "threat")

    # 2. Defend exit after minimum dwell
    if mode is Mode.DEFEND and now - state.last_mode_change > config.defend_min_dwell:
        if not assessment.nearby:
            if obs.elixir >= config.counter_elixir_threshold:
                return to(Mode.COUNTER, "threats_cleared")
            return to(Mode.CYCLE, "threats_cleared")

    # 3. Counter window closes
    if mode is Mode.COUNTER and now - state.last_mode_change > config.counter_timeout:
        return to(Mode.CYCLE, "counter_timeout")

    # 4. Push initiation, never from DEFEND
    if (mode in (Mode.CYCLE, Mode.COUNTER)
            and now - state.last_push_start >= config.push_cooldown
            and obs.elixir >= config.push_elixir_threshold):
        return to(Mode.PUSH, "push_ready", last_push_start=now, elixir_investment=0.0)

    # 5. Push exit once committed long enough and the push force is spent
    if mode is Mode.PUSH and now - state.last_push_start > config.push_min_duration:
        if not _push_force_alive(obs, config):
            return to(Mode.CYCLE, "push_spent", elixir_investment=0.0)

    return Decision(state, assessment)


class ModeController:
    """Owns one match's controller state.  Not thread-safe: one writer."""

    def __init__(
        self,
        config: ControllerConfig | None = None,
        threat_table: ThreatTable | None = None,
        bus: EventBus | None = None,
        history: int = 64,
        state: ControllerState | None = None,
        name: str = "opponent",
    ) -> None:
        self.config = config or ControllerConfig()
        self.threat_table = threat_table or ThreatTable.from_registry()
        self.name = name
        self._bus = bus
        self._state = state or ControllerState()
        self._history: deque[Transition] = deque(maxlen=history)
        self._last_assessment = ThreatAssessment()
        self._ticks = 0

    # -- read-only telemetry --

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def elixir_investment(self) -> float:
        return self._state.elixir_investment

    @property
    def last_mode_change(self) -> float:
        return self._state.last_mode_change

    @property
    def last_push_start(self) -> float:
        return self._state.last_push_start

    @property
    def last_threat(self) -> float:
        return self._last_assessment.max_threat

    @property
    def last_assessment(self) -> ThreatAssessment:
        return self._last_assessment

    @property
    def history(self) -> list[Transition]:
        return list(self._history)

    @property
    def tick_count(self) -> int:
        return self._ticks

    # -- operations --

    def tick(self, obs: Observation) -> Mode:
        """Advance by exactly one evaluation and return the active mode."""
        decision = evaluate(self._state, obs, self.config, self.threat_table)
        self._ticks += 1
        self._state = decision.state
        self._last_assessment = decision.assessment
        logger.debug(
            f"[{self.name}] t={obs.time:.2f} mode={self.mode} "
            f"threat={decision.assessment.max_threat:g} elixir={obs.elixir:g}"
        )
        if decision.transition is not None:
            self._on_transition(decision.transition)
        return self._state.mode

    def record_investment(self, amount: float) -> float:
        """Add elixir spent on the current push.  No-op outside PUSH."""
        if self._state.mode is Mode.PUSH and amount > 0:
            self._state = replace(
                self._state,
                elixir_investment=self._state.elixir_investment + amount,
            )
        return self._state.elixir_investment

    def reset(self, now: float = 0.0) -> None:
        """Return to the initial state for a new match."""
        self._state = ControllerState(last_mode_change=now, last_push_start=now)
        self._history.clear()
        self._last_assessment = ThreatAssessment()
        self._ticks = 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            **self._state.to_dict(),
            "last_threat": self.last_threat,
            "ticks": self._ticks,
            "assessment": self._last_assessment.to_dict(),
            "history": [t.to_dict() for t in self._history],
        }

    def _on_transition(self, tr: Transition) -> None:
        self._history.append(tr)
        logger.info(
            f"[{self.name}] {tr.from_mode} -> {tr.to_mode} at t={tr.time:.2f} "
            f"({tr.reason}, threat={tr.threat:g})"
        )
        if self._bus is not None:
            self._bus.publish("ai_mode_changed", {"controller": self.name, **tr.to_dict()})
