"""MatchScenario -- scripted tick timelines for the mode controller.

A scenario fixes the controller-side towers, optionally seeds the controller
state, and lists observation ticks with the mode expected after each one.
Replaying it through a fresh controller gives a deterministic mode timeline.

Usage:
    scenario = load_match_scenario("scenarios/push_interrupted.json")
    result = replay(scenario)
    assert result.passed
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .controller import ControllerConfig, ControllerState, ModeController
from .modes import Mode
from .observation import DEFAULT_TOWERS, Observation, ReferencePoint, parse_towers
from .threat import ThreatTable


@dataclass
class ScriptedTick:
    """One observation plus the mode expected once it has been evaluated."""

    observation: Observation
    expect: Mode | None = None


@dataclass
class MatchScenario:
    """Complete scripted match definition."""

    scenario_id: str
    name: str
    description: str
    ticks: list[ScriptedTick]
    towers: tuple[ReferencePoint, ...] = DEFAULT_TOWERS
    own_side: str = "red"
    initial: ControllerState = field(default_factory=ControllerState)
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchScenario:
        own_side = data.get("own_side", "red")
        towers = parse_towers(data["towers"]) if "towers" in data else DEFAULT_TOWERS

        init = data.get("initial", {})
        initial = ControllerState(
            mode=Mode(init.get("mode", "cycle")),
            last_mode_change=float(init.get("last_mode_change", 0.0)),
            last_push_start=float(init.get("last_push_start", 0.0)),
            elixir_investment=float(init.get("elixir_investment", 0.0)),
        )

        ticks = []
        for t in data["ticks"]:
            expect = t.get("expect")
            ticks.append(ScriptedTick(
                observation=Observation.from_dict(t, own_side=own_side, towers=towers),
                expect=Mode(expect) if expect is not None else None,
            ))

        return cls(
            scenario_id=data["scenario_id"],
            name=data.get("name", data["scenario_id"]),
            description=data.get("description", ""),
            ticks=ticks,
            towers=towers,
            own_side=own_side,
            initial=initial,
            tags=data.get("tags", []),
        )


@dataclass
class TickResult:
    time: float
    mode: Mode
    expect: Mode | None
    threat: float
    elixir_investment: float
    top_unit_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.expect is None or self.expect is self.mode


@dataclass
class ReplayResult:
    scenario_id: str
    ticks: list[TickResult] = field(default_factory=list)

    @property
    def failures(self) -> list[TickResult]:
        return [t for t in self.ticks if not t.ok]

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def modes(self) -> list[Mode]:
        return [t.mode for t in self.ticks]


def replay(
    scenario: MatchScenario,
    config: ControllerConfig | None = None,
    threat_table: ThreatTable | None = None,
) -> ReplayResult:
    """Run every scripted tick through a fresh controller."""
    controller = ModeController(
        config=config,
        threat_table=threat_table,
        state=scenario.initial,
        name=scenario.scenario_id,
    )
    result = ReplayResult(scenario.scenario_id)
    for st in scenario.ticks:
        mode = controller.tick(st.observation)
        result.ticks.append(TickResult(
            time=st.observation.time,
            mode=mode,
            expect=st.expect,
            threat=controller.last_threat,
            elixir_investment=controller.elixir_investment,
            top_unit_type=controller.last_assessment.top_unit_type,
        ))
    return result


def load_match_scenario(path: str | Path) -> MatchScenario:
    """Load a MatchScenario from a JSON file.

    Raises:
        FileNotFoundError: If path does not exist.
        json.JSONDecodeError: If file is not valid JSON.
        KeyError/ValueError: If required fields are missing or a mode is unknown.
    """
    with open(path) as f:
        data = json.load(f)
    return MatchScenario.from_dict(data)
