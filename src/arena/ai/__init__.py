"""Opponent AI -- threat assessment and the strategic mode controller."""
from .controller import ControllerConfig, ControllerState, Decision, ModeController, Transition, evaluate
from .modes import Mode
from .observation import DEFAULT_TOWERS, Observation, OwnUnit, ReferencePoint, UnitSnapshot
from .scenario import MatchScenario, ReplayResult, load_match_scenario, replay
from .threat import ThreatAssessment, ThreatTable, assess, has_nearby_threats, max_threat, unit_threat

__all__ = [
    "ControllerConfig",
    "ControllerState",
    "DEFAULT_TOWERS",
    "Decision",
    "MatchScenario",
    "Mode",
    "ModeController",
    "Observation",
    "OwnUnit",
    "ReferencePoint",
    "ReplayResult",
    "ThreatAssessment",
    "ThreatTable",
    "Transition",
    "UnitSnapshot",
    "assess",
    "evaluate",
    "has_nearby_threats",
    "load_match_scenario",
    "max_threat",
    "replay",
    "unit_threat",
]
