"""Threat assessment -- how dangerous is the opposing presence this tick.

Each opposing unit is scored as

    base weight (per archetype)
  + hit-point bonus   (+2 above 400 hp, +1 above 200 hp)
  + proximity bonus   (+3 within 150, +1 within 250, per tower, summed)

and the tick's threat is the maximum over all units (0 with no units).

``has_nearby_threats`` answers a different question with its own radius:
is anything close enough to a tower that the defense must keep holding?
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from arena import units as archetypes

from .observation import ReferencePoint, UnitSnapshot

# Hit-point bonus bands
HP_HIGH = 400
HP_MID = 200

# Proximity bands (straight-line distance to a tower)
CLOSE_RANGE = 150.0
NEAR_RANGE = 250.0

# Radius used by the defend-exit check
NEARBY_RADIUS = 200.0


@dataclass(frozen=True)
class ThreatTable:
    """Base threat weight per unit type, with a fallback for unknown types."""
    weights: Mapping[str, float] = field(default_factory=dict)
    default_weight: float = 5.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    @classmethod
    def from_registry(cls, default_weight: float = 5.0) -> ThreatTable:
        return cls(weights=archetypes.threat_weights(), default_weight=default_weight)

    def weight(self, unit_type: str) -> float:
        return self.weights.get(unit_type, self.default_weight)


@dataclass(frozen=True)
class ThreatAssessment:
    """Result of scoring every opposing unit on one tick."""
    max_threat: float = 0.0
    top_unit_type: str | None = None
    top_unit_id: str | None = None
    scores: tuple[float, ...] = ()
    nearby: bool = False

    def to_dict(self) -> dict:
        return {
            "max_threat": self.max_threat,
            "top_unit_type": self.top_unit_type,
            "top_unit_id": self.top_unit_id,
            "unit_count": len(self.scores),
            "nearby": self.nearby,
        }


def _distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def hp_bonus(hp: float) -> int:
    if hp > HP_HIGH:
        return 2
    if hp > HP_MID:
        return 1
    return 0


def proximity_bonus(position: tuple[float, float],
                    towers: Sequence[ReferencePoint]) -> int:
    """Sum of per-tower proximity bonuses."""
    bonus = 0
    for tower in towers:
        dist = _distance(position, tower.position)
        if dist < CLOSE_RANGE:
            bonus += 3
        elif dist < NEAR_RANGE:
            bonus += 1
    return bonus


def unit_threat(unit: UnitSnapshot, towers: Sequence[ReferencePoint],
                table: ThreatTable) -> float:
    return table.weight(unit.unit_type) + hp_bonus(unit.hp) + proximity_bonus(unit.position, towers)


def max_threat(opposing: Sequence[UnitSnapshot], towers: Sequence[ReferencePoint],
               table: ThreatTable) -> float:
    """Highest unit threat this tick, 0 when the field is empty."""
    return max((unit_threat(u, towers, table) for u in opposing), default=0.0)


def has_nearby_threats(opposing: Sequence[UnitSnapshot],
                       towers: Sequence[ReferencePoint],
                       radius: float = NEARBY_RADIUS) -> bool:
    return any(
        _distance(u.position, t.position) < radius
        for u in opposing
        for t in towers
    )


def assess(opposing: Sequence[UnitSnapshot], towers: Sequence[ReferencePoint],
           table: ThreatTable, radius: float = NEARBY_RADIUS) -> ThreatAssessment:
    """Score every opposing unit and summarize the tick."""
    if not opposing:
        return ThreatAssessment()

    scores = tuple(unit_threat(u, towers, table) for u in opposing)
    top = max(range(len(scores)), key=scores.__getitem__)
    return ThreatAssessment(
        max_threat=scores[top],
        top_unit_type=opposing[top].unit_type,
        top_unit_id=opposing[top].unit_id,
        scores=scores,
        nearby=has_nearby_threats(opposing, towers, radius),
    )
