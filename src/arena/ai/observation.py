"""Observation snapshot handed to the mode controller each tick.

The simulation owns these values; the controller only reads them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UnitSnapshot:
    """An opposing unit as seen this tick."""
    unit_type: str
    position: tuple[float, float]
    hp: float
    side: str = "blue"
    unit_id: str | None = None


@dataclass(frozen=True)
class OwnUnit:
    """A controller-side unit, only consulted for push liveness."""
    unit_type: str
    side: str = "red"
    alive: bool = True
    unit_id: str | None = None


@dataclass(frozen=True)
class ReferencePoint:
    """A controller-side tower."""
    position: tuple[float, float]
    name: str = ""


@dataclass(frozen=True)
class Observation:
    """Everything the controller needs for one tick."""
    time: float
    elixir: float
    opposing_units: tuple[UnitSnapshot, ...] = ()
    own_units: tuple[OwnUnit, ...] = ()
    towers: tuple[ReferencePoint, ...] = ()

    @classmethod
    def from_units(
        cls,
        time: float,
        elixir: float,
        units: Iterable[Mapping[str, Any]],
        towers: Iterable[ReferencePoint],
        own_side: str = "red",
    ) -> Observation:
        """Build a snapshot from the game's mixed, side-tagged unit list.

        Each unit mapping carries ``side``, ``type``, ``x``, ``y`` and
        optionally ``hp``, ``alive`` and ``id``.  Units on ``own_side`` become
        own units; everything else is opposing.
        """
        opposing: list[UnitSnapshot] = []
        own: list[OwnUnit] = []
        for u in units:
            side = u.get("side", "")
            if side == own_side:
                own.append(OwnUnit(
                    unit_type=u["type"],
                    side=side,
                    alive=u.get("alive", True),
                    unit_id=u.get("id"),
                ))
            else:
                opposing.append(UnitSnapshot(
                    unit_type=u["type"],
                    position=(float(u["x"]), float(u["y"])),
                    hp=u.get("hp", 0),
                    side=side,
                    unit_id=u.get("id"),
                ))
        return cls(
            time=time,
            elixir=elixir,
            opposing_units=tuple(opposing),
            own_units=tuple(own),
            towers=tuple(towers),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], own_side: str = "red",
                  towers: Iterable[ReferencePoint] = ()) -> Observation:
        """Parse the JSON form used by scenarios and the HTTP API.

        ``towers`` supplies the match's fixed reference points when the
        payload does not carry its own.
        """
        opposing = tuple(
            UnitSnapshot(
                unit_type=u["unit_type"],
                position=(float(u["position"][0]), float(u["position"][1])),
                hp=u.get("hp", 0),
                side=u.get("side", "blue"),
                unit_id=u.get("unit_id"),
            )
            for u in data.get("opposing_units", [])
        )
        own = tuple(
            OwnUnit(
                unit_type=u["unit_type"],
                side=u.get("side", own_side),
                alive=u.get("alive", True),
                unit_id=u.get("unit_id"),
            )
            for u in data.get("own_units", [])
        )
        if "towers" in data:
            points = tuple(_parse_tower(t) for t in data["towers"])
        else:
            points = tuple(towers)
        return cls(
            time=float(data["time"]),
            elixir=data.get("elixir", 0),
            opposing_units=opposing,
            own_units=own,
            towers=points,
        )


def _parse_tower(data: Mapping[str, Any]) -> ReferencePoint:
    pos = data["position"]
    return ReferencePoint(position=(float(pos[0]), float(pos[1])),
                          name=data.get("name", ""))


def parse_towers(items: Iterable[Mapping[str, Any]]) -> tuple[ReferencePoint, ...]:
    return tuple(_parse_tower(t) for t in items)


# Controller-side towers of the standard arena: two lane towers and the king.
DEFAULT_TOWERS: tuple[ReferencePoint, ...] = (
    ReferencePoint((200.0, 100.0), "left"),
    ReferencePoint((600.0, 100.0), "right"),
    ReferencePoint((400.0, 50.0), "king"),
)
