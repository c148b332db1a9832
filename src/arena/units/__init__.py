"""Troop archetype registry.

Every concrete ``UnitType`` subclass under ``heavy/`` and ``support/`` is
registered at import time.  The opponent AI derives its default threat
weights and push archetype set from here.

    >>> get_type("giant").threat_weight
    8
"""

from __future__ import annotations

from arena.units.base import Role, UnitType
from arena.units.heavy import giant, heavy_tank, knight, megaknight  # noqa: F401
from arena.units.support import melee, ranged, skeleton, swarm  # noqa: F401

_REGISTRY: dict[str, type[UnitType]] = {}


def _collect(cls: type[UnitType]) -> None:
    for sub in cls.__subclasses__():
        if "type_id" in sub.__dict__:
            _REGISTRY[sub.type_id] = sub
        _collect(sub)


_collect(UnitType)


def all_types() -> list[type[UnitType]]:
    """Every registered archetype, sorted by type_id."""
    return [_REGISTRY[k] for k in sorted(_REGISTRY)]


def get_type(type_id: str) -> type[UnitType] | None:
    return _REGISTRY.get(type_id)


def threat_weights() -> dict[str, float]:
    """Base threat weight per archetype."""
    return {tid: cls.threat_weight for tid, cls in _REGISTRY.items()}


def push_archetypes() -> frozenset[str]:
    """Archetypes whose survival keeps a push alive."""
    return frozenset(tid for tid, cls in _REGISTRY.items() if cls.push_archetype)


__all__ = [
    "Role",
    "UnitType",
    "all_types",
    "get_type",
    "push_archetypes",
    "threat_weights",
]
