"""Base classes for the troop archetype system.

Role        -- enum for what an archetype does on the field
UnitType    -- abstract base every concrete archetype subclasses
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class Role(Enum):
    """Battlefield role of an archetype."""
    TANK = "tank"
    MELEE = "melee"
    RANGED = "ranged"
    SWARM = "swarm"


class UnitType:
    """Abstract base for every troop archetype definition.

    Subclasses MUST set all ClassVar fields.  The registry discovers
    concrete subclasses automatically at import time.
    """

    # -- identity --
    type_id: ClassVar[str]
    display_name: ClassVar[str]
    icon: ClassVar[str]

    # -- role --
    role: ClassVar[Role]
    hitpoints: ClassVar[int]
    elixir_cost: ClassVar[int]

    # -- opponent AI --
    threat_weight: ClassVar[float]
    push_archetype: ClassVar[bool] = False  # keeps a push alive while it lives

    # -- helpers --

    @classmethod
    def is_tank(cls) -> bool:
        return cls.role is Role.TANK

    @classmethod
    def is_swarm(cls) -> bool:
        return cls.role is Role.SWARM

    @classmethod
    def to_dict(cls) -> dict:
        return {
            "type_id": cls.type_id,
            "display_name": cls.display_name,
            "icon": cls.icon,
            "role": cls.role.value,
            "hitpoints": cls.hitpoints,
            "elixir_cost": cls.elixir_cost,
            "threat_weight": cls.threat_weight,
            "push_archetype": cls.push_archetype,
            "tank": cls.is_tank(),
            "swarm": cls.is_swarm(),
        }

    def __repr__(self) -> str:
        return f"<UnitType {self.type_id}>"
