from arena.units.base import Role, UnitType


class MegaKnight(UnitType):
    type_id = "megaknight"
    display_name = "Mega Knight"
    icon = "M"
    role = Role.TANK
    hitpoints = 1000
    elixir_cost = 7
    threat_weight = 9
    push_archetype = True
