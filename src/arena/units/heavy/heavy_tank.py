from arena.units.base import Role, UnitType


class HeavyTank(UnitType):
    type_id = "heavy-tank"
    display_name = "Heavy Tank"
    icon = "T"
    role = Role.TANK
    hitpoints = 1500
    elixir_cost = 8
    threat_weight = 9
    push_archetype = True
