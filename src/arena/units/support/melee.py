from arena.units.base import Role, UnitType


class Melee(UnitType):
    type_id = "melee"
    display_name = "Barbarian"
    icon = "B"
    role = Role.MELEE
    hitpoints = 300
    elixir_cost = 2
    threat_weight = 4
