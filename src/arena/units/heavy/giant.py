from arena.units.base import Role, UnitType


class Giant(UnitType):
    type_id = "giant"
    display_name = "Giant"
    icon = "G"
    role = Role.TANK
    hitpoints = 1200
    elixir_cost = 5
    threat_weight = 8
    push_archetype = True
