from arena.units.base import Role, UnitType


class Knight(UnitType):
    type_id = "knight"
    display_name = "Knight"
    icon = "K"
    role = Role.MELEE
    hitpoints = 600
    elixir_cost = 3
    threat_weight = 5
    push_archetype = True
