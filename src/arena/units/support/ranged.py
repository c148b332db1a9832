from arena.units.base import Role, UnitType


class Ranged(UnitType):
    type_id = "ranged"
    display_name = "Archer"
    icon = "A"
    role = Role.RANGED
    hitpoints = 250
    elixir_cost = 3
    threat_weight = 7
