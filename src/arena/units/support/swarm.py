from arena.units.base import Role, UnitType


class Swarm(UnitType):
    type_id = "swarm"
    display_name = "Swarm"
    icon = "W"
    role = Role.SWARM
    hitpoints = 60
    elixir_cost = 3
    threat_weight = 6
