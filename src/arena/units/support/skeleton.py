from arena.units.base import Role, UnitType


class Skeleton(UnitType):
    type_id = "skeleton"
    display_name = "Skeleton Army"
    icon = "S"
    role = Role.SWARM
    hitpoints = 30
    elixir_cost = 3
    threat_weight = 6
