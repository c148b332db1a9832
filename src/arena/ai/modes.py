"""Opponent strategic modes.

CYCLE    -- default; trickle cheap cards, bank elixir
DEFEND   -- a dangerous unit is bearing down on a tower
COUNTER  -- defense held with elixir to spare; punish the other lane
PUSH     -- committed offensive behind a heavy archetype
"""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """The four mutually exclusive controller modes."""
    CYCLE = "cycle"
    DEFEND = "defend"
    COUNTER = "counter"
    PUSH = "push"

    def __str__(self) -> str:
        return self.value
