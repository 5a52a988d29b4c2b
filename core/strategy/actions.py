"""Player actions."""

from enum import Enum


class Action(Enum):
    """
    Possible player actions.

    Declaration order is the tie-break order for equal EVs.
    """

    STAND = "stand"
    HIT = "hit"
    DOUBLE = "double"
    SURRENDER = "surrender"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.name.title()
