"""Dealer play state enumeration."""

from enum import Enum, auto


class DealerState(Enum):
    """
    Forced dealer play states.

    Flow: DRAWING → (DRAWING)* → DONE
    """

    # Dealer still has to draw or decide
    DRAWING = auto()

    # Dealer stood or busted
    DONE = auto()

    def __str__(self) -> str:
        return self.name.title()

