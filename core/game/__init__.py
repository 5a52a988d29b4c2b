"""Dealer play and its events."""

from core.game.events import GameEvent, EventEmitter, EventType
from core.game.state import DealerState
from core.game.dealer import DealerPlay, play_dealer_turn

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "DealerState",
    "DealerPlay",
    "play_dealer_turn",
]
