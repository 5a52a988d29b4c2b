"""Memoization tables shared by the dealer model and the player EV engine."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.statistics.probability import DealerOutcome

OutcomeMap = dict["DealerOutcome", float]

DealerKey = tuple[int, int, bool]  # (total, usable_aces, dealer_hits_soft_17)
PlayerKey = tuple[int, int]  # (total, usable_aces)


@dataclass
class EVCache:
    """
    Caller-owned memo tables for one EV query at a time.

    Player entries are only valid for the dealer distribution they were
    computed against, so the cache must be cleared between queries. An
    instance must not be shared by concurrent queries.
    """

    dealer: dict[DealerKey, OutcomeMap] = field(default_factory=dict)
    player: dict[PlayerKey, float] = field(default_factory=dict)

    def clear(self) -> None:
        """Drop every memoized entry."""
        self.dealer.clear()
        self.player.clear()

    def __len__(self) -> int:
        return len(self.dealer) + len(self.player)
