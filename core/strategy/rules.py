"""Blackjack rule variations."""

from dataclasses import dataclass
from typing import Any, Literal

SurrenderMode = Literal["none", "early", "late"]

SURRENDER_MODES: tuple[str, ...] = ("none", "early", "late")


def _as_bool(value: Any) -> bool:
    """Read a flag that may arrive as text, e.g. "false" from a form."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    All rules that affect EV calculations and dealer play.
    """

    # Deck configuration
    num_decks: int = 6

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Double down rules
    double_after_split: bool = True  # DAS

    # Surrender rules
    surrender: SurrenderMode = "late"

    # Split rules
    max_splits: int = 4  # Maximum number of hands from splitting

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.max_splits < 1:
            raise ValueError("max_splits must be at least 1")

    @property
    def surrender_allowed(self) -> bool:
        """
        Check whether any form of surrender is offered.

        Anything other than "late" or "early" counts as no surrender.
        """
        return self.surrender in ("late", "early")

    @property
    def label(self) -> str:
        """Short description such as '6D H17 DAS LS 3:2'."""
        parts = [
            f"{self.num_decks}D",
            "H17" if self.dealer_hits_soft_17 else "S17",
            "DAS" if self.double_after_split else "NDAS",
        ]
        if self.surrender_allowed:
            parts.append("ES" if self.surrender == "early" else "LS")
        parts.append("3:2" if self.blackjack_payout == 1.5 else f"{self.blackjack_payout}x")
        return " ".join(parts)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleSet":
        """
        Build a rule set from a loose mapping (e.g. a saved settings form).

        Missing keys take the defaults; flags given as text count as set only
        when they read "true", and an unknown surrender mode becomes "none".
        """
        surrender = str(data.get("surrender", "late")).lower()
        if surrender not in SURRENDER_MODES:
            surrender = "none"
        return cls(
            num_decks=int(data.get("num_decks", 6)),
            dealer_hits_soft_17=_as_bool(data.get("dealer_hits_soft_17", True)),
            blackjack_payout=float(data.get("blackjack_payout", 1.5)),
            double_after_split=_as_bool(data.get("double_after_split", True)),
            surrender=surrender,  # type: ignore[arg-type]
        )

