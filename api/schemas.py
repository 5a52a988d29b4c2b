"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

ActionName = Literal["stand", "hit", "double", "surrender", "split"]


class RulesRequest(BaseModel):
    """Table rules sent with a request."""

    num_decks: Literal[1, 2, 6, 8] = 6
    dealer_hits_soft_17: bool = True
    double_after_split: bool = True
    # Unknown modes are accepted and treated as no surrender
    surrender: str = "late"
    blackjack_payout: float = Field(default=1.5, ge=1.0)


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int


# EV schemas
class EVRequest(BaseModel):
    """Request to rank every action for a hand."""

    player_total: int = Field(..., ge=2, le=31)
    usable_aces: int = Field(default=0, ge=0, le=4)
    is_pair: bool = False
    pair_rank: str | None = Field(default=None, description="Rank symbol such as 'A', '8' or 'K'")
    dealer_upcard: int = Field(..., ge=2, le=11, description="Dealer upcard value, Ace = 11")
    rules: RulesRequest | None = None
    true_count: float = 0.0
    legal_actions: list[ActionName] | None = None


class ActionEV(BaseModel):
    """EV of one action."""

    action: ActionName
    ev: float


class EVResponse(BaseModel):
    """Ranked action EVs."""

    best_action: ActionName
    hint: ActionName | None = None
    actions: list[ActionEV]
    rules: str


class DealerDistributionRequest(BaseModel):
    """Request for the dealer outcome distribution of an upcard."""

    dealer_upcard: int = Field(..., ge=2, le=11)
    rules: RulesRequest | None = None


class DealerDistributionResponse(BaseModel):
    """Dealer outcome probabilities."""

    dealer_upcard: int
    bust: float
    seventeen: float
    eighteen: float
    nineteen: float
    twenty: float
    twenty_one: float
    blackjack: float


# Hand schemas
class HandEvaluateRequest(BaseModel):
    """Cards to evaluate; indices in `hidden` are face down."""

    cards: list[str] = Field(..., min_length=1)
    hidden: list[int] = Field(default_factory=list)


class HandEvaluateResponse(BaseModel):
    """Hand evaluation."""

    visible_total: int
    true_total: int
    usable_aces: int
    is_soft: bool
    is_busted: bool
    is_blackjack: bool
    hand_type: Literal["HARD", "SOFT", "PAIR"]


# Dealer play schemas
class DealerPlayRequest(BaseModel):
    """
    Dealer hand to play out.

    `shoe` lists the remaining cards in dealing order (first card is dealt
    first). Without it a freshly shuffled shoe is used, seeded by `seed`.
    """

    dealer_cards: list[str] = Field(..., min_length=1)
    shoe: list[str] | None = None
    seed: int | None = None
    rules: RulesRequest | None = None


class DealerEventResponse(BaseModel):
    """One dealer play event."""

    event: str
    data: dict


class DealerPlayResponse(BaseModel):
    """Completed dealer hand."""

    cards: list[CardResponse]
    total: int
    is_busted: bool
    is_blackjack: bool
    cards_remaining: int
    events: list[DealerEventResponse]
