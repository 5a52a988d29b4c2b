"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, NamedTuple

from core.cards import Card


class HandType(Enum):
    """Hand classification used by strategy lookups."""

    HARD = "hard"
    SOFT = "soft"
    PAIR = "pair"

    def __str__(self) -> str:
        return self.name


class HandValue(NamedTuple):
    """
    Best total of a hand and the number of aces still counted as 11.

    `total` never exceeds 21 while `usable_aces` is positive: an ace is only
    kept at 11 if the hand does not bust with it.
    """

    total: int
    usable_aces: int

    @property
    def is_soft(self) -> bool:
        return self.usable_aces > 0

    @property
    def is_busted(self) -> bool:
        return self.total > 21


def add_card_value(total: int, usable_aces: int, value: int) -> HandValue:
    """
    Add one card value (Ace = 11) to an abstract hand state.

    Aces are demoted from 11 to 1 while the total is over 21.
    """
    total += value
    if value == 11:
        usable_aces += 1

    while total > 21 and usable_aces > 0:
        total -= 10
        usable_aces -= 1

    return HandValue(total, usable_aces)


def _evaluate(cards: Iterable[Card]) -> HandValue:
    total = 0
    aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            aces += 1

    # Reduce aces from 11 to 1 as needed
    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return HandValue(total, aces)


def evaluate_visible(cards: Iterable[Card]) -> HandValue:
    """Evaluate face-up cards only, as a player sees the dealer's hand."""
    return _evaluate(card for card in cards if not card.hidden)


def evaluate_true(cards: Iterable[Card]) -> HandValue:
    """Evaluate every card, including face-down ones."""
    return _evaluate(cards)


def best_total(cards: Iterable[Card]) -> int:
    """Best non-bust total of the visible cards (or the bust total)."""
    return evaluate_visible(cards).total


def usable_aces(cards: Iterable[Card]) -> int:
    """Number of visible aces counted as 11 in the best total."""
    return evaluate_visible(cards).usable_aces


def is_soft(cards: Iterable[Card]) -> bool:
    """
    Check if the visible cards form a soft hand.

    Equivalent to the minimum total (every ace as 1) being strictly below
    the best total without busting.
    """
    return evaluate_visible(cards).is_soft


def classify(cards: list[Card]) -> HandType:
    """Classify a hand as PAIR, SOFT or HARD."""
    if len(cards) == 2 and cards[0].rank == cards[1].rank:
        return HandType.PAIR
    if is_soft(cards):
        return HandType.SOFT
    return HandType.HARD


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    is_completed: bool = False
    is_doubled: bool = False
    is_split_hand: bool = False
    is_surrendered: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def reveal(self) -> None:
        """Turn every face-down card face up."""
        self.cards = [card.revealed() for card in self.cards]

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()
        self.is_completed = False
        self.is_doubled = False
        self.is_split_hand = False
        self.is_surrendered = False

    @property
    def value(self) -> int:
        """
        Calculate the best hand value over all cards, hidden or not.

        Returns the highest value that doesn't bust, or the lowest bust value.
        """
        return evaluate_true(self.cards).total

    @property
    def visible_value(self) -> int:
        """Calculate the best value of the face-up cards only."""
        return best_total(self.cards)

    @property
    def is_soft(self) -> bool:
        """Check if the hand is soft (has an ace counted as 11)."""
        return evaluate_true(self.cards).is_soft

    @property
    def is_hard(self) -> bool:
        """Check if the hand is hard (not soft)."""
        return not self.is_soft

    @property
    def hand_type(self) -> HandType:
        """Classify the visible cards."""
        return classify(self.cards)

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return (
            len(self.cards) == 2
            and self.value == 21
            and not self.is_split_hand
        )

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair (two cards of same rank)."""
        return (
            len(self.cards) == 2
            and self.cards[0].rank == self.cards[1].rank
        )

    @property
    def can_double(self) -> bool:
        """Check if the hand can be doubled down."""
        return len(self.cards) == 2 and not self.is_doubled

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.visible_value})"
        if evaluate_visible(self.cards).is_soft:
            value_str = f"(soft {self.visible_value})"
        if self.is_blackjack and not any(card.hidden for card in self.cards):
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"

