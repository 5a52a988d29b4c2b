"""Card and Shoe classes - immutable card representations."""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @classmethod
    def from_string(cls, s: str) -> "Rank":
        """Parse a rank symbol such as 'A', '10', 'T' or 'k'."""
        symbol = s.strip().upper()
        if symbol == "T":
            symbol = "10"
        for rank in cls:
            if str(rank) == symbol:
                return rank
        raise ValueError(f"Invalid rank: {s}")


_SUIT_MAP = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    A hidden card (the dealer's hole card) compares equal to its face-up
    twin; only visible-card evaluation treats it differently.
    """

    rank: Rank
    suit: Suit
    hidden: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        if self.hidden:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        suffix = ", hidden" if self.hidden else ""
        return f"Card({self.rank.name}, {self.suit.name}{suffix})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    def face_down(self) -> "Card":
        """Return a hidden copy of this card."""
        return replace(self, hidden=True)

    def revealed(self) -> "Card":
        """Return a face-up copy of this card."""
        return replace(self, hidden=False) if self.hidden else self

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        suit_str = s[-1]
        if suit_str not in _SUIT_MAP:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(Rank.from_string(s[:-1]), _SUIT_MAP[suit_str])


def build_cards(num_decks: int) -> list[Card]:
    """Return `num_decks` standard decks in a fixed order."""
    return [
        Card(rank, suit)
        for _ in range(num_decks)
        for suit in Suit
        for rank in Rank
    ]


class Shoe:
    """
    A multi-deck shoe for blackjack.

    Cards are drawn from the end of the underlying list, so a shoe built
    with `from_cards` deals its last card first.
    """

    def __init__(self, num_decks: int = 6, rng: Random | None = None) -> None:
        """
        Initialize a shoe with multiple decks.

        Args:
            num_decks: Number of decks in the shoe
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    @classmethod
    def from_cards(
        cls,
        cards: Iterable[Card],
        num_decks: int = 6,
        rng: Random | None = None,
    ) -> "Shoe":
        """Create a shoe holding exactly `cards`, in draw-from-end order."""
        shoe = cls(num_decks=num_decks, rng=rng)
        shoe._cards = list(cards)
        return shoe

    def reset(self) -> None:
        """Reset shoe to all cards from all decks."""
        self._cards = build_cards(self._num_decks)

    def shuffle(self) -> None:
        """Refill and shuffle all cards in the shoe."""
        self.reset()
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the shoe."""
        if not self._cards:
            raise IndexError("Cannot draw from empty shoe")
        return self._cards.pop()

    @property
    def is_empty(self) -> bool:
        """Check whether every card has been dealt."""
        return not self._cards

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * 52

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    @property
    def rng(self) -> Random:
        """Return the random number generator used for shuffling."""
        return self._rng

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
