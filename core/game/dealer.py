"""Forced dealer play with a state machine."""

import logging
from dataclasses import replace

from transitions import Machine

from core.cards import Card, Shoe
from core.game.events import EventEmitter, EventType
from core.game.state import DealerState
from core.hand import Hand, evaluate_true
from core.statistics.probability import dealer_must_hit
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)


class DealerPlay:
    """
    Plays out a dealer hand from a real shoe.

    The dealer's moves are fixed by the rules, so the result depends only on
    the order of the shoe. Drawing happens on a copy of the shoe, so neither
    the shoe nor the hand passed in is modified.
    """

    # State machine states
    STATES = [s.name.lower() for s in DealerState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "hit", "source": "drawing", "dest": "drawing", "after": "_deal_card"},
        {"trigger": "finish", "source": "drawing", "dest": "done", "after": "_settle"},
    ]

    def __init__(
        self,
        shoe: Shoe,
        hand: Hand,
        rules: RuleSet | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Prepare a dealer turn.

        Args:
            shoe: Shoe to draw from (a copy is consumed from the end)
            hand: Dealer's hand, possibly with a face-down hole card
            rules: Game rules (uses defaults if not provided)
            events: Emitter receiving dealer events
        """
        self.rules = rules or RuleSet()
        self.shoe = Shoe.from_cards(list(shoe), num_decks=shoe.num_decks, rng=shoe.rng)
        self.hand = replace(hand, cards=list(hand.cards))
        self.events = events or EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="drawing",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> DealerState:
        """Get current dealer state as enum."""
        return DealerState[self._machine_state.upper()]  # type: ignore

    def play(self) -> tuple[Shoe, Hand]:
        """
        Reveal the hole card and draw until the dealer must stand.

        Returns:
            The shoe after drawing (a fresh one if it ran out) and the
            completed dealer hand
        """
        self._reveal()

        while self.state == DealerState.DRAWING:
            total, usable_aces = evaluate_true(self.hand.cards)
            if total > 21 or not dealer_must_hit(total, usable_aces, self.rules):
                self.finish()
            else:
                self.hit()

        return self.shoe, self.hand

    def _reveal(self) -> None:
        """Turn the hole card face up."""
        hidden = [card for card in self.hand.cards if card.hidden]
        self.hand.reveal()
        if hidden:
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                cards=[str(card.revealed()) for card in hidden],
                hand_value=self.hand.value,
            )

    def _draw_card(self) -> Card:
        """Draw from the shoe, replacing it with a fresh shuffled one if empty."""
        if self.shoe.is_empty:
            logger.info("Shoe exhausted during dealer play, reshuffling %d decks", self.rules.num_decks)
            self.shoe = Shoe(num_decks=self.rules.num_decks, rng=self.shoe.rng)
            self.shoe.shuffle()
            self.events.emit_new(EventType.SHOE_SHUFFLED, num_decks=self.rules.num_decks)
        return self.shoe.draw()

    def _deal_card(self) -> None:
        card = self._draw_card()
        self.hand.add_card(card)
        self.events.emit_new(EventType.CARD_DEALT, card=str(card), hand_value=self.hand.value)
        self.events.emit_new(EventType.DEALER_HITS, hand_value=self.hand.value)

    def _settle(self) -> None:
        self.hand.is_completed = True

        if self.hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.hand.value)
            return

        if self.hand.is_blackjack:
            self.events.emit_new(EventType.DEALER_BLACKJACK)
        self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.hand.value)


def play_dealer_turn(
    shoe: Shoe,
    hand: Hand,
    rules: RuleSet | None = None,
    events: EventEmitter | None = None,
) -> tuple[Shoe, Hand]:
    """Play out a dealer hand; see `DealerPlay.play`."""
    return DealerPlay(shoe, hand, rules, events).play()
