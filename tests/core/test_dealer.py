"""Tests for forced dealer play."""

from random import Random

import pytest
from transitions import MachineError

from core.cards import Card, Shoe
from core.game import DealerPlay, DealerState, EventType, play_dealer_turn
from core.game.events import EventEmitter
from core.hand import Hand
from core.strategy.rules import RuleSet
from tests.conftest import cards


def _shoe(*next_cards: str) -> Shoe:
    """Shoe that deals `next_cards` in the given order."""
    return Shoe.from_cards(reversed(cards(*next_cards)), num_decks=1, rng=Random(3))


def _dealer(up: str, hole: str) -> Hand:
    return Hand(cards=[Card.from_string(up), Card.from_string(hole).face_down()])


class TestDealerPlay:
    """Tests for the DealerPlay state machine."""

    def test_reveals_and_stands_on_hard_17(self, rules):
        """Test a hard 17 stands without drawing."""
        shoe = _shoe("5C")
        shoe, hand = play_dealer_turn(shoe, _dealer("10S", "7H"), rules)
        assert hand.value == 17
        assert len(hand) == 2
        assert not any(c.hidden for c in hand.cards)
        assert hand.is_completed
        assert shoe.cards_remaining == 1

    def test_hits_until_17(self, rules):
        """Test drawing continues below 17."""
        shoe, hand = play_dealer_turn(_shoe("2C", "3D", "9H"), _dealer("6S", "5H"), rules)
        # 11 -> 13 -> 16 -> 25
        assert hand.value == 25
        assert hand.is_busted
        assert shoe.is_empty

    def test_h17_hits_soft_17(self):
        """Test H17 draws on A-6."""
        _, hand = play_dealer_turn(_shoe("2C"), _dealer("AS", "6H"), RuleSet(dealer_hits_soft_17=True))
        assert hand.value == 19
        assert len(hand) == 3

    def test_s17_stands_on_soft_17(self):
        """Test S17 stands on A-6."""
        shoe, hand = play_dealer_turn(
            _shoe("2C"), _dealer("AS", "6H"), RuleSet(dealer_hits_soft_17=False)
        )
        assert hand.value == 17
        assert len(hand) == 2
        assert shoe.cards_remaining == 1

    def test_soft_hand_turning_hard(self, rules):
        """Test A-5 + 10 becomes hard 16 and keeps drawing."""
        _, hand = play_dealer_turn(_shoe("KC", "4D"), _dealer("AS", "5H"), rules)
        # soft 16 -> hard 16 -> 20
        assert hand.value == 20
        assert len(hand) == 4

    def test_input_hand_not_modified(self, rules):
        """Test the caller's hand keeps its hidden card and length."""
        dealer = _dealer("6S", "5H")
        play_dealer_turn(_shoe("10C"), dealer, rules)
        assert len(dealer) == 2
        assert dealer.cards[1].hidden
        assert not dealer.is_completed

    def test_input_shoe_not_consumed(self, rules):
        """Test draws come from a copy; the returned shoe holds what is left."""
        shoe = _shoe("2C", "3D", "9H", "KC")
        remaining, _ = play_dealer_turn(shoe, _dealer("6S", "5H"), rules)

        assert shoe.cards_remaining == 4
        assert remaining is not shoe
        assert list(remaining) == cards("KC")

    def test_exhausted_shoe_reshuffles(self):
        """Test an empty shoe is replaced with a fresh rule-sized one."""
        rules = RuleSet(num_decks=2)
        events = EventEmitter()
        shoe, hand = play_dealer_turn(Shoe.from_cards([], rng=Random(1)), _dealer("2S", "3H"), rules, events)

        assert hand.value >= 17
        assert shoe.total_cards == 104
        assert shoe.cards_remaining == 104 - (len(hand) - 2)
        shuffles = [e for e in events.history if e.event_type == EventType.SHOE_SHUFFLED]
        assert len(shuffles) == 1

    def test_deterministic_for_shoe_order(self, rules):
        """Test the same shoe order gives the same final hand."""
        first = Shoe(num_decks=6, rng=Random(11))
        second = Shoe(num_decks=6, rng=Random(11))
        first.shuffle()
        second.shuffle()

        _, hand1 = play_dealer_turn(first, _dealer("4S", "2H"), rules)
        _, hand2 = play_dealer_turn(second, _dealer("4S", "2H"), rules)
        assert hand1.cards == hand2.cards

    def test_state_machine_ends_done(self, rules):
        """Test the machine finishes in DONE and refuses further hits."""
        play = DealerPlay(_shoe("10C"), _dealer("6S", "5H"), rules)
        assert play.state == DealerState.DRAWING
        play.play()
        assert play.state == DealerState.DONE
        with pytest.raises(MachineError):
            play.hit()

    @pytest.mark.parametrize("seed", range(20))
    def test_final_hand_obeys_standing_rule(self, rules, seed):
        """Test every finished dealer hand is 17+ or bust."""
        shoe = Shoe(num_decks=6, rng=Random(seed))
        shoe.shuffle()
        up, hole = shoe.draw(), shoe.draw().face_down()
        _, hand = play_dealer_turn(shoe, Hand(cards=[up, hole]), rules)
        assert hand.value >= 17
        if hand.value == 17:
            assert not (hand.is_soft and rules.dealer_hits_soft_17)


class TestDealerEvents:
    """Tests for events emitted during dealer play."""

    def test_event_sequence(self, rules):
        """Test reveal, hit and bust events in order."""
        events = EventEmitter()
        play_dealer_turn(_shoe("10C"), _dealer("6S", "9H"), rules, events)

        types = [e.event_type for e in events.history]
        assert types == [
            EventType.DEALER_REVEALS,
            EventType.CARD_DEALT,
            EventType.DEALER_HITS,
            EventType.DEALER_BUSTS,
        ]
        assert events.history[0].data["hand_value"] == 15

    def test_dealer_blackjack_event(self, rules):
        events = EventEmitter()
        play_dealer_turn(_shoe(), _dealer("AS", "KH"), rules, events)
        types = [e.event_type for e in events.history]
        assert EventType.DEALER_BLACKJACK in types
        assert types[-1] == EventType.DEALER_STANDS

    def test_subscribers_receive_events(self, rules):
        """Test type-specific and catch-all handlers."""
        events = EventEmitter()
        hits, everything = [], []
        events.subscribe(hits.append, EventType.DEALER_HITS)
        events.subscribe(everything.append)

        play_dealer_turn(_shoe("2C", "10D"), _dealer("6S", "5H"), rules, events)
        assert len(hits) == 2
        assert len(everything) == len(events.history)

    def test_no_reveal_event_without_hole_card(self, rules):
        events = EventEmitter()
        play_dealer_turn(_shoe("7D"), Hand(cards=cards("10S")), rules, events)
        assert events.history[0].event_type == EventType.CARD_DEALT

