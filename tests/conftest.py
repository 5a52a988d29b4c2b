"""Pytest fixtures for blackjack EV engine tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from core.cards import Card, Shoe, Rank, Suit
from core.hand import Hand
from core.statistics import EVCache, ProbabilityEngine
from core.strategy import RuleSet
from core.strategy.ev import EVCalculator


def cards(*card_strs: str) -> list[Card]:
    """Build a card list from strings such as 'AS', '10H'."""
    return [Card.from_string(s) for s in card_strs]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    s = Shoe(num_decks=6, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(cards=cards("AS", "KH"))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(cards=cards("AS", "6H"))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(cards=cards("10S", "6H"))


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand(cards=cards("8S", "8H"))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(cards=cards("10S", "6H", "KC"))


@pytest.fixture
def rules():
    """Default ruleset: 6 decks, H17, DAS, late surrender."""
    return RuleSet()


@pytest.fixture
def s17_rules():
    """Otherwise default rules with the dealer standing on soft 17."""
    return RuleSet(dealer_hits_soft_17=False)


@pytest.fixture
def cache():
    """An empty EV cache."""
    return EVCache()


@pytest.fixture
def probability_engine(rules, cache):
    """Dealer probability engine for default rules."""
    return ProbabilityEngine(rules, cache)


@pytest.fixture
def calculator(rules):
    """EV calculator for default rules."""
    return EVCalculator(rules)


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def card_list_strategy(draw, min_cards=1, max_cards=8):
    """Generate a random list of face-up cards."""
    return draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
