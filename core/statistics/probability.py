"""Probability calculations for blackjack."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from core.hand import add_card_value
from core.statistics.cache import EVCache, OutcomeMap
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)

# Card values drawn from an infinite deck; 10 covers 10/J/Q/K and 11 is the Ace.
CARD_VALUES: tuple[int, ...] = (2, 3, 4, 5, 6, 7, 8, 9, 10, 11)


def card_probability(value: int) -> float:
    """
    Get the probability of drawing a card of the given value.

    Infinite deck assumption: every rank is 1/13, and the four ten-value
    ranks add up to 4/13.

    Args:
        value: Card value (2-11, where 11 = Ace)

    Returns:
        Probability (0-1), 0.0 for values that no card has
    """
    if value == 10:
        return 4 / 13
    if 2 <= value <= 11:
        return 1 / 13
    return 0.0


class DealerOutcome(Enum):
    """Possible dealer final outcomes."""

    SEVENTEEN = 17
    EIGHTEEN = 18
    NINETEEN = 19
    TWENTY = 20
    TWENTY_ONE = 21
    BUST = "bust"
    BLACKJACK = "blackjack"

    @classmethod
    def for_total(cls, total: int) -> "DealerOutcome":
        """Outcome bucket of a standing dealer total (17-21)."""
        return cls(total)


STANDING_OUTCOMES: tuple[DealerOutcome, ...] = (
    DealerOutcome.SEVENTEEN,
    DealerOutcome.EIGHTEEN,
    DealerOutcome.NINETEEN,
    DealerOutcome.TWENTY,
    DealerOutcome.TWENTY_ONE,
)


@dataclass(frozen=True)
class DealerDistribution:
    """Dealer final outcome probabilities from one starting state."""

    bust: float
    seventeen: float
    eighteen: float
    nineteen: float
    twenty: float
    twenty_one: float
    blackjack: float = 0.0

    def __post_init__(self) -> None:
        """Validate probabilities sum to 1."""
        if abs(self.total_probability - 1.0) > 1e-6:
            raise ValueError(f"Probabilities must sum to 1.0, got {self.total_probability}")

    @property
    def total_probability(self) -> float:
        return (
            self.bust
            + self.seventeen
            + self.eighteen
            + self.nineteen
            + self.twenty
            + self.twenty_one
            + self.blackjack
        )

    @classmethod
    def from_outcomes(cls, outcomes: Mapping[DealerOutcome, float]) -> "DealerDistribution":
        """Build from an outcome mapping; missing outcomes count as 0."""
        return cls(
            bust=outcomes.get(DealerOutcome.BUST, 0.0),
            seventeen=outcomes.get(DealerOutcome.SEVENTEEN, 0.0),
            eighteen=outcomes.get(DealerOutcome.EIGHTEEN, 0.0),
            nineteen=outcomes.get(DealerOutcome.NINETEEN, 0.0),
            twenty=outcomes.get(DealerOutcome.TWENTY, 0.0),
            twenty_one=outcomes.get(DealerOutcome.TWENTY_ONE, 0.0),
            blackjack=outcomes.get(DealerOutcome.BLACKJACK, 0.0),
        )

    def to_dict(self) -> dict[DealerOutcome, float]:
        """Convert to outcome dictionary."""
        return {
            DealerOutcome.SEVENTEEN: self.seventeen,
            DealerOutcome.EIGHTEEN: self.eighteen,
            DealerOutcome.NINETEEN: self.nineteen,
            DealerOutcome.TWENTY: self.twenty,
            DealerOutcome.TWENTY_ONE: self.twenty_one,
            DealerOutcome.BUST: self.bust,
            DealerOutcome.BLACKJACK: self.blackjack,
        }

    def probability(self, outcome: DealerOutcome) -> float:
        return self.to_dict()[outcome]


def dealer_must_hit(total: int, usable_aces: int, rules: RuleSet) -> bool:
    """Dealer hits below 17, and on soft 17 only under H17."""
    if total < 17:
        return True
    if total == 17:
        return usable_aces > 0 and rules.dealer_hits_soft_17
    return False


class ProbabilityEngine:
    """
    Dealer outcome probabilities computed recursively.

    Probabilities are calculated for an infinite deck assumption
    which is a good approximation for 6+ deck games.
    """

    def __init__(self, rules: RuleSet | None = None, cache: EVCache | None = None) -> None:
        """
        Initialize the probability engine.

        Args:
            rules: Rule set to use. Defaults to standard rules.
            cache: Memo tables to fill. A private cache is created if None.
        """
        self.rules = rules or RuleSet()
        self.cache = cache if cache is not None else EVCache()

    def dealer_probabilities(self, upcard: int) -> DealerDistribution:
        """
        Get dealer outcome probabilities for a given upcard.

        Args:
            upcard: Dealer's upcard value (2-11, 11=Ace)

        Returns:
            DealerDistribution for the upcard
        """
        if upcard < 2 or upcard > 11:
            raise ValueError(f"Invalid upcard: {upcard}")
        return self.dealer_distribution(upcard, 1 if upcard == 11 else 0)

    def dealer_distribution(self, total: int, usable_aces: int) -> DealerDistribution:
        """
        Get dealer outcome probabilities from an arbitrary dealer state.

        A starting state that already stands on 21 is reported as blackjack;
        a 21 reached by drawing never is.
        """
        outcomes = self._outcomes(total, usable_aces, initial=True)
        distribution = DealerDistribution.from_outcomes(outcomes)
        logger.debug(
            "Dealer distribution from %d (usable aces %d, %s): bust=%.4f",
            total,
            usable_aces,
            self.rules.label,
            distribution.bust,
        )
        return distribution

    def dealer_bust_probability(self, upcard: int) -> float:
        """Get the probability that the dealer busts given an upcard."""
        return self.dealer_probabilities(upcard).bust

    def _outcomes(self, total: int, usable_aces: int, initial: bool = False) -> OutcomeMap:
        """Recursive outcome mapping; only non-initial states are memoized."""
        key = (total, usable_aces, self.rules.dealer_hits_soft_17)
        if not initial and key in self.cache.dealer:
            return self.cache.dealer[key]

        if total > 21:
            return {DealerOutcome.BUST: 1.0}

        if not dealer_must_hit(total, usable_aces, self.rules):
            if total == 21 and initial:
                return {DealerOutcome.BLACKJACK: 1.0}
            return {DealerOutcome.for_total(total): 1.0}

        outcomes: OutcomeMap = {outcome: 0.0 for outcome in DealerOutcome}
        for value in CARD_VALUES:
            p = card_probability(value)
            next_total, next_aces = add_card_value(total, usable_aces, value)
            for outcome, sub_p in self._outcomes(next_total, next_aces).items():
                outcomes[outcome] += p * sub_p

        if not initial:
            self.cache.dealer[key] = outcomes
        return outcomes
