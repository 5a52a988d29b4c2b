"""
Expected value of every player action under an infinite-deck model.

The player engine works on the abstract (total, usable_aces) state and a
fixed dealer distribution. All memoization lives in an `EVCache` owned by
the caller, which is cleared at the start of every top-level query.
"""

import logging
from dataclasses import dataclass

from core.cards import Rank
from core.hand import add_card_value
from core.statistics.cache import EVCache
from core.statistics.probability import (
    CARD_VALUES,
    STANDING_OUTCOMES,
    DealerDistribution,
    DealerOutcome,
    ProbabilityEngine,
    card_probability,
)
from core.strategy.actions import Action
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)

SURRENDER_EV = -0.5


@dataclass(frozen=True)
class EVResult:
    """Expected value of one action, per unit staked."""

    action: Action
    ev: float

    def __str__(self) -> str:
        return f"{self.action}: {self.ev:+.4f}"


def stand_ev(total: int, dealer: DealerDistribution) -> float:
    """
    EV of standing on `total` against a dealer distribution.

    Dealer bust wins, each standing dealer total wins, pushes or loses by
    comparison. The blackjack bucket does not contribute.
    """
    if total > 21:
        return -1.0

    outcomes = dealer.to_dict()
    ev = outcomes[DealerOutcome.BUST]
    for outcome in STANDING_OUTCOMES:
        dealer_total = outcome.value
        if total > dealer_total:
            ev += outcomes[outcome]
        elif total < dealer_total:
            ev -= outcomes[outcome]
    return ev


class EVCalculator:
    """
    Action EV aggregator for one rule set.

    Example:
        >>> calc = EVCalculator(RuleSet())
        >>> calc.best_action(16, 0, False, None, 6)[0]
        <Action.STAND: 'stand'>
    """

    def __init__(self, rules: RuleSet | None = None, cache: EVCache | None = None) -> None:
        self.rules = rules or RuleSet()
        self.cache = cache if cache is not None else EVCache()
        self._dealer_engine = ProbabilityEngine(self.rules, self.cache)

    def max_ev(self, total: int, usable_aces: int, dealer: DealerDistribution) -> float:
        """Best achievable EV from a player state: stand now or keep hitting."""
        if total > 21:
            return -1.0

        key = (total, usable_aces)
        cached = self.cache.player.get(key)
        if cached is not None:
            return cached

        best = max(stand_ev(total, dealer), self.hit_ev(total, usable_aces, dealer))
        self.cache.player[key] = best
        return best

    def hit_ev(self, total: int, usable_aces: int, dealer: DealerDistribution) -> float:
        """EV of taking one card and then playing on optimally."""
        ev = 0.0
        for value in CARD_VALUES:
            next_total, next_aces = add_card_value(total, usable_aces, value)
            ev += card_probability(value) * self.max_ev(next_total, next_aces, dealer)
        return ev

    def double_ev(self, total: int, usable_aces: int, dealer: DealerDistribution) -> float:
        """EV of doubling: one forced card, then stand on twice the stake."""
        ev = 0.0
        for value in CARD_VALUES:
            next_total, _ = add_card_value(total, usable_aces, value)
            ev += card_probability(value) * stand_ev(next_total, dealer)
        return 2 * ev

    def split_ev(self, pair_rank: Rank, dealer: DealerDistribution) -> float:
        """
        EV of splitting a pair into two independent hands.

        Split aces without double-after-split receive exactly one card.
        """
        card_value = pair_rank.blackjack_value
        one_card_only = pair_rank.is_ace and not self.rules.double_after_split

        hand_ev = 0.0
        for value in CARD_VALUES:
            next_total, next_aces = add_card_value(card_value, 1 if card_value == 11 else 0, value)
            if one_card_only:
                continuation = stand_ev(next_total, dealer)
            else:
                continuation = self.max_ev(next_total, next_aces, dealer)
            hand_ev += card_probability(value) * continuation
        return 2 * hand_ev

    def calculate_all_action_evs(
        self,
        player_total: int,
        usable_aces: int,
        is_pair: bool,
        pair_rank: Rank | None,
        dealer_upcard: int,
    ) -> list[EVResult]:
        """
        Calculate EV for every available action, best first.

        Args:
            player_total: Player's best hand total
            usable_aces: Number of aces counted as 11 in that total
            is_pair: Whether the hand is a splittable pair
            pair_rank: Rank of the pair cards (required for split)
            dealer_upcard: Dealer's upcard value (2-11, Ace=11)

        Returns:
            EV results sorted descending; equal EVs keep the order
            Stand, Hit, Double, Surrender, Split
        """
        self.cache.clear()
        dealer = self._dealer_engine.dealer_probabilities(dealer_upcard)

        results = [
            EVResult(Action.STAND, stand_ev(player_total, dealer)),
            EVResult(Action.HIT, self.hit_ev(player_total, usable_aces, dealer)),
            EVResult(Action.DOUBLE, self.double_ev(player_total, usable_aces, dealer)),
        ]
        if self.rules.surrender_allowed:
            results.append(EVResult(Action.SURRENDER, SURRENDER_EV))
        if is_pair and pair_rank is not None:
            results.append(EVResult(Action.SPLIT, self.split_ev(pair_rank, dealer)))

        ranked = sorted(results, key=lambda result: result.ev, reverse=True)
        logger.debug(
            "EVs for %d (usable aces %d) vs %d under %s: %s",
            player_total,
            usable_aces,
            dealer_upcard,
            self.rules.label,
            ", ".join(str(result) for result in ranked),
        )
        return ranked

    def best_action(
        self,
        player_total: int,
        usable_aces: int,
        is_pair: bool,
        pair_rank: Rank | None,
        dealer_upcard: int,
        true_count: float = 0.0,
    ) -> tuple[Action, list[EVResult]]:
        """
        Get the highest-EV action together with the full ranking.

        `true_count` is accepted for future count-based adjustments and
        currently has no effect.
        """
        all_actions = self.calculate_all_action_evs(
            player_total, usable_aces, is_pair, pair_rank, dealer_upcard
        )
        best = all_actions[0].action if all_actions else Action.STAND
        return best, all_actions


def calculate_all_action_evs(
    player_total: int,
    usable_aces: int,
    is_pair: bool,
    pair_rank: Rank | None,
    dealer_upcard: int,
    rules: RuleSet,
    cache: EVCache | None = None,
) -> list[EVResult]:
    """Rank every action with a fresh calculator (or the given cache)."""
    return EVCalculator(rules, cache).calculate_all_action_evs(
        player_total, usable_aces, is_pair, pair_rank, dealer_upcard
    )
