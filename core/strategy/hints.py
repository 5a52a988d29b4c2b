"""Fit a recommended action to what the player may currently do."""

from typing import Iterable

from core.hand import Hand
from core.strategy.actions import Action
from core.strategy.rules import RuleSet


def legal_actions(hand: Hand, rules: RuleSet, num_hands: int = 1) -> list[Action]:
    """
    List the actions allowed for a hand that is still in play.

    Args:
        hand: The player's active hand
        rules: Table rules
        num_hands: How many hands the player currently holds (for split limits)

    Returns:
        Legal actions in declaration order; empty for a finished hand
    """
    if hand.is_completed or hand.is_busted or hand.is_surrendered:
        return []

    actions = [Action.STAND, Action.HIT]

    if hand.can_double and (not hand.is_split_hand or rules.double_after_split):
        actions.append(Action.DOUBLE)

    if rules.surrender_allowed and len(hand.cards) == 2 and not hand.is_split_hand:
        actions.append(Action.SURRENDER)

    if hand.is_pair and num_hands < rules.max_splits:
        actions.append(Action.SPLIT)

    return actions


def filter_hint(action: Action, allowed: Iterable[Action]) -> Action | None:
    """
    Return the recommended action if allowed, otherwise the closest fallback.

    Fallback order is Stand, then Hit, then the first allowed action. A
    Double suggested after the player has already hit becomes a plain
    Stand or Hit this way.
    """
    allowed = list(allowed)
    if action in allowed:
        return action
    if Action.STAND in allowed:
        return Action.STAND
    if Action.HIT in allowed:
        return Action.HIT
    return allowed[0] if allowed else None
