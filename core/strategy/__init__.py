"""Rules and player actions."""

from core.strategy.rules import RuleSet
from core.strategy.actions import Action

__all__ = [
    "RuleSet",
    "Action",
]
