"""Dealer outcome probabilities."""

from core.statistics.cache import EVCache
from core.statistics.probability import (
    DealerDistribution,
    DealerOutcome,
    ProbabilityEngine,
    card_probability,
)

__all__ = [
    "EVCache",
    "DealerDistribution",
    "DealerOutcome",
    "ProbabilityEngine",
    "card_probability",
]
