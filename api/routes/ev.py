"""EV and dealer probability endpoints."""

from fastapi import APIRouter

from api.routes.common import parse_rank, rules_from_request
from api.schemas import (
    ActionEV,
    DealerDistributionRequest,
    DealerDistributionResponse,
    EVRequest,
    EVResponse,
)
from core.statistics.probability import ProbabilityEngine
from core.strategy.actions import Action
from core.strategy.ev import EVCalculator
from core.strategy.hints import filter_hint

router = APIRouter()


@router.post("/actions")
async def action_evs(request: EVRequest) -> EVResponse:
    """Rank every action by EV and recommend the best one."""
    rules = rules_from_request(request.rules)
    pair_rank = parse_rank(request.pair_rank) if request.pair_rank else None

    # One calculator per request: its cache must not be shared
    calculator = EVCalculator(rules)
    best, results = calculator.best_action(
        player_total=request.player_total,
        usable_aces=request.usable_aces,
        is_pair=request.is_pair,
        pair_rank=pair_rank,
        dealer_upcard=request.dealer_upcard,
        true_count=request.true_count,
    )

    hint = None
    if request.legal_actions is not None:
        allowed = [Action(name) for name in request.legal_actions]
        hint_action = filter_hint(best, allowed)
        hint = hint_action.value if hint_action else None

    return EVResponse(
        best_action=best.value,
        hint=hint,
        actions=[ActionEV(action=r.action.value, ev=r.ev) for r in results],
        rules=rules.label,
    )


@router.post("/dealer")
async def dealer_distribution(request: DealerDistributionRequest) -> DealerDistributionResponse:
    """Dealer final outcome probabilities for an upcard."""
    engine = ProbabilityEngine(rules_from_request(request.rules))
    dist = engine.dealer_probabilities(request.dealer_upcard)
    return DealerDistributionResponse(
        dealer_upcard=request.dealer_upcard,
        bust=dist.bust,
        seventeen=dist.seventeen,
        eighteen=dist.eighteen,
        nineteen=dist.nineteen,
        twenty=dist.twenty,
        twenty_one=dist.twenty_one,
        blackjack=dist.blackjack,
    )
