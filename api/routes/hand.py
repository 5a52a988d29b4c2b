"""Hand evaluation and dealer play endpoints."""

from random import Random

from fastapi import APIRouter, HTTPException

from api.routes.common import card_response, parse_card, rules_from_request
from api.schemas import (
    DealerEventResponse,
    DealerPlayRequest,
    DealerPlayResponse,
    HandEvaluateRequest,
    HandEvaluateResponse,
)
from core.cards import Shoe
from core.game import EventEmitter, play_dealer_turn
from core.hand import Hand, classify, evaluate_true, evaluate_visible

router = APIRouter()


@router.post("/evaluate")
async def evaluate_hand(request: HandEvaluateRequest) -> HandEvaluateResponse:
    """Evaluate a hand, with face-down cards excluded from the visible total."""
    if any(i < 0 or i >= len(request.cards) for i in request.hidden):
        raise HTTPException(status_code=400, detail="Hidden index out of range")

    cards = [parse_card(s) for s in request.cards]
    cards = [c.face_down() if i in request.hidden else c for i, c in enumerate(cards)]
    hand = Hand(cards=cards)
    visible = evaluate_visible(cards)

    return HandEvaluateResponse(
        visible_total=visible.total,
        true_total=evaluate_true(cards).total,
        usable_aces=visible.usable_aces,
        is_soft=visible.is_soft,
        is_busted=hand.is_busted,
        is_blackjack=hand.is_blackjack,
        hand_type=classify(cards).name,
    )


@router.post("/dealer-play")
async def dealer_play(request: DealerPlayRequest) -> DealerPlayResponse:
    """Play out a dealer hand from a given or freshly shuffled shoe."""
    rules = rules_from_request(request.rules)
    rng = Random(request.seed)

    if request.shoe is not None:
        # Shoe draws from the end, requests list the next card first
        cards = [parse_card(s) for s in reversed(request.shoe)]
        shoe = Shoe.from_cards(cards, num_decks=rules.num_decks, rng=rng)
    else:
        shoe = Shoe(num_decks=rules.num_decks, rng=rng)
        shoe.shuffle()

    dealer_cards = [parse_card(s) for s in request.dealer_cards]
    dealer_cards[1:] = [c.face_down() for c in dealer_cards[1:2]] + dealer_cards[2:]

    events = EventEmitter()
    shoe, hand = play_dealer_turn(shoe, Hand(cards=dealer_cards), rules, events)

    return DealerPlayResponse(
        cards=[card_response(c) for c in hand.cards],
        total=hand.value,
        is_busted=hand.is_busted,
        is_blackjack=hand.is_blackjack,
        cards_remaining=shoe.cards_remaining,
        events=[
            DealerEventResponse(event=e.event_type.name, data=e.data)
            for e in events.history
        ],
    )
