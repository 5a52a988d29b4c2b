"""Conversions shared by the route modules."""

from fastapi import HTTPException

from api.schemas import CardResponse, RulesRequest
from config import config
from core.cards import Card, Rank
from core.strategy.rules import RuleSet


def rules_from_request(rules: RulesRequest | None) -> RuleSet:
    """Rule set for a request, falling back to the configured defaults."""
    if rules is None:
        return config.game.to_rules()
    return RuleSet.from_dict(rules.model_dump())


def parse_card(s: str) -> Card:
    """Parse a card string, answering 400 on malformed input."""
    try:
        return Card.from_string(s)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def parse_rank(s: str) -> Rank:
    """Parse a rank symbol, answering 400 on malformed input."""
    try:
        return Rank.from_string(s)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def card_response(card: Card) -> CardResponse:
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)
