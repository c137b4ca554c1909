"""Deterministic card choice for a player who ran out of time.

When a human misses the turn timer the server plays for them.  This is
the strongest bot line without randomness: no difficulty, no memory,
just the trick on the table and the player's hand.

Priorities, in order:
  1. get rid of the brown 0 when someone else holds the trick
  2. take a trick containing the red 0 with the cheapest winning card
  3. partner winning late in the trick: throw the lowest plain card
  4. positional play for seats 1-4
  5. first middle card, else the first legal card
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jaffre.game.cards import ALL_COLORS, Card, Color
from jaffre.game.rules import can_card_win, legal_plays, trick_winner
from jaffre.game.state import GameState, find_player, partner_of


class Impact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class CardImpact:
    card: Card
    impact: Impact
    is_trump: bool
    can_win: bool
    is_special: bool


def assess_impact(card: Card, state: GameState, position: int) -> CardImpact:
    is_trump = state.trump is not None and card.color == state.trump
    can_win = True if position == 1 else can_card_win(card, state.current_trick, state.trump)

    if card.value >= 6:
        impact = Impact.HIGH
    elif card.value >= (4 if is_trump else 3):
        impact = Impact.MEDIUM
    else:
        impact = Impact.LOW

    if card.is_red_zero():
        impact = Impact.HIGH
    elif card.is_brown_zero():
        impact = Impact.LOW

    return CardImpact(card, impact, is_trump, can_win, card.is_special())


def _lowest(impacts: list[CardImpact]) -> Optional[Card]:
    if not impacts:
        return None
    return min(impacts, key=lambda i: i.card.value).card


def _first(impacts: list[CardImpact], impact: Impact) -> Optional[Card]:
    for i in impacts:
        if i.impact == impact:
            return i.card
    return None


def select_timeout_card(state: GameState, player_id: str) -> Optional[Card]:
    """Card the server plays for *player_id*, or None without a hand."""
    player = find_player(state, player_id)
    if player is None or not player.hand:
        return None

    legal = legal_plays(player.hand, state.current_trick)
    if not legal:
        return None

    trick = state.current_trick
    position = len(trick) + 1
    impacts = [assess_impact(c, state, position) for c in legal]
    partner = partner_of(state, player_id)
    winner = trick_winner(trick, state.trump)
    partner_winning = partner is not None and winner == partner.id
    winning = [i for i in impacts if i.can_win]

    for i in impacts:
        if i.card.is_brown_zero() and position > 1 and winner != player_id:
            return i.card

    if position > 1 and any(tc.card.is_red_zero() for tc in trick) and winning:
        return _lowest(winning)

    if position >= 3 and partner_winning:
        card = _lowest([i for i in impacts if i.impact == Impact.LOW and not i.is_special])
        if card is not None:
            return card

    if position == 1:
        medium = [i for i in impacts if not i.is_trump and i.impact == Impact.MEDIUM]
        if medium:
            counts = Counter(c.color for c in legal)
            longest: Color = max(ALL_COLORS, key=lambda c: counts[c])
            for i in medium:
                if i.card.color == longest:
                    return i.card
            return medium[0].card
    elif position == 2:
        if winning:
            return _lowest(winning)
        card = _first(impacts, Impact.LOW)
        if card is not None:
            return card
    else:
        if partner_winning:
            card = _first(impacts, Impact.LOW)
            if card is not None:
                return card
        elif winning:
            return _lowest(winning)

    card = _first(impacts, Impact.MEDIUM)
    return card if card is not None else legal[0]
