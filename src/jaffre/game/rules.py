"""Trick-taking rules for 4-player Jaffre.

  - Must follow the led color if possible; otherwise any card may be played.
  - No must-beat and no must-trump obligation.
  - Trump beats the led color, the led color beats everything else,
    higher value wins inside the same class.

These functions mirror the authoritative server's rules for decision
making; the server stays the final arbiter of legality and points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from jaffre.game.cards import Card, Color, NUM_PLAYERS, card_points


# ---------------------------------------------------------------------------
#  Trick entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TrickCard:
    """One play inside a trick."""
    player_id: str
    card: Card
    player_name: str = ""


Trick = Sequence[TrickCard]


@dataclass(frozen=True, slots=True)
class TrickResult:
    """Result of a completed 4-card trick."""
    cards: tuple[Card, ...]          # cards in play order
    players: tuple[str, ...]         # player ids in play order
    winner: str                      # player id who won the trick
    points: int                      # trick value credited to the winner


# ---------------------------------------------------------------------------
#  Card power
# ---------------------------------------------------------------------------

TRUMP_POWER_BASE: int = 100
LED_POWER_BASE: int = 50


def card_power(card: Card, trump: Optional[Color], led_color: Color) -> int:
    """Total order used to compare cards inside one trick (higher = stronger)."""
    if trump is not None and card.color == trump:
        return TRUMP_POWER_BASE + card.value
    if card.color == led_color:
        return LED_POWER_BASE + card.value
    return card.value


# ---------------------------------------------------------------------------
#  Legal plays
# ---------------------------------------------------------------------------


def legal_plays(hand: Sequence[Card], trick: Trick) -> List[Card]:
    """Return the cards a player may play given the trick so far.

    Leading: the whole hand.  Following: the cards of the led color when
    the hand holds any, otherwise the whole hand.
    """
    if not trick:
        return list(hand)
    led_color = trick[0].card.color
    same_color = [c for c in hand if c.color == led_color]
    if same_color:
        return same_color
    return list(hand)


# ---------------------------------------------------------------------------
#  Trick resolution
# ---------------------------------------------------------------------------


def _best_entry(trick: Trick, trump: Optional[Color]) -> TrickCard:
    led_color = trick[0].card.color
    best = trick[0]
    best_power = card_power(best.card, trump, led_color)
    for tc in trick[1:]:
        power = card_power(tc.card, trump, led_color)
        if power > best_power:
            best, best_power = tc, power
    return best


def trick_winner(trick: Trick, trump: Optional[Color]) -> Optional[str]:
    """Player id currently holding the trick, or None for an empty trick."""
    if not trick:
        return None
    return _best_entry(trick, trump).player_id


def can_card_win(card: Card, trick: Trick, trump: Optional[Color]) -> bool:
    """True if *card* would take the lead of the trick as it currently stands."""
    if not trick:
        return True
    led_color = trick[0].card.color
    best = _best_entry(trick, trump)
    return card_power(card, trump, led_color) > card_power(best.card, trump, led_color)


def trick_value(trick: Trick) -> int:
    """Desirability of capturing the trick: base 1, red 0 +5, brown 0 −3."""
    return 1 + sum(card_points(tc.card) for tc in trick)


def resolve_trick(trick: Trick, trump: Optional[Color]) -> TrickResult:
    """Determine the winner and value of a trick.

    Raises ``ValueError`` for an empty trick or one longer than 4 plays.
    """
    if not trick:
        raise ValueError("Empty trick")
    if len(trick) > NUM_PLAYERS:
        raise ValueError(f"A trick holds at most {NUM_PLAYERS} cards, got {len(trick)}")
    return TrickResult(
        cards=tuple(tc.card for tc in trick),
        players=tuple(tc.player_id for tc in trick),
        winner=_best_entry(trick, trump).player_id,
        points=trick_value(trick),
    )
