"""Hand strength evaluation for bidding.

Turns an 8-card hand (plus the trump color, when known) into a
``HandAnalysis``: counts, special-card exposure, a fractional trick
estimate, and the bid tier that estimate falls into.

The analysis is ephemeral.  It is recomputed for every bidding
decision and never stored.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from jaffre.game.betting import MAX_BET, MIN_BET
from jaffre.game.cards import ALL_COLORS, Card, Color

from . import constants as K


class HandQuality(str, Enum):
    WEAK = "weak"
    NORMAL = "normal"
    STRONG = "strong"
    EXCEPTIONAL = "exceptional"


@dataclass
class HandAnalysis:
    trump_count: int = 0
    trump_strength: int = 0          # sum of trump values
    high_cards: int = 0

    has_red_zero: bool = False
    has_brown_zero: bool = False

    color_counts: dict[Color, int] = field(default_factory=lambda: {c: 0 for c in ALL_COLORS})
    longest_color: Color = Color.RED
    longest_count: int = 0
    has_four_of_color: bool = False
    suit_control: dict[Color, bool] = field(default_factory=lambda: {c: False for c in ALL_COLORS})

    can_control_red_zero: bool = False
    vulnerable_to_brown_zero: bool = False

    trick_estimate: float = 0.0      # before rounding
    estimated_tricks: int = 0
    recommended_bet: int = MIN_BET
    should_bet_without_trump: bool = False
    hand_quality: HandQuality = HandQuality.NORMAL


# ---------------------------------------------------------------------------
#  Pieces
# ---------------------------------------------------------------------------


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def estimate_tricks(hand: Sequence[Card], trump: Optional[Color], analysis: HandAnalysis) -> float:
    """Fractional trick estimate from trump length, side-color tops and specials."""
    tricks = 0.0

    if trump is not None:
        tricks += min(analysis.trump_count, K.TRUMP_TRICKS_CAP)
        if analysis.trump_strength >= K.STRONG_TRUMP_SUM:
            tricks += K.STRONG_TRUMP_BONUS

    for color in ALL_COLORS:
        if color == trump:
            continue
        values = {c.value for c in hand if c.color == color}
        if 7 in values:
            tricks += K.SEVEN_TRICK
        elif 6 in values:
            tricks += K.SIX_TRICK
        if analysis.color_counts[color] >= K.FOUR_OF_COLOR:
            tricks += K.LONG_SUIT_TRICK

    if analysis.has_red_zero and analysis.can_control_red_zero:
        tricks += K.RED_ZERO_CONTROL_TRICK
    if analysis.has_brown_zero:
        tricks -= K.BROWN_ZERO_PENALTY
    return tricks


def bid_for_tricks(estimated_tricks: int, rng: random.Random) -> tuple[int, HandQuality]:
    """Map a rounded trick estimate to ``(recommended_bet, quality)``.

    Each tier picks between its two amounts with a fixed upgrade chance.
    """
    if estimated_tricks >= K.TIER_EXCEPTIONAL_MIN:
        bet = 11 + (1 if rng.random() < K.EXCEPTIONAL_UPGRADE_PROB else 0)
        quality = HandQuality.EXCEPTIONAL
    elif estimated_tricks >= K.TIER_STRONG_MIN:
        bet = 9 + (1 if rng.random() < K.STRONG_UPGRADE_PROB else 0)
        quality = HandQuality.STRONG
    elif estimated_tricks >= K.TIER_NORMAL_MIN:
        bet = 7 + (1 if rng.random() < K.NORMAL_UPGRADE_PROB else 0)
        quality = HandQuality.NORMAL
    else:
        bet = MIN_BET
        quality = HandQuality.WEAK
    return max(MIN_BET, min(MAX_BET, bet)), quality


# ---------------------------------------------------------------------------
#  Analysis
# ---------------------------------------------------------------------------


def analyze_hand(
    hand: Sequence[Card],
    trump: Optional[Color],
    rng: Optional[random.Random] = None,
) -> HandAnalysis:
    """Evaluate *hand* for bidding.

    Parameters
    ----------
    hand : the player's current cards
    trump : trump color, or None when not yet declared
    rng : random source for the tier coin flips (defaults to a fresh ``Random``)
    """
    rng = rng or random.Random()
    a = HandAnalysis()

    for card in hand:
        a.color_counts[card.color] += 1
        if trump is not None and card.color == trump:
            a.trump_count += 1
            a.trump_strength += card.value
        if card.value >= K.HIGH_CARD_MIN:
            a.high_cards += 1
        if card.is_red_zero():
            a.has_red_zero = True
        if card.is_brown_zero():
            a.has_brown_zero = True

    for color in ALL_COLORS:
        count = a.color_counts[color]
        if count > a.longest_count:
            a.longest_color, a.longest_count = color, count
        if count >= K.FOUR_OF_COLOR:
            a.has_four_of_color = True
        has_top = any(c.color == color and c.value >= K.SUIT_CONTROL_CARD_MIN for c in hand)
        a.suit_control[color] = has_top and count >= K.SUIT_CONTROL_LENGTH_MIN

    if a.has_red_zero:
        red_high = sum(1 for c in hand if c.color == Color.RED and c.value >= K.RED_ZERO_PROTECT_HIGH_MIN)
        a.can_control_red_zero = red_high >= 1 or a.trump_count >= K.RED_ZERO_PROTECT_TRUMPS
    else:
        has_red_seven = Card(Color.RED, 7) in hand
        has_high_trump = trump is not None and any(
            c.color == trump and c.value >= K.RED_ZERO_CAPTURE_TRUMP_MIN for c in hand
        )
        a.can_control_red_zero = has_red_seven or has_high_trump

    if a.has_brown_zero:
        a.vulnerable_to_brown_zero = True
    else:
        browns = [c for c in hand if c.color == Color.BROWN]
        a.vulnerable_to_brown_zero = bool(browns) and all(c.value <= K.BROWN_LOW_MAX for c in browns)

    a.trick_estimate = estimate_tricks(hand, trump, a)
    a.estimated_tricks = _round_half_up(a.trick_estimate)
    a.recommended_bet, a.hand_quality = bid_for_tricks(a.estimated_tricks, rng)

    if a.has_four_of_color and a.longest_count >= K.FOUR_OF_COLOR:
        a.should_bet_without_trump = (
            a.suit_control[a.longest_color]
            and a.high_cards >= K.WITHOUT_TRUMP_HIGH_CARDS
            and not a.has_brown_zero
        )
    return a
