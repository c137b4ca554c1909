"""Centralized weights and defaults for the Jaffre bot.

Every tunable number used by hand analysis, bidding and card play lives
here.  The values were tuned by hand against human play; change them
here rather than inline.

Usage::

    from jaffre.bot.constants import (
        LEAD_SEVEN,
        SKIP_THRESHOLDS,
        TIER_STRONG_MIN,
    )
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
#  Hand analysis
# ---------------------------------------------------------------------------

HIGH_CARD_MIN: int = 5
"""A card of this value or more counts as a high card."""

SUIT_CONTROL_CARD_MIN: int = 6
"""Suit control needs a card of at least this value in the color ..."""

SUIT_CONTROL_LENGTH_MIN: int = 2
"""... together with at least this many cards of the color."""

FOUR_OF_COLOR: int = 4
"""Color length that flags a long suit (and earns the long-suit bonus)."""

RED_ZERO_PROTECT_HIGH_MIN: int = 5
"""Red cards at or above this value protect a held red 0."""

RED_ZERO_PROTECT_TRUMPS: int = 2
"""Alternatively, this many trumps protect a held red 0."""

RED_ZERO_CAPTURE_TRUMP_MIN: int = 5
"""A trump at or above this value can capture an opponent's red 0."""

BROWN_LOW_MAX: int = 3
"""Brown cards at or below this value cannot absorb a dumped brown 0."""

# ---------------------------------------------------------------------------
#  Trick estimate
# ---------------------------------------------------------------------------

TRUMP_TRICKS_CAP: int = 3
"""At most this many trumps are counted as sure tricks."""

STRONG_TRUMP_SUM: int = 15
"""Trump value sum that earns an extra trick."""

STRONG_TRUMP_BONUS: float = 1.0

SEVEN_TRICK: float = 0.8
"""Estimated tricks for holding the 7 of a side color."""

SIX_TRICK: float = 0.5
"""Estimated tricks for the 6 of a side color when its 7 is not held."""

LONG_SUIT_TRICK: float = 0.5
"""Bonus for four or more cards in a side color."""

RED_ZERO_CONTROL_TRICK: float = 0.5
"""Bonus for holding a red 0 that can be protected."""

BROWN_ZERO_PENALTY: float = 0.3
"""Penalty for holding the brown 0."""

# ---------------------------------------------------------------------------
#  Bid tiers
# ---------------------------------------------------------------------------

TIER_EXCEPTIONAL_MIN: int = 11
TIER_STRONG_MIN: int = 9
TIER_NORMAL_MIN: int = 7

EXCEPTIONAL_UPGRADE_PROB: float = 0.3
"""Chance an exceptional hand bets 12 instead of 11."""

STRONG_UPGRADE_PROB: float = 0.4
"""Chance a strong hand bets 10 instead of 9."""

NORMAL_UPGRADE_PROB: float = 0.6
"""Chance a normal hand bets 8 instead of 7."""

WITHOUT_TRUMP_HIGH_CARDS: int = 4
"""High cards needed before a without-trump bet is considered."""

# ---------------------------------------------------------------------------
#  Bidding behaviour per difficulty
# ---------------------------------------------------------------------------

SKIP_THRESHOLDS: dict[str, dict[str, float]] = {
    "easy":   {"weak": 0.3, "normal": 0.1},
    "medium": {"weak": 0.4, "normal": 0.2},
    "hard":   {"weak": 0.6, "normal": 0.3},
}
"""Opening skip chance keyed by difficulty and hand quality.

Weak hands skip more often, and stronger bots are more selective about
opening.  Strong and exceptional hands use the ``normal`` column.
"""

MAX_OVERBID: int = 2
"""A non-dealer skips when the minimum raise exceeds its own bid by more than this."""

EASY_WITHOUT_TRUMP_PROB: float = 0.05
"""Easy bots go without trump at this rate, whatever the hand says."""

MEDIUM_WITHOUT_TRUMP_FOLLOW: float = 0.7
"""Medium bots follow a without-trump recommendation at this rate."""

# ---------------------------------------------------------------------------
#  Card selection per difficulty
# ---------------------------------------------------------------------------

EASY_OPTIMAL_RATE: float = 0.3
"""Easy bots take the top card this often, otherwise any legal card."""

MEDIUM_OPTIMAL_RATE: float = 0.7
"""Medium bots take the top card this often, otherwise the runner-up."""

# ---------------------------------------------------------------------------
#  Play priorities (roughly 0..100, higher is better)
# ---------------------------------------------------------------------------

BASE_PRIORITY: int = 50

BROWN_ZERO_DUMP: int = 90
"""Brown 0 onto a trick an opponent is winning."""

BROWN_ZERO_TO_PARTNER: int = 0
"""Brown 0 onto the partner's trick.  Hard floor, never tuned upwards."""

BROWN_ZERO_LEAD: int = 10

RED_ZERO_LEAD: int = 20
RED_ZERO_SAFE: int = 85
"""Red 0 onto a trick the own team is already winning."""

RED_ZERO_EXPOSED: int = 15
"""Red 0 onto a trick an opponent is winning."""

LEAD_SIX_SEVEN_OUT: int = 30
"""Leading a 6 while the 7 of its color is still unseen."""

LEAD_SIX_SEVEN_GONE: int = 60
LEAD_SEVEN: int = 65

LEAD_HIGH_BROWN: int = 70
"""Leading brown 5+ while the brown 0 is still out, to flush it."""

LEAD_HIGH_BROWN_MIN: int = 5

LEAD_TRUMP_STRIP: int = 55
"""Leading trump while holding enough trumps to draw the opponents'."""

LEAD_TRUMP_STRIP_COUNT: int = 3
LEAD_TRUMP_CONSERVE: int = 35

LEAD_MIDDLE: int = 50
LEAD_MIDDLE_RANGE: tuple[int, int] = (3, 5)
LEAD_LOW: int = 40

SECOND_WIN_BASE: int = 50
"""Second seat: priority of a winning card before trick value is added."""

SECOND_DUCK_BASE: int = 40
"""Second seat: losing cards score this minus their value."""

THIRD_PARTNER_BASE: int = 30
THIRD_TAKE: int = 70
THIRD_DUCK_BASE: int = 35

FOURTH_PARTNER_VALUABLE: int = 20
"""Last seat, partner winning a trick worth more than ``VALUABLE_TRICK``."""

VALUABLE_TRICK: int = 5
FOURTH_PARTNER_BASE: int = 30
FOURTH_TAKE_BASE: int = 80
FOURTH_DUCK_BASE: int = 25

# ---------------------------------------------------------------------------
#  Action delay (milliseconds)
# ---------------------------------------------------------------------------

DELAY_BASE_MS: dict[str, int] = {"easy": 400, "medium": 700, "hard": 1000}
DELAY_VARIANCE_MS: dict[str, int] = {"easy": 600, "medium": 900, "hard": 1200}
"""Delays are drawn uniformly from ``[base, base + variance)``."""
