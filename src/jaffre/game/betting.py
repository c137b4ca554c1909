"""Bets and bet ordering.

Each round every player, starting left of the dealer, either bets a
trick target in ``[MIN_BET, MAX_BET]`` or skips.  A bet may be declared
*without trump*, which doubles its stakes and outranks an equal plain bet.
The dealer bets last, may match the standing bet instead of raising,
and may not skip when nobody else has bet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


MIN_BET: int = 7
MAX_BET: int = 12


@dataclass(frozen=True, slots=True)
class Bet:
    player_id: str
    amount: int
    without_trump: bool = False
    skipped: bool = False
    player_name: str = ""


def clamp_bet(amount: int) -> int:
    return max(MIN_BET, min(MAX_BET, int(amount)))


def is_bet_higher(a: Bet, b: Bet) -> bool:
    """True if *a* outranks *b*: higher amount, or equal amount and only *a* is without trump."""
    if a.amount > b.amount:
        return True
    return a.amount == b.amount and a.without_trump and not b.without_trump


def highest_bet(bets: Sequence[Bet], dealer_id: Optional[str] = None) -> Optional[Bet]:
    """Return the standing bet among the non-skipped *bets*, or None.

    With *dealer_id* given, an exactly equal bet placed by the dealer
    takes over the standing one (the dealer "steals" by matching).
    """
    best: Optional[Bet] = None
    for bet in bets:
        if bet.skipped:
            continue
        if best is None or is_bet_higher(bet, best):
            best = bet
        elif (
            dealer_id is not None
            and bet.player_id == dealer_id
            and bet.amount == best.amount
            and bet.without_trump == best.without_trump
        ):
            best = bet
    return best
