"""Per-game card memory.

Tracks which of the 32 cards have been seen on the table, the highest
unseen value per color, and what is known about the two zero cards.
Memory is keyed by game, not by bot: anything recorded here is public
information every observer of the game shares.

Only ``record_card`` (through ``update_memory`` / ``observe_trick``)
mutates a memory.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from jaffre.game.cards import ALL_COLORS, MAX_VALUE, Card, Color, make_deck
from jaffre.game.rules import TrickCard
from jaffre.game.state import GameState, current_player


class SpecialStatus(str, Enum):
    UNKNOWN = "unknown"
    IN_HAND = "in_hand"
    PLAYED = "played"


@dataclass
class CardMemory:
    game_id: str
    played_cards: list[Card] = field(default_factory=list)
    remaining: dict[str, Card] = field(default_factory=dict)        # card key → card
    highest_remaining: dict[Color, Optional[int]] = field(
        default_factory=lambda: {c: MAX_VALUE for c in ALL_COLORS}
    )
    red_zero_status: SpecialStatus = SpecialStatus.UNKNOWN
    brown_zero_status: SpecialStatus = SpecialStatus.UNKNOWN

    @property
    def remaining_count(self) -> int:
        return len(self.remaining)

    def is_remaining(self, card: Card) -> bool:
        return card.key in self.remaining

    def summary(self) -> dict[str, object]:
        return {
            "gameId": self.game_id,
            "remainingCount": self.remaining_count,
            "playedCards": [{"color": c.color.value, "value": c.value} for c in self.played_cards],
            "highestRemainingByColor": {c.value: v for c, v in self.highest_remaining.items()},
            "red0Status": self.red_zero_status.value,
            "brown0Status": self.brown_zero_status.value,
        }


def init_memory(game_id: str) -> CardMemory:
    """Fresh memory: all 32 cards outstanding, specials unknown."""
    return CardMemory(game_id=game_id, remaining={c.key: c for c in make_deck()})


# ---------------------------------------------------------------------------
#  Updates
# ---------------------------------------------------------------------------


def record_card(memory: CardMemory, card: Card) -> bool:
    """Mark *card* as played.  Returns False if it was already recorded."""
    if card.key not in memory.remaining:
        return False
    del memory.remaining[card.key]
    memory.played_cards.append(card)

    if card.is_red_zero():
        memory.red_zero_status = SpecialStatus.PLAYED
    if card.is_brown_zero():
        memory.brown_zero_status = SpecialStatus.PLAYED

    if card.value == memory.highest_remaining[card.color]:
        memory.highest_remaining[card.color] = next(
            (v for v in range(card.value - 1, -1, -1) if f"{card.color.value}-{v}" in memory.remaining),
            None,
        )
    return True


def observe_trick(memory: CardMemory, trick: Iterable[TrickCard]) -> int:
    """Record every card of *trick*; returns how many were new."""
    return sum(1 for tc in trick if record_card(memory, tc.card))


def update_memory(memory: CardMemory, state: GameState) -> int:
    """Bring *memory* up to date with the snapshot's current trick.

    Also notes a zero card sitting in the acting player's hand the first
    time it is seen there.  Safe to call repeatedly on the same snapshot.
    """
    added = observe_trick(memory, state.current_trick)

    player = current_player(state)
    if player is not None:
        if memory.red_zero_status == SpecialStatus.UNKNOWN and any(c.is_red_zero() for c in player.hand):
            memory.red_zero_status = SpecialStatus.IN_HAND
        if memory.brown_zero_status == SpecialStatus.UNKNOWN and any(c.is_brown_zero() for c in player.hand):
            memory.brown_zero_status = SpecialStatus.IN_HAND
    return added
