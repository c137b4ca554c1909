"""Card definitions for Jaffre (4-player partnership trick-taking game).

32-card deck: four colors, values 0..7 in each.  Higher value wins
within a color; trump and led color are handled in ``rules``.

Two zero cards carry points when captured:
  - Red 0   → +5 to the team that wins the trick
  - Brown 0 → −3 to the team that wins the trick
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


# ---------------------------------------------------------------------------
#  Colors
# ---------------------------------------------------------------------------


class Color(str, Enum):
    RED = "red"
    BROWN = "brown"
    GREEN = "green"
    BLUE = "blue"


ALL_COLORS: tuple[Color, ...] = tuple(Color)


# ---------------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------------

MIN_VALUE: int = 0
MAX_VALUE: int = 7
ALL_VALUES: tuple[int, ...] = tuple(range(MIN_VALUE, MAX_VALUE + 1))

NUM_PLAYERS: int = 4
DECK_SIZE: int = len(ALL_COLORS) * len(ALL_VALUES)   # 32
HAND_SIZE: int = DECK_SIZE // NUM_PLAYERS            # 8
TRICKS_PER_ROUND: int = HAND_SIZE

RED_ZERO_POINTS: int = 5
BROWN_ZERO_POINTS: int = -3


# ---------------------------------------------------------------------------
#  Card
# ---------------------------------------------------------------------------

_COLOR_SHORT: dict[Color, str] = {
    Color.RED: "R", Color.BROWN: "B",
    Color.GREEN: "G", Color.BLUE: "U",
}


@dataclass(frozen=True, slots=True)
class Card:
    color: Color
    value: int

    def __post_init__(self) -> None:
        if not MIN_VALUE <= self.value <= MAX_VALUE:
            raise ValueError(f"Card value must be in [{MIN_VALUE}, {MAX_VALUE}], got {self.value}")

    @property
    def key(self) -> str:
        """Stable identity used by card memory, e.g. ``'red-0'``."""
        return f"{self.color.value}-{self.value}"

    def is_red_zero(self) -> bool:
        return self.color == Color.RED and self.value == 0

    def is_brown_zero(self) -> bool:
        return self.color == Color.BROWN and self.value == 0

    def is_special(self) -> bool:
        return self.value == 0 and self.color in (Color.RED, Color.BROWN)

    def short(self) -> str:
        """Human-readable short label, e.g. 'R0', 'G7'."""
        return f"{_COLOR_SHORT[self.color]}{self.value}"

    def __repr__(self) -> str:
        return f"Card({self.short()})"


RED_ZERO = Card(Color.RED, 0)
BROWN_ZERO = Card(Color.BROWN, 0)


def card_points(card: Card) -> int:
    """Scoring points carried by a single card (only the two zeros count)."""
    if card.is_red_zero():
        return RED_ZERO_POINTS
    if card.is_brown_zero():
        return BROWN_ZERO_POINTS
    return 0


def parse_color(text: str) -> Color:
    try:
        return Color(str(text).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown color: {text!r}") from None


# ---------------------------------------------------------------------------
#  Deck
# ---------------------------------------------------------------------------


def make_deck() -> List[Card]:
    """Create the full 32-card deck."""
    return [Card(c, v) for c in ALL_COLORS for v in ALL_VALUES]
