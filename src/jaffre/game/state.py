"""Read-only game snapshot consumed by the bot engine.

The authoritative server owns the live game; the transport layer hands
the engine a ``GameState`` built from the server's latest broadcast.
Nothing in ``jaffre.bot`` mutates these objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from jaffre.game.betting import Bet
from jaffre.game.cards import Card, Color
from jaffre.game.rules import TrickCard


class Phase(str, Enum):
    TEAM_SELECTION = "team_selection"
    BETTING = "betting"
    PLAYING = "playing"
    SCORING = "scoring"
    GAME_OVER = "game_over"


@dataclass(slots=True)
class Player:
    id: str
    name: str
    hand: list[Card]
    team_id: int                 # 1 or 2
    tricks_won: int = 0
    points_won: int = 0


@dataclass(slots=True)
class GameState:
    id: str
    players: list[Player]
    trump: Optional[Color] = None
    current_trick: list[TrickCard] = field(default_factory=list)
    dealer_index: int = 0
    current_player_index: int = 0
    current_bets: list[Bet] = field(default_factory=list)
    phase: Phase = Phase.BETTING


# ---------------------------------------------------------------------------
#  Lookups
# ---------------------------------------------------------------------------


def find_player(state: GameState, player_id: str) -> Optional[Player]:
    for p in state.players:
        if p.id == player_id:
            return p
    return None


def player_index(state: GameState, player_id: str) -> int:
    """Seat index of *player_id*, or -1 when the player is not seated."""
    for i, p in enumerate(state.players):
        if p.id == player_id:
            return i
    return -1


def partner_of(state: GameState, player_id: str) -> Optional[Player]:
    """The other player sharing *player_id*'s team, if any."""
    player = find_player(state, player_id)
    if player is None:
        return None
    for p in state.players:
        if p.id != player_id and p.team_id == player.team_id:
            return p
    return None


def current_player(state: GameState) -> Optional[Player]:
    if 0 <= state.current_player_index < len(state.players):
        return state.players[state.current_player_index]
    return None


def select_team(player_index: int) -> int:
    """Team for the seat at *player_index*: even seats team 1, odd seats team 2."""
    return 1 if player_index % 2 == 0 else 2
