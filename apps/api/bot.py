"""FastAPI router exposing the bot engine to the game server.

The transport layer posts the latest game snapshot it received from
the authoritative server and forwards the returned bet or card back to
that server as a normal move.  Scheduling the human-feel delay and
dropping stale actions stay with the caller.  When a human misses the
turn timer the server asks ``/timeout-card`` for the card to play.

One process-wide ``BotEngine`` holds the card memories, so every bot of
a game reads the same memory.  A ``difficulty`` field in a request is
passed to that request's engine call only; the engine default never
changes, so concurrent requests at different levels do not interfere.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException

from jaffre.bot.autoplay import select_timeout_card
from jaffre.bot.engine import BotEngine, Difficulty, select_team
from jaffre.game.betting import Bet
from jaffre.game.cards import Card, parse_color
from jaffre.game.rules import TrickCard
from jaffre.game.state import GameState, Phase, Player

log = logging.getLogger(__name__)

_engine = BotEngine()


def get_engine() -> BotEngine:
    return _engine


# ---------------------------------------------------------------------------
#  JSON codec
# ---------------------------------------------------------------------------


def _card_to_json(c: Card) -> dict[str, Any]:
    return {"color": c.color.value, "value": int(c.value)}


def _card_from_json(obj: dict[str, Any]) -> Card:
    try:
        return Card(parse_color(obj["color"]), int(obj["value"]))
    except Exception as e:  # noqa: BLE001
        raise HTTPException(status_code=400, detail=f"Invalid card: {obj!r} ({e})")


def _trick_from_json(raw: Any) -> list[TrickCard]:
    if not isinstance(raw, list):
        raise HTTPException(status_code=400, detail="Trick must be a list")
    out = []
    for tc in raw:
        try:
            out.append(TrickCard(str(tc["playerId"]), _card_from_json(tc["card"]), str(tc.get("playerName", ""))))
        except (KeyError, TypeError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid trick entry: {tc!r} ({e})")
    if len(out) > 4:
        raise HTTPException(status_code=400, detail="A trick holds at most 4 cards")
    return out


def _bet_from_json(obj: dict[str, Any]) -> Bet:
    return Bet(
        player_id=str(obj.get("playerId", "")),
        amount=int(obj.get("amount", 0) or 0),
        without_trump=bool(obj.get("withoutTrump", False)),
        skipped=bool(obj.get("skipped", False)),
        player_name=str(obj.get("playerName", "")),
    )


def _state_from_json(obj: Any) -> GameState:
    if not isinstance(obj, dict):
        raise HTTPException(status_code=400, detail="Missing state")
    try:
        players = [
            Player(
                id=str(p["id"]),
                name=str(p.get("name", "")),
                hand=[_card_from_json(c) for c in p.get("hand", [])],
                team_id=int(p.get("teamId", 1)),
                tricks_won=int(p.get("tricksWon", 0)),
                points_won=int(p.get("pointsWon", 0)),
            )
            for p in obj["players"]
        ]
        trump_raw = obj.get("trump")
        return GameState(
            id=str(obj["id"]),
            players=players,
            trump=parse_color(trump_raw) if trump_raw else None,
            current_trick=_trick_from_json(obj.get("currentTrick", [])),
            dealer_index=int(obj.get("dealerIndex", 0)),
            current_player_index=int(obj.get("currentPlayerIndex", 0)),
            current_bets=[_bet_from_json(b) for b in obj.get("currentBets", [])],
            phase=Phase(obj.get("phase", Phase.PLAYING.value)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid state: {e}")


def _decision_input(body: dict[str, Any]) -> tuple[GameState, str, Optional[Difficulty]]:
    state = _state_from_json(body.get("state"))
    player_id = body.get("playerId")
    if not player_id:
        raise HTTPException(status_code=400, detail="Missing playerId")
    difficulty = body.get("difficulty")
    return state, str(player_id), Difficulty.parse(difficulty) if difficulty is not None else None


# ---------------------------------------------------------------------------
#  Router
# ---------------------------------------------------------------------------

router = APIRouter(prefix="/api/bot", tags=["bot"])


@router.post("/team")
def team(body: dict[str, Any]) -> dict[str, Any]:
    try:
        idx = int(body["playerIndex"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(400, "Missing or invalid playerIndex")
    return {"teamId": select_team(idx)}


@router.post("/bet")
def bet(body: dict[str, Any]) -> dict[str, Any]:
    state, player_id, difficulty = _decision_input(body)
    d = _engine.make_bet(state, player_id, difficulty)
    return {"amount": d.amount, "withoutTrump": d.without_trump, "skipped": d.skipped}


@router.post("/play")
def play(body: dict[str, Any]) -> dict[str, Any]:
    state, player_id, difficulty = _decision_input(body)
    card = _engine.play_card(state, player_id, difficulty)
    return {"card": _card_to_json(card) if card is not None else None}


@router.post("/timeout-card")
def timeout_card(body: dict[str, Any]) -> dict[str, Any]:
    state, player_id, _ = _decision_input(body)
    card = select_timeout_card(state, player_id)
    log.info("Timeout play for %s in game %s: %s", player_id, state.id, card.short() if card else None)
    return {"card": _card_to_json(card) if card is not None else None}


@router.post("/observe")
def observe(body: dict[str, Any]) -> dict[str, Any]:
    game_id = body.get("gameId")
    if not game_id:
        raise HTTPException(400, "Missing gameId")
    memory = _engine.observe_trick(str(game_id), _trick_from_json(body.get("trick", [])))
    return memory.summary()


@router.get("/delay")
def delay(difficulty: Optional[str] = None) -> dict[str, Any]:
    return {"delayMs": _engine.action_delay(difficulty)}


@router.get("/memory/{game_id}")
def get_memory(game_id: str) -> dict[str, Any]:
    memory = _engine.memory(game_id)
    if memory is None:
        log.warning("Memory requested for unknown game %s", game_id)
        raise HTTPException(404, "Unknown gameId")
    return memory.summary()


@router.post("/memory/{game_id}")
def reset_memory(game_id: str) -> dict[str, Any]:
    return _engine.init_memory(game_id).summary()


@router.delete("/memory/{game_id}")
def delete_memory(game_id: str) -> dict[str, Any]:
    return {"cleared": _engine.clear_memory(game_id)}
