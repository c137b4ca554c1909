"""Bot decision engine: what to bet and which card to play.

``BotEngine`` is the explicit engine context.  It owns a default
difficulty, the random source and the per-game card memories; nothing
is kept in module globals.  Several bots in one game share one engine
(and so one memory per game), calling it with their own player id and
difficulty against the same read-only snapshot.

Typical use from a transport layer::

    engine = BotEngine(difficulty="hard")
    engine.init_memory(state.id)
    bet = engine.make_bet(state, bot_id)
    card = engine.play_card(state, other_bot_id, difficulty="easy")
    ...
    engine.clear_memory(state.id)
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from jaffre.game.betting import MAX_BET, MIN_BET, highest_bet
from jaffre.game.cards import Card, Color
from jaffre.game.rules import can_card_win, legal_plays, trick_value, trick_winner
from jaffre.game.state import (
    GameState,
    Player,
    find_player,
    partner_of,
    player_index,
    select_team as _select_team,
)

from . import constants as K
from .hand import HandAnalysis, HandQuality, analyze_hand
from .memory import CardMemory, SpecialStatus, init_memory, observe_trick, update_memory

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
#  Types
# ---------------------------------------------------------------------------


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union[str, "Difficulty", None]) -> "Difficulty":
        """Coerce *value* to a difficulty; anything unknown becomes MEDIUM."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            log.warning("Unknown bot difficulty %r, using medium", value)
            return cls.MEDIUM


@dataclass(frozen=True, slots=True)
class BetDecision:
    amount: int
    without_trump: bool = False
    skipped: bool = False


SKIP = BetDecision(amount=MIN_BET, without_trump=False, skipped=True)


@dataclass(frozen=True, slots=True)
class PlayDecision:
    card: Card
    priority: int
    reasoning: str


def select_team(player_index: int) -> int:
    """Team a bot joins from seat *player_index* (alternating 1, 2, 1, 2)."""
    return _select_team(player_index)


# ---------------------------------------------------------------------------
#  Card scoring
# ---------------------------------------------------------------------------


def _lead_priority(card: Card, state: GameState, hand: Sequence[Card], memory: CardMemory) -> tuple[int, str]:
    trump = state.trump

    if card.value == 6:
        if memory.is_remaining(Card(card.color, 7)):
            return K.LEAD_SIX_SEVEN_OUT, "Holding the 6 back while the 7 is out"
        return K.LEAD_SIX_SEVEN_GONE, "Leading the 6, the 7 is gone"

    if card.value == 7:
        return K.LEAD_SEVEN, "Leading the 7"

    if (
        card.color == Color.BROWN
        and card.value >= K.LEAD_HIGH_BROWN_MIN
        and memory.brown_zero_status != SpecialStatus.PLAYED
    ):
        return K.LEAD_HIGH_BROWN, "Flushing brown cards"

    if trump is not None and card.color == trump:
        trumps = sum(1 for c in hand if c.color == trump)
        if trumps >= K.LEAD_TRUMP_STRIP_COUNT:
            return K.LEAD_TRUMP_STRIP, "Drawing trumps"
        return K.LEAD_TRUMP_CONSERVE, "Saving trumps"

    lo, hi = K.LEAD_MIDDLE_RANGE
    if lo <= card.value <= hi:
        return K.LEAD_MIDDLE, "Middle lead"
    return K.LEAD_LOW, "Low lead"


def evaluate_play(
    card: Card,
    state: GameState,
    player_id: str,
    position: int,
    partner: Optional[Player],
    memory: CardMemory,
) -> PlayDecision:
    """Score one legal card for *player_id* (higher priority is better).

    *position* is the seat in the current trick, 1 (leading) to 4.
    Pure: reads the snapshot and memory, changes neither.
    """
    trick = state.current_trick
    partner_id = partner.id if partner is not None else None

    if card.is_brown_zero():
        if position == 1:
            return PlayDecision(card, K.BROWN_ZERO_LEAD, "Avoid leading brown 0")
        winner = trick_winner(trick, state.trump)
        if partner_id is not None and winner == partner_id:
            return PlayDecision(card, K.BROWN_ZERO_TO_PARTNER, "Never give brown 0 to partner")
        if winner != player_id:
            return PlayDecision(card, K.BROWN_ZERO_DUMP, "Dump brown 0 on opponent")
        return PlayDecision(card, K.BASE_PRIORITY, "Brown 0")

    if card.is_red_zero():
        if position == 1:
            return PlayDecision(card, K.RED_ZERO_LEAD, "Risky to lead red 0")
        winner = trick_winner(trick, state.trump)
        if winner == player_id or (partner_id is not None and winner == partner_id):
            return PlayDecision(card, K.RED_ZERO_SAFE, "Safe to play red 0")
        return PlayDecision(card, K.RED_ZERO_EXPOSED, "Risk losing red 0")

    if position == 1:
        player = find_player(state, player_id)
        hand = player.hand if player is not None else []
        priority, reasoning = _lead_priority(card, state, hand, memory)
        return PlayDecision(card, priority, reasoning)

    winner = trick_winner(trick, state.trump)
    partner_winning = partner_id is not None and winner == partner_id
    value = trick_value(trick)

    if position == 2:
        if can_card_win(card, trick, state.trump):
            return PlayDecision(card, K.SECOND_WIN_BASE + value, "Can win trick")
        return PlayDecision(card, K.SECOND_DUCK_BASE - card.value, "Cannot win, playing low")

    if position == 3:
        if partner_winning:
            return PlayDecision(card, K.THIRD_PARTNER_BASE - card.value, "Partner winning, playing low")
        if can_card_win(card, trick, state.trump):
            return PlayDecision(card, K.THIRD_TAKE, "Taking trick from opponent")
        return PlayDecision(card, K.THIRD_DUCK_BASE - card.value, "Cannot win, playing low")

    # Last seat: everything is on the table.
    if partner_winning:
        if value > K.VALUABLE_TRICK:
            return PlayDecision(card, K.FOURTH_PARTNER_VALUABLE, "Partner winning valuable trick")
        return PlayDecision(card, K.FOURTH_PARTNER_BASE - card.value, "Partner winning, dumping low")
    if can_card_win(card, trick, state.trump):
        return PlayDecision(card, K.FOURTH_TAKE_BASE + value, "Taking the trick")
    return PlayDecision(card, K.FOURTH_DUCK_BASE - card.value, "Cannot win, playing low")


# ---------------------------------------------------------------------------
#  Engine
# ---------------------------------------------------------------------------


class BotEngine:
    """Difficulty, random source and per-game memories for a set of bots."""

    def __init__(
        self,
        difficulty: Union[str, Difficulty] = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = rng or random.Random()
        self._memories: dict[str, CardMemory] = {}

    # ------------------------------------------------------------------
    #  Configuration and memory lifecycle
    # ------------------------------------------------------------------

    def set_difficulty(self, difficulty: Union[str, Difficulty]) -> None:
        """Change the default difficulty used by calls that do not pass one."""
        self.difficulty = Difficulty.parse(difficulty)

    def _level(self, difficulty: Union[str, Difficulty, None]) -> Difficulty:
        # Read once per call; the default may be changed by another thread.
        return self.difficulty if difficulty is None else Difficulty.parse(difficulty)

    def init_memory(self, game_id: str) -> CardMemory:
        memory = init_memory(game_id)
        self._memories[game_id] = memory
        log.info("Card memory created for game %s", game_id)
        return memory

    def clear_memory(self, game_id: str) -> bool:
        """Discard the game's memory.  Returns False if there was none."""
        existed = self._memories.pop(game_id, None) is not None
        if existed:
            log.info("Card memory cleared for game %s", game_id)
        return existed

    def memory(self, game_id: str) -> Optional[CardMemory]:
        return self._memories.get(game_id)

    def active_games(self) -> list[str]:
        return list(self._memories)

    def _memory_for(self, game_id: str) -> CardMemory:
        memory = self._memories.get(game_id)
        if memory is None:
            memory = self.init_memory(game_id)
        return memory

    def observe_trick(self, game_id: str, trick) -> CardMemory:
        """Record a (resolved) trick into the game's memory."""
        memory = self._memory_for(game_id)
        observe_trick(memory, trick)
        return memory

    # ------------------------------------------------------------------
    #  Bidding
    # ------------------------------------------------------------------

    def analyze_hand(self, hand: Sequence[Card], trump: Optional[Color]) -> HandAnalysis:
        return analyze_hand(hand, trump, self.rng)

    def make_bet(
        self,
        state: GameState,
        player_id: str,
        difficulty: Union[str, Difficulty, None] = None,
    ) -> BetDecision:
        """Bet (or skip) for *player_id*.

        *difficulty* overrides the engine default for this call only.
        """
        level = self._level(difficulty)
        player = find_player(state, player_id)
        if player is None:
            return SKIP

        analysis = self.analyze_hand(player.hand, state.trump)
        log.debug(
            "Hand %s: est=%.1f quality=%s rec=%d noTrump=%s",
            player_id, analysis.trick_estimate, analysis.hand_quality.value,
            analysis.recommended_bet, analysis.should_bet_without_trump,
        )

        is_dealer = player_index(state, player_id) == state.dealer_index
        standing = highest_bet(state.current_bets)

        if standing is None:
            if is_dealer:
                return BetDecision(amount=analysis.recommended_bet)
            column = "weak" if analysis.hand_quality == HandQuality.WEAK else "normal"
            if self.rng.random() < K.SKIP_THRESHOLDS[level.value][column]:
                return SKIP

        amount = analysis.recommended_bet
        if standing is not None:
            minimum = standing.amount if is_dealer else standing.amount + 1
            if not is_dealer and (minimum > amount + K.MAX_OVERBID or minimum > MAX_BET):
                return SKIP
            amount = min(MAX_BET, max(minimum, amount))

        decision = BetDecision(amount=max(MIN_BET, amount), without_trump=self._without_trump(analysis, level))
        log.debug("Bet %s (%s): %s", player_id, level.value, decision)
        return decision

    def _without_trump(self, analysis: HandAnalysis, level: Difficulty) -> bool:
        if level == Difficulty.EASY:
            return self.rng.random() < K.EASY_WITHOUT_TRUMP_PROB
        if level == Difficulty.MEDIUM:
            return analysis.should_bet_without_trump and self.rng.random() < K.MEDIUM_WITHOUT_TRUMP_FOLLOW
        return analysis.should_bet_without_trump

    # ------------------------------------------------------------------
    #  Card play
    # ------------------------------------------------------------------

    def play_card(
        self,
        state: GameState,
        player_id: str,
        difficulty: Union[str, Difficulty, None] = None,
    ) -> Optional[Card]:
        """Pick a card for *player_id*, or None when the player has no cards."""
        level = self._level(difficulty)
        player = find_player(state, player_id)
        if player is None or not player.hand:
            return None

        memory = self._memory_for(state.id)
        update_memory(memory, state)

        legal = legal_plays(player.hand, state.current_trick)
        if len(legal) == 1:
            return legal[0]

        position = len(state.current_trick) + 1
        partner = partner_of(state, player_id)
        decisions = sorted(
            (evaluate_play(c, state, player_id, position, partner, memory) for c in legal),
            key=lambda d: d.priority,
            reverse=True,
        )
        chosen = self._pick(decisions, legal, level)
        log.debug(
            "Play %s (%s): %s (top %s=%d, %s)",
            player_id, level.value, chosen.short(), decisions[0].card.short(),
            decisions[0].priority, decisions[0].reasoning,
        )
        return chosen

    def _pick(self, decisions: list[PlayDecision], legal: list[Card], level: Difficulty) -> Card:
        if level == Difficulty.HARD:
            return decisions[0].card
        if level == Difficulty.MEDIUM:
            if self.rng.random() < K.MEDIUM_OPTIMAL_RATE:
                return decisions[0].card
            return decisions[min(1, len(decisions) - 1)].card
        if self.rng.random() < K.EASY_OPTIMAL_RATE:
            return decisions[0].card
        return self.rng.choice(legal)

    # ------------------------------------------------------------------
    #  Pacing
    # ------------------------------------------------------------------

    def action_delay(self, difficulty: Union[str, Difficulty, None] = None) -> int:
        """Human-feel delay in milliseconds, drawn from the difficulty's range."""
        key = self._level(difficulty).value
        return K.DELAY_BASE_MS[key] + self.rng.randrange(K.DELAY_VARIANCE_MS[key])
