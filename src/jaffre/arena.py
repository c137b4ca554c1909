"""Self-play arena: four bots, two teams, full rounds.

A small local referee that deals, runs the betting, plays the eight
tricks and scores the round so bot settings can be compared head to
head.  It is a simulation harness, not the authoritative server: the
scoring here only needs to rank bot configurations consistently.

Each seat may use its own difficulty; it is passed with every engine
call made for that seat, so the shared engine is never switched.
"""
from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from jaffre.bot.engine import BotEngine, Difficulty
from jaffre.game.betting import Bet, clamp_bet, highest_bet, is_bet_higher
from jaffre.game.cards import HAND_SIZE, NUM_PLAYERS, TRICKS_PER_ROUND, Card, Color, make_deck
from jaffre.game.rules import TrickCard, TrickResult, legal_plays, resolve_trick
from jaffre.game.state import GameState, Phase, Player, select_team

log = logging.getLogger(__name__)

DEFAULT_TARGET: int = 41
"""Match ends when a team reaches this score."""

MAX_ROUNDS: int = 200
"""Safety stop for matches that keep trading losses."""


# ---------------------------------------------------------------------------
#  Results
# ---------------------------------------------------------------------------


@dataclass
class RoundResult:
    dealer_index: int
    bets: list[Bet]
    winning_bet: Bet
    betting_team: int
    trump: Optional[Color]
    tricks: list[TrickResult]
    team_points: dict[int, int]
    score_delta: dict[int, int]
    made: bool


@dataclass
class MatchResult:
    game_id: str
    difficulties: tuple[Difficulty, Difficulty]
    rounds: list[RoundResult] = field(default_factory=list)
    scores: dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0})

    @property
    def winner(self) -> Optional[int]:
        if self.scores[1] == self.scores[2]:
            return None
        return 1 if self.scores[1] > self.scores[2] else 2


@dataclass(frozen=True)
class ArenaSummary:
    matches: int
    rounds: int
    team1_wins: int
    team2_wins: int
    team1_win_rate: float
    round_diff_mean: float      # team 1 minus team 2, per round
    round_diff_ci95: float      # half-width
    bets_made_rate: float
    mean_winning_bet: float
    without_trump_rate: float


# ---------------------------------------------------------------------------
#  Setup
# ---------------------------------------------------------------------------


def deal(rng: random.Random) -> list[list[Card]]:
    """Shuffle the deck and give each seat ``HAND_SIZE`` cards."""
    deck = make_deck()
    rng.shuffle(deck)
    return [deck[i * HAND_SIZE:(i + 1) * HAND_SIZE] for i in range(NUM_PLAYERS)]


def make_players(hands: Sequence[Sequence[Card]]) -> list[Player]:
    return [
        Player(id=f"p{i}", name=f"Bot {i + 1}", hand=list(h), team_id=select_team(i))
        for i, h in enumerate(hands)
    ]


def _snapshot(
    game_id: str,
    players: list[Player],
    *,
    trump: Optional[Color],
    trick: list[TrickCard],
    dealer: int,
    seat: int,
    bets: list[Bet],
    phase: Phase,
) -> GameState:
    """Fresh copy of the table for one engine call."""
    return GameState(
        id=game_id,
        players=[
            Player(p.id, p.name, list(p.hand), p.team_id, p.tricks_won, p.points_won)
            for p in players
        ],
        trump=trump,
        current_trick=list(trick),
        dealer_index=dealer,
        current_player_index=seat,
        current_bets=list(bets),
        phase=phase,
    )


# ---------------------------------------------------------------------------
#  Round
# ---------------------------------------------------------------------------


def _run_betting(
    engine: BotEngine,
    game_id: str,
    players: list[Player],
    dealer: int,
    seat_difficulty: Sequence[Difficulty],
) -> list[Bet]:
    bets: list[Bet] = []
    for k in range(1, NUM_PLAYERS + 1):
        seat = (dealer + k) % NUM_PLAYERS
        pid = players[seat].id
        is_dealer = seat == dealer
        state = _snapshot(
            game_id, players, trump=None, trick=[], dealer=dealer,
            seat=seat, bets=bets, phase=Phase.BETTING,
        )
        d = engine.make_bet(state, pid, seat_difficulty[seat])
        bet = Bet(pid, clamp_bet(d.amount), d.without_trump, d.skipped, players[seat].name)

        standing = highest_bet(bets)
        if bet.skipped and is_dealer and standing is None:
            raise ValueError(f"Dealer {pid} skipped with no standing bet")
        if not bet.skipped and standing is not None:
            ok = bet.amount >= standing.amount if is_dealer else is_bet_higher(bet, standing)
            if not ok:
                log.debug("Rejected bet %s below standing %s; recorded as skip", bet, standing)
                bet = Bet(pid, bet.amount, False, True, bet.player_name)
        bets.append(bet)
    return bets


def play_round(
    engine: BotEngine,
    game_id: str,
    dealer: int,
    rng: random.Random,
    seat_difficulty: Sequence[Difficulty],
) -> RoundResult:
    """Deal, bet and play one round; returns the scored result."""
    players = make_players(deal(rng))
    engine.init_memory(game_id)

    bets = _run_betting(engine, game_id, players, dealer, seat_difficulty)
    winning = highest_bet(bets, dealer_id=players[dealer].id)
    if winning is None:
        raise ValueError("Betting ended without a standing bet")
    betting_team = next(p.team_id for p in players if p.id == winning.player_id)

    trump: Optional[Color] = None
    leader = (dealer + 1) % NUM_PLAYERS
    tricks: list[TrickResult] = []

    for _ in range(TRICKS_PER_ROUND):
        trick: list[TrickCard] = []
        for k in range(NUM_PLAYERS):
            seat = (leader + k) % NUM_PLAYERS
            player = players[seat]
            state = _snapshot(
                game_id, players, trump=trump, trick=trick, dealer=dealer,
                seat=seat, bets=bets, phase=Phase.PLAYING,
            )
            card = engine.play_card(state, player.id, seat_difficulty[seat])
            if card is None or card not in legal_plays(player.hand, trick):
                raise ValueError(f"Illegal play {card!r} by {player.id}")
            player.hand.remove(card)
            trick.append(TrickCard(player.id, card, player.name))
            if trump is None and not tricks and k == 0 and not winning.without_trump:
                trump = card.color

        result = resolve_trick(trick, trump)
        engine.observe_trick(game_id, trick)
        tricks.append(result)
        winner_seat = next(i for i, p in enumerate(players) if p.id == result.winner)
        players[winner_seat].tricks_won += 1
        players[winner_seat].points_won += result.points
        leader = winner_seat

    team_points = {1: 0, 2: 0}
    for p in players:
        team_points[p.team_id] += p.points_won

    made = team_points[betting_team] >= winning.amount
    stake = winning.amount * (2 if winning.without_trump else 1)
    other_team = 2 if betting_team == 1 else 1
    score_delta = {betting_team: stake if made else -stake, other_team: team_points[other_team]}

    log.debug(
        "Round dealer=%d bet=%s team=%d trump=%s points=%s made=%s",
        dealer, winning.amount, betting_team, trump.value if trump else None, team_points, made,
    )
    return RoundResult(
        dealer_index=dealer,
        bets=bets,
        winning_bet=winning,
        betting_team=betting_team,
        trump=trump,
        tricks=tricks,
        team_points=team_points,
        score_delta=score_delta,
        made=made,
    )


# ---------------------------------------------------------------------------
#  Match
# ---------------------------------------------------------------------------


def play_match(
    engine: BotEngine,
    *,
    team1: str | Difficulty = Difficulty.MEDIUM,
    team2: str | Difficulty = Difficulty.MEDIUM,
    target: int = DEFAULT_TARGET,
    rng: Optional[random.Random] = None,
    game_id: Optional[str] = None,
) -> MatchResult:
    """Play rounds, rotating the dealer, until a team reaches *target*."""
    rng = rng or random.Random()
    game_id = game_id or str(uuid.uuid4())
    diffs = (Difficulty.parse(team1), Difficulty.parse(team2))
    seat_difficulty = [diffs[select_team(i) - 1] for i in range(NUM_PLAYERS)]

    match = MatchResult(game_id=game_id, difficulties=diffs)
    dealer = 0
    try:
        while max(match.scores.values()) < target and len(match.rounds) < MAX_ROUNDS:
            rnd = play_round(engine, game_id, dealer, rng, seat_difficulty)
            match.rounds.append(rnd)
            for team, delta in rnd.score_delta.items():
                match.scores[team] += delta
            dealer = (dealer + 1) % NUM_PLAYERS
    finally:
        engine.clear_memory(game_id)

    log.info(
        "Match %s (%s vs %s): %d-%d after %d rounds",
        game_id, diffs[0].value, diffs[1].value,
        match.scores[1], match.scores[2], len(match.rounds),
    )
    return match


def _ci95(values: np.ndarray) -> tuple[float, float]:
    """Return (mean, half-width of 95% CI)."""
    if values.size == 0:
        return 0.0, 0.0
    mean = float(values.mean())
    if values.size == 1:
        return mean, 0.0
    se = float(values.std(ddof=1)) / np.sqrt(values.size)
    return mean, float(1.96 * se)


def summarize(results: Sequence[MatchResult]) -> ArenaSummary:
    rounds = [r for m in results for r in m.rounds]
    diffs = np.array([r.score_delta[1] - r.score_delta[2] for r in rounds], dtype=float)
    mean, hw = _ci95(diffs)
    team1_wins = sum(1 for m in results if m.winner == 1)
    team2_wins = sum(1 for m in results if m.winner == 2)
    made = np.array([r.made for r in rounds], dtype=float)
    amounts = np.array([r.winning_bet.amount for r in rounds], dtype=float)
    no_trump = np.array([r.winning_bet.without_trump for r in rounds], dtype=float)
    return ArenaSummary(
        matches=len(results),
        rounds=len(rounds),
        team1_wins=team1_wins,
        team2_wins=team2_wins,
        team1_win_rate=team1_wins / len(results) if results else 0.0,
        round_diff_mean=mean,
        round_diff_ci95=hw,
        bets_made_rate=float(made.mean()) if made.size else 0.0,
        mean_winning_bet=float(amounts.mean()) if amounts.size else 0.0,
        without_trump_rate=float(no_trump.mean()) if no_trump.size else 0.0,
    )


def run_arena(
    games: int,
    *,
    team1: str | Difficulty = Difficulty.MEDIUM,
    team2: str | Difficulty = Difficulty.MEDIUM,
    target: int = DEFAULT_TARGET,
    seed: int = 0,
) -> tuple[list[MatchResult], ArenaSummary]:
    """Play *games* matches with one shared engine and summarize them."""
    rng = random.Random(seed)
    engine = BotEngine(rng=random.Random(rng.randrange(2**31)))
    results = [
        play_match(engine, team1=team1, team2=team2, target=target, rng=rng, game_id=f"arena-{seed}-{i}")
        for i in range(games)
    ]
    return results, summarize(results)
