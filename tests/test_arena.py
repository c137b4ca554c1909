"""Tests for the self-play arena and its CLI."""
from __future__ import annotations

import random

import numpy as np

from jaffre.arena import (
    MAX_ROUNDS,
    _ci95,
    deal,
    make_players,
    play_match,
    play_round,
    run_arena,
    summarize,
)
from jaffre.bot.engine import BotEngine, Difficulty
from jaffre.cli import main
from jaffre.game.cards import TRICKS_PER_ROUND, make_deck


def _engine(seed: int = 1) -> BotEngine:
    return BotEngine(rng=random.Random(seed))


class TestSetup:
    def test_deal_uses_whole_deck(self):
        hands = deal(random.Random(0))
        assert [len(h) for h in hands] == [8, 8, 8, 8]
        assert sorted(c.key for h in hands for c in h) == sorted(c.key for c in make_deck())

    def test_deal_is_seeded(self):
        assert deal(random.Random(4)) == deal(random.Random(4))

    def test_players_alternate_teams(self):
        players = make_players(deal(random.Random(0)))
        assert [p.id for p in players] == ["p0", "p1", "p2", "p3"]
        assert [p.team_id for p in players] == [1, 2, 1, 2]


class TestRound:
    def _round(self, seed: int, dealer: int = 0, engine: BotEngine | None = None):
        engine = engine or _engine(seed)
        diffs = [Difficulty.HARD, Difficulty.EASY, Difficulty.HARD, Difficulty.EASY]
        return engine, play_round(engine, "r", dealer, random.Random(seed), diffs)

    def test_round_plays_every_card(self):
        engine, rnd = self._round(3)
        assert len(rnd.tricks) == TRICKS_PER_ROUND
        assert engine.memory("r").remaining_count == 0
        assert sorted(c.key for t in rnd.tricks for c in t.cards) == sorted(c.key for c in make_deck())

    def test_round_points_total(self):
        for seed in range(10):
            _, rnd = self._round(seed, dealer=seed % 4)
            # Eight tricks worth 1 each, plus the red 0 and the brown 0.
            assert sum(rnd.team_points.values()) == 8 + 5 - 3
            assert sum(t.points for t in rnd.tricks) == 10

    def test_betting_shape(self):
        for seed in range(10):
            dealer = seed % 4
            _, rnd = self._round(seed, dealer=dealer)
            assert len(rnd.bets) == 4
            assert rnd.bets[-1].player_id == f"p{dealer}"
            assert not rnd.winning_bet.skipped
            assert rnd.winning_bet in rnd.bets
            assert 7 <= rnd.winning_bet.amount <= 12
            assert (rnd.trump is None) == rnd.winning_bet.without_trump

    def test_scoring(self):
        for seed in range(10):
            _, rnd = self._round(seed)
            stake = rnd.winning_bet.amount * (2 if rnd.winning_bet.without_trump else 1)
            other = 2 if rnd.betting_team == 1 else 1
            assert rnd.made == (rnd.team_points[rnd.betting_team] >= rnd.winning_bet.amount)
            assert rnd.score_delta[rnd.betting_team] == (stake if rnd.made else -stake)
            assert rnd.score_delta[other] == rnd.team_points[other]

    def test_seat_difficulty_leaves_engine_default(self):
        engine, _ = self._round(4, engine=BotEngine("medium", rng=random.Random(4)))
        assert engine.difficulty is Difficulty.MEDIUM

    def test_trick_winner_leads_next(self):
        _, rnd = self._round(7)
        assert rnd.tricks[0].players[0] == "p1"
        for prev, nxt in zip(rnd.tricks, rnd.tricks[1:]):
            assert nxt.players[0] == prev.winner


class TestMatch:
    def test_match_reaches_target_and_clears_memory(self):
        engine = _engine(2)
        m = play_match(engine, team1="hard", team2="easy", target=15, rng=random.Random(2), game_id="m1")
        assert m.difficulties == (Difficulty.HARD, Difficulty.EASY)
        assert max(m.scores.values()) >= 15 or len(m.rounds) == MAX_ROUNDS
        assert engine.memory("m1") is None
        assert m.scores[1] == sum(r.score_delta[1] for r in m.rounds)

    def test_arena_is_deterministic(self):
        _, a = run_arena(3, team1="hard", team2="medium", target=20, seed=5)
        _, b = run_arena(3, team1="hard", team2="medium", target=20, seed=5)
        assert a == b
        assert a.matches == 3
        assert a.team1_wins + a.team2_wins <= 3
        assert 0.0 <= a.bets_made_rate <= 1.0
        assert 7.0 <= a.mean_winning_bet <= 12.0

    def test_summarize_empty(self):
        s = summarize([])
        assert (s.matches, s.rounds, s.team1_win_rate, s.round_diff_mean) == (0, 0, 0.0, 0.0)


class TestStats:
    def test_ci95(self):
        assert _ci95(np.array([])) == (0.0, 0.0)
        assert _ci95(np.array([3.0])) == (3.0, 0.0)
        mean, hw = _ci95(np.array([1.0, 3.0]))
        assert mean == 2.0
        assert hw > 0


class TestCli:
    def test_main_prints_summary(self, capsys):
        assert main(["--games", "2", "--target", "10", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "matches=2" in out
        assert "team1 (medium)" in out
