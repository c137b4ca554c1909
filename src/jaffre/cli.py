from __future__ import annotations

import argparse
import logging

from jaffre.arena import DEFAULT_TARGET, run_arena
from jaffre.bot.engine import Difficulty


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Jaffre bots: self-play arena (headless)")
    choices = [d.value for d in Difficulty]
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--team1", type=str, default="medium", choices=choices)
    parser.add_argument("--team2", type=str, default="medium", choices=choices)
    parser.add_argument("--target", type=int, default=DEFAULT_TARGET, help="Score that ends a match.")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    _, s = run_arena(args.games, team1=args.team1, team2=args.team2, target=args.target, seed=args.seed)

    print(f"matches={s.matches} rounds={s.rounds}")
    print(f"team1 ({args.team1}) wins={s.team1_wins}  team2 ({args.team2}) wins={s.team2_wins}  "
          f"team1 winrate={s.team1_win_rate:.3f}")
    print(f"round diff (t1-t2) = {s.round_diff_mean:+.3f} ± {s.round_diff_ci95:.3f}")
    print(f"bets made={s.bets_made_rate:.3f}  mean bet={s.mean_winning_bet:.2f}  "
          f"without trump={s.without_trump_rate:.3f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
