#!/usr/bin/env python3
"""simulate_session.py — Run a badminton session round by round.

Usage:
    python scripts/simulate_session.py --players 9 --courts 2 --rounds 6
    python scripts/simulate_session.py --names "Ana,Ben,Cai,Dee,Eli" --courts 1 --seed 7
    python scripts/simulate_session.py --players 12 --rackets 10 --rounds 8 \\
        --db-path data/sessions.db --session-id club-night --csv exports/
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from courtrota.utils.runtime import validate_runtime

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("simulate_session")


def _roster_names(args: argparse.Namespace) -> list[str]:
    if args.names:
        return [name.strip() for name in args.names.split(",") if name.strip()]
    return [f"Player {i}" for i in range(1, args.players + 1)]


def main() -> int:
    parser = argparse.ArgumentParser(description="courtrota — Session Simulator")
    roster = parser.add_mutually_exclusive_group()
    roster.add_argument("--players", type=int, default=8, help="Number of generated players")
    roster.add_argument("--names", help="Comma-separated player names")
    parser.add_argument("--courts", type=int, default=2, help="Courts available")
    parser.add_argument("--rackets", type=int, default=8, help="Rackets available")
    parser.add_argument("--rounds", type=int, default=5, help="Rounds to generate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible rounds")
    parser.add_argument("--db-path", default=None, help="Save the session to this SQLite database")
    parser.add_argument("--session-id", default="default", help="Session key in the database")
    parser.add_argument("--snapshot", default=None, help="Write a JSON session snapshot here")
    parser.add_argument("--csv", default=None, help="Write the CSV export to this file or directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log candidate scores")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        validate_runtime()
    except RuntimeError as exc:
        logger.error(str(exc))
        return 1

    from courtrota.engine.session_runner import SessionError, SessionRunner

    runner = SessionRunner(rng=random.Random(args.seed))
    try:
        runner.set_number_of_rackets(args.rackets)
        runner.set_number_of_courts(args.courts)
    except SessionError as exc:
        logger.error(str(exc))
        return 1

    for name in _roster_names(args):
        if not runner.add_player(name):
            logger.warning(f"Skipping duplicate player {name!r}")

    if not runner.can_generate_round:
        logger.error(f"Need at least 3 players, got {len(runner.players)}")
        return 1

    suggested = runner.recommended_courts()
    if suggested != args.courts:
        logger.info(f"Recommended courts for this roster: {suggested}")

    logger.info(
        f"🏸 {len(runner.players)} players, {args.rackets} rackets, "
        f"{args.courts} courts, {args.rounds} rounds"
    )

    for _ in range(args.rounds):
        game_round = runner.generate_next_round()
        if game_round is None:
            logger.error("Round could not be generated")
            return 1
        print()
        print(f"  Round {game_round.round}")
        for match in game_round.matches:
            print(f"     {match}")
        if game_round.resting:
            print(f"     Resting: {', '.join(game_round.resting)}")

    report = runner.fairness_report()
    games = report.games_stats
    print()
    print("=" * 60)
    print(f"  {'Player':<20} {'Games':>5} {'Rests':>5} {'Partners':>8} {'Opponents':>9} {'Courts':>6}")
    print("  " + "-" * 56)
    for player in runner.players:
        name = player.name
        print(
            f"  {name:<20} {report.games_played[name]:>5} {report.rests[name]:>5} "
            f"{report.distinct_partners[name]:>8} {report.distinct_opponents[name]:>9} "
            f"{report.courts_visited[name]:>6}"
        )
    print("  " + "-" * 56)
    print(f"  Games per player: {games.min:.0f}-{games.max:.0f} (mean {games.mean:.2f}, std {games.std:.2f})")
    print("=" * 60)

    if args.snapshot:
        from courtrota.db.repository import export_snapshot

        export_snapshot(runner.snapshot(), args.snapshot)

    if args.csv:
        path = runner.export_csv(args.csv)
        logger.info(f"CSV written to {path}")

    if args.db_path:
        from courtrota.db.repository import SessionRepository
        from courtrota.db.session import get_engine, get_session, init_db

        engine = get_engine(args.db_path)
        init_db(engine)
        session = get_session(engine)
        try:
            SessionRepository(session).save(runner.snapshot(), session_id=args.session_id)
        finally:
            session.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
