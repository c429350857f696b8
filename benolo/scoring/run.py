"""CLI for recomputing prediction points and printing leaderboards."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict

from benolo.db import Base, SessionLocal, engine
from benolo.scoring.leaderboard import compute_leaderboard, update_prediction_points


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Prediction scoring tools.")
    subcommands = parser.add_subparsers(dest="command", required=True)

    update = subcommands.add_parser("update-points", help="Recompute stored prediction points.")
    update.add_argument("--league", type=str, default=None, help="Limit to one league id.")

    board = subcommands.add_parser("leaderboard", help="Print a league leaderboard.")
    board.add_argument("league_id", type=str)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    args = _parse_args(argv)
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if args.command == "update-points":
            updated = update_prediction_points(db, args.league)
            logging.info("Leaderboard recomputed: updated=%s", updated)
            return

        entries = compute_leaderboard(db, args.league_id)
        logging.info("Leaderboard for league %s", args.league_id)
        print(json.dumps([asdict(entry) for entry in entries], indent=2))


if __name__ == "__main__":
    main()
