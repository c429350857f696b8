"""CLI entrypoint for scheduled or manual fixture syncs."""

from __future__ import annotations

import argparse
import json
import logging

from benolo.ingestion.sync import run_sync


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sync provider fixtures into league matches.",
    )
    parser.add_argument(
        "--leagues",
        type=str,
        default="",
        help="Comma-separated league ids. Defaults to every league with a championship.",
    )
    parser.add_argument(
        "--season",
        type=int,
        default=None,
        help="Override the configured provider season (e.g., 2024).",
    )
    return parser.parse_args(argv)


def _parse_league_ids(raw: str) -> list[str]:
    seen: list[str] = []
    for value in raw.split(","):
        cleaned = value.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    args = _parse_args(argv)
    league_ids = _parse_league_ids(args.leagues)

    logging.info("Starting sync leagues=%s season=%s", ",".join(league_ids) or "all", args.season)
    summaries = run_sync(league_ids or None, season_override=args.season)
    print(json.dumps([summary.to_dict() for summary in summaries], indent=2))


if __name__ == "__main__":
    main()
