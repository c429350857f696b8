"""Quick probe for a championship's fixture provider."""

from __future__ import annotations

import argparse
import logging

from benolo.db import Base, SessionLocal, engine
from benolo.ingestion.fetch import fetch_fixtures_for_config
from benolo.ingestion.http import ProviderFetchError
from benolo.ingestion.provider_config import CHAMPIONSHIP_PROVIDER_CONFIG
from benolo.settings import load_provider_credentials
from benolo.timeutils import utc_now


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch fixtures for a championship and print how many came back.",
    )
    parser.add_argument(
        "--championship",
        type=str,
        default="premier-league",
        help="Championship key (e.g., premier-league, la-liga).",
    )
    parser.add_argument("--season", type=int, default=None, help="Season override.")
    return parser.parse_args()


def _normalize_championship(raw: str) -> str:
    value = raw.strip().lower()
    if value not in CHAMPIONSHIP_PROVIDER_CONFIG:
        supported = ", ".join(sorted(CHAMPIONSHIP_PROVIDER_CONFIG))
        raise SystemExit(
            f"Unsupported championship: {value}. Supported championships: {supported}"
        )
    return value


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args()
    championship = _normalize_championship(args.championship)
    config = CHAMPIONSHIP_PROVIDER_CONFIG[championship]

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        credentials = load_provider_credentials(db)

    try:
        fixtures = fetch_fixtures_for_config(
            f"probe-{championship}",
            config,
            utc_now(),
            season_override=args.season,
            credentials=credentials,
        )
    except ProviderFetchError as exc:
        logging.error("Provider error: %s", exc)
        raise SystemExit(1)

    logging.info(
        "Fetched %s fixtures for championship=%s provider=%s",
        len(fixtures),
        championship,
        config.provider,
    )


if __name__ == "__main__":
    main()
