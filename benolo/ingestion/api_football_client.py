"""API-Football (api-sports.io) client and fixture parser."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from typing import Any

from benolo.ingestion.http import ProviderFetchError, get_json
from benolo.ingestion.provider_config import ChampionshipProviderConfig
from benolo.ingestion.schema import ProviderFixture
from benolo.settings import ProviderCredentials

logger = logging.getLogger(__name__)
PROVIDER_NAME = "api-football"
DEFAULT_BASE_URL = "https://v3.football.api-sports.io"
DEFAULT_LOOKBACK_DAYS = 2
DEFAULT_LOOKAHEAD_DAYS = 7


def _int_env(key: str, fallback: int) -> int:
    raw = os.getenv(key)
    if not raw:
        return fallback
    try:
        return int(raw.strip())
    except ValueError:
        return fallback


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def fixture_window(now: datetime) -> tuple[str, str]:
    lookback = _int_env("SPORTS_DATA_LOOKBACK_DAYS", DEFAULT_LOOKBACK_DAYS)
    lookahead = _int_env("SPORTS_DATA_LOOKAHEAD_DAYS", DEFAULT_LOOKAHEAD_DAYS)
    start = (now - timedelta(days=lookback)).date().isoformat()
    end = (now + timedelta(days=lookahead)).date().isoformat()
    return start, end


def parse_fixtures(payload: Any) -> list[ProviderFixture]:
    """Parse an API-Football ``/fixtures`` response into ProviderFixture list."""

    entries = _dict(payload).get("response")
    if not isinstance(entries, list):
        return []

    fixtures: list[ProviderFixture] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        fixture = _dict(entry.get("fixture"))
        teams = _dict(entry.get("teams"))
        score = _dict(entry.get("score"))
        goals = _dict(entry.get("goals"))
        status = _dict(fixture.get("status"))
        home = _dict(teams.get("home"))
        away = _dict(teams.get("away"))

        fixture_id = _first_present(fixture.get("id"), entry.get("id"))
        if fixture_id is None:
            logger.warning("Skipping api-football fixture without id")
            continue

        home_score = _first_present(
            _dict(score.get("fulltime")).get("home"),
            _dict(score.get("extratime")).get("home"),
            _dict(score.get("penalty")).get("home"),
            goals.get("home"),
        )
        away_score = _first_present(
            _dict(score.get("fulltime")).get("away"),
            _dict(score.get("extratime")).get("away"),
            _dict(score.get("penalty")).get("away"),
            goals.get("away"),
        )

        metadata: dict[str, Any] = {}
        if status.get("long"):
            metadata["provider_status_long"] = status["long"]
        if _dict(entry.get("league")).get("round"):
            metadata["round"] = entry["league"]["round"]
        if _dict(fixture.get("venue")).get("name"):
            metadata["venue"] = fixture["venue"]["name"]
        if home.get("logo"):
            metadata["homeCrest"] = home["logo"]
        if away.get("logo"):
            metadata["awayCrest"] = away["logo"]

        raw_status = status.get("short") or status.get("long")
        fixtures.append(
            ProviderFixture(
                id=str(fixture_id),
                home_team=str(home.get("name") or "Home"),
                away_team=str(away.get("name") or "Away"),
                start_time=fixture.get("date"),
                status=raw_status if isinstance(raw_status, str) else None,
                home_score=home_score,
                away_score=away_score,
                metadata=metadata,
            )
        )

    return fixtures


def fetch_fixtures(
    config: ChampionshipProviderConfig,
    credentials: ProviderCredentials,
    now: datetime,
    *,
    season_override: int | None = None,
) -> list[ProviderFixture]:
    season = season_override or config.season
    if not config.league_id or not season:
        raise ProviderFetchError("api-football config requires league_id and season")

    api_key = (config.api_token or "").strip() or credentials.api_football_api_key
    if not api_key:
        raise ProviderFetchError(
            "Missing api-football API key. Checked keys: "
            "SPORTS_DATA_API_KEY, EDGE_SPORTS_DATA_API_KEY, app_settings"
        )

    base_url = os.getenv("SPORTS_DATA_API_URL", DEFAULT_BASE_URL).rstrip("/")
    date_from, date_to = fixture_window(now)
    params = {
        "league": str(config.league_id),
        "season": str(season),
        "from": date_from,
        "to": date_to,
    }

    logger.info(
        "Fetching api-football league=%s season=%s from=%s to=%s",
        config.league_id,
        season,
        date_from,
        date_to,
    )
    payload = get_json(
        PROVIDER_NAME,
        f"{base_url}/fixtures",
        headers={"x-apisports-key": api_key},
        params=params,
    )
    return parse_fixtures(payload)
