"""football-data.org client and match parser."""

from __future__ import annotations

import logging
import os
from typing import Any

from benolo.ingestion.http import ProviderFetchError, get_json
from benolo.ingestion.provider_config import ChampionshipProviderConfig
from benolo.ingestion.schema import ProviderFixture
from benolo.settings import ProviderCredentials

logger = logging.getLogger(__name__)
PROVIDER_NAME = "football-data"
DEFAULT_BASE_URL = "https://api.football-data.org/v4"


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _pick_side(score: dict[str, Any], side: str) -> Any:
    return _first_present(
        _dict(score.get("fullTime")).get(side),
        _dict(score.get("extraTime")).get(side),
        _dict(score.get("penalties")).get(side),
    )


def _build_metadata(
    match: dict[str, Any],
    competition: dict[str, Any],
    filters: dict[str, Any],
    result_set: dict[str, Any],
) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    season = _dict(match.get("season"))

    if match.get("matchday") is not None:
        metadata["matchday"] = match["matchday"]
    if match.get("stage"):
        metadata["stage"] = match["stage"]
    if match.get("group"):
        metadata["group"] = match["group"]
    if match.get("lastUpdated"):
        metadata["lastUpdated"] = match["lastUpdated"]
    if competition.get("code"):
        metadata["competitionCode"] = competition["code"]
    if competition.get("name"):
        metadata["competitionName"] = competition["name"]
    if season.get("startDate"):
        metadata["seasonStart"] = season["startDate"]
    if season.get("endDate"):
        metadata["seasonEnd"] = season["endDate"]
    if season.get("currentMatchday") is not None:
        metadata["currentMatchday"] = season["currentMatchday"]
    if filters.get("season"):
        metadata["filterSeason"] = filters["season"]
    if filters.get("matchday"):
        metadata["filterMatchday"] = filters["matchday"]
    if result_set.get("first"):
        metadata["rangeStart"] = result_set["first"]
    if result_set.get("last"):
        metadata["rangeEnd"] = result_set["last"]
    if result_set.get("count") is not None:
        metadata["rangeCount"] = result_set["count"]
    if _dict(match.get("area")).get("name"):
        metadata["area"] = match["area"]["name"]
    if _dict(match.get("odds")).get("msg"):
        metadata["oddsMessage"] = match["odds"]["msg"]

    referees = match.get("referees")
    if isinstance(referees, list) and referees:
        metadata["referees"] = [
            {
                "id": _dict(ref).get("id"),
                "name": _dict(ref).get("name"),
                "type": _dict(ref).get("type"),
                "nationality": _dict(ref).get("nationality"),
            }
            for ref in referees
        ]

    home_crest = _dict(match.get("homeTeam")).get("crest")
    away_crest = _dict(match.get("awayTeam")).get("crest")
    if home_crest:
        metadata["homeCrest"] = home_crest
    if away_crest:
        metadata["awayCrest"] = away_crest
    return metadata


def parse_matches(payload: Any) -> list[ProviderFixture]:
    """Parse a ``/competitions/{code}/matches`` payload into ProviderFixture list."""

    payload = _dict(payload)
    matches = payload.get("matches")
    if not isinstance(matches, list):
        return []

    filters = _dict(payload.get("filters"))
    result_set = _dict(payload.get("resultSet"))
    fixtures: list[ProviderFixture] = []

    for match in matches:
        if not isinstance(match, dict):
            continue
        match_id = match.get("id")
        if match_id is None:
            logger.warning("Skipping football-data match without id")
            continue

        score = _dict(match.get("score"))
        competition = _dict(match.get("competition")) or _dict(payload.get("competition"))
        home_team = _dict(match.get("homeTeam"))
        away_team = _dict(match.get("awayTeam"))

        fixtures.append(
            ProviderFixture(
                id=str(match_id),
                home_team=str(home_team.get("name") or home_team.get("shortName") or "Home"),
                away_team=str(away_team.get("name") or away_team.get("shortName") or "Away"),
                start_time=match.get("utcDate"),
                status=match.get("status") if isinstance(match.get("status"), str) else None,
                home_score=_pick_side(score, "home"),
                away_score=_pick_side(score, "away"),
                metadata=_build_metadata(match, competition, filters, result_set),
            )
        )

    return fixtures


def fetch_fixtures(
    config: ChampionshipProviderConfig,
    credentials: ProviderCredentials,
    *,
    season_override: int | None = None,
) -> list[ProviderFixture]:
    season = season_override or config.season
    if not config.competition_code:
        raise ProviderFetchError("football-data config requires competition_code")

    api_key = (config.api_token or "").strip() or credentials.football_data_api_key
    if not api_key:
        raise ProviderFetchError(
            "Missing football-data API key. Checked keys: "
            "FOOTBALL_DATA_API_KEY, EDGE_FOOTBALL_DATA_API_KEY, app_settings"
        )

    base_url = os.getenv("FOOTBALL_DATA_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
    params = {"season": str(season)} if season else None
    url = f"{base_url}/competitions/{config.competition_code}/matches"

    logger.info("Fetching football-data competition=%s season=%s", config.competition_code, season)
    payload = get_json(PROVIDER_NAME, url, headers={"X-Auth-Token": api_key}, params=params)
    return parse_matches(payload)
