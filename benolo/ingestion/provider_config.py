"""Championship to fixture-provider mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

ProviderDriver = Literal["api-football", "football-data", "mock"]


@dataclass(frozen=True)
class ChampionshipProviderConfig:
    provider: ProviderDriver
    league_id: Optional[int] = None
    competition_code: Optional[str] = None
    season: Optional[int] = None
    timezone: Optional[str] = None
    api_token: Optional[str] = None


CHAMPIONSHIP_PROVIDER_CONFIG: dict[str, ChampionshipProviderConfig] = {
    "premier-league": ChampionshipProviderConfig("football-data", competition_code="PL", season=2025),
    "champions-league": ChampionshipProviderConfig("football-data", competition_code="CL", season=2025),
    "la-liga": ChampionshipProviderConfig("api-football", league_id=140, season=2025),
    "serie-a": ChampionshipProviderConfig("api-football", league_id=135, season=2025),
    "bundesliga": ChampionshipProviderConfig("football-data", competition_code="BL1", season=2025),
    "ligue-1": ChampionshipProviderConfig("football-data", competition_code="FL1", season=2025),
    "nba": ChampionshipProviderConfig("mock"),
    "nfl": ChampionshipProviderConfig("mock"),
}


def get_provider_config(
    championship: str | None,
    configs: dict[str, ChampionshipProviderConfig] | None = None,
) -> ChampionshipProviderConfig | None:
    """Return the provider config for a championship key.

    Returns None when the championship has no provider mapping.
    """

    if not championship:
        return None
    return (configs if configs is not None else CHAMPIONSHIP_PROVIDER_CONFIG).get(championship)
