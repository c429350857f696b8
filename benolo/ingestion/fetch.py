"""Dispatch a championship config to its provider adapter."""

from __future__ import annotations

from datetime import datetime

from benolo.ingestion import api_football_client, football_data_client, mock_provider
from benolo.ingestion.http import ProviderFetchError
from benolo.ingestion.provider_config import ChampionshipProviderConfig
from benolo.ingestion.schema import ProviderFixture
from benolo.settings import ProviderCredentials


def fetch_fixtures_for_config(
    league_id: str,
    config: ChampionshipProviderConfig,
    now: datetime,
    *,
    season_override: int | None = None,
    credentials: ProviderCredentials | None = None,
) -> list[ProviderFixture]:
    credentials = credentials or ProviderCredentials()
    if config.provider == "mock":
        return mock_provider.fetch_fixtures(league_id, now)
    if config.provider == "api-football":
        return api_football_client.fetch_fixtures(
            config, credentials, now, season_override=season_override
        )
    if config.provider == "football-data":
        return football_data_client.fetch_fixtures(
            config, credentials, season_override=season_override
        )
    raise ProviderFetchError(f"Unsupported provider: {config.provider}")
