from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SyncSummaryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    league_id: str = Field(alias="leagueId")
    league_name: str = Field(alias="leagueName")
    inserted: int
    updated: int
    skipped: bool
    message: Optional[str] = None


class SyncResponse(BaseModel):
    processed: int
    results: list[SyncSummaryOut]


class LeagueStartedOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    league_id: str = Field(alias="leagueId")
    started: bool


class LeaderboardEntryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    score: float


class ProviderKeysIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    football_data_api_key: Optional[str] = Field(default=None, alias="footballDataApiKey")
    api_football_api_key: Optional[str] = Field(default=None, alias="apiFootballApiKey")


class ProviderKeysOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_football_data_key: bool = Field(alias="hasFootballDataKey")
    has_api_football_key: bool = Field(alias="hasApiFootballKey")


class TransactionLoggedOut(BaseModel):
    success: bool
    id: Optional[int] = None
