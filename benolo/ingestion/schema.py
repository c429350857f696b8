"""Internal data contracts for fixture ingestion."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class MatchStatus(str, Enum):
    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"


class ProviderFixture(BaseModel):
    """
    Fixture as returned by a provider adapter. Values are untrusted: the start
    time may not be ISO and scores may be numbers, numeric strings, or absent.
    """

    id: str
    home_team: str
    away_team: str
    start_time: Any = None

    status: Optional[str] = None
    home_score: Any = None
    away_score: Any = None
    metadata: Optional[dict[str, Any]] = None


class NormalizedFixture(BaseModel):
    external_ref: str
    home_team: str
    away_team: str
    start_at: str
    status: MatchStatus
    home_score: Optional[int | float] = None
    away_score: Optional[int | float] = None
    raw_status: Optional[str] = None
    provider_meta: Optional[dict[str, Any]] = None


class ExistingMatchSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_at: Optional[datetime | str] = None
    status: Optional[str] = None
    home_score: Optional[int | float] = None
    away_score: Optional[int | float] = None
    metadata: Optional[Any] = None


class LeagueMatchRow(ExistingMatchSnapshot):
    id: str
    external_ref: Optional[str] = None


class LeagueRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    championship: Optional[str] = None
    status: Optional[str] = None


class MatchUpsertPayload(BaseModel):
    league_id: str
    home_team: str
    away_team: str
    start_at: str
    status: MatchStatus
    home_score: Optional[int | float] = None
    away_score: Optional[int | float] = None
    external_ref: str
    metadata: dict[str, Any]
