"""Deterministic placeholder fixtures for championships without a real feed."""

from __future__ import annotations

from datetime import datetime, timedelta

from benolo.ingestion.schema import ProviderFixture
from benolo.timeutils import format_iso_utc

_MOCK_PAIRINGS = (
    ("Demo FC", "Sample United"),
    ("Placeholder Town", "Fallback City"),
)


def fetch_fixtures(league_id: str, now: datetime) -> list[ProviderFixture]:
    return [
        ProviderFixture(
            id=f"{league_id}-mock-{index}",
            home_team=home,
            away_team=away,
            start_time=format_iso_utc(now + timedelta(days=index)),
            status="NS",
        )
        for index, (home, away) in enumerate(_MOCK_PAIRINGS, start=1)
    ]
