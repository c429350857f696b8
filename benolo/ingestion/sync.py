"""Sync provider fixtures into league matches."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from benolo.db import Base, SessionLocal, engine
from benolo.ingestion.fetch import fetch_fixtures_for_config
from benolo.ingestion.match_sync import build_upsert_payload, has_match_changed, normalize_fixture
from benolo.ingestion.provider_config import (
    CHAMPIONSHIP_PROVIDER_CONFIG,
    ChampionshipProviderConfig,
    get_provider_config,
)
from benolo.ingestion.schema import LeagueMatchRow, LeagueRow, MatchUpsertPayload, ProviderFixture
from benolo.ingestion.store import MatchStore, SqlAlchemyMatchStore, completion_procedure_from_env
from benolo.settings import ProviderCredentials, load_provider_credentials
from benolo.timeutils import ensure_utc, utc_now

logger = logging.getLogger(__name__)

FixtureFetcher = Callable[..., list[ProviderFixture]]


@dataclass
class SyncSummary:
    league_id: str
    league_name: str
    inserted: int = 0
    updated: int = 0
    skipped: bool = False
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "leagueId": self.league_id,
            "leagueName": self.league_name,
            "inserted": self.inserted,
            "updated": self.updated,
            "skipped": self.skipped,
        }
        if self.message is not None:
            payload["message"] = self.message
        return payload


def sync_league_matches(
    store: MatchStore,
    league: LeagueRow,
    config: ChampionshipProviderConfig,
    now: datetime,
    *,
    fetcher: FixtureFetcher = fetch_fixtures_for_config,
    credentials: ProviderCredentials | None = None,
    season_override: int | None = None,
) -> SyncSummary:
    fixtures = fetcher(
        league.id,
        config,
        now,
        season_override=season_override,
        credentials=credentials,
    )
    if not fixtures:
        logger.info("No fixtures returned for league=%s provider=%s", league.id, config.provider)
        return SyncSummary(
            league_id=league.id,
            league_name=league.name,
            message="No fixtures returned by provider",
        )

    normalized_fixtures = [normalize_fixture(fixture, now) for fixture in fixtures]

    existing_by_ref: dict[str, LeagueMatchRow] = {}
    for row in store.load_matches(league.id):
        if row.external_ref:
            existing_by_ref[str(row.external_ref)] = row

    inserts: list[MatchUpsertPayload] = []
    updates: list[tuple[str, MatchUpsertPayload]] = []
    for normalized in normalized_fixtures:
        existing = existing_by_ref.get(normalized.external_ref)
        payload = build_upsert_payload(league.id, normalized, config.provider)
        if existing is None:
            inserts.append(payload)
        elif has_match_changed(existing, normalized, now):
            updates.append((existing.id, payload))

    if inserts:
        store.insert_matches(inserts)
        logger.info("Inserted %s matches league=%s", len(inserts), league.id)

    for match_id, payload in updates:
        store.update_match(match_id, payload)
        logger.info(
            "Updated match id=%s external_ref=%s status=%s",
            match_id,
            payload.external_ref,
            payload.status.value,
        )

    summary = SyncSummary(
        league_id=league.id,
        league_name=league.name,
        inserted=len(inserts),
        updated=len(updates),
    )

    # Writes above are already committed; a completion failure must not hide them.
    try:
        store.evaluate_completion(league.id)
    except Exception as exc:
        store.rollback()
        logger.exception("Completion evaluation failed for league=%s", league.id)
        summary.message = f"Completion evaluation failed: {exc}"

    return summary


def sync_leagues(
    store: MatchStore,
    league_ids: list[str] | None = None,
    now: datetime | None = None,
    *,
    fetcher: FixtureFetcher = fetch_fixtures_for_config,
    provider_config: dict[str, ChampionshipProviderConfig] | None = None,
    credentials: ProviderCredentials | None = None,
    season_override: int | None = None,
) -> list[SyncSummary]:
    """Sync every requested league, one at a time.

    A league without a provider mapping, or one whose fetch/write fails, is
    reported as skipped; the remaining leagues still run.
    """

    current = ensure_utc(now) if now is not None else utc_now()
    configs = provider_config if provider_config is not None else CHAMPIONSHIP_PROVIDER_CONFIG
    summaries: list[SyncSummary] = []

    for league in store.list_leagues(league_ids or None):
        config = get_provider_config(league.championship, configs)
        if config is None:
            logger.warning(
                "No provider mapping for league=%s championship=%s",
                league.id,
                league.championship,
            )
            summaries.append(
                SyncSummary(
                    league_id=league.id,
                    league_name=league.name,
                    skipped=True,
                    message=f"No provider mapping for championship {league.championship}",
                )
            )
            continue

        try:
            summary = sync_league_matches(
                store,
                league,
                config,
                current,
                fetcher=fetcher,
                credentials=credentials,
                season_override=season_override,
            )
        except Exception as exc:
            store.rollback()
            logger.exception("Failed to sync league=%s", league.id)
            summary = SyncSummary(
                league_id=league.id,
                league_name=league.name,
                skipped=True,
                message=str(exc),
            )
        summaries.append(summary)

    return summaries


def run_sync(
    league_ids: list[str] | None = None,
    *,
    season_override: int | None = None,
) -> list[SyncSummary]:
    """Open a session, resolve provider keys, and sync the requested leagues."""

    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        credentials = load_provider_credentials(db)
        store = SqlAlchemyMatchStore(db, completion_procedure_from_env())
        summaries = sync_leagues(
            store,
            league_ids,
            credentials=credentials,
            season_override=season_override,
        )

    logger.info(
        "Sync done: leagues=%s inserted=%s updated=%s skipped=%s",
        len(summaries),
        sum(summary.inserted for summary in summaries),
        sum(summary.updated for summary in summaries),
        sum(1 for summary in summaries if summary.skipped),
    )
    return summaries
