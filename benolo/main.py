from __future__ import annotations

import asyncio
import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from benolo.db import Base, engine, get_db
from benolo.ingestion.sync import run_sync
from benolo.leagues.start import StartableLeague, has_league_started
from benolo.log_buffer import get_buffer_handler, install_buffer_handler
from benolo.models import League
from benolo.schemas import (
    LeaderboardEntryOut,
    LeagueStartedOut,
    ProviderKeysIn,
    ProviderKeysOut,
    SyncResponse,
    SyncSummaryOut,
    TransactionLoggedOut,
)
from benolo.scoring.leaderboard import compute_leaderboard, update_prediction_points
from benolo.settings import get_or_create_settings, store_provider_keys
from benolo.transactions.ledger import TransactionLogError, log_league_transaction

app = FastAPI(title="Benolo League Sync")
logger = logging.getLogger(__name__)
SYNC_SECRET_HEADERS = ("x-sync-secret", "x-benolo-sync-secret", "authorization")
_auto_sync_task: asyncio.Task | None = None
_auto_sync_stop: asyncio.Event | None = None


def _is_authorized(request: Request) -> bool:
    secret = (os.getenv("SYNC_MATCHES_SECRET") or "").strip()
    if not secret:
        return True
    for header in SYNC_SECRET_HEADERS:
        value = request.headers.get(header)
        if not value:
            continue
        candidate = value.strip()
        if candidate == secret or candidate == f"Bearer {secret}":
            return True
    return False


async def _read_json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _collect_league_ids(query_league_id: str | None, body: dict) -> list[str]:
    candidates: list[str] = []
    if query_league_id:
        candidates.append(query_league_id)
    if isinstance(body.get("leagueId"), str):
        candidates.append(body["leagueId"])
    if isinstance(body.get("leagueIds"), list):
        candidates.extend(value for value in body["leagueIds"] if isinstance(value, str))

    league_ids: list[str] = []
    for league_id in candidates:
        if league_id not in league_ids:
            league_ids.append(league_id)
    return league_ids


async def _auto_sync_loop(interval_minutes: int) -> None:
    logger.info("Auto-sync enabled: interval=%s minutes", interval_minutes)
    while _auto_sync_stop and not _auto_sync_stop.is_set():
        try:
            await asyncio.to_thread(run_sync)
        except Exception:
            logger.exception("Auto-sync failed.")
        try:
            await asyncio.wait_for(
                _auto_sync_stop.wait(),
                timeout=interval_minutes * 60,
            )
        except asyncio.TimeoutError:
            continue


@app.on_event("startup")
async def start_auto_sync() -> None:
    global _auto_sync_task, _auto_sync_stop
    install_buffer_handler()
    Base.metadata.create_all(bind=engine)
    interval_minutes = int(os.getenv("AUTO_SYNC_INTERVAL_MINUTES", "0") or "0")
    if interval_minutes < 1:
        logger.info("Auto-sync disabled (AUTO_SYNC_INTERVAL_MINUTES=%s)", interval_minutes)
        return
    _auto_sync_stop = asyncio.Event()
    _auto_sync_task = asyncio.create_task(_auto_sync_loop(interval_minutes))


@app.on_event("shutdown")
async def stop_auto_sync() -> None:
    global _auto_sync_task, _auto_sync_stop
    if _auto_sync_stop:
        _auto_sync_stop.set()
    if _auto_sync_task:
        await _auto_sync_task
    _auto_sync_task = None
    _auto_sync_stop = None


@app.post("/functions/sync-matches", response_model=SyncResponse, response_model_exclude_none=True)
async def sync_matches(request: Request):
    if not _is_authorized(request):
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    try:
        body = await _read_json_body(request)
        league_ids = _collect_league_ids(request.query_params.get("leagueId"), body)
        summaries = await asyncio.to_thread(run_sync, league_ids or None)
    except Exception as exc:
        logger.exception("sync-matches failed")
        return JSONResponse({"error": str(exc)}, status_code=500)

    return SyncResponse(
        processed=len(summaries),
        results=[SyncSummaryOut.model_validate(summary.to_dict()) for summary in summaries],
    )


@app.post("/functions/log-transaction", response_model=TransactionLoggedOut)
def log_transaction(payload: dict, db: Session = Depends(get_db)):
    try:
        transaction = log_league_transaction(db, payload)
    except TransactionLogError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return TransactionLoggedOut(success=True, id=transaction.id)


def _get_league(db: Session, league_id: str) -> League:
    league = db.query(League).filter(League.id == league_id).one_or_none()
    if not league:
        raise HTTPException(status_code=404, detail="League not found")
    return league


@app.get("/api/leagues/{league_id}/started", response_model=LeagueStartedOut)
def api_league_started(league_id: str, db: Session = Depends(get_db)):
    league = _get_league(db, league_id)
    started = has_league_started(StartableLeague.model_validate(league))
    return LeagueStartedOut(league_id=league.id, started=started)


@app.get("/api/leagues/{league_id}/leaderboard", response_model=list[LeaderboardEntryOut])
def api_league_leaderboard(league_id: str, db: Session = Depends(get_db)):
    _get_league(db, league_id)
    return [
        LeaderboardEntryOut(user_id=entry.user_id, score=entry.score)
        for entry in compute_leaderboard(db, league_id)
    ]


@app.post("/api/predictions/update-points")
def api_update_points(league_id: str | None = None, db: Session = Depends(get_db)):
    updated = update_prediction_points(db, league_id)
    return {"updated": updated}


@app.get("/api/settings/provider-keys", response_model=ProviderKeysOut)
def api_provider_keys(db: Session = Depends(get_db)):
    settings = get_or_create_settings(db)
    return ProviderKeysOut(
        has_football_data_key=bool(settings.football_data_api_key_enc),
        has_api_football_key=bool(settings.api_football_api_key_enc),
    )


@app.post("/api/settings/provider-keys", response_model=ProviderKeysOut)
def api_save_provider_keys(payload: ProviderKeysIn, db: Session = Depends(get_db)):
    settings = store_provider_keys(
        db,
        football_data_api_key=payload.football_data_api_key,
        api_football_api_key=payload.api_football_api_key,
    )
    return ProviderKeysOut(
        has_football_data_key=bool(settings.football_data_api_key_enc),
        has_api_football_key=bool(settings.api_football_api_key_enc),
    )


@app.get("/api/logs")
def api_logs(limit: int = 100, level: str | None = None):
    min_level = logging.getLevelName(level.upper()) if level else logging.NOTSET
    if not isinstance(min_level, int):
        raise HTTPException(status_code=400, detail=f"Unknown log level: {level}")
    return {"entries": get_buffer_handler().entries(limit=limit, min_level=min_level)}
