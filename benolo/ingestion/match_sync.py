"""Normalize provider fixtures and decide which stored matches need a write."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Mapping

from pydantic import ValidationError

from benolo.ingestion.schema import (
    ExistingMatchSnapshot,
    MatchStatus,
    MatchUpsertPayload,
    NormalizedFixture,
    ProviderFixture,
)
from benolo.timeutils import ensure_utc, format_iso_utc, parse_iso_datetime, utc_now

COMPLETED_MARKERS = frozenset(
    {
        "ft",
        "full_time",
        "ended",
        "finished",
        "completed",
        "match_finished",
        "after_pens",
        "pen",
        "aet",
        "final",
        "finalized",
        "terminated",
    }
)

LIVE_MARKERS = frozenset(
    {
        "live",
        "in_play",
        "inprogress",
        "1h",
        "2h",
        "ht",
        "et",
        "p",
        "pause",
        "paused",
        "halftime",
        "second_half",
        "first_half",
        "extra_time",
        "suspended",
    }
)

UPCOMING_MARKERS = frozenset(
    {
        "ns",
        "not_started",
        "scheduled",
        "timed",
        "tbd",
        "to_be_defined",
        "postponed",
        "delayed",
        "cancelled",
        "canceled",
    }
)

HOME_CREST_KEY = "homeCrest"
AWAY_CREST_KEY = "awayCrest"


def coerce_score(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def normalize_iso_string(value: Any, reference_date: datetime | None = None) -> str:
    parsed = parse_iso_datetime(value)
    if parsed is None:
        parsed = reference_date if reference_date is not None else utc_now()
    return format_iso_utc(parsed)


def _normalize_status_label(value: str | None) -> str | None:
    if not isinstance(value, str):
        return None
    return value.lower().strip()


def map_provider_status(
    provider_status: str | None,
    start_at: Any,
    home_score: int | float | None,
    away_score: int | float | None,
    now: datetime | None = None,
) -> MatchStatus:
    current = ensure_utc(now) if now is not None else utc_now()
    status = _normalize_status_label(provider_status)
    has_final_score = home_score is not None and away_score is not None

    if status and status in COMPLETED_MARKERS:
        return MatchStatus.COMPLETED

    if has_final_score and (not status or status not in UPCOMING_MARKERS):
        return MatchStatus.COMPLETED

    if status and status in LIVE_MARKERS:
        return MatchStatus.LIVE

    kickoff = parse_iso_datetime(start_at)
    has_started = kickoff is not None and kickoff <= current

    if has_started and (not status or status not in UPCOMING_MARKERS):
        return MatchStatus.COMPLETED if has_final_score else MatchStatus.LIVE

    return MatchStatus.UPCOMING


def normalize_fixture(
    fixture: ProviderFixture,
    reference_date: datetime | None = None,
) -> NormalizedFixture:
    reference = ensure_utc(reference_date) if reference_date is not None else utc_now()
    home_score = coerce_score(fixture.home_score)
    away_score = coerce_score(fixture.away_score)
    start_at = normalize_iso_string(fixture.start_time, reference)

    return NormalizedFixture(
        external_ref=fixture.id,
        home_team=fixture.home_team,
        away_team=fixture.away_team,
        start_at=start_at,
        status=map_provider_status(fixture.status, start_at, home_score, away_score, reference),
        home_score=home_score,
        away_score=away_score,
        raw_status=fixture.status,
        provider_meta=fixture.metadata,
    )


def _extract_crest(metadata: Any, key: str) -> str:
    if not isinstance(metadata, Mapping):
        return ""
    value = metadata.get(key)
    return value if isinstance(value, str) else ""


def _snapshot(existing: Any) -> ExistingMatchSnapshot:
    if isinstance(existing, ExistingMatchSnapshot):
        return existing
    try:
        return ExistingMatchSnapshot.model_validate(existing)
    except ValidationError:
        pass
    # Keep raw values; every comparison below tolerates arbitrary types.
    if isinstance(existing, Mapping):
        fields = {name: existing.get(name) for name in ExistingMatchSnapshot.model_fields}
    else:
        fields = {name: getattr(existing, name, None) for name in ExistingMatchSnapshot.model_fields}
    return ExistingMatchSnapshot.model_construct(**fields)


def has_match_changed(
    existing: ExistingMatchSnapshot | Mapping[str, Any] | None,
    normalized: NormalizedFixture,
    now: datetime | None = None,
) -> bool:
    """Return True when a stored match differs from a fresh fixture.

    Only start time, status, scores and the two crest URLs are compared; other
    metadata keys are volatile and never force a write.
    """

    if existing is None:
        return True
    existing = _snapshot(existing)

    existing_status = existing.status if existing.status is not None else MatchStatus.UPCOMING.value

    return (
        normalize_iso_string(existing.start_at, now) != normalized.start_at
        or existing_status != normalized.status.value
        or existing.home_score != normalized.home_score
        or existing.away_score != normalized.away_score
        or _extract_crest(existing.metadata, HOME_CREST_KEY)
        != _extract_crest(normalized.provider_meta, HOME_CREST_KEY)
        or _extract_crest(existing.metadata, AWAY_CREST_KEY)
        != _extract_crest(normalized.provider_meta, AWAY_CREST_KEY)
    )


def build_upsert_payload(
    league_id: str,
    normalized: NormalizedFixture,
    provider_name: str,
) -> MatchUpsertPayload:
    return MatchUpsertPayload(
        league_id=league_id,
        home_team=normalized.home_team,
        away_team=normalized.away_team,
        start_at=normalized.start_at,
        status=normalized.status,
        home_score=normalized.home_score,
        away_score=normalized.away_score,
        external_ref=normalized.external_ref,
        metadata={
            "provider": provider_name,
            "provider_status": normalized.raw_status,
            **(normalized.provider_meta or {}),
        },
    )
