"""Decide whether a league's competitive phase has begun."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from benolo.timeutils import ensure_utc, parse_iso_datetime, utc_now

STARTED_STATUSES = frozenset({"active", "completed"})


class StartableLeague(BaseModel):
    """Read-only projection of the league fields that drive the start trigger."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    start_condition: Optional[str] = "date"
    start_min_participants: Optional[int | float] = None
    start_at: Optional[datetime | str] = None
    signup_deadline: Optional[datetime | str] = None
    participants: Optional[int | float] = 0
    status: Optional[str] = None


def _read(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _lenient_number(value: Any) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return math.nan
    return math.nan


def _lenient_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _lenient_instant(value: Any) -> datetime | str | None:
    return value if isinstance(value, (datetime, str)) else None


def project_league(league: Any) -> StartableLeague:
    """Build a StartableLeague from a mapping or object without ever raising.

    Values of the wrong type are coerced: unreadable counts become NaN (which
    never satisfies a threshold), non-string labels become None.
    """

    if isinstance(league, StartableLeague):
        return league
    try:
        return StartableLeague.model_validate(league)
    except ValidationError:
        pass
    participants = _read(league, "participants")
    return StartableLeague.model_construct(
        start_condition=_lenient_text(_read(league, "start_condition")),
        start_min_participants=_lenient_number(_read(league, "start_min_participants")),
        start_at=_lenient_instant(_read(league, "start_at")),
        signup_deadline=_lenient_instant(_read(league, "signup_deadline")),
        participants=0 if participants is None else _lenient_number(participants),
        status=_lenient_text(_read(league, "status")),
    )


def has_league_started(
    league: StartableLeague | Mapping[str, Any] | None,
    now: datetime | None = None,
) -> bool:
    if league is None:
        return True
    league = project_league(league)

    if league.status in STARTED_STATUSES:
        return True

    condition = league.start_condition or "date"
    if condition == "participants":
        if league.start_min_participants is None:
            return False
        return (league.participants or 0) >= league.start_min_participants

    start_source = league.start_at if league.start_at is not None else league.signup_deadline
    if not start_source:
        return True

    start_instant = parse_iso_datetime(start_source)
    if start_instant is None:
        return False
    current = ensure_utc(now) if now is not None else utc_now()
    return start_instant <= current
