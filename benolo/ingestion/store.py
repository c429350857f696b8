"""Read/write contract the sync orchestrator uses against the match store."""

from __future__ import annotations

import logging
import os
import re
from typing import Iterable, Protocol

from sqlalchemy import text
from sqlalchemy.orm import Session

from benolo.ingestion.schema import LeagueMatchRow, LeagueRow, MatchUpsertPayload
from benolo.models import League, LeagueMatch
from benolo.timeutils import parse_iso_datetime

logger = logging.getLogger(__name__)
DEFAULT_COMPLETION_PROCEDURE = "evaluate_league_completion"
COMPLETION_DIALECTS = frozenset({"postgresql"})
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class MatchStore(Protocol):
    def list_leagues(self, league_ids: list[str] | None = None) -> list[LeagueRow]: ...

    def load_matches(self, league_id: str) -> list[LeagueMatchRow]: ...

    def insert_matches(self, payloads: list[MatchUpsertPayload]) -> None: ...

    def update_match(self, match_id: str, payload: MatchUpsertPayload) -> None: ...

    def evaluate_completion(self, league_id: str) -> None: ...

    def rollback(self) -> None: ...


def completion_procedure_from_env() -> str | None:
    raw = os.getenv("LEAGUE_COMPLETION_PROCEDURE")
    if raw is None:
        return DEFAULT_COMPLETION_PROCEDURE
    return raw.strip() or None


class SqlAlchemyMatchStore:
    """MatchStore backed by a SQLAlchemy session.

    Inserts are committed as one batch; each update is committed on its own.
    """

    def __init__(self, db: Session, completion_procedure: str | None = DEFAULT_COMPLETION_PROCEDURE):
        if completion_procedure and not _IDENTIFIER_RE.match(completion_procedure):
            raise ValueError(f"Invalid completion procedure name: {completion_procedure!r}")
        self.db = db
        self.completion_procedure = completion_procedure

    def list_leagues(self, league_ids: list[str] | None = None) -> list[LeagueRow]:
        query = self.db.query(League).filter(League.championship.isnot(None))
        if league_ids:
            query = query.filter(League.id.in_(league_ids))
        return [LeagueRow.model_validate(league) for league in query.all()]

    def load_matches(self, league_id: str) -> list[LeagueMatchRow]:
        rows = self.db.query(LeagueMatch).filter(LeagueMatch.league_id == league_id).all()
        return [
            LeagueMatchRow(
                id=row.id,
                external_ref=row.external_ref,
                start_at=row.start_at,
                status=row.status,
                home_score=row.home_score,
                away_score=row.away_score,
                metadata=row.match_metadata,
            )
            for row in rows
        ]

    def insert_matches(self, payloads: Iterable[MatchUpsertPayload]) -> None:
        self.db.add_all(
            LeagueMatch(
                league_id=payload.league_id,
                home_team=payload.home_team,
                away_team=payload.away_team,
                start_at=parse_iso_datetime(payload.start_at),
                status=payload.status.value,
                home_score=payload.home_score,
                away_score=payload.away_score,
                external_ref=payload.external_ref,
                match_metadata=payload.metadata,
            )
            for payload in payloads
        )
        self.db.commit()

    def update_match(self, match_id: str, payload: MatchUpsertPayload) -> None:
        match = self.db.query(LeagueMatch).filter(LeagueMatch.id == match_id).one_or_none()
        if match is None:
            raise LookupError(f"Match {match_id} not found")
        match.start_at = parse_iso_datetime(payload.start_at)
        match.status = payload.status.value
        match.home_score = payload.home_score
        match.away_score = payload.away_score
        match.match_metadata = payload.metadata
        self.db.commit()

    def evaluate_completion(self, league_id: str) -> None:
        if not self.completion_procedure:
            logger.debug("Completion procedure disabled; skipping league=%s", league_id)
            return
        dialect = self.db.get_bind().dialect.name
        if dialect not in COMPLETION_DIALECTS:
            logger.info(
                "Completion procedure %s needs PostgreSQL; skipping league=%s on %s",
                self.completion_procedure,
                league_id,
                dialect,
            )
            return
        self.db.execute(
            text(f"SELECT {self.completion_procedure}(:p_league_id)"),
            {"p_league_id": league_id},
        )
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
