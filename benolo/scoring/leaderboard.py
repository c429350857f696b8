"""Persist prediction points and aggregate league leaderboards."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from benolo.models import LeagueMatch, LeaguePrediction
from benolo.scoring.points import PredictionInput, compute_prediction_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    user_id: str
    score: float


def _prediction_input(prediction: LeaguePrediction, match: LeagueMatch | None) -> PredictionInput:
    return PredictionInput(
        predicted_home=prediction.home_score,
        predicted_away=prediction.away_score,
        actual_home=match.home_score if match is not None else None,
        actual_away=match.away_score if match is not None else None,
        confident=bool(prediction.confident),
    )


def update_prediction_points(db: Session, league_id: str | None = None) -> int:
    """Recompute and store points for every prediction on a resolved match.

    Returns the number of predictions updated.
    """

    query = db.query(LeagueMatch).filter(
        LeagueMatch.home_score.isnot(None),
        LeagueMatch.away_score.isnot(None),
    )
    if league_id:
        query = query.filter(LeagueMatch.league_id == league_id)

    updated = 0
    for match in query.all():
        predictions = (
            db.query(LeaguePrediction).filter(LeaguePrediction.match_id == match.id).all()
        )
        for prediction in predictions:
            prediction.points = float(compute_prediction_points(_prediction_input(prediction, match)))
            prediction.status = "submitted"
            updated += 1
            logger.debug("Prediction id=%s points=%s", prediction.id, prediction.points)

    db.commit()
    logger.info("Updated points for %s predictions", updated)
    return updated


def compute_leaderboard(db: Session, league_id: str) -> list[LeaderboardEntry]:
    matches = {
        match.id: match
        for match in db.query(LeagueMatch).filter(LeagueMatch.league_id == league_id).all()
    }
    predictions = (
        db.query(LeaguePrediction).filter(LeaguePrediction.league_id == league_id).all()
    )

    totals: dict[str, float] = {}
    for prediction in predictions:
        points = compute_prediction_points(
            _prediction_input(prediction, matches.get(prediction.match_id))
        )
        totals[prediction.user_id] = totals.get(prediction.user_id, 0) + points

    entries = [LeaderboardEntry(user_id=user_id, score=score) for user_id, score in totals.items()]
    entries.sort(key=lambda entry: (-entry.score, entry.user_id))
    return entries
