"""Deterministic prediction scoring.

Mirrors the ``compute_prediction_points`` SQL function so leaderboard
recomputes and stored points agree.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ScoringRules:
    exact_score_points: int = 6
    outcome_points: int = 3
    confidence_multiplier: float = 1.1


DEFAULT_RULES = ScoringRules()


@dataclass(frozen=True)
class PredictionInput:
    predicted_home: Any = None
    predicted_away: Any = None
    actual_home: Any = None
    actual_away: Any = None
    confident: bool | None = False


def _normalize_score(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def _outcome(home: float, away: float) -> int:
    diff = home - away
    if diff == 0:
        return 0
    return 1 if diff > 0 else -1


def compute_prediction_points(
    prediction: PredictionInput,
    rules: ScoringRules = DEFAULT_RULES,
) -> float | int:
    """Return the points earned by a prediction.

    Missing or non-numeric scores on either side always yield ``0``; the
    confidence multiplier only boosts a non-zero result.
    """

    home_pred = _normalize_score(prediction.predicted_home)
    away_pred = _normalize_score(prediction.predicted_away)
    home_actual = _normalize_score(prediction.actual_home)
    away_actual = _normalize_score(prediction.actual_away)

    if home_pred is None or away_pred is None or home_actual is None or away_actual is None:
        return 0

    points: float | int = 0
    if home_pred == home_actual and away_pred == away_actual:
        points = rules.exact_score_points
    elif _outcome(home_pred, away_pred) == _outcome(home_actual, away_actual):
        points = rules.outcome_points

    if prediction.confident and points > 0:
        points *= rules.confidence_multiplier

    return points


def compute_prediction_points_rounded(
    prediction: PredictionInput,
    rules: ScoringRules = DEFAULT_RULES,
) -> float:
    return round(compute_prediction_points(prediction, rules), 2)
