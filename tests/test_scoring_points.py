from __future__ import annotations

import unittest
from decimal import Decimal

from benolo.scoring.points import (
    PredictionInput,
    ScoringRules,
    compute_prediction_points,
    compute_prediction_points_rounded,
)


def _prediction(ph, pa, ah, aa, confident=False) -> PredictionInput:
    return PredictionInput(
        predicted_home=ph,
        predicted_away=pa,
        actual_home=ah,
        actual_away=aa,
        confident=confident,
    )


class ComputePredictionPointsTests(unittest.TestCase):
    def test_exact_score_earns_six(self) -> None:
        self.assertEqual(6, compute_prediction_points(_prediction(2, 1, 2, 1)))

    def test_exact_score_with_confidence_is_boosted(self) -> None:
        self.assertAlmostEqual(6.6, compute_prediction_points(_prediction(0, 0, 0, 0, True)))

    def test_correct_outcome_earns_three(self) -> None:
        self.assertEqual(3, compute_prediction_points(_prediction(3, 1, 2, 0)))

    def test_correct_draw_outcome_earns_three(self) -> None:
        self.assertEqual(3, compute_prediction_points(_prediction(1, 1, 2, 2)))

    def test_wrong_outcome_earns_nothing(self) -> None:
        self.assertEqual(0, compute_prediction_points(_prediction(0, 2, 1, 0)))

    def test_confidence_never_turns_zero_into_points(self) -> None:
        self.assertEqual(0, compute_prediction_points(_prediction(0, 2, 1, 0, True)))

    def test_missing_score_returns_zero_regardless_of_confidence(self) -> None:
        cases = [
            _prediction(None, 1, 1, 1, True),
            _prediction(1, None, 1, 1),
            _prediction(1, 1, None, 1, True),
            _prediction(1, 1, 1, None),
        ]
        for case in cases:
            with self.subTest(case=case):
                self.assertEqual(0, compute_prediction_points(case))

    def test_non_numeric_scores_return_zero(self) -> None:
        self.assertEqual(0, compute_prediction_points(_prediction("2", 1, 2, 1)))
        self.assertEqual(0, compute_prediction_points(_prediction(True, 1, 1, 1)))
        self.assertEqual(0, compute_prediction_points(_prediction(float("nan"), 1, 1, 1)))

    def test_decimal_scores_are_accepted(self) -> None:
        self.assertEqual(6, compute_prediction_points(_prediction(Decimal("2"), 0, 2, Decimal("0"))))

    def test_custom_rules(self) -> None:
        rules = ScoringRules(exact_score_points=10, outcome_points=4, confidence_multiplier=2)
        self.assertEqual(20, compute_prediction_points(_prediction(1, 0, 1, 0, True), rules))
        self.assertEqual(4, compute_prediction_points(_prediction(2, 0, 1, 0), rules))


class ComputePredictionPointsRoundedTests(unittest.TestCase):
    def test_confident_outcome_rounds_to_three_point_three(self) -> None:
        self.assertEqual(3.3, compute_prediction_points_rounded(_prediction(2, 0, 1, 0, True)))

    def test_confident_exact_rounds_to_six_point_six(self) -> None:
        self.assertEqual(6.6, compute_prediction_points_rounded(_prediction(1, 0, 1, 0, True)))


if __name__ == "__main__":
    unittest.main()
