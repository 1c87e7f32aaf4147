import os
import sys
import itertools
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import ExpectedRepsEstimator, MathTools
from algorithms.models import SetMetrics


def _metrics(weight: float, reps: int, rpe: float | None = None) -> SetMetrics:
    return SetMetrics(
        weight=weight,
        reps=reps,
        volume=weight * reps,
        one_rm=MathTools.epley_1rm(weight, reps),
        rpe=rpe,
    )


def _one_rm(value: float) -> SetMetrics:
    return SetMetrics(weight=value, reps=1, volume=value, one_rm=value)


class ExpectedRepsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.estimator = ExpectedRepsEstimator()

    def test_rpe_adjustment(self) -> None:
        adjust = ExpectedRepsEstimator.adjust_one_rm_for_rpe
        self.assertAlmostEqual(adjust(100.0, 7), 104.0)
        self.assertAlmostEqual(adjust(100.0, 6), 106.0)
        self.assertAlmostEqual(adjust(100.0, 9), 100.0)
        self.assertAlmostEqual(adjust(100.0, 10), 100.0)
        self.assertAlmostEqual(adjust(100.0, 5), 100.0)
        self.assertAlmostEqual(adjust(100.0, None), 100.0)
        self.assertEqual(adjust(0.0, 7), 0.0)

    def test_no_prior_data(self) -> None:
        rng = self.estimator.estimate([], 100.0, 2)
        self.assertEqual((rng.min, rng.max, rng.center, rng.label), (1, 1, 1.0, "~1"))
        rng = self.estimator.estimate([_metrics(100, 10)], 0.0, 2)
        self.assertEqual(rng.label, "~1")
        rng = self.estimator.estimate([_metrics(0, 10)], 100.0, 2)
        self.assertEqual(rng.label, "~1")

    def test_single_prior_set(self) -> None:
        rng = self.estimator.estimate([_metrics(100, 10)], 110.0, 2)
        self.assertAlmostEqual(rng.center, 6.0)
        self.assertEqual((rng.min, rng.max), (5, 7))
        self.assertEqual(rng.label, "5-7")

    def test_fatigue_penalty_is_capped(self) -> None:
        early = self.estimator.estimate([_metrics(100, 10)], 90.0, 2)
        late = self.estimator.estimate([_metrics(100, 10)], 90.0, 20)
        self.assertAlmostEqual(early.center, 14.0)
        self.assertAlmostEqual(late.center, 14.4 - 3.0)

    def test_rpe_raises_prediction(self) -> None:
        plain = self.estimator.estimate([_metrics(100, 8)], 100.0, 2)
        easy = self.estimator.estimate([_metrics(100, 8, rpe=6)], 100.0, 2)
        self.assertGreater(easy.center, plain.center)

    def test_spread_widens_band(self) -> None:
        prior = [_one_rm(v) for v in (100.0, 120.0, 140.0, 160.0)]
        rng = self.estimator.estimate(prior, 100.0, 5)
        self.assertAlmostEqual(rng.center, 11.9)
        self.assertEqual((rng.min, rng.max), (9, 14))

    def test_only_last_four_sets_count(self) -> None:
        prior = [_one_rm(500.0)] + [_one_rm(120.0)] * 4
        rng = self.estimator.estimate(prior, 100.0, 2)
        self.assertAlmostEqual(rng.center, 5.6)

    def test_light_target_is_capped(self) -> None:
        rng = self.estimator.estimate([_metrics(100, 10)], 20.0, 2)
        self.assertEqual(rng.center, 25.0)
        self.assertEqual((rng.min, rng.max), (24, 25))

    def test_bounds_invariant(self) -> None:
        weights = [20.0, 60.0, 100.0, 140.0]
        reps = [1, 3, 8, 15, 30]
        rpes = [None, 6, 8.5, 10]
        for w, r, rpe, target, set_number in itertools.product(
            weights, reps, rpes, [5.0, 80.0, 150.0, 400.0], [1, 2, 6, 12]
        ):
            prior = [_metrics(w, r, rpe), _metrics(w * 1.1, max(r - 2, 1), rpe)]
            rng = self.estimator.estimate(prior, target, set_number)
            self.assertLessEqual(1, rng.min)
            self.assertLessEqual(rng.min, rng.center)
            self.assertLessEqual(rng.center, rng.max)
            self.assertLessEqual(rng.max, 25)


if __name__ == "__main__":
    unittest.main()
