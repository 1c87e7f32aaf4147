import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import MathTools, WeightConverter


class MathToolsTestCase(unittest.TestCase):
    def test_constants(self) -> None:
        self.assertAlmostEqual(MathTools.EPLEY_FACTOR, 30.0)
        self.assertEqual(MathTools.MAX_REPS_FOR_1RM, 12)

    def test_clamp(self) -> None:
        self.assertEqual(MathTools.clamp(5, 0, 10), 5)
        self.assertEqual(MathTools.clamp(-1, 0, 10), 0)
        self.assertEqual(MathTools.clamp(11, 0, 10), 10)
        with self.assertRaises(ValueError):
            MathTools.clamp(1, 2, 1)

    def test_epley_1rm(self) -> None:
        self.assertAlmostEqual(MathTools.epley_1rm(100, 10), 133.33)
        self.assertAlmostEqual(MathTools.epley_1rm(100, 15), 140.0)
        self.assertAlmostEqual(MathTools.epley_1rm(100, 12), 140.0)
        self.assertEqual(MathTools.epley_1rm(0, 5), 0.0)
        self.assertEqual(MathTools.epley_1rm(100, 0), 0.0)
        self.assertEqual(MathTools.epley_1rm(-20, 5), 0.0)

    def test_predict_reps(self) -> None:
        self.assertAlmostEqual(MathTools.predict_reps(133.33, 110), 6.4)
        self.assertEqual(MathTools.predict_reps(100, 120), 1.0)
        self.assertEqual(MathTools.predict_reps(100, 100), 1.0)
        self.assertEqual(MathTools.predict_reps(0, 100), 0.0)
        self.assertEqual(MathTools.predict_reps(100, 0), 0.0)

    def test_percent_change(self) -> None:
        self.assertAlmostEqual(MathTools.percent_change(100, 110), 10.0)
        self.assertAlmostEqual(MathTools.percent_change(10, 7), -30.0)
        self.assertAlmostEqual(MathTools.percent_change(3, 2), -33.3)
        self.assertEqual(MathTools.percent_change(0, 5), 100.0)
        self.assertEqual(MathTools.percent_change(0, 0), 0.0)

    def test_statistics(self) -> None:
        self.assertAlmostEqual(MathTools.percentile([1, 2, 3, 4], 0.75), 3.25)
        self.assertAlmostEqual(MathTools.percentile([4, 1, 3, 2], 0.25), 1.75)
        self.assertAlmostEqual(MathTools.median([1, 2, 3, 4]), 2.5)
        self.assertAlmostEqual(MathTools.mean([1, 2, 3]), 2.0)
        self.assertEqual(MathTools.percentile([], 0.5), 0.0)
        self.assertEqual(MathTools.median([]), 0.0)
        self.assertEqual(MathTools.mean([]), 0.0)

    def test_round_half_up(self) -> None:
        self.assertEqual(MathTools.round_half_up(2.5), 3)
        self.assertEqual(MathTools.round_half_up(2.4), 2)
        self.assertAlmostEqual(MathTools.round_half_up(0.25, 1), 0.3)

    def test_volume(self) -> None:
        sets = [(10, 100.0), (5, 150.0)]
        self.assertEqual(MathTools.volume(sets), 10 * 100.0 + 5 * 150.0)
        self.assertEqual(MathTools.volume([]), 0.0)

    def test_sign(self) -> None:
        self.assertEqual(MathTools.sign(3.2), 1)
        self.assertEqual(MathTools.sign(-0.1), -1)
        self.assertEqual(MathTools.sign(0), 0)


class WeightConverterTestCase(unittest.TestCase):
    def test_conversions(self) -> None:
        self.assertAlmostEqual(WeightConverter.kg_to_lb(100), 220.46)
        self.assertAlmostEqual(WeightConverter.lb_to_kg(220.46), 100.0)
        self.assertEqual(WeightConverter.to_kg(80, "kg"), 80.0)
        self.assertAlmostEqual(WeightConverter.to_kg(225, "LB"), 102.06)
        with self.assertRaises(ValueError):
            WeightConverter.to_kg(10, "stone")


if __name__ == "__main__":
    unittest.main()
