import os
import sys
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import PrematurePrDetector, SessionEntry
from algorithms.premature_pr import fmt_signed_pct
from settings_schema import PrematurePrSettings


def _session(index: int, weight: float, one_rm: float, max_reps: int = 5) -> SessionEntry:
    return SessionEntry(
        date=datetime.datetime(2024, 6, 30) - datetime.timedelta(days=index),
        weight=weight,
        reps=max_reps,
        one_rep_max=one_rm,
        volume=weight * max_reps,
        sets=1,
        total_reps=max_reps,
        max_reps=max_reps,
    )


def _weighted(pairs):
    return [_session(i, w, orm) for i, (w, orm) in enumerate(pairs)]


class PrematurePrTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = PrematurePrDetector()

    def test_find_pr_index(self) -> None:
        find = self.detector.find_pr_index
        self.assertEqual(find([105, 105, 120, 100, 100], False), 2)
        self.assertEqual(find([120, 100, 100, 100], False), -1)
        self.assertEqual(find([100], False), -1)
        self.assertEqual(find([10, 11, 11], True), -1)
        self.assertEqual(find([10, 12, 11], True), 1)

    def test_unsustained_spike_is_flagged(self) -> None:
        history = _weighted([(v, v) for v in (105, 105, 120, 100, 100, 100)])
        result = self.detector.detect(history, bodyweight_like=False)
        self.assertTrue(result.flagged)
        self.assertEqual(result.pr_index, 2)
        self.assertAlmostEqual(result.spike_pct, 20.0)
        self.assertAlmostEqual(result.drop_pct, -12.5)
        self.assertEqual(result.evidence, ("PR spike: +20.0%", "After PR: -12.5%"))

    def test_rehit_weight_validates_pr(self) -> None:
        history = _weighted([(120, 115), (120, 115), (120, 126), (100, 105), (100, 105)])
        result = self.detector.detect(history, bodyweight_like=False)
        self.assertEqual(result.pr_index, 2)
        self.assertFalse(result.flagged)
        self.assertEqual(result.evidence, ())

    def test_pr_in_latest_session_is_not_judged(self) -> None:
        history = _weighted([(v, v) for v in (120, 100, 100, 100)])
        result = self.detector.detect(history, bodyweight_like=False)
        self.assertFalse(result.flagged)
        self.assertEqual(result.pr_index, -1)

    def test_small_spike_is_ignored(self) -> None:
        history = _weighted([(v, v) for v in (97, 97, 101, 100, 100)])
        self.assertFalse(self.detector.detect(history, bodyweight_like=False).flagged)

    def test_held_pr_is_not_flagged(self) -> None:
        history = _weighted([(v, v) for v in (119, 118, 120, 100, 100)])
        result = self.detector.detect(history, bodyweight_like=False)
        self.assertEqual(result.pr_index, 2)
        self.assertFalse(result.flagged)

    def test_bodyweight_reps(self) -> None:
        history = [_session(i, 0.0, 0.0, max_reps=r) for i, r in enumerate([10, 10, 14, 11, 11])]
        result = self.detector.detect(history, bodyweight_like=True)
        self.assertTrue(result.flagged)
        self.assertEqual(result.evidence, ("PR spike: +3 rep(s)", "After PR: -4 rep(s)"))

    def test_lookback_limits_history(self) -> None:
        history = _weighted([(v, v) for v in (105, 105, 120, 100, 100, 100)])
        detector = PrematurePrDetector(PrematurePrSettings(lookback=2))
        self.assertFalse(detector.detect(history, bodyweight_like=False).flagged)

    def test_fmt_signed_pct(self) -> None:
        self.assertEqual(fmt_signed_pct(12.0), "+12.0%")
        self.assertEqual(fmt_signed_pct(-2.54), "-2.5%")
        self.assertEqual(fmt_signed_pct(0), "0.0%")


if __name__ == "__main__":
    unittest.main()
