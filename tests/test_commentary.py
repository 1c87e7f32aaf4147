import os
import sys
import zlib
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import TransitionOutcome
from algorithms.commentary import (
    POOLS,
    interpolate,
    pick_deterministic,
    pick_message,
    render,
    stable_hash,
)


class CommentaryTestCase(unittest.TestCase):
    def test_every_outcome_has_text(self) -> None:
        self.assertEqual(set(POOLS), set(TransitionOutcome))
        for outcome, pool in POOLS.items():
            self.assertTrue(pool.short_messages, outcome)
            self.assertTrue(pool.tooltips, outcome)
            self.assertEqual(len(pool.why_lines), 2, outcome)

    def test_pick_is_deterministic(self) -> None:
        options = ("a", "b", "c", "d", "e")
        first = pick_deterministic("Set 1 → 2|10|7", options)
        for _ in range(5):
            self.assertEqual(pick_deterministic("Set 1 → 2|10|7", options), first)
        self.assertEqual(first, options[zlib.crc32("Set 1 → 2|10|7".encode("utf-8")) % 5])
        self.assertEqual(pick_deterministic("seed", ()), "")

    def test_stable_hash(self) -> None:
        self.assertEqual(stable_hash("abc"), zlib.crc32(b"abc"))
        self.assertGreaterEqual(stable_hash("anything"), 0)

    def test_interpolate(self) -> None:
        self.assertEqual(interpolate("Lost {dropAbs} rep(s)", {"dropAbs": 3}), "Lost 3 rep(s)")
        self.assertEqual(interpolate("{missing} stays", {}), "{missing} stays")

    def test_render_fills_placeholders(self) -> None:
        pool = render(TransitionOutcome.SAME_WEIGHT_DROP_SEVERE, dropAbs=3, dropPct=30)
        for text in pool.short_messages + pool.tooltips + pool.why_lines + pool.improve_lines:
            self.assertNotIn("{", text)
        self.assertEqual(pool.why(0), "-3 rep(s), 30% drop")
        self.assertEqual(pool.improve(5), "")

    def test_pick_message(self) -> None:
        templates = ("Add {increase}.",)
        self.assertEqual(pick_message("x", templates, increase="2.5-5%"), "Add 2.5-5%.")


if __name__ == "__main__":
    unittest.main()
