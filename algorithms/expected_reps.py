import math
from typing import Optional, Sequence

from settings_schema import TransitionSettings
from .math_tools import MathTools
from .models import ExpectedRepsRange, SetMetrics


class ExpectedRepsEstimator:
    """Predict a plausible rep band for the next set of a session."""

    RPE_MIN: float = 6.0
    RPE_MAX: float = 10.0
    RPE_PIVOT: float = 9.0
    RPE_STEP: float = 0.02
    RPE_MAX_BOOST: float = 0.10

    def __init__(self, settings: TransitionSettings | None = None) -> None:
        self.settings = settings or TransitionSettings()

    @classmethod
    def adjust_one_rm_for_rpe(cls, one_rm: float, rpe: Optional[float]) -> float:
        """Scale ``one_rm`` up when the set felt easier than RPE 9."""
        if not one_rm or not math.isfinite(one_rm):
            return 0.0
        if rpe is None or not math.isfinite(rpe):
            return one_rm
        if rpe < cls.RPE_MIN or rpe > cls.RPE_MAX:
            return one_rm
        boost = MathTools.clamp((cls.RPE_PIVOT - rpe) * cls.RPE_STEP, 0.0, cls.RPE_MAX_BOOST)
        return one_rm * (1 + boost)

    @staticmethod
    def _label(low: int, high: int) -> str:
        return f"~{low}" if low == high else f"{low}-{high}"

    def estimate(
        self,
        prior_sets: Sequence[SetMetrics],
        target_weight: float,
        target_set_number: int,
    ) -> ExpectedRepsRange:
        """Return the expected rep band for ``target_weight``.

        ``prior_sets`` are the working sets already performed in the session,
        oldest first. ``target_set_number`` is 1-based and drives the fatigue
        penalty.
        """
        cap = self.settings.max_expected_reps
        candidates = [
            v
            for v in (self.adjust_one_rm_for_rpe(s.one_rm, s.rpe) for s in prior_sets)
            if v > 0
        ]
        if not candidates or target_weight <= 0:
            return ExpectedRepsRange(min=1, max=1, center=1.0, label="~1")

        recent = candidates[-self.settings.recent_sets:]
        estimate = (
            MathTools.percentile(recent, 0.75)
            or MathTools.median(recent)
            or MathTools.median(candidates)
        )
        base = MathTools.predict_reps(estimate, target_weight)

        penalty = MathTools.clamp(
            self.settings.fatigue_per_set * max(0, target_set_number - 1),
            0.0,
            self.settings.max_fatigue_penalty,
        )
        center = round(min(max(1.0, base - penalty), float(cap)), 2)

        q25 = MathTools.percentile(recent, 0.25)
        q75 = MathTools.percentile(recent, 0.75)
        med = MathTools.median(recent)
        spread = (q75 - q25) / med if med > 0 else 0.0
        half_width = int(MathTools.clamp(1 + MathTools.round_half_up(spread * 3), 1, 3))

        low = max(1, math.floor(center - half_width))
        high = max(low, math.ceil(center + half_width))
        low = min(low, cap)
        high = min(high, cap)
        return ExpectedRepsRange(min=low, max=high, center=center, label=self._label(low, high))
