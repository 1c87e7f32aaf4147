from typing import Iterable, List

from .math_tools import MathTools
from .models import RawSet, SetMetrics


class SetMetricsExtractor:
    """Derive per-set metrics and tell working sets from warm-ups."""

    WARMUP_TYPES = {"warmup", "w"}

    @staticmethod
    def extract(raw: RawSet) -> SetMetrics:
        return SetMetrics(
            weight=raw.weight,
            reps=raw.reps,
            volume=MathTools.volume([(raw.reps, raw.weight)]),
            one_rm=MathTools.epley_1rm(raw.weight, raw.reps),
            rpe=raw.rpe,
        )

    @classmethod
    def is_warmup(cls, raw: RawSet) -> bool:
        kind = (raw.set_type or "").lower()
        for ch in (" ", "-", "_"):
            kind = kind.replace(ch, "")
        return kind in cls.WARMUP_TYPES

    @classmethod
    def working_sets(cls, sets: Iterable[RawSet]) -> List[RawSet]:
        return [s for s in sets if not cls.is_warmup(s)]
