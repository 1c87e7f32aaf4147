import math
from typing import Iterable, Sequence

import numpy as np


class MathTools:
    """Provides essential mathematical utilities for set and session analysis."""

    EPLEY_FACTOR: float = 30.0
    MAX_REPS_FOR_1RM: int = 12

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def round_half_up(value: float, digits: int = 0) -> float:
        """Round like a scoreboard does: halves always go up."""
        factor = 10 ** digits
        return math.floor(value * factor + 0.5) / factor

    @classmethod
    def epley_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Epley formula.

        Reps above ``MAX_REPS_FOR_1RM`` are capped so high-rep sets do not
        extrapolate into absurd maxima. Degenerate sets estimate to zero.
        """
        if weight <= 0 or reps <= 0:
            return 0.0
        effective = min(reps, cls.MAX_REPS_FOR_1RM)
        return round(weight * (1 + effective / cls.EPLEY_FACTOR), 2)

    @classmethod
    def predict_reps(cls, one_rm: float, weight: float) -> float:
        """Invert Epley: reps achievable at ``weight`` given ``one_rm``."""
        if weight <= 0 or one_rm <= 0:
            return 0.0
        if weight >= one_rm:
            return 1.0
        predicted = cls.EPLEY_FACTOR * (one_rm / weight - 1)
        return max(1.0, cls.round_half_up(predicted, 1))

    @classmethod
    def percent_change(cls, old: float, new: float) -> float:
        """Relative change in percent, rounded to one decimal."""
        if old <= 0:
            return 100.0 if new > 0 else 0.0
        return cls.round_half_up((new - old) / old * 100, 1)

    @staticmethod
    def volume(sets: Iterable[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol

    @staticmethod
    def mean(values: Sequence[float]) -> float:
        if len(values) == 0:
            return 0.0
        return float(np.mean(np.array(values, dtype=float)))

    @staticmethod
    def median(values: Sequence[float]) -> float:
        if len(values) == 0:
            return 0.0
        return float(np.median(np.array(values, dtype=float)))

    @staticmethod
    def percentile(values: Sequence[float], p: float) -> float:
        """Linearly interpolated percentile, ``p`` given as a fraction."""
        if len(values) == 0:
            return 0.0
        q = MathTools.clamp(p, 0.0, 1.0) * 100
        return float(np.percentile(np.array(values, dtype=float), q))

    @staticmethod
    def sign(value: float) -> int:
        if value > 0:
            return 1
        if value < 0:
            return -1
        return 0
