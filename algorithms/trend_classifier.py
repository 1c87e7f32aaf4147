from __future__ import annotations

import logging
import math
import re
from typing import Iterable, List, Optional, Sequence

from settings_schema import PrematurePrSettings, TrendSettings
from .math_tools import MathTools
from .models import (
    Confidence,
    PlateauInfo,
    PrematurePrResult,
    SessionEntry,
    TrendCalculation,
    TrendMode,
    TrendResult,
    TrendStatus,
)
from .premature_pr import PrematurePrDetector, fmt_signed_pct

logger = logging.getLogger(__name__)

_DIGIT = re.compile(r"\d")


class TrendClassifier:
    """Classify an exercise's trajectory from its summarised session history.

    ``history`` must be the output of :class:`SessionSummarizer`, newest
    session first. Each call is a pure function of ``history`` and ``mode``.
    """

    def __init__(
        self,
        settings: TrendSettings | None = None,
        pr_settings: PrematurePrSettings | None = None,
    ) -> None:
        self.settings = settings or TrendSettings()
        self.pr_detector = PrematurePrDetector(pr_settings)

    # -- helpers -----------------------------------------------------------

    def confidence_for(self, history_len: int, window_size: int) -> Confidence:
        cfg = self.settings
        if history_len < cfg.min_sessions_for_trend:
            return Confidence.LOW
        if history_len >= cfg.high_confidence_sessions and window_size >= cfg.default_window:
            return Confidence.HIGH
        if history_len >= cfg.medium_confidence_sessions:
            return Confidence.MEDIUM
        return Confidence.LOW

    def is_bodyweight_like(self, recent: Sequence[SessionEntry]) -> bool:
        if not recent:
            return False
        zero = sum(1 for s in recent if s.weight <= self.settings.bodyweight_epsilon_kg)
        return zero >= math.ceil(len(recent) * self.settings.bodyweight_share)

    def window_size(self, history_len: int, mode: TrendMode) -> int:
        cfg = self.settings
        if mode == TrendMode.REACTIVE:
            return cfg.reactive_window
        return cfg.default_window if history_len >= cfg.default_window else cfg.reactive_window

    def thresholds(self, mode: TrendMode) -> tuple[float, float, float]:
        """Return ``(pct, abs_1rm_kg, abs_reps)`` for ``mode``."""
        cfg = self.settings
        pct = cfg.reactive_pct_threshold if mode == TrendMode.REACTIVE else cfg.default_pct_threshold
        return pct, cfg.min_abs_1rm_kg, cfg.min_abs_reps

    def direction_tag(self, overall: float, recent: float) -> Optional[str]:
        """Describe the latest change relative to the windowed trend."""
        overall_sign = MathTools.sign(overall)
        recent_sign = MathTools.sign(recent)
        if recent_sign == 0:
            return None
        if overall_sign == 0:
            return "improving" if recent_sign > 0 else "worsening"
        hysteresis = self.settings.direction_hysteresis
        abs_overall = abs(overall)
        abs_recent = abs(recent)
        if overall_sign == recent_sign:
            if abs_recent >= abs_overall + hysteresis:
                return "accelerating" if recent_sign > 0 else "getting worse"
            if abs_recent <= max(0.0, abs_overall - hysteresis):
                return "steady progress" if recent_sign > 0 else "easing"
            return "still improving" if recent_sign > 0 else "still declining"
        return "rebound" if recent_sign > 0 else "slipping"

    def recent_evidence(
        self,
        bodyweight_like: bool,
        diff_abs: float,
        diff_pct: float,
        recent_delta_abs: float,
        recent_delta_pct: float,
    ) -> Optional[str]:
        if bodyweight_like:
            delta = int(MathTools.round_half_up(recent_delta_abs))
            if abs(delta) < 1:
                return None
            value = f"+{delta}" if delta > 0 else str(delta)
            tag = self.direction_tag(diff_abs, delta)
            return f"Recent reps: {value} ({tag})" if tag else f"Recent reps: {value}"
        if abs(recent_delta_pct) < self.settings.recent_evidence_min_pct:
            return None
        tag = self.direction_tag(diff_pct, recent_delta_pct)
        value = fmt_signed_pct(recent_delta_pct)
        return f"Recent: {value} ({tag})" if tag else f"Recent: {value}"

    def evidence(self, lines: Iterable[Optional[str]]) -> tuple[str, ...]:
        """Keep at most ``max_evidence`` lines, and only those with a number."""
        kept = [line for line in lines if line][: self.settings.max_evidence]
        return tuple(line for line in kept if _DIGIT.search(line))

    @staticmethod
    def _metric(entry: SessionEntry, bodyweight_like: bool) -> float:
        return float(entry.max_reps if bodyweight_like else entry.one_rep_max)

    # -- classification ----------------------------------------------------

    def classify(
        self,
        history: Sequence[SessionEntry],
        mode: TrendMode | str = TrendMode.REACTIVE,
    ) -> TrendResult:
        mode = TrendMode(mode)
        cfg = self.settings
        history = list(history)
        if not history:
            return TrendResult(status=TrendStatus.NEW)

        recent = history[: cfg.recent_window]
        weights = [s.weight for s in recent]
        bodyweight_like = self.is_bodyweight_like(recent)

        if bodyweight_like:
            has_signal = max(s.max_reps for s in recent) >= cfg.min_signal_reps
        else:
            has_signal = max(weights) > cfg.bodyweight_epsilon_kg
        if not has_signal:
            line = (
                "Most recent sessions look bodyweight-like (weight ≈ 0)."
                if bodyweight_like
                else "Most recent sessions have near-zero load (weight ≈ 0)."
            )
            return TrendResult(
                status=TrendStatus.NEW,
                is_bodyweight_like=bodyweight_like,
                evidence=self.evidence([line]),
            )

        if len(history) < cfg.min_sessions_for_trend:
            plural = "" if len(history) == 1 else "s"
            return TrendResult(
                status=TrendStatus.NEW,
                is_bodyweight_like=bodyweight_like,
                evidence=self.evidence(
                    [
                        f"Only {len(history)} session{plural} logged "
                        f"(need {cfg.min_sessions_for_trend}+)."
                    ]
                ),
            )

        pr = self.pr_detector.detect(history, bodyweight_like)
        pr_spike = pr.spike_pct if pr.flagged and not bodyweight_like else None
        pr_drop = pr.drop_pct if pr.flagged and not bodyweight_like else None

        if bodyweight_like:
            rep_metric = [float(s.max_reps) for s in recent]
        else:
            rep_metric = [
                float(s.reps or (s.volume / s.weight if s.weight > 0 else 0.0)) for s in recent
            ]
        weight_static = all(
            abs(w - weights[0]) < cfg.weight_static_epsilon_kg for w in weights
        )
        rep_static = max(rep_metric) - min(rep_metric) <= cfg.rep_static_epsilon
        if weight_static and rep_static:
            spread = max(rep_metric) - min(rep_metric)
            if bodyweight_like:
                line = f"Top reps stayed within ~{spread:g} rep(s)."
            else:
                line = (
                    f"Top weight stayed within ~{cfg.weight_static_epsilon_kg:g}kg "
                    f"and reps within ~{cfg.rep_static_epsilon:g} rep(s)."
                )
            logger.debug("static plateau over %d sessions", len(recent))
            return TrendResult(
                status=TrendStatus.STAGNANT,
                is_bodyweight_like=bodyweight_like,
                confidence=self.confidence_for(len(history), cfg.recent_window),
                evidence=self.evidence([line, *pr.evidence]),
                premature_pr=pr.flagged,
                plateau=PlateauInfo(
                    weight=weights[0],
                    min_reps=min(rep_metric),
                    max_reps=max(rep_metric),
                ),
                pr_spike_pct=pr_spike,
                pr_drop_pct=pr_drop,
            )

        return self._windowed(history, mode, bodyweight_like, pr, pr_spike, pr_drop)

    def _windowed(
        self,
        history: List[SessionEntry],
        mode: TrendMode,
        bodyweight_like: bool,
        pr: PrematurePrResult,
        pr_spike: Optional[float],
        pr_drop: Optional[float],
    ) -> TrendResult:
        cfg = self.settings
        size = self.window_size(len(history), mode)
        metric = [self._metric(s, bodyweight_like) for s in history[:size]]
        half = size // 2
        current = MathTools.mean(metric[:half])
        previous = MathTools.mean(metric[half:])
        if current <= 0 or previous <= 0:
            return TrendResult(status=TrendStatus.NEW, is_bodyweight_like=bodyweight_like)

        diff_abs = current - previous
        diff_pct = diff_abs / previous * 100
        pct_threshold, abs_kg, abs_reps = self.thresholds(mode)
        abs_threshold = abs_reps if bodyweight_like else abs_kg
        meets_overload = diff_abs >= abs_threshold and diff_pct >= pct_threshold
        meets_regression = diff_abs <= -abs_threshold and diff_pct <= -pct_threshold

        latest = self._metric(history[0], bodyweight_like)
        prev_session = self._metric(history[1], bodyweight_like)
        recent_abs = latest - prev_session
        recent_pct = recent_abs / prev_session * 100 if prev_session > 0 else 0.0

        if meets_overload:
            status = TrendStatus.OVERLOAD
        elif meets_regression:
            status = TrendStatus.REGRESSION
        else:
            status = TrendStatus.NEUTRAL

        if status == TrendStatus.NEUTRAL and mode == TrendMode.REACTIVE:
            lookback = min(cfg.local_pr_lookback, len(history))
            prior_max = max(self._metric(s, bodyweight_like) for s in history[1:lookback])
            if bodyweight_like:
                big_enough = recent_abs >= cfg.recency_override_reps
            else:
                big_enough = recent_pct >= cfg.recency_override_pct
            if latest > prior_max and big_enough:
                status = TrendStatus.OVERLOAD

        logger.debug(
            "window=%d current=%.2f previous=%.2f diff=%.2f%% status=%s",
            size,
            current,
            previous,
            diff_pct,
            status.value,
        )

        headline = None
        if status != TrendStatus.NEUTRAL:
            label = "Reps" if bodyweight_like else "Strength"
            headline = f"{label}: {fmt_signed_pct(diff_pct)}"
        lines = [
            headline,
            self.recent_evidence(bodyweight_like, diff_abs, diff_pct, recent_abs, recent_pct),
            *pr.evidence,
        ]

        return TrendResult(
            status=status,
            is_bodyweight_like=bodyweight_like,
            confidence=self.confidence_for(len(history), size),
            diff_pct=diff_pct,
            evidence=self.evidence(lines),
            premature_pr=pr.flagged,
            pr_spike_pct=pr_spike,
            pr_drop_pct=pr_drop,
            calculation=TrendCalculation(
                history_len=len(history),
                window_size=size,
                current_avg=current,
                previous_avg=previous,
                latest_metric=latest,
                previous_session_metric=prev_session,
                recent_delta_abs=recent_abs,
                recent_delta_pct=recent_pct,
            ),
        )
