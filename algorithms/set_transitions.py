import logging
from typing import List, Optional, Sequence

from settings_schema import TransitionSettings
from .commentary import CommentaryPool, pick_deterministic, render
from .expected_reps import ExpectedRepsEstimator
from .math_tools import MathTools
from .models import (
    AnalysisResult,
    AnalysisStatus,
    ExpectedRepsRange,
    RawSet,
    StructuredTooltip,
    TooltipLine,
    TransitionMetrics,
    TransitionOutcome,
)
from .set_metrics import SetMetricsExtractor

logger = logging.getLogger(__name__)


def line(text: str, color: Optional[str] = None) -> TooltipLine:
    return TooltipLine(text=text, color=color)


def _one_decimal(pct: float) -> str:
    text = f"{MathTools.round_half_up(pct, 1):.1f}"
    return text[:-2] if text.endswith(".0") else text


def fmt_weight_change(pct: float) -> str:
    if pct == 0:
        return "0%"
    sign = "+" if pct > 0 else ""
    return f"{sign}{_one_decimal(pct)}%"


def fmt_pct(pct: float) -> str:
    return f"{_one_decimal(pct)}%"


class SetTransitionAnalyzer:
    """Grade every consecutive pair of working sets inside one session."""

    def __init__(self, settings: TransitionSettings | None = None) -> None:
        self.settings = settings or TransitionSettings()
        self.estimator = ExpectedRepsEstimator(self.settings)

    def _result(
        self,
        transition: str,
        status: AnalysisStatus,
        outcome: TransitionOutcome,
        commentary: CommentaryPool,
        seed: str,
        weight_change_pct: float,
        vol_change_pct: float,
        actual_reps: int,
        expected_reps: str,
        structured: StructuredTooltip,
    ) -> AnalysisResult:
        logger.debug("%s -> %s", transition, outcome.value)
        return AnalysisResult(
            transition=transition,
            status=status,
            outcome=outcome,
            metrics=TransitionMetrics(
                weight_change_pct=fmt_weight_change(weight_change_pct),
                vol_drop_pct=fmt_pct(vol_change_pct),
                actual_reps=actual_reps,
                expected_reps=expected_reps,
            ),
            short_message=pick_deterministic(f"{seed}|short", commentary.short_messages),
            tooltip=pick_deterministic(f"{seed}|tooltip", commentary.tooltips),
            structured=structured,
        )

    def analyze(self, sets: Sequence[RawSet]) -> List[AnalysisResult]:
        """Return one :class:`AnalysisResult` per transition, in set order."""
        working = SetMetricsExtractor.working_sets(sets)
        if len(working) < 2:
            return []

        results: List[AnalysisResult] = []
        prior = [SetMetricsExtractor.extract(working[0])]
        for i in range(1, len(working)):
            prev = prior[-1]
            curr = SetMetricsExtractor.extract(working[i])
            transition = f"Set {i} → {i + 1}"
            weight_change = MathTools.percent_change(prev.weight, curr.weight)
            rep_change = MathTools.percent_change(prev.reps, curr.reps)

            if abs(weight_change) < self.settings.same_weight_pct:
                result = self.analyze_same_weight(
                    transition, rep_change, prev.reps, curr.reps, i + 1
                )
            else:
                expected = self.estimator.estimate(prior, curr.weight, i + 1)
                if weight_change > 0:
                    result = self.analyze_weight_increase(
                        transition, weight_change, prev.weight, curr.weight,
                        prev.reps, curr.reps, expected,
                    )
                else:
                    result = self.analyze_weight_decrease(
                        transition, weight_change, prev.weight, curr.weight,
                        prev.reps, curr.reps, expected,
                    )
            results.append(result)
            prior.append(curr)
        return results

    def analyze_same_weight(
        self,
        transition: str,
        rep_change_pct: float,
        prev_reps: int,
        curr_reps: int,
        set_number: int,
    ) -> AnalysisResult:
        diff = curr_reps - prev_reps
        seed = f"{transition}|{prev_reps}|{curr_reps}"

        if diff > 0:
            outcome = TransitionOutcome.SAME_WEIGHT_REPS_INCREASED
            text = render(outcome, diff=diff)
            structured = StructuredTooltip(
                f"+{diff} reps", "up", (line(text.why(0), "gray"), line(text.why(1), "gray"))
            )
            return self._result(
                transition, AnalysisStatus.SUCCESS, outcome, text, seed,
                0, rep_change_pct, curr_reps, str(prev_reps), structured,
            )

        if diff == 0:
            outcome = TransitionOutcome.SAME_WEIGHT_REPS_SAME
            text = render(outcome, reps=curr_reps)
            structured = StructuredTooltip(
                "= reps", "same", (line(text.why(0), "green"), line(text.why(1), "gray"))
            )
            return self._result(
                transition, AnalysisStatus.SUCCESS, outcome, text, seed,
                0, 0, curr_reps, str(prev_reps), structured,
            )

        drop_abs = abs(diff)
        drop_pct = abs(rep_change_pct)
        values = {"dropAbs": drop_abs, "dropPct": int(MathTools.round_half_up(drop_pct))}

        if drop_pct <= self.settings.drop_mild_pct:
            outcome = TransitionOutcome.SAME_WEIGHT_DROP_MILD
            status = AnalysisStatus.INFO
            text = render(outcome, **values)
            why = (line(text.why(0), "blue"), line(text.why(1), "gray"))
            improve = ()
        elif drop_pct <= self.settings.drop_moderate_pct:
            outcome = TransitionOutcome.SAME_WEIGHT_DROP_MODERATE
            status = AnalysisStatus.WARNING
            text = render(outcome, **values)
            # right after the first working set the generic line adds nothing
            if set_number == 2:
                why = (line(text.why(0), "yellow"),)
            else:
                why = (line(text.why(0), "yellow"), line(text.why(1), "gray"))
            improve = (line(text.improve(0), "gray"), line(text.improve(1), "blue"))
        else:
            outcome = TransitionOutcome.SAME_WEIGHT_DROP_SEVERE
            status = AnalysisStatus.DANGER
            text = render(outcome, **values)
            why = (line(text.why(0), "red"), line(text.why(1), "gray"))
            improve = (line(text.improve(0), "green"), line(text.improve(1), "blue"))

        structured = StructuredTooltip(f"-{drop_abs} reps", "down", why, improve)
        return self._result(
            transition, status, outcome, text, seed,
            0, rep_change_pct, curr_reps, str(prev_reps), structured,
        )

    def analyze_weight_increase(
        self,
        transition: str,
        weight_change_pct: float,
        prev_weight: float,
        curr_weight: float,
        prev_reps: int,
        curr_reps: int,
        expected: ExpectedRepsRange,
    ) -> AnalysisResult:
        target = int(MathTools.round_half_up(expected.center))
        vol_change = MathTools.percent_change(prev_weight * prev_reps, curr_weight * curr_reps)
        pct = int(MathTools.round_half_up(weight_change_pct))
        seed = f"{transition}|{weight_change_pct}|{curr_reps}|{expected.label}"
        values = {"pct": pct, "currReps": curr_reps, "expectedLabel": expected.label}

        improve: tuple = ()
        if curr_reps > expected.max:
            outcome, status, color = (
                TransitionOutcome.WEIGHT_INCREASE_EXCEEDED, AnalysisStatus.SUCCESS, "green"
            )
        elif curr_reps >= target:
            outcome, status, color = (
                TransitionOutcome.WEIGHT_INCREASE_MET, AnalysisStatus.SUCCESS, "green"
            )
        elif curr_reps >= target - self.settings.below_center_reps:
            outcome, status, color = (
                TransitionOutcome.WEIGHT_INCREASE_SLIGHTLY_BELOW, AnalysisStatus.WARNING, "yellow"
            )
        else:
            outcome, status, color = (
                TransitionOutcome.WEIGHT_INCREASE_SIGNIFICANTLY_BELOW, AnalysisStatus.DANGER, "red"
            )

        text = render(outcome, **values)
        if status != AnalysisStatus.SUCCESS:
            improve = (line(text.improve(0), "blue"), line(text.improve(1), "gray"))
        structured = StructuredTooltip(
            f"+{pct}% weight", "up", (line(text.why(0), color), line(text.why(1), "gray")), improve
        )
        return self._result(
            transition, status, outcome, text, seed,
            weight_change_pct, vol_change, curr_reps, expected.label, structured,
        )

    def analyze_weight_decrease(
        self,
        transition: str,
        weight_change_pct: float,
        prev_weight: float,
        curr_weight: float,
        prev_reps: int,
        curr_reps: int,
        expected: ExpectedRepsRange,
    ) -> AnalysisResult:
        target = int(MathTools.round_half_up(expected.center))
        vol_change = MathTools.percent_change(prev_weight * prev_reps, curr_weight * curr_reps)
        pct = int(MathTools.round_half_up(weight_change_pct))
        seed = f"{transition}|{weight_change_pct}|{curr_reps}|{expected.label}"
        values = {"pct": pct, "currReps": curr_reps, "expectedLabel": expected.label}

        improve: tuple = ()
        if curr_reps >= expected.min:
            outcome, status, color = (
                TransitionOutcome.WEIGHT_DECREASE_MET, AnalysisStatus.SUCCESS, "green"
            )
        elif curr_reps >= target - self.settings.below_center_reps:
            outcome, status, color = (
                TransitionOutcome.WEIGHT_DECREASE_SLIGHTLY_BELOW, AnalysisStatus.INFO, "yellow"
            )
        else:
            outcome, status, color = (
                TransitionOutcome.WEIGHT_DECREASE_SIGNIFICANTLY_BELOW, AnalysisStatus.WARNING, "red"
            )

        text = render(outcome, **values)
        if outcome == TransitionOutcome.WEIGHT_DECREASE_SIGNIFICANTLY_BELOW:
            improve = (line(text.improve(0), "green"), line(text.improve(1), "gray"))
        structured = StructuredTooltip(
            f"{pct}% weight", "down", (line(text.why(0), color), line(text.why(1), "gray")), improve
        )
        return self._result(
            transition, status, outcome, text, seed,
            weight_change_pct, vol_change, curr_reps, expected.label, structured,
        )
