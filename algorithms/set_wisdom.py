from typing import Optional, Sequence

from settings_schema import TransitionSettings
from .commentary import (
    DEMOTE_HEAVY_MESSAGES,
    DEMOTE_HEAVY_TITLES,
    DEMOTE_INCONSISTENT_MESSAGES,
    DEMOTE_INCONSISTENT_TITLES,
    PROMOTE_MESSAGES,
    PROMOTE_TITLES,
    pick_deterministic,
    pick_message,
)
from .math_tools import MathTools
from .models import RawSet, SessionAnalysis, SetWisdom
from .set_metrics import SetMetricsExtractor

GOAL_TOOLTIPS = {
    "Strength": "Average reps are low (<=5). This zone prioritizes neural adaptation and max strength.",
    "Hypertrophy": "Average reps are moderate (6-15). This is the main zone for muscle growth.",
    "Endurance": "Average reps are high (>15). This zone prioritizes muscular endurance.",
}


def analyze_session(sets: Sequence[RawSet]) -> SessionAnalysis:
    """Label a session's rep zone from its working sets."""
    working = SetMetricsExtractor.working_sets(sets)
    if not working:
        return SessionAnalysis(goal_label="N/A", avg_reps=0, set_count=0)
    total = sum(max(s.reps, 0) for s in working)
    avg_reps = int(MathTools.round_half_up(total / len(working)))
    if avg_reps <= 5:
        label = "Strength"
    elif avg_reps <= 15:
        label = "Hypertrophy"
    else:
        label = "Endurance"
    return SessionAnalysis(
        goal_label=label,
        avg_reps=avg_reps,
        set_count=len(working),
        tooltip=GOAL_TOOLTIPS[label],
    )


def analyze_progression(
    sets: Sequence[RawSet],
    target_reps: Optional[int] = None,
    settings: TransitionSettings | None = None,
) -> Optional[SetWisdom]:
    """Suggest promoting or demoting the load for the next session.

    Only sets within 95% of the heaviest working set count as top sets.
    Returns ``None`` when the top sets give no clear signal.
    """
    cfg = settings or TransitionSettings()
    target = target_reps if target_reps is not None else cfg.target_reps
    working = SetMetricsExtractor.working_sets(sets)
    if not working:
        return None

    name = working[0].exercise or "unknown"
    seed = f"progression|{name}|{len(working)}"
    max_weight = max(s.weight for s in working)
    top_reps = [s.reps for s in working if s.weight >= max_weight * 0.95]
    if not top_reps:
        return None
    top_min = min(top_reps)
    top_max = max(top_reps)

    if top_min >= target:
        increase = "5-10%" if top_min >= cfg.promote_threshold else "2.5-5%"
        return SetWisdom(
            kind="promote",
            message=pick_deterministic(f"{seed}|promote_msg", PROMOTE_TITLES),
            tooltip=pick_message(
                f"{seed}|promote", PROMOTE_MESSAGES, minReps=top_min, increase=increase
            ),
        )

    if top_max < cfg.min_hypertrophy_reps:
        return SetWisdom(
            kind="demote",
            message=pick_deterministic(f"{seed}|demote_heavy_msg", DEMOTE_HEAVY_TITLES),
            tooltip=pick_message(f"{seed}|demote_heavy", DEMOTE_HEAVY_MESSAGES, maxReps=top_max),
        )

    if len(top_reps) >= 2 and top_min < target - 3 and top_max >= target:
        return SetWisdom(
            kind="demote",
            message=pick_deterministic(
                f"{seed}|demote_inconsistent_msg", DEMOTE_INCONSISTENT_TITLES
            ),
            tooltip=pick_message(
                f"{seed}|demote_inconsistent",
                DEMOTE_INCONSISTENT_MESSAGES,
                minReps=top_min,
                maxReps=top_max,
            ),
        )

    return None
