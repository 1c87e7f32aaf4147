"""Coaching text pools and the deterministic picker that selects from them.

The same seed always selects the same line, so a given set transition renders
identical commentary on every call.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

from .models import TransitionOutcome


@dataclass(frozen=True)
class CommentaryPool:
    short_messages: Tuple[str, ...]
    tooltips: Tuple[str, ...]
    why_lines: Tuple[str, ...] = ()
    improve_lines: Tuple[str, ...] = ()

    def render(self, **values) -> "CommentaryPool":
        return CommentaryPool(
            short_messages=tuple(interpolate(t, values) for t in self.short_messages),
            tooltips=tuple(interpolate(t, values) for t in self.tooltips),
            why_lines=tuple(interpolate(t, values) for t in self.why_lines),
            improve_lines=tuple(interpolate(t, values) for t in self.improve_lines),
        )

    def why(self, index: int) -> str:
        return self.why_lines[index] if index < len(self.why_lines) else ""

    def improve(self, index: int) -> str:
        return self.improve_lines[index] if index < len(self.improve_lines) else ""


def stable_hash(seed: str) -> int:
    return zlib.crc32(seed.encode("utf-8")) & 0xFFFFFFFF


def pick_deterministic(seed: str, options: Sequence[str]) -> str:
    if not options:
        return ""
    return options[stable_hash(seed) % len(options)]


def interpolate(text: str, values: Mapping[str, object]) -> str:
    for key, value in values.items():
        text = text.replace("{" + key + "}", str(value))
    return text


POOLS: Dict[TransitionOutcome, CommentaryPool] = {
    TransitionOutcome.SAME_WEIGHT_REPS_INCREASED: CommentaryPool(
        short_messages=("More Reps", "Reps Up", "Stronger Set", "Extra Reps"),
        tooltips=(
            "You added {diff} rep(s) at the same weight. Recovery between sets was excellent.",
            "+{diff} rep(s) on the same load. The previous set left gas in the tank.",
            "Same weight, {diff} more rep(s). Good pacing.",
        ),
        why_lines=(
            "+{diff} rep(s) at the same weight",
            "The earlier set was likely held short of failure",
        ),
    ),
    TransitionOutcome.SAME_WEIGHT_REPS_SAME: CommentaryPool(
        short_messages=("Consistent", "Held Reps", "Steady", "Matched"),
        tooltips=(
            "You matched {reps} reps at the same weight. Solid consistency.",
            "{reps} reps again on the same load. Fatigue is under control.",
            "Held {reps} reps across both sets.",
        ),
        why_lines=(
            "Matched {reps} reps",
            "Rest and effort were well balanced",
        ),
    ),
    TransitionOutcome.SAME_WEIGHT_DROP_MILD: CommentaryPool(
        short_messages=("Normal Fatigue", "Slight Drop", "Expected Dip"),
        tooltips=(
            "Lost {dropAbs} rep(s) ({dropPct}%). Normal fatigue for back-to-back sets.",
            "A {dropPct}% dip is typical when sets are taken close to failure.",
            "{dropAbs} rep(s) fewer. Well within normal set-to-set fatigue.",
        ),
        why_lines=(
            "-{dropAbs} rep(s), {dropPct}% drop",
            "Drops up to 15% are normal between hard sets",
        ),
    ),
    TransitionOutcome.SAME_WEIGHT_DROP_MODERATE: CommentaryPool(
        short_messages=("Notable Drop", "Fatigue Building", "Reps Slipping"),
        tooltips=(
            "Lost {dropAbs} rep(s) ({dropPct}%). Fatigue is accumulating faster than usual.",
            "A {dropPct}% drop suggests rest was short or the first set went to failure.",
            "{dropAbs} rep(s) fewer at the same load. Worth watching.",
        ),
        why_lines=(
            "-{dropAbs} rep(s), {dropPct}% drop",
            "Drops between 15% and 25% point to incomplete recovery",
        ),
        improve_lines=(
            "Rest a little longer between sets",
            "Leave 1-2 reps in reserve on the first set",
        ),
    ),
    TransitionOutcome.SAME_WEIGHT_DROP_SEVERE: CommentaryPool(
        short_messages=("Big Drop", "Heavy Fatigue", "Sharp Decline"),
        tooltips=(
            "Lost {dropAbs} rep(s) ({dropPct}%). That is a severe drop at the same weight.",
            "A {dropPct}% drop means the previous set took far more out of you.",
            "{dropAbs} rep(s) fewer. Recovery between sets was not enough.",
        ),
        why_lines=(
            "-{dropAbs} rep(s), {dropPct}% drop",
            "Drops above 25% usually mean too little rest or a grinder before",
        ),
        improve_lines=(
            "Take 3+ minutes of rest before the next set",
            "Consider reducing the load for the remaining sets",
        ),
    ),
    TransitionOutcome.WEIGHT_INCREASE_EXCEEDED: CommentaryPool(
        short_messages=("Crushed It", "Beat Target", "Above Expected"),
        tooltips=(
            "+{pct}% weight and still {currReps} reps, above the expected {expectedLabel}.",
            "Heavier load and more reps than predicted ({expectedLabel}). Strong set.",
            "{currReps} reps after a {pct}% jump. You have room to push.",
        ),
        why_lines=(
            "Hit {currReps} reps, expected {expectedLabel}",
            "Performance beat the fatigue-adjusted estimate",
        ),
    ),
    TransitionOutcome.WEIGHT_INCREASE_MET: CommentaryPool(
        short_messages=("On Target", "Good Jump", "Well Handled"),
        tooltips=(
            "+{pct}% weight with {currReps} reps. Right where it should be.",
            "The heavier set landed at {currReps} reps, as expected.",
            "Load went up {pct}% and reps held on target.",
        ),
        why_lines=(
            "{currReps} reps at the heavier weight",
            "Matches the estimate from earlier sets",
        ),
    ),
    TransitionOutcome.WEIGHT_INCREASE_SLIGHTLY_BELOW: CommentaryPool(
        short_messages=("Slightly Short", "Close Call", "Just Under"),
        tooltips=(
            "+{pct}% weight gave {currReps} reps, a little under the expected {expectedLabel}.",
            "{currReps} reps vs {expectedLabel} expected. The jump may have been slightly big.",
            "Close to target after a {pct}% jump, but fatigue showed.",
        ),
        why_lines=(
            "{currReps} reps, expected {expectedLabel}",
            "Within 3 reps of the estimate",
        ),
        improve_lines=(
            "Try a smaller weight jump next time",
            "Add a little more rest before heavier sets",
        ),
    ),
    TransitionOutcome.WEIGHT_INCREASE_SIGNIFICANTLY_BELOW: CommentaryPool(
        short_messages=("Too Heavy", "Big Miss", "Overreached"),
        tooltips=(
            "+{pct}% weight dropped you to {currReps} reps, well under {expectedLabel}.",
            "{currReps} reps vs {expectedLabel} expected. The jump was too aggressive.",
            "The heavier set fell far short of the estimate.",
        ),
        why_lines=(
            "{currReps} reps, expected {expectedLabel}",
            "More than 3 reps below the estimate",
        ),
        improve_lines=(
            "Use a smaller increment",
            "Check whether earlier sets went to failure",
        ),
    ),
    TransitionOutcome.WEIGHT_DECREASE_MET: CommentaryPool(
        short_messages=("Good Back-off", "Quality Volume", "Smart Drop"),
        tooltips=(
            "{pct}% weight with {currReps} reps. A productive back-off set.",
            "Lighter load, on-target reps. Good extra volume.",
            "Dropping {pct}% let you keep quality reps ({currReps}).",
        ),
        why_lines=(
            "{currReps} reps at the lighter weight",
            "Meets the estimate for the reduced load",
        ),
    ),
    TransitionOutcome.WEIGHT_DECREASE_SLIGHTLY_BELOW: CommentaryPool(
        short_messages=("Fatigued", "Slightly Short", "Tired Back-off"),
        tooltips=(
            "Even at {pct}% lighter, {currReps} reps is under the expected {expectedLabel}.",
            "{currReps} reps vs {expectedLabel} on the lighter set. Fatigue is catching up.",
            "The back-off set came in a little short.",
        ),
        why_lines=(
            "{currReps} reps, expected {expectedLabel}",
            "Fatigue is outpacing the weight reduction",
        ),
    ),
    TransitionOutcome.WEIGHT_DECREASE_SIGNIFICANTLY_BELOW: CommentaryPool(
        short_messages=("Running Out", "Heavy Fatigue", "Unplanned Drop"),
        tooltips=(
            "{pct}% lighter and only {currReps} reps vs {expectedLabel}. Fatigue is high.",
            "{currReps} reps is well under {expectedLabel}, even with less weight.",
            "This drop looks forced by fatigue rather than planned.",
        ),
        why_lines=(
            "{currReps} reps, expected {expectedLabel}",
            "Reps fell more than the lighter load explains",
        ),
        improve_lines=(
            "End the exercise here on days like this",
            "Rest longer before back-off sets",
        ),
    ),
}


PROMOTE_TITLES = ("Increase Weight", "Level Up", "Add Load", "Progress", "Step Up")
DEMOTE_HEAVY_TITLES = ("Decrease Weight", "Reduce Load", "Lighten Up", "Too Heavy", "Back Off")
DEMOTE_INCONSISTENT_TITLES = ("Inconsistent", "Varying", "Fluctuating", "Unstable")

PROMOTE_MESSAGES = (
    "All top sets hit {minReps}+ reps. Add {increase} next session.",
    "Strength surplus: bump the load by {increase}.",
    "Ready to move up. Try +{increase}.",
    "{minReps}+ reps on every top set. Time for +{increase}.",
)
DEMOTE_HEAVY_MESSAGES = (
    "Top sets peaked at {maxReps} reps. Use a lighter load.",
    "Too heavy: reduce the weight to get past {maxReps} reps.",
    "Back off the load, {maxReps} reps is below the growth range.",
)
DEMOTE_INCONSISTENT_MESSAGES = (
    "Reps swung between {minReps} and {maxReps}. Stabilise the load.",
    "Inconsistent: aim for a steadier {minReps}-{maxReps} rep range.",
    "Tighten the range: {minReps}-{maxReps} reps at one weight.",
)


def render(outcome: TransitionOutcome, **values) -> CommentaryPool:
    return POOLS[outcome].render(**values)


def pick_message(seed: str, templates: Sequence[str], **values) -> str:
    return interpolate(pick_deterministic(seed, templates), values)
