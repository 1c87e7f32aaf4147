"""Value types shared by the progression analysis engine.

Every record is a frozen dataclass: engine functions only ever build new
values, they never mutate the ones they are given.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class TrendMode(str, Enum):
    REACTIVE = "reactive"
    DEFAULT = "default"


class TrendStatus(str, Enum):
    NEW = "new"
    STAGNANT = "stagnant"
    OVERLOAD = "overload"
    REGRESSION = "regression"
    NEUTRAL = "neutral"


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AnalysisStatus(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class TransitionOutcome(str, Enum):
    """Every way a set-to-set transition can be classified."""

    SAME_WEIGHT_REPS_INCREASED = "same_weight_reps_increased"
    SAME_WEIGHT_REPS_SAME = "same_weight_reps_same"
    SAME_WEIGHT_DROP_MILD = "same_weight_drop_mild"
    SAME_WEIGHT_DROP_MODERATE = "same_weight_drop_moderate"
    SAME_WEIGHT_DROP_SEVERE = "same_weight_drop_severe"
    WEIGHT_INCREASE_EXCEEDED = "weight_increase_exceeded"
    WEIGHT_INCREASE_MET = "weight_increase_met"
    WEIGHT_INCREASE_SLIGHTLY_BELOW = "weight_increase_slightly_below"
    WEIGHT_INCREASE_SIGNIFICANTLY_BELOW = "weight_increase_significantly_below"
    WEIGHT_DECREASE_MET = "weight_decrease_met"
    WEIGHT_DECREASE_SLIGHTLY_BELOW = "weight_decrease_slightly_below"
    WEIGHT_DECREASE_SIGNIFICANTLY_BELOW = "weight_decrease_significantly_below"


@dataclass(frozen=True)
class RawSet:
    """One logged set as delivered by the import layer."""

    date: datetime.datetime
    weight: float
    reps: int
    rpe: Optional[float] = None
    side: Optional[Side] = None
    set_type: str = "normal"
    exercise: str = ""


@dataclass(frozen=True)
class SetMetrics:
    weight: float
    reps: int
    volume: float
    one_rm: float
    rpe: Optional[float] = None


@dataclass(frozen=True)
class SessionEntry:
    """Best-effort summary of one exercise on one session (and side)."""

    date: datetime.datetime
    weight: float
    reps: int
    one_rep_max: float
    volume: float
    sets: float
    total_reps: int
    max_reps: int
    side: Optional[Side] = None


@dataclass(frozen=True)
class ExpectedRepsRange:
    min: int
    max: int
    center: float
    label: str


@dataclass(frozen=True)
class PlateauInfo:
    weight: float
    min_reps: float
    max_reps: float


@dataclass(frozen=True)
class TrendCalculation:
    history_len: int
    window_size: int
    current_avg: float
    previous_avg: float
    latest_metric: Optional[float] = None
    previous_session_metric: Optional[float] = None
    recent_delta_abs: Optional[float] = None
    recent_delta_pct: Optional[float] = None


@dataclass(frozen=True)
class PrematurePrResult:
    flagged: bool = False
    pr_index: int = -1
    spike_abs: float = 0.0
    spike_pct: float = 0.0
    drop_abs: float = 0.0
    drop_pct: float = 0.0
    evidence: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TrendResult:
    status: TrendStatus
    is_bodyweight_like: bool = False
    confidence: Confidence = Confidence.LOW
    diff_pct: Optional[float] = None
    evidence: Tuple[str, ...] = ()
    premature_pr: bool = False
    plateau: Optional[PlateauInfo] = None
    pr_spike_pct: Optional[float] = None
    pr_drop_pct: Optional[float] = None
    calculation: Optional[TrendCalculation] = None


@dataclass(frozen=True)
class TooltipLine:
    text: str
    color: Optional[str] = None


@dataclass(frozen=True)
class StructuredTooltip:
    trend_value: str
    direction: str
    why: Tuple[TooltipLine, ...] = ()
    improve: Tuple[TooltipLine, ...] = ()


@dataclass(frozen=True)
class TransitionMetrics:
    weight_change_pct: str
    vol_drop_pct: str
    actual_reps: int
    expected_reps: str


@dataclass(frozen=True)
class AnalysisResult:
    transition: str
    status: AnalysisStatus
    outcome: TransitionOutcome
    metrics: TransitionMetrics
    short_message: str
    tooltip: str
    structured: Optional[StructuredTooltip] = None


@dataclass(frozen=True)
class SessionAnalysis:
    goal_label: str
    avg_reps: int
    set_count: int
    tooltip: str = ""


@dataclass(frozen=True)
class SetWisdom:
    kind: str
    message: str
    tooltip: str
