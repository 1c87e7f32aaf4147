from pydantic import BaseModel, ConfigDict, ValidationError, Field

TREND_MODES = ("reactive", "default")


class TrendSettings(BaseModel):
    """Thresholds used by the cross-session trend classifier."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_sessions_for_trend: int = Field(default=4, ge=2)
    recent_window: int = Field(default=4, ge=1)
    reactive_window: int = Field(default=4, ge=2)
    default_window: int = Field(default=6, ge=2)
    bodyweight_epsilon_kg: float = Field(default=0.0001, ge=0)
    bodyweight_share: float = Field(default=0.75, gt=0, le=1)
    min_signal_reps: int = 2
    weight_static_epsilon_kg: float = Field(default=0.5, ge=0)
    rep_static_epsilon: float = Field(default=1.0, ge=0)
    default_pct_threshold: float = 1.0
    reactive_pct_threshold: float = 0.6
    min_abs_1rm_kg: float = 0.25
    min_abs_reps: float = 1.0
    recency_override_pct: float = 0.6
    recency_override_reps: float = 1.0
    local_pr_lookback: int = Field(default=6, ge=2)
    recent_evidence_min_pct: float = 0.5
    direction_hysteresis: float = 1.0
    high_confidence_sessions: int = Field(default=10, ge=1)
    medium_confidence_sessions: int = Field(default=6, ge=1)
    max_evidence: int = Field(default=3, ge=0)


class PrematurePrSettings(BaseModel):
    """Constants for flagging PRs that were never reproduced."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    lookback: int = Field(default=6, ge=1)
    pr_margin_reps: float = 0.25
    pr_margin_kg: float = 0.001
    min_spike_reps: float = 1.0
    min_spike_pct: float = 2.0
    post_pr_drop_reps: float = -1.0
    post_pr_drop_pct: float = -2.5
    rehit_weight_epsilon_kg: float = 0.5
    rehits_to_validate: int = Field(default=2, ge=0)


class TransitionSettings(BaseModel):
    """Thresholds for set-to-set transition grading."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    same_weight_pct: float = Field(default=1.0, ge=0)
    drop_mild_pct: float = 15.0
    drop_moderate_pct: float = 25.0
    below_center_reps: int = 3
    recent_sets: int = Field(default=4, ge=1)
    fatigue_per_set: float = Field(default=0.4, ge=0)
    max_fatigue_penalty: float = Field(default=3.0, ge=0)
    max_expected_reps: int = Field(default=25, ge=1)
    target_reps: int = Field(default=10, ge=1)
    promote_threshold: int = 12
    min_hypertrophy_reps: int = 5


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    trend_mode: str = Field(default="reactive", pattern="^(reactive|default)$")
    separate_sides: bool = False
    trend: TrendSettings = TrendSettings()
    premature_pr: PrematurePrSettings = PrematurePrSettings()
    transitions: TransitionSettings = TransitionSettings()


def validate_settings(data: dict) -> EngineSettings:
    try:
        return EngineSettings(**data)
    except ValidationError as e:
        raise ValueError(str(e))
