import logging
from typing import List, Sequence

from settings_schema import PrematurePrSettings
from .models import PrematurePrResult, SessionEntry

logger = logging.getLogger(__name__)


def fmt_signed_pct(pct: float) -> str:
    sign = "+" if pct > 0 else ""
    return f"{sign}{pct:.1f}%"


class PrematurePrDetector:
    """Flag a recent PR that the sessions after it could not reproduce.

    The flag is a secondary signal: it is reported next to the trend status
    and never replaces it. A PR logged in the newest session has no
    follow-up yet and is never judged.
    """

    def __init__(self, settings: PrematurePrSettings | None = None) -> None:
        self.settings = settings or PrematurePrSettings()

    @staticmethod
    def session_metric(entry: SessionEntry, bodyweight_like: bool) -> float:
        return float(entry.max_reps if bodyweight_like else entry.one_rep_max)

    def find_pr_index(self, metrics: Sequence[float], bodyweight_like: bool) -> int:
        """Index of the most recent PR with at least one later session, or -1."""
        margin = self.settings.pr_margin_reps if bodyweight_like else self.settings.pr_margin_kg
        for i in range(1, len(metrics) - 1):
            older_max = max([0.0, *metrics[i + 1:]])
            if metrics[i] > older_max + margin:
                return i
        return -1

    def detect(self, history: Sequence[SessionEntry], bodyweight_like: bool) -> PrematurePrResult:
        cfg = self.settings
        sessions = list(history[: cfg.lookback])
        m = [self.session_metric(s, bodyweight_like) for s in sessions]

        pr_index = self.find_pr_index(m, bodyweight_like)
        if pr_index < 1:
            return PrematurePrResult()

        pr_metric = m[pr_index]
        prior_metric = m[pr_index + 1]
        pr_weight = sessions[pr_index].weight

        spike_abs = pr_metric - prior_metric
        spike_pct = spike_abs / prior_metric * 100 if prior_metric > 0 else 0.0
        if bodyweight_like:
            meaningful = spike_abs >= cfg.min_spike_reps
        else:
            meaningful = spike_pct >= cfg.min_spike_pct

        best_after = max([0.0, *m[:pr_index]])
        drop_abs = best_after - pr_metric
        drop_pct = drop_abs / pr_metric * 100 if pr_metric > 0 else 0.0

        after_sessions = sessions[:pr_index]
        if bodyweight_like:
            rehits = sum(1 for s in after_sessions if s.max_reps >= pr_metric)
            failed = drop_abs <= cfg.post_pr_drop_reps
        else:
            rehits = sum(
                1 for s in after_sessions if s.weight >= pr_weight - cfg.rehit_weight_epsilon_kg
            )
            failed = drop_pct <= cfg.post_pr_drop_pct
        validated = rehits >= cfg.rehits_to_validate

        flagged = meaningful and failed and not validated
        logger.debug(
            "pr_index=%d spike=%.2f%% drop=%.2f%% rehits=%d flagged=%s",
            pr_index,
            spike_pct,
            drop_pct,
            rehits,
            flagged,
        )

        evidence: List[str] = []
        if flagged:
            if bodyweight_like:
                evidence.append(f"PR spike: +{round(spike_abs)} rep(s)")
                evidence.append(f"After PR: {round(drop_abs)} rep(s)")
            else:
                evidence.append(f"PR spike: +{spike_pct:.1f}%")
                evidence.append(f"After PR: {fmt_signed_pct(drop_pct)}")

        return PrematurePrResult(
            flagged=flagged,
            pr_index=pr_index,
            spike_abs=spike_abs,
            spike_pct=spike_pct,
            drop_abs=drop_abs,
            drop_pct=drop_pct,
            evidence=tuple(evidence),
        )
