from __future__ import annotations

import datetime
import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from settings_schema import EngineSettings
from algorithms import (
    AnalysisResult,
    RawSet,
    SessionEntry,
    SessionSummarizer,
    SetTransitionAnalyzer,
    TrendClassifier,
    TrendMode,
    TrendResult,
    analyze_progression,
    analyze_session,
)

logger = logging.getLogger(__name__)


class ProgressionService:
    """Run the progression analysis engine over a caller-supplied set history.

    The service holds configuration only. It keeps no cache, so any
    memoisation is up to the caller.
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()
        self.classifier = TrendClassifier(self.settings.trend, self.settings.premature_pr)
        self.transitions = SetTransitionAnalyzer(self.settings.transitions)

    @staticmethod
    def exercise_names(sets: Iterable[RawSet]) -> List[str]:
        return sorted({s.exercise for s in sets if s.exercise})

    @staticmethod
    def exercise_sets(
        sets: Iterable[RawSet],
        exercise: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[RawSet]:
        """Filter ``sets`` by exercise (case-insensitive) and ISO date bounds."""
        start = datetime.date.fromisoformat(start_date) if start_date else None
        end = datetime.date.fromisoformat(end_date) if end_date else None
        wanted = exercise.lower() if exercise else None
        result = []
        for s in sets:
            if wanted is not None and s.exercise.lower() != wanted:
                continue
            day = SessionSummarizer.normalize_date(s.date).date()
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue
            result.append(s)
        return result

    def sessions(
        self,
        sets: Iterable[RawSet],
        exercise: Optional[str] = None,
        separate_sides: Optional[bool] = None,
    ) -> List[SessionEntry]:
        if separate_sides is None:
            separate_sides = self.settings.separate_sides
        return SessionSummarizer.summarize(
            self.exercise_sets(sets, exercise), separate_sides=separate_sides
        )

    def exercise_trend(
        self,
        sets: Iterable[RawSet],
        exercise: Optional[str] = None,
        mode: TrendMode | str | None = None,
    ) -> TrendResult:
        history = self.sessions(sets, exercise, separate_sides=False)
        result = self.classifier.classify(history, mode or self.settings.trend_mode)
        logger.info(
            "trend for %s: %s (%s confidence, %d sessions)",
            exercise or "all sets",
            result.status.value,
            result.confidence.value,
            len(history),
        )
        return result

    def set_analysis(
        self, sets: Iterable[RawSet], exercise: Optional[str] = None
    ) -> Dict[datetime.datetime, List[AnalysisResult]]:
        """Return the transition analysis of every session, keyed by session date."""
        by_session: Dict[datetime.datetime, List[RawSet]] = {}
        for s in self.exercise_sets(sets, exercise):
            by_session.setdefault(SessionSummarizer.normalize_date(s.date), []).append(s)
        return {d: self.transitions.analyze(group) for d, group in sorted(by_session.items())}

    def session_overview(
        self,
        sets: Iterable[RawSet],
        exercise: Optional[str] = None,
        session_date: Optional[str] = None,
    ) -> dict:
        """Summarise one session's sets: rep zone, load advice and transitions."""
        session_sets = self.exercise_sets(sets, exercise, session_date, session_date)
        return {
            "session": analyze_session(session_sets),
            "wisdom": analyze_progression(
                session_sets, settings=self.settings.transitions
            ),
            "transitions": self.transitions.analyze(session_sets),
        }

    def trend_table(self, sets: Iterable[RawSet], mode: TrendMode | str | None = None) -> pd.DataFrame:
        """Return one row per exercise with its trend verdict."""
        all_sets = list(sets)
        rows = []
        for name in self.exercise_names(all_sets):
            result = self.exercise_trend(all_sets, name, mode)
            rows.append(
                {
                    "exercise": name,
                    "status": result.status.value,
                    "confidence": result.confidence.value,
                    "diff_pct": round(result.diff_pct, 2) if result.diff_pct is not None else None,
                    "premature_pr": result.premature_pr,
                    "evidence": " | ".join(result.evidence),
                }
            )
        columns = ["exercise", "status", "confidence", "diff_pct", "premature_pr", "evidence"]
        return pd.DataFrame(rows, columns=columns)
