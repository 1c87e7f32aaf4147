from .math_tools import MathTools
from .models import (
    AnalysisResult,
    AnalysisStatus,
    Confidence,
    ExpectedRepsRange,
    RawSet,
    SessionEntry,
    SetMetrics,
    Side,
    TransitionOutcome,
    TrendMode,
    TrendResult,
    TrendStatus,
)
from .set_metrics import SetMetricsExtractor
from .expected_reps import ExpectedRepsEstimator
from .session_summary import SessionSummarizer
from .premature_pr import PrematurePrDetector
from .trend_classifier import TrendClassifier
from .set_transitions import SetTransitionAnalyzer
from .set_wisdom import analyze_progression, analyze_session
from .weight_converter import WeightConverter

__all__ = [
    "MathTools",
    "AnalysisResult",
    "AnalysisStatus",
    "Confidence",
    "ExpectedRepsRange",
    "RawSet",
    "SessionEntry",
    "SetMetrics",
    "Side",
    "TransitionOutcome",
    "TrendMode",
    "TrendResult",
    "TrendStatus",
    "SetMetricsExtractor",
    "ExpectedRepsEstimator",
    "SessionSummarizer",
    "PrematurePrDetector",
    "TrendClassifier",
    "SetTransitionAnalyzer",
    "analyze_progression",
    "analyze_session",
    "WeightConverter",
]
