"""
Montaje Predictive Intelligence Layer.

Turns a time series of rehearsal evaluations into:
- Trend analysis (least-squares direction, rate, confidence)
- Risk factors (time, quality, progress)
- Prioritized recommendations
- Completion-date projection
- Behavioral patterns (weekday performance)

Usage:
    # Full prediction
    from montaje.intelligence import predictive_analytics
    result = predictive_analytics.predict_work_completion(target, records)

    # Individual components
    from montaje.intelligence import analyze_trend, assess_risks
"""

from .completion import CompletionEstimate, estimate_current_progress, predict_completion
from .patterns import (
    PatternResult,
    actionable_patterns,
    analyze_difficulty_correlation,
    analyze_weekly_pattern,
    detect_patterns,
)
from .predictive import PredictionResult, PredictiveAnalytics, predictive_analytics
from .recommendations import (
    Effort,
    Recommendation,
    RecommendationCategory,
    RecommendationPriority,
    generate_recommendations,
)
from .risk import RiskFactor, RiskSeverity, RiskType, assess_risks
from .trend import TrendAnalysis, TrendDirection, TrendPoint, analyze_trend, linear_regression

__all__ = [
    # Trend
    "TrendAnalysis",
    "TrendDirection",
    "TrendPoint",
    "analyze_trend",
    "linear_regression",
    # Risk
    "RiskFactor",
    "RiskSeverity",
    "RiskType",
    "assess_risks",
    # Completion
    "CompletionEstimate",
    "estimate_current_progress",
    "predict_completion",
    # Recommendations
    "Effort",
    "Recommendation",
    "RecommendationCategory",
    "RecommendationPriority",
    "generate_recommendations",
    # Patterns
    "PatternResult",
    "actionable_patterns",
    "analyze_difficulty_correlation",
    "analyze_weekly_pattern",
    "detect_patterns",
    # Orchestration
    "PredictionResult",
    "PredictiveAnalytics",
    "predictive_analytics",
]
