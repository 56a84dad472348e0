"""
Centralized calibration for Montaje predictive analytics.

Every threshold, window and fixed probability used by the trend, risk,
completion and pattern components lives here. Defaults reproduce the
production calibration; a deployment may overlay values from
config/analytics.yaml.

Usage:
    from montaje.config import get_thresholds, load_thresholds

    thresholds = get_thresholds()
    custom = load_thresholds("/etc/montaje/analytics.yaml")
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

THRESHOLDS_PATH = Path(__file__).parent.parent / "config" / "analytics.yaml"


@dataclass(frozen=True)
class AnalyticsThresholds:
    """Calibration constants for the analytics core."""

    # Trend
    min_trend_records: int = 3
    slope_threshold: float = 0.1  # |slope| above this is a direction
    min_confidence: float = 0.1
    max_confidence: float = 1.0

    # Time risk
    time_risk_days: int = 30
    time_critical_days: int = 14
    time_risk_probability: float = 0.8

    # Quality risk
    quality_window: int = 10  # most recent records considered
    quality_risk_below: float = 2.5
    quality_critical_below: float = 2.0
    quality_risk_probability: float = 0.7

    # Progress risk
    progress_min_confidence: float = 0.6
    progress_high_rate: float = 10.0

    # Completion
    fallback_horizon_days: int = 90
    fallback_confidence: float = 0.1
    on_track_progress: float = 0.7
    on_track_confidence_bonus: float = 0.2
    on_track_max_confidence: float = 0.9
    max_projection_days: int = 3650

    # Recommendations
    recommendation_window: int = 20
    focus_criterion_below: float = 4.0

    # Patterns
    min_bucket_samples: int = 3
    min_weekly_buckets: int = 3
    max_pattern_confidence: float = 0.9
    weekly_pattern_min_confidence: float = 0.6
    difficulty_pattern_min_confidence: float = 0.5


DEFAULT_THRESHOLDS = AnalyticsThresholds()


def load_thresholds(path: Optional[str] = None) -> AnalyticsThresholds:
    """
    Load analytics thresholds from YAML config.

    Expected shape:
        thresholds:
          time_risk_days: 21
          quality_risk_below: 2.8

    Keys missing from the file keep their defaults.

    Raises:
        FileNotFoundError if config file doesn't exist.
        yaml.YAMLError if config is invalid YAML.
        ValueError if the file has no 'thresholds' mapping.
    """
    config_path = Path(path) if path else THRESHOLDS_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Analytics thresholds not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f)

    if not data or not isinstance(data.get("thresholds"), dict):
        raise ValueError("analytics.yaml must have a 'thresholds' mapping")

    known = {f.name: f for f in fields(AnalyticsThresholds)}
    overrides = {}
    for name, value in data["thresholds"].items():
        if name not in known:
            logger.warning(f"Skipping unknown threshold: {name}")
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning(f"Invalid value for {name}: {value!r}")
            continue
        # int fields stay int so they can size windows and timedeltas
        if known[name].type in (int, "int"):
            value = int(value)
        else:
            value = float(value)
        overrides[name] = value

    return replace(DEFAULT_THRESHOLDS, **overrides)


def get_thresholds(path: Optional[str] = None) -> AnalyticsThresholds:
    """
    Return deployment thresholds, or the defaults when no config file exists.

    The repo-level config/ directory is not part of a built wheel, so an
    installed package lands on the defaults unless given an explicit path.
    """
    config_path = Path(path) if path else THRESHOLDS_PATH
    if not config_path.exists():
        logger.info(f"No thresholds file at {config_path}, using default calibration")
        return DEFAULT_THRESHOLDS
    return load_thresholds(str(config_path))
