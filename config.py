"""
Constants and configuration for Trendcast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Tuple

from pydantic_settings import BaseSettings


TRENDCAST_DEFAULT_HORIZON_DAYS = int(os.getenv("TRENDCAST_DEFAULT_HORIZON_DAYS", "30"))
TRENDCAST_MAX_HORIZON_DAYS = int(os.getenv("TRENDCAST_MAX_HORIZON_DAYS", "365"))

# reliability adjustments applied by the ensemble, keyed by method name.
# each rule is (condition, delta); conditions are evaluated in engine/ensemble
RELIABILITY_ADJUSTMENTS: Dict[str, List[Tuple[str, float]]] = {
    "linear": [("strong_clean_trend", 12.0), ("high_volatility", -5.0)],
    "polynomial": [("curved_trend", 8.0)],
    "exponential": [("volatile_or_seasonal", 10.0)],
    "moving-average": [("calm_flat", 7.0), ("strong_trend", -5.0)],
}

# linear blend used for the overall confidence score
CONFIDENCE_WEIGHTS: Dict[str, float] = {
    "reliability": 0.40,
    "data_quality": 0.20,
    "agreement": 0.15,
    "sufficiency": 0.10,
    "momentum": 0.08,
    "low_volatility": 0.05,
    "trend_strength": 0.02,
}

# (minimum trend strength, threshold in percent); first match wins
TREND_THRESHOLDS: List[Tuple[float, float]] = [
    (0.7, 7.0),
    (0.4, 10.0),
    (float("-inf"), 13.0),
]

# (minimum confidence, level) used by the explanation text
CONFIDENCE_LEVELS: List[Tuple[int, str]] = [
    (80, "high"),
    (60, "moderate_high"),
    (40, "moderate"),
    (0, "low"),
]


class Settings(BaseSettings):
    default_horizon_days: int = TRENDCAST_DEFAULT_HORIZON_DAYS
    max_horizon_days: int = TRENDCAST_MAX_HORIZON_DAYS

    # series normalizer
    min_points: int = 7
    reliable_points: int = 24

    # diagnostics
    quality_min_points: int = 14
    quality_fallback: float = 30.0
    quality_completeness_weight: float = 0.6
    quality_outlier_weight: float = 0.4
    iqr_multiplier: float = 1.5
    seasonality_lags: List[int] = [7, 14, 30]
    seasonality_min_points: int = 28
    seasonality_threshold: float = 0.3
    autocorrelation_max_lag: int = 7
    momentum_window: int = 7

    # linear regression
    linear_reliability_range: Tuple[float, float] = (45.0, 95.0)
    linear_confidence_range: Tuple[float, float] = (40.0, 95.0)
    linear_horizon_decay: float = 0.35
    linear_min_confidence: float = 25.0

    # polynomial regression
    polynomial_degree: int = 2
    # condition number of the design matrix above which the fit is rejected
    polynomial_max_condition: float = 1e10
    polynomial_overfit_penalty: float = 0.95
    polynomial_reliability_range: Tuple[float, float] = (40.0, 90.0)
    polynomial_confidence_range: Tuple[float, float] = (45.0, 92.0)
    polynomial_horizon_decay: float = 0.45
    polynomial_min_confidence: float = 25.0

    # holt double exponential smoothing
    smoothing_alpha: float = 0.3
    smoothing_beta: float = 0.1
    smoothing_init_points: int = 5
    smoothing_reliability_range: Tuple[float, float] = (50.0, 90.0)
    smoothing_horizon_decay: float = 0.5
    smoothing_min_confidence: float = 30.0

    # adaptive weighted moving average
    moving_average_small_window: int = 7
    moving_average_large_window: int = 14
    moving_average_volatility_cutoff: float = 0.3
    moving_average_reliability_range: Tuple[float, float] = (45.0, 80.0)
    # (window stddev upper bound, base confidence)
    moving_average_stability_tiers: List[Tuple[float, float]] = [
        (5.0, 75.0),
        (15.0, 60.0),
    ]
    moving_average_stability_floor: float = 45.0
    moving_average_horizon_decay: float = 0.4
    moving_average_min_confidence: float = 25.0

    # ensemble
    ensemble_reliability_floor: float = 30.0
    ensemble_reliability_ceiling: float = 100.0
    ensemble_z_score: float = 1.96
    ensemble_strong_trend: float = 0.7
    ensemble_curved_trend: float = 0.5
    ensemble_calm_trend: float = 0.5
    ensemble_clean_volatility: float = 0.3
    ensemble_curved_volatility: float = 0.4
    ensemble_volatile: float = 0.3
    ensemble_high_volatility: float = 0.4
    ensemble_calm_volatility: float = 0.2
    ensemble_seasonal_strength: float = 0.5

    # confidence estimator
    confidence_agreement_penalty: float = 12.0
    confidence_sufficiency_points: int = 100
    confidence_momentum_cutoff: float = 5.0
    confidence_momentum_base: float = 70.0
    confidence_momentum_scale: float = 0.5
    confidence_momentum_neutral: float = 50.0
    confidence_volatility_scale: float = 50.0
    confidence_trend_scale: float = 15.0
    confidence_seasonality_bonus: float = 5.0
    confidence_seasonality_strength: float = 0.5

    # trend classifier
    trend_short_window: int = 7
    trend_long_window: int = 14
    trend_short_weight: float = 0.5
    trend_long_weight: float = 0.3
    trend_momentum_weight: float = 0.3
    trend_acceleration_weight: float = 0.2

    # explanation
    explain_strong_momentum: float = 10.0
    explain_notable_momentum: float = 5.0
    explain_acceleration: float = 5.0
    explain_strong_trend: float = 0.7
    explain_moderate_trend: float = 0.4
    explain_high_volatility: float = 0.3
    explain_weak_quality: float = 70.0

    # display eligibility used by callers deciding whether to surface a forecast
    display_min_points: int = 24
    display_max_volatility: float = 0.50
    display_min_agreement_index: float = 60.0

    model_config = {
        "env_prefix": "TRENDCAST_",
        "extra": "ignore",
    }


settings = Settings()
