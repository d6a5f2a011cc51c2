"""
Diagnostics for a normalized interest series: data quality from completeness and IQR outliers, volatility as coefficient of variation, normalized trend strength, autocorrelation-based seasonality, and short-window momentum and acceleration, shared read-only by every downstream forecasting stage.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from scipy.stats import linregress

from config import settings


@dataclass(frozen=True)
class Seasonality:
    strength: float
    period_days: int


@dataclass(frozen=True)
class Diagnostics:
    data_quality: float
    volatility: float
    trend_strength: float
    seasonality: Optional[Seasonality]
    momentum: float
    acceleration: float
    autocorrelation: float = 0.0
    sample_count: int = 0

    @property
    def seasonal_strength(self) -> float:
        return self.seasonality.strength if self.seasonality else 0.0


def data_quality(vals: Sequence[float]) -> float:
    arr = np.asarray(vals, dtype=float)
    n = len(arr)
    if n < settings.quality_min_points:
        return settings.quality_fallback

    missing = int(np.count_nonzero((arr == 0) | np.isnan(arr)))
    completeness = 1.0 - missing / n

    ordered = np.sort(arr)
    q1 = ordered[int(n * 0.25)]
    q3 = ordered[int(n * 0.75)]
    fence = settings.iqr_multiplier * (q3 - q1)
    outliers = int(np.count_nonzero((arr < q1 - fence) | (arr > q3 + fence)))
    outlier_ratio = outliers / n

    quality = (
        completeness * settings.quality_completeness_weight
        + (1.0 - outlier_ratio) * settings.quality_outlier_weight
    ) * 100.0
    return float(min(100.0, max(0.0, quality)))


def volatility(vals: Sequence[float]) -> float:
    arr = np.asarray(vals, dtype=float)
    if len(arr) == 0:
        return 0.0
    mean = float(np.mean(arr))
    if mean <= 0:
        return 0.0
    return float(np.std(arr)) / mean


def trend_strength(vals: Sequence[float]) -> float:
    arr = np.asarray(vals, dtype=float)
    n = len(arr)
    if n < 2:
        return 0.0
    span = float(np.max(arr) - np.min(arr))
    if span <= 0:
        return 0.0
    slope = float(linregress(np.arange(n, dtype=float), arr).slope)
    return float(min(1.0, abs(slope) / (span / n)))


def autocorrelation_at_lag(vals: Sequence[float], lag: int) -> float:
    arr = np.asarray(vals, dtype=float)
    if lag <= 0 or len(arr) < lag * 2:
        return 0.0
    centered = arr - np.mean(arr)
    denominator = float(np.dot(centered, centered))
    if denominator == 0:
        return 0.0
    return float(np.dot(centered[:-lag], centered[lag:])) / denominator


def mean_autocorrelation(vals: Sequence[float]) -> float:
    if len(vals) < settings.quality_min_points:
        return 0.0
    max_lag = min(settings.autocorrelation_max_lag, len(vals) // 3)
    if max_lag < 1:
        return 0.0
    return float(np.mean([abs(autocorrelation_at_lag(vals, lag)) for lag in range(1, max_lag + 1)]))


def seasonality(vals: Sequence[float]) -> Optional[Seasonality]:
    if len(vals) < settings.seasonality_min_points:
        return None

    best_period, best_strength = 0, 0.0
    for lag in settings.seasonality_lags:
        if len(vals) < lag * 2:
            continue
        strength = autocorrelation_at_lag(vals, lag)
        if strength > best_strength:
            best_period, best_strength = lag, strength

    if best_strength > settings.seasonality_threshold:
        return Seasonality(strength=round(min(1.0, best_strength), 4), period_days=best_period)
    return None


def momentum(vals: Sequence[float]) -> float:
    w = settings.momentum_window
    if len(vals) < 2 * w:
        return 0.0
    recent = float(np.mean(vals[-w:]))
    previous = float(np.mean(vals[-2 * w:-w]))
    if previous == 0:
        return 0.0
    return (recent - previous) / previous * 100.0


def acceleration(vals: Sequence[float]) -> float:
    w = settings.momentum_window
    if len(vals) < 3 * w:
        return 0.0
    return momentum(vals) - momentum(vals[:-w])


def compute(vals: Sequence[float]) -> Diagnostics:
    values = list(vals)
    return Diagnostics(
        data_quality=data_quality(values),
        volatility=volatility(values),
        trend_strength=trend_strength(values),
        seasonality=seasonality(values),
        momentum=momentum(values),
        acceleration=acceleration(values),
        autocorrelation=mean_autocorrelation(values),
        sample_count=len(values),
    )
