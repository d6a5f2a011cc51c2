"""
Adaptive weighted moving average forecaster whose window widens with volatility, weighting recent observations more heavily and extrapolating the local window trend.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from datetime import date
from typing import Sequence

import numpy as np

from engine.diagnostics.compute import volatility
from engine.enums import ForecastMethod
from engine.methods.base import Forecaster, MethodResult, bounded, future_dates, horizon_factor, make_point
from config import settings


def window_size(vals: Sequence[float]) -> int:
    n = len(vals)
    small = settings.moving_average_small_window
    if volatility(vals) > settings.moving_average_volatility_cutoff:
        size = min(settings.moving_average_large_window, max(small, n // 2))
    else:
        size = small
    return max(1, min(size, n))


def stability(vals: Sequence[float]) -> float:
    if len(vals) < 3:
        return 0.5
    arr = np.asarray(vals, dtype=float)
    mean = float(np.mean(arr))
    if mean == 0:
        return 0.5
    relative = float(np.mean(np.abs(np.diff(arr)))) / mean
    return max(0.0, min(1.0, 1.0 - relative))


def _stability_tier(std: float) -> float:
    for bound, tier in settings.moving_average_stability_tiers:
        if std < bound:
            return tier
    return settings.moving_average_stability_floor


class WeightedMovingAverage(Forecaster):
    method = ForecastMethod.moving_average

    def run(self, vals: Sequence[float], dates: Sequence[date], horizon: int) -> MethodResult:
        size = window_size(vals)
        window = np.asarray(vals[-size:], dtype=float)
        weights = np.arange(1, size + 1, dtype=float) / size
        average = float(np.dot(window, weights) / np.sum(weights))
        slope = float(window[-1] - window[0]) / size

        std = math.sqrt(float(np.mean((window - average) ** 2)))
        tier = _stability_tier(std)

        points = []
        current = average
        for step, day in enumerate(future_dates(dates[-1], horizon), start=1):
            current += slope
            confidence = max(
                settings.moving_average_min_confidence,
                tier * horizon_factor(step, horizon, settings.moving_average_horizon_decay),
            )
            points.append(make_point(day, current, confidence))

        reliability = bounded(stability(vals) * 100.0, settings.moving_average_reliability_range)
        return MethodResult(method=self.method, points=tuple(points), reliability=round(reliability, 2))
