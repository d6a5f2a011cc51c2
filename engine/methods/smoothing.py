"""
Holt double exponential smoothing forecaster, tracking a level and a trend state per observation and extrapolating the final state across the horizon.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from datetime import date
from typing import List, Sequence, Tuple

import numpy as np

from engine.enums import ForecastMethod
from engine.methods.base import Forecaster, MethodResult, bounded, future_dates, horizon_factor, make_point
from config import settings


def _initial_trend(vals: Sequence[float]) -> float:
    if len(vals) < 2:
        return 0.0
    head = np.asarray(vals[: min(settings.smoothing_init_points, len(vals))], dtype=float)
    return float(np.mean(np.diff(head)))


def smooth(vals: Sequence[float], alpha: float, beta: float) -> Tuple[List[float], float, float]:
    """Return the smoothed levels with the final level and trend."""
    level = float(vals[0])
    trend = _initial_trend(vals)
    levels = [level]
    for v in vals[1:]:
        prev = level
        level = alpha * float(v) + (1 - alpha) * (level + trend)
        trend = beta * (level - prev) + (1 - beta) * trend
        levels.append(level)
    return levels, level, trend


class ExponentialSmoothing(Forecaster):
    method = ForecastMethod.exponential

    def __init__(self, alpha: float | None = None, beta: float | None = None) -> None:
        self.alpha = settings.smoothing_alpha if alpha is None else alpha
        self.beta = settings.smoothing_beta if beta is None else beta

    def run(self, vals: Sequence[float], dates: Sequence[date], horizon: int) -> MethodResult:
        levels, level, trend = smooth(vals, self.alpha, self.beta)

        arr = np.asarray(vals, dtype=float)
        mse = float(np.mean((arr - np.asarray(levels)) ** 2))
        mean = float(np.mean(arr))
        cv = math.sqrt(mse) / mean if mean > 0 else 0.0
        base = bounded(100.0 - cv * 100.0, settings.smoothing_reliability_range)

        points = []
        for step, day in enumerate(future_dates(dates[-1], horizon), start=1):
            level += trend
            confidence = max(
                settings.smoothing_min_confidence,
                base * horizon_factor(step, horizon, settings.smoothing_horizon_decay),
            )
            points.append(make_point(day, level, confidence))

        reliability = bounded(100.0 - 50.0 * cv, settings.smoothing_reliability_range)
        return MethodResult(method=self.method, points=tuple(points), reliability=round(reliability, 2))
