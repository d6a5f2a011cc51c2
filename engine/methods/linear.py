"""
Ordinary least squares trend forecaster with adjusted R-squared reliability and prediction-interval aware per-day confidence.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Sequence

import numpy as np
from scipy.stats import linregress

from engine.enums import ForecastMethod
from engine.methods.base import Forecaster, MethodResult, bounded, future_dates, horizon_factor, make_point
from config import settings


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float
    r_squared: float
    adjusted_r_squared: float
    standard_error: float
    x_mean: float
    sxx: float
    n: int


def fit(vals: Sequence[float]) -> LinearFit:
    y = np.asarray(vals, dtype=float)
    n = len(y)
    x = np.arange(n, dtype=float)
    x_mean = float(np.mean(x))
    sxx = float(np.sum((x - x_mean) ** 2))

    if n < 2 or sxx == 0:
        slope, intercept = 0.0, float(np.mean(y)) if n else 0.0
    else:
        res = linregress(x, y)
        slope, intercept = float(res.slope), float(res.intercept)

    predicted = slope * x + intercept
    ss_res = float(np.sum((y - predicted) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2)) if n else 0.0
    r2 = max(0.0, 1.0 - ss_res / ss_tot) if ss_tot > 0 else 0.0
    adj = 1.0 - (1.0 - r2) * ((n - 1) / (n - 2)) if n > 2 else r2
    se = math.sqrt(ss_res / (n - 2)) if n > 2 else math.sqrt(ss_res / max(n, 1))

    return LinearFit(
        slope=slope,
        intercept=intercept,
        r_squared=r2,
        adjusted_r_squared=adj,
        standard_error=se,
        x_mean=x_mean,
        sxx=sxx,
        n=n,
    )


class LinearRegression(Forecaster):
    method = ForecastMethod.linear

    def run(self, vals: Sequence[float], dates: Sequence[date], horizon: int) -> MethodResult:
        f = fit(vals)
        mean = float(np.mean(vals))
        relative_error = f.standard_error / mean if mean > 0 else 1.0
        base = bounded(
            f.adjusted_r_squared * 100.0 * (1.0 - min(0.5, relative_error)),
            settings.linear_confidence_range,
        )

        points = []
        for step, day in enumerate(future_dates(dates[-1], horizon), start=1):
            x = f.n + step - 1
            value = f.slope * x + f.intercept
            spread = (x - f.x_mean) ** 2 / f.sxx if f.sxx else 0.0
            prediction_error = f.standard_error * math.sqrt(1.0 + 1.0 / f.n + spread)
            interval_penalty = 1.0 - min(0.3, prediction_error / (mean if mean > 0 else 1.0))
            confidence = max(
                settings.linear_min_confidence,
                base * horizon_factor(step, horizon, settings.linear_horizon_decay) * interval_penalty,
            )
            points.append(make_point(day, value, confidence))

        reliability = bounded(f.adjusted_r_squared * 100.0, settings.linear_reliability_range)
        return MethodResult(method=self.method, points=tuple(points), reliability=round(reliability, 2))
