"""
Trend classification of an ensemble forecast against recent history, blending short and long horizon projected change with momentum and acceleration under a threshold that adapts to trend strength.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from engine.diagnostics import Diagnostics
from engine.enums import TrendLabel
from config import TREND_THRESHOLDS, settings


def _pct_change(future: float, baseline: float) -> float:
    if baseline <= 0:
        return 0.0
    return (future - baseline) / baseline * 100.0


def threshold(trend_strength: float, momentum: float) -> float:
    base = TREND_THRESHOLDS[-1][1]
    for floor, value in TREND_THRESHOLDS:
        if trend_strength > floor:
            base = value
            break
    return base * (1.0 + abs(momentum) / 100.0)


def combined_change(
    forecast_vals: Sequence[float],
    history: Sequence[float],
    diagnostics: Diagnostics,
) -> float:
    recent = float(np.mean(history[-settings.trend_short_window:])) if len(history) else 0.0
    short_avg = float(np.mean(forecast_vals[: settings.trend_short_window]))
    long_avg = float(np.mean(forecast_vals[: settings.trend_long_window]))

    return (
        _pct_change(short_avg, recent) * settings.trend_short_weight
        + _pct_change(long_avg, recent) * settings.trend_long_weight
        + diagnostics.momentum * settings.trend_momentum_weight
        + diagnostics.acceleration * settings.trend_acceleration_weight
    )


def classify(
    forecast_vals: Sequence[float],
    history: Sequence[float],
    diagnostics: Diagnostics,
) -> TrendLabel:
    if len(forecast_vals) < 2:
        return TrendLabel.stable

    change = combined_change(forecast_vals, history, diagnostics)
    limit = threshold(diagnostics.trend_strength, diagnostics.momentum)
    if change > limit:
        return TrendLabel.rising
    if change < -limit:
        return TrendLabel.falling
    return TrendLabel.stable
