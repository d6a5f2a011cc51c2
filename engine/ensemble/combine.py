"""
Ensemble combination of method forecasts: reliability adjustment from series diagnostics, normalized weighting, per-day weighted averaging and a 95% band from cross-method dispersion.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from engine.diagnostics import Diagnostics
from engine.enums import ForecastMethod
from engine.methods.base import ForecastPoint, MethodResult, clamp
from config import RELIABILITY_ADJUSTMENTS, settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CombinedForecast:
    points: Tuple[ForecastPoint, ...]
    lower: Tuple[float, ...]
    upper: Tuple[float, ...]
    weights: Dict[ForecastMethod, float]


_CONDITIONS: Dict[str, Callable[[Diagnostics], bool]] = {
    "strong_clean_trend": lambda d: (
        d.trend_strength > settings.ensemble_strong_trend
        and d.volatility < settings.ensemble_clean_volatility
    ),
    "high_volatility": lambda d: d.volatility > settings.ensemble_high_volatility,
    "curved_trend": lambda d: (
        d.trend_strength > settings.ensemble_curved_trend
        and d.volatility < settings.ensemble_curved_volatility
    ),
    "volatile_or_seasonal": lambda d: (
        d.volatility > settings.ensemble_volatile
        or d.seasonal_strength > settings.ensemble_seasonal_strength
    ),
    "calm_flat": lambda d: (
        d.volatility < settings.ensemble_calm_volatility
        and d.trend_strength < settings.ensemble_calm_trend
    ),
    "strong_trend": lambda d: d.trend_strength > settings.ensemble_strong_trend,
}


def adjusted_reliability(result: MethodResult, diagnostics: Diagnostics) -> float:
    adjusted = result.reliability
    for condition, delta in RELIABILITY_ADJUSTMENTS.get(result.method.value, []):
        if _CONDITIONS[condition](diagnostics):
            adjusted += delta
    return max(settings.ensemble_reliability_floor, min(settings.ensemble_reliability_ceiling, adjusted))


def weights(results: Sequence[MethodResult], diagnostics: Diagnostics) -> List[float]:
    adjusted = [adjusted_reliability(r, diagnostics) for r in results]
    total = sum(adjusted)
    if total <= 0:
        return [1.0 / len(results)] * len(results)
    return [a / total for a in adjusted]


def _band(center: float, spread: float) -> Tuple[float, float]:
    z = settings.ensemble_z_score
    lower = round(clamp(center - z * spread), 2)
    upper = round(clamp(center + z * spread), 2)
    return lower, upper


def _single(result: MethodResult, diagnostics: Diagnostics) -> CombinedForecast:
    first = result.points[0].value if result.points else 0.0
    spread = diagnostics.volatility * (first or 1.0)
    lower, upper = [], []
    for p in result.points:
        lo, hi = _band(p.value, spread)
        lower.append(min(lo, p.value))
        upper.append(max(hi, p.value))
    return CombinedForecast(
        points=result.points,
        lower=tuple(lower),
        upper=tuple(upper),
        weights={result.method: 1.0},
    )


def combine(results: Sequence[MethodResult], diagnostics: Diagnostics) -> CombinedForecast:
    if not results:
        return CombinedForecast(points=(), lower=(), upper=(), weights={})
    if len(results) == 1:
        return _single(results[0], diagnostics)

    w = weights(results, diagnostics)
    log.debug("ensemble weights: %s", {r.method.value: round(x, 4) for r, x in zip(results, w)})

    horizon = min(len(r.points) for r in results)
    points: List[ForecastPoint] = []
    lower: List[float] = []
    upper: List[float] = []

    for i in range(horizon):
        day_values = np.array([r.points[i].value for r in results], dtype=float)
        day_conf = np.array([r.points[i].confidence for r in results], dtype=float)
        value = round(clamp(float(np.dot(day_values, w))), 2)
        confidence = round(clamp(float(np.dot(day_conf, w))), 2)
        points.append(ForecastPoint(date=results[0].points[i].date, value=value, confidence=confidence))

        lo, hi = _band(float(np.mean(day_values)), float(np.std(day_values)))
        lower.append(min(lo, value))
        upper.append(max(hi, value))

    return CombinedForecast(
        points=tuple(points),
        lower=tuple(lower),
        upper=tuple(upper),
        weights={r.method: x for r, x in zip(results, w)},
    )
