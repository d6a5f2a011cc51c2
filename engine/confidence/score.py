"""
Overall forecast confidence as a fixed linear blend of method reliability, data quality, method agreement, data sufficiency, momentum consistency, volatility and trend strength, with a bonus for detected seasonality.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

from engine.diagnostics import Diagnostics
from engine.methods.base import MethodResult
from config import CONFIDENCE_WEIGHTS, settings


def agreement(reliabilities: Sequence[float]) -> float:
    if not reliabilities:
        return 0.0
    variance = float(np.var(np.asarray(reliabilities, dtype=float)))
    return max(0.0, 100.0 - settings.confidence_agreement_penalty * variance)


def sufficiency(sample_count: int) -> float:
    return min(100.0, sample_count / settings.confidence_sufficiency_points * 100.0)


def momentum_consistency(momentum: float) -> float:
    if abs(momentum) > settings.confidence_momentum_cutoff:
        return min(100.0, settings.confidence_momentum_base + abs(momentum) * settings.confidence_momentum_scale)
    return settings.confidence_momentum_neutral


def factors(results: Sequence[MethodResult], diagnostics: Diagnostics) -> Dict[str, float]:
    reliabilities = [r.reliability for r in results]
    return {
        "reliability": float(np.mean(reliabilities)) if reliabilities else 50.0,
        "data_quality": diagnostics.data_quality,
        "agreement": agreement(reliabilities),
        "sufficiency": sufficiency(diagnostics.sample_count),
        "momentum": momentum_consistency(diagnostics.momentum),
        "low_volatility": (1.0 - min(1.0, diagnostics.volatility)) * settings.confidence_volatility_scale,
        "trend_strength": diagnostics.trend_strength * settings.confidence_trend_scale,
    }


def estimate(results: Sequence[MethodResult], diagnostics: Diagnostics) -> int:
    parts = factors(results, diagnostics)
    score = sum(CONFIDENCE_WEIGHTS[name] * value for name, value in parts.items())
    if diagnostics.seasonal_strength > settings.confidence_seasonality_strength:
        score += settings.confidence_seasonality_bonus
    return int(round(max(0.0, min(100.0, score))))
