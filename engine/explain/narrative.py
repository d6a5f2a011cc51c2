"""
Natural-language rationale for an ensemble forecast, describing the methods and history used, the projected direction with momentum and acceleration qualifiers, detected seasonality, and the confidence level with the diagnostics that limit it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from engine.diagnostics import Diagnostics
from engine.enums import ConfidenceLevel, ForecastMethod, TrendLabel
from config import settings


def _join(items: Sequence[str]) -> str:
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def _methods_sentence(methods: Sequence[ForecastMethod], sample_count: int) -> str:
    titles = _join([m.display_name for m in methods])
    if len(methods) > 1:
        return f"Based on statistical analysis using multiple forecasting methods ({titles}) applied to {sample_count} data points, "
    return f"Based on {titles} applied to {sample_count} data points, "


def _rising(subject: str, horizon: int, avg: float, d: Diagnostics) -> str:
    momentum = ""
    if d.momentum > settings.explain_strong_momentum:
        momentum = f" with strong momentum ({d.momentum:.1f}%)"
    elif d.momentum > settings.explain_notable_momentum:
        momentum = f" with positive momentum ({d.momentum:.1f}%)"
    accel = ""
    if d.acceleration > settings.explain_acceleration:
        accel = " and accelerating growth"
    elif d.acceleration < -settings.explain_acceleration:
        accel = " though growth is decelerating"

    text = f"{subject} is projected to show an upward trend over the next {horizon} days{momentum}{accel}, with an average forecasted value of {avg:.1f}. "
    strength = round(d.trend_strength * 100)
    if d.trend_strength > settings.explain_strong_trend:
        text += f"This represents a strong upward trend ({strength}% strength), indicating sustained growth. "
    elif d.trend_strength > settings.explain_moderate_trend:
        text += f"This represents a moderate upward trend ({strength}% strength). "
    return text


def _falling(subject: str, horizon: int, avg: float, d: Diagnostics) -> str:
    momentum = ""
    if d.momentum < -settings.explain_strong_momentum:
        momentum = f" with strong negative momentum ({d.momentum:.1f}%)"
    elif d.momentum < -settings.explain_notable_momentum:
        momentum = f" with declining momentum ({d.momentum:.1f}%)"
    accel = ""
    if d.acceleration < -settings.explain_acceleration:
        accel = " and accelerating decline"
    elif d.acceleration > settings.explain_acceleration:
        accel = " though the decline is slowing"

    text = f"{subject} is projected to show a downward trend over the next {horizon} days{momentum}{accel}, with an average forecasted value of {avg:.1f}. "
    strength = round(d.trend_strength * 100)
    if d.trend_strength > settings.explain_strong_trend:
        text += f"This represents a strong downward trend ({strength}% strength), suggesting significantly declining interest. "
    elif d.trend_strength > settings.explain_moderate_trend:
        text += f"This represents a moderate downward trend ({strength}% strength). "
    return text


def _stable(subject: str, horizon: int, avg: float, d: Diagnostics) -> str:
    text = f"{subject} is projected to remain relatively stable over the next {horizon} days, with an average forecasted value of {avg:.1f}. "
    if d.volatility > settings.explain_high_volatility:
        text += f"However, the data shows high volatility ({d.volatility * 100:.1f}%), indicating potential for short-term fluctuations. "
    return text


def _limiting_reasons(d: Diagnostics) -> List[str]:
    reasons = []
    if d.volatility > settings.explain_high_volatility:
        reasons.append("high data volatility")
    if d.data_quality < settings.explain_weak_quality:
        reasons.append("limited data quality")
    if d.trend_strength < settings.explain_moderate_trend:
        reasons.append("weak trend patterns")
    return reasons


def _confidence_sentence(confidence: int, d: Diagnostics) -> str:
    level = ConfidenceLevel.from_score(confidence)
    if level is ConfidenceLevel.high:
        return (
            f"This forecast has high confidence ({confidence}%) based on consistent historical patterns "
            "and strong agreement across methods."
        )
    if level is ConfidenceLevel.moderate_high:
        return (
            f"This forecast has moderate-to-high confidence ({confidence}%): the trend direction is reliable, "
            "though exact values may vary."
        )

    reasons = _join(_limiting_reasons(d))
    if level is ConfidenceLevel.moderate:
        why = reasons or "mixed signals across methods"
        return (
            f"This forecast has moderate confidence ({confidence}%) due to {why}. "
            "Exercise caution when making decisions based on these projections."
        )
    why = reasons or "significant data variability and limited predictive patterns"
    return (
        f"This forecast has low confidence ({confidence}%) due to {why}. "
        "These projections should be considered preliminary."
    )


def explain(
    channel: str,
    trend: TrendLabel,
    confidence: int,
    forecast_vals: Sequence[float],
    methods: Sequence[ForecastMethod],
    diagnostics: Diagnostics,
    horizon: int,
    limited: bool = False,
) -> str:
    subject = channel.replace("-", " ")
    avg = float(np.mean(forecast_vals)) if len(forecast_vals) else 0.0

    text = _methods_sentence(methods, diagnostics.sample_count)
    if trend is TrendLabel.rising:
        text += _rising(subject, horizon, avg, diagnostics)
    elif trend is TrendLabel.falling:
        text += _falling(subject, horizon, avg, diagnostics)
    else:
        text += _stable(subject, horizon, avg, diagnostics)

    season = diagnostics.seasonality
    if season is not None and season.strength > settings.ensemble_seasonal_strength:
        text += (
            f"Seasonal patterns detected ({round(season.strength * 100)}% strength, "
            f"{season.period_days}-day period) have been factored into the forecast. "
        )
    if limited:
        text += f"Only {diagnostics.sample_count} days of history were available, so reliability is reduced. "

    return text + _confidence_sentence(confidence, diagnostics)
