"""
Forecasting engine entry points: normalize the requested channel, compute diagnostics, run the selected method runners, combine them into an ensemble forecast and assemble the scored, explained result.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import numbers
from typing import Any, Iterable, List, Optional, Sequence, Union

from api.requests import ForecastRequest
from api.responses import ConfidenceBand, DiagnosticsSummary, ForecastPointModel, ForecastResult
from engine import confidence, diagnostics as diag
from engine.diagnostics import Diagnostics
from engine.ensemble import combine
from engine.enums import ForecastMethod
from engine.errors import ForecastError, InvalidRequestError
from engine.explain import explain
from engine.methods import MethodResult, get_runner
from engine.series import NormalizedSeries, normalize
from engine.trend import classify
from config import settings

log = logging.getLogger(__name__)

MethodSelection = Union[str, Iterable[str], None]


def resolve_methods(methods: MethodSelection) -> List[ForecastMethod]:
    if methods is None:
        return list(ForecastMethod)
    if isinstance(methods, (str, ForecastMethod)):
        methods = [methods]

    selected: List[ForecastMethod] = []
    for name in methods:
        if isinstance(name, ForecastMethod):
            parsed = [name]
        elif str(name).strip().lower() == "all":
            parsed = list(ForecastMethod)
        else:
            method = ForecastMethod.parse(name)
            if method is None:
                log.warning("Ignoring unknown forecast method %r", name)
                continue
            parsed = [method]
        for method in parsed:
            if method not in selected:
                selected.append(method)

    if not selected:
        raise InvalidRequestError("no recognised forecast method selected")
    # always in registry order
    return [m for m in ForecastMethod if m in selected]


def resolve_horizon(horizon_days: Any) -> int:
    if horizon_days is None:
        return settings.default_horizon_days
    if isinstance(horizon_days, bool) or not isinstance(horizon_days, numbers.Integral):
        raise InvalidRequestError(f"horizon must be an integer, got {horizon_days!r}")
    horizon_days = int(horizon_days)
    if not 1 <= horizon_days <= settings.max_horizon_days:
        raise InvalidRequestError(
            f"horizon {horizon_days} outside 1..{settings.max_horizon_days}"
        )
    return horizon_days


def _summary(d: Diagnostics, limited: bool) -> DiagnosticsSummary:
    return DiagnosticsSummary(
        data_quality=round(d.data_quality, 2),
        volatility=round(d.volatility, 4),
        trend_strength=round(d.trend_strength, 4),
        sample_count=d.sample_count,
        limited_data=limited,
        momentum=round(d.momentum, 2),
        acceleration=round(d.acceleration, 2),
        autocorrelation=round(d.autocorrelation, 4),
        seasonality_period_days=d.seasonality.period_days if d.seasonality else None,
        seasonality_strength=d.seasonality.strength if d.seasonality else None,
    )


def assemble(
    series: NormalizedSeries,
    d: Diagnostics,
    results: Sequence[MethodResult],
    methods: Sequence[ForecastMethod],
    horizon: int,
) -> ForecastResult:
    combined = combine(results, d)
    forecast_vals = [p.value for p in combined.points]

    score = confidence.estimate(results, d)
    label = classify(forecast_vals, series.values, d)
    text = explain(
        series.channel,
        label,
        score,
        forecast_vals,
        methods,
        d,
        horizon,
        limited=series.limited,
    )

    log.debug(
        "forecast %r: trend=%s confidence=%d methods=%s",
        series.channel, label.value, score, [m.value for m in methods],
    )

    return ForecastResult(
        channel=series.channel,
        forecast_points=[
            ForecastPointModel(date=p.date.isoformat(), value=p.value, confidence=p.confidence)
            for p in combined.points
        ],
        trend_label=label,
        overall_confidence=score,
        horizon_days=horizon,
        methods_used=list(methods),
        explanation=text,
        confidence_band=ConfidenceBand(lower=list(combined.lower), upper=list(combined.upper)),
        diagnostics_summary=_summary(d, series.limited),
    )


def _forecast(
    series: Any,
    channel: str,
    horizon_days: Any,
    methods: MethodSelection,
) -> ForecastResult:
    horizon = resolve_horizon(horizon_days)
    selected = resolve_methods(methods)
    normalized = normalize(series, channel)

    d = diag.compute(normalized.values)
    results = [
        get_runner(m).run(normalized.values, normalized.dates, horizon)
        for m in selected
    ]
    return assemble(normalized, d, results, selected, horizon)


def forecast(
    series: Any,
    channel: str,
    horizon_days: Optional[int] = None,
    methods: MethodSelection = None,
) -> Optional[ForecastResult]:
    """Forecast ``channel`` of ``series`` for ``horizon_days`` days.

    Returns ``None`` when the input is malformed, the channel cannot be
    resolved or fewer than the minimum number of usable points remain.
    """
    try:
        return _forecast(series, channel, horizon_days, methods)
    except ForecastError as exc:
        log.warning("Cannot forecast %r: %s", channel, exc)
    except Exception:
        log.exception("Unexpected failure forecasting %r", channel)
    return None


async def forecast_async(
    series: Any,
    channel: str,
    horizon_days: Optional[int] = None,
    methods: MethodSelection = None,
) -> Optional[ForecastResult]:
    """Same contract as :func:`forecast`, with diagnostics and every method
    runner executed concurrently in worker threads and joined before the
    ensemble step."""
    try:
        horizon = resolve_horizon(horizon_days)
        selected = resolve_methods(methods)
        normalized = normalize(series, channel)

        d, *results = await asyncio.gather(
            asyncio.to_thread(diag.compute, normalized.values),
            *(
                asyncio.to_thread(get_runner(m).run, normalized.values, normalized.dates, horizon)
                for m in selected
            ),
        )
        return assemble(normalized, d, results, selected, horizon)
    except ForecastError as exc:
        log.warning("Cannot forecast %r: %s", channel, exc)
    except Exception:
        log.exception("Unexpected failure forecasting %r", channel)
    return None


async def run(req: ForecastRequest) -> Optional[ForecastResult]:
    return await forecast_async(req.series, req.channel, req.horizon_days, req.methods)
