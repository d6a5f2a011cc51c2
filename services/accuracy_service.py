"""
Verification of a past forecast against the values that were later observed, matching forecast days to realised points and scoring per-day accuracy, absolute error and band coverage.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Any, Dict, Mapping, Optional, Sequence

from api.responses import AccuracyReport, ForecastResult, PointAccuracy
from engine.series import parse_date, resolve_channel

log = logging.getLogger(__name__)

# realised data is sometimes published a day early or late
_MATCH_TOLERANCE_DAYS = 1


def point_accuracy(predicted: float, actual: float) -> float:
    if actual == 0:
        return 95.0 if predicted < 5 else max(0.0, 100.0 - predicted * 10.0)
    error = abs(predicted - actual) / actual * 100.0
    return min(100.0, max(0.0, 100.0 - error))


def _actual_by_date(actual: Sequence[Any], key: str) -> Dict[date, float]:
    observed: Dict[date, float] = {}
    for point in actual:
        if not isinstance(point, Mapping):
            continue
        day = parse_date(point.get("date"))
        if day is None:
            continue
        try:
            value = float(point.get(key) or 0)
        except (TypeError, ValueError):
            continue
        if math.isfinite(value) and value >= 0:
            observed.setdefault(day, value)
    return observed


def _lookup(observed: Dict[date, float], day: date) -> Optional[float]:
    if day in observed:
        return observed[day]
    for offset in range(1, _MATCH_TOLERANCE_DAYS + 1):
        for candidate in (day - timedelta(days=offset), day + timedelta(days=offset)):
            if candidate in observed:
                return observed[candidate]
    return None


def evaluate(result: ForecastResult, actual: Sequence[Any], channel: Optional[str] = None) -> AccuracyReport:
    keys = []
    for point in actual:
        if isinstance(point, Mapping):
            keys = [str(k) for k in point.keys() if k != "date"]
            break
    key = resolve_channel(keys, channel or result.channel)
    if key is None:
        log.warning("Channel %r not present in realised series", channel or result.channel)
        return AccuracyReport(matched_points=0)

    observed = _actual_by_date(actual, key)
    band = result.confidence_band
    scored = []
    for i, fp in enumerate(result.forecast_points):
        day = parse_date(fp.date)
        value = _lookup(observed, day) if day else None
        if value is None:
            continue
        lower = band.lower[i] if i < len(band.lower) else fp.value
        upper = band.upper[i] if i < len(band.upper) else fp.value
        scored.append(PointAccuracy(
            date=fp.date,
            predicted=fp.value,
            actual=value,
            accuracy=round(point_accuracy(fp.value, value), 2),
            within_band=lower <= value <= upper,
        ))

    if not scored:
        return AccuracyReport(matched_points=0)

    n = len(scored)
    return AccuracyReport(
        matched_points=n,
        accuracy=round(sum(p.accuracy for p in scored) / n, 2),
        mae=round(sum(abs(p.predicted - p.actual) for p in scored) / n, 4),
        within_band_ratio=round(sum(1 for p in scored if p.within_band) / n, 4),
        points=scored,
    )
