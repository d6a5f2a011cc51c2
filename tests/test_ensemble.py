"""
Test cases for ensemble combination: diagnostic-driven reliability adjustments, weighting, per-day averaging and confidence band construction.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date, timedelta

import pytest

from engine.diagnostics import Diagnostics, Seasonality
from engine.enums import ForecastMethod
from engine.ensemble import adjusted_reliability, combine
from engine.methods.base import ForecastPoint, MethodResult


def _diag(trend=0.6, vol=0.25, season=None):
    return Diagnostics(
        data_quality=100.0,
        volatility=vol,
        trend_strength=trend,
        seasonality=season,
        momentum=0.0,
        acceleration=0.0,
        sample_count=60,
    )


def _result(method, values, reliability=50.0, confidence=60.0):
    start = date(2024, 2, 1)
    points = tuple(
        ForecastPoint(date=start + timedelta(days=i), value=v, confidence=confidence)
        for i, v in enumerate(values)
    )
    return MethodResult(method=method, points=points, reliability=reliability)


@pytest.mark.parametrize(
    "method,diag,expected",
    [
        (ForecastMethod.linear, _diag(trend=0.8, vol=0.1), 62.0),
        (ForecastMethod.linear, _diag(trend=0.2, vol=0.5), 45.0),
        (ForecastMethod.polynomial, _diag(trend=0.6, vol=0.3), 58.0),
        (ForecastMethod.exponential, _diag(vol=0.35), 60.0),
        (ForecastMethod.exponential, _diag(vol=0.1, season=Seasonality(0.6, 7)), 60.0),
        (ForecastMethod.moving_average, _diag(trend=0.3, vol=0.1), 57.0),
        (ForecastMethod.moving_average, _diag(trend=0.9, vol=0.25), 45.0),
        (ForecastMethod.linear, _diag(trend=0.6, vol=0.25), 50.0),
    ],
)
def test_adjusted_reliability(method, diag, expected):
    assert adjusted_reliability(_result(method, [50.0], reliability=50.0), diag) == expected


def test_adjusted_reliability_is_clamped():
    low = _result(ForecastMethod.linear, [50.0], reliability=20.0)
    high = _result(ForecastMethod.linear, [50.0], reliability=95.0)
    assert adjusted_reliability(low, _diag(trend=0.2, vol=0.5)) == 30.0
    assert adjusted_reliability(high, _diag(trend=0.9, vol=0.1)) == 100.0


def test_combine_equal_weights_and_band():
    results = [
        _result(ForecastMethod.linear, [40.0] * 3),
        _result(ForecastMethod.exponential, [60.0] * 3),
    ]
    out = combine(results, _diag())
    assert [p.value for p in out.points] == [50.0, 50.0, 50.0]
    assert out.lower == pytest.approx((30.4, 30.4, 30.4))
    assert out.upper == pytest.approx((69.6, 69.6, 69.6))
    assert out.weights[ForecastMethod.linear] == pytest.approx(0.5)
    assert out.points[0].date == date(2024, 2, 1)


def test_combine_band_is_clamped_and_contains_value():
    results = [
        _result(ForecastMethod.linear, [0.0, 95.0], reliability=90.0),
        _result(ForecastMethod.polynomial, [10.0, 100.0], reliability=40.0),
        _result(ForecastMethod.exponential, [30.0, 60.0], reliability=80.0),
        _result(ForecastMethod.moving_average, [0.0, 100.0], reliability=45.0),
    ]
    out = combine(results, _diag())
    for p, lo, hi in zip(out.points, out.lower, out.upper):
        assert 0.0 <= lo <= p.value <= hi <= 100.0
    assert sum(out.weights.values()) == pytest.approx(1.0)


def test_combine_single_method_uses_volatility_band():
    single = _result(ForecastMethod.linear, [50.0, 52.0])
    out = combine([single], _diag(vol=0.1))
    assert out.points == single.points
    assert out.lower[0] == pytest.approx(50.0 - 1.96 * 5.0)
    assert out.upper[1] == pytest.approx(52.0 + 1.96 * 5.0)


def test_combine_empty():
    out = combine([], _diag())
    assert out.points == () and out.lower == () and out.upper == ()
