"""
Test cases for trend classification, including the adaptive threshold and degenerate histories.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.diagnostics import Diagnostics
from engine.enums import TrendLabel
from engine.trend import classify, combined_change, threshold


def _diag(trend=0.0, momentum=0.0, acceleration=0.0):
    return Diagnostics(
        data_quality=100.0,
        volatility=0.1,
        trend_strength=trend,
        seasonality=None,
        momentum=momentum,
        acceleration=acceleration,
        sample_count=30,
    )


def test_threshold_scales_with_trend_strength_and_momentum():
    assert threshold(0.8, 0.0) == 7.0
    assert threshold(0.5, 0.0) == 10.0
    assert threshold(0.1, 0.0) == 13.0
    assert threshold(0.8, -50.0) == pytest.approx(10.5)


def test_combined_change_blend():
    history = [50.0] * 14
    change = combined_change([60.0] * 14, history, _diag(momentum=10.0, acceleration=5.0))
    # 0.5*20 + 0.3*20 + 0.3*10 + 0.2*5
    assert change == pytest.approx(20.0)


def test_classify_rising_falling_stable():
    history = [50.0] * 14
    assert classify([70.0] * 14, history, _diag()) is TrendLabel.rising
    assert classify([30.0] * 14, history, _diag()) is TrendLabel.falling
    assert classify([52.0] * 14, history, _diag()) is TrendLabel.stable


def test_strong_trend_lowers_threshold():
    history = [50.0] * 14
    forecast = [56.0] * 14
    # 0.8 * 12% = 9.6: above the strong-trend threshold only
    assert classify(forecast, history, _diag(trend=0.8)) is TrendLabel.rising
    assert classify(forecast, history, _diag(trend=0.1)) is TrendLabel.stable


def test_classify_degenerate_inputs():
    assert classify([90.0], [10.0] * 14, _diag()) is TrendLabel.stable
    assert classify([40.0] * 14, [0.0] * 14, _diag()) is TrendLabel.stable
