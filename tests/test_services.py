"""
Test cases for the forecast, display eligibility and accuracy services.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date, timedelta

import pytest

from api.requests import ForecastRequest
from config import settings
from engine.forecaster import forecast
from services import accuracy_service, eligibility_service
from services.forecast_service import run_forecast, run_forecast_for_display


def _actual(start, values, channel="iPhone 16"):
    return [
        {"date": (start + timedelta(days=i)).isoformat(), channel: v}
        for i, v in enumerate(values)
    ]


def test_eligible_forecast(make_series, constant_values):
    result = forecast(make_series(constant_values), "iPhone 16")
    verdict = eligibility_service.check(result, agreement_index=75.0)
    assert verdict.eligible is True
    assert verdict.reasons == []


def test_short_history_not_eligible(make_series):
    result = forecast(make_series([50.0] * 10), "iPhone 16")
    verdict = eligibility_service.check(result, agreement_index=75.0)
    assert verdict.eligible is False
    assert verdict.reasons[0].startswith("insufficient history")


def test_volatility_and_agreement_gates(make_series, monkeypatch):
    values = [10.0, 90.0] * 15
    result = forecast(make_series(values), "iPhone 16")
    verdict = eligibility_service.check(result, agreement_index=40.0)
    assert verdict.eligible is False
    assert any(r.startswith("volatility") for r in verdict.reasons)
    assert any(r.startswith("agreement index") for r in verdict.reasons)

    monkeypatch.setattr(settings, "display_max_volatility", 1.0)
    monkeypatch.setattr(settings, "display_min_agreement_index", 30.0)
    assert eligibility_service.check(result, agreement_index=40.0).eligible is True


def test_missing_inputs_not_eligible(make_series, constant_values):
    assert eligibility_service.check(None, 90.0).eligible is False
    result = forecast(make_series(constant_values), "iPhone 16")
    verdict = eligibility_service.check(result, None)
    assert verdict.eligible is False
    assert verdict.reasons == ["agreement index unavailable"]


def test_point_accuracy():
    assert accuracy_service.point_accuracy(50.0, 50.0) == 100.0
    assert accuracy_service.point_accuracy(50.0, 40.0) == pytest.approx(75.0)
    assert accuracy_service.point_accuracy(2.0, 0.0) == 95.0
    assert accuracy_service.point_accuracy(8.0, 0.0) == pytest.approx(20.0)
    assert accuracy_service.point_accuracy(300.0, 10.0) == 0.0


def test_evaluate_against_realised_values(make_series, constant_values):
    result = forecast(make_series(constant_values), "iPhone 16", horizon_days=5)
    first_day = date(2024, 1, 31)

    exact = accuracy_service.evaluate(result, _actual(first_day, [50.0] * 5))
    assert exact.matched_points == 5
    assert exact.accuracy == pytest.approx(100.0)
    assert exact.mae == pytest.approx(0.0, abs=0.01)
    assert exact.within_band_ratio == 1.0

    lower = accuracy_service.evaluate(result, _actual(first_day, [40.0] * 5, channel="iphone-16"))
    assert lower.accuracy == pytest.approx(75.0, abs=0.1)
    assert lower.within_band_ratio == 0.0


def test_evaluate_tolerates_one_day_offset(make_series, constant_values):
    result = forecast(make_series(constant_values), "iPhone 16", horizon_days=5)
    report = accuracy_service.evaluate(result, _actual(date(2024, 2, 1), [50.0]))
    assert report.matched_points == 3


def test_evaluate_without_matches(make_series, constant_values):
    result = forecast(make_series(constant_values), "iPhone 16", horizon_days=5)
    assert accuracy_service.evaluate(result, []).matched_points == 0
    assert accuracy_service.evaluate(result, _actual(date(2025, 1, 1), [50.0])).matched_points == 0
    assert accuracy_service.evaluate(result, _actual(date(2024, 1, 31), [50.0], channel="Pixel")).accuracy is None


@pytest.mark.asyncio
async def test_forecast_service(make_series, linear_values):
    req = ForecastRequest(series=make_series(linear_values), channel="iPhone 16", horizon_days=10)
    result = await run_forecast(req)
    assert result is not None and len(result.forecast_points) == 10

    result, verdict = await run_forecast_for_display(req, agreement_index=80.0)
    assert result is not None
    assert verdict.eligible is True
