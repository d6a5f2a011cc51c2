"""
Response models for forecasting results and the diagnostics exposed to callers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.enums import ForecastMethod, TrendLabel


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class ForecastPointModel(NpModel):

    date: str
    value: float = Field(ge=0.0, le=100.0)
    confidence: float = Field(ge=0.0, le=100.0)


class ConfidenceBand(NpModel):

    lower: List[float] = Field(default_factory=list)
    upper: List[float] = Field(default_factory=list)


class DiagnosticsSummary(NpModel):

    data_quality: float
    volatility: float
    trend_strength: float
    sample_count: int
    limited_data: bool = False
    momentum: float = 0.0
    acceleration: float = 0.0
    autocorrelation: float = 0.0
    seasonality_period_days: Optional[int] = None
    seasonality_strength: Optional[float] = None


class ForecastResult(NpModel):

    channel: str
    forecast_points: List[ForecastPointModel]
    trend_label: TrendLabel
    overall_confidence: int = Field(ge=0, le=100)
    horizon_days: int
    methods_used: List[ForecastMethod]
    explanation: str
    confidence_band: ConfidenceBand
    diagnostics_summary: DiagnosticsSummary


class DisplayEligibility(BaseModel):

    eligible: bool
    reasons: List[str] = Field(default_factory=list)


class PointAccuracy(BaseModel):

    date: str
    predicted: float
    actual: float
    accuracy: float
    within_band: bool


class AccuracyReport(BaseModel):

    matched_points: int
    accuracy: Optional[float] = None
    mae: Optional[float] = None
    within_band_ratio: Optional[float] = None
    points: List[PointAccuracy] = Field(default_factory=list)
