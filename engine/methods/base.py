"""
Shared contract for forecasting method runners: forecast point and method result value types, the runner interface, and helpers for horizon dates, clamping and confidence decay.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Sequence, Tuple

from engine.enums import ForecastMethod

VALUE_MIN = 0.0
VALUE_MAX = 100.0


@dataclass(frozen=True)
class ForecastPoint:
    date: date
    value: float
    confidence: float


@dataclass(frozen=True)
class MethodResult:
    method: ForecastMethod
    points: Tuple[ForecastPoint, ...]
    reliability: float
    fallback: bool = False

    @property
    def values(self) -> List[float]:
        return [p.value for p in self.points]


def clamp(value: float, low: float = VALUE_MIN, high: float = VALUE_MAX) -> float:
    return max(low, min(high, value))


def bounded(value: float, limits: Tuple[float, float]) -> float:
    return clamp(value, limits[0], limits[1])


def future_dates(last: date, horizon: int) -> List[date]:
    # anchored on the last observation, never on the wall clock
    return [last + timedelta(days=i) for i in range(1, horizon + 1)]


def horizon_factor(step: int, horizon: int, decay: float) -> float:
    return 1.0 - (step / horizon) * decay


def make_point(day: date, value: float, confidence: float) -> ForecastPoint:
    return ForecastPoint(
        date=day,
        value=round(clamp(value), 2),
        confidence=round(clamp(confidence), 2),
    )


class Forecaster(ABC):
    method: ForecastMethod

    @abstractmethod
    def run(self, vals: Sequence[float], dates: Sequence[date], horizon: int) -> MethodResult:
        """Forecast ``horizon`` days past ``dates[-1]``."""
