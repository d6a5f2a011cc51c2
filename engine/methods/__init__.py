"""
Forecasting method runners behind a common interface, and the registry the engine dispatches through.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Dict, Type

from engine.enums import ForecastMethod
from engine.methods.base import Forecaster, ForecastPoint, MethodResult
from engine.methods.linear import LinearRegression
from engine.methods.moving_average import WeightedMovingAverage
from engine.methods.polynomial import PolynomialRegression
from engine.methods.smoothing import ExponentialSmoothing

RUNNERS: Dict[ForecastMethod, Type[Forecaster]] = {
    ForecastMethod.linear: LinearRegression,
    ForecastMethod.polynomial: PolynomialRegression,
    ForecastMethod.exponential: ExponentialSmoothing,
    ForecastMethod.moving_average: WeightedMovingAverage,
}


def get_runner(method: ForecastMethod) -> Forecaster:
    return RUNNERS[method]()


__all__ = [
    "Forecaster",
    "ForecastPoint",
    "MethodResult",
    "LinearRegression",
    "PolynomialRegression",
    "ExponentialSmoothing",
    "WeightedMovingAverage",
    "RUNNERS",
    "get_runner",
]
