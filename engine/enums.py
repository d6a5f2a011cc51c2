"""
Enumerations for Trend Labels, Forecast Methods and Confidence Levels

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from config import CONFIDENCE_LEVELS


class TrendLabel(str, Enum):
    rising = "rising"
    falling = "falling"
    stable = "stable"


class ForecastMethod(str, Enum):
    linear = "linear"
    polynomial = "polynomial"
    exponential = "exponential"
    moving_average = "moving-average"

    @classmethod
    def parse(cls, name: str) -> Optional[ForecastMethod]:
        key = re.sub(r"[\s_]+", "-", str(name).strip().lower())
        return cls._value2member_map_.get(key)

    @property
    def display_name(self) -> str:
        return _METHOD_TITLES[self]


_METHOD_TITLES = {
    ForecastMethod.linear: "linear regression",
    ForecastMethod.polynomial: "polynomial regression",
    ForecastMethod.exponential: "exponential smoothing",
    ForecastMethod.moving_average: "moving averages",
}


class ConfidenceLevel(str, Enum):
    high = "high"
    moderate_high = "moderate_high"
    moderate = "moderate"
    low = "low"

    @classmethod
    def from_score(cls, score: float) -> ConfidenceLevel:
        for floor, level in CONFIDENCE_LEVELS:
            if score >= floor:
                return cls(level)
        return cls.low
