"""
Display eligibility check used by calling layers to decide whether a forecast should be surfaced, based on history length, volatility and a cross-source agreement index supplied by the caller.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

from typing import Optional

from api.responses import DisplayEligibility, ForecastResult
from config import settings


def check(result: Optional[ForecastResult], agreement_index: Optional[float]) -> DisplayEligibility:
    if result is None:
        return DisplayEligibility(eligible=False, reasons=["no forecast available"])

    summary = result.diagnostics_summary
    reasons = []
    if summary.sample_count < settings.display_min_points:
        reasons.append(
            f"insufficient history ({summary.sample_count} points, need {settings.display_min_points})"
        )
    if summary.volatility > settings.display_max_volatility:
        reasons.append(
            f"volatility {summary.volatility * 100:.1f}% above {settings.display_max_volatility * 100:.0f}%"
        )
    if agreement_index is None:
        reasons.append("agreement index unavailable")
    elif agreement_index < settings.display_min_agreement_index:
        reasons.append(
            f"agreement index {agreement_index:.0f}% below {settings.display_min_agreement_index:.0f}%"
        )
    return DisplayEligibility(eligible=not reasons, reasons=reasons)
