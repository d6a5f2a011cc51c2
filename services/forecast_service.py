"""
Forecast service entry point that runs the forecasting engine for a validated request.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

from typing import Optional

from api.requests import ForecastRequest
from api.responses import DisplayEligibility, ForecastResult
from engine.forecaster import run
from services import eligibility_service


async def run_forecast(req: ForecastRequest) -> Optional[ForecastResult]:
    return await run(req)


async def run_forecast_for_display(
    req: ForecastRequest,
    agreement_index: Optional[float],
) -> tuple[Optional[ForecastResult], DisplayEligibility]:
    result = await run(req)
    return result, eligibility_service.check(result, agreement_index)
