"""
Request models for the forecasting call contract.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from config import settings


class ForecastRequest(BaseModel):
    series: List[Dict[str, Any]] = Field(default_factory=list)
    channel: str
    horizon_days: int = Field(default=settings.default_horizon_days, ge=1, le=settings.max_horizon_days)
    methods: Optional[List[str]] = None
