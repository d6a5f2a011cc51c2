"""
Quadratic least squares forecaster solved through a QR decomposition of the design matrix, with an explicit conditioning check that falls back to the linear forecaster when the fit cannot be trusted.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.linalg import qr, solve_triangular

from engine.enums import ForecastMethod
from engine.methods.base import Forecaster, MethodResult, bounded, future_dates, horizon_factor, make_point
from engine.methods.linear import LinearRegression
from config import settings

log = logging.getLogger(__name__)


def fit(vals: Sequence[float], degree: int) -> Optional[Tuple[np.ndarray, float]]:
    """Least squares polynomial coefficients (lowest order first) and R².

    Returns ``None`` when there are too few points or the design matrix is
    too ill-conditioned for the solution to be meaningful.
    """
    y = np.asarray(vals, dtype=float)
    n = len(y)
    if n < degree + 2:
        return None

    design = np.vander(np.arange(n, dtype=float), degree + 1, increasing=True)
    condition = float(np.linalg.cond(design))
    if not np.isfinite(condition) or condition > settings.polynomial_max_condition:
        log.debug("polynomial design matrix ill-conditioned (cond=%.3g)", condition)
        return None

    q, r = qr(design, mode="economic")
    coef = solve_triangular(r, q.T @ y)
    if not np.all(np.isfinite(coef)):
        return None

    predicted = design @ coef
    ss_res = float(np.sum((y - predicted) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    r2 = max(0.0, 1.0 - ss_res / ss_tot) if ss_tot > 0 else 0.0
    return coef, r2


def adjusted_r_squared(r2: float, n: int, degree: int) -> float:
    dof = n - degree - 1
    if dof <= 0:
        return r2
    return 1.0 - (1.0 - r2) * ((n - 1) / dof)


class PolynomialRegression(Forecaster):
    method = ForecastMethod.polynomial

    def __init__(self, degree: int | None = None) -> None:
        self.degree = degree if degree is not None else settings.polynomial_degree

    def _fallback(self, vals: Sequence[float], dates: Sequence[date], horizon: int) -> MethodResult:
        linear = LinearRegression().run(vals, dates, horizon)
        reliability = bounded(
            linear.reliability * settings.polynomial_overfit_penalty,
            settings.polynomial_reliability_range,
        )
        return MethodResult(
            method=self.method,
            points=linear.points,
            reliability=round(reliability, 2),
            fallback=True,
        )

    def run(self, vals: Sequence[float], dates: Sequence[date], horizon: int) -> MethodResult:
        fitted = fit(vals, self.degree)
        if fitted is None:
            return self._fallback(vals, dates, horizon)

        coef, r2 = fitted
        n = len(vals)
        adj = adjusted_r_squared(r2, n, self.degree)
        base = bounded(adj * 100.0, settings.polynomial_confidence_range)

        points = []
        for step, day in enumerate(future_dates(dates[-1], horizon), start=1):
            x = float(n + step - 1)
            value = float(np.polynomial.polynomial.polyval(x, coef))
            confidence = max(
                settings.polynomial_min_confidence,
                base * horizon_factor(step, horizon, settings.polynomial_horizon_decay),
            )
            points.append(make_point(day, value, confidence))

        reliability = bounded(
            adj * 100.0 * settings.polynomial_overfit_penalty,
            settings.polynomial_reliability_range,
        )
        return MethodResult(method=self.method, points=tuple(points), reliability=round(reliability, 2))
