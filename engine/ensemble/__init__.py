"""
Ensemble combination of independent method forecasts into one weighted forecast with a confidence band.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.ensemble.combine import CombinedForecast, adjusted_reliability, combine

__all__ = ["CombinedForecast", "adjusted_reliability", "combine"]
