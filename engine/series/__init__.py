"""
Series normalization for multi-channel daily interest data, including tolerant channel resolution and aligned date and value extraction.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.series.normalize import NormalizedSeries, normalize, parse_date, resolve_channel

__all__ = ["NormalizedSeries", "normalize", "parse_date", "resolve_channel"]
