"""
Series normalization logic for multi-channel daily interest series, resolving the requested channel with tolerant key matching and extracting aligned date and value sequences for the forecasting engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from engine.errors import ChannelNotFoundError, InsufficientDataError, InvalidSeriesError
from config import settings

log = logging.getLogger(__name__)

DATE_KEY = "date"
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class NormalizedSeries:
    channel: str
    dates: Tuple[date, ...]
    values: Tuple[float, ...]
    limited: bool = False

    def __len__(self) -> int:
        return len(self.values)


def _match_key(text: str) -> str:
    return _NON_ALNUM_RE.sub("", str(text).lower())


def parse_date(raw: Any) -> Optional[date]:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _channel_keys(series: Sequence[Any]) -> List[str]:
    for point in series:
        if isinstance(point, Mapping):
            return [str(k) for k in point.keys() if k != DATE_KEY]
    return []


def resolve_channel(keys: Iterable[str], channel: str) -> Optional[str]:
    """Return the series key that best matches ``channel``.

    Matching is attempted as an exact match, then case-insensitively, then
    on keys reduced to lower-case alphanumerics so that spacing, hyphens and
    punctuation do not matter ("iPhone 16" resolves for "iphone-16").
    """
    candidates = list(keys)
    if not channel or not candidates:
        return None
    if channel in candidates:
        return channel

    lowered = channel.lower()
    for key in candidates:
        if key.lower() == lowered:
            return key

    wanted = _match_key(channel)
    if not wanted:
        return None
    for key in candidates:
        if _match_key(key) == wanted:
            return key
    return None


def _coerce_value(raw: Any) -> Optional[float]:
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def normalize(series: Any, channel: str) -> NormalizedSeries:
    if not isinstance(series, Sequence) or isinstance(series, (str, bytes)) or not series:
        raise InvalidSeriesError("series is empty or not a sequence")

    keys = _channel_keys(series)
    if not keys:
        raise InvalidSeriesError("series has no channel columns")

    key = resolve_channel(keys, channel)
    if key is None:
        raise ChannelNotFoundError(
            f"channel {channel!r} not found; available: {', '.join(keys)}"
        )
    if key != channel:
        log.info("Matched channel %r to series key %r", channel, key)

    dates: List[date] = []
    values: List[float] = []
    skipped = 0
    for point in series:
        if not isinstance(point, Mapping):
            skipped += 1
            continue
        day = parse_date(point.get(DATE_KEY))
        value = _coerce_value(point.get(key))
        if day is None or value is None:
            skipped += 1
            continue
        dates.append(day)
        values.append(value)

    if skipped:
        log.warning("Skipped %d malformed point(s) for channel %r", skipped, key)

    if any(later < earlier for earlier, later in zip(dates, dates[1:])):
        log.warning("Series for %r is not in date order, sorting by date", key)
        pairs = sorted(zip(dates, values), key=lambda p: p[0])
        dates = [d for d, _ in pairs]
        values = [v for _, v in pairs]

    if len(values) < settings.min_points:
        raise InsufficientDataError(
            f"{len(values)} usable point(s) for {key!r}, need {settings.min_points}"
        )

    limited = len(values) < settings.reliable_points
    if limited:
        log.warning(
            "Only %d points for %r (recommended: %d+), proceeding with reduced reliability",
            len(values), key, settings.reliable_points,
        )

    return NormalizedSeries(channel=key, dates=tuple(dates), values=tuple(values), limited=limited)
