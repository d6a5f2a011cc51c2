"""
Test cases for series normalization, including tolerant channel matching, malformed point handling and minimum length enforcement.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date, datetime

import pytest

from config import settings
from engine.errors import ChannelNotFoundError, InsufficientDataError, InvalidSeriesError
from engine.series import normalize, parse_date, resolve_channel


def test_resolve_channel_exact_and_case_insensitive():
    keys = ["Android", "iPhone 16"]
    assert resolve_channel(keys, "iPhone 16") == "iPhone 16"
    assert resolve_channel(keys, "IPHONE 16") == "iPhone 16"
    assert resolve_channel(keys, "android") == "Android"


def test_resolve_channel_ignores_hyphens_and_spaces():
    assert resolve_channel(["iPhone 16"], "iphone-16") == "iPhone 16"
    assert resolve_channel(["galaxy-s24-ultra"], "Galaxy S24 Ultra") == "galaxy-s24-ultra"
    assert resolve_channel(["iPhone 16"], "iphone16") == "iPhone 16"


def test_resolve_channel_prefers_exact_key():
    assert resolve_channel(["iphone-16", "iPhone 16"], "iPhone 16") == "iPhone 16"


def test_resolve_channel_missing():
    assert resolve_channel(["Android"], "iphone") is None
    assert resolve_channel(["Android"], "") is None
    assert resolve_channel([], "Android") is None
    assert resolve_channel(["Android"], "---") is None


def test_parse_date_variants():
    assert parse_date("2024-03-05") == date(2024, 3, 5)
    assert parse_date("2024-03-05T10:00:00Z") == date(2024, 3, 5)
    assert parse_date(datetime(2024, 3, 5, 12)) == date(2024, 3, 5)
    assert parse_date(date(2024, 3, 5)) == date(2024, 3, 5)
    assert parse_date("yesterday") is None
    assert parse_date(None) is None
    assert parse_date(20240305) is None


def test_normalize_extracts_aligned_values(make_series):
    series = make_series([float(i) for i in range(30)], extra={"Android": lambda i: 99})
    norm = normalize(series, "iphone-16")
    assert norm.channel == "iPhone 16"
    assert len(norm) == 30
    assert norm.values[:3] == (0.0, 1.0, 2.0)
    assert norm.dates[0] == date(2024, 1, 1)
    assert norm.dates[-1] == date(2024, 1, 30)
    assert norm.limited is False


def test_normalize_flags_limited_history(make_series):
    norm = normalize(make_series([50.0] * 10), "iPhone 16")
    assert norm.limited is True
    assert len(norm) == 10


def test_normalize_missing_values_count_as_zero(make_series):
    values = [50.0] * 10
    values[3] = None
    norm = normalize(make_series(values), "iPhone 16")
    assert norm.values[3] == 0.0


def test_normalize_skips_malformed_points(make_series):
    series = make_series([50.0] * 8)
    series.insert(2, "garbage")
    series.append({"date": "not-a-date", "iPhone 16": 10})
    series.append({"date": "2024-02-01", "iPhone 16": "n/a"})
    series.append({"date": "2024-02-02", "iPhone 16": float("nan")})
    norm = normalize(series, "iPhone 16")
    assert len(norm) == 8


@pytest.mark.parametrize("bad", [None, [], "2024-01-01", 42, ["a", "b"]])
def test_normalize_invalid_series(bad):
    with pytest.raises(InvalidSeriesError):
        normalize(bad, "iPhone 16")


def test_normalize_channel_not_found(make_series):
    with pytest.raises(ChannelNotFoundError):
        normalize(make_series([50.0] * 30), "Pixel 9")


def test_normalize_insufficient_data(make_series, monkeypatch):
    with pytest.raises(InsufficientDataError):
        normalize(make_series([50.0] * 6), "iPhone 16")

    monkeypatch.setattr(settings, "min_points", 5)
    assert len(normalize(make_series([50.0] * 6), "iPhone 16")) == 6


def test_normalize_sorts_out_of_order_points(make_series):
    series = make_series([float(i) for i in range(10)])
    shuffled = series[5:] + series[:5]
    result = normalize(shuffled, "iPhone 16")
    assert list(result.dates) == sorted(result.dates)
    assert result.dates[0] == date(2024, 1, 1)
    assert result.values == tuple(float(i) for i in range(10))
