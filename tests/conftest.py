import os
import sys
from datetime import date, timedelta

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

START = date(2024, 1, 1)


def build_series(values, channel="iPhone 16", start=START, extra=None):
    """Daily points in the multi-channel shape callers pass to the engine."""
    points = []
    for i, v in enumerate(values):
        point = {"date": (start + timedelta(days=i)).isoformat(), channel: v}
        if extra:
            point.update({k: fn(i) for k, fn in extra.items()})
        points.append(point)
    return points


@pytest.fixture
def make_series():
    return build_series


@pytest.fixture
def linear_values():
    return [min(100.0, 10.0 + 2.0 * i) for i in range(30)]


@pytest.fixture
def constant_values():
    return [50.0] * 30


@pytest.fixture
def oscillating_values():
    return [55.0 if i % 2 == 0 else 45.0 for i in range(40)]
