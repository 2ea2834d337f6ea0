import math
import random

import pytest

from faststats.sampling import generate_random_data


def test_length_matches_request():
    assert len(generate_random_data(257, 3.14, 271.72, 457325.0)) == 257


def test_zero_length_is_empty():
    assert generate_random_data(0, 314.15, 27.172, 4573.25) == []


def test_same_seed_gives_same_series():
    random.seed(7)
    first = generate_random_data(100, 314.15, 27.172, 4573.25)
    random.seed(7)
    second = generate_random_data(100, 314.15, 27.172, 4573.25)
    assert first == second


def test_values_have_two_decimals():
    random.seed(11)
    data = generate_random_data(500, 3.14, 271.72, 457325.0)
    for value in data:
        scaled = value * 100.0
        assert abs(scaled - round(scaled)) < 1e-3


def test_values_are_finite():
    random.seed(3)
    data = generate_random_data(1000, 314.15, 27.172, 4573.25)
    assert len(data) == 1000
    non_finite = [v for v in data if not math.isfinite(v)]
    assert non_finite == []


def test_no_volatility_is_pure_drift():
    assert generate_random_data(3, 0.0, 0.25, 0.0) == [0.25, 0.5, 0.75]


def test_no_volatility_series_is_monotonic_for_positive_drift():
    data = generate_random_data(50, 10.0, 1.0, 0.0)
    assert all(b > a for a, b in zip(data, data[1:]))


def test_negative_volatility_rejected():
    with pytest.raises(ValueError):
        generate_random_data(10, 1.0, 1.0, -1.0)


def test_infinite_volatility_rejected():
    with pytest.raises(ValueError):
        generate_random_data(10, 1.0, 1.0, float("inf"))


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        generate_random_data(-1, 1.0, 1.0, 1.0)