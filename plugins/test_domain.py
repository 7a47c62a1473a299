"""Tests for the coordinate domain, mapper and terminal prompt."""

import math

import numpy as np
import pytest

from texture_explorer.domain import (
    DEFAULT_DOMAIN, DOMAIN_LIMIT, CoordinateMapper, read_domain, validate_domain,
)
from texture_explorer.errors import InvalidArgument, InvalidDomain


def test_default_domain():
    mapper = CoordinateMapper(500, 500)
    assert mapper.domain == DEFAULT_DOMAIN
    assert mapper.domain == (-100.0, 100.0, -100.0, 100.0)


def test_origin_and_center():
    mapper = CoordinateMapper(500, 500)
    assert mapper.map(0, 0) == (-100.0, -100.0)
    assert mapper.map(250, 250) == (0.0, 0.0)


def test_half_open_grid():
    """The last cell stops one step short of (x_max, y_max)."""
    mapper = CoordinateMapper(4, 2, (0, 1, 0, 1))
    assert mapper.map(3, 1) == (0.75, 0.5)
    x, y = mapper.map(3, 1)
    assert x < 1.0 and y < 1.0


def test_monotonic():
    mapper = CoordinateMapper(37, 23, (-3.5, 12.25, 1e-3, 2e-3))
    xs = [mapper.column_x(c) for c in range(37)]
    ys = mapper.rows_y()
    assert all(a < b for a, b in zip(xs, xs[1:]))
    assert np.all(np.diff(ys) > 0)


def test_rows_match_single_cell_mapping():
    mapper = CoordinateMapper(9, 13, (-7, 3, -2, 11))
    ys = mapper.rows_y()
    assert list(ys) == [mapper.map(0, r)[1] for r in range(13)]


def test_set_domain_commits():
    mapper = CoordinateMapper(10, 10)
    mapper.set_domain(-1, 1, 0, 2)
    assert mapper.domain == (-1.0, 1.0, 0.0, 2.0)
    assert mapper.map(5, 5) == (0.0, 1.0)


@pytest.mark.parametrize("bounds", [
    (5, 5, -1, 1),                      # x_min == x_max
    (1, 0, -1, 1),                      # inverted x
    (-1, 1, 3, 3),                      # y_min == y_max
    (-1, 1, 4, -4),                     # inverted y
    (-2e9, 1, -1, 1),                   # beyond the supported range
    (-1, 1, -1, DOMAIN_LIMIT * 2),
    (float("nan"), 1, -1, 1),
    (-1, float("inf"), -1, 1),
    ("abc", 1, -1, 1),
])
def test_set_domain_rejects_and_keeps_previous(bounds):
    mapper = CoordinateMapper(10, 10, (-3, 3, -4, 4))
    with pytest.raises(InvalidDomain):
        mapper.set_domain(*bounds)
    assert mapper.domain == (-3.0, 3.0, -4.0, 4.0)


def test_limits_are_inclusive():
    domain = validate_domain(-DOMAIN_LIMIT, DOMAIN_LIMIT, -DOMAIN_LIMIT, DOMAIN_LIMIT)
    assert domain.x_max == 1e9


def test_map_outside_grid():
    mapper = CoordinateMapper(3, 3)
    with pytest.raises(InvalidArgument):
        mapper.map(3, 0)
    with pytest.raises(InvalidArgument):
        mapper.map(0, -1)


@pytest.mark.parametrize("size", [(0, 10), (10, -1), (2.5, 3), (True, 4)])
def test_bad_grid_size(size):
    with pytest.raises(InvalidArgument):
        CoordinateMapper(*size)


def test_invalid_domain_at_construction():
    with pytest.raises(InvalidDomain):
        CoordinateMapper(10, 10, (1, -1, 0, 1))


def _scripted(replies):
    it = iter(replies)
    prompts = []

    def ask(prompt):
        prompts.append(prompt)
        return next(it)

    return ask, prompts


def test_read_domain_happy_path():
    ask, prompts = _scripted(["-10", "10", "-5", "5"])
    domain = read_domain(ask=ask, out=lambda msg: None)
    assert domain == (-10.0, 10.0, -5.0, 5.0)
    assert prompts == [
        "Enter new X minimum: ",
        "Enter new X maximum: ",
        "Enter new Y minimum: ",
        "Enter new Y maximum: ",
    ]


def test_read_domain_reasks_until_valid():
    messages = []
    ask, prompts = _scripted(["abc", "-5", "2e9", "5", "10", "1", "20"])
    domain = read_domain(ask=ask, out=messages.append)
    assert domain == (-5.0, 5.0, 10.0, 20.0)
    assert len(prompts) == 7
    assert prompts[1].startswith("Please enter a float")
    assert messages == ["Y maximum must be greater than Y minimum!"]


def test_read_domain_rejects_equal_max():
    messages = []
    ask, _prompts = _scripted(["1", "1", "2", "0", "1"])
    domain = read_domain(ask=ask, out=messages.append)
    assert domain == (1.0, 2.0, 0.0, 1.0)
    assert messages == ["X maximum must be greater than X minimum!"]


def test_read_domain_rejects_nan():
    ask, _prompts = _scripted(["nan", "0", "1", "0", "1"])
    domain = read_domain(ask=ask, out=lambda msg: None)
    assert not any(math.isnan(v) for v in domain)
    assert domain == (0.0, 1.0, 0.0, 1.0)
