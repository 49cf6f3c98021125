"""Tests for math utility functions."""

from __future__ import annotations

from daylane.core.utils.math import clamp, floor_div


def test_clamp_within_range():
    """Test clamping values within range."""
    assert clamp(5, 0, 10) == 5
    assert clamp(0, 0, 10) == 0
    assert clamp(10, 0, 10) == 10


def test_clamp_outside_range():
    """Test clamping values outside the range."""
    assert clamp(-5, 0, 10) == 0
    assert clamp(15, 0, 10) == 10


def test_clamp_gap_bounds():
    """Gap fitting clamps negative fits up to the minimum gap."""
    assert clamp(-15, 2, 5) == 2
    assert clamp(3, 2, 5) == 3
    assert clamp(40, 2, 5) == 5


def test_clamp_with_floats():
    """Test clamping with float values."""
    assert clamp(5.5, 0.0, 10.0) == 5.5
    assert clamp(-1.5, 0.0, 10.0) == 0.0


def test_floor_div():
    """Floor division rounds toward negative infinity."""
    assert floor_div(195, 2) == 97
    assert floor_div(-44, 3) == -15


def test_floor_div_non_positive_denominator():
    """A zero or negative denominator yields zero."""
    assert floor_div(100, 0) == 0
    assert floor_div(100, -1) == 0
