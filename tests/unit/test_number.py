"""Tests for the integer-or-float numeric literal."""

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from textmap.core.number import INT32_MAX, INT32_MIN, Number


def test_int_accessors():
    n = Number.int_(5)
    assert n.is_int
    assert not n.is_float
    assert n.as_int() == 5
    assert n.as_float() is None
    assert n.into_float() == 5.0


def test_float_accessors():
    n = Number.float_(-2.5)
    assert n.is_float
    assert n.as_int() is None
    assert n.as_float() == -2.5
    assert n.has_fraction()


def test_into_int_truncates():
    assert Number.float_(-5.7).into_int() == -5
    assert Number.float_(5.7).into_int() == 5


@pytest.mark.parametrize(
    ("value", "expected"),
    [(5.0, False), (-0.0, False), (5.5, True), (math.inf, True), (math.nan, True)],
)
def test_has_fraction(value, expected):
    assert Number.float_(value).has_fraction() is expected


def test_is_zero():
    assert Number.int_(0).is_zero()
    assert Number.float_(0.0).is_zero()
    assert not Number.float_(0.1).is_zero()


def test_rejects_bool():
    with pytest.raises(ValidationError):
        Number(value=True)


def test_rejects_ints_outside_32_bits():
    with pytest.raises(ValidationError):
        Number(value=INT32_MAX + 1)
    with pytest.raises(ValidationError):
        Number(value=INT32_MIN - 1)


@given(st.integers(min_value=INT32_MIN, max_value=INT32_MAX))
def test_integral_floats_convert_exactly(value: int) -> None:
    """Invariant: an integral float converts to the same int without loss."""
    literal = Number.float_(float(value))
    assert not literal.has_fraction()
    assert literal.into_int() == value


def test_str():
    assert str(Number.int_(-96)) == "-96"
    assert str(Number.float_(-96)) == "-96.0"
