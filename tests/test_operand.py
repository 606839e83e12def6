"""Tests for operand conversion."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from number_delta.errors import InvalidOperand
from number_delta.operand import Number, Sequence, describe_shape, to_operand


def test_to_operand_wraps_scalars_as_floats() -> None:
    assert to_operand(3) == Number(3.0)
    assert to_operand(-2.5) == Number(-2.5)


def test_to_operand_builds_nested_sequences() -> None:
    operand = to_operand([[1, 2], (3.5, 4)])

    assert operand == Sequence(
        (
            Sequence((Number(1.0), Number(2.0))),
            Sequence((Number(3.5), Number(4.0))),
        )
    )


def test_to_operand_returns_existing_operands_unchanged() -> None:
    operand = Sequence((Number(1.0),))
    assert to_operand(operand) is operand


def test_to_operand_accepts_empty_arrays() -> None:
    assert to_operand([]) == Sequence(())
    assert to_operand([[], []]) == Sequence((Sequence(()), Sequence(())))


def test_to_operand_handles_deep_nesting_without_recursion() -> None:
    value: object = 1.0
    for _ in range(5000):
        value = [value]

    operand = to_operand(value)
    depth = 0
    while isinstance(operand, Sequence):
        operand = operand.items[0]
        depth += 1

    assert depth == 5000
    assert operand == Number(1.0)


@pytest.mark.parametrize("value", ["1.0", b"1", True, None, object()])
def test_to_operand_rejects_non_numeric_scalars(value: object) -> None:
    with pytest.raises(InvalidOperand, match="Expected a number"):
        to_operand(value)


@pytest.mark.parametrize("value", [math.nan, math.inf, [1.0, -math.inf]])
def test_to_operand_rejects_non_finite_numbers(value: object) -> None:
    with pytest.raises(InvalidOperand, match="finite"):
        to_operand(value)


def test_to_operand_rejects_mappings() -> None:
    with pytest.raises(InvalidOperand, match="Mappings are not supported"):
        to_operand({"a": 1.0})
    with pytest.raises(InvalidOperand, match="Mappings are not supported"):
        to_operand([{"a": 1.0}])


def test_to_operand_rejects_mixed_nesting_levels() -> None:
    with pytest.raises(InvalidOperand, match="mixes numbers and nested arrays"):
        to_operand([1.0, [2.0]])


def test_invalid_operand_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        to_operand("text")


def test_describe_shape() -> None:
    assert describe_shape(to_operand([1, 2, 3])) == "an array of length 3"
    assert describe_shape(to_operand(1)) == "a number"


def test_to_operand_accepts_other_real_number_types() -> None:
    assert to_operand([Fraction(1, 2), 3]) == Sequence((Number(0.5), Number(3.0)))


def test_to_operand_rejects_decimal() -> None:
    # Decimal registers as numbers.Number but not numbers.Real.
    with pytest.raises(InvalidOperand, match="got Decimal"):
        to_operand(Decimal("1.5"))
