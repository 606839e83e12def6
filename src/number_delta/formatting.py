"""Precision-aware rendering of operands and tolerances in diagnostics."""

from __future__ import annotations


def digits(epsilon: float) -> tuple[int, int]:
    """Return ``(exponent_digits, decimal_digits)`` needed to render ``epsilon``.

    ``exponent_digits`` is the number of places after the decimal point that
    reach the leading digit of epsilon (at least one). ``decimal_digits`` adds
    one more place so values that miss the tolerance narrowly still show the
    difference. Zero renders with no decimal places.
    """

    if epsilon == 0:
        return 0, 0
    exponent = int(f"{abs(epsilon):e}".partition("e")[2])
    exponent_digits = -exponent if exponent < 0 else 1
    return exponent_digits, exponent_digits + 1


def format_fixed(value: float, places: int) -> str:
    return f"{value:.{places}f}"


def format_epsilon(epsilon: float) -> str:
    """Render a tolerance with just enough places to show its leading digit."""

    exponent_digits, _ = digits(epsilon)
    return format_fixed(epsilon, exponent_digits)


def format_mismatch(p: float, q: float, epsilon: float) -> str:
    """Describe a scalar pair that is not within ``epsilon``."""

    _, decimal_digits = digits(epsilon)
    return (
        f"{format_fixed(p, decimal_digits)} and {format_fixed(q, decimal_digits)} "
        f"are not equal to within {format_fixed(epsilon, decimal_digits)}"
    )
