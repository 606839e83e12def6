"""Structural delta comparison of numbers and nested arrays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from number_delta.formatting import format_mismatch
from number_delta.operand import Number, Operand, Sequence, describe_shape, to_operand
from number_delta.tolerance import FixedTolerance, ToleranceMode, resolve_epsilon


@dataclass(frozen=True)
class ComparisonOutcome:
    """Result of comparing two operands.

    ``failure_path`` lists the indices, outermost first, of the first element
    that failed. It is empty when the comparison passed or when the failure
    was found at the top level.
    """

    ok: bool
    failure_path: tuple[int, ...] = ()
    diagnostic: str = ""

    def located_diagnostic(self) -> str:
        """Return the diagnostic prefixed with its ``At [i][j]: `` location."""

        if not self.failure_path:
            return self.diagnostic
        location = "".join(f"[{index}]" for index in self.failure_path)
        return f"At {location}: {self.diagnostic}"


_PASSED = ComparisonOutcome(ok=True)


def _compare_numbers(
    p: float,
    q: float,
    explicit_epsilon: float | None,
    mode: ToleranceMode,
    path: tuple[int, ...],
) -> ComparisonOutcome:
    epsilon = resolve_epsilon(explicit_epsilon, p, q, mode)
    if p == q or abs(p - q) < epsilon:
        return _PASSED
    diagnostic = format_mismatch(p, q, epsilon)
    return ComparisonOutcome(ok=False, failure_path=path, diagnostic=diagnostic)


def compare(
    p: Operand | Any,
    q: Operand | Any,
    explicit_epsilon: float | None = None,
    mode: ToleranceMode | None = None,
) -> ComparisonOutcome:
    """Compare ``p`` (actual) against ``q`` (expected).

    Arrays are compared pairwise, depth first, in index order. The first
    failing pair stops the walk; later siblings are never compared. Unless an
    explicit epsilon is given, the epsilon for each scalar pair is resolved
    from ``mode`` using that pair alone.
    """

    mode = mode if mode is not None else FixedTolerance()
    # Pairs are pushed in reverse index order so they pop in index order.
    stack: list[tuple[Operand, Operand, tuple[int, ...]]] = [
        (to_operand(p), to_operand(q), ())
    ]
    while stack:
        left, right, path = stack.pop()
        match left, right:
            case Number(value=left_value), Number(value=right_value):
                outcome = _compare_numbers(left_value, right_value, explicit_epsilon, mode, path)
                if not outcome.ok:
                    return outcome
            case Sequence(items=left_items), Sequence(items=right_items) if (
                len(left_items) == len(right_items)
            ):
                for index in range(len(left_items) - 1, -1, -1):
                    stack.append((left_items[index], right_items[index], (*path, index)))
            case _:
                return ComparisonOutcome(
                    ok=False,
                    failure_path=path,
                    diagnostic=(
                        f"Got {describe_shape(left)}, but expected {describe_shape(right)}"
                    ),
                )
    return _PASSED
