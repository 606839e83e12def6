"""Tagged operand values compared by the delta engine."""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from collections.abc import Sequence as AbcSequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from number_delta.errors import InvalidOperand


@dataclass(frozen=True)
class Number:
    """A finite scalar operand."""

    value: float


@dataclass(frozen=True)
class Sequence:
    """An ordered array of operands sharing one nesting level."""

    items: tuple[Operand, ...]

    def __len__(self) -> int:
        return len(self.items)


Operand: TypeAlias = Number | Sequence


def _is_array(value: Any) -> bool:
    return isinstance(value, AbcSequence) and not isinstance(value, (str, bytes, bytearray))


def _to_number(value: Any) -> Number:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidOperand(
            f"Expected a number or an array of numbers, got {type(value).__name__}"
        )
    number = float(value)
    if not math.isfinite(number):
        raise InvalidOperand(f"Expected a finite number, got {value!r}")
    return Number(number)


def _check_homogeneous(items: tuple[Operand, ...]) -> None:
    kinds = {type(item) for item in items}
    if len(kinds) > 1:
        raise InvalidOperand("Array mixes numbers and nested arrays at the same level")


def to_operand(value: Any) -> Operand:
    """Convert a number or nested array of numbers into an operand tree.

    Values that are already operands are returned unchanged. Conversion walks
    the input with an explicit stack so deeply nested arrays do not exhaust
    the interpreter's recursion limit.
    """

    if isinstance(value, (Number, Sequence)):
        return value
    if isinstance(value, Mapping):
        raise InvalidOperand("Mappings are not supported; expected a number or an array")
    if not _is_array(value):
        return _to_number(value)

    # Each frame holds the source array, the next child index and the
    # converted children collected so far.
    root: list[Operand] = []
    stack: list[tuple[AbcSequence[Any], int, list[Operand]]] = [(value, 0, [])]
    while stack:
        source, index, converted = stack[-1]
        if index == len(source):
            stack.pop()
            items = tuple(converted)
            _check_homogeneous(items)
            parent = stack[-1][2] if stack else root
            parent.append(Sequence(items))
            continue
        stack[-1] = (source, index + 1, converted)
        child = source[index]
        if isinstance(child, (Number, Sequence)):
            converted.append(child)
        elif isinstance(child, Mapping):
            raise InvalidOperand("Mappings are not supported; expected a number or an array")
        elif _is_array(child):
            stack.append((child, 0, []))
        else:
            converted.append(_to_number(child))
    return root[0]


def describe_shape(operand: Operand) -> str:
    """Describe an operand for shape-mismatch diagnostics."""

    match operand:
        case Sequence():
            return f"an array of length {len(operand)}"
        case Number():
            return "a number"
    raise InvalidOperand(f"Unsupported operand: {operand!r}")
