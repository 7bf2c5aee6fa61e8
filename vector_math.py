"""Fixed-length vector helpers.

Vectors are plain tuples of numbers. Operands of a binary helper must have
the same length; each helper returns a new tuple.

Exports
-------
zeros
add
diff
inner_product
norm
positive_part
clamp_positive_to_zero
"""

import math
from typing import Sequence

Vector = tuple[float, ...]


def zeros(
    length: int,
) -> Vector:
    """Zero vector of the given length."""
    return (0,) * length


def _check_lengths(
    a: Sequence[float],
    b: Sequence[float],
) -> None:
    if len(a) != len(b):
        raise ValueError(f"Vector length mismatch: {len(a)} != {len(b)}")


def add(
    a: Sequence[float],
    b: Sequence[float],
) -> Vector:
    """Component-wise ``a + b``."""
    _check_lengths(a, b)
    return tuple(x + y for x, y in zip(a, b))


def diff(
    a: Sequence[float],
    b: Sequence[float],
) -> Vector:
    """Component-wise ``a - b``."""
    _check_lengths(a, b)
    return tuple(x - y for x, y in zip(a, b))


def inner_product(
    a: Sequence[float],
    b: Sequence[float],
) -> float:
    """Dot product of ``a`` and ``b``."""
    _check_lengths(a, b)
    return sum(x * y for x, y in zip(a, b))


def norm(
    a: Sequence[float],
) -> float:
    """Euclidean length of ``a``."""
    return math.sqrt(sum(x * x for x in a))


def positive_part(
    a: Sequence[float],
) -> Vector:
    """Negative components replaced by zero."""
    return tuple(x if x > 0 else 0 for x in a)


def clamp_positive_to_zero(
    a: Sequence[float],
) -> Vector:
    """Positive components replaced by zero; negatives are kept."""
    return tuple(x if x < 0 else 0 for x in a)
