"""Arithmetic over the prime field GF(65809).

Every function accepts plain integers or numpy integer arrays and works
elementwise. Scalar inputs give an ``int`` back, array inputs a ``uint32``
array, so the same helpers drive both the per-element reference code and the
vectorised share paths.
"""

from __future__ import annotations

from typing import Tuple, Union

import numpy as np

FIELD_PRIME = 65809
# Largest operand whose product with any field element still fits in uint32.
SAFE_MULTIPLY_THRESHOLD = 65262
EXPONENT_MASK = 0x1FFFF

FieldLike = Union[int, np.integer, np.ndarray]


def _operands(*values: FieldLike) -> Tuple[Tuple[np.ndarray, ...], bool]:
    scalar = all(np.isscalar(v) for v in values)
    return tuple(np.asarray(v, dtype=np.uint32) for v in values), scalar


def _result(value: np.ndarray, scalar: bool) -> FieldLike:
    if scalar:
        return int(value)
    return np.asarray(value, dtype=np.uint32)


def add(a: FieldLike, b: FieldLike) -> FieldLike:
    (left, right), scalar = _operands(a, b)
    return _result((left + right) % FIELD_PRIME, scalar)


def sub(a: FieldLike, b: FieldLike) -> FieldLike:
    (left, right), scalar = _operands(a, b)
    return _result((left + FIELD_PRIME - right) % FIELD_PRIME, scalar)


def multiply(a: FieldLike, b: FieldLike) -> FieldLike:
    """Return ``a * b mod p``, widening to 64 bits only when required."""
    (left, right), scalar = _operands(a, b)
    if (
        left.max(initial=0) > SAFE_MULTIPLY_THRESHOLD
        or right.max(initial=0) > SAFE_MULTIPLY_THRESHOLD
    ):
        product = (left.astype(np.uint64) * right.astype(np.uint64)) % FIELD_PRIME
    else:
        product = (left * right) % FIELD_PRIME
    return _result(product, scalar)


def power(base: FieldLike, exponent: int) -> FieldLike:
    """Square-and-multiply exponentiation with a 17-bit exponent."""
    (square,), scalar = _operands(base)
    result = np.ones_like(square)
    bits = int(exponent) & EXPONENT_MASK
    while bits:
        if bits & 1:
            result = multiply(result, square)
        bits >>= 1
        if bits:
            square = multiply(square, square)
    return _result(result, scalar)


def inverse(a: FieldLike) -> FieldLike:
    """Multiplicative inverse via Fermat's little theorem.

    Zero has no inverse; ``inverse(0)`` evaluates to 0 and callers must not
    rely on it.
    """
    return power(a, FIELD_PRIME - 2)


def is_field_element(values: FieldLike) -> bool:
    """True when every value already lies in ``[0, p)``."""
    array = np.asarray(values)
    if array.size == 0:
        return True
    return bool(array.min() >= 0 and array.max() < FIELD_PRIME)


__all__ = [
    "FIELD_PRIME",
    "SAFE_MULTIPLY_THRESHOLD",
    "EXPONENT_MASK",
    "add",
    "sub",
    "multiply",
    "power",
    "inverse",
    "is_field_element",
]
