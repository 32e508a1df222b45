"""Recover the constant term of a share polynomial by fraction-free elimination.

For ``m`` shares ``(x_j, y_j)`` the unknown coefficients ``c`` satisfy the
Vandermonde system ``V c = y`` with ``V[j][i] = x_j ** i``. Rows are
cross-scaled by each other's pivots and subtracted so that no inverse is
needed until the single division that yields ``c[0]``.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..common.field import FIELD_PRIME, inverse, is_field_element, multiply, sub
from ..errors import StructuralError

# Upper bound on the bytes held by one block of stacked decode systems.
DECODE_MEMORY_BUDGET = 32 * 1024 * 1024


def check_indices(indices: Sequence[int]) -> np.ndarray:
    """Validate share indices and return them as a uint32 array."""
    if len(indices) == 0:
        raise StructuralError("No shares provided for recovery.")
    xs = [int(x) for x in indices]
    if any(not (0 < x < FIELD_PRIME) for x in xs):
        raise StructuralError(f"Share indices must lie in [1, {FIELD_PRIME}), got {xs}.")
    if len(set(xs)) != len(xs):
        raise StructuralError(f"Share indices must be distinct, got {xs}.")
    return np.asarray(xs, dtype=np.uint32)


def vandermonde(indices: np.ndarray) -> np.ndarray:
    """``m x m`` matrix of index powers ``x_j ** i`` over the field."""
    m = indices.size
    matrix = np.empty((m, m), dtype=np.uint32)
    xp = np.ones(m, dtype=np.uint32)
    for i in range(m):
        matrix[:, i] = xp
        xp = multiply(xp, indices)
    return matrix


def build_system(indices: Sequence[int], values: Sequence[int] | np.ndarray) -> np.ndarray:
    """Augmented ``m x (m + 1)`` matrix for one secret position."""
    xs = check_indices(indices)
    ys = np.asarray(values, dtype=np.int64).reshape(-1)
    if ys.size != xs.size:
        raise StructuralError(f"Expected {xs.size} share values, got {ys.size}.")
    if not is_field_element(ys):
        raise StructuralError("Share values must be field elements.")
    eqn = np.empty((xs.size, xs.size + 1), dtype=np.uint32)
    eqn[:, :-1] = vandermonde(xs)
    eqn[:, -1] = ys
    return eqn


def solve_in_place(eqn: np.ndarray) -> np.ndarray:
    """Eliminate every off-diagonal entry of one or more augmented systems.

    ``eqn`` has shape ``(..., m, m + 1)``; leading axes are independent
    systems solved together. For each ordered row pair ``(a, b)`` row ``a`` is
    scaled by ``eqn[b][a]`` and row ``b`` by ``eqn[a][a]``, then row ``b``
    becomes ``row_a - row_b``, which clears column ``a`` from row ``b``. Pairs
    where ``eqn[b][a]`` is already zero are left alone so the pivot row is
    never multiplied by zero.
    """
    m = eqn.shape[-2]
    for a in range(m):
        for b in range(m):
            if a == b:
                continue
            pivot = eqn[..., a, a].copy()
            cross = eqn[..., b, a].copy()
            active = np.asarray(cross != 0)[..., None]
            if not active.any():
                continue
            row_a = multiply(eqn[..., a, :], cross[..., None])
            row_b = multiply(eqn[..., b, :], pivot[..., None])
            eqn[..., a, :] = np.where(active, row_a, eqn[..., a, :])
            eqn[..., b, :] = np.where(active, sub(row_a, row_b), eqn[..., b, :])
    return eqn


def _constant_term(eqn: np.ndarray) -> np.ndarray:
    pivot = eqn[..., 0, 0]
    if np.any(pivot == 0):
        raise StructuralError("Share system is singular; indices may be inconsistent.")
    return multiply(eqn[..., 0, -1], inverse(pivot))


def recover_secret(indices: Sequence[int], values: Sequence[int] | np.ndarray) -> int:
    """Reconstruct one field element from ``m`` ``(index, value)`` pairs."""
    eqn = solve_in_place(build_system(indices, values))
    return int(_constant_term(eqn))


def decode_block_size(m: int, memory_budget: int = DECODE_MEMORY_BUDGET) -> int:
    """Number of ``m``-share systems that fit in ``memory_budget`` bytes."""
    return max(1, memory_budget // (m * (m + 1) * np.dtype(np.uint32).itemsize))


def recover_secrets(
    indices: Sequence[int],
    values: np.ndarray,
    block_size: int | None = None,
    memory_budget: int = DECODE_MEMORY_BUDGET,
) -> np.ndarray:
    """Vectorised :func:`recover_secret` across every secret position.

    ``values`` has shape ``(m, L)``: one row per share in the order of
    ``indices``. Positions are processed ``block_size`` at a time; when no
    block size is given it is derived from ``m`` so that one block of stacked
    systems stays within ``memory_budget`` bytes.
    """
    xs = check_indices(indices)
    ys = np.asarray(values)
    if ys.ndim != 2 or ys.shape[0] != xs.size:
        raise StructuralError(
            f"Expected a ({xs.size}, L) value matrix, got shape {ys.shape}."
        )
    if not is_field_element(ys):
        raise StructuralError("Share values must be field elements.")

    m, length = ys.shape
    if block_size is None:
        block_size = decode_block_size(m, memory_budget)
    if block_size < 1:
        raise ValueError("block_size must be positive.")

    base = vandermonde(xs)
    recovered = np.empty(length, dtype=np.uint32)
    for start in range(0, length, block_size):
        stop = min(start + block_size, length)
        eqn = np.empty((stop - start, m, m + 1), dtype=np.uint32)
        eqn[:, :, :-1] = base
        eqn[:, :, -1] = ys[:, start:stop].T
        recovered[start:stop] = _constant_term(solve_in_place(eqn))
    return recovered


__all__ = [
    "DECODE_MEMORY_BUDGET",
    "decode_block_size",
    "check_indices",
    "vandermonde",
    "build_system",
    "solve_in_place",
    "recover_secret",
    "recover_secrets",
]
