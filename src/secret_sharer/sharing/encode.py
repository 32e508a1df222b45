"""Random polynomial construction and evaluation at the share indices."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ..common.field import FIELD_PRIME, add, is_field_element, multiply
from ..common.randomness import RandomSource
from ..errors import ParameterError

# Upper bound on the working memory of one block of share evaluation.
ENCODE_MEMORY_BUDGET = 32 * 1024 * 1024


def check_parameters(n: int, k: int) -> None:
    """Reject thresholds outside ``1 <= k <= n < p``."""
    if not (1 <= k <= n < FIELD_PRIME):
        raise ParameterError(f"Require 1 <= k <= n < {FIELD_PRIME}, got n={n}, k={k}.")


def random_coefficients(source: RandomSource, count: int) -> np.ndarray:
    """Draw ``count`` coefficients, each packed from four random bytes."""
    raw = np.ascontiguousarray(source.random_bytes(count * 4), dtype=np.uint8)
    # four bytes per coefficient, big-endian in draw order
    return raw.view(">u4").astype(np.uint32) % FIELD_PRIME


def encode_block_size(k: int, memory_budget: int = ENCODE_MEMORY_BUDGET) -> int:
    """Number of secret positions whose ``k`` coefficients fit in ``memory_budget``."""
    # coefficients, raw draws and widened evaluation temporaries per position
    return max(1, memory_budget // (16 * k + 32))


def _evaluate(coeffs: np.ndarray, n: int, out: np.ndarray) -> None:
    for x in range(1, n + 1):
        s = np.zeros(coeffs.shape[1], dtype=np.uint32)
        xp = 1
        for c in range(coeffs.shape[0]):
            s = add(s, multiply(coeffs[c], xp))
            xp = multiply(xp, x)
        out[x - 1] = s


def generate_share_matrix(
    secrets: Iterable[int] | np.ndarray,
    n: int,
    k: int,
    source: RandomSource,
    memory_budget: int = ENCODE_MEMORY_BUDGET,
) -> np.ndarray:
    """Share every element of ``secrets`` at once.

    Returns an ``(n, len(secrets))`` uint32 array; row ``x - 1`` holds the
    polynomial evaluations at ``x`` for every secret position. Each position
    gets its own independent random polynomial of degree ``k - 1`` whose
    coefficients are drawn consecutively, so the result does not depend on
    how many positions are evaluated per block.
    """
    check_parameters(n, k)
    if isinstance(secrets, np.ndarray):
        data = secrets.reshape(-1)
    else:
        data = np.fromiter(secrets, dtype=np.int64)
    if not is_field_element(data):
        raise ParameterError(f"Secret values must lie in [0, {FIELD_PRIME}).")
    length = data.size

    shares = np.empty((n, length), dtype=np.uint32)
    block = encode_block_size(k, memory_budget)
    for start in range(0, length, block):
        stop = min(start + block, length)
        coeffs = np.empty((k, stop - start), dtype=np.uint32)
        coeffs[0] = data[start:stop]
        if k > 1:
            drawn = random_coefficients(source, (k - 1) * (stop - start))
            coeffs[1:] = drawn.reshape(stop - start, k - 1).T
        _evaluate(coeffs, n, shares[:, start:stop])
    return shares


def generate_shares(secret: int, n: int, k: int, source: RandomSource) -> np.ndarray:
    """Share one field element, returning the ``n`` evaluations."""
    if not (0 <= int(secret) < FIELD_PRIME):
        raise ParameterError(f"Secret {secret} is not a field element.")
    return generate_share_matrix(np.array([secret], dtype=np.int64), n, k, source)[:, 0]


__all__ = [
    "ENCODE_MEMORY_BUDGET",
    "check_parameters",
    "encode_block_size",
    "random_coefficients",
    "generate_share_matrix",
    "generate_shares",
]
