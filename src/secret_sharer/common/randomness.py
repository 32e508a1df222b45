"""Pluggable byte sources used to draw polynomial coefficients."""

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod

import numpy as np


class RandomSource(ABC):
    """Produces one pseudo-random signed byte per call."""

    @abstractmethod
    def random_byte(self) -> int:
        """Return a value in ``[-128, 127]``."""

    def random_bytes(self, count: int) -> np.ndarray:
        """Draw ``count`` bytes as an unsigned ``uint8`` array."""
        return np.fromiter(
            (self.random_byte() & 0xFF for _ in range(count)),
            dtype=np.uint8,
            count=count,
        )


class NumpyRandomSource(RandomSource):
    """Byte source backed by a ``numpy.random.Generator``."""

    def __init__(self, rng: np.random.Generator | None = None, seed: int | None = None) -> None:
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both.")
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def random_byte(self) -> int:
        return int(self.rng.integers(-128, 128))

    def random_bytes(self, count: int) -> np.ndarray:
        return self.rng.integers(0, 256, size=count, dtype=np.uint8)


class SystemRandomSource(RandomSource):
    """Byte source backed by the operating system CSPRNG."""

    def random_byte(self) -> int:
        return secrets.randbits(8) - 128

    def random_bytes(self, count: int) -> np.ndarray:
        return np.frombuffer(secrets.token_bytes(count), dtype=np.uint8).copy()


def default_source(seed: int | None = None) -> RandomSource:
    """Seeded runs get a reproducible numpy source, otherwise the OS CSPRNG."""
    if seed is not None:
        return NumpyRandomSource(seed=seed)
    return SystemRandomSource()


__all__ = ["RandomSource", "NumpyRandomSource", "SystemRandomSource", "default_source"]
