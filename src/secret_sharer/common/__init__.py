"""Field arithmetic, randomness and buffer helpers shared by encode and decode."""

from .buffer import ShareBuffer
from .field import (
    FIELD_PRIME,
    SAFE_MULTIPLY_THRESHOLD,
    add,
    inverse,
    is_field_element,
    multiply,
    power,
    sub,
)
from .randomness import NumpyRandomSource, RandomSource, SystemRandomSource, default_source

__all__ = [
    "FIELD_PRIME",
    "SAFE_MULTIPLY_THRESHOLD",
    "add",
    "sub",
    "multiply",
    "power",
    "inverse",
    "is_field_element",
    "RandomSource",
    "NumpyRandomSource",
    "SystemRandomSource",
    "default_source",
    "ShareBuffer",
]
