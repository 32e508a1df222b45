"""Exception types raised by the secret sharing engine."""

from __future__ import annotations


class SecretSharingError(ValueError):
    """Base class for every failure reported by :mod:`secret_sharer`."""


class ParameterError(SecretSharingError):
    """Invalid threshold parameters or an out-of-range field element."""


class StructuralError(SecretSharingError):
    """Share set that cannot be decoded (empty, mismatched, malformed)."""


class StorageError(SecretSharingError, OSError):
    """Secret or share file could not be read or written."""


__all__ = ["SecretSharingError", "ParameterError", "StructuralError", "StorageError"]
