"""(k, n) threshold secret sharing of byte strings over GF(65809)."""

from . import common, sharing
from .cli import main
from .config import SharingConfig, load_config
from .errors import ParameterError, SecretSharingError, StorageError, StructuralError
from .sharing import SecretSharer, Share

__all__ = [
    "common",
    "sharing",
    "main",
    "SecretSharer",
    "Share",
    "SharingConfig",
    "load_config",
    "SecretSharingError",
    "ParameterError",
    "StructuralError",
    "StorageError",
]
