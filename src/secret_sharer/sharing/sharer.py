"""Byte-level secret sharing and the serialized share layout.

Wire format of one share::

    offset 0 : uint32 share index (1-based, little-endian)
    offset 4 : one uint32 field element per secret byte (little-endian)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ..common.buffer import ShareBuffer
from ..common.field import FIELD_PRIME
from ..common.randomness import RandomSource, SystemRandomSource
from ..errors import ParameterError, StructuralError
from ..logger import get_module_logger
from .decode import check_indices, recover_secrets
from .encode import check_parameters, generate_share_matrix

logger = get_module_logger("sharer")

INDEX_SIZE = 4
VALUE_SIZE = 4
WIRE_DTYPE = np.dtype("<u4")


def serialized_size(secret_length: int) -> int:
    return INDEX_SIZE + VALUE_SIZE * secret_length


@dataclass(eq=False)
class Share:
    """One evaluation point of every per-byte polynomial of a secret."""

    index: int
    values: np.ndarray

    def __post_init__(self) -> None:
        self.index = int(self.index)
        self.values = np.asarray(self.values, dtype=np.uint32).reshape(-1)

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def secret_length(self) -> int:
        return int(self.values.size)

    def to_buffer(self) -> ShareBuffer:
        buffer = ShareBuffer.allocate(serialized_size(self.secret_length))
        buffer.write_uint32(0, self.index)
        buffer.write(INDEX_SIZE, self.values.astype(WIRE_DTYPE).tobytes())
        return buffer

    def to_bytes(self) -> bytes:
        return bytes(self.to_buffer())

    @classmethod
    def from_buffer(cls, buffer: ShareBuffer) -> "Share":
        size = buffer.size
        if size < INDEX_SIZE or (size - INDEX_SIZE) % VALUE_SIZE:
            raise StructuralError(f"Malformed share of {size} bytes.")
        index = buffer.read_uint32(0)
        payload = buffer.read(INDEX_SIZE, size - INDEX_SIZE)
        values = np.frombuffer(payload, dtype=WIRE_DTYPE).astype(np.uint32)
        return cls(index=index, values=values)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Share":
        return cls.from_buffer(ShareBuffer(data))


class SecretSharer:
    """Split byte strings into ``n`` shares and rebuild them from ``k``.

    ``threshold`` pins the number of shares decoding consumes. Without it the
    decoder solves a system with one equation per supplied share, which only
    gives the right answer when at least ``k`` shares are supplied.
    """

    def __init__(
        self,
        source: RandomSource | None = None,
        threshold: int | None = None,
        block_size: int | None = None,
    ) -> None:
        if threshold is not None and not (1 <= threshold < FIELD_PRIME):
            raise ParameterError(f"Threshold must lie in [1, {FIELD_PRIME}), got {threshold}.")
        self.source = source if source is not None else SystemRandomSource()
        self.threshold = threshold
        self.block_size = block_size

    def encode(self, secret: bytes, n: int, k: int) -> List[Share]:
        """Return ``n`` shares of ``secret``, any ``k`` of which recover it."""
        check_parameters(n, k)
        data = np.frombuffer(bytes(secret), dtype=np.uint8)
        matrix = generate_share_matrix(data, n, k, self.source)
        logger.debug("Encoded %d bytes into %d shares (k=%d)", data.size, n, k)
        return [Share(index=x, values=matrix[x - 1]) for x in range(1, n + 1)]

    def encode_buffers(self, secret: bytes, n: int, k: int) -> List[ShareBuffer]:
        return [share.to_buffer() for share in self.encode(secret, n, k)]

    def _select(self, shares: Sequence[Share]) -> Sequence[Share]:
        if not shares:
            raise StructuralError("No shares provided for recovery.")
        length = shares[0].secret_length
        for share in shares:
            if share.secret_length != length:
                raise StructuralError(
                    f"Share {share.index} carries {share.secret_length} values, expected {length}."
                )
        if self.threshold is None:
            return shares
        if len(shares) < self.threshold:
            raise StructuralError(
                f"Need at least {self.threshold} shares, got {len(shares)}."
            )
        return shares[: self.threshold]

    def decode(self, shares: Sequence[Share]) -> bytes:
        """Rebuild the secret from ``shares``.

        Raises :class:`StructuralError` for an empty set, mismatched lengths,
        repeated indices or too few shares for the configured threshold.
        """
        selected = self._select(list(shares))
        indices = check_indices([share.index for share in selected])
        values = np.vstack([share.values for share in selected])
        recovered = recover_secrets(indices, values, block_size=self.block_size)
        logger.debug(
            "Decoded %d bytes from shares %s", recovered.size, indices.tolist()
        )
        return (recovered & 0xFF).astype(np.uint8).tobytes()

    def decode_buffers(self, buffers: Sequence[ShareBuffer]) -> ShareBuffer:
        if not buffers:
            raise StructuralError("No shares provided for recovery.")
        size = buffers[0].size
        if any(buffer.size != size for buffer in buffers):
            raise StructuralError("All share buffers must have the same length.")
        return ShareBuffer(self.decode([Share.from_buffer(buffer) for buffer in buffers]))


__all__ = [
    "INDEX_SIZE",
    "VALUE_SIZE",
    "WIRE_DTYPE",
    "serialized_size",
    "Share",
    "SecretSharer",
]
