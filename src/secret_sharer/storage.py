"""Moving secrets and serialized shares to and from disk."""

from __future__ import annotations

import string
import tempfile
from pathlib import Path
from typing import Iterable, List, Sequence

from .errors import StorageError
from .logger import get_module_logger
from .sharing.sharer import Share

logger = get_module_logger("storage")

DEFAULT_SHARE_SUFFIX = "-ss"


def share_label(index: int) -> str:
    """Spreadsheet-style label for a 1-based share index: A..Z, AA, AB, ..."""
    if index < 1:
        raise ValueError(f"Share index must be positive, got {index}.")
    label = ""
    while index:
        index, rem = divmod(index - 1, 26)
        label = string.ascii_uppercase[rem] + label
    return label


def share_path(secret_path: str | Path, index: int, suffix: str = DEFAULT_SHARE_SUFFIX) -> Path:
    path = Path(secret_path)
    return path.with_name(f"{path.name}{suffix}{share_label(index)}")


def read_secret(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise StorageError(f"Cannot read secret file {path}: {exc}") from exc


def write_secret(path: str | Path, data: bytes) -> Path:
    """Write ``data`` to ``path`` through a temporary file in the same directory.

    The target only ever holds its previous content or the complete secret.
    """
    out = Path(path)
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=out.parent, prefix=f".{out.name}.", delete=False
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(data)
        tmp_path.replace(out)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise StorageError(f"Cannot write recovered secret to {out}: {exc}") from exc
    logger.info("Wrote %d bytes to %s", len(data), out)
    return out


def write_shares(
    secret_path: str | Path,
    shares: Sequence[Share],
    suffix: str = DEFAULT_SHARE_SUFFIX,
) -> List[Path]:
    """Write each share next to ``secret_path`` and return the file paths.

    A failed write removes the shares already written by this call.
    """
    paths: List[Path] = []
    for share in shares:
        out = share_path(secret_path, share.index, suffix)
        try:
            out.write_bytes(share.to_bytes())
        except OSError as exc:
            for written in paths:
                written.unlink(missing_ok=True)
            raise StorageError(f"Cannot write share {share.index} to {out}: {exc}") from exc
        logger.debug("Wrote share %d to %s", share.index, out)
        paths.append(out)
    return paths


def read_share(path: str | Path) -> Share:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise StorageError(f"Cannot read share file {path}: {exc}") from exc
    return Share.from_bytes(data)


def read_shares(paths: Iterable[str | Path]) -> List[Share]:
    return [read_share(path) for path in paths]


__all__ = [
    "DEFAULT_SHARE_SUFFIX",
    "share_label",
    "share_path",
    "read_secret",
    "write_secret",
    "write_shares",
    "read_share",
    "read_shares",
]
