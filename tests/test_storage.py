from pathlib import Path

import pytest

from secret_sharer.common.randomness import NumpyRandomSource
from secret_sharer.errors import StorageError
from secret_sharer.sharing.sharer import SecretSharer
from secret_sharer.storage import (
    read_secret,
    read_share,
    read_shares,
    share_label,
    share_path,
    write_secret,
    write_shares,
)


@pytest.mark.parametrize(
    "index, label",
    [(1, "A"), (5, "E"), (26, "Z"), (27, "AA"), (52, "AZ"), (53, "BA"), (703, "AAA")],
)
def test_share_labels_are_spreadsheet_style(index, label):
    assert share_label(index) == label


def test_share_label_rejects_zero():
    with pytest.raises(ValueError):
        share_label(0)


def test_share_path_appends_suffix_and_label(tmp_path):
    secret_path = tmp_path / "notes.txt"
    assert share_path(secret_path, 1) == tmp_path / "notes.txt-ssA"
    assert share_path(secret_path, 3, suffix=".part") == tmp_path / "notes.txt.partC"


def test_written_shares_read_back_and_decode(tmp_path):
    secret = b"stored on disk"
    secret_path = tmp_path / "secret.bin"
    write_secret(secret_path, secret)
    sharer = SecretSharer(source=NumpyRandomSource(seed=9))
    shares = sharer.encode(read_secret(secret_path), n=4, k=2)

    paths = write_shares(secret_path, shares)
    assert [p.name for p in paths] == [f"secret.bin-ss{c}" for c in "ABCD"]
    assert all(p.stat().st_size == 4 + 4 * len(secret) for p in paths)

    loaded = read_shares([paths[3], paths[1]])
    assert [s.index for s in loaded] == [4, 2]
    assert sharer.decode(loaded) == secret


def test_missing_files_raise_storage_error(tmp_path):
    with pytest.raises(StorageError):
        read_share(tmp_path / "absent-ssA")
    with pytest.raises(OSError):
        read_secret(tmp_path / "absent")


def test_failed_share_write_removes_partial_output(tmp_path):
    shares = SecretSharer(source=NumpyRandomSource(seed=1)).encode(b"abc", n=3, k=2)
    secret_path = tmp_path / "data"
    # a directory squatting on the third share name makes that write fail
    share_path(secret_path, 3).mkdir()
    with pytest.raises(StorageError):
        write_shares(secret_path, shares)
    assert not share_path(secret_path, 1).exists()
    assert not share_path(secret_path, 2).exists()


def test_write_secret_replaces_existing_file_without_leftovers(tmp_path):
    target = tmp_path / "recovered.bin"
    target.write_bytes(b"old content that is longer")
    write_secret(target, b"new")
    assert target.read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["recovered.bin"]


def test_failed_secret_write_keeps_previous_content(tmp_path, monkeypatch):
    target = tmp_path / "recovered.bin"
    target.write_bytes(b"previous")

    def _refuse(self, other):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", _refuse)
    with pytest.raises(StorageError):
        write_secret(target, b"half-written secret")
    assert target.read_bytes() == b"previous"
    assert [p.name for p in tmp_path.iterdir()] == ["recovered.bin"]


def test_failed_secret_write_creates_no_file(tmp_path, monkeypatch):
    def _refuse(self, other):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", _refuse)
    with pytest.raises(StorageError):
        write_secret(tmp_path / "fresh.bin", b"data")
    assert list(tmp_path.iterdir()) == []
