import json

import pytest

from secret_sharer.cli import ExitCode, main
from secret_sharer.storage import share_path


@pytest.fixture
def secret_file(tmp_path):
    path = tmp_path / "secret.txt"
    path.write_bytes(b"The eagle lands at midnight.\n")
    return path


def test_encode_then_decode_with_short_flags(secret_file, tmp_path, capsys):
    assert main(["-e", str(secret_file), "5", "3", "--seed", "7"]) == ExitCode.OK
    shares = [share_path(secret_file, i) for i in range(1, 6)]
    assert all(p.exists() for p in shares)
    assert "Saved share to" in capsys.readouterr().out

    out = tmp_path / "recovered.txt"
    assert main(["-d", str(out), str(shares[0]), str(shares[2]), str(shares[4])]) == ExitCode.OK
    assert out.read_bytes() == secret_file.read_bytes()


def test_subcommands_and_custom_suffix(secret_file, tmp_path):
    assert main(["encode", str(secret_file), "4", "2", "--suffix", ".share"]) == ExitCode.OK
    first = share_path(secret_file, 1, ".share")
    fourth = share_path(secret_file, 4, ".share")
    out = tmp_path / "again.txt"
    assert main(["decode", str(out), str(fourth), str(first)]) == ExitCode.OK
    assert out.read_bytes() == secret_file.read_bytes()


@pytest.mark.parametrize(
    "argv, code",
    [
        ([], ExitCode.BAD_MODE),
        (["-x", "file"], ExitCode.BAD_MODE),
        (["-e", "file", "5"], ExitCode.BAD_ENCODE_ARGS),
        (["-e", "file", "five", "3"], ExitCode.BAD_ENCODE_ARGS),
        (["-d", "out"], ExitCode.BAD_DECODE_ARGS),
    ],
)
def test_usage_errors_map_to_exit_codes(argv, code, capsys):
    assert main(argv) == code


def test_help_exits_cleanly(capsys):
    assert main(["--help"]) == ExitCode.OK
    assert "encode" in capsys.readouterr().out


def test_encode_failure_writes_nothing(secret_file, capsys):
    assert main(["-e", str(secret_file), "2", "3"]) == ExitCode.ENCODE_FAILED
    assert "Failed to encode." in capsys.readouterr().out
    assert not share_path(secret_file, 1).exists()


def test_encode_missing_file(tmp_path):
    assert main(["-e", str(tmp_path / "nope"), "3", "2"]) == ExitCode.ENCODE_FAILED


def test_decode_rejects_mismatched_share_lengths(secret_file, tmp_path, capsys):
    assert main(["-e", str(secret_file), "3", "2"]) == ExitCode.OK
    other = tmp_path / "other.txt"
    other.write_bytes(b"short")
    assert main(["-e", str(other), "3", "2"]) == ExitCode.OK

    out = tmp_path / "mixed.txt"
    code = main(["-d", str(out), str(share_path(secret_file, 1)), str(share_path(other, 2))])
    assert code == ExitCode.DECODE_FAILED
    assert "Failed to decode." in capsys.readouterr().out
    assert not out.exists()


def test_decode_threshold_flag(secret_file, tmp_path):
    assert main(["-e", str(secret_file), "5", "3"]) == ExitCode.OK
    out = tmp_path / "strict.txt"
    two = [str(share_path(secret_file, i)) for i in (1, 2)]
    assert main(["-d", str(out), *two, "--threshold", "3"]) == ExitCode.DECODE_FAILED
    four = [str(share_path(secret_file, i)) for i in (1, 2, 3, 4)]
    assert main(["-d", str(out), *four, "--threshold", "3"]) == ExitCode.OK
    assert out.read_bytes() == secret_file.read_bytes()


def test_decode_missing_share_file(tmp_path):
    code = main(["-d", str(tmp_path / "out"), str(tmp_path / "missing-ssA")])
    assert code == ExitCode.DECODE_FAILED


def test_config_file_and_log_file(secret_file, tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps({"share_suffix": "-piece", "log_level": "DEBUG", "log_file": str(log_file)}),
        encoding="utf-8",
    )
    assert main(["encode", str(secret_file), "3", "2", "--config", str(config)]) == ExitCode.OK
    assert share_path(secret_file, 3, "-piece").exists()
    assert "Split" in log_file.read_text(encoding="utf-8")


def test_invalid_config_is_a_usage_error(secret_file, tmp_path):
    config = tmp_path / "bad.json"
    config.write_text(json.dumps({"unknown": 1}), encoding="utf-8")
    code = main(["encode", str(secret_file), "3", "2", "--config", str(config)])
    assert code == ExitCode.BAD_ENCODE_ARGS
