"""Tests for CLI tool."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from amp import Message, encode


def _run(*args: str, stdin: bytes | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "amp.cli.main", *args],
        input=stdin.decode("ascii") if stdin is not None else None,
        capture_output=True,
        text=True,
    )


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = _run("--help")
    assert result.returncode == 0
    assert "amp: AMP binary message codec" in result.stdout
    assert "--decode" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = _run("--version")
    assert result.returncode == 0
    assert "amp 0.1.0" in result.stdout


def test_cli_demo() -> None:
    """Test CLI --demo prints the reference buffer."""
    result = _run("--demo")
    assert result.returncode == 0
    assert result.stdout.startswith("encoded buffer size=58, content='0x14, 0x00, 0x00, 0x00, 0x03")
    assert "0x62, 0x3a, 0x00, 0x00, 0x70, 0x47, 0x3a, 0xfa, 0xed, 0xd9" in result.stdout


def test_cli_demo_little_endian() -> None:
    """Test CLI --demo with the legacy BigInt byte order."""
    result = _run("--demo", "--byteorder", "little")
    assert result.returncode == 0
    assert "0x62, 0x3a, 0xd9, 0xed, 0xfa, 0x3a, 0x47, 0x70, 0x00, 0x00" in result.stdout


def test_cli_decode_file(tmp_path: Path, reference_bytes: bytes) -> None:
    """Test CLI --decode prints each field."""
    path = tmp_path / "message.bin"
    path.write_bytes(reference_bytes)

    result = _run("--decode", str(path))

    assert result.returncode == 0
    assert result.stdout.splitlines() == [
        "<Buffer 01 02 03>",
        "hello",
        "123451234512345",
        '{"payload":"value"}',
    ]


def test_cli_decode_pipelined_verbose(tmp_path: Path, reference_bytes: bytes) -> None:
    """Test CLI --decode handles several messages in one file."""
    second = Message()
    second.push_bigint(-5)
    path = tmp_path / "stream.bin"
    path.write_bytes(reference_bytes + encode(second))

    result = _run("--decode", str(path), "--verbose")

    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "--- message 1: 4 fields, 58 bytes [7 11 14 25] ---"
    assert lines[5] == "--- message 2: 1 fields, 15 bytes [14] ---"
    assert lines[6] == "-5"


def test_cli_decode_hex_stdin(reference_bytes: bytes) -> None:
    """Test CLI --decode - --hex reads hex text from stdin."""
    hex_text = ", ".join(f"0x{byte:02x}" for byte in reference_bytes).encode("ascii")

    result = _run("--decode", "-", "--hex", stdin=hex_text)

    assert result.returncode == 0
    assert "hello" in result.stdout


def test_cli_decode_bad_version(tmp_path: Path) -> None:
    """Test CLI --decode reports decode errors."""
    path = tmp_path / "bad.bin"
    path.write_bytes(b"\x24\x00\x00\x00\x00")

    result = _run("--decode", str(path))

    assert result.returncode == 1
    assert "Error decoding message" in result.stderr
    assert "version" in result.stderr


def test_cli_decode_missing_file() -> None:
    """Test CLI --decode with missing file."""
    result = _run("--decode", "nonexistent.bin")
    assert result.returncode == 1
    assert "Error" in result.stderr or "not found" in result.stderr.lower()


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = _run()
    assert result.returncode == 0
    assert "amp: AMP binary message codec" in result.stdout
