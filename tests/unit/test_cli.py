"""Tests for CLI tool."""

from __future__ import annotations

import subprocess
import sys

import pytest

from tmplpack.cli.main import main, parse_value


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = subprocess.run(
        [sys.executable, "-m", "tmplpack.cli.main", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "tmplpack: template-driven binary packing" in result.stdout
    assert "--analyze" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "tmplpack.cli.main", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "tmplpack 0.1.0" in result.stdout


def test_cli_no_command(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that running without a command prints help."""
    assert main([]) == 0
    assert "usage: tmplpack" in capsys.readouterr().out


def test_cli_pack(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI --pack prints hex."""
    assert main(["--pack", "n C A4", "513", "7", "abc"]) == 0
    assert capsys.readouterr().out.strip() == "02010761626320"


def test_cli_pack_float_and_bytes(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that values are parsed as Python literals."""
    assert main(["--pack", "g a2", "1.0", "b'hi'"]) == 0
    assert capsys.readouterr().out.strip() == "3f8000006869"


def test_cli_unpack(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI --unpack prints the decoded list."""
    assert main(["--unpack", "n C A4", "02010761626320"]) == 0
    assert capsys.readouterr().out.strip() == "[513, 7, b'abc']"


def test_cli_analyze_fixed(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI --analyze on a fixed-size template."""
    assert main(["--analyze", "N n a8"]) == 0
    out = capsys.readouterr().out
    assert "3 directives." in out
    assert "unsigned 32-bit integer, big-endian" in out
    assert "NUL-padded string" in out
    assert "Packed size: 14 bytes" in out


def test_cli_analyze_variable(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI --analyze on a template with a variable part."""
    assert main(["--analyze", "v U"]) == 0
    out = capsys.readouterr().out
    assert "UTF-8 codepoint" in out
    assert "Packed size: variable" in out


def test_cli_empty_template(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that an empty template is a command, not a missing one."""
    assert main(["--analyze", ""]) == 0
    out = capsys.readouterr().out
    assert "0 directives." in out
    assert "Packed size: 0 bytes" in out
    assert "usage:" not in out

    assert main(["--unpack", "", ""]) == 0
    assert capsys.readouterr().out.strip() == "[]"

    assert main(["--pack", ""]) == 0
    assert capsys.readouterr().out.strip() == ""


def test_cli_pack_error(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that codec errors are reported on stderr."""
    assert main(["--pack", "C", "abc"]) == 1
    assert "Error: can't convert str into Integer" in capsys.readouterr().err


def test_cli_template_error(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that template errors are reported on stderr."""
    assert main(["--analyze", "C<"]) == 1
    assert "allowed only after" in capsys.readouterr().err


def test_cli_bad_hex(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that invalid hex input is reported on stderr."""
    assert main(["--unpack", "C", "zz"]) == 1
    assert capsys.readouterr().err.startswith("Error:")


@pytest.mark.parametrize(
    "text,value",
    [("1", 1), ("-2.5", -2.5), ("b'ab'", b"ab"), ("'x'", "x"), ("abc", "abc"), ("a b", "a b")],
)
def test_parse_value(text: str, value: object) -> None:
    """Test command-line value parsing."""
    assert parse_value(text) == value
