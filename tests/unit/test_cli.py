import logging
import os
import pathlib
import subprocess
import sys
import tempfile

import json_parser as jp

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SCRIPT = os.path.join(REPO_ROOT, "json_parser.py")

def _write_temp(data):
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False, encoding="utf-8") as f:
        f.write(data)
        return f.name

def test_cli_prints_pretty_rendering(capsys):
    fname = _write_temp('{"name": "John", "tags": ["a", "b"]}')
    try:
        assert jp._cli([fname]) == 0
        assert capsys.readouterr().out.strip() == "{name=John, tags=[a, b]}"
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)

def test_cli_without_file_renders_sample(capsys):
    assert jp._cli([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("{name=John Doe, occupation=Developer, bio=John is a \"senior\" developer")
    assert "sequence is \\ for backslashes.}" in out

def test_cli_check_prints_ok(capsys):
    fname = _write_temp("[1,2,3]")
    try:
        assert jp._cli([fname, "--check"]) == 0
        assert capsys.readouterr().out.strip() == "OK"
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)

def test_cli_parse_error_exit_code(capsys):
    fname = _write_temp('{"key":42')
    try:
        assert jp._cli([fname]) == 1
        assert capsys.readouterr().err.startswith("ParseError: Unexpected end of input")
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)

def test_cli_strict_flag(capsys):
    fname = _write_temp("[1] [2]")
    try:
        assert jp._cli([fname]) == 0
        assert jp._cli([fname, "--strict"]) == 1
        assert "Extra data after root value" in capsys.readouterr().err
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)

def test_cli_option_flags(capsys):
    fname = _write_temp('{"a": "\\n", "a": 2}')
    try:
        assert jp._cli([fname, "--reject-dup-keys"]) == 1
        assert jp._cli([fname, "--max-depth", "0"]) == 1
        assert jp._cli([fname, "--standard-escapes", "--check"]) == 0
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)

def test_cli_missing_file_exit_code(tmp_path, capsys):
    assert jp._cli([str(tmp_path / "absent.json")]) == 2
    assert "cannot read" in capsys.readouterr().err

def test_cli_verbose_logs_ignored_trailing_data(monkeypatch, caplog):
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    fname = _write_temp('{"a":1}garbage')
    try:
        with caplog.at_level(logging.DEBUG, logger="json_parser"):
            assert jp._cli([fname, "--verbose", "--check"]) == 0
        assert "ignoring 7 characters after root value" in caplog.text
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)

def test_cli_reads_stdin_in_subprocess():
    cmd = [sys.executable, SCRIPT, "-"]
    cp = subprocess.run(cmd, input='[true, null, "x"]', capture_output=True, text=True, cwd=REPO_ROOT)
    assert cp.returncode == 0
    assert cp.stdout.strip() == "[true, null, x]"

def test_cli_non_utf8_file_exit_code(tmp_path, capsys):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"a": "\xff"}')
    assert jp._cli([str(path)]) == 2
    assert "cannot read" in capsys.readouterr().err

def test_cli_max_depth_beyond_stack_reports_parse_error(tmp_path, capsys):
    path = tmp_path / "deep.json"
    path.write_text("[" * 5000 + "]" * 5000, encoding="utf-8")
    assert jp._cli([str(path), "--max-depth", "10000", "--check"]) == 1
    assert capsys.readouterr().err.startswith("ParseError: Depth limit exceeded")
