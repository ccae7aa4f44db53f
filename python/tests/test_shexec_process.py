"""Process launching tests for shexec (run against the current interpreter)."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(REPO_ROOT / "python"))

from shexec import process as shexec_process
from shexec.errors import InvalidEscapeSequence, LaunchError
from shexec.parser import parse
from shexec.process import (
    ExitStatus,
    collect_output,
    launch,
    run,
    run_inherit,
    spawn,
    spawn_inherit,
    wait_status,
)

PYTHON = ["", " -c ", ""]


@pytest.fixture(autouse=True)
def _platform_encoding(monkeypatch):
    monkeypatch.delenv("SHEXEC_ENCODING", raising=False)


def test_run_piped_captures_output():
    output = run(PYTHON, sys.executable, "print('Hello, ' + 'world!')")
    assert output.decoded.stdout.strip() == "Hello, world!"
    assert output.decoded.stderr == ""
    assert output.stdout.strip() == b"Hello, world!"
    assert output.success is True
    assert output.code == 0
    assert output.signal is None


def test_run_reports_exit_code():
    output = run(PYTHON, sys.executable, "import sys; sys.stderr.write('bad'); sys.exit(3)")
    assert output.success is False
    assert output.code == 3
    assert output.decoded.stderr == "bad"


def test_run_feeds_stdin():
    output = run(PYTHON, sys.executable, "import sys; print(sys.stdin.read().upper())", input=b"abc")
    assert output.decoded.stdout.strip() == "ABC"


def test_run_passes_cwd(tmp_path):
    output = run(PYTHON, sys.executable, "import os; print(os.getcwd())", cwd=tmp_path)
    assert Path(output.decoded.stdout.strip()).resolve() == tmp_path.resolve()


def test_run_timeout_kills_child():
    with pytest.raises(subprocess.TimeoutExpired):
        run(PYTHON, sys.executable, "import time; time.sleep(30)", timeout=0.5)


def test_spawn_returns_live_process():
    proc = spawn(PYTHON, sys.executable, "print('spawned')")
    output = collect_output(proc)
    assert output.decoded.stdout.strip() == "spawned"
    assert output.success


def test_spawn_inherit_status(capfd):
    proc = spawn_inherit(PYTHON, sys.executable, "print('inherited')")
    status = wait_status(proc, timeout=30)
    assert status == ExitStatus(success=True, code=0, signal=None)
    assert proc.stdout is None
    assert "inherited" in capfd.readouterr().out


def test_run_inherit_returns_status():
    status = run_inherit(PYTHON, sys.executable, "import sys; sys.exit(4)")
    assert status.success is False
    assert status.code == 4


def test_missing_program_raises_launch_error():
    with pytest.raises(LaunchError) as excinfo:
        run("shexec-definitely-missing-program --flag")
    assert excinfo.value.executable == "shexec-definitely-missing-program"
    assert isinstance(excinfo.value.__cause__, OSError)


def test_parse_error_never_spawns(monkeypatch):
    def _fail(*_args, **_kwargs):
        raise AssertionError("Popen must not be called")

    monkeypatch.setattr(shexec_process.subprocess, "Popen", _fail)
    with pytest.raises(InvalidEscapeSequence):
        run(r"echo \q")


def test_launch_rejects_unknown_stdio():
    with pytest.raises(ValueError):
        launch(parse("echo hi"), "tty")


def test_exit_status_from_signal():
    status = ExitStatus.from_returncode(-15)
    assert status.success is False
    assert status.code == 143
    assert status.signal == "SIGTERM"


def test_exit_status_from_unknown_signal_number():
    status = ExitStatus.from_returncode(-250)
    assert status.signal == "SIG250"
    assert status.code == 378


def test_unknown_encoding_rejected_before_spawning(monkeypatch):
    def _fail(*_args, **_kwargs):
        raise AssertionError("Popen must not be called")

    monkeypatch.setattr(shexec_process.subprocess, "Popen", _fail)
    with pytest.raises(LookupError):
        run(PYTHON, sys.executable, "print(1)", encoding="nope-enc")
