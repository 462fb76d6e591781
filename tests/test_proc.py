"""Tests for run_quiet, using the running interpreter as the child process."""

import subprocess
import sys

import pytest

from vs_sdk_audit.proc import run_quiet


def test_captures_stdout_and_stderr():
    res = run_quiet([sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"],
                    timeout=30)
    assert res.returncode == 0
    assert res.stdout.strip() == "out"
    assert res.stderr.strip() == "err"


def test_non_zero_exit_raises():
    with pytest.raises(subprocess.CalledProcessError) as exc:
        run_quiet([sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"], timeout=30)
    assert exc.value.returncode == 3
    assert exc.value.stderr == "bad"


def test_non_zero_exit_without_check():
    res = run_quiet([sys.executable, "-c", "import sys; sys.exit(2)"], timeout=30, check=False)
    assert res.returncode == 2


def test_timeout_stops_child():
    with pytest.raises(subprocess.TimeoutExpired):
        run_quiet([sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.5)


def test_missing_executable():
    with pytest.raises(FileNotFoundError):
        run_quiet(["definitely-not-a-real-vswhere-binary"], timeout=5)
