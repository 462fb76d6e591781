"""Shared fixtures: fake state-record trees and fake vswhere runs."""

import json
import subprocess

import pytest

from vs_sdk_audit.models import ProductInstance


def make_instance(instance_id, name=None):
    return ProductInstance(
        instance_id=instance_id,
        display_name=name or f"Visual Studio {instance_id}",
        version="17.9.34607.119",
        install_path=f"C:\\VS\\{instance_id}",
    )


@pytest.fixture
def state_root(tmp_path):
    root = tmp_path / "_Instances"
    root.mkdir()
    return root


@pytest.fixture
def write_state(state_root):
    """write_state(instance_id, data) -> path; `data` may be a dict or raw text."""

    def _write(instance_id, data, encoding="utf-8"):
        d = state_root / instance_id
        d.mkdir(parents=True, exist_ok=True)
        p = d / "state.json"
        text = data if isinstance(data, str) else json.dumps(data)
        p.write_text(text, encoding=encoding)
        return p

    return _write


@pytest.fixture
def fake_vswhere(tmp_path):
    """An existing file standing in for vswhere.exe."""
    exe = tmp_path / "vswhere.exe"
    exe.write_text("")
    return str(exe)


class FakeRunner:
    """Records the command and replays a canned result or exception."""

    def __init__(self, stdout="[]", returncode=0, stderr="", exc=None):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.exc = exc
        self.calls = []

    def __call__(self, cmd, timeout=None, check=True):
        self.calls.append((cmd, timeout))
        if self.exc is not None:
            raise self.exc
        if check and self.returncode != 0:
            raise subprocess.CalledProcessError(self.returncode, cmd, self.stdout, self.stderr)
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def runner_factory():
    return FakeRunner
