"""Tests for the vswhere adapter."""

import json
import subprocess

import pytest

from vs_sdk_audit.discovery import VSWHERE_ARGS, list_instances, parse_instances
from vs_sdk_audit.errors import ToolInvocationFailed, ToolMissing

VSWHERE_OUTPUT = [
    {
        "instanceId": "2a5c3f1e",
        "installationName": "VisualStudio/17.9.6+34728.123",
        "installationPath": "C:\\Program Files\\Microsoft Visual Studio\\2022\\Community",
        "installationVersion": "17.9.34728.123",
        "productId": "Microsoft.VisualStudio.Product.Community",
        "displayName": "Visual Studio Community 2022",
        "channelId": "VisualStudio.17.Release",
        "catalog": {"productDisplayVersion": "17.9.6"},
    },
    {
        "instanceId": "b7e0d9c4",
        "installationPath": "C:\\BuildTools",
        "catalog": {"productDisplayVersion": "16.11.34"},
    },
]


class TestParseInstances:
    """Test parse_instances."""

    def test_parses_entries_in_order(self):
        out = parse_instances(json.dumps(VSWHERE_OUTPUT))
        assert [i.instance_id for i in out] == ["2a5c3f1e", "b7e0d9c4"]
        first = out[0]
        assert first.display_name == "Visual Studio Community 2022"
        assert first.version == "17.9.34728.123"
        assert first.install_path.endswith("Community")
        assert first.product_id == "Microsoft.VisualStudio.Product.Community"

    def test_fills_missing_fields(self):
        second = parse_instances(json.dumps(VSWHERE_OUTPUT))[1]
        assert second.display_name == "b7e0d9c4"
        assert second.version == "16.11.34"

    @pytest.mark.parametrize("catalog", ["17.9.6", ["17.9.6"], 3, None])
    def test_non_object_catalog(self, catalog):
        entry = {"instanceId": "c1", "catalog": catalog}
        inst = parse_instances(json.dumps([entry]))[0]
        assert inst.instance_id == "c1"
        assert inst.version == ""

    def test_empty_array(self):
        assert parse_instances("[]") == []

    def test_blank_output(self):
        assert parse_instances("  \r\n") == []

    def test_skips_entries_without_instance_id(self):
        assert parse_instances(json.dumps([{"displayName": "x"}, 3])) == []

    def test_garbage_output(self):
        with pytest.raises(ToolInvocationFailed):
            parse_instances("Visual Studio Locator version 3.1.7")

    def test_non_list_output(self):
        with pytest.raises(ToolInvocationFailed):
            parse_instances('{"instanceId": "x"}')


class TestListInstances:
    """Test list_instances with a fake process runner."""

    def test_runs_vswhere_with_json_flags(self, fake_vswhere, runner_factory):
        runner = runner_factory(stdout=json.dumps(VSWHERE_OUTPUT))
        out = list_instances(fake_vswhere, timeout=5, runner=runner)
        assert len(out) == 2
        cmd, timeout = runner.calls[0]
        assert cmd == [fake_vswhere, *VSWHERE_ARGS]
        assert "-all" in cmd and "-nologo" in cmd
        assert cmd[cmd.index("-format") + 1] == "json"
        assert timeout == 5

    def test_zero_instances(self, fake_vswhere, runner_factory):
        assert list_instances(fake_vswhere, runner=runner_factory(stdout="[]")) == []

    def test_missing_tool(self, tmp_path, runner_factory):
        runner = runner_factory()
        with pytest.raises(ToolMissing):
            list_instances(str(tmp_path / "missing.exe"), runner=runner)
        assert runner.calls == []

    def test_no_tool_anywhere(self, monkeypatch, runner_factory):
        monkeypatch.setattr("vs_sdk_audit.discovery.default_vswhere", lambda: None)
        with pytest.raises(ToolMissing):
            list_instances(None, runner=runner_factory())

    def test_non_zero_exit(self, fake_vswhere, runner_factory):
        runner = runner_factory(returncode=87, stderr="Error 0x57: invalid parameter")
        with pytest.raises(ToolInvocationFailed, match="invalid parameter"):
            list_instances(fake_vswhere, runner=runner)

    def test_timeout(self, fake_vswhere, runner_factory):
        runner = runner_factory(exc=subprocess.TimeoutExpired(["vswhere"], 2))
        with pytest.raises(ToolInvocationFailed, match="timed out"):
            list_instances(fake_vswhere, runner=runner)

    def test_exec_failure(self, fake_vswhere, runner_factory):
        runner = runner_factory(exc=FileNotFoundError("gone"))
        with pytest.raises(ToolMissing):
            list_instances(fake_vswhere, runner=runner)

    def test_unparseable_output(self, fake_vswhere, runner_factory):
        with pytest.raises(ToolInvocationFailed):
            list_instances(fake_vswhere, runner=runner_factory(stdout="<xml/>"))
