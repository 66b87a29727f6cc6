"""Tests for CLI commands."""

import json

import pytest
import typer
from typer.testing import CliRunner

from conftest import FakeClient
from veracode_mcp import cli
from veracode_mcp.cli import app, parse_tool_arguments
from veracode_mcp.cli_commands import serve_command

runner = CliRunner()


@pytest.fixture
def fake_build(monkeypatch: pytest.MonkeyPatch, metamail_client: FakeClient) -> FakeClient:
    monkeypatch.setattr(cli, "build_client", lambda: metamail_client)
    return metamail_client


class TestParseToolArguments:
    """Tests for parse_tool_arguments."""

    def test_merges_json_and_pairs(self):
        arguments = parse_tool_arguments(
            '{"application": "Metamail", "page": 0}', ["page=2", "scan_type=STATIC"]
        )
        assert arguments == {"application": "Metamail", "page": 2, "scan_type": "STATIC"}

    def test_pair_values_decoded_as_json(self):
        arguments = parse_tool_arguments(None, ["new_findings_only=true", "cwe=[79, 89]"])
        assert arguments == {"new_findings_only": True, "cwe": [79, 89]}

    @pytest.mark.parametrize(
        ("args_json", "pairs"), [("[1, 2]", None), ("{bad", None), (None, ["oops"])]
    )
    def test_rejects_bad_input(self, args_json, pairs):
        with pytest.raises(typer.BadParameter):
            parse_tool_arguments(args_json, pairs)


class TestInfoCommands:
    """Tests for version, tools and config."""

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "veracode-mcp" in result.output

    def test_tools_lists_catalogue(self):
        result = runner.invoke(app, ["tools"])
        assert result.exit_code == 0
        assert "get-findings-paginated" in result.output

    def test_tools_shows_schema(self):
        result = runner.invoke(app, ["tools", "get-findings"])
        assert result.exit_code == 0
        assert "paging_mode" in result.output

    def test_tools_unknown(self):
        result = runner.invoke(app, ["tools", "nope"])
        assert result.exit_code == 1
        assert "Unknown tool: nope" in result.output

    def test_config_masks_secrets(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("VERACODE_API_ID", "abcdef0123456789")
        monkeypatch.setenv("VERACODE_API_KEY", "0123456789abcdef0123456789abcdef")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "01234567...cdef" in result.output
        assert "0123456789abcdef0123456789abcdef" not in result.output


class TestCallCommand:
    """Tests for the call command."""

    def test_prints_success_envelope(self, fake_build: FakeClient):
        result = runner.invoke(
            app,
            [
                "call",
                "get-findings-paginated",
                "--arg",
                "application=Metamail",
                "--arg",
                "page_size=3",
            ],
        )
        assert result.exit_code == 0
        envelope = json.loads(result.stdout)
        assert envelope["success"] is True
        assert envelope["data"]["page_info"]["display"] == "Page 1 of 34"
        assert fake_build.calls[0] == ("open", None)
        assert fake_build.calls[-1] == ("close", None)

    def test_failure_envelope_exits_nonzero(self, fake_build: FakeClient):
        result = runner.invoke(
            app, ["call", "get-findings", "--args", '{"application": "Payroll"}']
        )
        assert result.exit_code == 1
        assert json.loads(result.stdout) == {
            "success": False,
            "error": "No application found with name: Payroll",
        }

    def test_missing_credentials(self):
        result = runner.invoke(app, ["call", "get-policy-settings"])
        assert result.exit_code == 1
        assert "Missing required credentials" in result.output

    def test_bad_json_is_usage_error(self, fake_build: FakeClient):
        result = runner.invoke(app, ["call", "get-findings", "--args", "{bad"])
        assert result.exit_code == 2


class TestServeCommand:
    """Tests for the serve command."""

    def test_serve_runs_server(self, monkeypatch: pytest.MonkeyPatch, fake_build: FakeClient):
        served = []

        async def fake_serve(client):
            served.append(client)

        monkeypatch.setattr(cli, "serve", fake_serve)
        monkeypatch.setattr(serve_command, "configure_logging", lambda level: None)
        result = runner.invoke(app, ["serve"])
        assert result.exit_code == 0
        assert served == [fake_build]

    def test_serve_without_credentials(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(serve_command, "configure_logging", lambda level: None)
        result = runner.invoke(app, ["serve"])
        assert result.exit_code == 1
        assert "Missing required credentials" in result.output
