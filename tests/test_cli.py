"""Tests for one-shot tool invocation."""
import httpx
import pytest

from dex_mcp import cli

from conftest import CONTACT_ID, GRAPHQL_URL, REST_URL


@pytest.fixture
def cli_env(monkeypatch, fake_dex):
    monkeypatch.setenv("DEX_API_KEY", "test-key")
    monkeypatch.setenv("DEX_API_BASE_URL", GRAPHQL_URL)
    monkeypatch.setenv("DEX_REST_BASE_URL", REST_URL)
    monkeypatch.setattr(
        cli,
        "build_http_client",
        lambda api_key: httpx.AsyncClient(transport=httpx.MockTransport(fake_dex.handler)),
    )
    return fake_dex


class TestOneShotCall:

    def test_success_prints_result(self, cli_env, capsys):
        cli_env.graphql["GetContact"] = {"contacts_by_pk": {"id": CONTACT_ID, "full_name": "Ada Lovelace"}}

        exit_code = cli.main(["get_contact_by_id", f'{{"id": "{CONTACT_ID}"}}'])

        assert exit_code == 0
        assert "Ada Lovelace" in capsys.readouterr().out

    def test_error_result_exits_non_zero(self, cli_env, capsys):
        exit_code = cli.main(["delete_reminder", '{"id": "42"}'])

        assert exit_code == 1
        assert "find_reminders_by_partial_id" in capsys.readouterr().err
        assert cli_env.requests == []

    def test_unknown_tool_exits_non_zero(self, cli_env, capsys):
        assert cli.main(["nope"]) == 1
        assert "Unknown tool: nope" in capsys.readouterr().err

    def test_invalid_json(self, cli_env, capsys):
        assert cli.main(["get_contacts", "{not json"]) == 2
        assert "JSON" in capsys.readouterr().err

    def test_arguments_must_be_object(self, cli_env):
        assert cli.main(["get_contacts", "[1, 2]"]) == 2

    def test_missing_api_key(self, monkeypatch, capsys):
        monkeypatch.delenv("DEX_API_KEY", raising=False)

        assert cli.main(["get_contacts"]) == 2
        assert "DEX_API_KEY" in capsys.readouterr().err

    def test_list_tools(self, capsys):
        assert cli.main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "create_note:" in out
        assert "find_contacts_by_partial_id:" in out
