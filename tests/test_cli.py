from datetime import datetime, timezone

import httpx
import pytest

from docstore.cli import DocstoreClient, DocstoreClientError, _connection_from_env, cmd_call, cmd_smoke_delete, main

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def docstore(client):
    return DocstoreClient(client, "api-token")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ("DOCSTORE_URL", "DOCSTORE_API_TOKEN"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_smoke_delete_round_trip(docstore, github, capsys):
    assert cmd_smoke_delete(docstore, now=FIXED_NOW) == 0

    out = capsys.readouterr().out
    assert "/d/tmp-20240501123000/delete-test-20240501123000.md" in out
    assert "Delete workflow completed successfully." in out
    assert [call.method for call in github.calls if call.method != "GET"] == ["PUT", "PUT", "DELETE"]
    assert github.calls_for("PUT")[1].body["message"] == "Update tmp-20240501123000/delete-test-20240501123000.md"
    assert github.files == {}


def test_smoke_delete_reports_failure(docstore, github, capsys):
    github.scripted["PUT"] = (500, {"message": "boom"})

    assert cmd_smoke_delete(docstore, now=FIXED_NOW) == 1
    assert "failed with status 500" in capsys.readouterr().err
    assert github.calls_for("DELETE") == []


def test_call_raises_on_error_status(docstore):
    with pytest.raises(DocstoreClientError) as excinfo:
        docstore.call("GET", "/docs/missing.md")

    assert excinfo.value.status_code == 404
    assert "Document not found" in excinfo.value.body


def test_cmd_call_prints_status_and_body(docstore, github, capsys):
    github.files["docs/a.md"] = "hello"

    assert cmd_call(docstore, "get", "/docs/a.md", None) == 0

    out = capsys.readouterr().out
    assert out.startswith("HTTP 200")
    assert '"content":"hello"' in out


def test_cmd_call_sends_json_body(docstore, github, capsys):
    assert cmd_call(docstore, "PUT", "/docs/new.md", '{"content": "fresh"}') == 0
    assert github.files["docs/new.md"] == "fresh"


def test_cmd_call_non_2xx_exit_code(docstore, capsys):
    assert cmd_call(docstore, "GET", "/docs", None) == 1
    assert "HTTP 404" in capsys.readouterr().out


def test_main_without_command_prints_help(capsys):
    assert main([]) == 1
    assert "smoke-delete" in capsys.readouterr().out


def test_main_requires_environment(clean_env, capsys):
    assert main(["call", "GET", "/docs"]) == 1
    assert "DOCSTORE_URL environment variable is not set" in capsys.readouterr().err


def test_connection_reads_env_local(clean_env):
    (clean_env / "env.local").write_text(
        "DOCSTORE_URL=http://docstore.test\nDOCSTORE_API_TOKEN=from-file\n"
    )

    assert _connection_from_env() == ("http://docstore.test", "from-file")


def test_main_closes_its_http_client(clean_env, monkeypatch, capsys):
    monkeypatch.setenv("DOCSTORE_URL", "http://docstore.test")
    monkeypatch.setenv("DOCSTORE_API_TOKEN", "api-token")
    seen = []
    opened = []
    real_client = httpx.Client

    def answer(request):
        seen.append(request)
        return httpx.Response(200, json={"items": []})

    def build_client(**kwargs):
        client = real_client(transport=httpx.MockTransport(answer), **kwargs)
        opened.append(client)
        return client

    monkeypatch.setattr(httpx, "Client", build_client)

    assert main(["call", "GET", "/docs"]) == 0

    assert seen[0].headers["Authorization"] == "Bearer api-token"
    assert str(seen[0].url) == "http://docstore.test/docs"
    assert len(opened) == 1
    assert opened[0].is_closed
    assert "HTTP 200" in capsys.readouterr().out
