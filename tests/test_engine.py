import asyncio
import importlib.util
import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from textkit.engine import build_app, import_attr
from textkit.limits import RequestLimitsMiddleware, request_timeout_seconds
from textkit.lint import lint_manifest, lint_modules
from textkit.registry import MODULES_PATH, load_filesystem_modules
from textkit.settings import env_float, env_int, log_level, text_max_chars

ROOT_DIR = Path(__file__).resolve().parents[1]

VALID_MANIFEST = """name: demo_tool
title: Demo Tool
version: 0.0.1
description: Demo.
public: true
category: Text
entrypoints:
  api: modules.text_tools.tool.app:app
"""


@pytest.fixture
def client():
    return TestClient(build_app())


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_modules_listing(client):
    modules = client.get("/modules").json()["modules"]
    text_tools = next(item for item in modules if item["name"] == "text_tools")
    assert text_tools["mount"] == "/text-tools"
    assert text_tools["title"] == "Text Tools"


def test_text_tools_is_mounted(client):
    response = client.post("/text-tools/convert-case", data={"text": "hello world", "style": "PascalCase"})
    assert response.status_code == 200
    assert response.json()["result"] == "HelloWorld"


def test_body_limit(monkeypatch):
    monkeypatch.setenv("TEXTKIT_MAX_BODY_BYTES", "16")
    client = TestClient(build_app())
    response = client.post("/text-tools/uppercase", data={"text": "x" * 100})
    assert response.status_code == 413
    assert response.text == "Payload too large"


def test_filesystem_registry_skips_broken_manifests(tmp_path, caplog):
    good = tmp_path / "demo_tool"
    good.mkdir()
    (good / "module.yaml").write_text(VALID_MANIFEST, encoding="utf-8")
    broken = tmp_path / "broken"
    broken.mkdir()
    (broken / "module.yaml").write_text("name: [unclosed", encoding="utf-8")
    listed = tmp_path / "listed"
    listed.mkdir()
    (listed / "module.yaml").write_text("- a\n- b\n", encoding="utf-8")
    (tmp_path / "no_manifest").mkdir()

    with caplog.at_level(logging.WARNING, logger="textkit.registry"):
        modules = load_filesystem_modules(tmp_path)

    assert list(modules) == ["demo_tool"]
    assert modules["demo_tool"]["mount"] == "/demo-tool"
    assert modules["demo_tool"]["source"] == "filesystem"
    assert len(caplog.records) == 2


def test_build_app_uses_given_modules_path(tmp_path):
    demo = tmp_path / "demo_tool"
    demo.mkdir()
    (demo / "module.yaml").write_text(VALID_MANIFEST + "mount: /demo\n", encoding="utf-8")
    client = TestClient(build_app(tmp_path))
    assert client.post("/demo/uppercase", data={"text": "ok"}).json() == {"result": "OK"}


def test_import_attr():
    assert import_attr("textkit.engine:build_app") is build_app
    with pytest.raises(ValueError):
        import_attr("textkit.engine")


def test_lint_shipped_modules():
    results = lint_modules(MODULES_PATH)
    assert [result["name"] for result in results] == ["text_tools"]
    assert all(result["ok"] for result in results), results


def test_lint_manifest_reports_problems():
    issues = lint_manifest({"mount": "bad/", "entrypoints": {"api": "no_colon"}})
    assert "missing field: name" in issues
    assert "mount must start with /" in issues
    assert "mount must not end with /" in issues
    assert "entrypoints.api must be module:attr" in issues


def test_module_sanity_script(capsys):
    spec = importlib.util.spec_from_file_location("module_sanity", ROOT_DIR / "scripts" / "module_sanity.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    assert module.main(["--modules-dir", str(MODULES_PATH)]) == 0
    assert "passed" in capsys.readouterr().out


def test_env_numbers(monkeypatch):
    monkeypatch.setenv("TEXTKIT_SAMPLE", "abc")
    assert env_int("TEXTKIT_SAMPLE", 5) == 5
    monkeypatch.setenv("TEXTKIT_SAMPLE", "0")
    assert env_int("TEXTKIT_SAMPLE", 5) is None
    monkeypatch.setenv("TEXTKIT_SAMPLE", " 7 ")
    assert env_int("TEXTKIT_SAMPLE", 5) == 7
    monkeypatch.setenv("TEXTKIT_SAMPLE", "")
    assert env_float("TEXTKIT_SAMPLE", 1.5) == 1.5
    monkeypatch.setenv("TEXTKIT_SAMPLE", "2.5")
    assert env_float("TEXTKIT_SAMPLE", 1.5) == 2.5
    monkeypatch.delenv("TEXTKIT_SAMPLE")
    assert env_int("TEXTKIT_SAMPLE", None) is None

    monkeypatch.delenv("TEXTKIT_TEXT_MAX_CHARS", raising=False)
    assert text_max_chars() == 200_000
    monkeypatch.setenv("TEXTKIT_TEXT_MAX_CHARS", "0")
    assert text_max_chars() is None


@pytest.mark.parametrize(
    "raw, expected",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("nonsense", logging.INFO)],
)
def test_log_level(monkeypatch, raw, expected):
    monkeypatch.setenv("TEXTKIT_LOG_LEVEL", raw)
    assert log_level() == expected


async def echo_app(scope, receive, send):
    body = b""
    while True:
        message = await receive()
        body += message.get("body", b"")
        if not message.get("more_body"):
            break
    await send({"type": "http.response.start", "status": 200, "headers": [(b"content-type", b"text/plain")]})
    await send({"type": "http.response.body", "body": body})


async def slow_app(scope, receive, send):
    await asyncio.sleep(5)
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"late"})


def test_streamed_body_without_content_length_is_capped():
    client = TestClient(RequestLimitsMiddleware(echo_app, max_body=16))

    def chunks():
        for _ in range(3):
            yield b"x" * 10

    response = client.post("/text-tools/uppercase", content=chunks())
    assert "content-length" not in {key.lower() for key in response.request.headers}
    assert response.status_code == 413
    assert response.text == "Payload too large"


def test_body_under_limit_is_replayed_intact():
    client = TestClient(RequestLimitsMiddleware(echo_app, max_body=16))
    response = client.post("/anything", content=b"hello")
    assert response.status_code == 200
    assert response.text == "hello"


def test_slow_request_times_out(monkeypatch, caplog):
    monkeypatch.setenv("TEXTKIT_REQUEST_TIMEOUT_SECONDS", "0.05")
    middleware = RequestLimitsMiddleware(slow_app, timeout_seconds=request_timeout_seconds())
    client = TestClient(middleware)

    with caplog.at_level(logging.WARNING, logger="textkit.limits"):
        response = client.get("/text-tools/styles")

    assert middleware.timeout_seconds == 0.05
    assert response.status_code == 504
    assert response.text == "Request timed out"
    assert any("timed out" in record.getMessage() for record in caplog.records)


def test_health_check_skips_limits():
    client = TestClient(RequestLimitsMiddleware(echo_app, max_body=1))
    assert client.post("/healthz", content=b"more than one byte").status_code == 200
