import json
import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from core.observability import mask_headers, register_http_request_logging, render_payload_preview


def test_passwords_are_fully_hidden() -> None:
    body = json.dumps({"email": "a@b.c", "password": "hunter22", "confirm_password": "hunter22"}).encode()

    preview = render_payload_preview(body)

    assert "hunter22" not in preview
    assert '"email":"a@b.c"' in preview


def test_tokens_are_previewed_then_masked() -> None:
    preview = render_payload_preview({"access_token": "eyJhbGciOiJIUzI1NiJ9.payload.sig"})

    assert "eyJhbGciOiJI***" in preview
    assert "payload.sig" not in preview


def test_non_json_and_binary_bodies() -> None:
    assert render_payload_preview(b"") == "<empty>"
    assert render_payload_preview(b"plain text") == "plain text"
    assert render_payload_preview(b"\xff\xfe\x00") == "<binary 3 bytes>"
    assert render_payload_preview(None) == "<none>"


def test_long_payloads_are_truncated() -> None:
    preview = render_payload_preview("x" * 5000)

    assert preview.endswith("(5000 bytes)")


def test_mask_headers_hides_credentials() -> None:
    masked = mask_headers([("Authorization", "Bearer abc"), ("apikey", "anon"), ("Accept", "json")])

    assert masked == {"Authorization": "***", "apikey": "***", "Accept": "json"}


@pytest.mark.asyncio
async def test_middleware_logs_request_and_status(caplog) -> None:
    app = FastAPI()
    register_http_request_logging(app)

    @app.post("/echo")
    async def echo(payload: dict) -> dict:
        return payload

    @app.get("/health")
    async def health() -> dict:
        return {"status": "healthy"}

    caplog.set_level(logging.DEBUG, logger="core.http")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/echo", json={"password": "hunter22", "n": 1})
        await client.get("/health")

    assert response.json() == {"password": "hunter22", "n": 1}
    messages = [record.getMessage() for record in caplog.records if record.name == "core.http"]
    assert any("HTTP POST /echo -> 200" in message for message in messages)
    assert not any("/health" in message for message in messages)
    assert not any("hunter22" in message for message in messages)
