"""Request logging helpers for HTTP traffic."""
from __future__ import annotations

import json
import logging
import time
import urllib.parse
from typing import Any, Iterable, Mapping

from fastapi import FastAPI, Request

_PAYLOAD_PREVIEW_LIMIT = 4096
_SENSITIVE_HEADERS = {"authorization", "apikey", "cookie", "x-api-key"}
# Health probes are polled constantly
_QUIET_PATHS = ("/health",)
_SENSITIVE_PAYLOAD_KEYS = {
    "access_token",
    "apikey",
    "authorization",
    "confirm_password",
    "cookie",
    "password",
    "refresh_token",
    "secret",
    "token",
}
_TOKEN_PREVIEW_LENGTH = 12


def _redact_token(token_value: str) -> str:
    """Return a preview of sensitive tokens while hiding the rest."""

    if not isinstance(token_value, str) or len(token_value) <= _TOKEN_PREVIEW_LENGTH:
        return "***"

    return f"{token_value[:_TOKEN_PREVIEW_LENGTH]}***"


def _format_client_address(client: tuple[str, int] | None) -> str:
    if not client:
        return "unknown"
    host, port = client
    return f"{host}:{port}" if port is not None else host


def _truncate(text: str, total_bytes: int) -> str:
    text = " ".join(text.split())
    if total_bytes > _PAYLOAD_PREVIEW_LIMIT:
        return f"{text[:_PAYLOAD_PREVIEW_LIMIT]}... ({total_bytes} bytes)"
    return text


def _format_query(query: str) -> str:
    if not query:
        return "<none>"

    params = urllib.parse.parse_qs(query, keep_blank_values=True)
    if not any(key.lower() in _SENSITIVE_PAYLOAD_KEYS for key in params):
        return query

    redacted_params: dict[str, list[str]] = {}
    for key, values in params.items():
        if key.lower() in _SENSITIVE_PAYLOAD_KEYS:
            redacted_params[key] = [_redact_token(value) for value in values]
        else:
            redacted_params[key] = values
    return urllib.parse.urlencode(redacted_params, doseq=True)


def mask_headers(headers: Iterable[tuple[str, str]]) -> Mapping[str, str]:
    """Return ``headers`` with credential-bearing values replaced by ``***``."""

    masked: dict[str, str] = {}
    for key, value in headers:
        masked[key] = "***" if key.lower() in _SENSITIVE_HEADERS else value
    return masked


def _redact_payload(value: Any, *, depth: int = 8) -> Any:
    if depth <= 0:
        return "<max depth reached>"

    if isinstance(value, Mapping):
        redacted: dict[Any, Any] = {}
        for key, item in value.items():
            if str(key).lower() in _SENSITIVE_PAYLOAD_KEYS:
                # Passwords are never previewed, even partially
                if "password" in str(key).lower() or not item:
                    redacted[key] = "***"
                else:
                    redacted[key] = _redact_token(str(item))
            else:
                redacted[key] = _redact_payload(item, depth=depth - 1)
        return redacted

    if isinstance(value, (list, tuple)):
        return [_redact_payload(item, depth=depth - 1) for item in value]

    return value


def render_payload_preview(payload: Any) -> str:
    """Return a redacted, length-limited preview for debug logging.

    Raw bodies are parsed as JSON first so that credentials inside them are
    redacted; undecodable bodies are summarised by size only.
    """

    if payload is None:
        return "<none>"

    if isinstance(payload, (bytes, bytearray)):
        if not payload:
            return "<empty>"
        try:
            text = bytes(payload).decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary {len(payload)} bytes>"
        try:
            payload = json.loads(text)
        except ValueError:
            return _truncate(text, len(payload))

    if isinstance(payload, str):
        return _truncate(payload, len(payload.encode("utf-8", errors="ignore")))

    try:
        serialized = json.dumps(
            _redact_payload(payload),
            default=repr,
            ensure_ascii=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError):
        serialized = repr(payload)

    return _truncate(serialized, len(serialized.encode("utf-8", errors="ignore")))


def register_http_request_logging(app: FastAPI, *, logger_name: str = "core.http") -> None:
    """Attach middleware that logs every HTTP request and its outcome."""

    if getattr(app.state, "_http_request_logging_installed", False):  # pragma: no cover - idempotence
        return

    logger = logging.getLogger(logger_name)

    @app.middleware("http")
    async def _log_request(request: Request, call_next):  # type: ignore[override]
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        body = await request.body()
        if body:
            request._body = body  # type: ignore[attr-defined]  # Allow downstream handlers to re-read

        client = request.client
        client_addr = _format_client_address((client.host, client.port) if client else None)
        logger.info("HTTP %s %s from %s", request.method, path, client_addr)

        debug_parts: list[str] = []
        if request.url.query:
            debug_parts.append(f"query={_format_query(request.url.query)}")
        if body:
            debug_parts.append(f"body={render_payload_preview(body)}")
        if debug_parts:
            logger.debug("HTTP %s %s payload %s", request.method, path, "; ".join(debug_parts))

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "HTTP %s %s -> %s (%.1f ms)",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.state._http_request_logging_installed = True


__all__ = ["mask_headers", "register_http_request_logging", "render_payload_preview"]
