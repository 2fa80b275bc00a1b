"""Webhook HTTP server for GitHub events.

Serves a health check and the webhook path. When a webhook secret is
configured, the X-Hub-Signature-256 header is verified before handling.
"""

import hashlib
import hmac
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qs

from prreview.config import AppConfig
from prreview.webhook.handlers import handle_github_event

LOG = logging.getLogger("prreview.webhook")


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check a GitHub 'sha256=<hex>' signature for body; True when no secret is set."""
    if not secret:
        return True
    if not signature or not signature.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(f"sha256={expected}", signature)


class WebhookHandler(BaseHTTPRequestHandler):
    """Handle GET /health and POST to the configured webhook path."""

    config: AppConfig

    def do_GET(self) -> None:
        if self.path == "/health" or self.path == "/":
            self._send_json(200, {"status": "ok", "service": "prreview"})
            return
        self.send_response(404)
        self.end_headers()

    def do_POST(self) -> None:
        if self.path == self.config.webhook.path:
            self._handle_github_webhook()
            return
        self.send_response(404)
        self.end_headers()

    def _send_json(self, status: int, data: dict) -> None:
        raw = json.dumps(data).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(raw)))
        self.end_headers()
        self.wfile.write(raw)
        self.wfile.flush()

    def _parse_webhook_body(self, body: bytes) -> dict:
        """Parse webhook body as JSON.

        Supports raw JSON and application/x-www-form-urlencoded (payload=...).
        """
        if not body:
            return {}
        content_type = self.headers.get("Content-Type", "")
        if "application/x-www-form-urlencoded" in content_type:
            parsed = parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
            raw = (parsed.get("payload") or [None])[0]
            if raw is None:
                return {}
            return json.loads(raw)
        return json.loads(body.decode())

    def _handle_github_webhook(self) -> None:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            length = -1
        if length < 0:
            LOG.warning("Invalid Content-Length %r; request rejected", self.headers.get("Content-Length"))
            self._send_json(400, {"error": "invalid content length"})
            return
        body = self.rfile.read(length) if length else b""

        if not verify_signature(
            self.config.webhook_secret_resolved,
            body,
            self.headers.get("X-Hub-Signature-256"),
        ):
            LOG.warning("Webhook signature mismatch; request rejected")
            self._send_json(401, {"error": "invalid signature"})
            return

        try:
            payload = self._parse_webhook_body(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            LOG.warning("Invalid webhook JSON (%s bytes)", len(body))
            self._send_json(400, {"error": "invalid payload"})
            return

        event = self.headers.get("X-GitHub-Event", "")
        LOG.info("Webhook event: %s (action: %s)", event, payload.get("action") if isinstance(payload, dict) else None)
        # Reviews take minutes; answer GitHub before running one.
        self._send_json(200, {"received": True})
        if not isinstance(payload, dict):
            return
        try:
            handle_github_event(self.config, event, payload)
        except Exception as e:
            LOG.exception("Failed to handle %s event: %s", event, e)

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def run_webhook_server(config: AppConfig) -> None:
    """Run HTTP server for webhooks and health check."""
    host = config.webhook.host
    port = config.webhook.port
    WebhookHandler.config = config
    server = ThreadingHTTPServer((host, port), WebhookHandler)
    LOG.info("Webhook server listening on %s:%s%s", host, port, config.webhook.path)
    server.serve_forever()
