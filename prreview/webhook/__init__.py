"""Webhook server, payload schemas and event dispatch for GitHub.

Import handle_github_event from prreview.webhook.handlers and
run_webhook_server from prreview.webhook.server.
"""
