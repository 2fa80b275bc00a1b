"""Handle GitHub webhook events for the configured repository.

Checks that the payload belongs to the configured repository and hands
the event to the review session.
"""

import logging
from typing import Any, Dict

from prreview.config import AppConfig
from prreview.review.session import ReviewResult, run_review

SUPPORTED_EVENTS = ("pull_request", "issue_comment")


def handle_github_event(
    config: AppConfig,
    event: str,
    payload: Dict[str, Any],
    log: logging.Logger | None = None,
) -> ReviewResult | None:
    """Handle a GitHub webhook event.

    Supported events:
    - pull_request (opened: new review, synchronize: update existing review)
    - issue_comment (comment starting with the trigger phrase: new review)

    Returns None when the event is not for the configured repository or
    not a supported event type.
    """
    logger = log or logging.getLogger("prreview.webhook.handlers")

    if event not in SUPPORTED_EVENTS:
        logger.debug("Skipping unsupported event %s", event)
        return None

    repo_payload = payload.get("repository") or {}
    repo_full_name = repo_payload.get("full_name") or ""
    if repo_full_name and repo_full_name.lower() != config.bot.repository.lower():
        logger.debug("Skipping %s: repository %s is not configured repo", event, repo_full_name)
        return None

    return run_review(config, event, payload)
