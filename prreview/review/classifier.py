"""Turn an inbound GitHub webhook event into a ReviewTrigger.

- pull_request opened -> NewReview, synchronize -> UpdateReview, others ignored
- issue_comment (not deleted, not written by the bot) starting with the
  trigger phrase -> NewReview, even when the PR already has a review
- any other event or an unparsable payload -> Ignore

Pure: no API calls.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from prreview.models import ReviewTrigger
from prreview.review.messages import BOT_MARKERS, SELF_PREAMBLE
from prreview.webhook.events import IssueCommentEvent, PullRequestEvent, User

LOG = logging.getLogger("prreview.review.classifier")


def _login(user: User | None) -> str:
    return (user.login or "") if user is not None else ""


def classify_pull_request(payload: Dict[str, Any]) -> ReviewTrigger:
    """Classify a pull_request webhook payload."""
    try:
        event = PullRequestEvent.model_validate(payload)
    except ValidationError as e:
        LOG.debug("Ignoring malformed pull_request payload: %s", e)
        return ReviewTrigger.ignore()

    pr = event.pull_request
    title = pr.title or ""
    author = _login(pr.user)
    if event.action == "opened":
        LOG.debug("Received payload: PR #%s opened", pr.number)
        return ReviewTrigger.new_review(title, pr.number, author)
    if event.action == "synchronize":
        LOG.debug("Received payload: PR #%s synced", pr.number)
        return ReviewTrigger.update_review(title, pr.number, author)
    LOG.debug("Not a PR opened or synchronize event (action=%s)", event.action)
    return ReviewTrigger.ignore()


def classify_issue_comment(payload: Dict[str, Any], trigger_phrase: str) -> ReviewTrigger:
    """Classify an issue_comment webhook payload against the trigger phrase."""
    try:
        event = IssueCommentEvent.model_validate(payload)
    except ValidationError as e:
        LOG.debug("Ignoring malformed issue_comment payload: %s", e)
        return ReviewTrigger.ignore()

    if event.action == "deleted":
        LOG.debug("Deleted issue comment")
        return ReviewTrigger.ignore()

    body = event.comment.body or ""
    if body.startswith((SELF_PREAMBLE,) + BOT_MARKERS):
        LOG.info("Ignore comment via agent")
        return ReviewTrigger.ignore()

    if not body.lower().startswith(trigger_phrase.lower()):
        LOG.info("Ignore the comment without the magic words")
        return ReviewTrigger.ignore()

    issue = event.issue
    return ReviewTrigger.new_review(issue.title or "", issue.number, _login(issue.user))


def classify_event(event_name: str, payload: Dict[str, Any], trigger_phrase: str) -> ReviewTrigger:
    """Classify a webhook by its X-GitHub-Event name and decoded payload."""
    if event_name == "pull_request":
        return classify_pull_request(payload)
    if event_name == "issue_comment":
        return classify_issue_comment(payload, trigger_phrase)
    return ReviewTrigger.ignore()
