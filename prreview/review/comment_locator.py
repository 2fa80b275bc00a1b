"""Find or create the single tracked review comment on a PR."""

import logging
from typing import Iterable

from prreview.adapters.base import GitPlatformAdapter, GitPlatformError
from prreview.models import Comment, ReviewTrigger, TriggerKind
from prreview.review.messages import BOT_MARKERS, GREETING

LOG = logging.getLogger("prreview.review.comment_locator")


def find_tracked_comment(comments: Iterable[Comment], markers: tuple[str, ...] = BOT_MARKERS) -> Comment | None:
    """Return the first comment whose body starts with a bot marker."""
    for comment in comments:
        if comment.starts_with_any(markers):
            return comment
    return None


def locate_comment(adapter: GitPlatformAdapter, repo: str, trigger: ReviewTrigger) -> int | None:
    """Return the id of the comment this run will write its review into.

    UpdateReview reuses the first existing bot comment; NewReview posts a
    fresh greeting comment. None means there is nothing to write to (no
    prior review, API failure, or an ignored trigger) and the run ends.
    """
    pr_number = trigger.pull_number

    if trigger.kind is TriggerKind.UPDATE_REVIEW:
        try:
            comments = adapter.list_comments(repo, pr_number)
        except GitPlatformError as e:
            LOG.error("Error getting comments for PR #%s: %s", pr_number, e)
            return None
        tracked = find_tracked_comment(comments)
        if tracked is None:
            LOG.info("PR #%s: no review comment to update", pr_number)
            return None
        return tracked.id

    if trigger.kind is TriggerKind.NEW_REVIEW:
        try:
            comment = adapter.create_comment(repo, pr_number, GREETING)
        except GitPlatformError as e:
            LOG.error("Error posting comment on PR #%s: %s", pr_number, e)
            return None
        return comment.id

    return None
