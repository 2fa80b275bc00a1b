"""Build the aggregated review comment and write it back to the PR."""

import logging
from functools import reduce
from typing import Iterable

from prreview.adapters.base import GitPlatformAdapter, GitPlatformError
from prreview.models import FileReview
from prreview.review.messages import PREAMBLE

LOG = logging.getLogger("prreview.review.assembler")


def format_file_section(review: FileReview) -> str:
    """## [filename](blob_url) heading, then the potential issues text."""
    return f"## [{review.filename}]({review.blob_url})\n\n#### Potential issues\n\n{review.outcome}\n\n"


def assemble_response(reviews: Iterable[FileReview]) -> str:
    """Preamble followed by one section per file, in the given order."""
    return reduce(lambda body, review: body + format_file_section(review), reviews, PREAMBLE)


def publish_comment(adapter: GitPlatformAdapter, repo: str, comment_id: int | None, body: str) -> bool:
    """Overwrite the tracked comment with body.

    Skipped when comment_id is None. Returns True if the comment was
    updated; failures are logged and not retried.
    """
    if comment_id is None:
        return False
    try:
        adapter.update_comment(repo, comment_id, body)
    except GitPlatformError as e:
        LOG.error("Error posting response to comment %s: %s", comment_id, e)
        return False
    return True
