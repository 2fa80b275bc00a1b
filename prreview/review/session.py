"""
Run one review for a webhook event: classify, find the comment, review
files one by one, publish.

Files are reviewed sequentially in the order GitHub lists them, so the
published comment has a stable file order. Per-file failures never stop
the run: a file that cannot be fetched is left out, a file the model
fails on gets "N/A". Failing to create or find the comment ends the run
before any file is fetched.
"""

import logging
from typing import Any, Dict, Iterable, List

import requests
from pydantic import BaseModel, Field

from prreview.adapters.base import GitPlatformAdapter
from prreview.adapters.github import GitHubAdapter
from prreview.config import AppConfig
from prreview.llm import ChatOptions, LLMClient
from prreview.models import ChangedFile, FileReview, ReviewSession, ReviewTrigger
from prreview.review.assembler import assemble_response, publish_comment
from prreview.review.classifier import classify_event
from prreview.review.comment_locator import locate_comment
from prreview.review.fetcher import fetch_content, truncate
from prreview.review.file_selector import select_files
from prreview.review.requester import build_chat_options, request_review

LOG = logging.getLogger("prreview.review.session")


class ReviewResult(BaseModel):
    """Outcome of run_review, for callers and logs."""

    trigger: ReviewTrigger
    comment_id: int | None = None
    reviewed_files: List[str] = Field(default_factory=list)
    published: bool = False


def review_file(
    config: AppConfig,
    session: ReviewSession,
    changed_file: ChangedFile,
    llm: LLMClient,
    http: requests.Session,
    options: ChatOptions,
) -> FileReview | None:
    """Fetch, truncate and review one file. None if the file was skipped."""
    content = fetch_content(
        http,
        session.owner,
        session.repo,
        changed_file,
        raw_url=config.github.raw_url,
        timeout=config.github.timeout,
    )
    if content is None:
        return None
    content = truncate(content, config.llm.char_budget)
    outcome = request_review(llm, session.chat_id, changed_file.filename, content, options)
    return FileReview(filename=changed_file.filename, blob_url=changed_file.blob_url, outcome=outcome)


def review_files(
    config: AppConfig,
    session: ReviewSession,
    files: Iterable[ChangedFile],
    llm: LLMClient,
    http: requests.Session,
) -> List[FileReview]:
    """Review files in order; skipped files leave no entry."""
    options = build_chat_options(config.llm, session.title)
    reviews: List[FileReview] = []
    for changed_file in files:
        review = review_file(config, session, changed_file, llm, http, options)
        if review is not None:
            reviews.append(review)
    return reviews


def run_review(
    config: AppConfig,
    event_name: str,
    payload: Dict[str, Any],
    adapter: GitPlatformAdapter | None = None,
    llm: LLMClient | None = None,
    http: requests.Session | None = None,
) -> ReviewResult:
    """Handle one webhook event end to end.

    Clients are built from config unless passed in. Ignored events make no
    API calls at all.
    """
    trigger = classify_event(event_name, payload, config.bot.trigger_phrase)
    if trigger.is_ignored:
        return ReviewResult(trigger=trigger)

    session = ReviewSession(
        owner=config.bot.owner,
        repo=config.bot.repo,
        pull_number=trigger.pull_number,
        title=trigger.title,
    )
    LOG.info("%s: %s (%s)", session.chat_id, trigger.kind.value, session.repository)

    if adapter is None:
        adapter = GitHubAdapter(
            token=config.github_token_resolved,
            api_url=config.github.api_url,
            timeout=config.github.timeout,
        )
    comment_id = locate_comment(adapter, session.repository, trigger)
    if comment_id is None:
        return ReviewResult(trigger=trigger)

    if llm is None:
        llm = LLMClient(config.llm.api_endpoint, config.llm_api_key_resolved, config.llm.timeout)
    if http is None:
        http = requests.Session()

    files = select_files(adapter, session.repository, session.pull_number, config.bot.excluded_suffixes)
    reviews = review_files(config, session, files, llm, http)

    published = publish_comment(adapter, session.repository, comment_id, assemble_response(reviews))
    if published:
        LOG.info("%s: published review of %s file(s) to comment %s", session.chat_id, len(reviews), comment_id)
    return ReviewResult(
        trigger=trigger,
        comment_id=comment_id,
        reviewed_files=[r.filename for r in reviews],
        published=published,
    )
