"""Schemas for the GitHub 'pull_request' and 'issue_comment' webhook payloads.

Only the fields the reviewer reads are declared; everything else in the
payload is ignored. Missing optional fields fall back to empty values.
"""

from pydantic import BaseModel, Field


class User(BaseModel):
    login: str | None = None


class PullRequest(BaseModel):
    """pull_request object of a pull_request webhook."""

    number: int
    title: str | None = None
    user: User | None = None


class PullRequestEvent(BaseModel):
    """pull_request webhook (opened, synchronize, closed, ...)."""

    action: str = ""
    pull_request: PullRequest


class IssueCommentBody(BaseModel):
    body: str | None = None


class Issue(BaseModel):
    """Issue (or PR, which GitHub models as an issue) the comment belongs to."""

    number: int
    title: str | None = None
    user: User | None = None


class IssueCommentEvent(BaseModel):
    """issue_comment webhook (created, edited, deleted)."""

    action: str = ""
    comment: IssueCommentBody = Field(default_factory=IssueCommentBody)
    issue: Issue
