"""Data models for review triggers, comments and changed files (Pydantic)."""

from prreview.models.changed_file import ChangedFile, FileReview
from prreview.models.comment import Comment
from prreview.models.session import ReviewSession
from prreview.models.trigger import ReviewTrigger, TriggerKind

__all__ = ["ChangedFile", "Comment", "FileReview", "ReviewSession", "ReviewTrigger", "TriggerKind"]
