"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from prreview.models import ChangedFile, Comment


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Abstract interface for the repository host used by the reviewer."""

    @abstractmethod
    def list_comments(self, repo: str, issue_number: int) -> List[Comment]:
        """List comments on an issue or PR in API order."""
        ...

    @abstractmethod
    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        """Post a comment on an issue or PR."""
        ...

    @abstractmethod
    def update_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        """Replace the body of an existing comment."""
        ...

    @abstractmethod
    def list_pr_files(self, repo: str, pr_number: int) -> List[ChangedFile]:
        """List files changed in a PR in API order."""
        ...
