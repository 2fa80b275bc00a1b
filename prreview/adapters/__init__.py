"""Git platform adapters (base and implementations)."""

from prreview.adapters.base import GitPlatformAdapter, GitPlatformError
from prreview.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
