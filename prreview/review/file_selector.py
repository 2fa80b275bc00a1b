"""Pick the changed files of a PR that are worth sending to the model."""

import logging
from typing import Iterable, Iterator, Sequence

from prreview.adapters.base import GitPlatformAdapter, GitPlatformError
from prreview.config import DEFAULT_EXCLUDED_SUFFIXES
from prreview.models import ChangedFile

LOG = logging.getLogger("prreview.review.file_selector")


def is_reviewable(changed_file: ChangedFile, excluded_suffixes: Sequence[str] = DEFAULT_EXCLUDED_SUFFIXES) -> bool:
    """False for excluded suffixes and for contents_url without a commit ref."""
    if changed_file.filename.endswith(tuple(excluded_suffixes)):
        return False
    return changed_file.ref is not None


def filter_files(
    files: Iterable[ChangedFile],
    excluded_suffixes: Sequence[str] = DEFAULT_EXCLUDED_SUFFIXES,
) -> Iterator[ChangedFile]:
    """Yield reviewable files in their original order."""
    for changed_file in files:
        if is_reviewable(changed_file, excluded_suffixes):
            yield changed_file
        else:
            LOG.debug("Skipping file %s", changed_file.filename)


def select_files(
    adapter: GitPlatformAdapter,
    repo: str,
    pull_number: int,
    excluded_suffixes: Sequence[str] = DEFAULT_EXCLUDED_SUFFIXES,
) -> Iterator[ChangedFile]:
    """Yield the PR's reviewable files; the file list is fetched on first
    iteration.

    A failed listing is logged and yields nothing.
    """
    try:
        files = adapter.list_pr_files(repo, pull_number)
    except GitPlatformError as e:
        LOG.error("Cannot get file list for PR #%s: %s", pull_number, e)
        return
    yield from filter_files(files, excluded_suffixes)
