"""Fetch raw file content at the PR's commit and bound it for the model."""

import logging

import requests

from prreview.models import ChangedFile

LOG = logging.getLogger("prreview.review.fetcher")

DEFAULT_RAW_URL = "https://raw.githubusercontent.com"


def raw_content_url(owner: str, repo: str, ref: str, filename: str, raw_url: str = DEFAULT_RAW_URL) -> str:
    """Build the raw-content URL: {raw_url}/{owner}/{repo}/{ref}/{filename}."""
    return f"{raw_url.rstrip('/')}/{owner}/{repo}/{ref}/{filename}"


def fetch_content(
    http: requests.Session,
    owner: str,
    repo: str,
    changed_file: ChangedFile,
    raw_url: str = DEFAULT_RAW_URL,
    timeout: int = 30,
) -> str | None:
    """Download a changed file as text.

    The body is decoded with the response charset (UTF-8 from raw.githubusercontent.com);
    bytes that do not decode become U+FFFD and the file is still reviewed.
    Returns None (file is skipped) when the file has no commit ref or the
    request fails. Never retried.
    """
    ref = changed_file.ref
    if ref is None:
        LOG.error("No commit ref in contents_url for %s", changed_file.filename)
        return None

    url = raw_content_url(owner, repo, ref, changed_file.filename, raw_url)
    LOG.debug("Fetching url: %s", url)
    try:
        resp = http.get(url, timeout=timeout)
        resp.raise_for_status()
        # Decoded with the response charset; invalid bytes become U+FFFD
        return resp.text
    except requests.RequestException as e:
        LOG.error("Error fetching file %s: %s", changed_file.filename, e)
        return None


def truncate(text: str, max_chars: int) -> str:
    """Longest prefix of text with at most max_chars code points."""
    if max_chars <= 0:
        return ""
    return text[:max_chars]
