"""Tests for choosing which changed files get reviewed."""

from unittest.mock import Mock

from prreview.adapters.base import GitPlatformError
from prreview.models import ChangedFile
from prreview.review.file_selector import filter_files, is_reviewable, select_files

SHA = "a" * 40


def _file(name: str, contents_url: str | None = None) -> ChangedFile:
    if contents_url is None:
        contents_url = f"https://api.github.com/repos/o/r/contents/{name}?ref={SHA}"
    return ChangedFile(filename=name, blob_url=f"https://github.com/o/r/blob/{SHA}/{name}", contents_url=contents_url)


def test_excluded_suffixes() -> None:
    """Markdown, JS, CSS and HTML files are not reviewed."""
    for name in ("README.md", "app.js", "style.css", "index.html", "page.htm"):
        assert not is_reviewable(_file(name)), name
    for name in ("main.py", "lib.rs", "x.go", "app.jsx", "notes.markdown"):
        assert is_reviewable(_file(name)), name


def test_short_contents_url_excluded() -> None:
    """contents_url too short for a 40-char hash is skipped."""
    assert not is_reviewable(_file("main.py", contents_url="short"))
    assert is_reviewable(_file("main.py", contents_url=SHA))


def test_custom_suffixes() -> None:
    """Configured suffixes replace the defaults."""
    assert is_reviewable(_file("README.md"), [".lock"])
    assert not is_reviewable(_file("poetry.lock"), [".lock"])


def test_filter_preserves_order() -> None:
    """Kept files come out in API order."""
    files = [_file("b.py"), _file("a.md"), _file("a.py"), _file("z.css"), _file("c.rs")]
    assert [f.filename for f in filter_files(files)] == ["b.py", "a.py", "c.rs"]


def test_filter_idempotent() -> None:
    """Filtering an already filtered list changes nothing."""
    files = [_file("a.py"), _file("readme.md"), _file("b.py", contents_url="x")]
    once = list(filter_files(files))
    twice = list(filter_files(once))
    assert once == twice
    assert list(filter_files(files)) == once


def test_select_files_lazy() -> None:
    """select_files does not call the API until iterated."""
    adapter = Mock()
    adapter.list_pr_files.return_value = [_file("a.py"), _file("readme.md")]

    selected = select_files(adapter, "o/r", 42)
    adapter.list_pr_files.assert_not_called()

    assert [f.filename for f in selected] == ["a.py"]
    adapter.list_pr_files.assert_called_once_with("o/r", 42)
    assert list(selected) == []


def test_select_files_listing_failure_yields_nothing() -> None:
    """Listing failure is logged and produces no files."""
    adapter = Mock()
    adapter.list_pr_files.side_effect = GitPlatformError("500: boom")
    assert list(select_files(adapter, "o/r", 42)) == []
