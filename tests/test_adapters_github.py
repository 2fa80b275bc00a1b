"""Unit tests for GitHub adapter (mocked API)."""

from unittest.mock import Mock, patch

import pytest
import requests

from prreview.adapters.base import GitPlatformError
from prreview.adapters.github import PER_PAGE, GitHubAdapter
from prreview.models import ChangedFile, Comment

SHA = "0123456789abcdef0123456789abcdef01234567"


@pytest.fixture
def adapter() -> GitHubAdapter:
    return GitHubAdapter(token="test-token", api_url="https://api.github.com")


def _response(status_code: int = 200, data: object = None, text: str = "") -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = data
    resp.text = text
    resp.reason = ""
    return resp


def test_auth_header_set() -> None:
    """Token is sent as a bearer token."""
    adapter = GitHubAdapter(token="abc")
    assert adapter._session.headers["Authorization"] == "Bearer abc"


def test_no_auth_header_without_token() -> None:
    """Without a token no Authorization header is sent."""
    adapter = GitHubAdapter()
    assert "Authorization" not in adapter._session.headers


def test_list_comments_success(adapter: GitHubAdapter) -> None:
    """list_comments returns Comment models in API order."""
    data = [
        {"id": 1, "body": "First", "user": {"login": "alice"}},
        {"id": 2, "body": None, "user": None},
    ]
    with patch.object(adapter._session, "request", return_value=_response(data=data)) as req:
        comments = adapter.list_comments("owner/repo", 5)

    assert comments == [Comment(id=1, body="First", author="alice"), Comment(id=2, body="", author="")]
    call_args = req.call_args
    assert call_args[0][0] == "GET"
    assert call_args[0][1] == "https://api.github.com/repos/owner/repo/issues/5/comments"
    assert call_args[1]["params"] == {"per_page": PER_PAGE, "page": 1}


def test_list_comments_follows_pages(adapter: GitHubAdapter) -> None:
    """A full page triggers a request for the next one."""
    page1 = [{"id": i, "body": "x"} for i in range(PER_PAGE)]
    page2 = [{"id": 1000, "body": "last"}]
    with patch.object(
        adapter._session,
        "request",
        side_effect=[_response(data=page1), _response(data=page2)],
    ) as req:
        comments = adapter.list_comments("owner/repo", 5)

    assert len(comments) == PER_PAGE + 1
    assert comments[-1].id == 1000
    assert req.call_count == 2
    assert req.call_args_list[1][1]["params"]["page"] == 2


def test_create_comment_posts_body(adapter: GitHubAdapter) -> None:
    """create_comment POSTs the body and returns the created comment."""
    resp = _response(201, {"id": 77, "body": "Hello", "user": {"login": "bot"}})
    with patch.object(adapter._session, "request", return_value=resp) as req:
        comment = adapter.create_comment("owner/repo", 42, "Hello")

    assert comment.id == 77
    assert req.call_args[0][0] == "POST"
    assert req.call_args[0][1].endswith("/repos/owner/repo/issues/42/comments")
    assert req.call_args[1]["json"] == {"body": "Hello"}


def test_update_comment_patches_by_id(adapter: GitHubAdapter) -> None:
    """update_comment PATCHes /issues/comments/{id}."""
    resp = _response(200, {"id": 99, "body": "New body"})
    with patch.object(adapter._session, "request", return_value=resp) as req:
        comment = adapter.update_comment("owner/repo", 99, "New body")

    assert comment.body == "New body"
    assert req.call_args[0][0] == "PATCH"
    assert req.call_args[0][1].endswith("/repos/owner/repo/issues/comments/99")
    assert req.call_args[1]["json"] == {"body": "New body"}


def test_list_pr_files(adapter: GitHubAdapter) -> None:
    """list_pr_files maps filename, blob_url and contents_url."""
    data = [
        {
            "filename": "src/a.py",
            "blob_url": f"https://github.com/owner/repo/blob/{SHA}/src/a.py",
            "contents_url": f"https://api.github.com/repos/owner/repo/contents/src/a.py?ref={SHA}",
            "status": "modified",
        }
    ]
    with patch.object(adapter._session, "request", return_value=_response(data=data)) as req:
        files = adapter.list_pr_files("owner/repo", 3)

    assert files == [
        ChangedFile(
            filename="src/a.py",
            blob_url=f"https://github.com/owner/repo/blob/{SHA}/src/a.py",
            contents_url=f"https://api.github.com/repos/owner/repo/contents/src/a.py?ref={SHA}",
        )
    ]
    assert files[0].ref == SHA
    assert "/repos/owner/repo/pulls/3/files" in req.call_args[0][1]


def test_api_error_uses_message(adapter: GitHubAdapter) -> None:
    """Error responses raise GitPlatformError with the API message."""
    resp = _response(403, {"message": "API rate limit exceeded"}, text="Forbidden")
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(GitPlatformError) as exc_info:
            adapter.create_comment("owner/repo", 1, "body")
    assert "403" in str(exc_info.value)
    assert "rate limit" in str(exc_info.value).lower()


def test_api_error_non_json_body(adapter: GitHubAdapter) -> None:
    """Error responses without JSON fall back to the response text."""
    resp = _response(500, text="Internal Server Error")
    resp.json.side_effect = ValueError("no json")
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(GitPlatformError, match="Internal Server Error"):
            adapter.list_pr_files("owner/repo", 1)


def test_network_error_wrapped(adapter: GitHubAdapter) -> None:
    """requests exceptions are raised as GitPlatformError."""
    with patch.object(adapter._session, "request", side_effect=requests.ConnectionError("boom")):
        with pytest.raises(GitPlatformError, match="boom"):
            adapter.list_comments("owner/repo", 1)


def _html_response(status_code: int = 200) -> Mock:
    resp = _response(status_code, text="<html>maintenance</html>")
    resp.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>maintenance</html>", 0)
    return resp


@pytest.mark.parametrize(
    "call",
    [
        lambda a: a.list_comments("owner/repo", 5),
        lambda a: a.create_comment("owner/repo", 5, "body"),
        lambda a: a.update_comment("owner/repo", 99, "body"),
        lambda a: a.list_pr_files("owner/repo", 5),
    ],
)
def test_non_json_success_body_wrapped(adapter: GitHubAdapter, call) -> None:
    """A 200 with an HTML body raises GitPlatformError, not JSONDecodeError."""
    with patch.object(adapter._session, "request", return_value=_html_response()):
        with pytest.raises(GitPlatformError, match="maintenance"):
            call(adapter)


def test_comment_without_id_wrapped(adapter: GitHubAdapter) -> None:
    """A created comment with no id in the body raises GitPlatformError."""
    with patch.object(adapter._session, "request", return_value=_response(201, {"body": "Hello"})):
        with pytest.raises(GitPlatformError, match="unexpected comment payload"):
            adapter.create_comment("owner/repo", 1, "Hello")


def test_listed_comment_with_bad_id_wrapped(adapter: GitHubAdapter) -> None:
    """A listed comment whose id is not an integer raises GitPlatformError."""
    data = [{"id": "not-a-number", "body": "x"}]
    with patch.object(adapter._session, "request", return_value=_response(data=data)):
        with pytest.raises(GitPlatformError, match="unexpected comment payload"):
            adapter.list_comments("owner/repo", 1)


def test_list_endpoint_returning_object_wrapped(adapter: GitHubAdapter) -> None:
    """A list endpoint answering with a JSON object raises GitPlatformError."""
    resp = _response(data={"message": "Moved Permanently"})
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(GitPlatformError, match="expected a JSON list"):
            adapter.list_pr_files("owner/repo", 1)
