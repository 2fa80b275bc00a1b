"""GitHub API adapter."""

from typing import Any, Dict, List

import requests
from pydantic import ValidationError

from prreview.adapters.base import GitPlatformAdapter, GitPlatformError
from prreview.models import ChangedFile, Comment

PER_PAGE = 100


def _comment_from_api(data: Any) -> Comment:
    if not isinstance(data, dict) or "id" not in data:
        raise GitPlatformError(f"unexpected comment payload: {str(data)[:200]}")
    user = data.get("user") or {}
    try:
        return Comment(
            id=data["id"],
            body=data.get("body") or "",
            author=user.get("login") or "",
        )
    except ValidationError as e:
        raise GitPlatformError(f"unexpected comment payload: {e}") from e


def _changed_file_from_api(data: Any) -> ChangedFile:
    if not isinstance(data, dict):
        raise GitPlatformError(f"unexpected file payload: {str(data)[:200]}")
    return ChangedFile(
        filename=data.get("filename") or "",
        blob_url=data.get("blob_url") or "",
        contents_url=data.get("contents_url") or "",
    )


def _json(resp: requests.Response) -> Any:
    """Decoded body of a 2xx response; a non-JSON body is a GitPlatformError."""
    try:
        return resp.json()
    except ValueError as e:
        raise GitPlatformError(f"{resp.status_code}: response is not JSON: {(resp.text or '')[:200]}") from e


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation of GitPlatformAdapter."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {path} failed: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except Exception:
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def _get_paginated(self, path: str) -> List[Dict[str, Any]]:
        """GET every page of a list endpoint (stops on a short page)."""
        items: List[Dict[str, Any]] = []
        page = 1
        while True:
            resp = self._request("GET", path, params={"per_page": PER_PAGE, "page": page})
            data = _json(resp) or []
            if not isinstance(data, list):
                raise GitPlatformError(f"GET {path}: expected a JSON list, got {type(data).__name__}")
            items.extend(data)
            if len(data) < PER_PAGE:
                return items
            page += 1

    def list_comments(self, repo: str, issue_number: int) -> List[Comment]:
        data = self._get_paginated(f"/repos/{repo}/issues/{issue_number}/comments")
        return [_comment_from_api(d) for d in data]

    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        resp = self._request("POST", f"/repos/{repo}/issues/{issue_number}/comments", json={"body": body})
        return _comment_from_api(_json(resp))

    def update_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        resp = self._request("PATCH", f"/repos/{repo}/issues/comments/{comment_id}", json={"body": body})
        return _comment_from_api(_json(resp))

    def list_pr_files(self, repo: str, pr_number: int) -> List[ChangedFile]:
        data = self._get_paginated(f"/repos/{repo}/pulls/{pr_number}/files")
        return [_changed_file_from_api(d) for d in data]
