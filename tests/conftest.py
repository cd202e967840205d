"""Shared test fixtures and configuration."""

import json
from collections.abc import Callable

import httpx
import pytest

from github_mcp.config import ServerConfig
from github_mcp.github_client import GitHubClient

PR_URL = "https://github.com/acme/widgets/pull/42"
PR_PATH = "/repos/acme/widgets/pulls/42"


class FakeGitHub:
    """In-memory GitHub API answering through an httpx MockTransport."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add_json(self, path: str, payload, status_code: int = 200) -> None:
        self.routes[(path, "json")] = lambda request: httpx.Response(
            status_code, json=payload
        )

    def add_text(self, path: str, text: str, status_code: int = 200) -> None:
        self.routes[(path, "diff")] = lambda request: httpx.Response(status_code, text=text)

    def add_files(self, path: str, files: list[dict]) -> None:
        """Serve ``files`` page by page, honoring per_page and page."""

        def handler(request: httpx.Request) -> httpx.Response:
            per_page = int(request.url.params.get("per_page", 30))
            page = int(request.url.params.get("page", 1))
            start = (page - 1) * per_page
            return httpx.Response(200, json=files[start:start + per_page])

        self.routes[(path, "json")] = handler

    def page_requests(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        kind = "diff" if "diff" in request.headers.get("accept", "") else "json"
        handler = self.routes.get((request.url.path, kind))
        if handler is None:
            return httpx.Response(404, text=json.dumps({"message": "Not Found"}))
        return handler(request)


def make_files(count: int) -> list[dict]:
    return [
        {
            "filename": f"src/file_{i}.py",
            "status": "modified",
            "additions": i,
            "deletions": 1,
            "patch": f"@@ -1 +1 @@\n-old {i}\n+new {i}",
        }
        for i in range(count)
    ]


@pytest.fixture
def config():
    """Config with a fake token."""
    return ServerConfig(github_token="ghp_test123")


@pytest.fixture
def fake_github():
    """Empty fake upstream."""
    return FakeGitHub()


@pytest.fixture
def client(config, fake_github):
    """GitHubClient wired to the fake upstream."""
    return GitHubClient(config, transport=httpx.MockTransport(fake_github))


@pytest.fixture
def pr_metadata():
    """Pull request metadata for acme/widgets#42."""
    return {
        "title": "Fix bug",
        "user": {"login": "alice"},
        "state": "open",
        "draft": False,
        "merged": False,
        "base": {"ref": "main"},
        "head": {"ref": "fix"},
        "commits": 3,
        "changed_files": 2,
        "additions": 10,
        "deletions": 4,
        "body": "Fixes #1",
    }


@pytest.fixture
def pr_files():
    """Two changed files of acme/widgets#42."""
    return [
        {
            "filename": "src/app.py",
            "status": "modified",
            "additions": 8,
            "deletions": 3,
            "patch": "@@ -1,2 +1,3 @@\n-a\n+b\n+c",
        },
        {
            "filename": "README.md",
            "status": "added",
            "additions": 2,
            "deletions": 1,
        },
    ]
