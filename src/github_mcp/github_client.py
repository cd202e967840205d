"""GitHub REST client for fetching repository and pull request data."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from github_mcp import SERVER_NAME, __version__
from github_mcp.config import ServerConfig
from github_mcp.pr_url import PullRequestRef

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/vnd.github+json"
DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
API_VERSION = "2022-11-28"

# GitHub caps per_page at 100 on every list endpoint.
MAX_PER_PAGE = 100


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"GitHub API error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


@dataclass
class FileChange:
    """One file touched by a pull request."""

    filename: str
    status: str
    additions: int = 0
    deletions: int = 0
    patch: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "FileChange":
        """Build from a record of the "list pull request files" endpoint."""
        return cls(
            filename=data.get("filename", ""),
            status=data.get("status", ""),
            additions=data.get("additions", 0),
            deletions=data.get("deletions", 0),
            patch=data.get("patch"),
        )


class GitHubClient:
    """Authenticated, read-only client for the GitHub REST API.

    Each instance owns one ``httpx.AsyncClient``; close it with ``aclose()``
    or use the client as an async context manager.
    """

    def __init__(
        self,
        config: ServerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize with server config and an optional transport for tests."""
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.api_base_url,
            headers={
                "Authorization": f"Bearer {config.github_token}",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": f"{SERVER_NAME}/{__version__}",
            },
            timeout=config.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def _get(
        self, url: str, accept: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        logger.debug("GET %s params=%s", url, params)
        response = await self._http.get(url, params=params, headers={"Accept": accept})
        if not response.is_success:
            raise GitHubAPIError(response.status_code, response.text)
        return response

    async def fetch_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a JSON resource.

        Args:
            url: Absolute URL or path relative to the configured API base.
            params: Optional query parameters.

        Returns:
            The decoded JSON body.

        Raises:
            GitHubAPIError: If GitHub answers with a non-2xx status.
        """
        response = await self._get(url, JSON_MEDIA_TYPE, params)
        return response.json()

    async def fetch_text(
        self, url: str, accept: str, params: dict[str, Any] | None = None
    ) -> str:
        """GET a resource as raw text, negotiating the media type via ``accept``."""
        response = await self._get(url, accept, params)
        return response.text

    async def list_repos(self, visibility: str = "all", per_page: int = 100) -> list[dict]:
        """List one page of repositories of the authenticated user."""
        return await self.fetch_json(
            "/user/repos", params={"per_page": per_page, "visibility": visibility}
        )

    async def list_pull_requests(
        self, owner: str, repo: str, state: str = "open", per_page: int = 30
    ) -> list[dict]:
        """List one page of pull requests of a repository."""
        return await self.fetch_json(
            f"/repos/{owner}/{repo}/pulls",
            params={"state": state, "per_page": per_page},
        )

    async def get_pull_request(self, ref: PullRequestRef) -> dict[str, Any]:
        """Fetch pull request metadata."""
        return await self.fetch_json(ref.api_path)

    async def get_pull_request_diff(self, ref: PullRequestRef) -> str:
        """Fetch the unified diff of a pull request."""
        return await self.fetch_text(ref.api_path, DIFF_MEDIA_TYPE)

    async def list_pull_request_files(
        self,
        ref: PullRequestRef,
        max_files: int,
        expected_total: int | None = None,
    ) -> list[FileChange]:
        """Collect up to ``max_files`` changed files, one page at a time.

        Pages are requested sequentially with a fixed size of
        ``min(100, max_files)``. The walk stops on an empty page, on a page
        shorter than requested (the last one), or once the cap is reached.

        Args:
            ref: Pull request to list files for.
            max_files: Hard cap on the number of records returned.
            expected_total: Number of files the pull request reports
                (``changed_files``). When given, the walk never asks for
                more than that many records.

        Returns:
            At most ``max_files`` file changes in upstream order.
        """
        limit = max_files
        if expected_total is not None:
            limit = min(limit, expected_total)
        if limit <= 0:
            return []

        # Keeping per_page fixed keeps GitHub's page offsets aligned.
        per_page = min(MAX_PER_PAGE, max_files)
        records: list[dict] = []
        page = 0

        while len(records) < limit:
            page += 1
            batch = await self.fetch_json(
                f"{ref.api_path}/files", params={"per_page": per_page, "page": page}
            )
            if not isinstance(batch, list) or not batch:
                break

            records.extend(batch)
            if len(batch) < per_page:
                break

        logger.info(
            "Collected %d files for %s/%s#%s in %d page(s)",
            min(len(records), limit), ref.owner, ref.repo, ref.number, page,
        )
        return [FileChange.from_api(r) for r in records[:limit]]
