"""Parsing of GitHub pull request web URLs."""

from dataclasses import dataclass
from urllib.parse import urlsplit

GITHUB_WEB_HOST = "github.com"


class InvalidPrUrlError(ValueError):
    """Raised when a string is not a GitHub pull request URL."""

    def __init__(self, url: str):
        super().__init__(
            f"Invalid pull request URL {url!r}. "
            "Expected something like https://github.com/OWNER/REPO/pull/123"
        )
        self.url = url


@dataclass(frozen=True)
class PullRequestRef:
    """Owner, repository and number identifying a pull request."""

    owner: str
    repo: str
    number: str

    @property
    def api_path(self) -> str:
        """Path of the pull request on the REST API."""
        return f"/repos/{self.owner}/{self.repo}/pulls/{self.number}"


def parse_pr_url(url: str) -> PullRequestRef:
    """Extract owner, repo and number from ``https://github.com/O/R/pull/N``.

    The number segment is returned as-is; the API rejects bad values.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        raise InvalidPrUrlError(url) from None
    segments = [s for s in parts.path.split("/") if s]

    try:
        pull_index = segments.index("pull")
    except ValueError:
        pull_index = -1

    if (
        hostname != GITHUB_WEB_HOST
        or pull_index < 2
        or pull_index + 1 >= len(segments)
    ):
        raise InvalidPrUrlError(url)

    return PullRequestRef(
        owner=segments[0],
        repo=segments[1],
        number=segments[pull_index + 1],
    )
