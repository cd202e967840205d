"""Text rendering for tool results."""

from dataclasses import dataclass
from typing import Any

from github_mcp.github_client import FileChange

SUMMARY_INSTRUCTIONS = (
    "Use the following material to write a summary of the pull request. "
    "Include: goal, main changes, files touched, impact, risks, "
    "a review checklist and test suggestions."
)


@dataclass
class Truncation:
    """Result of applying a character cap to a text."""

    text: str
    original_length: int
    limit: int

    @property
    def truncated(self) -> bool:
        """Whether characters were dropped."""
        return len(self.text) < self.original_length

    @property
    def notice(self) -> str:
        """Human-readable notice, empty when nothing was dropped."""
        if not self.truncated:
            return ""
        return f"(truncated to {self.limit} chars of {self.original_length})"


def truncate(text: str, max_chars: int) -> Truncation:
    """Cut ``text`` to ``max_chars`` characters; 0 means no limit."""
    if max_chars == 0:
        return Truncation(text=text, original_length=len(text), limit=0)
    return Truncation(text=text[:max_chars], original_length=len(text), limit=max_chars)


def format_repo_line(repo: dict[str, Any]) -> str:
    visibility = "private" if repo.get("private") else "public"
    return f"{repo.get('full_name')} ({visibility})"


def format_pull_request_line(pr: dict[str, Any]) -> str:
    author = (pr.get("user") or {}).get("login", "unknown")
    return f"#{pr.get('number')} {pr.get('title')} — {author} — {pr.get('html_url')}"


def format_diff(pr_url: str, diff: str, max_chars: int) -> str:
    """Render the result of the diff tool: header, optional notice, diff."""
    result = truncate(diff, max_chars)
    header = f"PR Diff (unified) for {pr_url}\n"
    if result.truncated:
        return f"{header}{result.notice}\n\n{result.text}"
    return f"{header}\n\n{result.text}"


def format_global_diff(diff: str, max_chars: int) -> str:
    """Render the diff block appended to a pull request summary."""
    result = truncate(diff, max_chars)
    lines = ["", "", "Unified diff (global):"]
    if result.truncated:
        lines.append(result.notice)
    return "\n".join(lines) + "\n" + result.text


def format_file_line(
    change: FileChange, include_patch: bool = True, max_patch_chars: int = 2000
) -> str:
    """Render one changed file, optionally followed by an indented patch excerpt."""
    line = f"- {change.filename} (+{change.additions}/-{change.deletions}) [{change.status}]"
    if not include_patch:
        return line

    patch = (change.patch or "")[:max_patch_chars]
    if not patch:
        return line
    indented = "  " + patch.replace("\n", "\n  ")
    return f"{line}\n  patch:\n{indented}"


def _yes_no(value: Any) -> str:
    return "yes" if value else "no"


def format_summary(
    pr_url: str,
    pr: dict[str, Any],
    files: list[FileChange],
    max_files: int,
    include_patches: bool = True,
    max_patch_chars: int = 2000,
    diff_block: str = "",
) -> str:
    """Assemble the material for a pull request summary.

    Args:
        pr_url: URL the caller asked about, used when the metadata lacks one.
        pr: Pull request metadata from the API.
        files: Changed files, already capped.
        max_files: Cap used when collecting ``files``.
        include_patches: Whether to show patch excerpts under each file.
        max_patch_chars: Cap for each patch excerpt.
        diff_block: Pre-rendered global diff block, appended as-is.

    Returns:
        Instructions followed by the report text.
    """
    lines = [
        f"PR: {pr.get('html_url') or pr_url}",
        f"Title: {pr.get('title')}",
        f"Author: {(pr.get('user') or {}).get('login', 'unknown')}",
        f"State: {pr.get('state')} | Draft: {_yes_no(pr.get('draft'))} "
        f"| Merged: {_yes_no(pr.get('merged'))}",
        f"Base: {(pr.get('base') or {}).get('ref')} <- Head: {(pr.get('head') or {}).get('ref')}",
        f"Commits: {pr.get('commits')} | Files changed: {pr.get('changed_files')} "
        f"| Additions: {pr.get('additions')} | Deletions: {pr.get('deletions')}",
        "",
        "Description (body):",
        pr.get("body") or "(empty)",
        "",
        f"Changed files (up to {max_files}):",
        "\n\n".join(format_file_line(f, include_patches, max_patch_chars) for f in files),
    ]
    return f"{SUMMARY_INSTRUCTIONS}\n\n" + "\n".join(lines) + diff_block
