"""MCP tools exposing GitHub pull request data."""

import logging
from typing import Any

import jsonschema
from mcp.types import TextContent, Tool

from github_mcp.github_client import GitHubClient
from github_mcp.output.report import (
    format_diff,
    format_global_diff,
    format_pull_request_line,
    format_repo_line,
    format_summary,
)
from github_mcp.pr_url import parse_pr_url

logger = logging.getLogger(__name__)

NO_PULL_REQUESTS = "(no PRs)"


class UnknownToolError(ValueError):
    """Raised when a call names a tool this server does not expose."""


class ToolArgumentError(ValueError):
    """Raised when tool arguments do not match the tool's input schema."""


def _per_page(default: int) -> dict[str, Any]:
    return {
        "type": "integer",
        "minimum": 1,
        "maximum": 100,
        "default": default,
        "description": f"Results per page, 1-100 (default {default})",
    }


_PR_URL = {
    "type": "string",
    "format": "uri",
    "description": "Pull request URL, e.g. https://github.com/OWNER/REPO/pull/123",
}

_MAX_DIFF_CHARS = {
    "type": "integer",
    "minimum": 0,
    "maximum": 200000,
    "default": 40000,
    "description": "Truncate the diff to this many characters; 0 returns it whole",
}


def tool_definitions() -> list[Tool]:
    """Return the tools exposed by the server."""
    return [
        Tool(
            name="github_list_repos",
            description="List repositories accessible to the authenticated user",
            inputSchema={
                "type": "object",
                "properties": {
                    "visibility": {
                        "type": "string",
                        "enum": ["all", "public", "private"],
                        "default": "all",
                        "description": "Repository visibility filter",
                    },
                    "per_page": _per_page(100),
                },
                "required": [],
                "additionalProperties": False,
            },
        ),
        Tool(
            name="github_list_pull_requests",
            description="List pull requests of a repository (by owner/repo)",
            inputSchema={
                "type": "object",
                "properties": {
                    "owner": {"type": "string", "description": "Repository owner"},
                    "repo": {"type": "string", "description": "Repository name"},
                    "state": {
                        "type": "string",
                        "enum": ["open", "closed", "all"],
                        "default": "open",
                        "description": "Pull request state filter",
                    },
                    "per_page": _per_page(30),
                },
                "required": ["owner", "repo"],
                "additionalProperties": False,
            },
        ),
        Tool(
            name="github_get_pull_request_diff",
            description=(
                "Given a pull request URL, return its full unified diff (truncatable)"
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "pr_url": _PR_URL,
                    "max_diff_chars": _MAX_DIFF_CHARS,
                },
                "required": ["pr_url"],
                "additionalProperties": False,
            },
        ),
        Tool(
            name="github_summarize_pull_request",
            description=(
                "Given a pull request URL, return material for a structured summary "
                "(title, goal, changes, files, risks). Can include patches and/or the diff."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "pr_url": _PR_URL,
                    "include_patches": {
                        "type": "boolean",
                        "default": True,
                        "description": "Show a patch excerpt under each file",
                    },
                    "max_files": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 300,
                        "default": 50,
                        "description": "Maximum number of changed files to list",
                    },
                    "max_patch_chars": {
                        "type": "integer",
                        "minimum": 0,
                        "maximum": 4000,
                        "default": 2000,
                        "description": "Truncate each patch excerpt to this many characters",
                    },
                    "include_diff": {
                        "type": "boolean",
                        "default": False,
                        "description": "Append the full unified diff",
                    },
                    "max_diff_chars": _MAX_DIFF_CHARS,
                },
                "required": ["pr_url"],
                "additionalProperties": False,
            },
        ),
    ]


def validate_arguments(tool: Tool, arguments: dict[str, Any]) -> None:
    """Check arguments against the tool's input schema.

    Raises:
        ToolArgumentError: If the arguments do not match.
    """
    try:
        jsonschema.validate(instance=arguments, schema=tool.inputSchema)
    except jsonschema.ValidationError as e:
        raise ToolArgumentError(f"Invalid arguments for {tool.name}: {e.message}") from e


def _coerce_integers(tool: Tool, arguments: dict[str, Any]) -> dict[str, Any]:
    """Turn integral floats such as 10.0, which the schema accepts, into ints."""
    properties = tool.inputSchema.get("properties", {})
    coerced = dict(arguments)
    for key, value in arguments.items():
        if properties.get(key, {}).get("type") == "integer" and isinstance(value, float):
            coerced[key] = int(value)
    return coerced


async def call_tool(
    client: GitHubClient, name: str, arguments: dict[str, Any] | None
) -> list[TextContent]:
    """Validate arguments and run the named tool."""
    tools = {t.name: t for t in tool_definitions()}
    if name not in tools:
        raise UnknownToolError(f"Unknown tool: {name}")

    arguments = arguments or {}
    validate_arguments(tools[name], arguments)
    arguments = _coerce_integers(tools[name], arguments)
    logger.info("Calling tool %s", name)

    if name == "github_list_repos":
        text = await _list_repos(client, arguments)
    elif name == "github_list_pull_requests":
        text = await _list_pull_requests(client, arguments)
    elif name == "github_get_pull_request_diff":
        text = await _get_pull_request_diff(client, arguments)
    else:
        text = await _summarize_pull_request(client, arguments)

    return [TextContent(type="text", text=text)]


async def _list_repos(client: GitHubClient, args: dict[str, Any]) -> str:
    repos = await client.list_repos(
        visibility=args.get("visibility", "all"),
        per_page=args.get("per_page", 100),
    )
    return "\n".join(format_repo_line(r) for r in repos)


async def _list_pull_requests(client: GitHubClient, args: dict[str, Any]) -> str:
    prs = await client.list_pull_requests(
        args["owner"],
        args["repo"],
        state=args.get("state", "open"),
        per_page=args.get("per_page", 30),
    )
    return "\n".join(format_pull_request_line(pr) for pr in prs) or NO_PULL_REQUESTS


async def _get_pull_request_diff(client: GitHubClient, args: dict[str, Any]) -> str:
    pr_url = args["pr_url"]
    ref = parse_pr_url(pr_url)
    diff = await client.get_pull_request_diff(ref)
    return format_diff(pr_url, diff, args.get("max_diff_chars", 40000))


async def _summarize_pull_request(client: GitHubClient, args: dict[str, Any]) -> str:
    """Collect metadata, files and optionally the diff of a pull request."""
    pr_url = args["pr_url"]
    include_patches = args.get("include_patches", True)
    max_files = args.get("max_files", 50)
    max_patch_chars = args.get("max_patch_chars", 2000)

    ref = parse_pr_url(pr_url)
    pr = await client.get_pull_request(ref)

    changed_files = pr.get("changed_files")
    files = await client.list_pull_request_files(
        ref,
        max_files,
        expected_total=changed_files if isinstance(changed_files, int) else None,
    )

    diff_block = ""
    if args.get("include_diff", False):
        diff = await client.get_pull_request_diff(ref)
        diff_block = format_global_diff(diff, args.get("max_diff_chars", 40000))

    return format_summary(
        pr_url,
        pr,
        files,
        max_files,
        include_patches=include_patches,
        max_patch_chars=max_patch_chars,
        diff_block=diff_block,
    )
