"""Stateless MCP server exposing GitHub pull request tools over HTTP."""

__version__ = "1.1.0"

SERVER_NAME = "github-mcp"
