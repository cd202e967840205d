"""MCP server factory for the GitHub tools."""

from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from github_mcp import SERVER_NAME, __version__
from github_mcp.github_client import GitHubClient
from github_mcp.mcp import tools


def create_server(client: GitHubClient) -> Server:
    """Build a server with its own tool registry bound to ``client``.

    A new server is built for every HTTP request; nothing is shared between them.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return tools.tool_definitions()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        return await tools.call_tool(client, name, arguments)

    return server
