"""MCP server and tool definitions."""
