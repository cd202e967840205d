"""HTTP application: stateless MCP endpoint and liveness probe."""

import logging

import anyio
import httpx
from anyio.abc import TaskStatus
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from mcp.server import Server
from mcp.server.streamable_http import StreamableHTTPServerTransport
from starlette.routing import Route
from starlette.types import Message, Receive, Scope, Send

from github_mcp import SERVER_NAME, __version__
from github_mcp.config import ServerConfig
from github_mcp.github_client import GitHubClient
from github_mcp.mcp.server import create_server

logger = logging.getLogger(__name__)

HEALTH_TEXT = f"OK - {SERVER_NAME}"


class MCPEndpoint:
    """ASGI app serving one MCP exchange per HTTP request.

    Every request gets its own GitHub client, server and transport, all of
    which are released once the response is sent.
    """

    def __init__(
        self,
        config: ServerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.upstream_transport = transport

    async def _run_server(
        self,
        server: Server,
        transport: StreamableHTTPServerTransport,
        *,
        task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED,
    ) -> None:
        async with transport.connect() as (read_stream, write_stream):
            task_status.started()
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
                stateless=True,
            )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response_started = False

        async def tracked_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        client = GitHubClient(self.config, transport=self.upstream_transport)
        try:
            server = create_server(client)
            transport = StreamableHTTPServerTransport(
                mcp_session_id=None,
                is_json_response_enabled=True,
            )
            try:
                async with anyio.create_task_group() as tg:
                    await tg.start(self._run_server, server, transport)
                    try:
                        await transport.handle_request(scope, receive, tracked_send)
                    finally:
                        tg.cancel_scope.cancel()
            finally:
                await transport.terminate()
        except Exception:
            logger.exception("Error handling MCP request")
            if not response_started:
                response = PlainTextResponse("MCP error", status_code=500)
                await response(scope, receive, send)
        finally:
            await client.aclose()


def create_app(
    config: ServerConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the HTTP app.

    Args:
        config: Server configuration holding the GitHub token.
        transport: Optional httpx transport used for upstream calls (tests).
    """
    app = FastAPI(
        title=SERVER_NAME,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Any method: POST carries requests, GET and DELETE are answered by the transport.
    app.router.routes.insert(0, Route("/mcp", endpoint=MCPEndpoint(config, transport)))

    @app.get("/", response_class=PlainTextResponse)
    async def health() -> str:
        return HEALTH_TEXT

    return app
