from mcp.client.sse import sse_client
from mcp.client.session import ClientSession
from contextlib import AsyncExitStack
from datetime import timedelta
import logging
import ssl
import time

import httpx

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 30.0
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_SSE_READ_TIMEOUT = 300.0


def tls_client_factory(ssl_context: ssl.SSLContext):
    """Build an httpx client factory for the MCP transport bound to ``ssl_context``."""
    def factory(
        headers: dict[str, str] | None = None,
        timeout: httpx.Timeout | None = None,
        auth: httpx.Auth | None = None,
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            auth=auth,
            verify=ssl_context,
            follow_redirects=True,
        )
    return factory


class MCPClient:
    """
    One connection to an MCP server over SSE.

    A client lives for a single chat request: ``connect()`` (or ``async with``)
    opens the transport and performs the initialize handshake, ``disconnect()``
    releases everything it opened.
    """
    def __init__(
        self,
        sse_url: str,
        ssl_context: ssl.SSLContext | None = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        sse_read_timeout: float = DEFAULT_SSE_READ_TIMEOUT,
    ):
        self.sse_url = sse_url
        self.ssl_context = ssl_context
        self.connect_timeout = connect_timeout
        self.request_timeout = request_timeout
        self.sse_read_timeout = sse_read_timeout
        self.session: ClientSession | None = None
        self._exit_stack: AsyncExitStack | None = None

    async def connect(self):
        """Establish connection to the MCP server."""
        self._exit_stack = AsyncExitStack()
        try:
            transport_kwargs = {}
            if self.ssl_context is not None:
                transport_kwargs["httpx_client_factory"] = tls_client_factory(self.ssl_context)

            read_stream, write_stream = await self._exit_stack.enter_async_context(
                sse_client(
                    self.sse_url,
                    timeout=self.connect_timeout,
                    sse_read_timeout=self.sse_read_timeout,
                    **transport_kwargs,
                )
            )

            self.session = await self._exit_stack.enter_async_context(
                ClientSession(
                    read_stream,
                    write_stream,
                    read_timeout_seconds=timedelta(seconds=self.request_timeout),
                )
            )

            await self.session.initialize()
            logger.info(f"Connected to MCP server at {self.sse_url}")

        except Exception as e:
            logger.error(f"Failed to connect to MCP server at {self.sse_url}: {e}")
            await self.disconnect()
            raise

    async def disconnect(self):
        """Close the connection."""
        exit_stack, self._exit_stack = self._exit_stack, None
        self.session = None
        if exit_stack:
            await exit_stack.aclose()
            logger.info(f"Disconnected from MCP server at {self.sse_url}")

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.disconnect()

    def _require_session(self) -> ClientSession:
        if self.session is None:
            raise RuntimeError(f"MCP client for {self.sse_url} is not connected")
        return self.session

    async def list_tools(self):
        """List available tools from the MCP server."""
        result = await self._require_session().list_tools()
        return result.tools

    async def call_tool(self, name: str, arguments: dict):
        """Call a specific tool on the MCP server."""
        session = self._require_session()

        start_time = time.perf_counter()
        logger.info(f"Calling MCP tool '{name}' with args: {arguments}")
        try:
            result = await session.call_tool(name, arguments)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(f"MCP tool '{name}' failed after {duration:.3f}s: {e}")
            raise

        duration = time.perf_counter() - start_time
        logger.info(f"MCP tool '{name}' executed in {duration:.3f}s")
        return result

    def __repr__(self):
        return f"MCPClient({self.sse_url!r})"
