from contextlib import AsyncExitStack, asynccontextmanager
import json
import logging
import ssl

from .client import DEFAULT_CONNECT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, MCPClient

logger = logging.getLogger(__name__)


def tool_result_text(tool_result) -> str:
    """Flatten an MCP ``CallToolResult`` into the text handed back to the model."""
    if not hasattr(tool_result, "content"):
        return str(tool_result)

    text = ""
    for content in tool_result.content:
        if hasattr(content, "text"):
            text += content.text
        elif isinstance(content, dict) and "text" in content:
            text += content["text"]
        else:
            text += str(content)
    return text


class McpToolset:
    """Tools discovered on a set of connected MCP clients, in OpenAI function format."""

    def __init__(self):
        self.tools: list[dict] = []
        self._tool_to_client: dict[str, MCPClient] = {}

    async def add_client(self, client: MCPClient):
        for tool in await client.list_tools():
            if tool.name in self._tool_to_client:
                logger.warning(
                    f"Tool '{tool.name}' from {client.sse_url} shadows the one from "
                    f"{self._tool_to_client[tool.name].sse_url}"
                )
                self.tools = [spec for spec in self.tools if spec["function"]["name"] != tool.name]
            self.tools.append({
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description or "",
                    "parameters": tool.inputSchema,
                },
            })
            self._tool_to_client[tool.name] = client

    @property
    def tool_names(self) -> list[str]:
        return [spec["function"]["name"] for spec in self.tools]

    def __len__(self):
        return len(self.tools)

    async def call(self, name: str, arguments: dict) -> str:
        """
        Run a tool and return its text output.

        Unknown tools and tool-side failures are reported to the model as a
        JSON error payload instead of aborting the completion.
        """
        client = self._tool_to_client.get(name)
        if client is None:
            return json.dumps({"error": f"Tool {name} not found"})
        try:
            result = await client.call_tool(name, arguments)
        except Exception as e:
            logger.error(f"Tool execution failed: {e}")
            return json.dumps({"error": str(e)})
        return tool_result_text(result)


@asynccontextmanager
async def open_toolset(
    urls: list[str] | tuple[str, ...],
    ssl_context: ssl.SSLContext | None = None,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    client_factory=MCPClient,
):
    """
    Connect to every MCP endpoint for the duration of one request.

    Endpoints are initialized in order; if any fails the whole block fails.
    All clients opened so far are disconnected when the block exits, however
    it exits.
    """
    async with AsyncExitStack() as stack:
        toolset = McpToolset()
        for url in urls:
            client = client_factory(
                url,
                ssl_context=ssl_context,
                connect_timeout=connect_timeout,
                request_timeout=request_timeout,
            )
            await stack.enter_async_context(client)
            await toolset.add_client(client)
        logger.info(f"Opened {len(urls)} MCP clients exposing {len(toolset)} tools")
        yield toolset
