from .client import MCPClient
from .toolset import McpToolset, open_toolset

__all__ = ["MCPClient", "McpToolset", "open_toolset"]
