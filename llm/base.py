from abc import ABC, abstractmethod

from mcp_integration.toolset import McpToolset


class BaseLLMClient(ABC):
    @abstractmethod
    async def complete(self, messages: list[dict], toolset: McpToolset | None = None) -> list[str | None]:
        """
        Run one chat completion over ``messages`` with the tools in ``toolset``
        available, and return the text of every result in order.
        """
        raise NotImplementedError
