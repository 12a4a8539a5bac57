from .base import BaseLLMClient
from openai import AsyncOpenAI
import json
import logging
from mcp_integration.toolset import McpToolset

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOOL_ROUNDS = 5


class OpenAIClient(BaseLLMClient):
    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
        client: AsyncOpenAI | None = None,
    ):
        if client is None:
            if not api_key:
                logger.error("OPENAI_API_KEY is missing from environment variables")
                raise ValueError("OPENAI_API_KEY is not set in environment variables.")
            client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        if max_tool_rounds < 0:
            raise ValueError(f"max_tool_rounds must not be negative, got {max_tool_rounds}")

        self.model = model
        self.max_tool_rounds = max_tool_rounds
        self.client = client
        logger.info(f"Initializing OpenAIClient with model: {self.model}")

    async def complete(self, messages: list[dict], toolset: McpToolset | None = None) -> list[str | None]:
        messages = list(messages)
        tools = toolset.tools if toolset else []

        try:
            for round_number in range(self.max_tool_rounds + 1):
                # The last round goes out without tools so the model has to answer
                offer_tools = bool(tools) and round_number < self.max_tool_rounds
                logger.info(f"Sending request to OpenAI with {len(tools) if offer_tools else 0} tools")

                request = {"model": self.model, "messages": messages}
                if offer_tools:
                    request["tools"] = tools
                response = await self.client.chat.completions.create(**request)

                response_message = response.choices[0].message
                tool_calls = response_message.tool_calls
                if not tool_calls or not offer_tools:
                    break

                messages.append({
                    "role": "assistant",
                    "content": response_message.content,
                    "tool_calls": [
                        {
                            "id": tool_call.id,
                            "type": "function",
                            "function": {
                                "name": tool_call.function.name,
                                "arguments": tool_call.function.arguments,
                            },
                        }
                        for tool_call in tool_calls
                    ],
                })
                for tool_call in tool_calls:
                    messages.append({
                        "tool_call_id": tool_call.id,
                        "role": "tool",
                        "content": await self._run_tool(toolset, tool_call),
                    })

            return [choice.message.content for choice in response.choices]

        except Exception as e:
            logger.error(f"Error calling OpenAI API: {e}")
            raise

    async def _run_tool(self, toolset: McpToolset, tool_call) -> str:
        function_name = tool_call.function.name
        logger.info(f"Executing tool: {function_name}")
        try:
            function_args = json.loads(tool_call.function.arguments or "{}")
        except json.JSONDecodeError as e:
            logger.warning(f"Model sent malformed arguments for tool '{function_name}': {e}")
            return json.dumps({"error": f"Invalid JSON arguments: {e}"})
        return await toolset.call(function_name, function_args)
