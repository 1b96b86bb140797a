"""Tool-use loop connecting an LLM to the workspace tool registry."""

import json
import logging
from typing import Any, Literal

import openai
from anthropic import Anthropic
from anthropic import APIError as AnthropicAPIError
from pydantic import BaseModel, ConfigDict, Field

from termcoder.agents.exceptions import ProviderError
from termcoder.config import AssistantConfig
from termcoder.logging_utils import configure_logging
from termcoder.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are a coding assistant working inside a single project directory. "
    "Use the provided tools to inspect and change files. Edits replace exact "
    "text, so read a file before editing it."
)


class ToolCallRecord(BaseModel):
    model_config = ConfigDict(frozen=False)

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: dict[str, Any] = Field(default_factory=dict)


class RunResult(BaseModel):
    """Outcome of one user turn."""

    model_config = ConfigDict(frozen=False)

    text: str
    provider: Literal["anthropic", "openai"]
    steps: int
    tool_calls: list[ToolCallRecord] = Field(default_factory=list)
    stopped_early: bool = False  # True when max_steps ran out mid tool use


class ToolUseRunner:
    """Runs a model with the registry's tools until it stops calling them.

    Each step sends the conversation so far, executes every tool call in the
    response through the registry (in order, one at a time) and appends the
    results. Tool failures are reported back to the model as data, never
    raised.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        config: AssistantConfig,
        anthropic_client: Any | None = None,
        openai_client: Any | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            registry: Tools available to the model.
            config: Provider, model and step limit.
            anthropic_client: Pre-built Anthropic client; built from
                ``config.anthropic_api_key`` when omitted.
            openai_client: Pre-built OpenAI client; built from
                ``config.openai_api_key`` when omitted.

        Raises:
            ProviderError: If no client is available for ``config.provider``.
        """
        configure_logging(config.log_level)
        self.registry = registry
        self.config = config
        self._anthropic_client = anthropic_client
        self._openai_client = openai_client

        if self._anthropic_client is None and config.anthropic_api_key:
            self._anthropic_client = Anthropic(api_key=config.anthropic_api_key)
        if self._openai_client is None and config.openai_api_key:
            self._openai_client = openai.OpenAI(api_key=config.openai_api_key)

        if config.provider == "anthropic" and self._anthropic_client is None:
            raise ProviderError("No Anthropic client: set ANTHROPIC_API_KEY.")
        if config.provider == "openai" and self._openai_client is None:
            raise ProviderError("No OpenAI client: set OPENAI_API_KEY.")

    def run(
        self,
        prompt: str,
        history: list[dict[str, Any]] | None = None,
        system: str = DEFAULT_SYSTEM_PROMPT,
    ) -> RunResult:
        """Send ``prompt`` and drive tool use to completion.

        Args:
            prompt: The user's message.
            history: Earlier messages in the provider's own message format.
            system: System prompt.

        Raises:
            ProviderError: If the provider API call fails.
        """
        if self.config.provider == "openai":
            return self._run_openai(prompt, history or [], system)
        return self._run_anthropic(prompt, history or [], system)

    def _execute(self, name: str, arguments: Any, records: list[ToolCallRecord]) -> dict:
        if not isinstance(arguments, dict):
            result = {
                "error": "Tool arguments must be a JSON object",
                "errorType": "InvalidInput",
            }
            arguments = {}
        else:
            result = self.registry.execute(name, arguments)
        logger.debug("Tool %s -> %s", name, "error" if "error" in result else "ok")
        records.append(ToolCallRecord(name=name, arguments=arguments, result=result))
        return result

    def _run_anthropic(
        self,
        prompt: str,
        history: list[dict[str, Any]],
        system: str,
    ) -> RunResult:
        messages: list[dict[str, Any]] = [*history, {"role": "user", "content": prompt}]
        tools = self.registry.anthropic_tools()
        records: list[ToolCallRecord] = []
        text = ""

        for step in range(1, self.config.max_steps + 1):
            try:
                response = self._anthropic_client.messages.create(
                    model=self.config.model,
                    max_tokens=self.config.max_tokens,
                    temperature=self.config.temperature,
                    system=system,
                    tools=tools,
                    messages=messages,
                )
            except AnthropicAPIError as e:
                raise ProviderError(f"Anthropic call failed: {e}") from e

            assistant_content: list[dict[str, Any]] = []
            tool_uses = []
            text_parts = []
            for block in response.content:
                if block.type == "text":
                    text_parts.append(block.text)
                    assistant_content.append({"type": "text", "text": block.text})
                elif block.type == "tool_use":
                    tool_uses.append(block)
                    assistant_content.append(
                        {
                            "type": "tool_use",
                            "id": block.id,
                            "name": block.name,
                            "input": block.input,
                        }
                    )
            text = "".join(text_parts)

            if not tool_uses:
                return RunResult(
                    text=text, provider="anthropic", steps=step, tool_calls=records
                )

            messages.append({"role": "assistant", "content": assistant_content})
            tool_results = []
            for block in tool_uses:
                result = self._execute(block.name, block.input, records)
                tool_results.append(
                    {
                        "type": "tool_result",
                        "tool_use_id": block.id,
                        "content": json.dumps(result),
                        "is_error": "error" in result,
                    }
                )
            messages.append({"role": "user", "content": tool_results})

        logger.warning("Stopped after %d steps with tool calls pending", self.config.max_steps)
        return RunResult(
            text=text,
            provider="anthropic",
            steps=self.config.max_steps,
            tool_calls=records,
            stopped_early=True,
        )

    def _run_openai(
        self,
        prompt: str,
        history: list[dict[str, Any]],
        system: str,
    ) -> RunResult:
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": system},
            *history,
            {"role": "user", "content": prompt},
        ]
        tools = self.registry.openai_tools()
        records: list[ToolCallRecord] = []
        text = ""

        for step in range(1, self.config.max_steps + 1):
            try:
                response = self._openai_client.chat.completions.create(
                    model=self.config.model,
                    max_tokens=self.config.max_tokens,
                    temperature=self.config.temperature,
                    tools=tools,
                    messages=messages,
                )
            except openai.OpenAIError as e:
                raise ProviderError(f"OpenAI call failed: {e}") from e

            message = response.choices[0].message
            text = message.content or ""
            tool_calls = getattr(message, "tool_calls", None) or []

            if not tool_calls:
                return RunResult(text=text, provider="openai", steps=step, tool_calls=records)

            messages.append(
                {
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.function.name,
                                "arguments": call.function.arguments,
                            },
                        }
                        for call in tool_calls
                    ],
                }
            )
            for call in tool_calls:
                try:
                    arguments = json.loads(call.function.arguments or "{}")
                except json.JSONDecodeError:
                    arguments = None
                result = self._execute(call.function.name, arguments, records)
                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "content": json.dumps(result),
                    }
                )

        logger.warning("Stopped after %d steps with tool calls pending", self.config.max_steps)
        return RunResult(
            text=text,
            provider="openai",
            steps=self.config.max_steps,
            tool_calls=records,
            stopped_early=True,
        )
