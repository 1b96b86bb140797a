"""LLM agent components for termcoder.

The runner lives in ``termcoder.agents.tool_runner``; it is not imported here
because ``termcoder.config`` depends on this package's exceptions.
"""

from termcoder.agents.exceptions import AgentError, ConfigError, ProviderError

__all__ = [
    "AgentError",
    "ConfigError",
    "ProviderError",
]
